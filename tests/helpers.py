"""Helpers shared by test modules."""

import json
from typing import Any

import httpx

from dynomite_exporter.core.models import MetricSample

UPSTREAM_ADDRESS = "dynomite.test:22222"


def sample_payload() -> dict[str, Any]:
    """A realistic Dynomite stats response."""
    return {
        "service": "dynomite",
        "source": "node-1",
        "version": "0.7.0",
        "uptime": 12345,
        "timestamp": 1702300000,
        "rack": "us-east-1a",
        "dc": "us-east-1",
        "latency_max": 900,
        "latency_999th": 800,
        "latency_99th": 42,
        "latency_95th": 30,
        "latency_mean": 7,
        "payload_size_max": 4096,
        "payload_size_999th": 2048,
        "payload_size_99th": 1024,
        "payload_size_95th": 512,
        "payload_size_mean": 128,
        "average_cross_region_rtt": 11,
        "99_cross_region_rtt": 21,
        "average_cross_zone_latency": 12,
        "99_cross_zone_latency": 22,
        "average_server_latency": 13,
        "99_server_latency": 23,
        "average_cross_region_queue_wait": 14,
        "99_cross_region_queue_wait": 24,
        "average_cross_zone_queue_wait": 15,
        "99_cross_zone_queue_wait": 25,
        "average_server_queue_wait": 16,
        "99_server_queue_wait": 26,
        "client_out_queue_99": 31,
        "server_in_queue_99": 32,
        "server_out_queue_99": 33,
        "dnode_client_out_queue_99": 34,
        "peer_in_queue_99": 35,
        "peer_out_queue_99": 36,
        "remote_peer_out_queue_99": 37,
        "remote_peer_in_queue_99": 38,
        "alloc_msgs": 100,
        "free_msgs": 90,
        "alloc_mbufs": 200,
        "free_mbufs": 180,
        "dyn_memory": 1048576,
        "dyn_o_mite": {
            "client_connections": 5,
            "client_read_requests": 1000,
            "peer_request_bytes": 123456789,
            "stats_count": 3,
        },
    }


def json_transport(
    payload: Any = None,
    status_code: int = 200,
    body: bytes | None = None,
    exc: Exception | None = None,
) -> httpx.MockTransport:
    """Build a MockTransport answering every request the same way."""

    def handler(request: httpx.Request) -> httpx.Response:
        if exc is not None:
            raise exc
        if body is not None:
            return httpx.Response(status_code, content=body)
        return httpx.Response(status_code, content=json.dumps(payload).encode())

    return httpx.MockTransport(handler)


def samples_named(samples: list[MetricSample], name: str) -> list[MetricSample]:
    """Return the samples of one metric family."""
    return [s for s in samples if s.name == name]
