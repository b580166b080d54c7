"""Core domain models for the exporter."""

from dataclasses import dataclass, field
from enum import Enum


class MetricKind(str, Enum):
    """Exposition type of a metric sample."""

    COUNTER = "counter"
    GAUGE = "gauge"


@dataclass(frozen=True)
class MetricDefinition:
    """A declared metric.

    Attributes:
        name: Fully qualified metric name (e.g., dynomite_latency).
        documentation: Help text rendered in the exposition.
        label_names: Ordered label names every sample must carry.
    """

    name: str
    documentation: str
    label_names: tuple[str, ...] = ()


@dataclass(frozen=True)
class MetricSample:
    """A single metric measurement emitted by a collection cycle.

    Attributes:
        name: Metric name matching a MetricDefinition.
        kind: Counter or gauge.
        value: The metric value.
        labels: Label name to value, ordered as in the definition.
    """

    name: str
    kind: MetricKind
    value: float
    labels: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class DynOMiteStats:
    """Connection and queue counters nested under ``dyn_o_mite``."""

    client_eof: int = 0
    client_err: int = 0
    client_connections: int = 0
    client_read_requests: int = 0
    client_write_requests: int = 0
    client_dropped_requests: int = 0
    client_non_quorum_w_responses: int = 0
    client_non_quorum_r_responses: int = 0
    server_ejects: int = 0
    dnode_client_eof: int = 0
    dnode_client_err: int = 0
    dnode_client_connections: int = 0
    dnode_client_in_queue: int = 0
    dnode_client_in_queue_bytes: int = 0
    dnode_client_out_queue: int = 0
    dnode_client_out_queue_bytes: int = 0
    peer_dropped_requests: int = 0
    peer_timedout_requests: int = 0
    remote_peer_dropped_requests: int = 0
    remote_peer_timedout_requests: int = 0
    remote_peer_failover_requests: int = 0
    peer_eof: int = 0
    peer_err: int = 0
    peer_timedout: int = 0
    remote_peer_timedout: int = 0
    peer_connections: int = 0
    peer_forward_error: int = 0
    peer_requests: int = 0
    peer_request_bytes: int = 0
    peer_responses: int = 0
    peer_response_bytes: int = 0
    peer_ejected_at: int = 0
    peer_ejects: int = 0
    peer_in_queue: int = 0
    remote_peer_in_queue: int = 0
    peer_in_queue_bytes: int = 0
    remote_peer_in_queue_bytes: int = 0
    peer_out_queue: int = 0
    remote_peer_out_queue: int = 0
    peer_out_queue_bytes: int = 0
    remote_peer_out_queue_bytes: int = 0
    peer_mismatch_requests: int = 0
    forward_error: int = 0
    fragments: int = 0
    stats_count: int = 0


@dataclass(frozen=True)
class StatusDocument:
    """Snapshot of one Dynomite stats response.

    Attribute names follow the JSON keys. Keys that are not valid Python
    identifiers (the ``99_*`` family) are exposed with a ``p99_`` prefix;
    see ``dynomite_exporter.core.document`` for the key mapping.
    """

    service: str = ""
    source: str = ""
    version: str = ""
    uptime: int = 0
    timestamp: int = 0
    rack: str = ""
    dc: str = ""
    latency_max: int = 0
    latency_999th: int = 0
    latency_99th: int = 0
    latency_95th: int = 0
    latency_mean: int = 0
    payload_size_max: int = 0
    payload_size_999th: int = 0
    payload_size_99th: int = 0
    payload_size_95th: int = 0
    payload_size_mean: int = 0
    average_cross_region_rtt: int = 0
    p99_cross_region_rtt: int = 0
    average_cross_zone_latency: int = 0
    p99_cross_zone_latency: int = 0
    average_server_latency: int = 0
    p99_server_latency: int = 0
    average_cross_region_queue_wait: int = 0
    p99_cross_region_queue_wait: int = 0
    average_cross_zone_queue_wait: int = 0
    p99_cross_zone_queue_wait: int = 0
    average_server_queue_wait: int = 0
    p99_server_queue_wait: int = 0
    client_out_queue_99: int = 0
    server_in_queue_99: int = 0
    server_out_queue_99: int = 0
    dnode_client_out_queue_99: int = 0
    peer_in_queue_99: int = 0
    peer_out_queue_99: int = 0
    remote_peer_out_queue_99: int = 0
    remote_peer_in_queue_99: int = 0
    alloc_msgs: int = 0
    free_msgs: int = 0
    alloc_mbufs: int = 0
    free_mbufs: int = 0
    dyn_memory: int = 0
    dyn_o_mite: DynOMiteStats = field(default_factory=DynOMiteStats)
