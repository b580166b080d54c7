"""Shared test fixtures for all test modules."""

from collections.abc import Callable
from typing import Any

import httpx
import pytest
from tests.helpers import UPSTREAM_ADDRESS, json_transport, sample_payload

from dynomite_exporter.adapters.upstream.http import HTTPStatusSource
from dynomite_exporter.core.collector import DynomiteCollector
from dynomite_exporter.core.registry import CollectorRegistry


@pytest.fixture
def payload() -> dict[str, Any]:
    """Fixture providing a fresh copy of the sample stats payload."""
    return sample_payload()


@pytest.fixture
def make_collector() -> Callable[..., DynomiteCollector]:
    """Factory fixture creating a collector backed by a MockTransport.

    Usage:
        collector = make_collector(payload={"uptime": 1})
        collector = make_collector(exc=httpx.ConnectError("refused"))
    """

    def _make(**kwargs: Any) -> DynomiteCollector:
        source = HTTPStatusSource(
            UPSTREAM_ADDRESS, timeout=1.0, transport=json_transport(**kwargs)
        )
        return DynomiteCollector(source)

    return _make


@pytest.fixture
def registry() -> CollectorRegistry:
    """Fixture providing an empty collector registry."""
    return CollectorRegistry()


@pytest.fixture
def asgi_test_client():
    """Factory fixture that creates an httpx.AsyncClient for ASGI testing.

    Usage:
        async def test_something(asgi_test_client):
            app = create_asgi_app(registry)
            async with asgi_test_client(app) as client:
                response = await client.get("/metrics")
    """

    def _get_client(app):
        """Return an AsyncClient context manager for the given app."""
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        )

    return _get_client
