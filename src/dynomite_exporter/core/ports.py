"""Port interfaces for collectors and upstream sources.

These protocols define the contracts that adapters must implement.
The core domain depends only on these interfaces, not concrete implementations.
"""

from typing import Protocol, runtime_checkable

from dynomite_exporter.core.models import MetricDefinition, MetricSample


@runtime_checkable
class StatusSourcePort(Protocol):
    """Port for fetching the raw stats document of one upstream node.

    Examples: HTTPStatusSource.
    """

    address: str

    async def fetch(self) -> bytes:
        """Fetch the raw response body.

        Raises:
            UnreachableUpstreamError: On network failure, timeout or a
                non-success response.
        """
        ...


@runtime_checkable
class CollectorPort(Protocol):
    """Port for anything that can be registered in a CollectorRegistry.

    Examples: DynomiteCollector, BuildInfoCollector.
    """

    def describe(self) -> list[MetricDefinition]:
        """Return the definitions of every metric the collector may emit."""
        ...

    async def collect(self) -> list[MetricSample]:
        """Run one collection cycle and return its samples."""
        ...
