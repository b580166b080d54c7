"""Registry composing the collectors served on the metrics endpoint."""

import asyncio

from dynomite_exporter.core.models import MetricDefinition, MetricSample
from dynomite_exporter.core.ports import CollectorPort


class CollectorRegistry:
    """Explicit registry of collectors.

    Created once at process start and handed to the HTTP adapters; there is
    no process-global default.
    """

    def __init__(self) -> None:
        self._collectors: list[CollectorPort] = []
        self._names: dict[str, CollectorPort] = {}

    def register(self, collector: CollectorPort) -> None:
        """Register a collector.

        Raises:
            ValueError: If the collector is already registered or describes a
                metric name that another collector already exports.
        """
        if collector in self._collectors:
            raise ValueError(f"collector already registered: {collector!r}")
        names = [d.name for d in collector.describe()]
        duplicates = sorted(n for n in set(names) if n in self._names)
        if duplicates or len(names) != len(set(names)):
            raise ValueError(f"duplicate metric names: {duplicates or names}")
        self._collectors.append(collector)
        for name in names:
            self._names[name] = collector

    def unregister(self, collector: CollectorPort) -> None:
        """Remove a previously registered collector.

        Raises:
            ValueError: If the collector is not registered.
        """
        self._collectors.remove(collector)
        self._names = {n: c for n, c in self._names.items() if c is not collector}

    @property
    def collectors(self) -> list[CollectorPort]:
        return list(self._collectors)

    def describe(self) -> list[MetricDefinition]:
        """Return every registered definition in registration order."""
        return [d for c in self._collectors for d in c.describe()]

    async def collect(self) -> list[MetricSample]:
        """Run all collectors concurrently and concatenate their samples."""
        results = await asyncio.gather(*(c.collect() for c in self._collectors))
        return [sample for samples in results for sample in samples]
