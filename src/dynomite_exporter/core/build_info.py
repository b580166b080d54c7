"""Collector reporting the exporter's own build information."""

import platform

from dynomite_exporter.core.catalog import build_fqname
from dynomite_exporter.core.metrics import gauge
from dynomite_exporter.core.models import MetricDefinition, MetricSample


class BuildInfoCollector:
    """Exports ``<program>_build_info`` with value 1 and version labels."""

    def __init__(self, program: str, version: str) -> None:
        self.version = version
        self.definition = MetricDefinition(
            name=build_fqname(program, "", "build_info"),
            documentation=(
                f"A metric with a constant '1' value labeled by version and "
                f"pyversion from which {program} was built."
            ),
            label_names=("version", "pyversion"),
        )

    def describe(self) -> list[MetricDefinition]:
        return [self.definition]

    async def collect(self) -> list[MetricSample]:
        return [gauge(self.definition, 1, self.version, platform.python_version())]
