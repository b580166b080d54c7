"""Collector that scrapes one Dynomite node per collection cycle."""

import logging

from dynomite_exporter.core.catalog import FieldMapping, MetricCatalog
from dynomite_exporter.core.document import parse_document, read_field
from dynomite_exporter.core.errors import (
    InternalProjectionError,
    UnreachableUpstreamError,
)
from dynomite_exporter.core.metrics import const_metric, gauge
from dynomite_exporter.core.models import (
    MetricDefinition,
    MetricSample,
    StatusDocument,
)
from dynomite_exporter.core.ports import StatusSourcePort

logger = logging.getLogger(__name__)


class DynomiteCollector:
    """Collects metrics from a Dynomite server.

    Every call to ``collect`` performs one upstream fetch and keeps all of
    its state local to the call, so concurrent scrapes need no locking.

    Example:
        ```python
        source = HTTPStatusSource("localhost:22222", timeout=1.0)
        collector = DynomiteCollector(source)
        registry.register(collector)
        ```
    """

    def __init__(
        self,
        source: StatusSourcePort,
        catalog: MetricCatalog | None = None,
    ) -> None:
        """Initialize the collector.

        Args:
            source: Upstream source of the raw stats document.
            catalog: Metric catalog (default: the ``dynomite`` catalog).
        """
        self.source = source
        self.catalog = catalog or MetricCatalog()

    @property
    def address(self) -> str:
        return self.source.address

    def describe(self) -> list[MetricDefinition]:
        """Describe all the metrics exported by the collector."""
        return self.catalog.definitions()

    async def collect(self) -> list[MetricSample]:
        """Fetch the stats of the configured server and project them.

        Returns:
            ``dynomite_up 1`` followed by one sample per projection row, or
            only ``dynomite_up 0`` if the upstream is unreachable, the body
            does not decode, or the projection fails.
        """
        try:
            body = await self.source.fetch()
            document = parse_document(body)
        except UnreachableUpstreamError as e:
            logger.error(
                "Failed to connect to dynomite",
                extra={"address": self.address, "err": str(e)},
            )
            return [gauge(self.catalog.up, 0)]

        try:
            samples = self.project(document)
        except InternalProjectionError as e:
            logger.error(
                "Failed to parse dynomite stats",
                extra={"address": self.address, "err": str(e)},
            )
            return [gauge(self.catalog.up, 0)]

        return [gauge(self.catalog.up, 1), *samples]

    def project(self, document: StatusDocument) -> list[MetricSample]:
        """Emit one sample per projection row.

        Raises:
            InternalProjectionError: If a row names an unknown metric or
                document field, or its labels do not match the definition.
        """
        return [self._project_row(row, document) for row in self.catalog.projection]

    def _project_row(self, row: FieldMapping, document: StatusDocument) -> MetricSample:
        try:
            definition = self.catalog[row.metric]
            value = read_field(document, row.field)
            label_values = [document.rack]
            if row.type_label is not None:
                label_values.append(row.type_label)
            return const_metric(definition, row.kind, value, *label_values)
        except (KeyError, AttributeError, TypeError, ValueError, OverflowError) as e:
            raise InternalProjectionError(
                f"{row.metric}/{row.field}: {type(e).__name__}: {e}"
            ) from e
