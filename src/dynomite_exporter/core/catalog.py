"""Catalog of exported Dynomite metrics and the document projection table.

Metric names, kinds and ``type`` labels are consumed by existing dashboards
and must not change. ``uptime_seconds`` and ``latency`` are tagged as
counters although they are point-in-time values.
"""

from dataclasses import dataclass

from dynomite_exporter.core.models import MetricDefinition, MetricKind

NAMESPACE = "dynomite"

RACK = "rack"
TYPE = "type"


def build_fqname(namespace: str, subsystem: str, name: str) -> str:
    """Join non-empty name parts with underscores."""
    return "_".join(part for part in (namespace, subsystem, name) if part)


@dataclass(frozen=True)
class FieldMapping:
    """One row of the projection table.

    Attributes:
        metric: Metric suffix (without namespace).
        kind: Counter or gauge.
        type_label: Value of the ``type`` label, or None for rack-only metrics.
        field: JSON key of the document field supplying the value.
    """

    metric: str
    kind: MetricKind
    type_label: str | None
    field: str


# (suffix, help, label names) in describe() order
_DEFINITIONS: tuple[tuple[str, str, tuple[str, ...]], ...] = (
    ("up", "Could the dynomite server be reached.", ()),
    ("uptime_seconds", "Number of seconds since the server started.", (RACK,)),
    ("latency", "Server latency.", (RACK, TYPE)),
    ("payload_size", "Payload size.", (RACK, TYPE)),
    ("cross_region_rtt", "Cross region RTT.", (RACK, TYPE)),
    ("cross_zone_latency", "Cross zone latency.", (RACK, TYPE)),
    ("server_latency", "Server latency.", (RACK, TYPE)),
    ("server_queue_wait", "Server queue wait.", (RACK, TYPE)),
    ("cross_region_queue_wait", "Cross region queue wait.", (RACK, TYPE)),
    ("client_out_queue", "Client out queue.", (RACK, TYPE)),
    ("server_in_queue", "Server in queue.", (RACK, TYPE)),
    ("server_out_queue", "Server out queue.", (RACK, TYPE)),
    ("dnode_client_out_queue", "Dnode client out queue.", (RACK, TYPE)),
    ("peer_in_queue", "Peer in queue.", (RACK, TYPE)),
    ("peer_out_queue", "Peer out queue.", (RACK, TYPE)),
    ("remote_peer_in_queue", "Remote peer in queue.", (RACK, TYPE)),
    ("remote_peer_out_queue", "Remote peer out queue.", (RACK, TYPE)),
    ("alloc_msgs", "The number of currently allocated messages.", (RACK,)),
    ("free_msgs", "The number of currently free messages.", (RACK,)),
    ("alloc_mbufs", "The number of allocated mbufs.", (RACK,)),
    ("free_mbufs", "The number of free mbufs.", (RACK,)),
    ("dyn_memory", "Dynomite memory usage.", (RACK,)),
)

_C = MetricKind.COUNTER
_G = MetricKind.GAUGE

PROJECTION: tuple[FieldMapping, ...] = (
    FieldMapping("uptime_seconds", _C, None, "uptime"),
    FieldMapping("latency", _C, "max", "latency_max"),
    FieldMapping("latency", _C, "999", "latency_999th"),
    FieldMapping("latency", _C, "99", "latency_99th"),
    FieldMapping("latency", _C, "95", "latency_95th"),
    FieldMapping("latency", _C, "50", "latency_mean"),
    FieldMapping("payload_size", _G, "max", "payload_size_max"),
    FieldMapping("payload_size", _G, "999", "payload_size_999th"),
    FieldMapping("payload_size", _G, "99", "payload_size_99th"),
    FieldMapping("payload_size", _G, "95", "payload_size_95th"),
    FieldMapping("payload_size", _G, "50", "payload_size_mean"),
    FieldMapping("cross_region_rtt", _G, "99", "99_cross_region_rtt"),
    FieldMapping("cross_region_rtt", _G, "50", "average_cross_region_rtt"),
    FieldMapping("cross_zone_latency", _G, "99", "99_cross_zone_latency"),
    FieldMapping("cross_zone_latency", _G, "50", "average_cross_zone_latency"),
    FieldMapping("server_latency", _G, "99", "99_server_latency"),
    FieldMapping("server_latency", _G, "50", "average_server_latency"),
    FieldMapping("server_queue_wait", _G, "99", "99_server_queue_wait"),
    FieldMapping("server_queue_wait", _G, "50", "average_server_queue_wait"),
    FieldMapping("cross_region_queue_wait", _G, "99", "99_cross_region_queue_wait"),
    FieldMapping(
        "cross_region_queue_wait", _G, "50", "average_cross_region_queue_wait"
    ),
    FieldMapping("client_out_queue", _G, "99", "client_out_queue_99"),
    FieldMapping("server_in_queue", _G, "99", "server_in_queue_99"),
    FieldMapping("server_out_queue", _G, "99", "server_out_queue_99"),
    FieldMapping("dnode_client_out_queue", _G, "99", "dnode_client_out_queue_99"),
    FieldMapping("peer_in_queue", _G, "99", "peer_in_queue_99"),
    FieldMapping("peer_out_queue", _G, "99", "peer_out_queue_99"),
    FieldMapping("remote_peer_in_queue", _G, "99", "remote_peer_in_queue_99"),
    FieldMapping("remote_peer_out_queue", _G, "99", "remote_peer_out_queue_99"),
    FieldMapping("alloc_msgs", _G, None, "alloc_msgs"),
    FieldMapping("free_msgs", _G, None, "free_msgs"),
    FieldMapping("alloc_mbufs", _G, None, "alloc_mbufs"),
    FieldMapping("free_mbufs", _G, None, "free_mbufs"),
    FieldMapping("dyn_memory", _G, None, "dyn_memory"),
)


class MetricCatalog:
    """Fixed set of metric definitions exported for a Dynomite node.

    Construction performs no I/O and cannot fail.
    """

    def __init__(self, namespace: str = NAMESPACE) -> None:
        self.namespace = namespace
        self._definitions: dict[str, MetricDefinition] = {
            suffix: MetricDefinition(
                name=build_fqname(namespace, "", suffix),
                documentation=help_text,
                label_names=labels,
            )
            for suffix, help_text, labels in _DEFINITIONS
        }
        self.projection = PROJECTION

    def __getitem__(self, suffix: str) -> MetricDefinition:
        return self._definitions[suffix]

    @property
    def up(self) -> MetricDefinition:
        return self._definitions["up"]

    def definitions(self) -> list[MetricDefinition]:
        """Return all definitions in declaration order."""
        return list(self._definitions.values())
