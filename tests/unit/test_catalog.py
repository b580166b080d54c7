"""Tests for the metric catalog and projection table."""

import pytest

from dynomite_exporter.core.catalog import (
    NAMESPACE,
    PROJECTION,
    MetricCatalog,
    build_fqname,
)
from dynomite_exporter.core.document import read_field
from dynomite_exporter.core.models import MetricKind, StatusDocument

EXPORTED_SUFFIXES = [
    "up",
    "uptime_seconds",
    "latency",
    "payload_size",
    "cross_region_rtt",
    "cross_zone_latency",
    "server_latency",
    "server_queue_wait",
    "cross_region_queue_wait",
    "client_out_queue",
    "server_in_queue",
    "server_out_queue",
    "dnode_client_out_queue",
    "peer_in_queue",
    "peer_out_queue",
    "remote_peer_in_queue",
    "remote_peer_out_queue",
    "alloc_msgs",
    "free_msgs",
    "alloc_mbufs",
    "free_mbufs",
    "dyn_memory",
]


def _type_labels(metric: str) -> list[str | None]:
    return [row.type_label for row in PROJECTION if row.metric == metric]


class TestBuildFqname:
    """Tests for build_fqname()."""

    @pytest.mark.core
    def test_joins_parts_with_underscore(self) -> None:
        assert build_fqname("dynomite", "net", "up") == "dynomite_net_up"

    @pytest.mark.core
    def test_skips_empty_subsystem(self) -> None:
        assert build_fqname("dynomite", "", "up") == "dynomite_up"


class TestMetricCatalog:
    """Tests for MetricCatalog definitions."""

    @pytest.mark.core
    def test_names_are_namespaced_and_ordered(self) -> None:
        """Definitions use the dynomite_ prefix in declaration order."""
        names = [d.name for d in MetricCatalog().definitions()]
        assert names == [f"{NAMESPACE}_{suffix}" for suffix in EXPORTED_SUFFIXES]

    @pytest.mark.core
    def test_up_has_no_labels(self) -> None:
        assert MetricCatalog().up.label_names == ()

    @pytest.mark.core
    def test_buffer_metrics_are_rack_labeled(self) -> None:
        catalog = MetricCatalog()
        for suffix in ["uptime_seconds", "alloc_msgs", "free_mbufs", "dyn_memory"]:
            assert catalog[suffix].label_names == ("rack",)

    @pytest.mark.core
    def test_family_metrics_carry_rack_and_type(self) -> None:
        catalog = MetricCatalog()
        for suffix in ["latency", "payload_size", "remote_peer_out_queue"]:
            assert catalog[suffix].label_names == ("rack", "type")

    @pytest.mark.core
    def test_every_definition_has_help_text(self) -> None:
        assert all(d.documentation for d in MetricCatalog().definitions())

    @pytest.mark.core
    def test_definitions_are_stable_across_instances(self) -> None:
        assert MetricCatalog().definitions() == MetricCatalog().definitions()

    @pytest.mark.core
    def test_custom_namespace(self) -> None:
        catalog = MetricCatalog(namespace="dyno")
        assert catalog.up.name == "dyno_up"

    @pytest.mark.core
    def test_unknown_suffix_raises_key_error(self) -> None:
        with pytest.raises(KeyError):
            MetricCatalog()["not_a_metric"]


class TestProjectionTable:
    """Tests for the static (metric, type, field) table."""

    @pytest.mark.core
    def test_row_count(self) -> None:
        """One row per emitted sample except up."""
        assert len(PROJECTION) == 41

    @pytest.mark.core
    def test_every_row_references_a_declared_metric(self) -> None:
        catalog = MetricCatalog()
        for row in PROJECTION:
            catalog[row.metric]

    @pytest.mark.core
    def test_every_row_field_exists_on_document(self) -> None:
        document = StatusDocument()
        for row in PROJECTION:
            assert read_field(document, row.field) == 0

    @pytest.mark.core
    def test_type_label_matches_definition_arity(self) -> None:
        """Rows carry a type label exactly when the metric declares one."""
        catalog = MetricCatalog()
        for row in PROJECTION:
            has_type = "type" in catalog[row.metric].label_names
            assert (row.type_label is not None) == has_type, row

    @pytest.mark.core
    def test_every_metric_except_up_is_projected(self) -> None:
        projected = {row.metric for row in PROJECTION}
        assert projected == set(EXPORTED_SUFFIXES) - {"up"}

    @pytest.mark.core
    def test_percentile_families_use_full_vocabulary(self) -> None:
        for metric in ["latency", "payload_size"]:
            assert _type_labels(metric) == ["max", "999", "99", "95", "50"]

    @pytest.mark.core
    def test_aggregate_families_use_99_and_50(self) -> None:
        for metric in [
            "cross_region_rtt",
            "cross_zone_latency",
            "server_latency",
            "server_queue_wait",
            "cross_region_queue_wait",
        ]:
            assert _type_labels(metric) == ["99", "50"]

    @pytest.mark.core
    def test_queue_families_use_only_99(self) -> None:
        for metric in ["client_out_queue", "peer_in_queue", "remote_peer_in_queue"]:
            assert _type_labels(metric) == ["99"]

    @pytest.mark.core
    def test_counter_kinds_preserved(self) -> None:
        """uptime and latency stay counters for dashboard compatibility."""
        counters = {row.metric for row in PROJECTION if row.kind is MetricKind.COUNTER}
        assert counters == {"uptime_seconds", "latency"}

    @pytest.mark.core
    def test_no_duplicate_rows(self) -> None:
        keys = [(row.metric, row.type_label) for row in PROJECTION]
        assert len(keys) == len(set(keys))
