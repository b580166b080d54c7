"""Prometheus exporter for Dynomite stats."""

from dynomite_exporter.adapters.upstream.http import HTTPStatusSource
from dynomite_exporter.core.build_info import BuildInfoCollector
from dynomite_exporter.core.catalog import NAMESPACE, MetricCatalog
from dynomite_exporter.core.collector import DynomiteCollector
from dynomite_exporter.core.models import (
    MetricDefinition,
    MetricKind,
    MetricSample,
    StatusDocument,
)
from dynomite_exporter.core.registry import CollectorRegistry

__version__ = "0.1.0"

PROGRAM = "dynomite_exporter"

__all__ = [
    "NAMESPACE",
    "PROGRAM",
    "BuildInfoCollector",
    "CollectorRegistry",
    "DynomiteCollector",
    "HTTPStatusSource",
    "MetricCatalog",
    "MetricDefinition",
    "MetricKind",
    "MetricSample",
    "StatusDocument",
    "__version__",
]
