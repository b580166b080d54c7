"""Prometheus text format encoder for metric samples."""

import math
from collections.abc import Iterable

from dynomite_exporter.core.models import MetricDefinition, MetricSample

CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"


def _escape_help(text: str) -> str:
    return text.replace("\\", "\\\\").replace("\n", "\\n")


def _escape_label_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def format_value(value: float) -> str:
    """Format a sample value the way Prometheus clients do.

    Integral values are rendered without a fractional part.
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


def _format_labels(labels: dict[str, str]) -> str:
    if not labels:
        return ""
    pairs = ",".join(f'{k}="{_escape_label_value(v)}"' for k, v in labels.items())
    return "{" + pairs + "}"


def encode_metrics(
    definitions: Iterable[MetricDefinition],
    samples: Iterable[MetricSample],
) -> str:
    """Encode samples to Prometheus text exposition format.

    Families are written in definition order. Definitions without samples
    are omitted. Samples whose name has no definition are written last
    without HELP text.

    Args:
        definitions: Declared metrics, used for HELP text and ordering.
        samples: Samples produced by a collection cycle.

    Returns:
        Prometheus text format string. Empty string if no samples.
    """
    by_name: dict[str, list[MetricSample]] = {}
    for sample in samples:
        by_name.setdefault(sample.name, []).append(sample)

    docs = {d.name: d.documentation for d in definitions}
    ordered = [name for name in docs if name in by_name]
    ordered += [name for name in by_name if name not in docs]

    lines: list[str] = []
    for name in ordered:
        family = by_name[name]
        if name in docs:
            lines.append(f"# HELP {name} {_escape_help(docs[name])}")
        lines.append(f"# TYPE {name} {family[0].kind.value}")
        for sample in family:
            lines.append(
                f"{name}{_format_labels(sample.labels)} {format_value(sample.value)}"
            )

    if not lines:
        return ""

    return "\n".join(lines) + "\n"
