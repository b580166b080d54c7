"""Metric helper functions for creating MetricSample objects."""

from dynomite_exporter.core.models import MetricDefinition, MetricKind, MetricSample


def const_metric(
    definition: MetricDefinition,
    kind: MetricKind,
    value: float,
    *label_values: str,
) -> MetricSample:
    """Create a sample for a declared metric.

    Args:
        definition: The metric the sample belongs to.
        kind: Counter or gauge.
        value: The sample value.
        *label_values: Label values, ordered as definition.label_names.

    Returns:
        MetricSample with labels keyed by the definition's label names.

    Raises:
        ValueError: If the number of label values does not match the
            definition.
    """
    if len(label_values) != len(definition.label_names):
        raise ValueError(
            f"{definition.name}: expected {len(definition.label_names)} label "
            f"values {definition.label_names}, got {len(label_values)}"
        )
    return MetricSample(
        name=definition.name,
        kind=kind,
        value=float(value),
        labels=dict(zip(definition.label_names, label_values)),
    )


def gauge(
    definition: MetricDefinition, value: float, *label_values: str
) -> MetricSample:
    """Create a gauge sample for a declared metric.

    Args:
        definition: The metric the sample belongs to.
        value: Current gauge value.
        *label_values: Label values in definition order.

    Returns:
        MetricSample of kind GAUGE
    """
    return const_metric(definition, MetricKind.GAUGE, value, *label_values)
