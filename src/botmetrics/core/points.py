"""Helper functions for creating fields and MetricPoint objects."""

import time

from botmetrics.core.models import Field, FieldKind, Fields, MetricPoint, Tags

VALUE_FIELD = "value"


def string_field(value: str | None) -> Field:
    """Create a STRING field."""
    return Field(FieldKind.STRING, value)


def int_field(value: int | None) -> Field:
    """Create an INTEGER field."""
    return Field(FieldKind.INTEGER, value)


def float_field(value: float | None) -> Field:
    """Create a FLOAT field."""
    return Field(FieldKind.FLOAT, value)


def bool_field(value: bool | None) -> Field:
    """Create a BOOLEAN field."""
    return Field(FieldKind.BOOLEAN, value)


def build_point(
    name: str,
    value: float,
    tags: Tags | None = None,
    fields: Fields | None = None,
) -> MetricPoint:
    """Create a point ready for emission.

    Fields and tags with falsy values (empty string, zero, False, None) are
    dropped, so a zero reading is indistinguishable from an absent one. A
    field named "value" cannot shadow the primary value.

    Args:
        name: Measurement name (e.g., "Block")
        value: Primary value; 1 for counted events
        tags: Optional indexed labels
        fields: Optional typed fields

    Returns:
        MetricPoint with current timestamp
    """
    kept_fields = {
        key: item
        for key, item in (fields or {}).items()
        if item.present and key != VALUE_FIELD
    }
    kept_tags = {key: str(tag) for key, tag in (tags or {}).items() if tag}
    return MetricPoint(
        name=name,
        value=float(value),
        tags=kept_tags,
        fields=kept_fields,
        timestamp_ns=time.time_ns(),
    )
