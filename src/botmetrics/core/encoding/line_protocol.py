"""InfluxDB line protocol encoder for metric points."""

from collections.abc import Iterable

from botmetrics.core.models import Field, FieldKind, MetricPoint
from botmetrics.core.points import VALUE_FIELD


def _escape_measurement(name: str) -> str:
    return (
        name.replace("\\", "\\\\")
        .replace("\n", "\\n")
        .replace(",", "\\,")
        .replace(" ", "\\ ")
    )


def _escape_key(key: str) -> str:
    """Escape tag keys, tag values and field keys."""
    return (
        key.replace("\\", "\\\\")
        .replace("\n", "\\n")
        .replace(",", "\\,")
        .replace("=", "\\=")
        .replace(" ", "\\ ")
    )


def encode_field_value(item: Field) -> str:
    """Encode a field value according to its kind.

    Raises:
        TypeError: If the field kind is not supported.
    """
    kind, value = item.kind, item.value
    if kind is FieldKind.STRING:
        escaped = (
            str(value)
            .replace("\\", "\\\\")
            .replace('"', '\\"')
            .replace("\n", "\\n")
        )
        return f'"{escaped}"'
    if kind is FieldKind.INTEGER:
        return f"{int(value)}i"
    if kind is FieldKind.FLOAT:
        return repr(float(value))
    if kind is FieldKind.BOOLEAN:
        return "true" if value else "false"
    raise TypeError(f"unsupported field kind: {kind!r}")


def encode_point(point: MetricPoint) -> str:
    """Encode a point as a single line of line protocol.

    Args:
        point: The point to encode. Its primary value becomes the "value"
            float field.

    Returns:
        ``measurement[,tag=value...] field=value[,field=value...] timestamp``
        with tags sorted by key.
    """
    head = _escape_measurement(point.name)
    for key in sorted(point.tags):
        head += f",{_escape_key(key)}={_escape_key(point.tags[key])}"

    body = [f"{VALUE_FIELD}={float(point.value)!r}"]
    for key, item in point.fields.items():
        body.append(f"{_escape_key(key)}={encode_field_value(item)}")

    return f"{head} {','.join(body)} {point.timestamp_ns}"


def encode_points(points: Iterable[MetricPoint]) -> str:
    """Encode points to newline-separated line protocol.

    Returns:
        One line per point, or an empty string if no points.
    """
    lines = [encode_point(point) for point in points]
    if not lines:
        return ""
    return "\n".join(lines) + "\n"
