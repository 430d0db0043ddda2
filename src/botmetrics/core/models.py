"""Core domain models for time-series points."""

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple


class FieldKind(Enum):
    """Value type of a point field."""

    STRING = "string"
    INTEGER = "int"
    FLOAT = "float"
    BOOLEAN = "boolean"


FieldValue = str | int | float | bool


def _check_kind(kind: FieldKind, value: object) -> None:
    if value is None:
        return
    if kind is FieldKind.STRING:
        ok = isinstance(value, str)
    elif kind is FieldKind.BOOLEAN:
        ok = isinstance(value, bool)
    elif kind is FieldKind.INTEGER:
        ok = isinstance(value, int) and not isinstance(value, bool)
    elif kind is FieldKind.FLOAT:
        ok = isinstance(value, (int, float)) and not isinstance(value, bool)
    else:
        raise TypeError(f"unknown field kind: {kind!r}")
    if not ok:
        raise TypeError(
            f"{kind.value} field cannot hold {type(value).__name__} value {value!r}"
        )


@dataclass(frozen=True)
class Field:
    """A typed point field.

    Attributes:
        kind: Value type, checked against ``value`` on construction.
        value: The field value. ``None`` means absent.
    """

    kind: FieldKind
    value: FieldValue | None = None

    def __post_init__(self) -> None:
        _check_kind(self.kind, self.value)
        if self.kind is FieldKind.FLOAT and isinstance(self.value, int):
            object.__setattr__(self, "value", float(self.value))

    @property
    def present(self) -> bool:
        """False for empty, zero or absent values (dropped on emission)."""
        return bool(self.value)


Fields = dict[str, Field]
Tags = dict[str, str]


@dataclass(frozen=True)
class MetricPoint:
    """A single time-stamped measurement destined for the time-series store.

    Attributes:
        name: Measurement name (e.g., "Block").
        value: Primary numeric value, written under the "value" field.
        tags: Indexed string labels.
        fields: Typed payload fields.
        timestamp_ns: Unix timestamp in nanoseconds.
    """

    name: str
    value: float
    tags: Tags = field(default_factory=dict)
    fields: Fields = field(default_factory=dict)
    timestamp_ns: int = 0


@dataclass(frozen=True)
class SinkConnection:
    """Endpoint and credential used to reach the sink."""

    endpoint: str
    credential: str = field(repr=False)


@dataclass(frozen=True)
class ClassificationRule:
    """Candidate subjects (in priority order) and the fallback subject."""

    candidate_subjects: tuple[str, ...]
    default_subject: str


class Translation(NamedTuple):
    """Measurement name, primary value, tags and fields for one event."""

    name: str
    value: float
    tags: Tags
    fields: Fields
