"""Tests for core domain models."""

import pytest

from botmetrics.core.models import Field, FieldKind, MetricPoint, SinkConnection


class TestField:
    """Tests for Field kind checking."""

    @pytest.mark.core
    @pytest.mark.parametrize(
        ("kind", "value"),
        [
            (FieldKind.STRING, "hello"),
            (FieldKind.INTEGER, 3),
            (FieldKind.FLOAT, 2.5),
            (FieldKind.BOOLEAN, True),
        ],
    )
    def test_accepts_matching_value(self, kind: FieldKind, value: object) -> None:
        """A value of the declared type is stored unchanged."""
        assert Field(kind, value).value == value

    @pytest.mark.core
    @pytest.mark.parametrize(
        ("kind", "value"),
        [
            (FieldKind.STRING, 1),
            (FieldKind.INTEGER, "1"),
            (FieldKind.INTEGER, True),
            (FieldKind.FLOAT, False),
            (FieldKind.BOOLEAN, 0),
        ],
    )
    def test_rejects_mismatched_value(self, kind: FieldKind, value: object) -> None:
        """A value of another type raises TypeError."""
        with pytest.raises(TypeError, match="field cannot hold"):
            Field(kind, value)

    @pytest.mark.core
    def test_none_is_accepted_for_every_kind(self) -> None:
        """None marks an absent value of any kind."""
        for kind in FieldKind:
            assert Field(kind, None).present is False

    @pytest.mark.core
    def test_float_field_coerces_int(self) -> None:
        """Integers stored in a FLOAT field become floats."""
        item = Field(FieldKind.FLOAT, 3)
        assert item.value == 3.0
        assert isinstance(item.value, float)

    @pytest.mark.core
    @pytest.mark.parametrize(
        "item",
        [
            Field(FieldKind.STRING, ""),
            Field(FieldKind.INTEGER, 0),
            Field(FieldKind.FLOAT, 0.0),
            Field(FieldKind.BOOLEAN, False),
        ],
    )
    def test_falsy_values_are_not_present(self, item: Field) -> None:
        """Empty, zero and False count as absent."""
        assert item.present is False


class TestMetricPoint:
    """Tests for MetricPoint defaults."""

    @pytest.mark.core
    def test_defaults_to_empty_tags_and_fields(self) -> None:
        point = MetricPoint(name="Block", value=1.0)
        assert point.tags == {}
        assert point.fields == {}


class TestSinkConnection:
    """Tests for SinkConnection."""

    @pytest.mark.core
    def test_repr_hides_credential(self) -> None:
        """The credential never shows up in logs through repr()."""
        connection = SinkConnection(endpoint="http://influx:8086", credential="s3cret")
        assert "s3cret" not in repr(connection)

    @pytest.mark.core
    def test_is_immutable(self) -> None:
        connection = SinkConnection(endpoint="http://influx:8086", credential="t")
        with pytest.raises(AttributeError):
            connection.endpoint = "http://other"  # type: ignore[misc]
