"""In-memory point sink."""

from dataclasses import dataclass

from botmetrics.core.models import MetricPoint, SinkConnection


@dataclass(frozen=True)
class StoredPoint:
    point: MetricPoint
    organization: str
    bucket: str


class InMemoryPointSink:
    """In-memory implementation of PointSinkPort.

    Stores points in a list. Suitable for testing and for running the
    pipeline without a time-series database.
    """

    def __init__(self, connection: SinkConnection | None = None) -> None:
        self.connection = connection
        self._stored: list[StoredPoint] = []

    async def write(
        self, point: MetricPoint, *, organization: str, bucket: str
    ) -> None:
        """Write a point to storage."""
        self._stored.append(StoredPoint(point, organization, bucket))

    @property
    def stored(self) -> list[StoredPoint]:
        return list(self._stored)

    @property
    def points(self) -> list[MetricPoint]:
        return [item.point for item in self._stored]
