"""Port interfaces for sink and settings adapters.

These protocols define the contracts that adapters must implement.
The core domain depends only on these interfaces, not concrete implementations.
"""

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from botmetrics.core.models import MetricPoint, SinkConnection
from botmetrics.core.settings import InfluxSettings


@runtime_checkable
class PointSinkPort(Protocol):
    """Port for the time-series sink.

    Adapters implementing this protocol accept one point per call and raise
    on failure. Examples: InMemoryPointSink, InfluxDBSink.
    """

    async def write(
        self, point: MetricPoint, *, organization: str, bucket: str
    ) -> None:
        """Write a single point and wait for the acknowledgement."""
        ...


@runtime_checkable
class SettingsSourcePort(Protocol):
    """Port for reading the current settings.

    Implementations must return the latest values on every call.
    """

    def get_settings(self) -> InfluxSettings:
        """Return the current settings."""
        ...


SinkFactory = Callable[[SinkConnection], PointSinkPort]
