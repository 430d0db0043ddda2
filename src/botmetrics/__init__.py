"""botmetrics - chatbot lifecycle events as InfluxDB time-series points."""

from botmetrics.adapters.hooks import AnalyticsHooks
from botmetrics.adapters.settings import InMemorySettingsStore
from botmetrics.adapters.sinks import (
    InfluxDBSink,
    InMemoryPointSink,
    influxdb_sink_factory,
)
from botmetrics.adapters.writer import PointWriter, SinkHandle, WriteOutcome
from botmetrics.core.domain import (
    Block,
    Channel,
    ChannelEvent,
    Context,
    NlpEntity,
    StatsType,
    Subscriber,
)
from botmetrics.core.errors import SinkWriteError
from botmetrics.core.events import HookRegistry
from botmetrics.core.models import (
    ClassificationRule,
    Field,
    FieldKind,
    MetricPoint,
    SinkConnection,
    Translation,
)
from botmetrics.core.ports import PointSinkPort, SettingsSourcePort
from botmetrics.core.settings import InfluxSettings

__all__ = [
    "AnalyticsHooks",
    "Block",
    "Channel",
    "ChannelEvent",
    "ClassificationRule",
    "Context",
    "Field",
    "FieldKind",
    "HookRegistry",
    "InMemoryPointSink",
    "InMemorySettingsStore",
    "InfluxDBSink",
    "InfluxSettings",
    "MetricPoint",
    "NlpEntity",
    "PointSinkPort",
    "PointWriter",
    "SettingsSourcePort",
    "SinkConnection",
    "SinkHandle",
    "SinkWriteError",
    "StatsType",
    "Subscriber",
    "Translation",
    "WriteOutcome",
    "influxdb_sink_factory",
]
