"""Sink adapters implementing PointSinkPort."""

from botmetrics.adapters.sinks.in_memory import InMemoryPointSink, StoredPoint
from botmetrics.adapters.sinks.influxdb import InfluxDBSink, influxdb_sink_factory

__all__ = [
    "InMemoryPointSink",
    "InfluxDBSink",
    "StoredPoint",
    "influxdb_sink_factory",
]
