"""Example FastAPI application receiving chatbot runtime hooks.

Run with:
    INFLUXDB_URL=http://localhost:8086 INFLUXDB_TOKEN=my-token \
        uvicorn examples.fastapi_example:app --reload

Endpoints:
    POST /hooks/{hook_name}   - dispatch one runtime hook, e.g.
                                /hooks/hook:chatbot:received
"""

import logging
import os

from fastapi import FastAPI

from botmetrics.adapters.frameworks.fastapi import create_hooks_router
from botmetrics.adapters.hooks import AnalyticsHooks
from botmetrics.adapters.settings import InMemorySettingsStore
from botmetrics.adapters.sinks import influxdb_sink_factory
from botmetrics.adapters.writer import PointWriter
from botmetrics.core.settings import InfluxSettings

logging.basicConfig(level=logging.INFO)

store = InMemorySettingsStore(
    InfluxSettings(
        url=os.environ.get("INFLUXDB_URL", "http://localhost:8086"),
        token=os.environ.get("INFLUXDB_TOKEN", ""),
        organization=os.environ.get("INFLUXDB_ORG", "botmetrics"),
        bucket=os.environ.get("INFLUXDB_BUCKET", "chatbot"),
    )
)
writer = PointWriter(store, influxdb_sink_factory())
writer.start()

analytics = AnalyticsHooks(writer, store)
store.subscribe(analytics.handle_setting_change)

app = FastAPI(title="Chatbot Analytics")
app.include_router(create_hooks_router(analytics))
