"""Shared test fixtures for all test modules."""

from datetime import datetime, timezone

import pytest

from botmetrics.adapters.hooks import AnalyticsHooks
from botmetrics.adapters.settings import InMemorySettingsStore
from botmetrics.adapters.sinks.in_memory import InMemoryPointSink
from botmetrics.adapters.writer import PointWriter
from botmetrics.core.domain import (
    Block,
    Channel,
    ChannelEvent,
    Context,
    NlpEntity,
    Subscriber,
)
from botmetrics.core.models import SinkConnection

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class FailingSink:
    """Sink that raises on every write."""

    def __init__(self, connection: SinkConnection | None = None) -> None:
        self.connection = connection
        self.attempts = 0

    async def write(self, point, *, organization: str, bucket: str) -> None:
        self.attempts += 1
        raise ConnectionError("sink unreachable")


@pytest.fixture
def subscriber() -> Subscriber:
    return Subscriber(
        id="sub-1",
        foreign_id="fb-42",
        first_name="Ada",
        last_name="Lovelace",
        language="fr",
        channel=Channel(name="web-channel"),
    )


@pytest.fixture
def make_event(subscriber: Subscriber):
    """Factory fixture for channel events sent by the default subscriber."""

    def _event(
        payload=None,
        entities: tuple[tuple[str, str], ...] = (),
        channel_name: str | None = "web-channel",
        sender: Subscriber | None = subscriber,
    ) -> ChannelEvent:
        return ChannelEvent(
            channel_name=channel_name,
            sender=sender,
            payload=payload,
            nlp_entities=tuple(NlpEntity(name, value) for name, value in entities),
        )

    return _event


@pytest.fixture
def block() -> Block:
    return Block(name="Greeting Flow", starts_conversation=True)


@pytest.fixture
def context(subscriber: Subscriber) -> Context:
    return Context(attempt=2, channel="web-channel", user=subscriber)


@pytest.fixture
def settings_store() -> InMemorySettingsStore:
    return InMemorySettingsStore()


@pytest.fixture
def sinks() -> list[InMemoryPointSink]:
    """Every sink built by the writer fixture, oldest first."""
    return []


@pytest.fixture
def writer(
    settings_store: InMemorySettingsStore, sinks: list[InMemoryPointSink]
) -> PointWriter:
    """Started writer backed by in-memory sinks."""

    def factory(connection: SinkConnection) -> InMemoryPointSink:
        sink = InMemoryPointSink(connection)
        sinks.append(sink)
        return sink

    point_writer = PointWriter(settings_store, factory)
    point_writer.start()
    return point_writer


@pytest.fixture
def hooks(writer: PointWriter, settings_store: InMemorySettingsStore) -> AnalyticsHooks:
    return AnalyticsHooks(writer, settings_store, clock=lambda: FIXED_NOW)


@pytest.fixture
def now() -> datetime:
    """The instant the hooks fixture treats as the current time."""
    return FIXED_NOW


@pytest.fixture
def failing_sink() -> FailingSink:
    return FailingSink()
