"""BDD scenarios for the analytics hooks.

Scenarios live in analytics_hooks.feature; step definitions follow.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from botmetrics.adapters.hooks import AnalyticsHooks
from botmetrics.adapters.settings import InMemorySettingsStore
from botmetrics.adapters.sinks.in_memory import InMemoryPointSink
from botmetrics.adapters.writer import PointWriter, WriteOutcome
from botmetrics.core.domain import Block, ChannelEvent, Context, Subscriber
from botmetrics.core.models import MetricPoint, SinkConnection

scenarios("analytics_hooks.feature")

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
SUBSCRIBER = Subscriber(id="sub-1", foreign_id="fb-1", first_name="Ada")


class ScenarioSink(InMemoryPointSink):
    """In-memory sink that can be told to fail its next write."""

    def __init__(
        self, connection: SinkConnection, ctx: "HooksScenarioContext"
    ) -> None:
        super().__init__(connection)
        self._ctx = ctx

    async def write(
        self, point: MetricPoint, *, organization: str, bucket: str
    ) -> None:
        if self._ctx.fail_next:
            self._ctx.fail_next = False
            raise ConnectionError("sink unreachable")
        await super().write(point, organization=organization, bucket=bucket)


@dataclass
class HooksScenarioContext:
    """Shared state between steps in a hooks scenario."""

    store: InMemorySettingsStore = field(default_factory=InMemorySettingsStore)
    sinks: list[ScenarioSink] = field(default_factory=list)
    outcomes: list[WriteOutcome | None] = field(default_factory=list)
    hooks: AnalyticsHooks | None = None
    fail_next: bool = False

    def run(self, coro: Any) -> None:
        self.outcomes.append(asyncio.run(coro))

    @property
    def points(self) -> list[MetricPoint]:
        return [point for sink in self.sinks for point in sink.points]

    @property
    def last_point(self) -> MetricPoint:
        assert self.points, "no point was written"
        return self.points[-1]


@pytest.fixture
def ctx() -> HooksScenarioContext:
    """Fresh scenario context for each test."""
    return HooksScenarioContext()


def _event() -> ChannelEvent:
    return ChannelEvent(channel_name="web-channel", sender=SUBSCRIBER, payload="GO")


# === Background Steps ===
@given(parsers.parse('subjects "{subjects}" with default subject "{default}"'))
def step_subjects(ctx: HooksScenarioContext, subjects: str, default: str) -> None:
    ctx.store.update(subjects=tuple(subjects.split(",")), default_subject=default)


@given("an analytics pipeline backed by an in-memory sink")
def step_pipeline(ctx: HooksScenarioContext) -> None:
    def factory(connection: SinkConnection) -> ScenarioSink:
        sink = ScenarioSink(connection, ctx)
        ctx.sinks.append(sink)
        return sink

    writer = PointWriter(ctx.store, factory)
    writer.start()
    ctx.hooks = AnalyticsHooks(writer, ctx.store, clock=lambda: NOW)
    ctx.store.subscribe(ctx.hooks.handle_setting_change)


@given("the sink fails on the next write")
def step_fail_next(ctx: HooksScenarioContext) -> None:
    ctx.fail_next = True


# === Event Steps ===
@when(parsers.parse('the block "{name}" is triggered'))
def step_block(ctx: HooksScenarioContext, name: str) -> None:
    context = Context(attempt=1)
    ctx.run(ctx.hooks.handle_block_trigger(Block(name=name), _event(), context))


@when(parsers.parse('the block "{name}" is triggered on attempt {attempt:d}'))
def step_block_attempt(ctx: HooksScenarioContext, name: str, attempt: int) -> None:
    context = Context(attempt=attempt)
    ctx.run(ctx.hooks.handle_block_trigger(Block(name=name), _event(), context))


@when(parsers.parse('a "{stats_type}" stat entry is received'))
def step_stat(ctx: HooksScenarioContext, stats_type: str) -> None:
    ctx.run(ctx.hooks.handle_stat_entry(stats_type, stats_type, SUBSCRIBER))


@when("an intervention is opened for a subscriber never assigned")
def step_intervention_unassigned(ctx: HooksScenarioContext) -> None:
    ctx.run(ctx.hooks.handle_new_intervention(SUBSCRIBER))


@when(parsers.parse("an intervention is opened {minutes:d} minutes after assignment"))
def step_intervention(ctx: HooksScenarioContext, minutes: int) -> None:
    subscriber = Subscriber(id="sub-2", assigned_at=NOW - timedelta(minutes=minutes))
    ctx.run(ctx.hooks.handle_new_intervention(subscriber))


@when("a message is received")
def step_message(ctx: HooksScenarioContext) -> None:
    ctx.run(ctx.hooks.handle_message_received(_event()))


@when(parsers.parse('the token setting changes to "{token}"'))
def step_token(ctx: HooksScenarioContext, token: str) -> None:
    ctx.store.update(token=token)


# === Assertion Steps ===
@then(parsers.re(r'(?P<count>\d+) points? named "(?P<name>[^"]+)" (is|are) written'))
def step_count(ctx: HooksScenarioContext, count: str, name: str) -> None:
    assert [p.name for p in ctx.points].count(name) == int(count)


@then("no point is written")
def step_none(ctx: HooksScenarioContext) -> None:
    assert ctx.points == []


@then(parsers.parse('the last point has tag "{key}" equal to "{value}"'))
def step_tag(ctx: HooksScenarioContext, key: str, value: str) -> None:
    assert ctx.last_point.tags[key] == value


@then(parsers.parse('the last point has field "{key}" equal to "{value}"'))
def step_field(ctx: HooksScenarioContext, key: str, value: str) -> None:
    assert ctx.last_point.fields[key].value == value


@then(parsers.parse('the last point has no field "{key}"'))
def step_no_field(ctx: HooksScenarioContext, key: str) -> None:
    assert key not in ctx.last_point.fields


@then(parsers.parse("the last point has value {value:f}"))
def step_value(ctx: HooksScenarioContext, value: float) -> None:
    assert ctx.last_point.value == pytest.approx(value)


@then(parsers.parse("{count:d} write failure is reported"))
def step_failures(ctx: HooksScenarioContext, count: int) -> None:
    failures = [o for o in ctx.outcomes if o is not None and not o.ok]
    assert len(failures) == count


@then(parsers.parse('the last point was written with credential "{token}"'))
def step_credential(ctx: HooksScenarioContext, token: str) -> None:
    assert ctx.sinks[-1].points[-1] is ctx.last_point
    assert ctx.sinks[-1].connection.credential == token
