"""Translate runtime events into measurement name, value, tags and fields.

One function per event kind. Functions return None when the event must not
produce a point.
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from botmetrics.core.domain import (
    Block,
    ChannelEvent,
    Context,
    StatsType,
    Subscriber,
)
from botmetrics.core.fields import (
    block_fields,
    channel_tag,
    message_tags,
    plugin_fields,
    subscriber_channel,
    subscriber_fields,
)
from botmetrics.core.models import Fields, Tags, Translation
from botmetrics.core.points import float_field, int_field, string_field
from botmetrics.core.settings import InfluxSettings
from botmetrics.core.subjects import classify

MESSAGE_SENT = "Event - message sent"
MESSAGE_RECEIVED = "Event - message received"
BLOCK = "Block"
HANDOVER = "Handover"
HANDBACK = "Handback"
LOCAL_FALLBACK = "Local Fallback"
GLOBAL_FALLBACK = "Global Fallback"
INTERVENTION_OPENED = "Intervention Opened"
PLUGIN = "Plugin"
STATS = "Stats"

LOGGED_STATS = frozenset({StatsType.NEW_USERS, StatsType.RETURNING_USERS})


def _event_tags(event: ChannelEvent, type_: str) -> Tags:
    return {
        **message_tags(event),
        "channel": channel_tag(event.channel_name),
        "type": type_,
    }


def _message(name: str, event: ChannelEvent) -> Translation:
    return Translation(
        name, 1, _event_tags(event, "message"), subscriber_fields(event.sender)
    )


def translate_message_sent(event: ChannelEvent) -> Translation:
    return _message(MESSAGE_SENT, event)


def translate_message_received(event: ChannelEvent) -> Translation:
    return _message(MESSAGE_RECEIVED, event)


def translate_block(
    event: ChannelEvent,
    block: Block,
    context: Context | None,
    settings: InfluxSettings,
) -> Translation:
    """Translate a triggered block, tagging it with its resolved subject."""
    tags = _event_tags(event, "block")
    tags[settings.subject_tagname] = classify(
        block.name, settings.classification_rule
    )
    fields: Fields = {
        **subscriber_fields(event.sender),
        **block_fields(event, block, context),
    }
    return Translation(BLOCK, 1, tags, fields)


def translate_handover(subscriber: Subscriber, is_handover: bool) -> Translation:
    tags = {"channel": subscriber_channel(subscriber), "type": "passation"}
    name = HANDOVER if is_handover else HANDBACK
    return Translation(name, 1, tags, subscriber_fields(subscriber))


def translate_fallback(
    event: ChannelEvent,
    block: Block | None = None,
    context: Context | None = None,
) -> Translation:
    """Translate a fallback: local when a block is known, global otherwise."""
    fields: Fields = subscriber_fields(event.sender)
    if block is not None:
        fields.update(block_fields(event, block, context))
    name = LOCAL_FALLBACK if block is not None else GLOBAL_FALLBACK
    return Translation(name, 1, _event_tags(event, "fallback"), fields)


def _epoch_ms(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp() * 1000)


def translate_intervention(
    subscriber: Subscriber, now: datetime
) -> Translation | None:
    """Translate a human agent opening an intervention.

    The primary value is the delay, in minutes, between the assignment and
    ``now``. Subscribers without a positive assignment timestamp produce no
    point.
    """
    if subscriber.assigned_at is None:
        return None
    assigned_ms = _epoch_ms(subscriber.assigned_at)
    if assigned_ms <= 0:
        return None
    opened_ms = _epoch_ms(now)
    delay_ms = abs(opened_ms - assigned_ms)
    delay_min = delay_ms / (60 * 1000)

    tags = {"channel": subscriber_channel(subscriber), "type": "intervention"}
    fields: Fields = {
        **subscriber_fields(subscriber),
        "assigned_at": string_field(subscriber.assigned_at.isoformat()),
        "assigned_at_ts": int_field(assigned_ms),
        "intervention_opened_at": string_field(now.isoformat()),
        "intervention_opened_at_ts": int_field(opened_ms),
        "intervention_delay_sec": float_field(delay_ms / 1000),
        "intervention_delay_min": float_field(delay_min),
        "intervention_delay_hour": float_field(delay_ms / (60 * 60 * 1000)),
    }
    return Translation(INTERVENTION_OPENED, delay_min, tags, fields)


def translate_plugin(
    plugin_title: str,
    block: Block,
    context: Context,
    extra_fields: Mapping[str, Any],
) -> Translation:
    """Translate a plugin execution inside a block."""
    tags = {"channel": channel_tag(context.channel), "type": "plugin"}
    fields: Fields = {
        **subscriber_fields(context.user),
        **block_fields(None, block, context),
        "plugin": string_field(plugin_title),
        **plugin_fields(extra_fields),
    }
    return Translation(PLUGIN, 1, tags, fields)


def translate_stat(
    stats_type: StatsType | str,
    name: str,
    subscriber: Subscriber | None,
) -> Translation | None:
    """Translate a statistic entry.

    Only new and returning user entries are logged, and only when the
    runtime passes the subscriber along.
    """
    try:
        kind = StatsType(stats_type)
    except ValueError:
        return None
    if kind not in LOGGED_STATS or subscriber is None:
        return None
    tags = {
        "channel": subscriber_channel(subscriber),
        "name": name,
        "type": kind.value,
    }
    return Translation(STATS, 1, tags, subscriber_fields(subscriber))
