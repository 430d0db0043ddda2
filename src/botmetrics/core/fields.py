"""Field and tag extraction from runtime payloads.

Every function here is pure. Empty values are kept as-is and removed later by
``build_point``, so the extractors never decide what gets emitted.
"""

import json
import math
import re
from collections.abc import Mapping
from typing import Any

from botmetrics.core.domain import Block, ChannelEvent, Context, Subscriber
from botmetrics.core.models import Fields, Tags
from botmetrics.core.points import bool_field, float_field, int_field, string_field

UNKNOWN = "unknown"
LANGUAGE_ENTITY = "language"

_NON_WORD = re.compile(r"[\W_]+")


def slugify(text: str) -> str:
    """Lowercase ``text`` and collapse every non-alphanumeric run into one hyphen.

    Letters and digits of any script are kept.
    """
    return _NON_WORD.sub("-", text.lower()).strip("-")


def to_text(value: Any) -> str:
    """Return strings verbatim and serialize anything else as compact JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), default=str)


def channel_tag(name: str | None) -> str:
    return name or UNKNOWN


def subscriber_channel(subscriber: Subscriber | None) -> str:
    """Channel name of a subscriber, or "unknown"."""
    if subscriber is None or subscriber.channel is None:
        return UNKNOWN
    return channel_tag(subscriber.channel.name)


def subscriber_fields(subscriber: Subscriber | None) -> Fields:
    """Build identity fields for a subscriber.

    Args:
        subscriber: The subscriber, or None when the runtime did not supply one.

    Returns:
        recipient, foreign_id, first_name and last_name as string fields.
        Empty when no subscriber is given.
    """
    if subscriber is None:
        return {}
    return {
        "recipient": string_field(subscriber.id),
        "foreign_id": string_field(subscriber.foreign_id),
        "first_name": string_field(subscriber.first_name),
        "last_name": string_field(subscriber.last_name),
    }


def block_fields(
    event: ChannelEvent | None,
    block: Block,
    context: Context | None = None,
) -> Fields:
    """Build fields describing a triggered block.

    Args:
        event: Event that triggered the block. Can be None (plugin events).
        block: The block being executed.
        context: Optional conversation context holding the attempt counter.

    Returns:
        block (slug), postback, attempt and start fields.
    """
    payload = event.payload if event is not None else None
    return {
        "block": string_field(slugify(block.name)),
        "postback": string_field(to_text(payload) if payload is not None else ""),
        "attempt": int_field(context.attempt if context and context.attempt else 0),
        "start": bool_field(bool(block.starts_conversation)),
    }


def language_of(event: ChannelEvent) -> str | None:
    """Detected language entity first, then the sender's stored language."""
    for entity in event.nlp_entities:
        if entity.entity == LANGUAGE_ENTITY and entity.value:
            return entity.value
    if event.sender is not None and event.sender.language:
        return event.sender.language
    return None


def message_tags(event: ChannelEvent) -> Tags:
    """Build the language tag plus one tag per detected NLP entity."""
    tags: Tags = {LANGUAGE_ENTITY: language_of(event) or UNKNOWN}
    for entity in event.nlp_entities:
        if entity.entity and entity.value and entity.entity != LANGUAGE_ENTITY:
            tags[entity.entity] = str(entity.value)
    return tags


def plugin_fields(extra: Mapping[str, Any]) -> Fields:
    """Infer typed fields from a free-form plugin map.

    Strings stay strings, numbers become floats, booleans stay booleans and
    composite values (like an error payload) are serialized to JSON. Keys whose
    value has no usable type, such as None, and non-finite numbers are dropped.
    """
    fields: Fields = {}
    for key, value in extra.items():
        if isinstance(value, bool):
            fields[key] = bool_field(value)
        elif isinstance(value, str):
            fields[key] = string_field(value)
        elif isinstance(value, (int, float)) and math.isfinite(value):
            fields[key] = float_field(float(value))
        elif isinstance(value, (Mapping, list, tuple)):
            fields[key] = string_field(to_text(value))
    return fields
