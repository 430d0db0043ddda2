"""Payload types handed over by the chatbot runtime.

The runtime owns these objects; this package only reads them. ``from_dict``
decoders exist for payloads arriving over HTTP as JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class StatsType(str, Enum):
    """Kinds of aggregate bot statistics emitted by the runtime."""

    OUTGOING = "outgoing"
    NEW_USERS = "new_users"
    ALL_MESSAGES = "all_messages"
    INCOMING = "incoming"
    EXISTING_CONVERSATIONS = "existing_conversations"
    NEW_CONVERSATIONS = "new_conversations"
    RETURNING_USERS = "returning_users"
    RETENTION = "retention"
    ECHO = "echo"


def _parse_datetime(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    raise TypeError(f"cannot parse datetime from {type(value).__name__}")


def _text(value: Any) -> str | None:
    """Read an optional JSON scalar as text; ids may arrive as numbers."""
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


@dataclass(frozen=True)
class Channel:
    name: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Channel | None:
        if not data:
            return None
        return cls(name=_text(data.get("name")))


@dataclass(frozen=True)
class Subscriber:
    """A chatbot end user.

    Attributes:
        id: Internal subscriber id.
        foreign_id: Id assigned by the channel.
        language: Stored ISO language code.
        channel: Channel the subscriber talks through.
        assigned_at: When a human agent was assigned, if ever.
    """

    id: str | None = None
    foreign_id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    language: str | None = None
    channel: Channel | None = None
    assigned_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Subscriber | None:
        if not data:
            return None
        return cls(
            id=_text(data.get("id")),
            foreign_id=_text(data.get("foreign_id")),
            first_name=_text(data.get("first_name")),
            last_name=_text(data.get("last_name")),
            language=_text(data.get("language")),
            channel=Channel.from_dict(data.get("channel")),
            assigned_at=_parse_datetime(data.get("assigned_at")),
        )


@dataclass(frozen=True)
class Block:
    name: str = ""
    starts_conversation: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Block | None:
        if not data:
            return None
        return cls(
            name=_text(data.get("name")) or "",
            starts_conversation=bool(data.get("starts_conversation", False)),
        )


@dataclass(frozen=True)
class Context:
    """Conversation context carried between blocks."""

    attempt: int = 0
    channel: str | None = None
    user: Subscriber | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Context | None:
        if not data:
            return None
        return cls(
            attempt=int(data.get("attempt") or 0),
            channel=_text(data.get("channel")),
            user=Subscriber.from_dict(data.get("user")),
        )


@dataclass(frozen=True)
class NlpEntity:
    entity: str
    value: str
    confidence: float | None = None


@dataclass(frozen=True)
class ChannelEvent:
    """An incoming or outgoing message event as seen by a channel handler.

    Attributes:
        channel_name: Name of the channel handler that produced the event.
        sender: Subscriber the event belongs to.
        payload: Postback payload, text or structured.
        nlp_entities: Entities detected by the NLU engine.
    """

    channel_name: str | None = None
    sender: Subscriber | None = None
    payload: str | dict[str, Any] | list[Any] | None = None
    nlp_entities: tuple[NlpEntity, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ChannelEvent | None:
        if not data:
            return None
        entities = tuple(
            NlpEntity(
                entity=_text(item.get("entity")) or "",
                value=_text(item.get("value")) or "",
                confidence=item.get("confidence"),
            )
            for item in data.get("nlp_entities") or ()
        )
        return cls(
            channel_name=_text(data.get("channel_name")),
            sender=Subscriber.from_dict(data.get("sender")),
            payload=data.get("payload"),
            nlp_entities=entities,
        )
