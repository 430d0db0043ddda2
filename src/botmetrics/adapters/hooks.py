"""Runtime hook handlers that translate events and write points.

``AnalyticsHooks`` is the only place where the runtime's hooks meet the
translator and the writer. Each handler checks that the payload it needs is
present and silently skips the event otherwise. Payloads that fail to translate
are logged and skipped, so a malformed event never reaches the host as an
exception.
"""

import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any

from botmetrics.adapters.writer import PointWriter, WriteOutcome
from botmetrics.core import translator
from botmetrics.core.domain import Block, ChannelEvent, Context, StatsType, Subscriber
from botmetrics.core.events import hooks
from botmetrics.core.events.registry import HookRegistry
from botmetrics.core.models import Translation
from botmetrics.core.ports import SettingsSourcePort

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AnalyticsHooks:
    """One handler per runtime hook.

    Example:
        ```python
        store = InMemorySettingsStore()
        writer = PointWriter(store, influxdb_sink_factory())
        writer.start()
        registry = HookRegistry()
        AnalyticsHooks(writer, store).register(registry)
        await registry.dispatch("hook:chatbot:received", event)
        ```
    """

    def __init__(
        self,
        writer: PointWriter,
        settings: SettingsSourcePort,
        clock: Clock | None = None,
    ) -> None:
        self._writer = writer
        self._settings = settings
        self._clock = clock or _utcnow

    async def _emit(
        self, translate: Callable[..., Translation | None], *args: Any
    ) -> WriteOutcome | None:
        try:
            translation = translate(*args)
        except (AttributeError, TypeError, ValueError):
            logger.error(
                "Error translating event with %s", translate.__name__, exc_info=True
            )
            return None
        if translation is None:
            return None
        return await self._writer.write(*translation)

    async def handle_message_sent(
        self, sent: Any, event: ChannelEvent | None
    ) -> WriteOutcome | None:
        if event is None:
            return None
        return await self._emit(translator.translate_message_sent, event)

    async def handle_message_received(
        self, event: ChannelEvent | None
    ) -> WriteOutcome | None:
        if event is None:
            return None
        return await self._emit(translator.translate_message_received, event)

    async def handle_block_trigger(
        self,
        block: Block | None,
        event: ChannelEvent | None,
        context: Context | None = None,
    ) -> WriteOutcome | None:
        if event is None or block is None or not block.name:
            return None
        return await self._emit(
            translator.translate_block,
            event,
            block,
            context,
            self._settings.get_settings(),
        )

    async def handle_handover(
        self, subscriber: Subscriber | None, is_handover: bool
    ) -> WriteOutcome | None:
        if subscriber is None:
            return None
        return await self._emit(translator.translate_handover, subscriber, is_handover)

    async def handle_global_fallback(
        self, event: ChannelEvent | None
    ) -> WriteOutcome | None:
        if event is None:
            return None
        return await self._emit(translator.translate_fallback, event)

    async def handle_local_fallback(
        self,
        block: Block | None,
        event: ChannelEvent | None,
        context: Context | None = None,
    ) -> WriteOutcome | None:
        if event is None:
            return None
        return await self._emit(translator.translate_fallback, event, block, context)

    async def handle_new_intervention(
        self, subscriber: Subscriber | None
    ) -> WriteOutcome | None:
        if subscriber is None:
            return None
        return await self._emit(
            translator.translate_intervention, subscriber, self._clock()
        )

    async def handle_stat_entry(
        self,
        stats_type: StatsType | str,
        name: str,
        subscriber: Subscriber | None = None,
    ) -> WriteOutcome | None:
        # Not every stats entry carries a subscriber.
        return await self._emit(translator.translate_stat, stats_type, name, subscriber)

    async def log_plugin_event(
        self,
        plugin_title: str,
        block: Block | None,
        context: Context | None,
        extra_fields: Mapping[str, Any] | None = None,
    ) -> WriteOutcome | None:
        """Log a plugin execution; called directly by plugins, not by a hook."""
        if block is None or context is None:
            return None
        return await self._emit(
            translator.translate_plugin,
            plugin_title,
            block,
            context,
            extra_fields or {},
        )

    def handle_url_change(self, value: str) -> None:
        self._writer.reload(endpoint=value)

    def handle_token_change(self, value: str) -> None:
        self._writer.reload(credential=value)

    def handle_setting_change(self, label: str, value: Any) -> None:
        """Listener for settings stores notifying (label, value) pairs."""
        if label == "url":
            self.handle_url_change(value)
        elif label == "token":
            self.handle_token_change(value)

    def register(self, registry: HookRegistry) -> None:
        """Register every handler under its runtime hook name."""
        registry.register(hooks.MESSAGE_SENT, self.handle_message_sent)
        registry.register(hooks.MESSAGE_RECEIVED, self.handle_message_received)
        registry.register(hooks.BLOCK_TRIGGERED, self.handle_block_trigger)
        registry.register(hooks.PASSATION, self.handle_handover)
        registry.register(hooks.GLOBAL_FALLBACK, self.handle_global_fallback)
        registry.register(hooks.LOCAL_FALLBACK, self.handle_local_fallback)
        registry.register(hooks.INTERVENTION, self.handle_new_intervention)
        registry.register(hooks.STATS_ENTRY, self.handle_stat_entry)
        registry.register(hooks.URL_CHANGED, self.handle_url_change)
        registry.register(hooks.TOKEN_CHANGED, self.handle_token_change)
