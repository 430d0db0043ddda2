"""In-memory settings store with change notifications."""

import threading
from collections.abc import Callable
from dataclasses import fields
from typing import Any

from botmetrics.core.settings import InfluxSettings

SettingListener = Callable[[str, Any], None]


class InMemorySettingsStore:
    """In-memory implementation of SettingsSourcePort.

    Holds an immutable InfluxSettings snapshot. ``update`` swaps in a new
    snapshot and then notifies listeners once per changed label, which is how
    the runtime's setting hooks reach ``AnalyticsHooks``.
    """

    def __init__(self, settings: InfluxSettings | None = None) -> None:
        self._settings = settings or InfluxSettings()
        self._listeners: list[SettingListener] = []
        self._lock = threading.Lock()

    def get_settings(self) -> InfluxSettings:
        """Return the current settings snapshot."""
        return self._settings

    def subscribe(self, listener: SettingListener) -> None:
        """Call listener(label, value) after every changed setting."""
        self._listeners.append(listener)

    def update(self, **changes: Any) -> InfluxSettings:
        """Apply changes and notify listeners.

        Raises:
            TypeError: If a label is unknown or a value has the wrong type.
            ValueError: If subject_tagname is set to an empty string.
        """
        with self._lock:
            previous = self._settings
            updated = previous.replace(**changes)
            self._settings = updated
        for item in fields(InfluxSettings):
            value = getattr(updated, item.name)
            if value != getattr(previous, item.name):
                for listener in list(self._listeners):
                    listener(item.name, value)
        return updated
