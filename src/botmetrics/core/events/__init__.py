"""Hook names and the hook handler registry."""

from botmetrics.core.events.hooks import ALL_HOOKS
from botmetrics.core.events.registry import HookHandler, HookRegistry

__all__ = [
    "ALL_HOOKS",
    "HookHandler",
    "HookRegistry",
]
