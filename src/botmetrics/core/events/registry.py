"""Registry mapping hook names to their handlers."""

import inspect
from collections.abc import Callable
from typing import Any

HookHandler = Callable[..., Any]


class HookRegistry:
    """Maps runtime hook names to handler callables.

    The registry is the seam between the runtime's event bus and
    ``AnalyticsHooks``: the bus calls ``dispatch`` with a hook name and the
    hook's positional payload.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, HookHandler] = {}

    def register(self, name: str, handler: HookHandler) -> None:
        """Register a handler for a hook name.

        Raises:
            TypeError: If handler is not callable.
            ValueError: If a handler is already registered for name.
        """
        if not callable(handler):
            raise TypeError("handler must be callable")
        if name in self._handlers:
            raise ValueError(f"hook {name!r} already registered")
        self._handlers[name] = handler

    def lookup(self, name: str) -> HookHandler | None:
        """Return the handler for a hook name, or None."""
        return self._handlers.get(name)

    def names(self) -> list[str]:
        return sorted(self._handlers)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    async def dispatch(self, name: str, *args: Any) -> Any:
        """Call the handler registered for name with the hook payload.

        Coroutine results are awaited. Unknown hooks are ignored and
        return None.
        """
        handler = self.lookup(name)
        if handler is None:
            return None
        result = handler(*args)
        if inspect.isawaitable(result):
            result = await result
        return result
