"""FastAPI adapter receiving runtime hooks over HTTP.

For runtimes living in another process: each hook is posted as JSON to
``/hooks/{hook_name}`` and dispatched like an in-process hook.
"""

from collections.abc import Callable
from typing import Any

from fastapi import APIRouter, Body, HTTPException, status

from botmetrics.adapters.hooks import AnalyticsHooks
from botmetrics.adapters.writer import WriteOutcome
from botmetrics.core.domain import Block, ChannelEvent, Context, Subscriber
from botmetrics.core.events import hooks
from botmetrics.core.events.registry import HookRegistry

PayloadDecoder = Callable[[dict[str, Any]], tuple[Any, ...]]


def _event(body: dict[str, Any]) -> ChannelEvent | None:
    return ChannelEvent.from_dict(body.get("event"))


def _subscriber(body: dict[str, Any]) -> Subscriber | None:
    return Subscriber.from_dict(body.get("subscriber"))


def _block_args(body: dict[str, Any]) -> tuple[Any, ...]:
    return (
        Block.from_dict(body.get("block")),
        _event(body),
        Context.from_dict(body.get("context")),
    )


def _setting_value(body: dict[str, Any]) -> tuple[Any, ...]:
    value = body.get("value")
    if not isinstance(value, str) or not value:
        raise ValueError("value must be a non-empty string")
    return (value,)


_DECODERS: dict[str, PayloadDecoder] = {
    hooks.MESSAGE_SENT: lambda body: (body.get("sent"), _event(body)),
    hooks.MESSAGE_RECEIVED: lambda body: (_event(body),),
    hooks.BLOCK_TRIGGERED: _block_args,
    hooks.PASSATION: lambda body: (
        _subscriber(body),
        bool(body.get("is_handover", True)),
    ),
    hooks.GLOBAL_FALLBACK: lambda body: (_event(body),),
    hooks.LOCAL_FALLBACK: _block_args,
    hooks.INTERVENTION: lambda body: (_subscriber(body),),
    hooks.STATS_ENTRY: lambda body: (
        body.get("type", ""),
        body.get("name", ""),
        _subscriber(body),
    ),
    hooks.URL_CHANGED: _setting_value,
    hooks.TOKEN_CHANGED: _setting_value,
}


def create_hooks_router(
    analytics: AnalyticsHooks,
    registry: HookRegistry | None = None,
) -> APIRouter:
    """Create a FastAPI router with a POST /hooks/{hook_name} endpoint.

    Args:
        analytics: Handlers the hooks are dispatched to.
        registry: Registry to dispatch through. A fresh registry with the
            analytics handlers registered is used when omitted.

    Returns:
        APIRouter answering 202 with whether a point was written, 404 for
        unknown hooks and 422 for payloads that cannot be decoded.
    """
    if registry is None:
        registry = HookRegistry()
        analytics.register(registry)
    router = APIRouter()

    @router.post("/hooks/{hook_name}", status_code=status.HTTP_202_ACCEPTED)
    async def receive_hook(
        hook_name: str,
        body: dict[str, Any] | None = Body(default=None),
    ) -> dict[str, Any]:
        """Decode a hook payload and dispatch it."""
        body = body or {}
        decoder = _DECODERS.get(hook_name)
        if decoder is None or hook_name not in registry:
            raise HTTPException(status_code=404, detail=f"Unknown hook {hook_name}")
        try:
            args = decoder(body)
        except (AttributeError, TypeError, ValueError) as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        result = await registry.dispatch(hook_name, *args)
        written = isinstance(result, WriteOutcome) and result.ok
        return {"hook": hook_name, "written": written}

    return router
