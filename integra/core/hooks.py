"""
integra.core.hooks - Pipeline Lifecycle Hook Registry

Lightweight hook system for observing the orchestration pipeline.
Handlers are async callables that receive keyword arguments specific
to each hook point. Hook failures are logged but never propagate, so an
observer can never change the outcome of a request.

Example:
    >>> hooks = HookRegistry()
    >>> async def on_failure(request_id, state, error, **kwargs):
    ...     print(f"{request_id} failed in {state}: {error}")
    >>> hooks.register(HOOK_STEP_FAILED, on_failure)
    >>> await hooks.emit(HOOK_STEP_FAILED, request_id=rid, state=state, error="timeout")
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

logger = logging.getLogger(__name__)

# Type alias for hook handlers
HookHandler = Callable[..., Awaitable[None]]

# Well-known hook names. Each hook emits specific kwargs:
#
# request_received:   request_id
# step_started:       request_id, state
# step_completed:     request_id, state
# step_failed:        request_id, state, error, fatal
# request_completed:  request_id, success, status_code, failure, duration_ms
HOOK_REQUEST_RECEIVED = "request_received"
HOOK_STEP_STARTED = "step_started"
HOOK_STEP_COMPLETED = "step_completed"
HOOK_STEP_FAILED = "step_failed"
HOOK_REQUEST_COMPLETED = "request_completed"

class HookRegistry:
    """Registry of pipeline observers, keyed by hook name.

    Handlers for one hook run in registration order. A failing handler is
    logged against the request it was observing and the next one still runs.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[HookHandler]] = {}

    def register(self, event: str, handler: HookHandler) -> None:
        self._handlers.setdefault(event, []).append(handler)

    async def emit(self, event: str, **kwargs: Any) -> None:
        """Call every handler registered for ``event`` with ``kwargs``."""
        for handler in self._handlers.get(event, ()):
            try:
                await handler(**kwargs)
            except Exception:
                request_id = kwargs.get("request_id")
                logger.error(
                    f"[{request_id}] Observer {getattr(handler, '__qualname__', handler)!r} "
                    f"failed on '{event}'",
                    exc_info=True,
                    extra={"hook_event": event, "request_id": request_id},
                )
