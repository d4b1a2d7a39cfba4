"""
Unit tests for integra.core.hooks - Pipeline Lifecycle Hook Registry.

Tests registration, emission order, error isolation and kwargs
passthrough.
"""

import logging
from unittest.mock import AsyncMock

import pytest

from integra.core.hooks import (
    HOOK_REQUEST_COMPLETED,
    HOOK_REQUEST_RECEIVED,
    HOOK_STEP_FAILED,
    HookRegistry,
)
from integra.core.models import PipelineState

# ============================================================================
# Registration and Emission
# ============================================================================


@pytest.mark.asyncio
async def test_register_and_emit():
    hooks = HookRegistry()
    handler = AsyncMock()

    hooks.register(HOOK_REQUEST_RECEIVED, handler)
    await hooks.emit(HOOK_REQUEST_RECEIVED, request_id="REQ-1-1")

    handler.assert_called_once_with(request_id="REQ-1-1")


@pytest.mark.asyncio
async def test_emit_no_handlers():
    """Emit is a no-op when nothing is registered."""
    await HookRegistry().emit("nonexistent_event", request_id="REQ-1-1")


@pytest.mark.asyncio
async def test_handlers_called_in_registration_order():
    hooks = HookRegistry()
    call_order: list[str] = []

    async def metrics(**kwargs: object) -> None:
        call_order.append("metrics")

    async def audit(**kwargs: object) -> None:
        call_order.append("audit")

    hooks.register(HOOK_REQUEST_COMPLETED, metrics)
    hooks.register(HOOK_REQUEST_COMPLETED, audit)

    await hooks.emit(HOOK_REQUEST_COMPLETED)

    assert call_order == ["metrics", "audit"]


# ============================================================================
# Error Isolation
# ============================================================================


@pytest.mark.asyncio
async def test_handler_error_isolated(caplog: pytest.LogCaptureFixture):
    """One failing observer neither raises nor stops the others."""
    hooks = HookRegistry()
    seen: list[int] = []

    async def before(**kwargs: object) -> None:
        seen.append(1)

    async def failing(**kwargs: object) -> None:
        raise ValueError("boom")

    async def after(**kwargs: object) -> None:
        seen.append(3)

    for handler in (before, failing, after):
        hooks.register(HOOK_STEP_FAILED, handler)

    with caplog.at_level(logging.ERROR, logger="integra.core.hooks"):
        await hooks.emit(
            HOOK_STEP_FAILED,
            request_id="REQ-1-1",
            state=PipelineState.NOTIFYING,
            error="timeout",
            fatal=False,
        )

    assert seen == [1, 3]
    assert any(HOOK_STEP_FAILED in r.getMessage() for r in caplog.records)
    assert caplog.records[-1].request_id == "REQ-1-1"


# ============================================================================
# kwargs passthrough
# ============================================================================


@pytest.mark.asyncio
async def test_kwargs_passed_through():
    hooks = HookRegistry()
    received: dict[str, object] = {}

    async def capture(**kwargs: object) -> None:
        received.update(kwargs)

    hooks.register(HOOK_REQUEST_COMPLETED, capture)
    await hooks.emit(
        HOOK_REQUEST_COMPLETED,
        request_id="REQ-1-1",
        success=True,
        status_code=200,
        failure=None,
        duration_ms=12.5,
    )

    assert received == {
        "request_id": "REQ-1-1",
        "success": True,
        "status_code": 200,
        "failure": None,
        "duration_ms": 12.5,
    }


def test_well_known_constants():
    assert HOOK_REQUEST_RECEIVED == "request_received"
    assert HOOK_STEP_FAILED == "step_failed"
    assert HOOK_REQUEST_COMPLETED == "request_completed"
