"""
integra.core.pipeline - Orchestration Pipeline

Sequences the dependent downstream calls for one inbound request:

    Received -> Authenticating -> Fetching -> Notifying -> Responding -> Done

with abort edges to Failed(kind) from parsing, auth and fetch. Auth and
fetch are hard dependencies: any failure there ends the request at once
with a fixed status code and message. Notify is a soft dependency: its
failure is logged and recorded on the timeline, and the request still
succeeds.

Calls are strictly sequential. Notify runs only after fetch has succeeded,
even though it does not use fetch's result, so the timeline always reads
auth, fetch, notify.

Example:
    >>> pipeline = IntegrationPipeline(auth=auth, data=data, notify=notify)
    >>> result = await pipeline.process(b'{"user_id": "u1", "token": "valid_abc", "action": "x"}')
    >>> result.status_code, result.response.success
    (200, True)
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from integra.core.correlation import RequestContext
from integra.core.hooks import (
    HOOK_REQUEST_COMPLETED,
    HOOK_REQUEST_RECEIVED,
    HOOK_STEP_COMPLETED,
    HOOK_STEP_FAILED,
    HOOK_STEP_STARTED,
    HookRegistry,
)
from integra.core.models import (
    FailureKind,
    IntegrationRequest,
    IntegrationResponse,
    PipelineState,
)
from integra.core.response import build_error, build_success
from integra.integrations.auth import AuthAdapter
from integra.integrations.data import DataAdapter
from integra.integrations.exceptions import AdapterError
from integra.integrations.notify import NotifyAdapter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FailurePolicy:
    """Outward status and message for a hard-fail terminal."""

    status_code: int
    message: str


FAILURE_POLICY: dict[FailureKind, FailurePolicy] = {
    FailureKind.BAD_REQUEST: FailurePolicy(400, "Invalid request body"),
    FailureKind.AUTH_SERVICE_UNAVAILABLE: FailurePolicy(503, "Auth service unavailable"),
    FailureKind.AUTH_REJECTED: FailurePolicy(401, "Authentication failed"),
    FailureKind.DATA_SERVICE_UNAVAILABLE: FailurePolicy(503, "Database service unavailable"),
}


@dataclass
class PipelineResult:
    """Everything one pipeline run produced.

    Attributes:
        response: The single response envelope for the request
        status_code: HTTP status selected for the envelope
        context: Request context with the full event timeline
        failure: Hard-fail kind, or None on success
        notification_sent: Whether the soft notify step delivered
    """

    response: IntegrationResponse
    status_code: int
    context: RequestContext
    failure: FailureKind | None = None
    notification_sent: bool = False

    @property
    def success(self) -> bool:
        return self.response.success


def parse_request(payload: bytes | str | Mapping[str, Any]) -> IntegrationRequest:
    """Structurally validate an inbound payload.

    Raises:
        ValidationError: If the payload is not valid JSON or lacks required fields
    """
    if isinstance(payload, bytes | str):
        return IntegrationRequest.model_validate_json(payload)
    return IntegrationRequest.model_validate(payload)


class IntegrationPipeline:
    """
    Orchestrates auth -> fetch -> notify -> respond for one request at a time.

    The pipeline holds no per-request state; each call to process() gets
    its own RequestContext, so one instance serves concurrent requests.
    """

    def __init__(
        self,
        auth: AuthAdapter,
        data: DataAdapter,
        notify: NotifyAdapter,
        hooks: HookRegistry | None = None,
    ) -> None:
        self.auth = auth
        self.data = data
        self.notify = notify
        self.hooks = hooks or HookRegistry()

    async def process(
        self,
        payload: bytes | str | Mapping[str, Any],
        context: RequestContext | None = None,
    ) -> PipelineResult:
        """
        Run one request through the pipeline.

        Args:
            payload: Raw request body (JSON bytes/str) or an already-decoded mapping
            context: Pre-created context; a new one (and request ID) is made if omitted

        Returns:
            PipelineResult. Exactly one response is produced and its request_id
            always equals ``context.request_id``.
        """
        ctx = context or RequestContext()
        rid = ctx.request_id

        logger.info(f"[{rid}] Received integration request", extra={"request_id": rid})
        ctx.record(PipelineState.RECEIVED, "started")
        await self.hooks.emit(HOOK_REQUEST_RECEIVED, request_id=rid)

        # -- Received: structural validation ----------------------------------
        try:
            request = parse_request(payload)
        except ValidationError as e:
            logger.warning(
                f"[{rid}] Failed to parse request: {e.error_count()} validation error(s)",
                extra={"request_id": rid},
            )
            return await self._fail(
                ctx, PipelineState.RECEIVED, FailureKind.BAD_REQUEST, "malformed payload"
            )
        ctx.record(PipelineState.RECEIVED, "succeeded")
        logger.info(
            f"[{rid}] Request parsed - UserID: {request.user_id}, Action: {request.action}",
            extra={"request_id": rid, "user_id": request.user_id, "action": request.action},
        )

        # -- Authenticating: hard dependency ----------------------------------
        await self._start(ctx, PipelineState.AUTHENTICATING, "Step 1: Calling Auth Service...")
        try:
            auth_outcome = await self.auth.check(request.token, request.user_id)
        except AdapterError as e:
            return await self._fail(
                ctx, PipelineState.AUTHENTICATING, FailureKind.AUTH_SERVICE_UNAVAILABLE, str(e)
            )
        if not auth_outcome.valid:
            return await self._fail(
                ctx,
                PipelineState.AUTHENTICATING,
                FailureKind.AUTH_REJECTED,
                auth_outcome.message or "token rejected",
            )
        await self._complete(ctx, PipelineState.AUTHENTICATING, "Auth validated successfully")

        # -- Fetching: hard dependency ----------------------------------------
        await self._start(ctx, PipelineState.FETCHING, "Step 2: Calling Database Service...")
        try:
            data = await self.data.fetch(request.user_id, request.action)
        except AdapterError as e:
            return await self._fail(
                ctx, PipelineState.FETCHING, FailureKind.DATA_SERVICE_UNAVAILABLE, str(e)
            )
        await self._complete(ctx, PipelineState.FETCHING, "Data fetched successfully")

        # -- Notifying: soft dependency ---------------------------------------
        notification_sent = await self._send_notification(ctx, request)

        # -- Responding -> Done -----------------------------------------------
        ctx.record(PipelineState.RESPONDING, "started")
        response = build_success(rid, request.action, data)
        ctx.record(PipelineState.DONE, "succeeded")
        logger.info(
            f"[{rid}] Processing complete in {ctx.elapsed_ms():.1f}ms",
            extra={"request_id": rid, "duration_ms": ctx.elapsed_ms()},
        )
        return await self._finish(
            PipelineResult(
                response=response,
                status_code=200,
                context=ctx,
                notification_sent=notification_sent,
            )
        )

    # ========================================================================
    # Steps
    # ========================================================================

    async def _send_notification(self, ctx: RequestContext, request: IntegrationRequest) -> bool:
        """Best-effort notify. Never raises, never changes the outcome."""
        rid = ctx.request_id
        await self._start(ctx, PipelineState.NOTIFYING, "Step 3: Calling Notification Service...")
        try:
            outcome = await self.notify.send(request.user_id, request.action)
        except AdapterError as e:
            detail = str(e)
        else:
            if outcome.sent:
                await self._complete(
                    ctx, PipelineState.NOTIFYING, "Notification sent successfully"
                )
                return True
            detail = outcome.message or "notification not sent"

        logger.warning(
            f"[{rid}] Notification service error: {detail}",
            extra={"request_id": rid, "state": PipelineState.NOTIFYING.value},
        )
        logger.warning(
            f"[{rid}] Continuing despite notification failure",
            extra={"request_id": rid},
        )
        ctx.record(PipelineState.NOTIFYING, "degraded", detail)
        await self.hooks.emit(
            HOOK_STEP_FAILED,
            request_id=rid,
            state=PipelineState.NOTIFYING,
            error=detail,
            fatal=False,
        )
        return False

    # ========================================================================
    # Transitions
    # ========================================================================

    async def _start(self, ctx: RequestContext, state: PipelineState, message: str) -> None:
        logger.info(f"[{ctx.request_id}] {message}", extra={"request_id": ctx.request_id})
        ctx.record(state, "started")
        await self.hooks.emit(HOOK_STEP_STARTED, request_id=ctx.request_id, state=state)

    async def _complete(self, ctx: RequestContext, state: PipelineState, message: str) -> None:
        logger.info(f"[{ctx.request_id}] {message}", extra={"request_id": ctx.request_id})
        ctx.record(state, "succeeded")
        await self.hooks.emit(HOOK_STEP_COMPLETED, request_id=ctx.request_id, state=state)

    async def _fail(
        self,
        ctx: RequestContext,
        state: PipelineState,
        kind: FailureKind,
        detail: str,
    ) -> PipelineResult:
        """Abort at ``state`` with the fixed status and message for ``kind``."""
        rid = ctx.request_id
        policy = FAILURE_POLICY[kind]

        # Caller mistakes are warnings; unreachable services are errors
        if kind in (FailureKind.BAD_REQUEST, FailureKind.AUTH_REJECTED):
            log = logger.warning
        else:
            log = logger.error
        log(
            f"[{rid}] {policy.message}: {detail}",
            extra={"request_id": rid, "state": state.value, "failure": kind.value},
        )

        ctx.record(state, "failed", detail)
        ctx.record(PipelineState.FAILED, kind.value, policy.message)
        await self.hooks.emit(
            HOOK_STEP_FAILED, request_id=rid, state=state, error=detail, fatal=True
        )
        return await self._finish(
            PipelineResult(
                response=build_error(rid, policy.message),
                status_code=policy.status_code,
                context=ctx,
                failure=kind,
            )
        )

    async def _finish(self, result: PipelineResult) -> PipelineResult:
        await self.hooks.emit(
            HOOK_REQUEST_COMPLETED,
            request_id=result.context.request_id,
            success=result.success,
            status_code=result.status_code,
            failure=result.failure,
            duration_ms=result.context.elapsed_ms(),
        )
        return result
