"""
integra.core - Orchestration Core

This package contains the request orchestration components:
- Request correlator (request IDs, per-request context and timeline)
- Orchestration pipeline (auth -> fetch -> notify -> respond state machine)
- Response assembler (success/error envelopes)
- Lifecycle hooks for observing pipeline runs
"""

from integra.core.correlation import PipelineEvent, RequestContext, new_request_id
from integra.core.hooks import HookRegistry
from integra.core.models import (
    FailureKind,
    IntegrationRequest,
    IntegrationResponse,
    PipelineState,
)
from integra.core.pipeline import FAILURE_POLICY, IntegrationPipeline, PipelineResult
from integra.core.response import build_error, build_success

__all__ = [
    "FAILURE_POLICY",
    "FailureKind",
    "HookRegistry",
    "IntegrationPipeline",
    "IntegrationRequest",
    "IntegrationResponse",
    "PipelineEvent",
    "PipelineResult",
    "PipelineState",
    "RequestContext",
    "build_error",
    "build_success",
    "new_request_id",
]
