"""
integra - Request orchestration across dependent downstream calls

An inbound request is authenticated, its data fetched, a best-effort
notification sent, and one correlated response returned.

Example:
    >>> import httpx
    >>> from integra.api.main import build_pipeline
    >>> from integra.settings import get_settings
    >>> async with httpx.AsyncClient() as client:
    ...     pipeline = build_pipeline(get_settings(), client)
    ...     result = await pipeline.process(b'{"user_id": "u1", "token": "valid_x1", "action": "a"}')

Architecture:
    - core: correlator, pipeline state machine, response assembler, hooks
    - integrations: auth/data/notify adapters with per-call timeouts
    - api: FastAPI surface and simulated collaborator services
    - runner: uvicorn entry point
"""

__version__ = "0.1.0"
__author__ = "integra contributors"
__license__ = "Apache-2.0"

from integra.core import (
    IntegrationPipeline,
    IntegrationRequest,
    IntegrationResponse,
    PipelineResult,
    RequestContext,
    new_request_id,
)
from integra.integrations import AuthAdapter, DataAccessPolicy, DataAdapter, NotifyAdapter

__all__ = [
    "AuthAdapter",
    "DataAccessPolicy",
    "DataAdapter",
    "IntegrationPipeline",
    "IntegrationRequest",
    "IntegrationResponse",
    "NotifyAdapter",
    "PipelineResult",
    "RequestContext",
    "__version__",
    "new_request_id",
]
