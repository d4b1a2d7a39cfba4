"""
integra.core.models - Request/Response Envelope Models

Pydantic models for the inbound request and the single response envelope
produced per request, plus the pipeline state and failure enums.
"""

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PipelineState(StrEnum):
    """States of one orchestration attempt."""

    RECEIVED = "received"
    AUTHENTICATING = "authenticating"
    FETCHING = "fetching"
    NOTIFYING = "notifying"
    RESPONDING = "responding"
    DONE = "done"
    FAILED = "failed"


class FailureKind(StrEnum):
    """Hard-fail terminals. Notify failures never appear here."""

    BAD_REQUEST = "bad_request"
    AUTH_SERVICE_UNAVAILABLE = "auth_service_unavailable"
    AUTH_REJECTED = "auth_rejected"
    DATA_SERVICE_UNAVAILABLE = "data_service_unavailable"


class IntegrationRequest(BaseModel):
    """
    Inbound orchestration request.

    Example:
        >>> req = IntegrationRequest.model_validate_json(
        ...     '{"user_id": "user123", "token": "valid_token123", "action": "fetch_user_data"}'
        ... )
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Required on purpose: a body missing any of these is a 400, not an
    # empty-string request that falls through to auth (older clients got 401).
    user_id: str
    token: str
    action: str
    metadata: dict[str, str] | None = None


class IntegrationResponse(BaseModel):
    """
    Response envelope returned for every request, success or failure.

    ``data`` is present if and only if ``success`` is true.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    message: str
    data: dict[str, Any] | None = Field(default=None)
    processed_at: datetime
    request_id: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def _data_only_on_success(self) -> "IntegrationResponse":
        if self.success and self.data is None:
            raise ValueError("successful responses must carry data")
        if not self.success and self.data is not None:
            raise ValueError("error responses must not carry data")
        return self

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict; ``data`` is omitted on error envelopes."""
        payload = self.model_dump(mode="json")
        # exclude_none would also strip nulls nested inside data
        if self.data is None:
            payload.pop("data")
        return payload
