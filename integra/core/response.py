"""
integra.core.response - Response Assembler

Builds the success and error envelopes. Both stamp ``processed_at`` at the
moment of assembly, so the timestamp reflects completion rather than
arrival.
"""

from datetime import UTC, datetime
from typing import Any

from integra.core.models import IntegrationResponse

SUCCESS_MESSAGE = "Request processed successfully for action: {action}"


def build_success(request_id: str, action: str, data: dict[str, Any]) -> IntegrationResponse:
    """Build a success envelope carrying ``data`` verbatim."""
    return IntegrationResponse(
        success=True,
        message=SUCCESS_MESSAGE.format(action=action),
        data=data,
        processed_at=datetime.now(UTC),
        request_id=request_id,
    )


def build_error(request_id: str, message: str) -> IntegrationResponse:
    """Build an error envelope. Error envelopes never carry data."""
    return IntegrationResponse(
        success=False,
        message=message,
        processed_at=datetime.now(UTC),
        request_id=request_id,
    )
