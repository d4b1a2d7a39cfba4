"""
integra.api.endpoints.collaborators - Simulated Downstream Services

Stand-ins for the auth, database and notification services so the
orchestrator can run end to end against itself. None of this is real:
tokens are checked by prefix only, data is generated, and notifications
are acknowledged without being sent anywhere.
"""

import asyncio
import logging
import random
from datetime import UTC, datetime, timedelta

from fastapi import APIRouter
from pydantic import BaseModel

from integra.api.deps import AppSettings
from integra.integrations.types import AuthOutcome, FetchOutcome, NotifyOutcome

logger = logging.getLogger(__name__)

router = APIRouter()

VALID_TOKEN_PREFIX = "valid_"

# Simulated processing time per service, in milliseconds (min, max)
AUTH_LATENCY_MS = (50, 150)
DATABASE_LATENCY_MS = (100, 300)
NOTIFICATION_LATENCY_MS = (30, 100)


class AuthValidateRequest(BaseModel):
    """Body of ``POST /auth/validate``."""

    token: str = ""
    user_id: str = ""


class NotificationSendRequest(BaseModel):
    """Body of ``POST /notification/send``."""

    user_id: str = ""
    message: str = ""


def is_valid_token(token: str) -> bool:
    """A token is valid if it starts with ``valid_`` and has something after it."""
    return len(token) > len(VALID_TOKEN_PREFIX) and token.startswith(VALID_TOKEN_PREFIX)


async def _simulate_latency(enabled: bool, bounds: tuple[int, int]) -> None:
    if enabled:
        await asyncio.sleep(random.randint(*bounds) / 1000)


@router.post("/auth/validate", response_model=AuthOutcome)
async def validate_token(data: AuthValidateRequest, settings: AppSettings) -> AuthOutcome:
    """Simulated auth service."""
    await _simulate_latency(settings.simulate_latency, AUTH_LATENCY_MS)

    valid = is_valid_token(data.token)
    logger.info(f"[AUTH] Validated token for user {data.user_id}: {valid}")

    return AuthOutcome(
        valid=valid,
        user_id=data.user_id,
        message="Token validated" if valid else "Invalid token",
    )


@router.get("/database/fetch", response_model=FetchOutcome)
async def fetch_data(settings: AppSettings, user_id: str = "", action: str = "") -> FetchOutcome:
    """Simulated database service."""
    await _simulate_latency(settings.simulate_latency, DATABASE_LATENCY_MS)

    last_access = datetime.now(UTC) - timedelta(hours=24)
    data = {
        "user_id": user_id,
        "action": action,
        "records": random.randint(1, 100),
        "last_access": last_access.isoformat(timespec="seconds"),
        "permissions": ["read", "write", "execute"],
        "quota_remaining": random.randrange(1000),
    }
    logger.info(f"[DATABASE] Fetched data for user {user_id}, action {action}")

    return FetchOutcome(success=True, data=data)


@router.post("/notification/send", response_model=NotifyOutcome)
async def send_notification(data: NotificationSendRequest, settings: AppSettings) -> NotifyOutcome:
    """Simulated notification service."""
    await _simulate_latency(settings.simulate_latency, NOTIFICATION_LATENCY_MS)

    logger.info(f"[NOTIFICATION] Sent notification to user {data.user_id}")

    return NotifyOutcome(sent=True, message=f"Notification sent to user {data.user_id}")
