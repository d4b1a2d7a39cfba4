"""
Outcome types returned by the downstream adapters.

These mirror the JSON bodies of the collaborator services and are shared
between the adapters (which parse them) and the simulated collaborators
(which emit them).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AuthOutcome(BaseModel):
    """Auth-check result. ``valid=False`` is a normal answer, not an error."""

    model_config = ConfigDict(frozen=True)

    valid: bool
    user_id: str = ""
    message: str = ""


class FetchOutcome(BaseModel):
    """Data-fetch result. ``data`` is forwarded verbatim into the final response."""

    model_config = ConfigDict(frozen=True)

    success: bool = True
    data: dict[str, Any] = Field(default_factory=dict)


class NotifyOutcome(BaseModel):
    """Notification result."""

    model_config = ConfigDict(frozen=True)

    sent: bool
    message: str = ""
