"""
Data-fetch adapter and its access policy.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from integra.integrations.base import DEFAULT_TIMEOUT_SECONDS, DownstreamAdapter
from integra.integrations.exceptions import DestructiveActionBlockedError
from integra.integrations.types import FetchOutcome

logger = logging.getLogger(__name__)

DEFAULT_DESTRUCTIVE_ACTIONS = frozenset({"delete_user"})


@dataclass(frozen=True)
class DataAccessPolicy:
    """Immutable policy applied before any data call is issued.

    Built once from settings at startup and shared read-only by every
    request.
    """

    destructive_actions_enabled: bool = False
    destructive_actions: frozenset[str] = field(default=DEFAULT_DESTRUCTIVE_ACTIONS)

    def is_destructive(self, action: str) -> bool:
        return action in self.destructive_actions

    def permits(self, action: str) -> bool:
        return self.destructive_actions_enabled or not self.is_destructive(action)


class DataAdapter(DownstreamAdapter):
    """Client for ``GET /database/fetch``, guarded by a DataAccessPolicy."""

    service = "database"
    PATH = "/database/fetch"

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        policy: DataAccessPolicy | None = None,
    ) -> None:
        super().__init__(client, base_url, timeout)
        self.policy = policy or DataAccessPolicy()

    @staticmethod
    def build_params(user_id: str, action: str) -> dict[str, str]:
        return {"user_id": user_id, "action": action}

    async def fetch(self, user_id: str, action: str) -> dict[str, Any]:
        """
        Fetch data for a user action.

        Args:
            user_id: User to fetch data for
            action: Requested action name

        Returns:
            The ``data`` payload of the FetchOutcome, untouched

        Raises:
            DestructiveActionBlockedError: If the policy forbids the action;
                no request is sent in that case
            DownstreamUnavailableError: If the data service cannot be reached
        """
        if not self.policy.permits(action):
            logger.warning(
                f"Blocked destructive action '{action}' for user {user_id}",
                extra={"user_id": user_id, "action": action},
            )
            raise DestructiveActionBlockedError(self.service, action)

        outcome = await self._call(
            "GET",
            self.PATH,
            FetchOutcome,
            params=self.build_params(user_id, action),
        )
        return outcome.data
