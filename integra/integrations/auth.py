"""
Auth-check adapter.
"""

from integra.integrations.base import DownstreamAdapter
from integra.integrations.types import AuthOutcome


class AuthAdapter(DownstreamAdapter):
    """Client for ``POST /auth/validate``.

    A rejected token comes back as ``AuthOutcome(valid=False)``; only
    transport problems raise.
    """

    service = "auth"
    PATH = "/auth/validate"

    @staticmethod
    def build_payload(token: str, user_id: str) -> dict[str, str]:
        return {"token": token, "user_id": user_id}

    async def check(self, token: str, user_id: str) -> AuthOutcome:
        """
        Validate a token for a user.

        Args:
            token: Caller-supplied token
            user_id: User the token should belong to

        Returns:
            AuthOutcome from the auth service

        Raises:
            DownstreamUnavailableError: If the auth service cannot be reached
        """
        return await self._call(
            "POST",
            self.PATH,
            AuthOutcome,
            json=self.build_payload(token, user_id),
        )
