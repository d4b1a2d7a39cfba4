"""
Notification adapter.
"""

from integra.integrations.base import DownstreamAdapter
from integra.integrations.types import NotifyOutcome


class NotifyAdapter(DownstreamAdapter):
    """Client for ``POST /notification/send``."""

    service = "notification"
    PATH = "/notification/send"

    @staticmethod
    def build_payload(user_id: str, action: str) -> dict[str, str]:
        return {
            "user_id": user_id,
            "message": f"Action '{action}' completed successfully",
        }

    async def send(self, user_id: str, action: str) -> NotifyOutcome:
        """Tell the user an action completed. Raises DownstreamUnavailableError on failure."""
        return await self._call(
            "POST",
            self.PATH,
            NotifyOutcome,
            json=self.build_payload(user_id, action),
        )
