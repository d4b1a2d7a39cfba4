"""
integra.integrations.exceptions - Downstream adapter errors

Adapters raise these instead of returning negative outcomes, so callers can
tell "the service said no" apart from "the service could not be reached".

Example:
    >>> try:
    ...     outcome = await auth.check(token, user_id)
    ... except DownstreamUnavailableError as e:
    ...     logger.error(f"{e.service} unavailable: {e}")
"""


class IntegraError(Exception):
    """Base exception for all integra errors."""


class AdapterError(IntegraError):
    """Base exception for a failed downstream call.

    Attributes:
        service: Name of the downstream service the adapter talks to
    """

    def __init__(self, service: str, message: str) -> None:
        self.service = service
        super().__init__(message)


class DownstreamUnavailableError(AdapterError):
    """
    Raised when a downstream call fails at the transport level.

    This covers:
    - Connection errors
    - Non-2xx responses
    - Bodies that are not the expected JSON shape
    """


class DownstreamTimeoutError(DownstreamUnavailableError):
    """Raised when a downstream call does not answer within the adapter timeout."""

    def __init__(self, service: str, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(service, f"{service} did not respond within {timeout_seconds:g}s")


class DestructiveActionBlockedError(AdapterError):
    """Raised before any call is made when a destructive action is not permitted."""

    def __init__(self, service: str, action: str) -> None:
        self.action = action
        super().__init__(service, f"destructive action '{action}' is not enabled")


__all__ = [
    "AdapterError",
    "DestructiveActionBlockedError",
    "DownstreamTimeoutError",
    "DownstreamUnavailableError",
    "IntegraError",
]
