"""
Base adapter for the downstream collaborator services.

Each adapter wraps exactly one outbound call. The HTTP client is injected,
so tests substitute the transport (``httpx.MockTransport``) and production
shares one pooled ``httpx.AsyncClient`` across all adapters.
"""

import asyncio
import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel

from integra.integrations.exceptions import DownstreamTimeoutError, DownstreamUnavailableError

logger = logging.getLogger(__name__)

# Per-call deadline for every downstream request
DEFAULT_TIMEOUT_SECONDS = 5.0

OutcomeT = TypeVar("OutcomeT", bound=BaseModel)


class DownstreamAdapter:
    """
    Typed client for one downstream call with an enforced timeout.

    The timeout is applied twice: as the httpx per-phase timeout and as a
    total deadline around the whole request, so a server that trickles
    bytes cannot hold the call open past ``timeout`` seconds. A timed-out
    call is abandoned and reported as DownstreamTimeoutError; nothing is
    retried.

    Attributes:
        service: Name used in logs and errors
        base_url: Root URL of the collaborator service
        timeout: Seconds before a call is abandoned
    """

    service: str = "downstream"

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._client = client
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def _call(
        self,
        method: str,
        path: str,
        outcome_type: type[OutcomeT],
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> OutcomeT:
        """
        Issue one request and parse the body into ``outcome_type``.

        Raises:
            DownstreamTimeoutError: If no response arrives within ``timeout``
            DownstreamUnavailableError: On transport errors, non-2xx status,
                or a body that does not match ``outcome_type``
        """
        url = f"{self.base_url}{path}"
        try:
            response = await asyncio.wait_for(
                self._client.request(method, url, json=json, params=params, timeout=self.timeout),
                timeout=self.timeout,
            )
            response.raise_for_status()
            return outcome_type.model_validate(response.json())
        except (TimeoutError, httpx.TimeoutException) as e:
            raise DownstreamTimeoutError(self.service, self.timeout) from e
        except httpx.HTTPStatusError as e:
            raise DownstreamUnavailableError(
                self.service,
                f"{self.service} returned {e.response.status_code}",
            ) from e
        except httpx.HTTPError as e:
            raise DownstreamUnavailableError(
                self.service,
                f"{self.service} request failed: {e!r}",
            ) from e
        except ValueError as e:
            # JSON decode errors and pydantic ValidationError both land here
            logger.debug(f"Unparseable {self.service} response", exc_info=True)
            raise DownstreamUnavailableError(
                self.service,
                f"{self.service} returned an invalid body",
            ) from e
