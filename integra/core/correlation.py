"""
integra.core.correlation - Request Correlator

Assigns each inbound request a human-sortable tracing identifier and holds
the per-request context (start time and event timeline) that every log line
and the final response refer back to.

IDs look like ``REQ-1718000000-4821``: unix seconds plus a random
disambiguator in 0..9999. Collisions within the same second are possible
and accepted; the ID is a tracing aid, not a key.
"""

import random
import time
from dataclasses import dataclass, field
from datetime import UTC, datetime

from integra.core.models import PipelineState

REQUEST_ID_PREFIX = "REQ"


def new_request_id() -> str:
    """Generate a request ID of the form ``REQ-<unix_seconds>-<0..9999>``."""
    return f"{REQUEST_ID_PREFIX}-{int(time.time())}-{random.randrange(10000)}"


@dataclass(frozen=True)
class PipelineEvent:
    """One entry in a request's timeline."""

    state: PipelineState
    status: str  # started, succeeded, failed, degraded
    detail: str = ""
    at: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass
class RequestContext:
    """
    Lifetime of one orchestration attempt.

    Created at pipeline start and discarded with the response; never shared
    between requests.

    Attributes:
        request_id: Correlation ID echoed in logs and the response
        started_at: Wall-clock arrival time
        events: Ordered timeline of state transitions
    """

    request_id: str = field(default_factory=new_request_id)
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    events: list[PipelineEvent] = field(default_factory=list)
    _started_monotonic: float = field(default_factory=time.monotonic, repr=False)

    def record(self, state: PipelineState, status: str, detail: str = "") -> PipelineEvent:
        """Append an event to the timeline and return it."""
        event = PipelineEvent(state=state, status=status, detail=detail)
        self.events.append(event)
        return event

    def events_for(self, state: PipelineState) -> list[PipelineEvent]:
        return [event for event in self.events if event.state == state]

    def elapsed_ms(self) -> float:
        return (time.monotonic() - self._started_monotonic) * 1000
