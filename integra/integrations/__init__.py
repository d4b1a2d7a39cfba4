"""
Downstream Adapter Layer

Typed clients for the three collaborator services the pipeline depends on:
auth-check, data-fetch and notify. Each adapter wraps one outbound call
with an enforced timeout and raises AdapterError subclasses on failure.
"""

from integra.integrations.auth import AuthAdapter
from integra.integrations.base import DEFAULT_TIMEOUT_SECONDS, DownstreamAdapter
from integra.integrations.data import DataAccessPolicy, DataAdapter
from integra.integrations.exceptions import (
    AdapterError,
    DestructiveActionBlockedError,
    DownstreamTimeoutError,
    DownstreamUnavailableError,
    IntegraError,
)
from integra.integrations.notify import NotifyAdapter
from integra.integrations.types import AuthOutcome, FetchOutcome, NotifyOutcome

__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "AdapterError",
    "AuthAdapter",
    "AuthOutcome",
    "DataAccessPolicy",
    "DataAdapter",
    "DestructiveActionBlockedError",
    "DownstreamAdapter",
    "DownstreamTimeoutError",
    "DownstreamUnavailableError",
    "FetchOutcome",
    "IntegraError",
    "NotifyAdapter",
    "NotifyOutcome",
]
