"""
integra.settings - Centralized Configuration

Single source of truth for all integra configuration.
Loads from .env files and environment variables using pydantic-settings.

Settings are read once at startup. The destructive-actions flag is turned
into an immutable DataAccessPolicy and injected into the DataAdapter, so
nothing downstream reads configuration from globals.

Usage:
    >>> from integra.settings import get_settings
    >>> settings = get_settings()
    >>> settings.downstream_base_url
    'http://localhost:9090'

    >>> policy = settings.build_data_policy()
    >>> policy.destructive_actions_enabled
    False
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from integra.integrations.data import DataAccessPolicy

logger = logging.getLogger(__name__)

# Accepted spellings for boolean flags; anything else falls back to False.
_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def parse_flag(value: Any) -> bool:
    """Parse a boolean flag, defaulting to False for absent or invalid input."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    text = str(value).strip()
    if text in _TRUE_VALUES:
        return True
    if text and text not in _FALSE_VALUES:
        logger.warning(f"Invalid boolean flag value {text!r}, defaulting to disabled")
    return False


class IntegraSettings(BaseSettings):
    """Centralized integra configuration loaded from .env / environment variables.

    All INTEGRA_* prefixed env vars are loaded automatically.
    The destructive-actions flag keeps its historical name DELETE_ENABLED via alias.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INTEGRA_",
        extra="ignore",
        populate_by_name=True,
    )

    # -- API Server ------------------------------------------------------------
    # Defaults to loopback; set INTEGRA_API_HOST=0.0.0.0 for container use.
    api_host: str = "127.0.0.1"
    api_port: int = 9090

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"

    # -- Downstream services ---------------------------------------------------
    # The simulated collaborators are served by this same process by default.
    downstream_base_url: str = "http://localhost:9090"
    downstream_timeout_seconds: float = Field(default=5.0, gt=0)

    # -- Data access policy ----------------------------------------------------
    destructive_actions_enabled: bool = Field(default=False, alias="DELETE_ENABLED")
    destructive_actions: list[str] = ["delete_user"]

    # -- Simulated collaborators -----------------------------------------------
    simulate_latency: bool = True

    # -- Validators ------------------------------------------------------------

    @field_validator("destructive_actions_enabled", mode="before")
    @classmethod
    def _lenient_flag(cls, value: Any) -> bool:
        """Never fail startup on a malformed flag; treat it as disabled."""
        return parse_flag(value)

    @field_validator("downstream_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    # -- Helpers ---------------------------------------------------------------

    def build_data_policy(self) -> DataAccessPolicy:
        """Build the immutable policy injected into the DataAdapter."""
        return DataAccessPolicy(
            destructive_actions_enabled=self.destructive_actions_enabled,
            destructive_actions=frozenset(self.destructive_actions),
        )


# ---------------------------------------------------------------------------
# Singleton accessor
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_settings() -> IntegraSettings:
    """Return the cached IntegraSettings singleton."""
    return IntegraSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
