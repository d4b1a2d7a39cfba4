"""
Unit tests for integra.settings - Centralized Configuration

Tests default values, environment variable overrides, .env file loading,
the lenient destructive-actions flag, build_data_policy(), and
clear_settings_cache().
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from integra.integrations import DataAccessPolicy
from integra.settings import (
    IntegraSettings,
    clear_settings_cache,
    get_settings,
    parse_flag,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    """Clear settings cache and strip INTEGRA_* env vars so tests are isolated."""
    clear_settings_cache()
    for key in list(os.environ):
        if key.startswith("INTEGRA_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("DELETE_ENABLED", raising=False)
    yield
    clear_settings_cache()


# ============================================================================
# Default Values
# ============================================================================


class TestDefaults:
    def test_defaults(self):
        settings = IntegraSettings(_env_file=None)
        assert settings.api_host == "127.0.0.1"
        assert settings.api_port == 9090
        assert settings.log_level == "INFO"
        assert settings.simulate_latency is True

    def test_downstream_defaults(self):
        settings = IntegraSettings(_env_file=None)
        assert settings.downstream_base_url == "http://localhost:9090"
        assert settings.downstream_timeout_seconds == 5.0

    def test_destructive_actions_disabled_by_default(self):
        settings = IntegraSettings(_env_file=None)
        assert settings.destructive_actions_enabled is False
        assert settings.destructive_actions == ["delete_user"]


# ============================================================================
# Environment Variable Overrides
# ============================================================================


class TestEnvOverrides:
    def test_integra_prefix_overrides(self):
        env = {
            "INTEGRA_API_PORT": "8080",
            "INTEGRA_DOWNSTREAM_BASE_URL": "http://services.internal/",
            "INTEGRA_DOWNSTREAM_TIMEOUT_SECONDS": "2.5",
            "INTEGRA_SIMULATE_LATENCY": "false",
        }
        with patch.dict(os.environ, env, clear=False):
            settings = IntegraSettings(_env_file=None)
            assert settings.api_port == 8080
            assert settings.downstream_base_url == "http://services.internal"
            assert settings.downstream_timeout_seconds == 2.5
            assert settings.simulate_latency is False

    @pytest.mark.parametrize("value", ["1", "t", "T", "TRUE", "true", "True"])
    def test_delete_enabled_true_values(self, value):
        with patch.dict(os.environ, {"DELETE_ENABLED": value}, clear=False):
            assert IntegraSettings(_env_file=None).destructive_actions_enabled is True

    @pytest.mark.parametrize("value", ["0", "false", "F", "", "yes", "enabled", "2"])
    def test_delete_enabled_false_or_invalid_values(self, value):
        """Invalid input must not fail startup; it means disabled."""
        with patch.dict(os.environ, {"DELETE_ENABLED": value}, clear=False):
            assert IntegraSettings(_env_file=None).destructive_actions_enabled is False

    def test_destructive_actions_json_list(self):
        env = {"INTEGRA_DESTRUCTIVE_ACTIONS": '["delete_user", "purge_account"]'}
        with patch.dict(os.environ, env, clear=False):
            settings = IntegraSettings(_env_file=None)
            assert settings.destructive_actions == ["delete_user", "purge_account"]


# ============================================================================
# .env File Loading
# ============================================================================


class TestDotenvLoading:
    def test_loads_from_env_file(self, tmp_path: Path):
        env_file = tmp_path / ".env"
        env_file.write_text("INTEGRA_API_PORT=7070\nDELETE_ENABLED=true\n")

        settings = IntegraSettings(_env_file=str(env_file))
        assert settings.api_port == 7070
        assert settings.destructive_actions_enabled is True

    def test_env_vars_override_env_file(self, tmp_path: Path):
        env_file = tmp_path / ".env"
        env_file.write_text("DELETE_ENABLED=true\n")

        with patch.dict(os.environ, {"DELETE_ENABLED": "false"}, clear=False):
            settings = IntegraSettings(_env_file=str(env_file))
            assert settings.destructive_actions_enabled is False

    def test_unknown_keys_ignored(self, tmp_path: Path):
        env_file = tmp_path / ".env"
        env_file.write_text("INTEGRA_ENV=production\nINTEGRA_API_PORT=7070\n")

        settings = IntegraSettings(_env_file=str(env_file))
        assert settings.api_port == 7070
        assert "env" not in IntegraSettings.model_fields


# ============================================================================
# Helpers
# ============================================================================


class TestBuildDataPolicy:
    def test_policy_reflects_settings(self):
        settings = IntegraSettings(_env_file=None, DELETE_ENABLED="true")
        policy = settings.build_data_policy()

        assert policy == DataAccessPolicy(
            destructive_actions_enabled=True,
            destructive_actions=frozenset({"delete_user"}),
        )

    def test_default_policy_blocks_delete(self):
        policy = IntegraSettings(_env_file=None).build_data_policy()
        assert not policy.permits("delete_user")


class TestParseFlag:
    def test_bool_passthrough(self):
        assert parse_flag(True) is True
        assert parse_flag(False) is False

    def test_none_is_false(self):
        assert parse_flag(None) is False

    def test_invalid_logs_warning(self, caplog: pytest.LogCaptureFixture):
        assert parse_flag("maybe") is False
        assert any("maybe" in m for m in caplog.messages)


class TestSingleton:
    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_clear_settings_cache(self):
        first = get_settings()
        clear_settings_cache()
        assert get_settings() is not first
