"""Tests for GuardConfig."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from projectguard import GuardConfig, LogLevel, load_config_from_env


class TestGuardConfig:
    """Tests for GuardConfig model."""

    def test_create_default_config(self) -> None:
        """Test creating a GuardConfig with defaults."""
        config = GuardConfig()
        assert config.log_level == LogLevel.INFO
        assert config.log_json is False
        assert config.service_name is None
        assert config.log_denials is True
        assert config.admin_override is True

    def test_create_custom_config(self) -> None:
        """Test creating a GuardConfig with custom values."""
        config = GuardConfig(
            log_level=LogLevel.DEBUG,
            log_json=True,
            service_name="pm-api",
            log_denials=False,
            admin_override=False,
        )
        assert config.log_level == LogLevel.DEBUG
        assert config.log_json is True
        assert config.service_name == "pm-api"
        assert config.log_denials is False
        assert config.admin_override is False

    def test_log_level_from_string(self) -> None:
        """Test creating config with log level as lowercase string."""
        config = GuardConfig(log_level="debug")
        assert config.log_level == LogLevel.DEBUG

    def test_log_level_invalid(self) -> None:
        """Test creating config with invalid log level."""
        with pytest.raises(ValueError, match="Invalid log level"):
            GuardConfig(log_level="LOUD")

    def test_extra_fields_forbidden(self) -> None:
        """Test that extra fields are forbidden."""
        with pytest.raises(Exception):  # Pydantic validation error
            GuardConfig(mongo_uri="mongodb://localhost")  # type: ignore[call-arg]


class TestLoadConfigFromEnv:
    """Tests for load_config_from_env function."""

    @patch.dict(os.environ, {}, clear=True)
    def test_load_defaults(self) -> None:
        """Test loading config with no environment variables."""
        config = load_config_from_env()
        assert config.log_level == LogLevel.INFO
        assert config.log_json is False
        assert config.log_denials is True
        assert config.admin_override is True

    @patch.dict(
        os.environ,
        {
            "LOG_LEVEL": "WARNING",
            "LOG_JSON": "yes",
            "SERVICE_NAME": "pm-api",
            "PROJECTGUARD_LOG_DENIALS": "false",
            "PROJECTGUARD_ADMIN_OVERRIDE": "0",
        },
        clear=True,
    )
    def test_load_from_env(self) -> None:
        """Test loading config from environment variables."""
        config = load_config_from_env()
        assert config.log_level == LogLevel.WARNING
        assert config.log_json is True
        assert config.service_name == "pm-api"
        assert config.log_denials is False
        assert config.admin_override is False

    def test_truthy_variants(self) -> None:
        """Test boolean variables accept various true values."""
        for value in ("true", "1", "yes", "on", "TRUE"):
            with patch.dict(os.environ, {"LOG_JSON": value}, clear=True):
                assert load_config_from_env().log_json is True

    @patch.dict(os.environ, {"LOG_LEVEL": "nope"}, clear=True)
    def test_invalid_level_from_env(self) -> None:
        """Test an invalid LOG_LEVEL is rejected."""
        with pytest.raises(ValueError):
            load_config_from_env()
