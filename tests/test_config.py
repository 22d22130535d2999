"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from navbot.config import DEFAULT_LAUNCH_ARGS, AgentSettings, load_settings


class TestAgentSettings:
    """Tests for AgentSettings."""

    def test_default_values(self) -> None:
        settings = AgentSettings()

        assert settings.headless is True
        assert settings.launch_args == DEFAULT_LAUNCH_ARGS
        assert settings.default_timeout_ms == 30_000
        assert settings.context_options() == {"viewport": {"width": 1280, "height": 900}}

    def test_user_agent_in_context_options(self) -> None:
        settings = AgentSettings(user_agent="navbot-test")

        assert settings.context_options()["user_agent"] == "navbot-test"

    def test_invalid_timeout(self) -> None:
        with pytest.raises(ValueError, match="default_timeout_ms must be positive"):
            AgentSettings(default_timeout_ms=0)

    def test_with_overrides(self) -> None:
        original = AgentSettings()
        modified = original.with_overrides(headless=False)

        assert original.headless is True
        assert modified.headless is False


class TestLoadSettings:
    """Tests for environment loading."""

    def test_loads_defaults_without_env_vars(self, tmp_path: Path) -> None:
        empty_env = tmp_path / ".env"
        empty_env.write_text("")
        with patch.dict("os.environ", {}, clear=True):
            settings = load_settings(empty_env)

        assert settings == AgentSettings()

    def test_reads_env_vars(self, tmp_path: Path) -> None:
        empty_env = tmp_path / ".env"
        empty_env.write_text("")
        env = {
            "NAVBOT_HEADLESS": "false",
            "NAVBOT_DEFAULT_TIMEOUT_MS": "1500",
            "NAVBOT_LAUNCH_ARGS": "--no-sandbox, --mute-audio",
            "NAVBOT_USER_AGENT": "custom/1.0",
            "NAVBOT_LOG_LEVEL": "debug",
        }
        with patch.dict("os.environ", env, clear=True):
            settings = load_settings(empty_env)

        assert settings.headless is False
        assert settings.default_timeout_ms == 1500
        assert settings.launch_args == ("--no-sandbox", "--mute-audio")
        assert settings.user_agent == "custom/1.0"
        assert settings.log_level == "DEBUG"

    def test_reads_dotenv_file(self, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("NAVBOT_HEADLESS=no\nNAVBOT_DEFAULT_TIMEOUT_MS=2000\n")
        with patch.dict("os.environ", {}, clear=True):
            settings = load_settings(env_file)

        assert settings.headless is False
        assert settings.default_timeout_ms == 2000

    def test_bad_boolean(self, tmp_path: Path) -> None:
        empty_env = tmp_path / ".env"
        empty_env.write_text("")
        with patch.dict("os.environ", {"NAVBOT_HEADLESS": "maybe"}, clear=True):
            with pytest.raises(ValueError, match="NAVBOT_HEADLESS must be a boolean"):
                load_settings(empty_env)

    def test_bad_integer(self, tmp_path: Path) -> None:
        empty_env = tmp_path / ".env"
        empty_env.write_text("")
        with patch.dict("os.environ", {"NAVBOT_DEFAULT_TIMEOUT_MS": "soon"}, clear=True):
            with pytest.raises(ValueError, match="must be an integer"):
                load_settings(empty_env)
