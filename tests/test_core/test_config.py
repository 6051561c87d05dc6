"""Tests for skill configuration and bootstrap."""

import logging
import os
from unittest.mock import patch

import pytest

import logging_config
from logging_config import ColoredConsoleFormatter
from skill_core.config import SkillConfig, _parse_timeout, get_config, init_skill
from skill_tools import github
from skill_tools._base import ToolContext
from skill_tools.github._client import GitHubClient


class TestSkillConfig:
    """Test SkillConfig loading."""

    @patch.dict(os.environ, {}, clear=True)
    @patch("skill_core.config.load_dotenv")
    def test_defaults(self, mock_load_dotenv) -> None:
        """Test defaults with an empty environment."""
        config = get_config()

        assert config.github_api_url == "https://api.github.com"
        assert config.user_agent == "OpenClaw-GitHub-Skill"
        assert config.request_timeout is None
        assert config.log_level == "INFO"
        mock_load_dotenv.assert_called_once()

    @patch.dict(
        os.environ,
        {
            "GITHUB_API_URL": "https://ghe.example.com/api/v3/",
            "GITHUB_USER_AGENT": "Custom-Agent",
            "GITHUB_TIMEOUT": "12.5",
            "LOG_LEVEL": "debug",
        },
        clear=True,
    )
    @patch("skill_core.config.load_dotenv")
    def test_env_overrides(self, mock_load_dotenv) -> None:
        """Test values read from the environment."""
        config = SkillConfig.get_instance()

        assert config.github_api_url == "https://ghe.example.com/api/v3"
        assert config.user_agent == "Custom-Agent"
        assert config.request_timeout == 12.5
        assert config.log_level == "DEBUG"

    @pytest.mark.parametrize(
        "raw,expected",
        [(None, None), ("", None), ("0", None), ("abc", None), ("30", 30.0)],
    )
    def test_parse_timeout(self, raw, expected) -> None:
        """Test timeout parsing."""
        assert _parse_timeout(raw) == expected

    @patch.dict(os.environ, {"GITHUB_USER_AGENT": "Custom-Agent"}, clear=True)
    @patch("skill_core.config.load_dotenv")
    def test_client_uses_config(self, mock_load_dotenv) -> None:
        """Test that the default client picks up configured values."""
        client = GitHubClient.get_instance()

        headers = client.resolver.resolve_auth_headers(ToolContext())

        assert headers["User-Agent"] == "Custom-Agent"
        assert client.api_url == "https://api.github.com"


class TestInitSkill:
    """Test init_skill bootstrap."""

    @patch("skill_core.config.load_dotenv")
    def test_registers_tools_once(self, mock_load_dotenv) -> None:
        """Test that tools and prompt are registered and init is idempotent."""
        with patch("logging_config.init_logging") as init_logging:
            registry = init_skill()
            again = init_skill()

        assert again is registry
        assert set(registry.get_tool_names()) == {tool.name for tool in github.TOOLS}
        assert "GitHub Integration" in registry.get_system_prompts()
        init_logging.assert_any_call(get_config().log_level)

    @patch.dict(os.environ, {}, clear=True)
    def test_console_level_follows_dotenv(self) -> None:
        """Test that LOG_LEVEL from .env reaches the already running console handler."""

        def load_env_file() -> bool:
            os.environ["LOG_LEVEL"] = "DEBUG"
            return True

        logging_config.get_logger("github")
        previous = logging_config._console_handler.level

        try:
            with patch("skill_core.config.load_dotenv", side_effect=load_env_file):
                init_skill()

            assert get_config().log_level == "DEBUG"
            assert logging_config._console_handler.level == logging.DEBUG
        finally:
            logging_config._console_handler.setLevel(previous)


class TestLogging:
    """Test the console formatter."""

    def test_format_without_color(self) -> None:
        """Test the tag prefix and extras."""
        formatter = ColoredConsoleFormatter(use_color=False)
        record = logging.LogRecord("github", logging.WARNING, __file__, 1, "boom", None, None)
        record.tool = "get_repo"
        record.status_code = 404

        line = formatter.format(record)

        assert "WARNING" in line
        assert "[github] boom" in line
        assert "(tool=get_repo, status=404)" in line
