"""Centralized configuration for the GitHub skill.

Loads environment variables and provides a unified configuration interface.
GITHUB_TOKEN and GITHUB_USERNAME are intentionally not cached here; the
credential resolver re-reads them from the environment on every call.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from dotenv import load_dotenv

if TYPE_CHECKING:
    from skill_tools._registry import ToolRegistry

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_USER_AGENT = "OpenClaw-GitHub-Skill"


def _parse_timeout(value: str | None) -> float | None:
    """Parse GITHUB_TIMEOUT; empty or non-positive means no timeout."""
    if not value:
        return None
    try:
        timeout = float(value)
    except ValueError:
        return None
    return timeout if timeout > 0 else None


@dataclass
class SkillConfig:
    """Configuration for the GitHub skill."""

    # GitHub API
    github_api_url: str = DEFAULT_API_URL
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: float | None = None

    # Logging
    log_level: str = "INFO"

    # Singleton instance
    _instance: ClassVar["SkillConfig | None"] = None
    _initialized: ClassVar[bool] = False

    @classmethod
    def get_instance(cls) -> "SkillConfig":
        """Get the singleton configuration instance."""
        if cls._instance is None:
            cls._instance = cls._load_from_env()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached instance. Useful for testing."""
        cls._instance = None
        cls._initialized = False

    @classmethod
    def _load_from_env(cls) -> "SkillConfig":
        """Load configuration from environment variables."""
        load_dotenv()

        return cls(
            github_api_url=os.getenv("GITHUB_API_URL", DEFAULT_API_URL).rstrip("/"),
            user_agent=os.getenv("GITHUB_USER_AGENT", DEFAULT_USER_AGENT),
            request_timeout=_parse_timeout(os.getenv("GITHUB_TIMEOUT")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


def get_config() -> SkillConfig:
    """Get the skill configuration."""
    return SkillConfig.get_instance()


def init_skill() -> "ToolRegistry":
    """Initialize the skill.

    Call this once at host startup to:
    1. Load configuration
    2. Initialize logging
    3. Register the GitHub tools and system prompt with the ToolRegistry
    """
    # Load .env before the tool package creates its loggers.
    config = get_config()

    from logging_config import get_logger, init_logging
    from skill_tools import github
    from skill_tools._registry import ToolRegistry

    registry = ToolRegistry.get_instance()

    if SkillConfig._initialized:
        return registry

    init_logging(config.log_level)
    logger = get_logger("config")

    for tool in github.TOOLS:
        registry.register(tool, source_module=github.MODULE_NAME)
    registry.register_system_prompt(github.MODULE_NAME, github.SYSTEM_PROMPT)

    SkillConfig._initialized = True
    logger.info(
        f"Registered {len(github.TOOLS)} {github.MODULE_NAME} tools "
        f"(v{github.MODULE_VERSION})"
    )
    return registry
