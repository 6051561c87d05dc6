"""Base types for the tool system.

ToolContext carries per-invocation host information; ToolDef describes one
callable action together with its JSON-schema parameters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

ToolHandler = Callable[[dict[str, Any], "ToolContext"], Awaitable[Any]]


class ToolError(Exception):
    """Failure a tool reports to the user as a plain message.

    The registry renders these as "Error: <message>" instead of logging a
    traceback.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


@dataclass
class ToolContext:
    """Context passed to every tool handler.

    Attributes:
        user_id: Host-side identifier of the user invoking the tool
        platform: Platform the request came from (e.g. "discord", "api")
        channel_id: Optional channel/conversation identifier
        config: Host-supplied configuration, keyed by skill name
                (e.g. {"github": {"token": "...", "username": "..."}})
        extra: Free-form values the host wants to pass through
    """

    user_id: str = "default"
    platform: str = "api"
    channel_id: str | None = None
    config: dict[str, Any] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)

    def skill_config(self, skill_name: str) -> dict[str, Any]:
        """Return the config block for one skill, or an empty dict."""
        section = self.config.get(skill_name) if self.config else None
        return section if isinstance(section, dict) else {}


@dataclass
class ToolDef:
    """Definition of a single tool."""

    name: str
    description: str
    parameters: dict[str, Any]
    handler: ToolHandler
    platforms: list[str] | None = None
    requires: list[str] = field(default_factory=list)

    def to_openai_format(self) -> dict[str, Any]:
        """OpenAI function-calling format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }

    def to_mcp_format(self) -> dict[str, Any]:
        """MCP tool listing format."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.parameters,
        }

    def to_claude_format(self) -> dict[str, Any]:
        """Anthropic tool-use format."""
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.parameters,
        }
