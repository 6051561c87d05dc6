"""Tool registry for the skill tool system.

The ToolRegistry is a singleton that manages all registered tools and provides
methods for tool discovery, filtering, and execution. It is the dispatcher
the host calls with an action name, an argument dict and a ToolContext.
"""

from __future__ import annotations

import json
from typing import Any, ClassVar

from pydantic import BaseModel

from logging_config import get_logger

from ._base import ToolContext, ToolDef, ToolError

logger = get_logger("tools")


class UnknownToolError(LookupError):
    """Raised by invoke() for a tool name nobody registered."""


class ToolRegistry:
    """Central registry for all skill tools.

    Usage:
        registry = ToolRegistry.get_instance()
        registry.register(tool_def, source_module="github")
        tools = registry.get_tools(format="claude")
        result = await registry.execute("list_repos", {"limit": 5}, context)
    """

    _instance: ClassVar[ToolRegistry | None] = None

    def __init__(self) -> None:
        """Initialize the registry. Use get_instance() instead of direct instantiation."""
        self._tools: dict[str, ToolDef] = {}
        self._tool_sources: dict[str, str] = {}  # tool_name -> module_name
        self._system_prompts: dict[str, str] = {}  # module_name -> system prompt

    @classmethod
    def get_instance(cls) -> ToolRegistry:
        """Get or create the singleton registry instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance. Useful for testing."""
        cls._instance = None

    def register(self, tool: ToolDef, source_module: str = "builtin") -> None:
        """Register a tool definition.

        Args:
            tool: The tool definition to register
            source_module: Name of the module providing this tool

        Raises:
            ValueError: If a tool with the same name is already registered
                       by a different module
        """
        if tool.name in self._tools:
            existing_source = self._tool_sources.get(tool.name)
            if existing_source != source_module:
                raise ValueError(
                    f"Tool '{tool.name}' already registered by '{existing_source}'"
                )

        self._tools[tool.name] = tool
        self._tool_sources[tool.name] = source_module

    def unregister_module(self, module_name: str) -> list[str]:
        """Unregister all tools from a specific module.

        Returns:
            List of tool names that were unregistered
        """
        removed = []
        for tool_name, source in list(self._tool_sources.items()):
            if source == module_name:
                del self._tools[tool_name]
                del self._tool_sources[tool_name]
                removed.append(tool_name)
        self._system_prompts.pop(module_name, None)
        return removed

    def get_tool(self, name: str) -> ToolDef | None:
        """Get a single tool definition by name."""
        return self._tools.get(name)

    def get_tools(
        self,
        platform: str | None = None,
        capabilities: dict[str, bool] | None = None,
        format: str = "openai",
    ) -> list[dict[str, Any]]:
        """Get tool definitions filtered by platform and capabilities.

        Args:
            platform: Filter to tools available on this platform (None = all)
            capabilities: Dict of capability -> available
            format: Output format - "openai", "mcp", or "claude"
        """
        tools = []
        for tool in self._tools.values():
            if platform and tool.platforms and platform not in tool.platforms:
                continue

            if capabilities is not None and not all(
                capabilities.get(cap, False) for cap in tool.requires
            ):
                continue

            if format == "mcp":
                tools.append(tool.to_mcp_format())
            elif format == "claude":
                tools.append(tool.to_claude_format())
            else:  # openai
                tools.append(tool.to_openai_format())

        return tools

    def get_tool_names(self) -> list[str]:
        """Get list of all registered tool names."""
        return list(self._tools.keys())

    async def invoke(
        self,
        tool_name: str,
        arguments: dict[str, Any],
        context: ToolContext,
    ) -> Any:
        """Run a tool and return its structured result.

        Errors raised by the handler propagate to the caller.

        Raises:
            UnknownToolError: If no tool with that name is registered
        """
        tool = self._tools.get(tool_name)
        if not tool:
            raise UnknownToolError(
                f"Unknown tool '{tool_name}'. Available tools: {', '.join(self._tools.keys())}"
            )
        return await tool.handler(arguments or {}, context)

    async def execute(
        self,
        tool_name: str,
        arguments: dict[str, Any],
        context: ToolContext,
    ) -> str:
        """Execute a tool by name and render the outcome for the LLM.

        Returns:
            The result as indented JSON, or an "Error: ..." string
        """
        try:
            result = await self.invoke(tool_name, arguments, context)
        except UnknownToolError as e:
            return f"Error: {e}"
        except ToolError as e:
            logger.warning(
                f"{tool_name} failed: {e.message}",
                extra={"tool": tool_name, "status_code": getattr(e, "status_code", None)},
            )
            return f"Error: {e.message}"
        except Exception as e:
            logger.exception(f"Error executing {tool_name}", extra={"tool": tool_name})
            return f"Error executing {tool_name}: {e}"

        if isinstance(result, BaseModel):
            return result.model_dump_json(indent=2)
        return json.dumps(result, indent=2)

    def register_system_prompt(self, module_name: str, prompt: str) -> None:
        """Register a system prompt from a tool module."""
        if prompt and prompt.strip():
            self._system_prompts[module_name] = prompt.strip()

    def get_system_prompts(self) -> str:
        """Get all system prompts joined with blank lines."""
        return "\n\n".join(self._system_prompts.values())

    def __len__(self) -> int:
        """Return the number of registered tools."""
        return len(self._tools)

    def __contains__(self, tool_name: str) -> bool:
        """Check if a tool is registered."""
        return tool_name in self._tools
