"""Tool system for the GitHub skill.

Tool modules live in subpackages (currently only ``github``) and export
MODULE_NAME, MODULE_VERSION, TOOLS and SYSTEM_PROMPT.
"""

from ._base import ToolContext, ToolDef, ToolError
from ._registry import ToolRegistry, UnknownToolError

__all__ = ["ToolContext", "ToolDef", "ToolError", "ToolRegistry", "UnknownToolError"]
