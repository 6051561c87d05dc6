"""Skill Core - Shared infrastructure for the GitHub skill.

Usage:
    from skill_core import init_skill

    # Load config, set up logging and register tools (call once at startup)
    registry = init_skill()
    result = await registry.execute("list_repos", {"limit": 5}, ctx)
"""

from skill_core.config import SkillConfig, get_config, init_skill

__all__ = ["SkillConfig", "get_config", "init_skill"]
