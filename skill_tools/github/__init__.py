"""GitHub skill package.

Query and manage GitHub repositories from conversation: list and search your
repositories, inspect one, check CI runs, read recent commits, and create
issues, repositories and pull requests.

Credentials: GITHUB_TOKEN / GITHUB_USERNAME env vars, or the host config
block ``{"github": {"token": ..., "username": ...}}``. Env always wins.
"""

from __future__ import annotations

import os

from logging_config import get_logger

from ._client import GitHubClient
from ._credentials import CredentialResolver, CredentialSet, UsernameCache
from .errors import GitHubSkillError, UpstreamError, ValidationError

MODULE_NAME = "github"
MODULE_VERSION = "2.0.1"
MODULE_DESCRIPTION = "Query and manage GitHub repositories"

logger = get_logger("github")

from .repositories import TOOLS as REPO_TOOLS
from .actions import TOOLS as ACTION_TOOLS
from .issues import TOOLS as ISSUE_TOOLS
from .pull_requests import TOOLS as PR_TOOLS

# Aggregate all tools
TOOLS = REPO_TOOLS + ACTION_TOOLS + ISSUE_TOOLS + PR_TOOLS

# System prompt for LLM context
SYSTEM_PROMPT = """
## GitHub Integration
You can query and manage the user's GitHub repositories.

**Repositories:**
- `list_repos` - List your repositories (filter by language, sort, limit)
- `search_repos` - Search within your own repositories
- `get_repo` - Get details (stars, forks, language, default branch) for owner/repo
- `create_repo` - Create a new repository

**Activity & CI:**
- `get_recent_activity` - Recent commits on one of your repos
- `check_ci_status` - Latest 5 GitHub Actions runs for owner/repo

**Issues & PRs:**
- `create_issue` - Open an issue on one of your repos
- `create_pull_request` - Open a PR (owner defaults to you, base to main)
""".strip()


# --- Lifecycle Hooks ---


async def initialize() -> None:
    """Initialize GitHub module."""
    if os.getenv("GITHUB_TOKEN"):
        logger.info(f"GitHub API configured from environment (v{MODULE_VERSION})")
    else:
        logger.info(
            "GITHUB_TOKEN not set - using host config token if provided, "
            "otherwise unauthenticated requests"
        )


async def cleanup() -> None:
    """Forget the cached acting username."""
    GitHubClient.get_instance().resolver.cache.clear()


# Re-export handler functions for direct use if needed
from .repositories import (
    list_repos,
    get_repo,
    create_repo,
    search_repos,
    get_recent_activity,
)
from .actions import check_ci_status
from .issues import create_issue
from .pull_requests import create_pull_request

__all__ = [
    # Module info
    "MODULE_NAME",
    "MODULE_VERSION",
    "MODULE_DESCRIPTION",
    "SYSTEM_PROMPT",
    "TOOLS",
    # Lifecycle
    "initialize",
    "cleanup",
    # Client
    "GitHubClient",
    "CredentialResolver",
    "CredentialSet",
    "UsernameCache",
    # Errors
    "GitHubSkillError",
    "UpstreamError",
    "ValidationError",
    # Handler functions
    "list_repos",
    "get_repo",
    "create_repo",
    "search_repos",
    "get_recent_activity",
    "check_ci_status",
    "create_issue",
    "create_pull_request",
]
