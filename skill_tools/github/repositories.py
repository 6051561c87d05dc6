"""GitHub repository tools.

Tools for listing, searching, inspecting and creating repositories, and for
reading recent commits.
"""

from __future__ import annotations

from typing import Any

from .._base import ToolContext, ToolDef
from ._client import GitHubClient
from .models import (
    CreateRepoParams,
    GitHubCommit,
    GitHubRepo,
    GitHubSearchResponse,
    ListReposParams,
    ListReposResult,
    RecentActivityParams,
    RecentActivityResult,
    RepoDetailsParams,
    Repository,
    SearchReposParams,
    SearchReposResult,
    parse_params,
    per_page,
    require,
    to_commit,
    to_repository,
    validate_upstream,
)


# =============================================================================
# Handler Functions
# =============================================================================


async def list_repos(args: dict[str, Any], ctx: ToolContext) -> ListReposResult:
    """List the acting user's repositories.

    The language filter is applied locally, before truncating to ``limit``.
    """
    params = parse_params(ListReposParams, args)
    client = GitHubClient.get_instance()
    username = await client.username(ctx)

    result = await client.request(
        "GET",
        f"/users/{username}/repos",
        ctx,
        params={
            "type": params.type,
            "sort": params.sort,
            "direction": params.direction,
            "per_page": per_page(params.limit),
        },
        error_prefix=f"Failed to list repos for {username}",
    )
    repos = validate_upstream(list[GitHubRepo], result, "repository list")

    if params.language:
        wanted = params.language.lower()
        repos = [r for r in repos if r.language and r.language.lower() == wanted]

    repos = repos[: params.limit]
    return ListReposResult(total=len(repos), repos=[to_repository(r) for r in repos])


async def get_repo(args: dict[str, Any], ctx: ToolContext) -> Repository:
    """Get repository details."""
    params = parse_params(RepoDetailsParams, args)
    require(params, "owner", "repo")

    result = await GitHubClient.get_instance().request(
        "GET",
        f"/repos/{params.owner}/{params.repo}",
        ctx,
        error_prefix=f"Failed to get repo {params.owner}/{params.repo}",
    )
    return to_repository(validate_upstream(GitHubRepo, result, "repository"))


async def create_repo(args: dict[str, Any], ctx: ToolContext) -> Repository:
    """Create a repository under the account that owns the token."""
    params = parse_params(CreateRepoParams, args)
    require(params, "name")

    result = await GitHubClient.get_instance().request(
        "POST",
        "/user/repos",
        ctx,
        json_data={
            "name": params.name,
            "description": params.description or "",
            "private": params.private,
            "auto_init": params.auto_init,
        },
        error_prefix="Failed to create repo",
    )
    return to_repository(validate_upstream(GitHubRepo, result, "created repository"))


async def search_repos(args: dict[str, Any], ctx: ToolContext) -> SearchReposResult:
    """Search the acting user's repositories.

    The query is always narrowed with ``user:<acting user>``.
    """
    params = parse_params(SearchReposParams, args)
    require(params, "query")
    client = GitHubClient.get_instance()
    username = await client.username(ctx)

    result = await client.request(
        "GET",
        "/search/repositories",
        ctx,
        params={
            "q": f"{params.query} user:{username}",
            "sort": params.sort,
            "per_page": per_page(params.limit),
        },
        error_prefix="Search failed",
    )
    data = validate_upstream(GitHubSearchResponse, result, "repository search")
    return SearchReposResult(
        total=data.total_count,
        repos=[to_repository(r) for r in data.items[: params.limit]],
    )


async def get_recent_activity(
    args: dict[str, Any], ctx: ToolContext
) -> RecentActivityResult:
    """Get recent commits on one of the acting user's repositories."""
    params = parse_params(RecentActivityParams, args)
    require(params, "repo")
    client = GitHubClient.get_instance()
    username = await client.username(ctx)

    result = await client.request(
        "GET",
        f"/repos/{username}/{params.repo}/commits",
        ctx,
        params={"per_page": per_page(params.limit)},
        error_prefix=f"Failed to get activity for {username}/{params.repo}",
    )
    commits = validate_upstream(list[GitHubCommit], result, "commit list")
    return RecentActivityResult(
        repo=f"{username}/{params.repo}",
        commits=[to_commit(c) for c in commits[: params.limit]],
    )


# =============================================================================
# Tool Definitions
# =============================================================================

TOOLS = [
    ToolDef(
        name="list_repos",
        description="List your repositories",
        parameters={
            "type": "object",
            "properties": {
                "type": {"type": "string", "enum": ["owner", "all", "member"], "default": "owner"},
                "sort": {
                    "type": "string",
                    "enum": ["created", "updated", "pushed", "full_name"],
                    "default": "updated",
                },
                "direction": {"type": "string", "enum": ["asc", "desc"], "default": "desc"},
                "language": {"type": "string", "description": "Only repos in this language"},
                "limit": {"type": "number", "default": 30},
            },
        },
        handler=list_repos,
    ),
    ToolDef(
        name="get_repo",
        description="Get repository details",
        parameters={
            "type": "object",
            "properties": {
                "owner": {"type": "string", "description": "Repository owner"},
                "repo": {"type": "string", "description": "Repository name"},
            },
            "required": ["owner", "repo"],
        },
        handler=get_repo,
    ),
    ToolDef(
        name="get_recent_activity",
        description="Get recent commits",
        parameters={
            "type": "object",
            "properties": {
                "repo": {"type": "string", "description": "Repository name"},
                "limit": {"type": "number", "default": 10},
            },
            "required": ["repo"],
        },
        handler=get_recent_activity,
    ),
    ToolDef(
        name="create_repo",
        description="Create a new repository",
        parameters={
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "Repository name"},
                "description": {"type": "string", "description": "Repository description"},
                "private": {"type": "boolean", "description": "Private repository", "default": False},
                "auto_init": {"type": "boolean", "description": "Initialize with README", "default": True},
            },
            "required": ["name"],
        },
        handler=create_repo,
    ),
    ToolDef(
        name="search_repos",
        description="Search your repositories",
        parameters={
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Search query"},
                "sort": {"type": "string", "enum": ["stars", "updated", "created"], "default": "updated"},
                "limit": {"type": "number", "default": 30},
            },
            "required": ["query"],
        },
        handler=search_repos,
    ),
]
