"""GitHub pull request tools."""

from __future__ import annotations

from typing import Any

from .._base import ToolContext, ToolDef
from ._client import GitHubClient
from .models import (
    CreatePRParams,
    GitHubPullRequest,
    PullRequest,
    parse_params,
    require,
    to_pull_request,
    validate_upstream,
)


async def create_pull_request(args: dict[str, Any], ctx: ToolContext) -> PullRequest:
    """Create a pull request.

    Without an explicit owner the PR is opened on the acting user's repo.
    """
    params = parse_params(CreatePRParams, args)
    require(params, "repo", "title", "head")
    client = GitHubClient.get_instance()

    owner = params.owner
    if not owner or not owner.strip():
        owner = await client.username(ctx)

    result = await client.request(
        "POST",
        f"/repos/{owner}/{params.repo}/pulls",
        ctx,
        json_data={
            "title": params.title,
            "body": params.body or "",
            "head": params.head,
            "base": params.base or "main",
        },
        error_prefix="Failed to create PR",
    )
    return to_pull_request(validate_upstream(GitHubPullRequest, result, "created pull request"))


TOOLS = [
    ToolDef(
        name="create_pull_request",
        description="Create a pull request",
        parameters={
            "type": "object",
            "properties": {
                "owner": {"type": "string", "description": "Repository owner (defaults to you)"},
                "repo": {"type": "string", "description": "Repository name"},
                "title": {"type": "string", "description": "PR title"},
                "body": {"type": "string", "description": "PR description"},
                "head": {"type": "string", "description": "Source branch"},
                "base": {"type": "string", "description": "Target branch", "default": "main"},
            },
            "required": ["repo", "title", "head"],
        },
        handler=create_pull_request,
    ),
]
