"""GitHub issue tools."""

from __future__ import annotations

from typing import Any

from .._base import ToolContext, ToolDef
from ._client import GitHubClient
from .models import (
    CreateIssueParams,
    GitHubIssue,
    Issue,
    parse_params,
    require,
    to_issue,
    validate_upstream,
)


async def create_issue(args: dict[str, Any], ctx: ToolContext) -> Issue:
    """Create an issue on one of the acting user's repositories.

    Keys in ``extra`` (labels, assignees, milestone...) are merged into the
    request body as-is, after title and body.
    """
    params = parse_params(CreateIssueParams, args)
    require(params, "repo", "title")
    client = GitHubClient.get_instance()
    username = await client.username(ctx)

    data: dict[str, Any] = {"title": params.title, "body": params.body or ""}
    data.update(params.extra or {})

    result = await client.request(
        "POST",
        f"/repos/{username}/{params.repo}/issues",
        ctx,
        json_data=data,
        error_prefix="Failed to create issue",
    )
    return to_issue(validate_upstream(GitHubIssue, result, "created issue"))


TOOLS = [
    ToolDef(
        name="create_issue",
        description="Create a new issue",
        parameters={
            "type": "object",
            "properties": {
                "repo": {"type": "string", "description": "Repository name"},
                "title": {"type": "string", "description": "Issue title"},
                "body": {"type": "string", "description": "Issue body (markdown)"},
                "extra": {
                    "type": "object",
                    "description": "Additional issue fields, e.g. labels or assignees",
                },
            },
            "required": ["repo", "title"],
        },
        handler=create_issue,
    ),
]
