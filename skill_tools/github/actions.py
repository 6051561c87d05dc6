"""GitHub Actions tools.

Tools for checking CI/CD workflow runs.
"""

from __future__ import annotations

from typing import Any

from .._base import ToolContext, ToolDef
from ._client import GitHubClient
from .models import (
    CI_RUNS_PAGE_SIZE,
    CheckCIResult,
    CIStatusParams,
    GitHubWorkflowRuns,
    parse_params,
    require,
    to_workflow_run,
    validate_upstream,
)


async def check_ci_status(args: dict[str, Any], ctx: ToolContext) -> CheckCIResult:
    """Get the most recent workflow runs of a repository."""
    params = parse_params(CIStatusParams, args)
    require(params, "owner", "repo")
    full_name = f"{params.owner}/{params.repo}"

    result = await GitHubClient.get_instance().request(
        "GET",
        f"/repos/{full_name}/actions/runs",
        ctx,
        params={"per_page": CI_RUNS_PAGE_SIZE},
        error_prefix=f"Failed to get CI status for {full_name}",
    )
    data = validate_upstream(GitHubWorkflowRuns, result, "workflow runs")
    return CheckCIResult(
        repo=full_name,
        runs=[to_workflow_run(r) for r in data.workflow_runs[:CI_RUNS_PAGE_SIZE]],
    )


TOOLS = [
    ToolDef(
        name="check_ci_status",
        description="Check CI/CD pipeline status",
        parameters={
            "type": "object",
            "properties": {
                "owner": {"type": "string", "description": "Repository owner"},
                "repo": {"type": "string", "description": "Repository name"},
            },
            "required": ["owner", "repo"],
        },
        handler=check_ci_status,
    ),
]
