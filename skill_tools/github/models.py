"""Pydantic models for the GitHub tools.

Three groups live here:

* parameter models, one per action, parsed from the raw tool arguments;
* upstream models mirroring the subset of GitHub REST v3 payloads we read
  (API Reference: https://docs.github.com/en/rest);
* normalized result models returned to the host, plus the projection
  functions mapping one onto the other.

Upstream models ignore unknown fields and give optional fields fixed
defaults, so a missing optional value never changes the result shape. A
missing required field is reported as UpstreamError.
"""

from __future__ import annotations

from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import UpstreamError, ValidationError

P = TypeVar("P", bound=BaseModel)
U = TypeVar("U")

MAX_PER_PAGE = 100
CI_RUNS_PAGE_SIZE = 5
SHORT_SHA_LENGTH = 7


# =============================================================================
# Parameter models
# =============================================================================


class ActionParams(BaseModel):
    """Base for action parameters; unknown keys are dropped."""

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # An explicit null means "not given", so the field default applies.
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class ListReposParams(ActionParams):
    type: Literal["owner", "all", "member"] = "owner"
    sort: Literal["created", "updated", "pushed", "full_name"] = "updated"
    direction: Literal["asc", "desc"] = "desc"
    language: str | None = None
    limit: int = Field(30, ge=1)


class RepoDetailsParams(ActionParams):
    owner: str | None = None
    repo: str | None = None


class CIStatusParams(RepoDetailsParams):
    pass


class RecentActivityParams(ActionParams):
    repo: str | None = None
    limit: int = Field(10, ge=1)


class CreateIssueParams(ActionParams):
    repo: str | None = None
    title: str | None = None
    body: str | None = None
    extra: dict[str, Any] | None = None


class CreateRepoParams(ActionParams):
    name: str | None = None
    description: str | None = None
    private: bool = False
    auto_init: bool = True


class SearchReposParams(ActionParams):
    query: str | None = None
    sort: Literal["stars", "updated", "created"] = "updated"
    limit: int = Field(30, ge=1)


class CreatePRParams(ActionParams):
    owner: str | None = None
    repo: str | None = None
    title: str | None = None
    body: str | None = None
    head: str | None = None
    base: str = "main"


def parse_params(model: type[P], args: dict[str, Any] | None) -> P:
    """Validate raw tool arguments against a parameter model.

    Raises:
        ValidationError: Naming the first offending field
    """
    try:
        return model.model_validate(args or {})
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or model.__name__
        raise ValidationError(field, f"Invalid {field}: {error['msg']}") from e


def require(params: BaseModel, *fields: str) -> None:
    """Raise ValidationError for the first missing or blank field."""
    for name in fields:
        value = getattr(params, name, None)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(name)


def per_page(limit: int) -> int:
    return min(limit, MAX_PER_PAGE)


# =============================================================================
# Upstream models
# =============================================================================


class Upstream(BaseModel):
    model_config = ConfigDict(extra="ignore")


class GitHubUser(Upstream):
    login: str


class GitHubRepo(Upstream):
    """Maps to GitHub REST API Repository object."""

    name: str
    full_name: str
    html_url: str
    description: str | None = None
    stargazers_count: int = 0
    forks_count: int = 0
    watchers_count: int = 0
    language: str | None = None
    open_issues_count: int = 0
    created_at: str | None = None
    updated_at: str | None = None
    pushed_at: str | None = None
    default_branch: str | None = None
    private: bool = False


class GitHubSearchResponse(Upstream):
    total_count: int = 0
    items: list[GitHubRepo] = Field(default_factory=list)


class GitHubWorkflowRun(Upstream):
    """Maps to GitHub REST API Workflow Run object."""

    html_url: str
    name: str | None = None
    status: str | None = None
    conclusion: str | None = None
    head_branch: str | None = None
    head_sha: str | None = None
    created_at: str | None = None


class GitHubWorkflowRuns(Upstream):
    total_count: int = 0
    workflow_runs: list[GitHubWorkflowRun] = Field(default_factory=list)


class GitHubCommitAuthor(Upstream):
    name: str | None = None
    date: str | None = None


class GitHubCommitDetail(Upstream):
    message: str = ""
    author: GitHubCommitAuthor | None = None


class GitHubCommit(Upstream):
    sha: str
    html_url: str
    commit: GitHubCommitDetail


class GitHubIssue(Upstream):
    number: int
    title: str
    html_url: str
    state: str


class GitHubRef(Upstream):
    ref: str


class GitHubPullRequest(Upstream):
    number: int
    title: str
    html_url: str
    state: str
    head: GitHubRef
    base: GitHubRef


def validate_upstream(schema: type[U] | Any, data: Any, what: str) -> U:
    """Validate an upstream payload, reporting shape problems as UpstreamError."""
    try:
        return TypeAdapter(schema).validate_python(data)
    except PydanticValidationError as e:
        raise UpstreamError(
            f"Unexpected response for {what}: {e.error_count()} invalid field(s)",
            cause=e,
        ) from e


# =============================================================================
# Normalized results
# =============================================================================


class Repository(BaseModel):
    name: str
    full_name: str
    description: str | None
    stars: int
    forks: int
    watchers: int
    language: str | None
    open_issues: int
    created: str | None
    updated: str | None
    pushed: str | None
    url: str
    default_branch: str | None
    private: bool


class ListReposResult(BaseModel):
    total: int
    repos: list[Repository]


class SearchReposResult(BaseModel):
    total: int
    repos: list[Repository]


class WorkflowRun(BaseModel):
    name: str | None
    status: str | None
    conclusion: str | None
    branch: str | None
    commit: str
    created: str | None
    url: str


class CheckCIResult(BaseModel):
    repo: str
    runs: list[WorkflowRun]


class Commit(BaseModel):
    sha: str
    message: str
    author: str | None
    date: str | None
    url: str


class RecentActivityResult(BaseModel):
    repo: str
    commits: list[Commit]


class Issue(BaseModel):
    number: int
    title: str
    url: str
    state: str


class PullRequest(BaseModel):
    number: int
    title: str
    url: str
    state: str
    head: str
    base: str


# =============================================================================
# Projections
# =============================================================================


def first_line(message: str) -> str:
    """Commit subject: everything before the first line break."""
    return message.split("\n", 1)[0].rstrip("\r")


def short_sha(sha: str | None) -> str:
    return (sha or "")[:SHORT_SHA_LENGTH]


def to_repository(repo: GitHubRepo) -> Repository:
    return Repository(
        name=repo.name,
        full_name=repo.full_name,
        description=repo.description,
        stars=repo.stargazers_count,
        forks=repo.forks_count,
        watchers=repo.watchers_count,
        language=repo.language,
        open_issues=repo.open_issues_count,
        created=repo.created_at,
        updated=repo.updated_at,
        pushed=repo.pushed_at,
        url=repo.html_url,
        default_branch=repo.default_branch,
        private=repo.private,
    )


def to_workflow_run(run: GitHubWorkflowRun) -> WorkflowRun:
    return WorkflowRun(
        name=run.name,
        status=run.status,
        conclusion=run.conclusion,
        branch=run.head_branch,
        commit=short_sha(run.head_sha),
        created=run.created_at,
        url=run.html_url,
    )


def to_commit(commit: GitHubCommit) -> Commit:
    author = commit.commit.author or GitHubCommitAuthor()
    return Commit(
        sha=short_sha(commit.sha),
        message=first_line(commit.commit.message),
        author=author.name,
        date=author.date,
        url=commit.html_url,
    )


def to_issue(issue: GitHubIssue) -> Issue:
    return Issue(
        number=issue.number,
        title=issue.title,
        url=issue.html_url,
        state=issue.state,
    )


def to_pull_request(pr: GitHubPullRequest) -> PullRequest:
    return PullRequest(
        number=pr.number,
        title=pr.title,
        url=pr.html_url,
        state=pr.state,
        head=pr.head.ref,
        base=pr.base.ref,
    )
