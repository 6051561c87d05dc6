"""Test configuration and fixtures."""

from __future__ import annotations

from typing import Any, Iterator

import httpx
import pytest

from skill_core.config import SkillConfig
from skill_tools._base import ToolContext
from skill_tools._registry import ToolRegistry
from skill_tools.github._client import GitHubClient
from skill_tools.github._credentials import CredentialResolver

API_URL = "https://api.github.com"


class GitHubStub:
    """In-memory stand-in for the GitHub API that records every request."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, Any]] = {}
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def add(self, method: str, path: str, body: Any = None, status: int = 200) -> None:
        self.routes[(method.upper(), path)] = (status, body)

    def calls(self, path: str | None = None) -> list[httpx.Request]:
        if path is None:
            return list(self.requests)
        return [r for r in self.requests if r.url.path == path]

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        status, body = route
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)


def repo_payload(
    name: str, language: str | None = "Python", owner: str = "octocat"
) -> dict[str, Any]:
    """A trimmed GitHub repository payload."""
    return {
        "id": 1296269,
        "name": name,
        "full_name": f"{owner}/{name}",
        "description": f"{name} description",
        "stargazers_count": 10,
        "forks_count": 2,
        "watchers_count": 10,
        "language": language,
        "open_issues_count": 1,
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-06-01T00:00:00Z",
        "pushed_at": "2024-06-02T00:00:00Z",
        "html_url": f"https://github.com/{owner}/{name}",
        "default_branch": "main",
        "private": False,
        "owner": {"login": owner},
    }


@pytest.fixture
def make_repo():
    return repo_payload


@pytest.fixture
def stub() -> GitHubStub:
    return GitHubStub()


@pytest.fixture
def env() -> dict[str, str]:
    """Process environment seen by the resolver; empty unless a test fills it."""
    return {}


@pytest.fixture
def resolver(stub: GitHubStub, env: dict[str, str]) -> CredentialResolver:
    return CredentialResolver(env=env, api_url=API_URL, transport=stub.transport)


@pytest.fixture
def client(resolver: CredentialResolver) -> Iterator[GitHubClient]:
    """Shared client wired to the stub, installed for the tool handlers."""
    github_client = GitHubClient(resolver=resolver)
    GitHubClient.set_instance(github_client)
    yield github_client
    GitHubClient.reset()


@pytest.fixture
def ctx() -> ToolContext:
    return ToolContext(config={"github": {"token": "cfg-token", "username": "octocat"}})


@pytest.fixture(autouse=True)
def reset_singletons() -> Iterator[None]:
    yield
    ToolRegistry.reset()
    SkillConfig.reset()
    GitHubClient.reset()
