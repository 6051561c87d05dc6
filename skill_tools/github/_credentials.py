"""Credential resolution for GitHub requests.

Decides which token and which acting username a request uses. Precedence is
fixed: environment first, then the host config block (``ctx.config["github"]``),
then, for the username only, a single ``GET /user`` lookup whose result is
cached on the resolver.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

import httpx

from logging_config import get_logger

from .._base import ToolContext
from .errors import UpstreamError

logger = get_logger("github")

SKILL_CONFIG_KEY = "github"
ACCEPT_HEADER = "application/vnd.github.v3+json"
DEFAULT_USER_AGENT = "OpenClaw-GitHub-Skill"
DEFAULT_API_URL = "https://api.github.com"


class UsernameCache:
    """Holds the username learned from the identity endpoint.

    Plain check-then-set: concurrent first lookups may both hit the network,
    but they store the same login.
    """

    def __init__(self) -> None:
        self._value: str | None = None
        self.lookups = 0

    def get(self) -> str | None:
        return self._value

    def set(self, value: str) -> None:
        self._value = value
        self.lookups += 1

    def clear(self) -> None:
        self._value = None


@dataclass(frozen=True)
class CredentialSet:
    """Resolved headers plus the acting username."""

    headers: dict[str, str]
    acting_username: str

    @property
    def authorization_header(self) -> str | None:
        return self.headers.get("Authorization")


class CredentialResolver:
    """Resolve auth headers and the acting username for a ToolContext."""

    def __init__(
        self,
        env: Mapping[str, str] | None = None,
        cache: UsernameCache | None = None,
        api_url: str = DEFAULT_API_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ) -> None:
        self._env = env
        self.cache = cache if cache is not None else UsernameCache()
        self.api_url = api_url.rstrip("/")
        self.user_agent = user_agent
        self.transport = transport
        self.timeout = timeout

    @property
    def env(self) -> Mapping[str, str]:
        # os.environ is looked up lazily so patched environments are seen
        return os.environ if self._env is None else self._env

    def _configured(self, ctx: ToolContext, key: str) -> str:
        value: Any = ctx.skill_config(SKILL_CONFIG_KEY).get(key)
        return value if isinstance(value, str) else ""

    def resolve_auth_headers(self, ctx: ToolContext) -> dict[str, str]:
        """Build the headers for one request.

        GITHUB_TOKEN wins outright over a configured token. With neither,
        the request goes out unauthenticated.
        """
        headers = {
            "Accept": ACCEPT_HEADER,
            "User-Agent": self.user_agent,
        }

        env_token = self.env.get("GITHUB_TOKEN", "")
        if env_token:
            headers["Authorization"] = f"token {env_token}"
            return headers

        config_token = self._configured(ctx, "token")
        if config_token:
            headers["Authorization"] = f"token {config_token}"

        return headers

    async def resolve_username(self, ctx: ToolContext) -> str:
        """Return the acting username.

        Raises:
            UpstreamError: If the identity lookup fails
        """
        env_username = self.env.get("GITHUB_USERNAME", "")
        if env_username:
            return env_username

        config_username = self._configured(ctx, "username")
        if config_username:
            return config_username

        cached = self.cache.get()
        if cached:
            return cached

        login = await self._lookup_username(ctx)
        self.cache.set(login)
        logger.info(f"Resolved acting GitHub user '{login}'")
        return login

    async def resolve(self, ctx: ToolContext) -> CredentialSet:
        """Resolve headers and username together."""
        username = await self.resolve_username(ctx)
        return CredentialSet(
            headers=self.resolve_auth_headers(ctx), acting_username=username
        )

    async def _lookup_username(self, ctx: ToolContext) -> str:
        async with httpx.AsyncClient(transport=self.transport) as client:
            response = await client.get(
                f"{self.api_url}/user",
                headers=self.resolve_auth_headers(ctx),
                timeout=self.timeout,
            )

        if not response.is_success:
            raise UpstreamError.from_response("Failed to resolve GitHub user", response)

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError(
                "Failed to resolve GitHub user: invalid JSON",
                status_code=response.status_code,
                cause=e,
            ) from e

        login = data.get("login") if isinstance(data, dict) else None
        if not isinstance(login, str) or not login:
            raise UpstreamError(
                "Failed to resolve GitHub user: response has no login",
                status_code=response.status_code,
            )
        return login
