"""GitHub API client shared by all GitHub tool modules.

One call to ``request`` is one HTTP request: headers come from the
credential resolver, non-success statuses become UpstreamError, and
transport errors propagate untouched. No retries, no pagination.
"""

from __future__ import annotations

from typing import Any, ClassVar

import httpx

from logging_config import get_logger
from skill_core.config import get_config

from .._base import ToolContext
from ._credentials import CredentialResolver
from .errors import UpstreamError

logger = get_logger("github")


class GitHubClient:
    """Thin async wrapper over the GitHub REST API."""

    _instance: ClassVar[GitHubClient | None] = None

    def __init__(
        self,
        resolver: CredentialResolver | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        api_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        if resolver is None:
            config = get_config()
            resolver = CredentialResolver(
                api_url=api_url or config.github_api_url,
                user_agent=config.user_agent,
                transport=transport,
                timeout=timeout if timeout is not None else config.request_timeout,
            )
        self.resolver = resolver
        self.api_url = (api_url or resolver.api_url).rstrip("/")
        self.transport = transport if transport is not None else resolver.transport
        self.timeout = timeout if timeout is not None else resolver.timeout

    @classmethod
    def get_instance(cls) -> GitHubClient:
        """Get or create the shared client used by the tool handlers."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def set_instance(cls, client: GitHubClient) -> None:
        """Install a preconfigured client (tests, custom transports)."""
        cls._instance = client

    @classmethod
    def reset(cls) -> None:
        """Drop the shared client and with it the cached username."""
        cls._instance = None

    async def username(self, ctx: ToolContext) -> str:
        """Acting username for user-keyed actions."""
        return await self.resolver.resolve_username(ctx)

    async def request(
        self,
        method: str,
        endpoint: str,
        ctx: ToolContext,
        *,
        params: dict[str, Any] | None = None,
        json_data: dict[str, Any] | None = None,
        error_prefix: str = "GitHub API error",
    ) -> Any:
        """Make a GitHub API request.

        Args:
            method: HTTP method (GET, POST)
            endpoint: API endpoint (e.g., "/repos/{owner}/{repo}")
            ctx: Invocation context used for credentials
            params: Query parameters, sent in insertion order
            json_data: JSON body data
            error_prefix: Leading text of the UpstreamError message

        Returns:
            Parsed JSON response

        Raises:
            UpstreamError: On a non-success status or a non-JSON body
        """
        url = f"{self.api_url}{endpoint}"
        logger.debug(f"{method} {endpoint}")

        async with httpx.AsyncClient(transport=self.transport) as client:
            response = await client.request(
                method,
                url,
                headers=self.resolver.resolve_auth_headers(ctx),
                params=params,
                json=json_data,
                timeout=self.timeout,
            )

        if not response.is_success:
            error = UpstreamError.from_response(error_prefix, response)
            logger.debug(error.message, extra={"status_code": response.status_code})
            raise error

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                f"{error_prefix}: invalid JSON in response",
                status_code=response.status_code,
                cause=e,
            ) from e
