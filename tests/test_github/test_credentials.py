"""Tests for credential resolution."""

import os
from unittest.mock import patch

import pytest

from skill_tools._base import ToolContext
from skill_tools.github._credentials import CredentialResolver, UsernameCache
from skill_tools.github.errors import UpstreamError


class TestResolveAuthHeaders:
    """Test header construction and token precedence."""

    def test_base_headers_without_any_token(self, resolver: CredentialResolver) -> None:
        """Test that no token yields Accept and User-Agent only."""
        headers = resolver.resolve_auth_headers(ToolContext())

        assert headers == {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "OpenClaw-GitHub-Skill",
        }

    def test_config_token_used(self, resolver: CredentialResolver) -> None:
        """Test that a configured token becomes the Authorization header."""
        ctx = ToolContext(config={"github": {"token": "cfg-token"}})

        headers = resolver.resolve_auth_headers(ctx)

        assert headers["Authorization"] == "token cfg-token"

    def test_env_token_overrides_config(self, env: dict, resolver: CredentialResolver, ctx: ToolContext) -> None:
        """Test that GITHUB_TOKEN wins over the configured token."""
        env["GITHUB_TOKEN"] = "env-token"

        headers = resolver.resolve_auth_headers(ctx)

        assert headers["Authorization"] == "token env-token"
        assert "cfg-token" not in str(headers)

    def test_empty_env_token_falls_through(self, env: dict, resolver: CredentialResolver, ctx: ToolContext) -> None:
        """Test that an empty GITHUB_TOKEN does not shadow the config."""
        env["GITHUB_TOKEN"] = ""

        assert resolver.resolve_auth_headers(ctx)["Authorization"] == "token cfg-token"

    @patch.dict(os.environ, {"GITHUB_TOKEN": "live-token"})
    def test_reads_process_environment_by_default(self) -> None:
        """Test that the default resolver reads os.environ at call time."""
        resolver = CredentialResolver()

        headers = resolver.resolve_auth_headers(ToolContext())

        assert headers["Authorization"] == "token live-token"

    def test_malformed_config_block_ignored(self, resolver: CredentialResolver) -> None:
        """Test that a non-dict github config block is treated as absent."""
        ctx = ToolContext(config={"github": "not-a-dict"})

        assert "Authorization" not in resolver.resolve_auth_headers(ctx)


class TestResolveUsername:
    """Test acting-username precedence and caching."""

    @pytest.mark.asyncio
    async def test_env_username_wins(self, env: dict, stub, resolver: CredentialResolver, ctx: ToolContext) -> None:
        """Test that GITHUB_USERNAME beats the configured username."""
        env["GITHUB_USERNAME"] = "env-user"

        assert await resolver.resolve_username(ctx) == "env-user"
        assert stub.calls() == []
        assert resolver.cache.get() is None

    @pytest.mark.asyncio
    async def test_config_username(self, stub, resolver: CredentialResolver, ctx: ToolContext) -> None:
        """Test that the configured username is used without a lookup."""
        assert await resolver.resolve_username(ctx) == "octocat"
        assert stub.calls() == []
        assert resolver.cache.get() is None

    @pytest.mark.asyncio
    async def test_lookup_happens_once(self, stub, resolver: CredentialResolver) -> None:
        """Test that N calls issue a single identity lookup."""
        stub.add("GET", "/user", {"login": "looked-up"})
        ctx = ToolContext(config={"github": {"token": "cfg-token"}})

        names = [await resolver.resolve_username(ctx) for _ in range(5)]

        assert names == ["looked-up"] * 5
        assert len(stub.calls("/user")) == 1
        assert resolver.cache.lookups == 1

    @pytest.mark.asyncio
    async def test_lookup_sends_resolved_headers(self, env: dict, stub, resolver: CredentialResolver) -> None:
        """Test that the identity lookup is authenticated like any request."""
        env["GITHUB_TOKEN"] = "env-token"
        stub.add("GET", "/user", {"login": "looked-up"})

        await resolver.resolve_username(ToolContext())

        request = stub.calls("/user")[0]
        assert request.headers["Authorization"] == "token env-token"
        assert request.headers["User-Agent"] == "OpenClaw-GitHub-Skill"

    @pytest.mark.asyncio
    async def test_fresh_resolvers_do_not_share_cache(self, stub) -> None:
        """Test that each resolver owns its cache."""
        stub.add("GET", "/user", {"login": "looked-up"})
        first = CredentialResolver(env={}, transport=stub.transport)
        second = CredentialResolver(env={}, transport=stub.transport)

        await first.resolve_username(ToolContext())
        await second.resolve_username(ToolContext())

        assert len(stub.calls("/user")) == 2

    @pytest.mark.asyncio
    async def test_injected_cache_is_used(self, stub) -> None:
        """Test that a pre-filled cache short-circuits the lookup."""
        cache = UsernameCache()
        cache.set("cached-user")
        resolver = CredentialResolver(env={}, cache=cache, transport=stub.transport)

        assert await resolver.resolve_username(ToolContext()) == "cached-user"
        assert stub.calls() == []

    @pytest.mark.asyncio
    async def test_lookup_failure_raises(self, stub, resolver: CredentialResolver) -> None:
        """Test that a failed identity lookup is an UpstreamError and not cached."""
        stub.add("GET", "/user", {"message": "Bad credentials"}, status=401)

        with pytest.raises(UpstreamError, match="Bad credentials") as exc_info:
            await resolver.resolve_username(ToolContext())

        assert exc_info.value.status_code == 401
        assert resolver.cache.get() is None

    @pytest.mark.asyncio
    async def test_lookup_without_login_raises(self, stub, resolver: CredentialResolver) -> None:
        """Test that a body without login is rejected."""
        stub.add("GET", "/user", {"id": 1})

        with pytest.raises(UpstreamError, match="no login"):
            await resolver.resolve_username(ToolContext())

    @pytest.mark.asyncio
    async def test_resolve_returns_credential_set(self, stub, resolver: CredentialResolver, ctx: ToolContext) -> None:
        """Test that resolve() bundles header and username."""
        creds = await resolver.resolve(ctx)

        assert creds.acting_username == "octocat"
        assert creds.authorization_header == "token cfg-token"
