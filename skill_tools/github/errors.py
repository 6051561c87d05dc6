"""Errors raised by the GitHub tools.

Transport failures (DNS, TLS, timeouts) are not wrapped: they surface as the
``httpx.TransportError`` subclasses httpx raises.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

import httpx

from .._base import ToolError


@dataclass(frozen=True)
class ParsedError:
    """GitHub sent a JSON error body with a message."""

    message: str
    kind: Literal["parsed"] = "parsed"

    def describe(self) -> str:
        return self.message


@dataclass(frozen=True)
class StatusOnlyError:
    """The error body was missing, not JSON, or had no message."""

    code: int
    kind: Literal["statusOnly"] = "statusOnly"

    def describe(self) -> str:
        return str(self.code)


ErrorDetail = Union[ParsedError, StatusOnlyError]


def parse_error_body(response: httpx.Response) -> ErrorDetail:
    """Extract a human-readable reason from a failed GitHub response.

    Falls back to the bare status code when the body can't be used.
    """
    try:
        data = response.json()
    except ValueError:
        return StatusOnlyError(code=response.status_code)

    message = data.get("message") if isinstance(data, dict) else None
    if isinstance(message, str) and message.strip():
        return ParsedError(message=message.strip())
    return StatusOnlyError(code=response.status_code)


class GitHubSkillError(ToolError):
    """Base error for every failure the GitHub tools report."""


class ValidationError(GitHubSkillError):
    """A required parameter is missing, empty or of the wrong type."""

    def __init__(self, field: str, message: str | None = None) -> None:
        super().__init__(message or f"{field} is required")
        self.field = field


class UpstreamError(GitHubSkillError):
    """GitHub answered with a non-success status or an unusable body."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        detail: ErrorDetail | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.status_code = status_code
        self.detail = detail

    @classmethod
    def from_response(cls, prefix: str, response: httpx.Response) -> UpstreamError:
        """Build the error for a non-success response."""
        detail = parse_error_body(response)
        return cls(
            f"{prefix}: {detail.describe()}",
            status_code=response.status_code,
            detail=detail,
        )
