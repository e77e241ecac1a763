"""
Input validation for Camoufox Snapshot MCP Server.

Provides Pydantic-based validators for tool inputs.
"""

from __future__ import annotations

from typing import Any, Callable
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator

from camoufox_snapshot.models import FilterPolicy, WaitSpec

MAX_TIMEOUT_MS = 300000


class UrlInput(BaseModel):
    """Validates URL inputs."""

    url: str

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v:
            raise ValueError("URL cannot be empty")

        if v == "about:blank":
            return v

        parsed = urlparse(v)

        if not parsed.scheme:
            raise ValueError(f"URL must have a scheme (http/https): {v}")

        if parsed.scheme not in ("http", "https", "file"):
            raise ValueError(f"Invalid URL scheme '{parsed.scheme}'. Allowed: http, https, file")

        if parsed.scheme in ("http", "https") and not parsed.netloc:
            raise ValueError(f"URL must have a domain: {v}")

        return v


class SnapshotFilterInput(BaseModel):
    """Role filter accepted by the take_snapshot tool."""

    ignore_roles: list[str] | None = Field(
        default=None,
        description="Roles to remove from the snapshot, together with their subtrees",
    )
    preserve_roles: list[str] | None = Field(
        default=None,
        description="Roles to always keep, even if present in ignore_roles",
    )

    @field_validator("ignore_roles", "preserve_roles")
    @classmethod
    def validate_roles(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        for role in v:
            if not role.strip():
                raise ValueError("Role entries cannot be empty")
        return v

    def to_policy(self) -> FilterPolicy:
        """Convert to the FilterPolicy used by the snapshot pipeline."""
        return FilterPolicy.from_lists(self.ignore_roles, self.preserve_roles)


class WaitForTextInput(BaseModel):
    """Validates wait_for inputs."""

    text: str = Field(min_length=1, max_length=10000)
    timeout: int = Field(ge=0, le=MAX_TIMEOUT_MS)

    def to_spec(self) -> WaitSpec:
        """Convert to a WaitSpec."""
        return WaitSpec(text=self.text, timeout_ms=self.timeout)


class FilePathInput(BaseModel):
    """Validates snapshot output paths."""

    path: str = Field(min_length=1, max_length=4096)

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        if "\x00" in v:
            raise ValueError("File path cannot contain NUL bytes")
        if v.endswith(("/", "\\")):
            raise ValueError(f"File path must name a file, not a directory: {v}")
        return v


# Validation helper functions


def validate_url(url: str) -> str:
    """Validate a URL and return it if valid."""
    return UrlInput(url=url).url


def validate_wait(text: str, timeout: int) -> WaitSpec:
    """Validate wait_for arguments and return a WaitSpec."""
    return WaitForTextInput(text=text, timeout=timeout).to_spec()


def validate_file_path(path: str) -> str:
    """Validate a snapshot output path and return it if valid."""
    return FilePathInput(path=path).path


def safe_validate(validator_func: Callable[..., Any], *args: Any, **kwargs: Any) -> tuple[bool, Any]:
    """
    Safely validate input, returning (success, result_or_error).

    Usage:
        valid, result = safe_validate(validate_url, user_input)
        if not valid:
            return f"Invalid input: {result}"
    """
    try:
        result = validator_func(*args, **kwargs)
        return True, result
    except ValueError as e:
        return False, str(e)
