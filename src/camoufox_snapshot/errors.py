"""
Exception types raised by the snapshot and wait pipeline.
"""

from __future__ import annotations


class SnapshotServerError(Exception):
    """Base class for errors raised by this package."""


class InvalidPolicyError(SnapshotServerError, ValueError):
    """A filter policy contains an empty or whitespace-only role."""

    def __init__(self, field_name: str, entry: str) -> None:
        self.field_name = field_name
        self.entry = entry
        super().__init__(f"{field_name} contains an empty role entry: {entry!r}")


class NoActivePageError(SnapshotServerError):
    """The browser session has no page to act on."""

    def __init__(self, message: str = "No active page. Launch browser first.") -> None:
        super().__init__(message)


class WaitTimeoutError(SnapshotServerError, TimeoutError):
    """The sought text did not appear before the deadline."""

    def __init__(self, text: str, elapsed_ms: float, timeout_ms: int) -> None:
        self.text = text
        self.elapsed_ms = elapsed_ms
        self.timeout_ms = timeout_ms
        super().__init__(
            f'Timed out after {elapsed_ms:.0f}ms waiting for text "{text}" '
            f"(timeout {timeout_ms}ms)"
        )


class SnapshotCaptureError(SnapshotServerError):
    """The browser returned no accessibility tree for the page."""
