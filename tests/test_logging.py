"""
Tests for structured logging processors and context.
"""

from __future__ import annotations

from camoufox_snapshot.logging import (
    MAX_LIST_ITEMS,
    MAX_STRING_LENGTH,
    add_tool_context,
    bind_tool_context,
    clear_tool_context,
    ensure_logging_configured,
    get_logger,
    sanitize_sensitive_data,
    tool_context,
    truncate_large_values,
)


class TestToolContext:
    """Tests for tool context management."""

    def setup_method(self):
        clear_tool_context()

    def teardown_method(self):
        clear_tool_context()

    def test_bind_accumulates(self):
        """Multiple bind calls accumulate values."""
        bind_tool_context(tool_name="wait_for")
        bind_tool_context(call_id="abc123")
        assert tool_context.get() == {"tool_name": "wait_for", "call_id": "abc123"}

    def test_clear_removes_all(self):
        """Clear removes all context."""
        bind_tool_context(a="1")
        clear_tool_context()
        assert tool_context.get() == {}

    def test_processor_adds_context(self):
        """Bound context is merged into events."""
        bind_tool_context(tool_name="take_snapshot")
        event = add_tool_context(None, "info", {"event": "x"})
        assert event == {"event": "x", "tool_name": "take_snapshot"}


class TestSanitize:
    """Tests for sensitive data redaction."""

    def test_redacts_nested_keys(self):
        """Credential-like keys are redacted at any depth."""
        event = {
            "event": "tool_call_start",
            "inputs": {"proxy_password": "hunter2", "text": "Save"},
        }
        result = sanitize_sensitive_data(None, "info", event)
        assert result["inputs"]["proxy_password"] == "***REDACTED***"
        assert result["inputs"]["text"] == "Save"


class TestTruncate:
    """Tests for large value truncation."""

    def test_long_string_truncated(self):
        """Long strings are cut with a marker."""
        result = truncate_large_values(None, "info", {"snapshot": "x" * (MAX_STRING_LENGTH + 5)})
        assert result["snapshot"].startswith("x" * MAX_STRING_LENGTH)
        assert result["snapshot"].endswith("[truncated 5 chars]")

    def test_long_list_truncated(self):
        """Long lists keep the first items plus a marker."""
        result = truncate_large_values(None, "info", {"roles": list(range(MAX_LIST_ITEMS + 3))})
        assert len(result["roles"]) == MAX_LIST_ITEMS + 1
        assert result["roles"][-1] == "... [3 more items]"

    def test_short_values_untouched(self):
        """Small values pass through."""
        event = {"event": "snapshot_filtered", "nodes_retained": 4}
        assert truncate_large_values(None, "info", event) == event


class TestLogger:
    """Tests for logger setup."""

    def test_configure_is_idempotent(self):
        """Configuring twice does not fail."""
        ensure_logging_configured()
        ensure_logging_configured()

    def test_get_logger_logs(self):
        """Loggers accept structured events."""
        ensure_logging_configured()
        get_logger("test").warning("test_event", detail="value")
