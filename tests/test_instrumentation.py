"""
Tests for tool instrumentation.
"""

from __future__ import annotations

import asyncio

import pytest

from camoufox_snapshot.instrumentation import generate_call_id, instrumented_tool
from camoufox_snapshot.logging import tool_context
from camoufox_snapshot.metrics import get_metrics


class TestGenerateCallId:
    """Tests for call ID generation."""

    def test_format(self):
        """Call IDs are 12 hex characters."""
        call_id = generate_call_id()
        assert len(call_id) == 12
        int(call_id, 16)

    def test_unique_ids(self):
        """Each call should generate unique ID."""
        assert len({generate_call_id() for _ in range(500)}) == 500


class TestInstrumentedTool:
    """Tests for the @instrumented_tool decorator."""

    def test_preserves_metadata(self):
        """Name and docstring survive decoration (FastMCP reads them)."""

        @instrumented_tool()
        async def take_snapshot(verbose: bool = False) -> str:
            """Snapshot docs."""
            return "ok"

        assert take_snapshot.__name__ == "take_snapshot"
        assert take_snapshot.__doc__ == "Snapshot docs."

    @pytest.mark.asyncio
    async def test_records_success(self):
        """Successful async calls are recorded."""

        @instrumented_tool()
        async def tool(value: str) -> str:
            return f"processed: {value}"

        assert await tool(value="x") == "processed: x"
        assert get_metrics().get_tool_metrics("tool")["call_count"] == 1

    @pytest.mark.asyncio
    async def test_records_and_reraises_errors(self):
        """Exceptions are recorded then re-raised."""

        @instrumented_tool(name="failing")
        async def tool() -> str:
            raise RuntimeError("nope")

        with pytest.raises(RuntimeError, match="nope"):
            await tool()

        metrics = get_metrics().get_tool_metrics("failing")
        assert metrics["error_count"] == 1
        assert metrics["last_error"] == "nope"

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        """Cancelled calls re-raise CancelledError and are recorded."""

        @instrumented_tool(name="slow")
        async def tool() -> str:
            await asyncio.sleep(10)
            return "done"

        task = asyncio.create_task(tool())
        await asyncio.sleep(0.01)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        assert get_metrics().get_tool_metrics("slow")["last_error"] == "cancelled"

    @pytest.mark.asyncio
    async def test_context_cleared(self):
        """Tool context is cleared after the call."""

        @instrumented_tool()
        async def tool() -> dict:
            return dict(tool_context.get())

        inner = await tool()
        assert inner["tool_name"] == "tool"
        assert "call_id" in inner
        assert tool_context.get() == {}

    def test_sync_function(self):
        """Sync functions are wrapped too."""

        @instrumented_tool()
        def sync_tool(value: int) -> int:
            return value * 2

        assert sync_tool(value=21) == 42
        assert get_metrics().get_tool_metrics("sync_tool")["call_count"] == 1
