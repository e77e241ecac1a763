"""
Snapshot tools for Camoufox Snapshot MCP Server.

Tools: take_snapshot, wait_for
"""

# Tool annotations are evaluated at definition time; FastMCP builds the
# argument schema from them.
from typing import TYPE_CHECKING

from camoufox_snapshot.config import get_config
from camoufox_snapshot.errors import NoActivePageError, WaitTimeoutError
from camoufox_snapshot.instrumentation import instrumented_tool
from camoufox_snapshot.models import FilterPolicy
from camoufox_snapshot.response import ToolResponse
from camoufox_snapshot.session import get_session
from camoufox_snapshot.validation import (
    SnapshotFilterInput,
    safe_validate,
    validate_file_path,
    validate_wait,
)

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP


def default_policy() -> FilterPolicy | None:
    """Policy applied when the caller passes no filter; None when unconfigured."""
    snapshot_config = get_config().snapshot
    if not snapshot_config.default_ignore_roles:
        return None
    return FilterPolicy.from_lists(
        snapshot_config.default_ignore_roles,
        snapshot_config.default_preserve_roles,
    )


def register(mcp: "FastMCP") -> None:
    """Register snapshot tools with the MCP server."""

    @mcp.tool()
    @instrumented_tool(log_outputs=False)
    async def take_snapshot(
        verbose: bool = False,
        file_path: str | None = None,
        filter: SnapshotFilterInput | None = None,
    ) -> str:
        """
        Take a text snapshot of the current page based on the accessibility tree.

        The snapshot lists page elements along with a unique identifier (uid).
        Always use the latest snapshot. Prefer taking a snapshot over taking a
        screenshot.

        Args:
            verbose: Include all information available in the full accessibility
                     tree. Default is False.
            file_path: Absolute path, or a path relative to the current working
                       directory, to save the snapshot to instead of returning it
            filter: Roles to exclude/include. ignore_roles drops matching nodes
                    with their subtrees; preserve_roles are always kept. When
                    omitted the server default applies (no filtering unless
                    configured).

        Returns:
            Snapshot text, or where it was saved
        """
        session = get_session()

        if file_path:
            valid, result = safe_validate(validate_file_path, file_path)
            if not valid:
                return f"Error: Invalid file path - {result}"

        policy = filter.to_policy() if filter is not None else default_policy()

        try:
            snapshot = await session.take_snapshot(verbose=verbose, policy=policy)
        except NoActivePageError as e:
            return f"Error: {e}"
        except Exception as e:
            return f"Error capturing snapshot: {str(e)}"

        response = ToolResponse()
        try:
            response.include_snapshot(snapshot, file_path=file_path)
        except OSError as e:
            return f"Error saving snapshot: {str(e)}"
        return response.render()

    @mcp.tool()
    @instrumented_tool(log_outputs=False)
    async def wait_for(text: str, timeout: int | None = None) -> str:
        """
        Wait for the specified text to appear on the current page.

        Returns a fresh snapshot once the text is found.

        Args:
            text: Text to appear on the page (exact, case-sensitive)
            timeout: Maximum wait time in milliseconds (default from config)

        Returns:
            Confirmation followed by the page snapshot, or a timeout message
        """
        session = get_session()

        if timeout is None:
            timeout = get_config().timeouts.wait_for_text

        valid, result = safe_validate(validate_wait, text, timeout)
        if not valid:
            return f"Error: Invalid wait parameters - {result}"

        try:
            await session.wait_for_text(result)
        except NoActivePageError as e:
            return f"Error: {e}"
        except WaitTimeoutError as e:
            return f"Error: {e}"
        except Exception as e:
            return f"Error waiting for text: {str(e)}"

        response = ToolResponse()
        response.append_line(f'Element with text "{text}" found.')

        try:
            snapshot = await session.take_snapshot(policy=default_policy())
        except Exception as e:
            response.append_line(f"Error capturing snapshot: {str(e)}")
            return response.render()

        response.include_snapshot(snapshot)
        return response.render()
