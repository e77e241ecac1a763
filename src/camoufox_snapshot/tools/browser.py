"""
Browser management tools for Camoufox Snapshot MCP Server.

Tools: launch_browser, close_browser, browser_status
"""

import json
from typing import TYPE_CHECKING

from camoufox_snapshot.instrumentation import instrumented_tool
from camoufox_snapshot.metrics import get_metrics
from camoufox_snapshot.session import get_session

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP


def register(mcp: "FastMCP") -> None:
    """Register browser management tools with the MCP server."""

    @mcp.tool()
    @instrumented_tool()
    async def launch_browser(
        headless: bool | None = None,
        locale: str | None = None,
    ) -> str:
        """
        Launch a Camoufox browser with a single page.

        Args:
            headless: Run browser in headless mode (default from config)
            locale: Browser locale (e.g., "en-US")

        Returns:
            Status message about browser launch
        """
        session = get_session()
        return await session.launch(headless=headless, locale=locale)

    @mcp.tool()
    @instrumented_tool()
    async def close_browser() -> str:
        """
        Close the browser and clean up all resources.

        Returns:
            Confirmation message
        """
        session = get_session()
        return await session.close()

    @mcp.tool()
    @instrumented_tool()
    async def browser_status() -> str:
        """
        Report browser state and snapshot/wait statistics.

        Returns:
            JSON object with session info and server metrics
        """
        session = get_session()
        return json.dumps(
            {
                "session": session.get_info().to_dict(),
                "metrics": get_metrics().get_summary(),
            },
            indent=2,
        )
