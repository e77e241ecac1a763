"""
Navigation tools for Camoufox Snapshot MCP Server.

Tools: goto
"""

import json
from typing import TYPE_CHECKING, Literal

from camoufox_snapshot.config import get_config
from camoufox_snapshot.instrumentation import instrumented_tool
from camoufox_snapshot.session import get_session
from camoufox_snapshot.validation import safe_validate, validate_url

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP


def register(mcp: "FastMCP") -> None:
    """Register navigation tools with the MCP server."""

    @mcp.tool()
    @instrumented_tool()
    async def goto(
        url: str,
        wait_until: Literal["load", "domcontentloaded", "networkidle", "commit"] = "load",
        timeout: int | None = None,
    ) -> str:
        """
        Navigate the current page to a URL.

        Args:
            url: The URL to navigate to
            wait_until: When to consider navigation complete - "load", "domcontentloaded", "networkidle", or "commit"
            timeout: Navigation timeout in milliseconds (default from config)

        Returns:
            Navigation result with final URL and status
        """
        session = get_session()

        if not session.page:
            return json.dumps({"success": False, "error": "No active page. Launch browser first."})

        valid, result = safe_validate(validate_url, url)
        if not valid:
            return json.dumps({"success": False, "error": f"Invalid URL: {result}"})

        nav_timeout = timeout or get_config().timeouts.navigation

        try:
            response = await session.page.goto(url, wait_until=wait_until, timeout=nav_timeout)
            return json.dumps({
                "success": True,
                "status": response.status if response else None,
                "url": session.page.url,
            })
        except Exception as e:
            return json.dumps({"success": False, "error": str(e)})
