"""
Tool registration for Camoufox Snapshot MCP Server.

Registers all tools with the FastMCP server instance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from camoufox_snapshot.logging import get_logger

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

logger = get_logger(__name__)

TOOL_MODULES = ("browser", "navigation", "snapshot")


def register_all_tools(mcp: FastMCP) -> None:
    """
    Register all tools with the MCP server.

    Args:
        mcp: FastMCP server instance
    """
    from camoufox_snapshot.tools import browser, navigation, snapshot

    # Browser lifecycle and status
    browser.register(mcp)
    logger.debug("tools_registered", module="browser")

    navigation.register(mcp)
    logger.debug("tools_registered", module="navigation")

    # take_snapshot / wait_for
    snapshot.register(mcp)
    logger.debug("tools_registered", module="snapshot")

    logger.info("all_tools_registered", total_modules=len(TOOL_MODULES))
