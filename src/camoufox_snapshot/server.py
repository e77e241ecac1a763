"""
FastMCP server setup for Camoufox Snapshot MCP Server.

Creates and configures the MCP server with all tools registered.
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from camoufox_snapshot.logging import ensure_logging_configured, get_logger

logger = get_logger(__name__)

SERVER_NAME = "camoufox-snapshot"


def create_server() -> FastMCP:
    """
    Create and configure the MCP server.

    Returns:
        Configured FastMCP server instance with all tools registered
    """
    ensure_logging_configured()
    logger.info("server_init", name=SERVER_NAME)

    mcp = FastMCP(SERVER_NAME)

    from camoufox_snapshot.tools.registration import register_all_tools
    register_all_tools(mcp)

    logger.info("server_ready", name=SERVER_NAME)
    return mcp


def run_server() -> None:
    """Run the MCP server with stdio transport."""
    server = create_server()
    server.run(transport="stdio")
