"""
Tool modules for Camoufox Snapshot MCP Server.

Each module contains related tools grouped by functionality:
- browser: Browser lifecycle and status
- navigation: URL navigation
- snapshot: Accessibility snapshots and waiting for text
"""

from camoufox_snapshot.tools.registration import register_all_tools

__all__ = ["register_all_tools"]
