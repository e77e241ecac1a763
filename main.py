"""
Camoufox Snapshot MCP Server - accessibility snapshots and text waits for Claude.

Run with: python main.py
"""

from camoufox_snapshot.server import run_server


def main():
    """Run the Camoufox Snapshot MCP server."""
    run_server()


if __name__ == "__main__":
    main()
