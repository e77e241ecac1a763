"""
Camoufox Snapshot MCP Server - accessibility snapshots and text waits.

This package exposes filtered accessibility-tree snapshots of a Camoufox
(anti-detect Firefox) page and a polling wait for text, as MCP tools.
"""

__version__ = "0.1.0"
__all__ = [
    "create_server",
    "BrowserSession",
    "FilterPolicy",
    "SnapshotNode",
    "filter_snapshot",
    "wait_for_text",
    "get_logger",
    "ServerConfig",
]

from camoufox_snapshot.config import ServerConfig
from camoufox_snapshot.logging import get_logger
from camoufox_snapshot.models import FilterPolicy, SnapshotNode
from camoufox_snapshot.server import create_server
from camoufox_snapshot.session import BrowserSession
from camoufox_snapshot.snapshot_filter import filter_snapshot
from camoufox_snapshot.text_waiter import wait_for_text
