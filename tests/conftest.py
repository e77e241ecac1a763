"""
Shared test fixtures for Camoufox Snapshot MCP Server tests.
"""

from __future__ import annotations

import os
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

# Set test environment variables before importing modules
os.environ["CAMOUFOX_LOG_LEVEL"] = "WARNING"
os.environ["CAMOUFOX_LOG_FORMAT"] = "console"
os.environ["CAMOUFOX_HEADLESS"] = "true"

from camoufox_snapshot.config import ServerConfig, reset_config
from camoufox_snapshot.metrics import reset_metrics
from camoufox_snapshot.session import reset_session


class FakeMCP:
    """Stand-in for FastMCP that records registered tool functions."""

    def __init__(self) -> None:
        self.tools: dict[str, Callable[..., Any]] = {}

    def tool(self) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
            self.tools[fn.__name__] = fn
            return fn

        return decorator


RAW_AX_TREE = {
    "role": "WebArea",
    "name": "Test Page",
    "children": [
        {"role": "heading", "name": "Settings", "level": 1},
        {"role": "none", "name": ""},
        {
            "role": "combobox",
            "name": "Country",
            "expanded": False,
            "haspopup": "listbox",
            "children": [
                {"role": "option", "name": "Canada", "selected": True},
                {"role": "option", "name": "Mexico"},
            ],
        },
        {"role": "button", "name": "Save", "focused": True},
    ],
}


@pytest.fixture
def config() -> ServerConfig:
    """Get a fresh configuration for each test."""
    reset_config()
    return ServerConfig.from_env()


@pytest.fixture
def raw_tree() -> dict[str, Any]:
    """A Playwright-style accessibility snapshot dict."""
    return RAW_AX_TREE


@pytest.fixture
def mock_page() -> MagicMock:
    """Playwright page mock with an accessibility tree and body text."""
    page = MagicMock()
    page.url = "https://example.com/settings"
    page.accessibility = MagicMock()
    page.accessibility.snapshot = AsyncMock(return_value=RAW_AX_TREE)
    page.evaluate = AsyncMock(return_value="Settings\nCountry\nSave")
    page.goto = AsyncMock()
    page.set_viewport_size = AsyncMock()
    return page


@pytest.fixture
def fake_mcp() -> FakeMCP:
    """Provide a recording MCP stand-in."""
    return FakeMCP()


@pytest.fixture(autouse=True)
def reset_all():
    """Reset all global state around each test."""
    reset_config()
    reset_metrics()
    reset_session()
    yield
    reset_config()
    reset_metrics()
    reset_session()
