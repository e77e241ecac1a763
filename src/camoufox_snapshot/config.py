"""
Configuration management for Camoufox Snapshot MCP Server.

Loads settings from environment variables with sensible defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Literal


def _split_roles(raw: str) -> tuple[str, ...]:
    """Parse a comma separated role list from the environment."""
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass
class TimeoutConfig:
    """Timeout settings in milliseconds."""

    navigation: int = 30000
    wait_for_text: int = 30000
    browser_launch: int = 60000
    page_close: int = 5000


@dataclass
class WaitConfig:
    """Text polling settings."""

    poll_interval_ms: int = 100


@dataclass
class SnapshotConfig:
    """Snapshot pipeline defaults."""

    # Applied by the tool layer when the caller passes no filter.
    # Empty means snapshots are returned unfiltered.
    default_ignore_roles: tuple[str, ...] = ()
    default_preserve_roles: tuple[str, ...] = ()


@dataclass
class LogConfig:
    """Logging settings."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "console"] = "json"
    include_timestamps: bool = True


@dataclass
class BrowserConfig:
    """Browser launch defaults."""

    default_headless: bool = True
    default_viewport_width: int = 1920
    default_viewport_height: int = 1080


@dataclass
class ServerConfig:
    """Complete server configuration."""

    timeouts: TimeoutConfig = field(default_factory=TimeoutConfig)
    wait: WaitConfig = field(default_factory=WaitConfig)
    snapshot: SnapshotConfig = field(default_factory=SnapshotConfig)
    logging: LogConfig = field(default_factory=LogConfig)
    browser: BrowserConfig = field(default_factory=BrowserConfig)

    @classmethod
    def from_env(cls) -> ServerConfig:
        """Load configuration from environment variables."""
        return cls(
            timeouts=TimeoutConfig(
                navigation=int(os.getenv("CAMOUFOX_TIMEOUT_NAVIGATION", "30000")),
                wait_for_text=int(os.getenv("CAMOUFOX_TIMEOUT_WAIT_TEXT", "30000")),
                browser_launch=int(os.getenv("CAMOUFOX_TIMEOUT_LAUNCH", "60000")),
                page_close=int(os.getenv("CAMOUFOX_TIMEOUT_PAGE_CLOSE", "5000")),
            ),
            wait=WaitConfig(
                poll_interval_ms=int(os.getenv("CAMOUFOX_WAIT_POLL_INTERVAL", "100")),
            ),
            snapshot=SnapshotConfig(
                default_ignore_roles=_split_roles(
                    os.getenv("CAMOUFOX_SNAPSHOT_IGNORE_ROLES", "")
                ),
                default_preserve_roles=_split_roles(
                    os.getenv("CAMOUFOX_SNAPSHOT_PRESERVE_ROLES", "")
                ),
            ),
            logging=LogConfig(
                level=os.getenv("CAMOUFOX_LOG_LEVEL", "INFO").upper(),  # type: ignore
                format=os.getenv("CAMOUFOX_LOG_FORMAT", "json").lower(),  # type: ignore
                include_timestamps=os.getenv("CAMOUFOX_LOG_TIMESTAMPS", "true").lower() == "true",
            ),
            browser=BrowserConfig(
                default_headless=os.getenv("CAMOUFOX_HEADLESS", "true").lower() == "true",
                default_viewport_width=int(os.getenv("CAMOUFOX_VIEWPORT_WIDTH", "1920")),
                default_viewport_height=int(os.getenv("CAMOUFOX_VIEWPORT_HEIGHT", "1080")),
            ),
        )


# Global configuration instance - initialized once at startup
_config: ServerConfig | None = None


def get_config() -> ServerConfig:
    """Get the global server configuration."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config


def reset_config() -> None:
    """Reset configuration (useful for testing)."""
    global _config
    _config = None
