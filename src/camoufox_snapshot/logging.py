"""
Structured logging for Camoufox Snapshot MCP Server.

Uses structlog for JSON-formatted logs. Everything is written to stderr
because stdout carries the MCP stdio transport.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import Any, Callable

import structlog
from structlog.types import Processor

from camoufox_snapshot.config import get_config

# Request-scoped fields (tool name, call id) merged into every log entry
tool_context: ContextVar[dict[str, Any]] = ContextVar("tool_context", default={})

SENSITIVE_KEYS = frozenset({"password", "token", "secret", "api_key", "auth", "cookie"})
MAX_STRING_LENGTH = 1000
MAX_LIST_ITEMS = 20
MAX_DEPTH = 5


def _walk(obj: Any, visit: Callable[[Any], Any], depth: int = 0) -> Any:
    """Apply ``visit`` to every leaf of nested dicts/lists up to MAX_DEPTH."""
    if depth > MAX_DEPTH:
        return obj
    if isinstance(obj, dict):
        return {k: _walk(v, visit, depth + 1) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_walk(item, visit, depth + 1) for item in obj]
    return visit(obj)


def add_tool_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add tool context from contextvars to log entries."""
    ctx = tool_context.get()
    if ctx:
        event_dict.update(ctx)
    return event_dict


def sanitize_sensitive_data(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Redact values whose key looks like a credential."""

    def redact(obj: Any, depth: int = 0) -> Any:
        if depth > MAX_DEPTH or not isinstance(obj, dict):
            return obj
        return {
            k: "***REDACTED***"
            if any(s in k.lower() for s in SENSITIVE_KEYS)
            else redact(v, depth + 1)
            for k, v in obj.items()
        }

    return redact(event_dict)


def truncate_large_values(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Truncate long strings and lists; snapshot text can be very large."""

    def shorten(value: Any) -> Any:
        if isinstance(value, str) and len(value) > MAX_STRING_LENGTH:
            dropped = len(value) - MAX_STRING_LENGTH
            return value[:MAX_STRING_LENGTH] + f"... [truncated {dropped} chars]"
        return value

    result = {}
    for key, value in event_dict.items():
        if isinstance(value, (list, tuple)) and len(value) > MAX_LIST_ITEMS:
            extra = len(value) - MAX_LIST_ITEMS
            value = list(value[:MAX_LIST_ITEMS]) + [f"... [{extra} more items]"]
        result[key] = _walk(value, shorten)
    return result


def configure_logging() -> None:
    """Configure structlog for the MCP server."""
    config = get_config()

    processors: list[Processor] = [
        add_tool_context,
        structlog.processors.add_log_level,
        sanitize_sensitive_data,
        truncate_large_values,
    ]

    if config.logging.include_timestamps:
        processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))

    processors.append(structlog.processors.StackInfoRenderer())

    if config.logging.format == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.RichTracebackFormatter(),
        )
    processors.append(renderer)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, config.logging.level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    # Third-party libraries (playwright, mcp) log through stdlib
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, config.logging.level),
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a configured logger instance."""
    return structlog.get_logger(name or "camoufox_snapshot")


def bind_tool_context(**kwargs: Any) -> None:
    """Bind context variables for the current tool call."""
    ctx = tool_context.get().copy()
    ctx.update(kwargs)
    tool_context.set(ctx)


def clear_tool_context() -> None:
    """Clear tool context after a tool call completes."""
    tool_context.set({})


_initialized = False


def ensure_logging_configured() -> None:
    """Ensure logging is configured (idempotent)."""
    global _initialized
    if not _initialized:
        configure_logging()
        _initialized = True
