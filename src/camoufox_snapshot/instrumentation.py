"""
Tool instrumentation for Camoufox Snapshot MCP Server.

Provides a decorator that logs, times, and records metrics for each tool call.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import time
import traceback
import uuid
from typing import Any, Callable, ParamSpec, TypeVar

from camoufox_snapshot.logging import bind_tool_context, clear_tool_context, get_logger
from camoufox_snapshot.metrics import get_metrics

P = ParamSpec("P")
T = TypeVar("T")

PREVIEW_LENGTH = 500
INPUT_PREVIEW_LENGTH = 200


def generate_call_id() -> str:
    """Generate a unique ID for a tool call."""
    return uuid.uuid4().hex[:12]


class _ToolCall:
    """Bookkeeping for one instrumented invocation."""

    def __init__(self, tool_name: str, log_outputs: bool) -> None:
        self.tool_name = tool_name
        self.log_outputs = log_outputs
        self.logger = get_logger(tool_name)
        self.metrics = get_metrics()
        self.start_time = time.perf_counter()
        bind_tool_context(tool_name=tool_name, call_id=generate_call_id())

    @property
    def duration_ms(self) -> float:
        return (time.perf_counter() - self.start_time) * 1000

    def started(self, inputs: dict[str, Any] | None) -> None:
        self.logger.info("tool_call_start", inputs=inputs)

    def succeeded(self, result: Any) -> None:
        duration_ms = self.duration_ms
        preview = None
        if self.log_outputs and result is not None:
            preview = str(result)[:PREVIEW_LENGTH]
        self.logger.info(
            "tool_call_success",
            duration_ms=round(duration_ms, 2),
            output_preview=preview,
        )
        self.metrics.record_tool_call(self.tool_name, duration_ms, success=True)

    def failed(self, error: BaseException) -> None:
        duration_ms = self.duration_ms
        self.logger.error(
            "tool_call_error",
            duration_ms=round(duration_ms, 2),
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback.format_exc(),
        )
        self.metrics.record_tool_call(
            self.tool_name, duration_ms, success=False, error=str(error)
        )

    def cancelled(self) -> None:
        duration_ms = self.duration_ms
        self.logger.info("tool_call_cancelled", duration_ms=round(duration_ms, 2))
        self.metrics.record_tool_call(
            self.tool_name, duration_ms, success=False, error="cancelled"
        )


def _sanitize_inputs(kwargs: dict[str, Any], sensitive: set[str]) -> dict[str, Any]:
    sanitized = {}
    for k, v in kwargs.items():
        if k in sensitive:
            sanitized[k] = "***REDACTED***"
        elif isinstance(v, str) and len(v) > INPUT_PREVIEW_LENGTH:
            sanitized[k] = v[:INPUT_PREVIEW_LENGTH] + "..."
        else:
            sanitized[k] = v
    return sanitized


def instrumented_tool(
    name: str | None = None,
    log_inputs: bool = True,
    log_outputs: bool = True,
    sensitive_params: set[str] | None = None,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    Decorator that adds instrumentation to a tool function.

    Each call gets a call id bound into the log context, entry/exit logs with
    timing, and a metrics record. Exceptions are logged and re-raised;
    cancellation is logged separately and re-raised.

    Args:
        name: Tool name (defaults to function name)
        log_inputs: Whether to log input parameters
        log_outputs: Whether to log output (snapshots may be large)
        sensitive_params: Parameter names to redact from logs
    """
    sensitive = sensitive_params or {"password", "token", "secret"}

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        tool_name = name or func.__name__

        @functools.wraps(func)
        async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            call = _ToolCall(tool_name, log_outputs)
            call.started(_sanitize_inputs(kwargs, sensitive) if log_inputs else None)
            try:
                result = await func(*args, **kwargs)
            except asyncio.CancelledError:
                call.cancelled()
                raise
            except Exception as e:
                call.failed(e)
                raise
            else:
                call.succeeded(result)
                return result
            finally:
                clear_tool_context()

        @functools.wraps(func)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            call = _ToolCall(tool_name, log_outputs)
            call.started(_sanitize_inputs(kwargs, sensitive) if log_inputs else None)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                call.failed(e)
                raise
            else:
                call.succeeded(result)
                return result
            finally:
                clear_tool_context()

        if inspect.iscoroutinefunction(func):
            return async_wrapper  # type: ignore
        return sync_wrapper  # type: ignore

    return decorator
