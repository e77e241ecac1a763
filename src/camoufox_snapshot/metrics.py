"""
Metrics collection for Camoufox Snapshot MCP Server.

In-memory counters for tool calls, snapshots, and text waits.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Literal

WaitOutcome = Literal["found", "timeout", "cancelled"]


@dataclass
class ToolMetrics:
    """Metrics for a single tool."""

    call_count: int = 0
    error_count: int = 0
    total_duration_ms: float = 0.0
    last_error: str | None = None
    last_call_time: datetime | None = None

    @property
    def avg_duration_ms(self) -> float:
        """Average duration in milliseconds."""
        return self.total_duration_ms / self.call_count if self.call_count > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "call_count": self.call_count,
            "error_count": self.error_count,
            "avg_duration_ms": round(self.avg_duration_ms, 2),
            "last_error": self.last_error,
            "last_call_time": self.last_call_time.isoformat() if self.last_call_time else None,
        }


class MetricsCollector:
    """Collects and aggregates metrics for the MCP server."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._tool_metrics: dict[str, ToolMetrics] = defaultdict(ToolMetrics)
        self._start_time = datetime.now(timezone.utc)
        self._total_requests = 0
        self._total_errors = 0

        self._snapshots = 0
        self._nodes_captured = 0
        self._nodes_retained = 0

        self._waits: dict[str, int] = defaultdict(int)
        self._browser_launches = 0

    def record_tool_call(
        self,
        tool_name: str,
        duration_ms: float,
        success: bool,
        error: str | None = None,
    ) -> None:
        """Record a tool call with its result."""
        with self._lock:
            self._total_requests += 1
            metrics = self._tool_metrics[tool_name]
            metrics.call_count += 1
            metrics.total_duration_ms += duration_ms
            metrics.last_call_time = datetime.now(timezone.utc)

            if not success:
                self._total_errors += 1
                metrics.error_count += 1
                metrics.last_error = error

    def record_snapshot(self, nodes_captured: int, nodes_retained: int) -> None:
        """Record a built snapshot and how many nodes survived filtering."""
        with self._lock:
            self._snapshots += 1
            self._nodes_captured += nodes_captured
            self._nodes_retained += nodes_retained

    def record_wait(self, outcome: WaitOutcome) -> None:
        """Record the outcome of a wait-for-text request."""
        with self._lock:
            self._waits[outcome] += 1

    def record_browser_launch(self) -> None:
        """Record a browser launch."""
        with self._lock:
            self._browser_launches += 1

    @property
    def uptime_seconds(self) -> float:
        """Server uptime in seconds."""
        return (datetime.now(timezone.utc) - self._start_time).total_seconds()

    def get_summary(self) -> dict[str, Any]:
        """Get a summary of all metrics."""
        with self._lock:
            return {
                "server": {
                    "uptime_seconds": round(self.uptime_seconds, 2),
                    "total_requests": self._total_requests,
                    "total_errors": self._total_errors,
                    "browser_launches": self._browser_launches,
                },
                "snapshots": {
                    "count": self._snapshots,
                    "nodes_captured": self._nodes_captured,
                    "nodes_retained": self._nodes_retained,
                },
                "waits": {
                    "found": self._waits["found"],
                    "timeout": self._waits["timeout"],
                    "cancelled": self._waits["cancelled"],
                },
                "tools": {
                    name: metrics.to_dict()
                    for name, metrics in sorted(self._tool_metrics.items())
                },
            }

    def get_tool_metrics(self, tool_name: str) -> dict[str, Any] | None:
        """Get metrics for a specific tool."""
        with self._lock:
            if tool_name in self._tool_metrics:
                return self._tool_metrics[tool_name].to_dict()
            return None

    def reset(self) -> None:
        """Reset all metrics."""
        with self._lock:
            self._tool_metrics.clear()
            self._start_time = datetime.now(timezone.utc)
            self._total_requests = 0
            self._total_errors = 0
            self._snapshots = 0
            self._nodes_captured = 0
            self._nodes_retained = 0
            self._waits.clear()
            self._browser_launches = 0


# Global metrics collector instance
_metrics: MetricsCollector | None = None


def get_metrics() -> MetricsCollector:
    """Get the global metrics collector."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def reset_metrics() -> None:
    """Reset the global metrics collector."""
    global _metrics
    if _metrics:
        _metrics.reset()
