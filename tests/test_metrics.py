"""
Tests for metrics collection.
"""

from camoufox_snapshot.metrics import MetricsCollector, get_metrics, reset_metrics


class TestToolCalls:
    """Tests for tool call metrics."""

    def test_record_success(self):
        """Test recording a successful tool call."""
        collector = MetricsCollector()

        collector.record_tool_call("take_snapshot", 100.0, success=True)

        metrics = collector.get_tool_metrics("take_snapshot")
        assert metrics["call_count"] == 1
        assert metrics["error_count"] == 0
        assert metrics["avg_duration_ms"] == 100.0

    def test_record_failure(self):
        """Test recording a failed tool call."""
        collector = MetricsCollector()

        collector.record_tool_call("wait_for", 50.0, success=False, error="boom")

        metrics = collector.get_tool_metrics("wait_for")
        assert metrics["error_count"] == 1
        assert metrics["last_error"] == "boom"
        assert collector.get_summary()["server"]["total_errors"] == 1

    def test_unknown_tool(self):
        """Unknown tools have no metrics."""
        assert MetricsCollector().get_tool_metrics("nope") is None

    def test_tool_metrics_fields(self):
        """Per-tool metrics report counts, average duration and the last error."""
        collector = MetricsCollector()
        collector.record_tool_call("goto", 10.0, success=True)
        collector.record_tool_call("goto", 30.0, success=True)

        metrics = collector.get_tool_metrics("goto")
        assert set(metrics) == {"call_count", "error_count", "avg_duration_ms", "last_error", "last_call_time"}
        assert metrics["avg_duration_ms"] == 20.0


class TestSnapshotAndWaitMetrics:
    """Tests for snapshot and wait counters."""

    def test_record_snapshot(self):
        """Node counts accumulate."""
        collector = MetricsCollector()
        collector.record_snapshot(10, 4)
        collector.record_snapshot(6, 6)

        assert collector.get_summary()["snapshots"] == {
            "count": 2,
            "nodes_captured": 16,
            "nodes_retained": 10,
        }

    def test_record_wait(self):
        """Wait outcomes are counted separately."""
        collector = MetricsCollector()
        collector.record_wait("found")
        collector.record_wait("found")
        collector.record_wait("timeout")

        assert collector.get_summary()["waits"] == {"found": 2, "timeout": 1, "cancelled": 0}


class TestGlobalMetrics:
    """Tests for the global collector."""

    def test_singleton(self):
        """get_metrics returns the same collector."""
        assert get_metrics() is get_metrics()

    def test_reset(self):
        """reset_metrics clears counters."""
        get_metrics().record_wait("cancelled")
        get_metrics().record_browser_launch()
        reset_metrics()

        summary = get_metrics().get_summary()
        assert summary["waits"]["cancelled"] == 0
        assert summary["server"]["browser_launches"] == 0
