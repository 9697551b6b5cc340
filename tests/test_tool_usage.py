"""Tests for tool usage tracking models."""

import pytest

from raid_agent.models.tool import ToolResult
from raid_agent.models.tool_usage import (
    ToolCallEvent,
    ToolCallSummary,
    ToolUsageStats,
)


def _result(name, success=True, ms=5):
	return ToolResult(tool_name=name,
	                  command=name,
	                  success=success,
	                  error=None if success else "boom",
	                  execution_time_ms=ms)


class TestToolCallEvent:
	"""Tests for ToolCallEvent model."""

	def test_create_with_defaults(self) -> None:
		event = ToolCallEvent(sequence=1, tool_name="df")
		assert event.status == "success"
		assert event.command == ""
		assert event.completed_at is None
		assert event.error_message is None


class TestToolUsageStats:
	"""Tests for ToolUsageStats aggregation."""

	def test_empty(self) -> None:
		stats = ToolUsageStats()
		assert stats.total_calls == 0
		assert stats.success_rate == 100.0
		assert stats.calls_by_tool() == {}
		assert stats.top_tools() == []

	def test_record_success_and_failure(self) -> None:
		stats = ToolUsageStats()
		first = stats.record(_result("df", ms=12))
		second = stats.record(_result("free", success=False))

		assert first.sequence == 1
		assert first.duration_ms == 12.0
		assert first.completed_at is not None
		assert second.sequence == 2
		assert second.status == "failure"
		assert second.error_message == "boom"
		assert stats.successful_calls == 1
		assert stats.failed_calls == 1
		assert stats.success_rate == pytest.approx(50.0)

	def test_calls_by_tool_and_top_tools(self) -> None:
		stats = ToolUsageStats()
		for name, ok in [("df", True), ("ps_aux", True), ("df", False),
		                 ("df", True)]:
			stats.record(_result(name, success=ok))

		by_tool = stats.calls_by_tool()
		assert by_tool["df"] == ToolCallSummary(tool_name="df",
		                                        total=3,
		                                        successful=2,
		                                        failed=1)
		assert [t.tool_name for t in stats.top_tools(limit=1)] == ["df"]
		assert len(stats.top_tools()) == 2
