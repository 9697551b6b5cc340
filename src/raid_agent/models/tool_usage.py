"""
Tool usage tracking models.

Defines Pydantic models for recording tool dispatches made by an agent
session and computing success rate metrics.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .tool import ToolResult


class ToolCallEvent(BaseModel):
	"""
	Record of a single tool dispatch.

	Attributes:
		sequence: 1-based position of the call within the session.
		tool_name: Name of the tool invoked.
		command: Command string reported by the executor.
		status: Outcome of the call (success or failure).
		completed_at: ISO timestamp of when the result was recorded.
		duration_ms: Execution time reported by the executor.
		error_message: Error details if the call failed.
	"""

	sequence: int = Field(description="1-based call number")
	tool_name: str = Field(description="Name of the tool invoked")
	command: str = Field(default="", description="Executed command")
	status: str = Field(
	    default="success",
	    description="Outcome: 'success' or 'failure'",
	)
	completed_at: Optional[str] = Field(
	    default=None,
	    description="ISO timestamp of call completion",
	)
	duration_ms: Optional[float] = Field(
	    default=None,
	    description="Duration in milliseconds",
	)
	error_message: Optional[str] = Field(
	    default=None,
	    description="Error details if failed",
	)


class ToolCallSummary(BaseModel):
	"""
	Per-tool aggregated statistics.

	Attributes:
		tool_name: Name of the tool.
		total: Total number of calls.
		successful: Number of successful calls.
		failed: Number of failed calls.
	"""

	tool_name: str = Field(description="Tool name")
	total: int = Field(default=0, description="Total calls")
	successful: int = Field(default=0, description="Successful calls")
	failed: int = Field(default=0, description="Failed calls")


class ToolUsageStats(BaseModel):
	"""
	Aggregated tool usage statistics for a session.

	Attributes:
		tool_calls: Recorded tool call events in dispatch order.
	"""

	tool_calls: List[ToolCallEvent] = Field(
	    default_factory=list,
	    description="Recorded tool call events",
	)

	@property
	def total_calls(self) -> int:
		"""Return total number of recorded tool calls."""
		return len(self.tool_calls)

	@property
	def successful_calls(self) -> int:
		"""Return number of successful tool calls."""
		return sum(1 for c in self.tool_calls if c.status == "success")

	@property
	def failed_calls(self) -> int:
		"""Return number of failed tool calls."""
		return sum(1 for c in self.tool_calls if c.status == "failure")

	@property
	def success_rate(self) -> float:
		"""
		Calculate success rate as a percentage.

		Returns:
			100.0 if no calls, otherwise percentage of
			successful calls.
		"""
		if not self.tool_calls:
			return 100.0
		return (self.successful_calls / len(self.tool_calls)) * 100

	def calls_by_tool(self) -> Dict[str, ToolCallSummary]:
		"""
		Aggregate call counts per tool name.

		Returns:
			Dict mapping tool names to ToolCallSummary objects.
		"""
		result: Dict[str, ToolCallSummary] = {}
		for call in self.tool_calls:
			if call.tool_name not in result:
				result[call.tool_name] = ToolCallSummary(
				    tool_name=call.tool_name, )
			summary = result[call.tool_name]
			summary.total += 1
			if call.status == "success":
				summary.successful += 1
			else:
				summary.failed += 1
		return result

	def top_tools(self, limit: int = 5) -> List[ToolCallSummary]:
		"""
		Return the most-called tools sorted by total calls.

		Parameters:
			limit: Maximum number of tools to return.

		Returns:
			List of ToolCallSummary sorted descending by total.
		"""
		by_tool = self.calls_by_tool()
		sorted_tools = sorted(
		    by_tool.values(),
		    key=lambda s: s.total,
		    reverse=True,
		)
		return sorted_tools[:limit]

	def record(self, result: ToolResult) -> ToolCallEvent:
		"""
		Record a completed tool dispatch.

		Parameters:
			result: The tool result returned by the dispatcher.

		Returns:
			The ToolCallEvent that was appended.
		"""
		event = ToolCallEvent(
		    sequence=len(self.tool_calls) + 1,
		    tool_name=result.tool_name,
		    command=result.command,
		    status="success" if result.success else "failure",
		    completed_at=datetime.now(timezone.utc).isoformat(),
		    duration_ms=float(result.execution_time_ms),
		    error_message=result.error if not result.success else None,
		)
		self.tool_calls.append(event)
		return event


__all__ = [
    "ToolCallEvent",
    "ToolCallSummary",
    "ToolUsageStats",
]
