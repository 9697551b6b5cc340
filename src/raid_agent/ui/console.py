"""
Rich console rendering for interactive sessions.

Shows agent results as panels, wraps agent turns in a status spinner,
asks the operator for input, and renders catalog tables.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.status import Status
from rich.table import Table
from rich.text import Text

from raid_agent.models.agent_result import (
    AgentResult,
    ErrorResult,
    LimitReached,
    PausedForUserInput,
    Success,
)
from raid_agent.core.transcript import format_tool_message
from raid_agent.integrations.executor import CatalogEntry
from raid_agent.models.known_issue import IssueSeverity, KnownIssue
from raid_agent.models.tool import ToolArgs, ToolId, ToolResult
from raid_agent.models.tool_usage import ToolUsageStats
from raid_agent.ui.reporting import result_text

_RESULT_STYLES: dict[type, tuple[str, str]] = {
    Success: ("Diagnosis", "green"),
    PausedForUserInput: ("Question", "cyan"),
    LimitReached: ("Tool Call Limit Reached", "yellow"),
    ErrorResult: ("Error", "red"),
}

_SEVERITY_STYLES = {
    IssueSeverity.CRITICAL: "bold red",
    IssueSeverity.HIGH: "red",
    IssueSeverity.MEDIUM: "yellow",
    IssueSeverity.LOW: "green",
    IssueSeverity.INFO: "dim",
}

QUIT_WORDS = frozenset({"quit", "exit", "q"})


def rate_style(rate: float) -> str:
	"""Color for a success rate percentage."""
	return "green" if rate == 100 else ("yellow" if rate >= 80 else "red")


class ConsoleUI:
	"""Operator-facing console for an agent session."""

	def __init__(self, console: Console | None = None):
		self.console = console or Console()

	def status(self, message: str = "Thinking...") -> Status:
		"""Spinner shown while the agent works."""
		return self.console.status(message, spinner="dots")

	def render_result(self, result: AgentResult) -> Panel:
		"""Build the panel for one agent result."""
		title, style = _RESULT_STYLES[type(result)]
		subtitle = f"tool calls used: {result.tool_calls_used}"
		return Panel(
		    Text(result_text(result)),
		    title=title,
		    subtitle=subtitle,
		    border_style=style,
		    box=box.ROUNDED,
		)

	def show_result(self, result: AgentResult) -> None:
		self.console.print(self.render_result(result))

	def render_tool_result(self, result: ToolResult) -> Panel:
		"""Panel for a tool run outside the agent loop."""
		return Panel(
		    Text(format_tool_message(result)),
		    title="Tool Result",
		    border_style="green" if result.success else "red",
		    box=box.ROUNDED,
		)

	def show_summary(self, summary: str) -> None:
		self.console.print(Panel(summary, title="Session", box=box.ROUNDED))

	def ask(self, question: str) -> str | None:
		"""
		Prompt the operator for an answer.

		Returns:
			The answer, or None when the operator declines (empty or quit).
		"""
		answer = Prompt.ask("[cyan]Your answer[/cyan] (empty or 'quit' to stop)",
		                    console=self.console,
		                    default="",
		                    show_default=False).strip()
		if not answer or answer.lower() in QUIT_WORDS:
			return None
		return answer

	def confirm_continue(self, result: LimitReached, increment: int) -> bool:
		"""Ask whether to grant increment more tool calls."""
		return Confirm.ask(
		    f"Used {result.tool_calls_used} tool calls. "
		    f"Allow {increment} more?",
		    console=self.console,
		    default=True,
		)

	def render_tool_usage_table(self, stats: ToolUsageStats) -> Table:
		"""
		Render tool usage statistics table.

		Parameters:
			stats: Tool usage recorded by the session.

		Returns:
			Rich Table with one row per tool plus a total row.
		"""
		table = Table(show_header=True, expand=True, box=box.ROUNDED)
		table.add_column("Tool")
		table.add_column("Total")
		table.add_column("Success")
		table.add_column("Failed")
		for summary in stats.top_tools(limit=len(stats.calls_by_tool())):
			table.add_row(summary.tool_name, str(summary.total),
			              str(summary.successful), str(summary.failed))
		rate = stats.success_rate
		table.add_row(
		    "total",
		    str(stats.total_calls),
		    str(stats.successful_calls),
		    Text(f"{stats.failed_calls} ({rate:.0f}% ok)",
		         style=rate_style(rate)),
		    style="bold",
		)
		return table

	def render_issues_table(self, issues: Iterable[KnownIssue]) -> Table:
		table = Table(title="Known Issues", box=box.ROUNDED, expand=True)
		table.add_column("ID", style="bold")
		table.add_column("Title")
		table.add_column("Category")
		table.add_column("Severity")
		for issue in issues:
			table.add_row(
			    issue.id,
			    issue.title,
			    issue.category.value,
			    Text(issue.severity.value,
			         style=_SEVERITY_STYLES[issue.severity]),
			)
		return table

	def render_issue(self, issue: KnownIssue) -> Table:
		"""Render one issue as a field/value table."""
		table = Table(title=issue.title,
		              box=box.ROUNDED,
		              show_header=False,
		              expand=True,
		              title_style="bold cyan")
		table.add_column("Field", style="bold")
		table.add_column("Value")
		table.add_row("ID", issue.id)
		table.add_row("Category", issue.category.value)
		table.add_row(
		    "Severity",
		    Text(issue.severity.value, style=_SEVERITY_STYLES[issue.severity]))
		table.add_row("Description", issue.description)
		for label, values in (
		    ("Symptoms", issue.symptoms),
		    ("Next Steps", issue.next_steps),
		    ("Verify", issue.verification_commands),
		    ("Fix", issue.fix_commands),
		):
			if values:
				table.add_row(label, "\n".join(values))
		return table

	def render_tools_table(self,
	                       catalog: Mapping[ToolId, CatalogEntry]) -> Table:
		"""Render the tool catalog with the default command line of each tool."""
		table = Table(title="Diagnostic Tools", box=box.ROUNDED, expand=True)
		table.add_column("Tool", style="bold")
		table.add_column("Category")
		table.add_column("Description")
		table.add_column("Command", style="dim")
		for tool_id, entry in catalog.items():
			table.add_row(
			    tool_id.value,
			    entry.category,
			    entry.description,
			    " ".join(a for a in entry.argv(ToolArgs()) if a),
			)
		return table


__all__ = ["ConsoleUI", "QUIT_WORDS", "rate_style"]
