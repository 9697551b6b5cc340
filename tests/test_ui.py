from io import StringIO

from rich.console import Console

from raid_agent.integrations.executor import CATALOG
from raid_agent.integrations.known_issues import KnownIssuesDatabase
from raid_agent.models.agent_result import (
    ErrorResult,
    LimitReached,
    PausedForUserInput,
    Success,
)
from raid_agent.models.tool import ToolResult
from raid_agent.models.tool_usage import ToolUsageStats
from raid_agent.ui import console as console_mod
from raid_agent.ui.console import ConsoleUI, rate_style


def _ui():
	return ConsoleUI(Console(file=StringIO(), width=200, record=True))


def test_show_result_panels():
	ui = _ui()
	ui.show_result(Success(final_analysis="memory limit too low",
	                       tool_calls_used=2))
	ui.show_result(ErrorResult(cause="auth failed", tool_calls_used=0))
	text = ui.console.export_text()
	assert "Diagnosis" in text
	assert "memory limit too low" in text
	assert "tool calls used: 2" in text
	assert "Error" in text
	assert "auth failed" in text


def test_render_result_border_styles():
	ui = _ui()
	paused = ui.render_result(PausedForUserInput(reason="q", tool_calls_used=0))
	limit = ui.render_result(LimitReached(partial_analysis="p",
	                                      tool_calls_used=3))
	assert paused.border_style == "cyan"
	assert limit.border_style == "yellow"


def test_ask_returns_answer(monkeypatch):
	monkeypatch.setattr(console_mod.Prompt, "ask",
	                    lambda *a, **k: "  default ")
	assert _ui().ask("which namespace?") == "default"


def test_ask_quit_or_empty_returns_none(monkeypatch):
	ui = _ui()
	for answer in ("", "quit", "EXIT"):
		monkeypatch.setattr(console_mod.Prompt, "ask",
		                    lambda *a, answer=answer, **k: answer)
		assert ui.ask("q") is None


def test_confirm_continue(monkeypatch):
	seen = {}

	def fake_confirm(prompt, **kwargs):
		seen["prompt"] = prompt
		return False

	monkeypatch.setattr(console_mod.Confirm, "ask", fake_confirm)
	result = LimitReached(partial_analysis="p", tool_calls_used=10)
	assert _ui().confirm_continue(result, 5) is False
	assert "Allow 5 more" in seen["prompt"]


def test_tool_usage_table():
	stats = ToolUsageStats()
	stats.record(ToolResult(tool_name="df", command="df -h", success=True))
	stats.record(
	    ToolResult(tool_name="free", command="free", success=False,
	               error="x"))
	table = _ui().render_tool_usage_table(stats)
	assert len(table.columns) == 4
	assert table.row_count == 3


def test_rate_style():
	assert rate_style(100) == "green"
	assert rate_style(85) == "yellow"
	assert rate_style(10) == "red"


def test_issue_tables():
	ui = _ui()
	db = KnownIssuesDatabase.from_file()
	table = ui.render_issues_table(db.all_issues())
	assert table.row_count == len(db)
	ui.console.print(ui.render_issue(db.get_issue("storage-disk-full")))
	text = ui.console.export_text()
	assert "Filesystem Full" in text
	assert "df -h" in text


def test_tools_table_lists_catalog():
	ui = _ui()
	table = ui.render_tools_table(CATALOG)
	assert table.row_count == len(CATALOG)
	ui.console.print(table)
	assert "kubectl_get_pods" in ui.console.export_text()


def test_render_tool_result():
	ui = _ui()
	ok = ToolResult(tool_name="df",
	                command="df -h",
	                success=True,
	                output="/dev/sda1 100%",
	                execution_time_ms=5)
	failed = ToolResult(tool_name="kubectl_logs",
	                    command="(not executed)",
	                    success=False,
	                    error="kubectl_logs requires --pod <value>")
	assert ui.render_tool_result(ok).border_style == "green"
	assert ui.render_tool_result(failed).border_style == "red"
	ui.console.print(ui.render_tool_result(failed))
	text = ui.console.export_text()
	assert "Tool Result" in text
	assert "requires --pod" in text
