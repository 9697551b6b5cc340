"""
Session report rendering and persistence utilities.

Renders a finished (or paused) agent session to markdown and saves it
to disk.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from string import Template
from typing import Optional, Sequence

from raid_agent.models.agent_result import (
    AgentResult,
    ErrorResult,
    LimitReached,
    PausedForUserInput,
    Success,
)
from raid_agent.models.message import Message, Role

REPORT_TEMPLATE = Template("""# Diagnostic Session Report

| Item        | Value            |
| ----------- | ---------------- |
| Problem     | ${problem}       |
| Outcome     | ${outcome}       |
| Tool calls  | ${tool_calls}    |
| Report Date | ${report_date}   |

## Result

${result}

## Transcript

${transcript}
""")

_OUTCOMES = {
    Success: "resolved",
    PausedForUserInput: "waiting for input",
    LimitReached: "tool call limit reached",
    ErrorResult: "error",
}


def result_text(result: AgentResult) -> str:
	"""Return the human-facing text carried by a result."""
	if isinstance(result, Success):
		return result.final_analysis
	if isinstance(result, PausedForUserInput):
		return result.reason
	if isinstance(result, LimitReached):
		return result.partial_analysis
	return result.cause


def render_transcript_md(transcript: Sequence[Message]) -> str:
	"""
	Render transcript entries as markdown sections.

	System messages are omitted; tool output is fenced.
	"""
	blocks = []
	for n, msg in enumerate(transcript, start=1):
		if msg.role == Role.SYSTEM:
			continue
		heading = f"### {n}. {msg.role.value}"
		if msg.role == Role.TOOL:
			blocks.append(f"{heading}\n\n```text\n{msg.content}\n```")
		else:
			blocks.append(f"{heading}\n\n{msg.content}")
	return "\n\n".join(blocks)


def render_report_md(
    problem: str,
    result: AgentResult,
    transcript: Sequence[Message],
    tool_call_budget: Optional[int] = None,
    report_date: Optional[str] = None,
) -> str:
	"""
	Render a full session report.

	Parameters:
		problem: Original problem statement.
		result: Last result returned by the session.
		transcript: Session transcript.
		tool_call_budget: Budget in effect, shown next to calls used.
		report_date: Override for the report timestamp.

	Returns:
		Rendered markdown string.
	"""
	calls = str(result.tool_calls_used)
	if tool_call_budget is not None:
		calls += f"/{tool_call_budget}"
	data = {
	    "problem": problem.replace("|", "\\|").replace("\n", " "),
	    "outcome": _OUTCOMES[type(result)],
	    "tool_calls": calls,
	    "report_date": report_date or
	    datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC"),
	    "result": result_text(result),
	    "transcript": render_transcript_md(transcript) or "(empty)",
	}
	return REPORT_TEMPLATE.safe_substitute(**data)


def save_report_md(path: Path | str, content: str) -> None:
	"""
	Persist markdown content to disk, ensuring parent directories.

	Parameters:
		path: Destination file path.
		content: Markdown content to write.
	"""
	Path(path).parent.mkdir(parents=True, exist_ok=True)
	Path(path).write_text(content, encoding="utf-8")


__all__ = [
    "render_report_md",
    "render_transcript_md",
    "result_text",
    "save_report_md",
]
