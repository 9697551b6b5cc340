"""
Transcript assembly.

Serializes session history into the single prompt string sent to the
provider on each turn, and renders the self-describing content of
Tool-role messages.

The whole transcript is replayed on every turn, so prompt size grows
with each tool call.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from raid_agent.loaders.prompts import render_prompt
from raid_agent.models.message import Message
from raid_agent.models.tool import TOOL_DESCRIPTIONS, ToolId, ToolResult
from raid_agent.core.parser import (
    TOOL_MARKER,
    ANALYSIS_MARKER,
    COMPLETION_MARKER,
)

RESPONSE_GRAMMARS = (
    f"{TOOL_MARKER} <tool_name> [--namespace <ns>] [--pod <name>] "
    "[--service <unit>] [--lines <n>]",
    f"{ANALYSIS_MARKER} <what the evidence shows so far>",
    f"{COMPLETION_MARKER} <root cause and recommended fix>",
)


def render_message(message: Message) -> str:
	"""Render one transcript entry as ``ROLE: content`` plus a blank line."""
	return f"{message.role.value.upper()}: {message.content}\n\n"


def render_footer(tool_calls_used: int, tool_call_budget: int) -> str:
	"""
	Render the per-turn footer.

	Reports the budget and restates the expected reply grammar. It is
	regenerated for every prompt and never stored in the transcript.
	"""
	lines = [
	    f"Tool calls used: {tool_calls_used}/{tool_call_budget}",
	    "Reply with exactly one of:",
	    *RESPONSE_GRAMMARS,
	]
	return "\n".join(lines) + "\n"


def build_prompt(transcript: Sequence[Message], tool_calls_used: int,
                 tool_call_budget: int) -> str:
	"""
	Build the next provider prompt from the session history.

	Parameters:
		transcript: Ordered session messages.
		tool_calls_used: Tool dispatches performed so far.
		tool_call_budget: Current tool call ceiling.

	Returns:
		The full prompt text.
	"""
	body = "".join(render_message(m) for m in transcript)
	return body + render_footer(tool_calls_used, tool_call_budget)


def format_tool_message(result: ToolResult) -> str:
	"""
	Render a tool result as Tool-role message content.

	The text always names the tool, the command that ran, the outcome,
	and either the output or the error, since this is all the provider
	learns about the run.

	Parameters:
		result: Result returned by the dispatcher.

	Returns:
		Self-describing message content.
	"""
	status = "SUCCESS" if result.success else "FAILED"
	parts = [
	    f"Tool: {result.tool_name}",
	    f"Command: {result.command}",
	    f"Status: {status} ({result.execution_time_ms} ms)",
	]
	if result.success:
		parts.append(f"Output:\n{result.output.rstrip() or '(no output)'}")
	else:
		error = result.error or result.output or "unknown error"
		parts.append(f"Error:\n{error.rstrip()}")
	return "\n".join(parts)


def describe_tools(
    descriptions: Mapping[ToolId, str] = TOOL_DESCRIPTIONS,
    tools: Iterable[ToolId] | None = None,
) -> str:
	"""Render the tool catalog as a bullet list for the system preamble."""
	selected = list(tools) if tools is not None else list(ToolId)
	lines = []
	for tool in selected:
		desc = descriptions.get(tool)
		lines.append(f"- {tool.value}: {desc}" if desc else f"- {tool.value}")
	return "\n".join(lines)


def build_system_preamble(system_context: str) -> str:
	"""
	Build the System-role message that opens every problem.

	Parameters:
		system_context: Host description gathered by the caller.

	Returns:
		Preamble text with the tool catalog and context filled in.
	"""
	return render_prompt(
	    "system.md",
	    tools=describe_tools(),
	    context=system_context.strip() or "(none provided)",
	)


__all__ = [
    "RESPONSE_GRAMMARS",
    "render_message",
    "render_footer",
    "build_prompt",
    "format_tool_message",
    "describe_tools",
    "build_system_preamble",
]
