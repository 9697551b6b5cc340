"""
Action parser for provider replies.

The provider's free-text reply doubles as a small command grammar. This
module decodes one reply into exactly one Action using an ordered marker
search over the whole reply:

    1. ``CALL_TOOL: <name> [--namespace N] [--pod P] [--service S] [--lines L]``
    2. ``COMPLETE: <final analysis>``
    3. ``ANALYSIS: <analysis>``
    4. ``ASK: <question>``
    5. anything else is analysis text, verbatim.

The parser never raises; malformed requests degrade to ProvideAnalysis.
"""

from __future__ import annotations

import re
from typing import Optional

from raid_agent.models.action import Action, AskUser, ProvideAnalysis, RunTool
from raid_agent.models.tool import TOOL_NAMES

TOOL_MARKER = "CALL_TOOL:"
COMPLETION_MARKER = "COMPLETE:"
ANALYSIS_MARKER = "ANALYSIS:"
ASK_MARKER = "ASK:"

# flag -> RunTool field
TOOL_FLAGS: dict[str, str] = {
    "--namespace": "namespace",
    "--pod": "pod",
    "--service": "service",
    "--lines": "lines",
}

_LINES_RE = re.compile(r"\d+", re.ASCII)


def text_after_marker(reply: str, marker: str) -> str:
	"""
	Return the text following the first occurrence of marker, trimmed.

	Parameters:
		reply: Raw provider reply.
		marker: Marker known to occur in reply.

	Returns:
		Everything after the marker with surrounding whitespace removed.
	"""
	return reply.split(marker, 1)[1].strip()


def _marker_line(reply: str, marker: str) -> str:
	"""Return the first line of reply that contains marker."""
	for line in reply.splitlines():
		if marker in line:
			return line
	return reply


def _parse_lines(value: str) -> Optional[int]:
	"""Parse a --lines value, returning None when it is not a count."""
	if _LINES_RE.fullmatch(value):
		return int(value)
	return None


def parse_tool_call(reply: str) -> Action:
	"""
	Decode the tool-invocation line of a reply.

	Parameters:
		reply: Raw provider reply containing TOOL_MARKER.

	Returns:
		RunTool for a known tool name, otherwise ProvideAnalysis
		naming the unknown tool.
	"""
	line = _marker_line(reply, TOOL_MARKER)
	tokens = line.split(TOOL_MARKER, 1)[1].split()
	name = tokens[0] if tokens else ""
	tool_id = TOOL_NAMES.get(name)
	if tool_id is None:
		return ProvideAnalysis(text=f"Unknown tool requested: {name}")

	fields: dict[str, object] = {}
	rest = tokens[1:]
	i = 0
	while i < len(rest):
		field = TOOL_FLAGS.get(rest[i])
		if field is None or i + 1 >= len(rest):
			i += 1
			continue
		value = rest[i + 1]
		if field == "lines":
			lines = _parse_lines(value)
			if lines is not None:
				fields[field] = lines
		else:
			fields[field] = value
		i += 2
	return RunTool(tool_id=tool_id, **fields)


def parse_action(reply: str) -> Action:
	"""
	Decode a provider reply into exactly one Action.

	Parameters:
		reply: Raw provider reply.

	Returns:
		The decoded Action; ProvideAnalysis holding the reply when no
		marker is present.
	"""
	if TOOL_MARKER in reply:
		return parse_tool_call(reply)
	if COMPLETION_MARKER in reply:
		return ProvideAnalysis(text=text_after_marker(reply, COMPLETION_MARKER))
	if ANALYSIS_MARKER in reply:
		return ProvideAnalysis(text=text_after_marker(reply, ANALYSIS_MARKER))
	if ASK_MARKER in reply:
		return AskUser(question=text_after_marker(reply, ASK_MARKER))
	return ProvideAnalysis(text=reply)


def is_completion(reply: str) -> bool:
	"""Return True when the raw reply carries the completion marker."""
	return COMPLETION_MARKER in reply


__all__ = [
    "TOOL_MARKER",
    "COMPLETION_MARKER",
    "ANALYSIS_MARKER",
    "ASK_MARKER",
    "TOOL_FLAGS",
    "parse_action",
    "parse_tool_call",
    "text_after_marker",
    "is_completion",
]
