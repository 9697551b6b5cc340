"""Tests for prompt assembly in core/transcript.py."""

from raid_agent.core.dispatch import NOT_EXECUTED
from raid_agent.core.transcript import (
    RESPONSE_GRAMMARS,
    build_prompt,
    build_system_preamble,
    describe_tools,
    format_tool_message,
    render_footer,
    render_message,
)
from raid_agent.models.message import Message, Role
from raid_agent.models.tool import ToolId, ToolResult


def test_render_message_uppercases_role():
	msg = Message(role=Role.TOOL, content="hello")
	assert render_message(msg) == "TOOL: hello\n\n"


def test_build_prompt_orders_messages_and_appends_footer():
	transcript = [
	    Message(role=Role.SYSTEM, content="sys"),
	    Message(role=Role.USER, content="pods crash"),
	    Message(role=Role.ASSISTANT, content="looking"),
	]
	prompt = build_prompt(transcript, 2, 10)
	assert prompt.startswith("SYSTEM: sys\n\nUSER: pods crash\n\n"
	                         "ASSISTANT: looking\n\n")
	assert prompt.endswith(render_footer(2, 10))
	assert "Tool calls used: 2/10" in prompt
	for grammar in RESPONSE_GRAMMARS:
		assert grammar in prompt


def test_footer_is_not_stored_in_transcript():
	transcript = [Message(role=Role.USER, content="x")]
	build_prompt(transcript, 0, 5)
	second = build_prompt(transcript, 1, 5)
	assert len(transcript) == 1
	assert second.count("Reply with exactly one of:") == 1
	assert "Tool calls used: 1/5" in second


def test_build_prompt_empty_transcript_is_footer_only():
	assert build_prompt([], 0, 3) == render_footer(0, 3)


def test_footer_names_all_three_grammars():
	footer = render_footer(0, 1)
	assert "CALL_TOOL:" in footer
	assert "ANALYSIS:" in footer
	assert "COMPLETE:" in footer


def test_format_tool_message_success():
	result = ToolResult(tool_name="df",
	                    command="df -h",
	                    success=True,
	                    output="/dev/sda1 100%\n",
	                    execution_time_ms=12)
	text = format_tool_message(result)
	assert text == ("Tool: df\nCommand: df -h\nStatus: SUCCESS (12 ms)\n"
	                "Output:\n/dev/sda1 100%")


def test_format_tool_message_empty_output():
	result = ToolResult(tool_name="mount", command="mount", success=True)
	assert format_tool_message(result).endswith("Output:\n(no output)")


def test_format_tool_message_failure_prefers_error():
	result = ToolResult(tool_name="kubectl_describe_pod",
	                    command=NOT_EXECUTED,
	                    success=False,
	                    output="ignored",
	                    error="requires --pod")
	text = format_tool_message(result)
	assert "Command: (not executed)" in text
	assert "Status: FAILED" in text
	assert text.endswith("Error:\nrequires --pod")


def test_format_tool_message_failure_without_error_text():
	result = ToolResult(tool_name="ss", command="ss -tulpn", success=False)
	assert format_tool_message(result).endswith("Error:\nunknown error")


def test_describe_tools_lists_catalog():
	text = describe_tools()
	lines = text.splitlines()
	assert len(lines) == len(ToolId)
	assert "- kubectl_get_pods: List pods with node and IP [--namespace]" in lines


def test_describe_tools_subset_without_description():
	text = describe_tools(descriptions={}, tools=[ToolId.DF, ToolId.FREE])
	assert text == "- df\n- free"


def test_system_preamble_includes_tools_and_context():
	preamble = build_system_preamble("OS: Fedora 40\n")
	assert "- journalctl_errors:" in preamble
	assert preamble.rstrip().endswith("OS: Fedora 40")
	assert "$tools" not in preamble
	assert "$context" not in preamble


def test_system_preamble_blank_context():
	assert build_system_preamble("  ").endswith("(none provided)")
