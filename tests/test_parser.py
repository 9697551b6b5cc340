"""Tests for reply decoding in core/parser.py."""

import pytest

from raid_agent.core.parser import (
    is_completion,
    parse_action,
    parse_tool_call,
    text_after_marker,
)
from raid_agent.models.action import AskUser, ProvideAnalysis, RunTool
from raid_agent.models.tool import ToolId


@pytest.mark.parametrize("tool", list(ToolId))
def test_known_tool_without_flags_has_no_args(tool):
	action = parse_action(f"CALL_TOOL: {tool.value}")
	assert action == RunTool(tool_id=tool)
	assert action.namespace is None
	assert action.pod is None
	assert action.service is None
	assert action.lines is None


def test_tool_call_with_all_flags():
	action = parse_action("CALL_TOOL: kubectl_logs --pod web-1 "
	                      "--namespace prod --lines 200 --service x")
	assert action == RunTool(tool_id=ToolId.KUBECTL_LOGS,
	                         pod="web-1",
	                         namespace="prod",
	                         lines=200,
	                         service="x")


def test_tool_call_found_on_later_line():
	reply = ("Let me look at the pods first.\n"
	         "CALL_TOOL: kubectl_get_pods --namespace default\n"
	         "That should show restarts.")
	action = parse_action(reply)
	assert action == RunTool(tool_id=ToolId.KUBECTL_GET_PODS,
	                         namespace="default")


def test_flags_on_other_lines_are_ignored():
	reply = "CALL_TOOL: kubectl_get_pods\n--namespace kube-system"
	assert parse_action(reply) == RunTool(tool_id=ToolId.KUBECTL_GET_PODS)


def test_unknown_tool_becomes_analysis():
	action = parse_action("CALL_TOOL: rm_rf --pod x")
	assert action == ProvideAnalysis(text="Unknown tool requested: rm_rf")


def test_tool_name_is_case_sensitive():
	action = parse_action("CALL_TOOL: KUBECTL_GET_PODS")
	assert action == ProvideAnalysis(
	    text="Unknown tool requested: KUBECTL_GET_PODS")


def test_missing_tool_name():
	assert parse_action("CALL_TOOL:   ") == ProvideAnalysis(
	    text="Unknown tool requested: ")


@pytest.mark.parametrize("value", ["-5", "ten", "3.5", "١٢"])
def test_invalid_lines_value_is_dropped(value):
	action = parse_action(f"CALL_TOOL: journalctl_recent --lines {value}")
	assert action == RunTool(tool_id=ToolId.JOURNALCTL_RECENT)


def test_zero_lines_is_accepted():
	action = parse_action("CALL_TOOL: journalctl_recent --lines 0")
	assert action.lines == 0


def test_unknown_flags_are_ignored():
	action = parse_action(
	    "CALL_TOOL: kubectl_get_pods --all --output json --namespace dev")
	assert action == RunTool(tool_id=ToolId.KUBECTL_GET_PODS, namespace="dev")


def test_trailing_flag_without_value_is_ignored():
	action = parse_action("CALL_TOOL: kubectl_get_pods --namespace")
	assert action == RunTool(tool_id=ToolId.KUBECTL_GET_PODS)


def test_repeated_flag_last_wins():
	action = parse_action(
	    "CALL_TOOL: kubectl_get_pods --namespace a --namespace b")
	assert action.namespace == "b"


def test_parse_tool_call_directly():
	assert parse_tool_call("CALL_TOOL: df") == RunTool(tool_id=ToolId.DF)


def test_tool_marker_wins_over_completion():
	reply = "CALL_TOOL: free\nCOMPLETE: out of memory"
	assert parse_action(reply) == RunTool(tool_id=ToolId.FREE)
	assert is_completion(reply)


def test_completion_strips_marker_and_prefix():
	reply = "I am done.\nCOMPLETE:   memory limit too low  "
	assert parse_action(reply) == ProvideAnalysis(text="memory limit too low")


def test_completion_wins_over_analysis_and_ask():
	reply = "ANALYSIS: partial\nASK: anything?\nCOMPLETE: root cause"
	assert parse_action(reply) == ProvideAnalysis(text="root cause")


def test_analysis_marker():
	reply = "Thinking...\nANALYSIS: node is under memory pressure\n"
	assert parse_action(reply) == ProvideAnalysis(
	    text="node is under memory pressure")


def test_analysis_wins_over_ask():
	reply = "ASK: which pod?\nANALYSIS: disk looks fine"
	assert parse_action(reply) == ProvideAnalysis(text="disk looks fine")


def test_ask_marker():
	assert parse_action("ASK:  what namespace? ") == AskUser(
	    question="what namespace?")


def test_markers_are_case_sensitive():
	reply = "complete: lower-case marker"
	assert parse_action(reply) == ProvideAnalysis(text=reply)
	assert not is_completion(reply)


@pytest.mark.parametrize("reply", [
    "",
    "   ",
    "The pod looks healthy to me.",
    "multi\nline\nreply",
])
def test_fallback_is_whole_reply_and_stable(reply):
	first = parse_action(reply)
	second = parse_action(reply)
	assert first == ProvideAnalysis(text=reply)
	assert first == second


def test_text_after_marker_uses_first_occurrence():
	assert text_after_marker("a COMPLETE: b COMPLETE: c",
	                         "COMPLETE:") == "b COMPLETE: c"
