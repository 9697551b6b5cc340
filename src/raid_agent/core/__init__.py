"""Core agent logic.

This subpackage contains the agent loop and the pure helpers it is
built from. It never runs commands or speaks a provider protocol itself.

Key modules:
    - agent: AgentSession, the session controller
    - parser: Reply to Action decoding
    - transcript: Prompt assembly from the session history
    - dispatch: Tool request validation and forwarding
    - exceptions: Error types shared across the package
"""

from raid_agent.core.exceptions import (
    ProviderError,
    ToolDispatchError,
    SessionStateError,
    KnownIssueNotFound,
)
from raid_agent.core.parser import parse_action, is_completion
from raid_agent.core.transcript import build_prompt, format_tool_message
from raid_agent.core.dispatch import ToolDispatcher
from raid_agent.core.agent import (
    AgentSession,
    SessionState,
    LIMIT_ADVISORY,
    needs_clarification,
)

__all__ = [
    # exceptions
    "ProviderError",
    "ToolDispatchError",
    "SessionStateError",
    "KnownIssueNotFound",
    # parser
    "parse_action",
    "is_completion",
    # transcript
    "build_prompt",
    "format_tool_message",
    # dispatch
    "ToolDispatcher",
    # agent
    "AgentSession",
    "SessionState",
    "LIMIT_ADVISORY",
    "needs_clarification",
]
