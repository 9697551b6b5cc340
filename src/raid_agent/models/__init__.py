"""
raid-agent models.

This subpackage contains Pydantic models for configuration, transcript
messages, decoded actions, loop results, tools and known issues.

Key models:
    - Config: Application configuration loaded from environment
    - RunParams: Parameters for a CLI invocation
    - Message / Role: Transcript entries
    - RunTool / ProvideAnalysis / AskUser: Decoded provider actions
    - Success / PausedForUserInput / LimitReached / ErrorResult: Loop results
    - ToolId / ToolArgs / ToolResult: Diagnostic tool vocabulary
    - KnownIssue: Reference issue catalog entry
"""

from .config import Config, load_env
from .run_params import RunParams
from .message import Message, Role
from .tool import ToolId, TOOL_NAMES, TOOL_DESCRIPTIONS, ToolArgs, ToolResult
from .action import Action, RunTool, ProvideAnalysis, AskUser
from .agent_result import (
    AgentResult,
    Success,
    PausedForUserInput,
    LimitReached,
    ErrorResult,
)
from .tool_usage import ToolCallEvent, ToolCallSummary, ToolUsageStats
from .known_issue import IssueCategory, IssueSeverity, KnownIssue, IssueMatch

__all__ = [
    "Config",
    "load_env",
    "RunParams",
    "Message",
    "Role",
    "ToolId",
    "TOOL_NAMES",
    "TOOL_DESCRIPTIONS",
    "ToolArgs",
    "ToolResult",
    "Action",
    "RunTool",
    "ProvideAnalysis",
    "AskUser",
    "AgentResult",
    "Success",
    "PausedForUserInput",
    "LimitReached",
    "ErrorResult",
    "ToolCallEvent",
    "ToolCallSummary",
    "ToolUsageStats",
    "IssueCategory",
    "IssueSeverity",
    "KnownIssue",
    "IssueMatch",
]
