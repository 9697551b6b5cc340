"""
Exception types raised across the agent.

Only ProviderError ends a run; the others are either absorbed into the
transcript or signal caller misuse.
"""

from __future__ import annotations


class ProviderError(Exception):
	"""The inference provider failed to produce a completion."""


class ToolDispatchError(Exception):
	"""A tool request cannot be dispatched (unknown tool, missing argument)."""

	def __init__(self, tool_name: str, message: str) -> None:
		super().__init__(message)
		self.tool_name = tool_name


class SessionStateError(RuntimeError):
	"""An operation was invoked in a session state that does not allow it."""


class KnownIssueNotFound(KeyError):
	"""No known issue exists with the requested id."""


__all__ = [
    "ProviderError",
    "ToolDispatchError",
    "SessionStateError",
    "KnownIssueNotFound",
]
