"""
Agent loop outcome models.

Every call into the session controller returns exactly one of these
results. Success and ErrorResult are terminal; the two pause variants
can be resumed through the matching continuation.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _ResultBase(BaseModel):
	model_config = ConfigDict(frozen=True)

	tool_calls_used: int = Field(ge=0,
	                             description="Tool dispatches performed so far")

	@property
	def is_terminal(self) -> bool:
		return False


class Success(_ResultBase):
	"""The provider signalled completion."""

	kind: Literal["success"] = "success"
	final_analysis: str

	@property
	def is_terminal(self) -> bool:
		return True


class PausedForUserInput(_ResultBase):
	"""Suspended until the operator answers via continue_with_input()."""

	kind: Literal["paused_for_user_input"] = "paused_for_user_input"
	reason: str


class LimitReached(_ResultBase):
	"""Suspended until the budget is raised via continue_after_limit()."""

	kind: Literal["limit_reached"] = "limit_reached"
	partial_analysis: str


class ErrorResult(_ResultBase):
	"""The inference provider failed; the run is over."""

	kind: Literal["error"] = "error"
	cause: str

	@property
	def is_terminal(self) -> bool:
		return True


AgentResult = Annotated[Union[Success, PausedForUserInput, LimitReached,
                              ErrorResult],
                        Field(discriminator="kind")]

__all__ = [
    "AgentResult",
    "Success",
    "PausedForUserInput",
    "LimitReached",
    "ErrorResult",
]
