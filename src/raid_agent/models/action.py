"""
Decoded provider actions.

An Action is the typed intent extracted from one provider reply. Exactly
three variants exist; the discriminated union lets callers match on the
``kind`` field or on the class.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .tool import ToolArgs, ToolId


class RunTool(BaseModel):
	"""Request to dispatch a diagnostic tool."""

	model_config = ConfigDict(frozen=True)

	kind: Literal["run_tool"] = "run_tool"
	tool_id: ToolId
	namespace: Optional[str] = None
	pod: Optional[str] = None
	service: Optional[str] = None
	lines: Optional[int] = Field(default=None, ge=0)

	@property
	def args(self) -> ToolArgs:
		"""Return the optional arguments as a ToolArgs bundle."""
		return ToolArgs(
		    namespace=self.namespace,
		    pod=self.pod,
		    service=self.service,
		    lines=self.lines,
		)


class ProvideAnalysis(BaseModel):
	"""Non-final or final explanation text."""

	model_config = ConfigDict(frozen=True)

	kind: Literal["provide_analysis"] = "provide_analysis"
	text: str


class AskUser(BaseModel):
	"""Explicit request for operator input."""

	model_config = ConfigDict(frozen=True)

	kind: Literal["ask_user"] = "ask_user"
	question: str


Action = Annotated[Union[RunTool, ProvideAnalysis, AskUser],
                   Field(discriminator="kind")]

__all__ = ["Action", "RunTool", "ProvideAnalysis", "AskUser"]
