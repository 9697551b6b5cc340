"""
Run parameters model.

Defines validated parameters for a CLI invocation of the agent.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from pydantic_core.core_schema import ValidationInfo


class RunParams(BaseModel):
	"""Validated run parameters for the CLI."""

	problem: str = Field(description="Free-text problem description")
	context: Optional[str] = Field(
	    default=None, description="Extra context appended to system info")
	max_tool_calls: Optional[int] = Field(default=None,
	                                      description="Override tool budget")
	timeout: Optional[int] = Field(default=None,
	                               description="Provider timeout seconds")
	interactive: bool = Field(default=True,
	                          description="Prompt the operator on pauses")
	verbose: Optional[bool] = Field(default=None,
	                                description="Show session summary")
	output: Optional[Path] = Field(default=None,
	                               description="Transcript markdown path")

	@field_validator('problem')
	@classmethod
	def validate_problem(cls, v: str) -> str:
		v = v.strip()
		if not v:
			raise ValueError("problem must not be empty")
		return v

	@field_validator('max_tool_calls', 'timeout')
	@classmethod
	def validate_positive(cls, v: Optional[int],
	                      info: ValidationInfo) -> Optional[int]:
		if v is None:
			return v
		if v <= 0:
			raise ValueError(f"{info.field_name} must be > 0")
		return v


__all__ = ["RunParams"]
