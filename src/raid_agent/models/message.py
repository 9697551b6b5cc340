"""
Transcript message model.

Defines the four conversation roles and the immutable Message entry
that makes up a session transcript.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
	"""
	Speaker of a transcript entry.

	SYSTEM: Preamble written once per problem.
	USER: Initial problem statement and later clarification answers.
	ASSISTANT: Non-terminal analysis from the provider.
	TOOL: Captured result of a diagnostic tool run.
	"""

	SYSTEM = "system"
	USER = "user"
	ASSISTANT = "assistant"
	TOOL = "tool"


class Message(BaseModel):
	"""One transcript entry."""

	model_config = ConfigDict(frozen=True)

	role: Role = Field(description="Speaker of this entry")
	content: str = Field(description="Text body")


__all__ = ["Role", "Message"]
