"""
Protocol definitions for dependency injection.

Defines Protocol classes for the Copilot SDK objects and for the two
collaborators the agent loop consumes (inference provider and tool
executor) to enable testing with stub implementations.
"""

from __future__ import annotations

from typing import Protocol, Any

from raid_agent.models.tool import ToolArgs, ToolId, ToolResult


class SessionProtocol(Protocol):
	"""
	Protocol for Copilot session interface.

	Defines the expected methods for interacting with a Copilot session.
	"""

	async def send_and_wait(self, options: dict,
	                        timeout: int | None = None) -> Any:
		"""Send a prompt and wait for response."""
		...

	async def abort(self) -> Any:
		"""Abort the current session operation."""
		...

	async def destroy(self) -> Any:
		"""Destroy the session and release resources."""
		...


class CopilotClientProtocol(Protocol):
	"""
	Protocol for Copilot client interface.

	Defines the expected methods for managing a Copilot client.
	"""

	async def start(self) -> Any:
		"""Start the client connection."""
		...

	async def stop(self) -> Any:
		"""Stop the client connection."""
		...

	async def create_session(self, config: dict) -> SessionProtocol:
		"""Create a new session with the given configuration."""
		...


class InferenceProvider(Protocol):
	"""Text-in, text-out completion capability consumed by the agent loop."""

	async def complete(self, prompt: str) -> str:
		"""Return a completion for prompt or raise ProviderError."""
		...


class ToolExecutor(Protocol):
	"""Runs one diagnostic command and reports its captured result."""

	async def run(self, tool_id: ToolId, args: ToolArgs) -> ToolResult:
		"""Execute tool_id with args."""
		...


__all__ = [
    "SessionProtocol",
    "CopilotClientProtocol",
    "InferenceProvider",
    "ToolExecutor",
]
