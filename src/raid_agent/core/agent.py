"""
Agent session controller.

Owns the mutable state of one diagnostic session (transcript, tool call
counters) and drives the loop: build prompt, ask the provider, decode the
reply, dispatch or record, then continue, pause or finish.

The loop is strictly sequential. Its only await points are the provider
call and the tool dispatch; it defines no timeouts of its own.
"""

from __future__ import annotations

from collections import Counter
from enum import Enum
from typing import Callable, Optional

from raid_agent.core.dispatch import ToolDispatcher
from raid_agent.core.exceptions import ProviderError, SessionStateError
from raid_agent.core.parser import (
    COMPLETION_MARKER,
    is_completion,
    parse_action,
    text_after_marker,
)
from raid_agent.core.transcript import (
    build_prompt,
    build_system_preamble,
    format_tool_message,
)
from raid_agent.models.action import Action, AskUser, ProvideAnalysis, RunTool
from raid_agent.models.agent_result import (
    AgentResult,
    ErrorResult,
    LimitReached,
    PausedForUserInput,
    Success,
)
from raid_agent.models.message import Message, Role
from raid_agent.models.tool_usage import ToolUsageStats
from raid_agent.utils.logging import get_logger
from raid_agent.utils.protocols import InferenceProvider

logger = get_logger(__name__)

LIMIT_ADVISORY = (
    "Tool call limit reached before the problem was resolved. The findings "
    "so far are kept in the session; continue to allow more tool calls.")

# Lower-case phrases that mark an analysis as a request for operator input.
CLARIFICATION_PHRASES: tuple[str, ...] = (
    "need more information",
    "could you",
    "can you provide",
    "can you share",
    "please provide",
    "please clarify",
)

Enricher = Callable[[str], str]


def needs_clarification(text: str) -> bool:
	"""
	Return True when analysis text is really a question for the operator.

	Case-insensitive substring match against CLARIFICATION_PHRASES.
	"""
	lowered = text.lower()
	return any(phrase in lowered for phrase in CLARIFICATION_PHRASES)


class SessionState(str, Enum):
	"""
	Lifecycle states of an AgentSession.

	IDLE: Created, no problem submitted yet.
	RUNNING: Inside the loop.
	PAUSED_FOR_INPUT: Waiting for continue_with_input().
	PAUSED_FOR_LIMIT: Waiting for continue_after_limit().
	SUCCEEDED: Provider signalled completion (terminal).
	FAILED: Provider failed or the loop was cancelled (terminal).
	"""

	IDLE = "idle"
	RUNNING = "running"
	PAUSED_FOR_INPUT = "paused_for_input"
	PAUSED_FOR_LIMIT = "paused_for_limit"
	SUCCEEDED = "succeeded"
	FAILED = "failed"


_STATE_FOR_RESULT: dict[type, SessionState] = {
    Success: SessionState.SUCCEEDED,
    ErrorResult: SessionState.FAILED,
    PausedForUserInput: SessionState.PAUSED_FOR_INPUT,
    LimitReached: SessionState.PAUSED_FOR_LIMIT,
}


class AgentSession:
	"""
	One interactive diagnostic session.

	Parameters:
		provider: Inference provider consulted every turn.
		dispatcher: Tool dispatch table used for RunTool actions.
		tool_call_budget: Tool dispatches allowed before pausing.
		budget_increment: Budget added by continue_after_limit();
			defaults to tool_call_budget.
		enrich: Optional text enrichment applied to the problem
			statement before the first provider call.
	"""

	def __init__(
	    self,
	    provider: InferenceProvider,
	    dispatcher: ToolDispatcher,
	    tool_call_budget: int = 10,
	    budget_increment: Optional[int] = None,
	    enrich: Optional[Enricher] = None,
	) -> None:
		if tool_call_budget <= 0:
			raise ValueError("tool_call_budget must be > 0")
		if budget_increment is not None and budget_increment <= 0:
			raise ValueError("budget_increment must be > 0")
		self.provider = provider
		self.dispatcher = dispatcher
		self.enrich = enrich
		self.initial_budget = tool_call_budget
		self.budget_increment = budget_increment or tool_call_budget
		self.tool_call_budget = tool_call_budget
		self.tool_calls_used = 0
		self.state = SessionState.IDLE
		self.tool_usage = ToolUsageStats()
		self._transcript: list[Message] = []

	async def run(self, problem: str, system_context: str = "") -> AgentResult:
		"""
		Start working on a new problem.

		Any previous transcript and counters are discarded.

		Parameters:
			problem: Free-text problem description.
			system_context: Description of the host being diagnosed.

		Returns:
			The first AgentResult the loop reaches.
		"""
		if self.state == SessionState.RUNNING:
			raise SessionStateError("session is already running")
		self._transcript = []
		self.tool_calls_used = 0
		self.tool_call_budget = self.initial_budget
		self.tool_usage = ToolUsageStats()

		logger.info("session start: budget=%d problem=%r",
		            self.tool_call_budget, problem[:200])
		self._append(Role.SYSTEM, build_system_preamble(system_context))
		self._append(Role.USER, self._enrich(problem))
		return await self._loop()

	async def continue_with_input(self, text: str) -> AgentResult:
		"""
		Answer a pending question and resume the loop.

		Raises:
			SessionStateError: If the session is not waiting for input.
		"""
		self._require(SessionState.PAUSED_FOR_INPUT, "continue_with_input")
		self._append(Role.USER, text)
		return await self._loop()

	async def continue_after_limit(self) -> AgentResult:
		"""
		Raise the tool call budget and resume the loop.

		Raises:
			SessionStateError: If the session is not paused on its budget.
		"""
		self._require(SessionState.PAUSED_FOR_LIMIT, "continue_after_limit")
		self.tool_call_budget += self.budget_increment
		logger.info("budget raised to %d (used %d)", self.tool_call_budget,
		            self.tool_calls_used)
		return await self._loop()

	def get_transcript(self) -> tuple[Message, ...]:
		"""Return the transcript in insertion order (read-only copy)."""
		return tuple(self._transcript)

	def get_summary(self) -> str:
		"""Return a human-readable summary of the session."""
		roles = Counter(m.role for m in self._transcript)
		breakdown = ", ".join(f"{role.value} {roles[role]}" for role in Role
		                      if roles[role])
		lines = [
		    f"Conversation: {len(self._transcript)} messages"
		    + (f" ({breakdown})" if breakdown else ""),
		    f"Tool calls: {self.tool_calls_used}/{self.tool_call_budget} used",
		]
		tools = self.tool_usage.calls_by_tool()
		if tools:
			parts = []
			for summary in tools.values():
				part = f"{summary.tool_name} x{summary.total}"
				if summary.failed:
					part += f" ({summary.failed} failed)"
				parts.append(part)
			lines.append("Tools: " + ", ".join(parts))
		return "\n".join(lines)

	async def _loop(self) -> AgentResult:
		self.state = SessionState.RUNNING
		try:
			return await self._turns()
		except BaseException:
			# Cancelled or crashed mid-turn; the session cannot resume.
			if self.state == SessionState.RUNNING:
				self.state = SessionState.FAILED
			raise

	async def _turns(self) -> AgentResult:
		while True:
			if self.tool_calls_used >= self.tool_call_budget:
				return self._finish(
				    LimitReached(partial_analysis=LIMIT_ADVISORY,
				                 tool_calls_used=self.tool_calls_used))

			prompt = build_prompt(self._transcript, self.tool_calls_used,
			                      self.tool_call_budget)
			logger.info("turn: %d messages, %d prompt chars, tools %d/%d",
			            len(self._transcript), len(prompt),
			            self.tool_calls_used, self.tool_call_budget)
			try:
				reply = await self.provider.complete(prompt)
			except Exception as exc:  # noqa: BLE001
				cause = (str(exc) if isinstance(exc, ProviderError) else
				         f"{type(exc).__name__}: {exc}")
				logger.warning("provider failed: %s", cause)
				return self._finish(
				    ErrorResult(cause=cause,
				                tool_calls_used=self.tool_calls_used))
			logger.debug("provider reply: %s", reply)

			pause = await self._apply(parse_action(reply))

			if is_completion(reply):
				return self._finish(
				    Success(final_analysis=text_after_marker(
				        reply, COMPLETION_MARKER),
				            tool_calls_used=self.tool_calls_used))
			if pause is not None:
				return self._finish(pause)

	async def _apply(self, action: Action) -> Optional[AgentResult]:
		"""Carry out one action; return a pause result or None to continue."""
		if isinstance(action, RunTool):
			result = await self.dispatcher.dispatch(action.tool_id, action.args)
			self.tool_calls_used += 1
			self.tool_usage.record(result)
			logger.info("tool %s finished success=%s (%d ms)",
			            result.tool_name, result.success,
			            result.execution_time_ms)
			self._append(Role.TOOL, format_tool_message(result))
			return None
		if isinstance(action, AskUser):
			self._append(Role.ASSISTANT, action.question)
			return PausedForUserInput(reason=action.question,
			                          tool_calls_used=self.tool_calls_used)
		if isinstance(action, ProvideAnalysis):
			self._append(Role.ASSISTANT, action.text)
			if needs_clarification(action.text):
				return PausedForUserInput(reason=action.text,
				                          tool_calls_used=self.tool_calls_used)
			return None
		raise TypeError(f"unsupported action: {action!r}")

	def _append(self, role: Role, content: str) -> None:
		self._transcript.append(Message(role=role, content=content))

	def _enrich(self, problem: str) -> str:
		if self.enrich is None:
			return problem
		try:
			return self.enrich(problem)
		except Exception:  # noqa: BLE001
			logger.warning("problem enrichment failed; using raw text",
			               exc_info=True)
			return problem

	def _require(self, expected: SessionState, operation: str) -> None:
		if self.state != expected:
			raise SessionStateError(
			    f"{operation} requires state {expected.value}, "
			    f"session is {self.state.value}")

	def _finish(self, result: AgentResult) -> AgentResult:
		self.state = _STATE_FOR_RESULT[type(result)]
		logger.info("session %s after %d tool calls", self.state.value,
		            result.tool_calls_used)
		return result


__all__ = [
    "AgentSession",
    "SessionState",
    "LIMIT_ADVISORY",
    "CLARIFICATION_PHRASES",
    "needs_clarification",
]
