"""
Tool dispatch table.

Validates tool requests and forwards them to the tool executor. Requests
that cannot run become failed ToolResults so the loop can report them to
the provider and carry on.
"""

from __future__ import annotations

from typing import Optional

from raid_agent.core.exceptions import ToolDispatchError
from raid_agent.models.tool import ToolArgs, ToolId, ToolResult
from raid_agent.utils.logging import get_logger
from raid_agent.utils.protocols import ToolExecutor

logger = get_logger(__name__)

NOT_EXECUTED = "(not executed)"

# Tools that cannot run without a specific argument.
REQUIRED_ARGS: dict[ToolId, tuple[str, ...]] = {
    ToolId.KUBECTL_DESCRIBE_POD: ("pod", ),
    ToolId.KUBECTL_LOGS: ("pod", ),
    ToolId.JOURNALCTL_SERVICE: ("service", ),
    ToolId.SYSTEMCTL_STATUS: ("service", ),
}

# Arguments placed into argv as values; none may look like an option.
VALUE_ARGS: tuple[str, ...] = ("namespace", "pod", "service")


def _failure(tool_name: str, message: str) -> ToolResult:
	"""Build a synthetic failed ToolResult for a run that never happened."""
	return ToolResult(
	    tool_name=tool_name,
	    command=NOT_EXECUTED,
	    success=False,
	    output="",
	    error=message,
	    execution_time_ms=0,
	)


class ToolDispatcher:
	"""Maps tool identifiers onto calls to a ToolExecutor."""

	def __init__(self, executor: ToolExecutor) -> None:
		self.executor = executor

	@staticmethod
	def resolve(tool: ToolId | str) -> ToolId:
		"""
		Resolve a tool identifier or catalog name.

		Raises:
			ToolDispatchError: If the name is not in the catalog.
		"""
		if isinstance(tool, ToolId):
			return tool
		try:
			return ToolId(tool)
		except ValueError as exc:
			raise ToolDispatchError(str(tool),
			                        f"Unknown tool: {tool}") from exc

	@staticmethod
	def validate(tool_id: ToolId, args: ToolArgs) -> None:
		"""
		Check that every argument the tool requires is present and that
		no value starts with "-".

		Raises:
			ToolDispatchError: Naming the first missing or rejected argument.
		"""
		for name in REQUIRED_ARGS.get(tool_id, ()):
			if not getattr(args, name):
				raise ToolDispatchError(
				    tool_id.value,
				    f"{tool_id.value} requires --{name} <value>; "
				    "the command was not run",
				)
		for name in VALUE_ARGS:
			value = getattr(args, name)
			if value and value.startswith("-"):
				raise ToolDispatchError(
				    tool_id.value,
				    f"--{name} value {value!r} looks like an option; "
				    "the command was not run",
				)

	async def dispatch(self,
	                   tool: ToolId | str,
	                   args: Optional[ToolArgs] = None) -> ToolResult:
		"""
		Validate and run one tool.

		Parameters:
			tool: Tool identifier or catalog name.
			args: Optional named arguments.

		Returns:
			The executor's result, or a synthetic failure when the request
			is invalid or the executor raised.
		"""
		args = args or ToolArgs()
		try:
			tool_id = self.resolve(tool)
			self.validate(tool_id, args)
		except ToolDispatchError as exc:
			logger.warning("tool %s not dispatched: %s", exc.tool_name, exc)
			return _failure(exc.tool_name, str(exc))

		logger.info("dispatching %s %s", tool_id.value,
		            args.model_dump(exclude_none=True))
		try:
			return await self.executor.run(tool_id, args)
		except Exception as exc:
			logger.warning("executor failed for %s", tool_id.value,
			               exc_info=True)
			return _failure(tool_id.value, f"executor error: {exc}")


__all__ = ["ToolDispatcher", "REQUIRED_ARGS", "VALUE_ARGS", "NOT_EXECUTED"]
