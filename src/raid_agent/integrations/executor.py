"""
Subprocess-backed tool executor and the diagnostic command catalog.

Every catalog entry is read-only. Commands run without a shell; the
argv is built from the entry and the validated ToolArgs.
"""

from __future__ import annotations

import asyncio
import shlex
import time
from dataclasses import dataclass
from typing import Callable

from raid_agent.models.tool import TOOL_DESCRIPTIONS, ToolArgs, ToolId, ToolResult
from raid_agent.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_LOG_LINES = 50
# Captured output beyond this many characters is truncated.
MAX_OUTPUT_CHARS = 20000

ArgvBuilder = Callable[[ToolArgs], list[str]]


def _ns(args: ToolArgs) -> list[str]:
	return ["-n", args.namespace] if args.namespace else []


def _lines(args: ToolArgs) -> str:
	return str(args.lines if args.lines is not None else DEFAULT_LOG_LINES)


def _fixed(*argv: str) -> ArgvBuilder:
	return lambda args: list(argv)


@dataclass(frozen=True)
class CatalogEntry:
	"""One diagnostic command: the binary, argv builder and grouping."""

	tool_id: ToolId
	category: str
	build: ArgvBuilder

	@property
	def description(self) -> str:
		return TOOL_DESCRIPTIONS.get(self.tool_id, "")

	def argv(self, args: ToolArgs) -> list[str]:
		return self.build(args)


CATALOG: dict[ToolId, CatalogEntry] = {
    e.tool_id: e
    for e in [
        CatalogEntry(
            ToolId.KUBECTL_GET_PODS, "kubernetes",
            lambda a: ["kubectl", "get", "pods", "--output=wide", *_ns(a)]),
        CatalogEntry(ToolId.KUBECTL_GET_SERVICES, "kubernetes",
                     lambda a: ["kubectl", "get", "services", *_ns(a)]),
        CatalogEntry(ToolId.KUBECTL_GET_NODES, "kubernetes",
                     _fixed("kubectl", "get", "nodes", "--output=wide")),
        CatalogEntry(
            ToolId.KUBECTL_GET_EVENTS, "kubernetes", lambda a: [
                "kubectl", "get", "events", "--sort-by=.lastTimestamp",
                *_ns(a)
            ]),
        CatalogEntry(ToolId.KUBECTL_GET_DEPLOYMENTS, "kubernetes",
                     lambda a: ["kubectl", "get", "deployments", *_ns(a)]),
        CatalogEntry(
            ToolId.KUBECTL_DESCRIBE_POD, "kubernetes",
            lambda a: ["kubectl", "describe", "pod", a.pod or "", *_ns(a)]),
        CatalogEntry(
            ToolId.KUBECTL_LOGS, "kubernetes", lambda a: [
                "kubectl", "logs", a.pod or "", f"--tail={_lines(a)}", *_ns(a)
            ]),
        CatalogEntry(ToolId.KUBECTL_TOP_PODS, "kubernetes",
                     lambda a: ["kubectl", "top", "pods", *_ns(a)]),
        CatalogEntry(ToolId.KUBECTL_TOP_NODES, "kubernetes",
                     _fixed("kubectl", "top", "nodes")),
        CatalogEntry(ToolId.KUBECTL_CLUSTER_INFO, "kubernetes",
                     _fixed("kubectl", "cluster-info")),
        CatalogEntry(
            ToolId.JOURNALCTL_RECENT, "journal",
            lambda a: ["journalctl", "--no-pager", "-n",
                       _lines(a)]),
        CatalogEntry(
            ToolId.JOURNALCTL_SERVICE, "journal", lambda a: [
                "journalctl", "-u", a.service or "", "--no-pager", "-n",
                _lines(a)
            ]),
        CatalogEntry(ToolId.JOURNALCTL_BOOT, "journal",
                     _fixed("journalctl", "-b", "--no-pager", "-n", "100")),
        CatalogEntry(
            ToolId.JOURNALCTL_ERRORS, "journal", lambda a:
            ["journalctl", "-p", "err", "--no-pager", "-n",
             _lines(a)]),
        CatalogEntry(
            ToolId.SYSTEMCTL_FAILED, "systemd",
            _fixed("systemctl", "list-units", "--failed", "--no-pager")),
        CatalogEntry(
            ToolId.SYSTEMCTL_STATUS, "systemd",
            lambda a: ["systemctl", "status", a.service or "", "--no-pager"]),
        CatalogEntry(ToolId.SYSTEMD_ANALYZE_BLAME, "systemd",
                     _fixed("systemd-analyze", "blame", "--no-pager")),
        CatalogEntry(ToolId.PS_AUX, "process",
                     _fixed("ps", "aux", "--sort=-%cpu")),
        CatalogEntry(ToolId.TOP, "process", _fixed("top", "-b", "-n", "1")),
        CatalogEntry(ToolId.FREE, "performance", _fixed("free", "-h")),
        CatalogEntry(ToolId.VMSTAT, "performance", _fixed("vmstat", "1", "3")),
        CatalogEntry(ToolId.IOSTAT, "performance",
                     _fixed("iostat", "-x", "1", "2")),
        CatalogEntry(ToolId.UPTIME, "system", _fixed("uptime")),
        CatalogEntry(ToolId.UNAME, "system", _fixed("uname", "-a")),
        CatalogEntry(ToolId.DF, "storage", _fixed("df", "-h")),
        CatalogEntry(ToolId.LSBLK, "storage", _fixed("lsblk")),
        CatalogEntry(ToolId.MOUNT, "storage", _fixed("mount")),
        CatalogEntry(ToolId.SS, "network", _fixed("ss", "-tulpn")),
        CatalogEntry(ToolId.IP_ADDR, "network", _fixed("ip", "addr", "show")),
        CatalogEntry(ToolId.IP_ROUTE, "network", _fixed("ip", "route", "show")),
        CatalogEntry(ToolId.DOCKER_PS, "container", _fixed("docker", "ps", "-a")),
        CatalogEntry(ToolId.DOCKER_STATS, "container",
                     _fixed("docker", "stats", "--no-stream")),
        CatalogEntry(ToolId.CAT_PROC_CGROUPS, "cgroups",
                     _fixed("cat", "/proc/cgroups")),
        CatalogEntry(ToolId.CAT_PROC_SELF_CGROUP, "cgroups",
                     _fixed("cat", "/proc/self/cgroup")),
    ]
}


def build_argv(tool_id: ToolId, args: ToolArgs) -> list[str]:
	"""Return the argv for tool_id with args applied."""
	return CATALOG[tool_id].argv(args)


def _decode(data: bytes | None) -> str:
	text = (data or b"").decode(errors="replace")
	if len(text) > MAX_OUTPUT_CHARS:
		text = text[:MAX_OUTPUT_CHARS] + "\n... (output truncated)"
	return text


class SubprocessToolExecutor:
	"""
	ToolExecutor that runs catalog commands as local subprocesses.

	Parameters:
		timeout: Seconds allowed per command before it is killed.
	"""

	def __init__(self, timeout: int = 30) -> None:
		self.timeout = timeout

	async def run(self, tool_id: ToolId, args: ToolArgs) -> ToolResult:
		"""Run one catalog command and capture its outcome."""
		argv = build_argv(tool_id, args)
		command = shlex.join(argv)
		start = time.monotonic()

		def elapsed_ms() -> int:
			return int((time.monotonic() - start) * 1000)

		logger.debug("exec %s", command)
		try:
			proc = await asyncio.create_subprocess_exec(
			    *argv,
			    stdout=asyncio.subprocess.PIPE,
			    stderr=asyncio.subprocess.PIPE,
			)
		except (FileNotFoundError, PermissionError) as exc:
			logger.warning("cannot run %s: %s", argv[0], exc)
			return ToolResult(
			    tool_name=tool_id.value,
			    command=command,
			    success=False,
			    error=f"{argv[0]} is not available: {exc}",
			    execution_time_ms=elapsed_ms(),
			)

		try:
			stdout, stderr = await asyncio.wait_for(proc.communicate(),
			                                        timeout=self.timeout)
		except asyncio.TimeoutError:
			proc.kill()
			await proc.wait()
			logger.warning("%s timed out after %ss", command, self.timeout)
			return ToolResult(
			    tool_name=tool_id.value,
			    command=command,
			    success=False,
			    error=f"command timed out after {self.timeout}s",
			    execution_time_ms=elapsed_ms(),
			)

		success = proc.returncode == 0
		error = None
		if not success:
			error = _decode(stderr).strip() or f"exit status {proc.returncode}"
		return ToolResult(
		    tool_name=tool_id.value,
		    command=command,
		    success=success,
		    output=_decode(stdout),
		    error=error,
		    execution_time_ms=elapsed_ms(),
		)


__all__ = [
    "CATALOG",
    "CatalogEntry",
    "DEFAULT_LOG_LINES",
    "SubprocessToolExecutor",
    "build_argv",
]
