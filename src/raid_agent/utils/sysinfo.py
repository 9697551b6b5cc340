"""
Host description passed to the agent as system context.

Collection is best-effort: anything that cannot be read is left unset
and omitted from the rendered context.
"""

from __future__ import annotations

import os
import platform
import shutil
from pathlib import Path
from typing import Optional

import psutil
from pydantic import BaseModel, Field

from raid_agent.utils.logging import get_logger

logger = get_logger(__name__)

OS_RELEASE = Path("/etc/os-release")
CGROUP_V2_MARKER = Path("/sys/fs/cgroup/cgroup.controllers")
CONTAINER_RUNTIMES = ("docker", "podman", "crictl")


class SystemInfo(BaseModel):
	"""Snapshot of the host the agent runs on."""

	os: str
	kernel: str
	arch: str
	hostname: str
	cpu_count: Optional[int] = None
	memory_total_bytes: Optional[int] = None
	memory_available_bytes: Optional[int] = None
	disk_total_bytes: Optional[int] = None
	disk_free_bytes: Optional[int] = None
	cgroup_version: Optional[str] = None
	kubectl_available: bool = False
	container_runtimes: list[str] = Field(default_factory=list)
	in_kubernetes: bool = False
	kubernetes_namespace: Optional[str] = None

	def to_context(self) -> str:
		"""Render as the plain-text context block given to the agent."""
		lines = [
		    f"OS: {self.os}",
		    f"Kernel: {self.kernel} ({self.arch})",
		    f"Hostname: {self.hostname}",
		]
		if self.cpu_count:
			lines.append(f"CPUs: {self.cpu_count}")
		if self.memory_total_bytes:
			mem = f"Memory: {_gib(self.memory_total_bytes)} total"
			if self.memory_available_bytes is not None:
				mem += f", {_gib(self.memory_available_bytes)} available"
			lines.append(mem)
		if self.disk_total_bytes:
			lines.append(f"Root disk: {_gib(self.disk_total_bytes)} total, "
			             f"{_gib(self.disk_free_bytes or 0)} free")
		if self.cgroup_version:
			lines.append(f"cgroups: {self.cgroup_version}")
		lines.append("kubectl: " +
		             ("available" if self.kubectl_available else "not found"))
		lines.append("Container runtimes: " +
		             (", ".join(self.container_runtimes) or "none"))
		if self.in_kubernetes:
			ns = self.kubernetes_namespace or "unknown"
			lines.append(f"Running inside Kubernetes (namespace {ns})")
		return "\n".join(lines)


def _gib(n: int) -> str:
	return f"{n / 1024**3:.1f} GiB"


def read_os_name(path: Path = OS_RELEASE) -> str:
	"""Return PRETTY_NAME from os-release, falling back to platform.system()."""
	try:
		for line in path.read_text(encoding="utf-8").splitlines():
			key, _, value = line.partition("=")
			if key == "PRETTY_NAME":
				return value.strip().strip('"')
	except OSError:
		logger.debug("cannot read %s", path)
	return platform.system()


def _kubernetes_namespace() -> Optional[str]:
	path = Path("/var/run/secrets/kubernetes.io/serviceaccount/namespace")
	try:
		return path.read_text(encoding="utf-8").strip() or None
	except OSError:
		return None


def collect_system_info() -> SystemInfo:
	"""Gather a SystemInfo snapshot of the current host."""
	uname = platform.uname()
	mem_total = mem_available = None
	try:
		memory = psutil.virtual_memory()
		mem_total, mem_available = memory.total, memory.available
	except (OSError, psutil.Error):
		logger.debug("memory usage unavailable", exc_info=True)
	disk_total = disk_free = None
	try:
		usage = psutil.disk_usage("/")
		disk_total, disk_free = usage.total, usage.free
	except (OSError, psutil.Error):
		logger.debug("disk usage unavailable", exc_info=True)
	cgroup = None
	if CGROUP_V2_MARKER.exists():
		cgroup = "v2"
	elif Path("/sys/fs/cgroup").is_dir():
		cgroup = "v1"
	in_k8s = bool(os.environ.get("KUBERNETES_SERVICE_HOST"))
	return SystemInfo(
	    os=read_os_name(),
	    kernel=uname.release,
	    arch=uname.machine,
	    hostname=uname.node,
	    cpu_count=psutil.cpu_count(),
	    memory_total_bytes=mem_total,
	    memory_available_bytes=mem_available,
	    disk_total_bytes=disk_total,
	    disk_free_bytes=disk_free,
	    cgroup_version=cgroup,
	    kubectl_available=shutil.which("kubectl") is not None,
	    container_runtimes=[
	        r for r in CONTAINER_RUNTIMES if shutil.which(r) is not None
	    ],
	    in_kubernetes=in_k8s,
	    kubernetes_namespace=_kubernetes_namespace() if in_k8s else None,
	)


def collect_system_context() -> str:
	"""Return the rendered system context for the current host."""
	return collect_system_info().to_context()


__all__ = [
    "SystemInfo",
    "collect_system_info",
    "collect_system_context",
    "read_os_name",
]
