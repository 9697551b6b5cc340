"""
Diagnostic tool identifiers, arguments and results.

The catalog of tools is a fixed enumeration; the enum value is the exact
name the provider writes after the tool-invocation marker.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ToolId(str, Enum):
	"""Identifier of a diagnostic tool in the catalog."""

	# Kubernetes
	KUBECTL_GET_PODS = "kubectl_get_pods"
	KUBECTL_GET_SERVICES = "kubectl_get_services"
	KUBECTL_GET_NODES = "kubectl_get_nodes"
	KUBECTL_GET_EVENTS = "kubectl_get_events"
	KUBECTL_GET_DEPLOYMENTS = "kubectl_get_deployments"
	KUBECTL_DESCRIBE_POD = "kubectl_describe_pod"
	KUBECTL_LOGS = "kubectl_logs"
	KUBECTL_TOP_PODS = "kubectl_top_pods"
	KUBECTL_TOP_NODES = "kubectl_top_nodes"
	KUBECTL_CLUSTER_INFO = "kubectl_cluster_info"
	# Journal and systemd
	JOURNALCTL_RECENT = "journalctl_recent"
	JOURNALCTL_SERVICE = "journalctl_service"
	JOURNALCTL_BOOT = "journalctl_boot"
	JOURNALCTL_ERRORS = "journalctl_errors"
	SYSTEMCTL_FAILED = "systemctl_failed"
	SYSTEMCTL_STATUS = "systemctl_status"
	SYSTEMD_ANALYZE_BLAME = "systemd_analyze_blame"
	# Processes and performance
	PS_AUX = "ps_aux"
	TOP = "top"
	FREE = "free"
	VMSTAT = "vmstat"
	IOSTAT = "iostat"
	UPTIME = "uptime"
	UNAME = "uname"
	# Storage
	DF = "df"
	LSBLK = "lsblk"
	MOUNT = "mount"
	# Network
	SS = "ss"
	IP_ADDR = "ip_addr"
	IP_ROUTE = "ip_route"
	# Containers and cgroups
	DOCKER_PS = "docker_ps"
	DOCKER_STATS = "docker_stats"
	CAT_PROC_CGROUPS = "cat_proc_cgroups"
	CAT_PROC_SELF_CGROUP = "cat_proc_self_cgroup"


# Name -> identifier lookup used by the action parser (case-sensitive).
TOOL_NAMES: dict[str, ToolId] = {t.value: t for t in ToolId}

TOOL_DESCRIPTIONS: dict[ToolId, str] = {
    ToolId.KUBECTL_GET_PODS: "List pods with node and IP [--namespace]",
    ToolId.KUBECTL_GET_SERVICES: "List services [--namespace]",
    ToolId.KUBECTL_GET_NODES: "List cluster nodes with status and version",
    ToolId.KUBECTL_GET_EVENTS: "Recent cluster events [--namespace]",
    ToolId.KUBECTL_GET_DEPLOYMENTS: "List deployments [--namespace]",
    ToolId.KUBECTL_DESCRIBE_POD: "Describe one pod --pod [--namespace]",
    ToolId.KUBECTL_LOGS: "Pod logs --pod [--namespace] [--lines]",
    ToolId.KUBECTL_TOP_PODS: "Pod CPU/memory usage [--namespace]",
    ToolId.KUBECTL_TOP_NODES: "Node CPU/memory usage",
    ToolId.KUBECTL_CLUSTER_INFO: "Cluster endpoints",
    ToolId.JOURNALCTL_RECENT: "Recent journal entries [--lines]",
    ToolId.JOURNALCTL_SERVICE: "Journal for one unit --service [--lines]",
    ToolId.JOURNALCTL_BOOT: "Journal for the current boot",
    ToolId.JOURNALCTL_ERRORS: "Error-priority journal entries [--lines]",
    ToolId.SYSTEMCTL_FAILED: "List failed systemd units",
    ToolId.SYSTEMCTL_STATUS: "Status of one unit --service",
    ToolId.SYSTEMD_ANALYZE_BLAME: "Units ordered by startup time",
    ToolId.PS_AUX: "All processes with CPU/memory usage",
    ToolId.TOP: "One batch snapshot of top",
    ToolId.FREE: "Memory and swap usage",
    ToolId.VMSTAT: "Virtual memory statistics",
    ToolId.IOSTAT: "Disk I/O statistics",
    ToolId.UPTIME: "Uptime and load averages",
    ToolId.UNAME: "Kernel and architecture",
    ToolId.DF: "Filesystem usage",
    ToolId.LSBLK: "Block devices",
    ToolId.MOUNT: "Mounted filesystems",
    ToolId.SS: "Listening sockets",
    ToolId.IP_ADDR: "Network interfaces and addresses",
    ToolId.IP_ROUTE: "Routing table",
    ToolId.DOCKER_PS: "Running and stopped containers",
    ToolId.DOCKER_STATS: "Container resource usage snapshot",
    ToolId.CAT_PROC_CGROUPS: "Available cgroup controllers",
    ToolId.CAT_PROC_SELF_CGROUP: "cgroup membership of this process",
}


class ToolArgs(BaseModel):
	"""Optional named arguments accepted by diagnostic tools."""

	namespace: Optional[str] = Field(default=None,
	                                 description="Kubernetes namespace")
	pod: Optional[str] = Field(default=None, description="Pod name")
	service: Optional[str] = Field(default=None,
	                               description="systemd service name")
	lines: Optional[int] = Field(default=None,
	                             ge=0,
	                             description="Number of log lines")


class ToolResult(BaseModel):
	"""
	Captured outcome of one tool run.

	Attributes:
		tool_name: Catalog name of the tool.
		command: Literal command string that was executed.
		success: Whether the command exited successfully.
		output: Captured standard output.
		error: Error text (stderr or failure reason) if unsuccessful.
		execution_time_ms: Wall-clock duration in milliseconds.
	"""

	tool_name: str
	command: str
	success: bool
	output: str = ""
	error: Optional[str] = None
	execution_time_ms: int = 0


__all__ = ["ToolId", "TOOL_NAMES", "TOOL_DESCRIPTIONS", "ToolArgs", "ToolResult"]
