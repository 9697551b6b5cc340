from types import SimpleNamespace

import psutil
import pytest

from raid_agent.utils import sysinfo
from raid_agent.utils.sysinfo import (
    SystemInfo,
    collect_system_context,
    collect_system_info,
    read_os_name,
)

GIB = 1024**3


@pytest.fixture
def fake_host(monkeypatch):
	"""Fixed psutil readings and no container tooling on PATH."""
	monkeypatch.setattr(sysinfo.psutil, "cpu_count", lambda: 8)
	monkeypatch.setattr(
	    sysinfo.psutil, "virtual_memory",
	    lambda: SimpleNamespace(total=16 * GIB, available=4 * GIB))
	monkeypatch.setattr(sysinfo.psutil, "disk_usage",
	                    lambda path: SimpleNamespace(total=100 * GIB,
	                                                 free=25 * GIB))
	monkeypatch.setattr(sysinfo.shutil, "which",
	                    lambda name: "/usr/bin/kubectl"
	                    if name == "kubectl" else None)
	monkeypatch.delenv("KUBERNETES_SERVICE_HOST", raising=False)


def test_read_os_name(tmp_path):
	path = tmp_path / "os-release"
	path.write_text('NAME="Fedora"\nPRETTY_NAME="Fedora Linux 40"\n',
	                encoding="utf-8")
	assert read_os_name(path) == "Fedora Linux 40"


def test_read_os_name_missing_file(tmp_path):
	assert read_os_name(tmp_path / "nope") == sysinfo.platform.system()


def test_to_context_renders_known_fields():
	info = SystemInfo(os="Ubuntu 24.04",
	                  kernel="6.8.0",
	                  arch="x86_64",
	                  hostname="node-1",
	                  cpu_count=8,
	                  memory_total_bytes=16 * GIB,
	                  memory_available_bytes=4 * GIB,
	                  kubectl_available=True,
	                  container_runtimes=["docker"],
	                  in_kubernetes=True,
	                  kubernetes_namespace="ops")
	text = info.to_context()
	assert "OS: Ubuntu 24.04" in text
	assert "Kernel: 6.8.0 (x86_64)" in text
	assert "CPUs: 8" in text
	assert "Memory: 16.0 GiB total, 4.0 GiB available" in text
	assert "kubectl: available" in text
	assert "Container runtimes: docker" in text
	assert "Running inside Kubernetes (namespace ops)" in text


def test_to_context_omits_unknowns():
	text = SystemInfo(os="x", kernel="k", arch="a", hostname="h").to_context()
	assert "Memory" not in text
	assert "kubectl: not found" in text
	assert "Container runtimes: none" in text
	assert "Kubernetes" not in text


def test_collect_system_info_uses_psutil(fake_host):
	info = collect_system_info()
	assert info.kernel
	assert info.cpu_count == 8
	assert info.memory_total_bytes == 16 * GIB
	assert info.memory_available_bytes == 4 * GIB
	assert (info.disk_total_bytes, info.disk_free_bytes) == (100 * GIB,
	                                                         25 * GIB)
	assert info.kubectl_available is True
	assert info.container_runtimes == []
	assert info.in_kubernetes is False

	text = collect_system_context()
	assert "Memory: 16.0 GiB total, 4.0 GiB available" in text
	assert "Root disk: 100.0 GiB total, 25.0 GiB free" in text


def test_collect_system_info_tolerates_psutil_errors(fake_host, monkeypatch):

	def denied(*args):
		raise psutil.AccessDenied()

	monkeypatch.setattr(sysinfo.psutil, "virtual_memory", denied)
	monkeypatch.setattr(sysinfo.psutil, "disk_usage", denied)
	info = collect_system_info()
	assert info.memory_total_bytes is None
	assert info.disk_total_bytes is None
	assert "Memory" not in info.to_context()
	assert "CPUs: 8" in info.to_context()
