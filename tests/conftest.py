# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: Apache-2.0

import os
from typing import Optional

import pytest

from vcenv.utils.config import (
    HypervisorConfig,
    KataAgentConfig,
    KernelParam,
    NetmonConfig,
    ProxyConfig,
    RuntimeConfig,
    ShimConfig,
)
from vcenv.utils.system import HostPaths

HYPERVISOR_VERSION = "QEMU emulator version 2.7.0"
PROXY_VERSION = "kata-proxy version 1.0.0-rc1\ncommit: 0a1b2c3d4e5f"
SHIM_VERSION = "kata-shim version 1.2.3"
NETMON_VERSION = "kata-netmon version 0.9.1"

PROC_VERSION = "Linux version 5.4.0-test (builder@example) (gcc version 9.3.0) #1 SMP\n"

AMD64_CPUINFO = """processor\t: 0
vendor_id\t: GenuineIntel
model name\t: Intel(R) Xeon(R) CPU E5-2680 v4 @ 2.40GHz
flags\t\t: fpu vme de pse vmx sse sse2

processor\t: 1
vendor_id\t: AuthenticAMD
model name\t: Second CPU
flags\t\t: fpu
"""

OS_RELEASE = 'NAME="Ubuntu"\nVERSION="20.04.6 LTS (Focal Fossa)"\nID=ubuntu\nVERSION_ID="20.04"\n'


@pytest.fixture
def make_version_binary(tmp_path):
    """Factory creating shell scripts that answer ``--version``."""

    def _make(name: str, output: str, exit_code: int = 0, sleep: Optional[float] = None) -> str:
        path = tmp_path / "bin" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        lines = ["#!/bin/sh"]
        if sleep is not None:
            lines.append(f"exec sleep {sleep}")
        lines += ["cat <<'VERSION_EOF'", output, "VERSION_EOF", f"exit {exit_code}"]
        path.write_text("\n".join(lines) + "\n")
        path.chmod(0o755)
        return str(path)

    return _make


@pytest.fixture
def host_paths(tmp_path):
    """HostPaths pointing at fake host files for an x86 host."""
    host_dir = tmp_path / "host"
    host_dir.mkdir()

    (host_dir / "version").write_text(PROC_VERSION)
    (host_dir / "cpuinfo").write_text(AMD64_CPUINFO)
    (host_dir / "os-release").write_text(OS_RELEASE)
    (host_dir / "vhost-vsock").write_text("")

    return HostPaths(
        proc_version=str(host_dir / "version"),
        proc_cpuinfo=str(host_dir / "cpuinfo"),
        os_release=str(host_dir / "os-release"),
        os_release_alt=str(host_dir / "alt-os-release"),
        kvm_device=str(host_dir / "kvm"),
        vhost_vsock_device=str(host_dir / "vhost-vsock"),
    )


@pytest.fixture
def runtime_config(tmp_path, make_version_binary):
    """Complete runtime configuration with working helper binaries."""
    return RuntimeConfig(
        hypervisor_type="qemu",
        hypervisor_config=HypervisorConfig(
            hypervisor_path=make_version_binary("hypervisor", HYPERVISOR_VERSION),
            kernel_path=str(tmp_path / "vmlinuz"),
            image_path=str(tmp_path / "image"),
            kernel_params=[KernelParam("foo", "bar"), KernelParam("xyz", "")],
            machine_type="q35",
            block_device_driver="virtio-blk",
            entropy_source="/dev/urandom",
            shared_fs="virtio-fs",
            virtio_fs_daemon=str(tmp_path / "virtiofsd"),
            msize_9p=8192,
            mem_slots=10,
            pcie_root_port=2,
            hotplug_vfio_on_root_bus=True,
            debug=True,
        ),
        proxy_type="kataProxy",
        proxy_config=ProxyConfig(path=make_version_binary("proxy", PROXY_VERSION), debug=False),
        shim_type="kataShim",
        shim_config=ShimConfig(path=make_version_binary("shim", SHIM_VERSION), debug=True),
        agent_type="kata",
        agent_config=KataAgentConfig(debug=True, trace=True, trace_mode="dynamic", trace_type="isolated"),
        netmon_config=NetmonConfig(path=make_version_binary("netmon", NETMON_VERSION), debug=True, enable=True),
        debug=True,
        trace=False,
        disable_new_net_ns=False,
    )


@pytest.fixture
def config_file(tmp_path, runtime_config):
    """configuration.toml describing the same components as runtime_config."""
    hypervisor = runtime_config.hypervisor_config
    path = tmp_path / "configuration.toml"
    path.write_text(
        f"""
[hypervisor.qemu]
path = "{hypervisor.hypervisor_path}"
kernel = "{hypervisor.kernel_path}"
image = "{hypervisor.image_path}"
kernel_params = "foo=bar xyz"
machine_type = "q35"
block_device_driver = "virtio-blk"
shared_fs = "virtio-fs"
memory_slots = 10
enable_debug = true

[proxy.kata]
path = "{runtime_config.proxy_config.path}"

[shim.kata]
path = "{runtime_config.shim_config.path}"
enable_debug = true

[agent.kata]
enable_tracing = true
trace_mode = "dynamic"
trace_type = "isolated"

[netmon]
path = "{runtime_config.netmon_config.path}"
enable_netmon = true

[runtime]
enable_debug = true
"""
    )
    return os.path.realpath(path)
