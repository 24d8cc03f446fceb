# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: Apache-2.0

"""
Runtime configuration model.

These dataclasses hold an already-loaded runtime configuration. The shim and
agent settings are polymorphic: ``RuntimeConfig.shim_config`` and
``RuntimeConfig.agent_config`` hold one of the variants listed in
SHIM_CONFIG_TYPES and AGENT_CONFIG_TYPES, and consumers must check the
variant before use.
"""

from dataclasses import dataclass, field
from typing import Any, List

DEFAULT_MACHINE_TYPE = "pc"
DEFAULT_BLOCK_DEVICE_DRIVER = "virtio-scsi"
DEFAULT_SHARED_FS = "virtio-9p"
DEFAULT_ENTROPY_SOURCE = "/dev/urandom"
DEFAULT_MSIZE_9P = 8192
DEFAULT_MEMORY_SLOTS = 10


@dataclass
class KernelParam:
    key: str = ""
    value: str = ""


@dataclass
class HypervisorConfig:
    hypervisor_path: str = ""
    kernel_path: str = ""
    image_path: str = ""
    kernel_params: List[KernelParam] = field(default_factory=list)
    machine_type: str = DEFAULT_MACHINE_TYPE
    block_device_driver: str = DEFAULT_BLOCK_DEVICE_DRIVER
    entropy_source: str = DEFAULT_ENTROPY_SOURCE
    shared_fs: str = DEFAULT_SHARED_FS
    virtio_fs_daemon: str = ""
    msize_9p: int = DEFAULT_MSIZE_9P
    mem_slots: int = DEFAULT_MEMORY_SLOTS
    pcie_root_port: int = 0
    hotplug_vfio_on_root_bus: bool = False
    debug: bool = False


@dataclass
class ProxyConfig:
    path: str = ""
    debug: bool = False


@dataclass
class ShimConfig:
    path: str = ""
    debug: bool = False


@dataclass
class KataAgentConfig:
    debug: bool = False
    trace: bool = False
    trace_mode: str = ""
    trace_type: str = ""


@dataclass
class NetmonConfig:
    path: str = ""
    debug: bool = False
    enable: bool = False


SHIM_CONFIG_TYPES = (ShimConfig,)
AGENT_CONFIG_TYPES = (KataAgentConfig,)


@dataclass
class RuntimeConfig:
    """Loaded runtime configuration, treated as read-only by consumers."""

    hypervisor_type: str = "qemu"
    hypervisor_config: HypervisorConfig = field(default_factory=HypervisorConfig)
    proxy_type: str = ""
    proxy_config: ProxyConfig = field(default_factory=ProxyConfig)
    shim_type: str = ""
    shim_config: Any = field(default_factory=ShimConfig)
    agent_type: str = ""
    agent_config: Any = field(default_factory=KataAgentConfig)
    netmon_config: NetmonConfig = field(default_factory=NetmonConfig)
    debug: bool = False
    trace: bool = False
    disable_new_net_ns: bool = False


def parse_kernel_params(params: str) -> List[KernelParam]:
    """
    Split a kernel command line into parameters.

    ``"foo=bar xyz"`` becomes ``[KernelParam("foo", "bar"), KernelParam("xyz", "")]``.
    """
    result = []
    for word in params.split():
        key, _, value = word.partition("=")
        result.append(KernelParam(key=key, value=value))
    return result


def serialize_kernel_params(params: List[KernelParam], delim: str = "=") -> List[str]:
    """
    Render kernel parameters as ``key<delim>value`` strings.

    A parameter with only a key or only a value is rendered as that part;
    a parameter with neither is dropped.
    """
    result = []
    for param in params:
        if param.key and param.value:
            result.append(f"{param.key}{delim}{param.value}")
        elif param.key:
            result.append(param.key)
        elif param.value:
            result.append(param.value)
    return result
