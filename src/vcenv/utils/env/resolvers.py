# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: Apache-2.0

"""
Per-subsystem information resolvers.

Each resolver maps the loaded runtime configuration to one section of the
environment report. Resolvers only read the configuration. Those with a
helper binary also probe it for its version; a failed probe is reported as
an unknown version and never fails the resolver.

The shim and agent resolvers are the only ones that can fail: their
configuration is polymorphic and an unexpected variant raises
ConfigTypeError.
"""

import logging
import os
import sys
from typing import Optional

from ..config.runtime_config import (
    AGENT_CONFIG_TYPES,
    SHIM_CONFIG_TYPES,
    KataAgentConfig,
    RuntimeConfig,
    ShimConfig,
    serialize_kernel_params,
)
from ..core.errors import ConfigTypeError
from ..system.version import OCI_SPEC_VERSION, probe_version, probe_version_string, runtime_version_info
from .models import (
    AgentInfo,
    HypervisorInfo,
    ImageInfo,
    KernelInfo,
    MetaInfo,
    NetmonInfo,
    ProxyInfo,
    RuntimeConfigInfo,
    RuntimeInfo,
    RuntimeVersionInfo,
    ShimInfo,
)

logger = logging.getLogger(__name__)


def get_meta_info() -> MetaInfo:
    return MetaInfo()


def get_runtime_path() -> str:
    """Absolute path of the program producing the report."""
    return os.path.realpath(sys.argv[0]) if sys.argv and sys.argv[0] else sys.executable


def get_runtime_info(config_file: str, config: RuntimeConfig) -> RuntimeInfo:
    """
    Describe the runtime itself.

    The runtime's version is self-reported, no process is spawned.
    """
    return RuntimeInfo(
        version=RuntimeVersionInfo(version=runtime_version_info(), oci=OCI_SPEC_VERSION),
        config=RuntimeConfigInfo(path=config_file),
        path=get_runtime_path(),
        debug=config.debug,
        trace=config.trace,
        disable_new_net_ns=config.disable_new_net_ns,
    )


def get_proxy_info(config: RuntimeConfig, probe_timeout: Optional[float] = None) -> ProxyInfo:
    proxy_config = config.proxy_config

    return ProxyInfo(
        type=config.proxy_type,
        version=probe_version(proxy_config.path, probe_timeout),
        path=proxy_config.path,
        debug=proxy_config.debug,
    )


def get_netmon_info(config: RuntimeConfig, probe_timeout: Optional[float] = None) -> NetmonInfo:
    netmon_config = config.netmon_config

    return NetmonInfo(
        version=probe_version(netmon_config.path, probe_timeout),
        path=netmon_config.path,
        debug=netmon_config.debug,
        enable=netmon_config.enable,
    )


def get_shim_info(config: RuntimeConfig, probe_timeout: Optional[float] = None) -> ShimInfo:
    """
    Describe the shim.

    Raises:
        ConfigTypeError: If the shim configuration is not a known variant
    """
    shim_config = config.shim_config
    if not isinstance(shim_config, SHIM_CONFIG_TYPES):
        raise ConfigTypeError("shim", ShimConfig, shim_config)

    return ShimInfo(
        type=config.shim_type,
        version=probe_version(shim_config.path, probe_timeout),
        path=shim_config.path,
        debug=shim_config.debug,
    )


def get_agent_info(config: RuntimeConfig) -> AgentInfo:
    """
    Describe the agent.

    Trace mode and type are copied as configured, even when tracing is off.

    Raises:
        ConfigTypeError: If the agent configuration is not a known variant
    """
    agent_config = config.agent_config
    if not isinstance(agent_config, AGENT_CONFIG_TYPES):
        raise ConfigTypeError("agent", KataAgentConfig, agent_config)

    return AgentInfo(
        type=config.agent_type,
        debug=agent_config.debug,
        trace=agent_config.trace,
        trace_mode=agent_config.trace_mode,
        trace_type=agent_config.trace_type,
    )


def get_hypervisor_info(config: RuntimeConfig, probe_timeout: Optional[float] = None) -> HypervisorInfo:
    hypervisor_config = config.hypervisor_config

    return HypervisorInfo(
        machine_type=hypervisor_config.machine_type,
        version=probe_version_string(hypervisor_config.hypervisor_path, probe_timeout),
        path=hypervisor_config.hypervisor_path,
        block_device_driver=hypervisor_config.block_device_driver,
        entropy_source=hypervisor_config.entropy_source,
        shared_fs=hypervisor_config.shared_fs,
        virtio_fs_daemon=hypervisor_config.virtio_fs_daemon,
        msize_9p=hypervisor_config.msize_9p,
        memory_slots=hypervisor_config.mem_slots,
        pcie_root_port=hypervisor_config.pcie_root_port,
        hotplug_vfio_on_root_bus=hypervisor_config.hotplug_vfio_on_root_bus,
        debug=hypervisor_config.debug,
    )


def get_image_info(config: RuntimeConfig) -> ImageInfo:
    return ImageInfo(path=config.hypervisor_config.image_path)


def get_kernel_info(config: RuntimeConfig) -> KernelInfo:
    hypervisor_config = config.hypervisor_config

    return KernelInfo(
        path=hypervisor_config.kernel_path,
        parameters=" ".join(serialize_kernel_params(hypervisor_config.kernel_params, "=")),
    )
