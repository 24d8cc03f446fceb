# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: Apache-2.0

"""
Environment report assembly.

Runs every subsystem resolver in a fixed order and combines their results
into one EnvInfo. A fatal error from any resolver aborts the whole report;
degraded versions are kept in the report as unknown.
"""

import logging
from typing import Any, Dict, Optional

from ..config.runtime_config import RuntimeConfig
from ..core.errors import EnvInfoError
from ..system.host import HostPaths, collect_host_info
from .formatter import Output, write_report
from .models import EnvInfo
from .resolvers import (
    get_agent_info,
    get_hypervisor_info,
    get_image_info,
    get_kernel_info,
    get_meta_info,
    get_netmon_info,
    get_proxy_info,
    get_runtime_info,
    get_shim_info,
)

logger = logging.getLogger(__name__)

# Keys of the application metadata passed to handle_settings()
CONFIG_FILE_KEY = "configFile"
RUNTIME_CONFIG_KEY = "runtimeConfig"


def get_env_info(
    config_file: str,
    config: RuntimeConfig,
    host_paths: Optional[HostPaths] = None,
    probe_timeout: Optional[float] = None,
    arch: Optional[str] = None,
) -> EnvInfo:
    """
    Build the environment report.

    Args:
        config_file: Path of the file the configuration was loaded from
        config: Loaded runtime configuration
        host_paths: Host file locations, defaults to the real system files
        probe_timeout: Maximum time for each version probe, in seconds
        arch: Host architecture, defaults to the running host's

    Returns:
        EnvInfo: Complete report

    Raises:
        HostInfoError: If a mandatory host file cannot be read
        ConfigTypeError: If the shim or agent configuration has an unexpected type
    """
    logger.debug(f"Collecting environment information using {config_file}")

    meta = get_meta_info()
    runtime = get_runtime_info(config_file, config)
    proxy = get_proxy_info(config, probe_timeout)
    shim = get_shim_info(config, probe_timeout)
    agent = get_agent_info(config)
    host = collect_host_info(host_paths, arch)
    netmon = get_netmon_info(config, probe_timeout)
    hypervisor = get_hypervisor_info(config, probe_timeout)
    kernel = get_kernel_info(config)
    image = get_image_info(config)

    return EnvInfo(
        meta=meta,
        runtime=runtime,
        hypervisor=hypervisor,
        image=image,
        kernel=kernel,
        proxy=proxy,
        shim=shim,
        agent=agent,
        host=host,
        netmon=netmon,
    )


def handle_settings(
    output: Output,
    metadata: Dict[str, Any],
    use_json: bool = False,
    host_paths: Optional[HostPaths] = None,
    probe_timeout: Optional[float] = None,
) -> EnvInfo:
    """
    Build the environment report from application metadata and write it.

    Args:
        output: Destination stream or file path
        metadata: Application metadata holding ``configFile`` (str) and
            ``runtimeConfig`` (RuntimeConfig)
        use_json: Write JSON instead of TOML
        host_paths: Host file locations, defaults to the real system files
        probe_timeout: Maximum time for each version probe, in seconds

    Returns:
        EnvInfo: The report that was written

    Raises:
        EnvInfoError: If the metadata or output is invalid, or the report
            cannot be built or written
    """
    if output is None:
        raise EnvInfoError("no output destination given")

    if not isinstance(metadata, dict):
        raise EnvInfoError(f"invalid application metadata: expected dict, got {type(metadata).__name__}")

    config_file = metadata.get(CONFIG_FILE_KEY)
    if not isinstance(config_file, str):
        raise EnvInfoError(f"invalid '{CONFIG_FILE_KEY}' metadata: expected str, got {type(config_file).__name__}")

    config = metadata.get(RUNTIME_CONFIG_KEY)
    if not isinstance(config, RuntimeConfig):
        raise EnvInfoError(
            f"invalid '{RUNTIME_CONFIG_KEY}' metadata: expected RuntimeConfig, got {type(config).__name__}"
        )

    report = get_env_info(config_file, config, host_paths=host_paths, probe_timeout=probe_timeout)
    write_report(report, output, use_json)
    return report
