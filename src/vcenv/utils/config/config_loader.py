# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: Apache-2.0

"""
Configuration loader utilities.

This module provides utilities for locating and loading the runtime
configuration file (``configuration.toml``) into a RuntimeConfig, and for
reading package metadata.
"""

import importlib.metadata
import logging
import os
from typing import Any, Dict, Optional, Tuple

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib

from ..core.errors import ConfigLoadError
from .runtime_config import (
    HypervisorConfig,
    KataAgentConfig,
    NetmonConfig,
    ProxyConfig,
    RuntimeConfig,
    ShimConfig,
    parse_kernel_params,
)

logger = logging.getLogger(__name__)

# Environment variable overriding the configuration file location
CONFIG_ENV_VAR = "VCENV_CONFIG"

# Searched in order when no configuration file is given
DEFAULT_CONFIG_PATHS = [
    "/etc/kata-containers/configuration.toml",
    "/usr/share/defaults/kata-containers/configuration.toml",
]

# Section names mapped to the component types reported
PROXY_TYPES = {"kata": "kataProxy", "noop": "noopProxy", "none": "noProxy"}
SHIM_TYPES = {"kata": "kataShim", "noop": "noopShim"}
AGENT_TYPES = {"kata": "kata"}


def get_dist_name() -> Optional[str]:
    """Get the distribution name for the current package."""
    pkg = __name__.split(".", 1)[0]
    mapping = importlib.metadata.packages_distributions()
    return mapping.get(pkg, [None])[0]


def get_dist_version(dist: Optional[str] = None) -> str:
    """Get the version of a distribution."""
    if not dist:
        dist = get_dist_name()
    if not dist:
        return "unknown"
    try:
        return importlib.metadata.version(dist)
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def resolve_config_path(config_path: Optional[str] = None) -> str:
    """
    Determine which runtime configuration file to use.

    Args:
        config_path: Explicitly requested file, used as-is when given

    Returns:
        str: Path of the configuration file

    Raises:
        ConfigLoadError: If no file was given and none of the defaults exist
    """
    if config_path:
        return config_path

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        logger.debug(f"Using configuration file from {CONFIG_ENV_VAR}: {env_path}")
        return env_path

    for candidate in DEFAULT_CONFIG_PATHS:
        if os.path.exists(candidate):
            logger.debug(f"Using default configuration file: {candidate}")
            return candidate

    raise ConfigLoadError(f"no runtime configuration file found (checked {', '.join(DEFAULT_CONFIG_PATHS)})")


def load_toml_file(file_path: str) -> Dict[str, Any]:
    """
    Load a TOML file.

    Raises:
        ConfigLoadError: If the file cannot be read or is not valid TOML
    """
    try:
        with open(file_path, "rb") as f:
            return tomllib.load(f)
    except OSError as e:
        raise ConfigLoadError(f"unable to read configuration file {file_path}: {e}", file_path) from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigLoadError(f"invalid TOML in configuration file {file_path}: {e}", file_path) from e


def load_runtime_config(config_path: str) -> RuntimeConfig:
    """
    Load a runtime configuration file.

    The file uses one table per component, named after the component
    implementation, e.g. ``[hypervisor.qemu]`` or ``[shim.kata]``. Only the
    settings needed to describe the environment are read; nothing is
    validated beyond value types.

    Args:
        config_path: Path of the configuration file

    Returns:
        RuntimeConfig: Loaded configuration

    Raises:
        ConfigLoadError: If the file is missing, malformed or has no hypervisor
    """
    logger.debug(f"Loading runtime configuration from {config_path}")
    data = load_toml_file(config_path)

    hypervisor_name, hypervisor = _component_section(data, "hypervisor", config_path)
    if hypervisor_name is None:
        raise ConfigLoadError(f"no hypervisor configured in {config_path}", config_path)

    proxy_name, proxy = _component_section(data, "proxy", config_path)
    shim_name, shim = _component_section(data, "shim", config_path)
    agent_name, agent = _component_section(data, "agent", config_path)

    if agent_name is not None and agent_name not in AGENT_TYPES:
        raise ConfigLoadError(f"unsupported agent type '{agent_name}' in {config_path}", config_path)

    netmon = _table(data, "netmon", config_path)
    runtime = _table(data, "runtime", config_path)

    def get(table: Dict[str, Any], key: str, default: Any) -> Any:
        value = table.get(key, default)
        # bool subclasses int, so booleans are checked separately
        if not isinstance(value, type(default)) or isinstance(value, bool) != isinstance(default, bool):
            raise ConfigLoadError(
                f"invalid value for '{key}' in {config_path}: expected {type(default).__name__}, "
                f"got {type(value).__name__}",
                config_path,
            )
        return value

    defaults = HypervisorConfig()
    hypervisor_config = HypervisorConfig(
        hypervisor_path=_resolve_path(get(hypervisor, "path", "")),
        kernel_path=_resolve_path(get(hypervisor, "kernel", "")),
        image_path=_resolve_path(get(hypervisor, "image", "")),
        kernel_params=parse_kernel_params(get(hypervisor, "kernel_params", "")),
        machine_type=get(hypervisor, "machine_type", defaults.machine_type),
        block_device_driver=get(hypervisor, "block_device_driver", defaults.block_device_driver),
        entropy_source=get(hypervisor, "entropy_source", defaults.entropy_source),
        shared_fs=get(hypervisor, "shared_fs", defaults.shared_fs),
        virtio_fs_daemon=_resolve_path(get(hypervisor, "virtio_fs_daemon", "")),
        msize_9p=get(hypervisor, "msize_9p", defaults.msize_9p),
        mem_slots=get(hypervisor, "memory_slots", defaults.mem_slots),
        pcie_root_port=get(hypervisor, "pcie_root_port", defaults.pcie_root_port),
        hotplug_vfio_on_root_bus=get(hypervisor, "hotplug_vfio_on_root_bus", False),
        debug=get(hypervisor, "enable_debug", False),
    )

    return RuntimeConfig(
        hypervisor_type=hypervisor_name,
        hypervisor_config=hypervisor_config,
        proxy_type=PROXY_TYPES.get(proxy_name, proxy_name or ""),
        proxy_config=ProxyConfig(path=_resolve_path(get(proxy, "path", "")), debug=get(proxy, "enable_debug", False)),
        shim_type=SHIM_TYPES.get(shim_name, shim_name or ""),
        shim_config=ShimConfig(path=_resolve_path(get(shim, "path", "")), debug=get(shim, "enable_debug", False)),
        agent_type=AGENT_TYPES.get(agent_name, "kata"),
        agent_config=KataAgentConfig(
            debug=get(agent, "enable_debug", False),
            trace=get(agent, "enable_tracing", False),
            trace_mode=get(agent, "trace_mode", ""),
            trace_type=get(agent, "trace_type", ""),
        ),
        netmon_config=NetmonConfig(
            path=_resolve_path(get(netmon, "path", "")),
            debug=get(netmon, "enable_debug", False),
            enable=get(netmon, "enable_netmon", False),
        ),
        debug=get(runtime, "enable_debug", False),
        trace=get(runtime, "enable_tracing", False),
        disable_new_net_ns=get(runtime, "disable_new_netns", False),
    )


def _table(data: Dict[str, Any], name: str, config_path: str) -> Dict[str, Any]:
    table = data.get(name, {})
    if not isinstance(table, dict):
        raise ConfigLoadError(f"'{name}' in {config_path} must be a table", config_path)
    return table


def _component_section(data: Dict[str, Any], name: str, config_path: str) -> Tuple[Optional[str], Dict[str, Any]]:
    """Return the first ``[<name>.<impl>]`` table and its implementation name."""
    section = _table(data, name, config_path)
    for impl, table in section.items():
        if not isinstance(table, dict):
            raise ConfigLoadError(f"'{name}.{impl}' in {config_path} must be a table", config_path)
        if len(section) > 1:
            logger.warning(f"Multiple {name} sections in {config_path}, using '{impl}'")
        return impl, table
    return None, {}


def _resolve_path(path: str) -> str:
    if not path:
        return ""
    return os.path.realpath(os.path.expanduser(path))
