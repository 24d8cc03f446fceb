# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: Apache-2.0

"""
Configuration utilities package.

Provides the runtime configuration model and the loader that reads it from
a ``configuration.toml`` file, plus package metadata helpers.
"""

from .config_loader import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_PATHS,
    get_dist_name,
    get_dist_version,
    load_runtime_config,
    load_toml_file,
    resolve_config_path,
)
from .runtime_config import (
    AGENT_CONFIG_TYPES,
    SHIM_CONFIG_TYPES,
    HypervisorConfig,
    KataAgentConfig,
    KernelParam,
    NetmonConfig,
    ProxyConfig,
    RuntimeConfig,
    ShimConfig,
    parse_kernel_params,
    serialize_kernel_params,
)

__all__ = [
    # From config_loader
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATHS",
    "get_dist_name",
    "get_dist_version",
    "load_runtime_config",
    "load_toml_file",
    "resolve_config_path",
    # From runtime_config
    "AGENT_CONFIG_TYPES",
    "SHIM_CONFIG_TYPES",
    "HypervisorConfig",
    "KataAgentConfig",
    "KernelParam",
    "NetmonConfig",
    "ProxyConfig",
    "RuntimeConfig",
    "ShimConfig",
    "parse_kernel_params",
    "serialize_kernel_params",
]
