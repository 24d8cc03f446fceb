# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: Apache-2.0

"""
Environment report package.

Provides the report data model and its TOML / JSON rendering. The resolvers
and the report assembly live in ``vcenv.utils.env.resolvers`` and
``vcenv.utils.env.info``.
"""

# resolvers and info are imported directly to avoid circular imports
from . import formatter, models
from .formatter import (
    load_report,
    render_json,
    render_toml,
    report_to_dict,
    write_json_settings,
    write_report,
    write_toml_settings,
)
from .models import (
    FORMAT_VERSION,
    UNKNOWN,
    AgentInfo,
    CPUInfo,
    DistroInfo,
    EnvInfo,
    HostInfo,
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
    VersionInfo,
)

__all__ = [
    # Data model
    "FORMAT_VERSION",
    "UNKNOWN",
    "VersionInfo",
    "MetaInfo",
    "RuntimeConfigInfo",
    "RuntimeVersionInfo",
    "RuntimeInfo",
    "HypervisorInfo",
    "ImageInfo",
    "KernelInfo",
    "ProxyInfo",
    "ShimInfo",
    "AgentInfo",
    "DistroInfo",
    "CPUInfo",
    "HostInfo",
    "NetmonInfo",
    "EnvInfo",
    # Rendering
    "report_to_dict",
    "render_toml",
    "render_json",
    "write_toml_settings",
    "write_json_settings",
    "write_report",
    "load_report",
    # Sub-modules
    "formatter",
    "models",
]
