# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: Apache-2.0

"""
System information utilities package.

Collects host facts from the operating system and probes helper binaries
for their versions.
"""

from . import host, version
from .host import HostPaths, collect_host_info, get_host_arch
from .version import (
    DEFAULT_PROBE_TIMEOUT,
    OCI_SPEC_VERSION,
    get_command_version,
    probe_version,
    probe_version_string,
    runtime_version_info,
)

__all__ = [
    # Host facts
    "HostPaths",
    "collect_host_info",
    "get_host_arch",
    # Version probing
    "DEFAULT_PROBE_TIMEOUT",
    "OCI_SPEC_VERSION",
    "get_command_version",
    "probe_version",
    "probe_version_string",
    "runtime_version_info",
    # Submodules
    "host",
    "version",
]
