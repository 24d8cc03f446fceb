# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: Apache-2.0

"""
Component version probing.

Helper binaries (hypervisor, proxy, shim, network monitor) are asked for
their version by running them once with ``--version``. A probe never raises
for execution problems: a binary that is missing, not executable, exits
non-zero, hangs past the timeout or prints nothing usable is reported with
the unknown version, and the caller decides whether that matters.
"""

import logging
import re
from dataclasses import replace
from typing import Optional

from ..core.process import run_command
from ..env.models import UNKNOWN, VersionInfo

logger = logging.getLogger(__name__)

VERSION_FLAG = "--version"

# Upper bound for a single probe, in seconds
DEFAULT_PROBE_TIMEOUT = 10.0

# Version of the OCI runtime specification implemented by the runtime
OCI_SPEC_VERSION = "1.0.2-dev"

# Commit in a setuptools_scm local version label, e.g. +g1234abc.d20250101
_SCM_COMMIT_RE = re.compile(r"\+g(?P<commit>[0-9a-f]{7,40})")


def get_command_version(path: str, timeout: Optional[float] = None) -> Optional[str]:
    """
    Run ``path --version`` and return its trimmed standard output.

    Args:
        path: Path of the executable, not required to exist
        timeout: Maximum time to wait for the process, in seconds

    Returns:
        Optional[str]: Trimmed output, or None if the command did not succeed
    """
    if not isinstance(path, str):
        raise TypeError(f"executable path must be a string, got {type(path).__name__}")

    if not path:
        logger.debug("No executable configured, version unknown")
        return None

    result = run_command([path, VERSION_FLAG], timeout=timeout or DEFAULT_PROBE_TIMEOUT)
    if not result.success:
        logger.debug(f"Version query failed for {path}: {result} {result.stderr.strip()}")
        return None

    output = result.stdout.strip()
    if not output:
        logger.debug(f"Version query for {path} produced no output")
        return None

    return output


def probe_version(path: str, timeout: Optional[float] = None) -> VersionInfo:
    """
    Probe an executable and parse its version.

    Args:
        path: Path of the executable
        timeout: Maximum time to wait for the process, in seconds

    Returns:
        VersionInfo: Parsed version, or VersionInfo.unknown()
    """
    version = VersionInfo.from_output(get_command_version(path, timeout))
    if not version.is_known:
        logger.debug(f"Unable to determine version of {path}")
    return version


def probe_version_string(path: str, timeout: Optional[float] = None) -> str:
    """
    Probe an executable and return the first line of its version output.

    Used for components whose version banner is reported verbatim, such as
    ``QEMU emulator version 2.7.0``.

    Args:
        path: Path of the executable
        timeout: Maximum time to wait for the process, in seconds

    Returns:
        str: First output line, or the unknown placeholder
    """
    output = get_command_version(path, timeout)
    first_line = output.splitlines()[0].strip() if output else ""
    if not VersionInfo.from_output(first_line).is_known:
        logger.debug(f"Unable to determine version of {path}")
        return UNKNOWN

    return first_line


def runtime_version_info() -> VersionInfo:
    """Self-reported version of this program, without spawning a process."""
    from vcenv import __commit__, __version__

    version = VersionInfo.from_output(__version__)
    if not version.is_known:
        return version

    # Keep the PEP 440 tail of development builds, e.g. 0.1.dev3+g1234abc
    commit = __commit__
    if not commit:
        match = _SCM_COMMIT_RE.search(__version__)
        commit = match.group("commit") if match else version.commit
    return replace(version, semver=__version__.strip().lstrip("v"), commit=commit)
