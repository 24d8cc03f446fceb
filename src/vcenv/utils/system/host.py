# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: Apache-2.0

"""
Host information collection utilities.

Collects the host facts included in the environment report: kernel version,
CPU vendor and model, distribution name and version, and whether the host
can run VM-based containers.

The kernel version and CPU information files exist on every Linux host, so
failing to read them aborts collection with HostInfoError. Distribution
release files vary between distributions and are optional.
"""

import logging
import os
import platform
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..core.errors import HostInfoError
from ..env.models import CPUInfo, DistroInfo, HostInfo

logger = logging.getLogger(__name__)

# Distributions whose /etc/os-release may be a stateless stub, with the
# authoritative values kept in the alternate release file
ALTERNATE_DISTRO_NAMES = ("Clear Linux OS",)

# platform.machine() values mapped to the architecture names used in reports
ARCH_NAMES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "ppc64le": "ppc64le",
    "s390x": "s390x",
}

# Per architecture: (vendor key, model key, vendor when the file has none)
CPU_FIELDS = {
    "amd64": ("vendor_id", "model name", ""),
    "arm64": ("CPU implementer", "CPU architecture", ""),
    "ppc64le": (None, "cpu", "IBM"),
    "s390x": ("vendor_id", "machine", ""),
}

# ARM "CPU implementer" codes
ARM_IMPLEMENTERS = {
    "0x41": "ARM Limited",
    "0x42": "Broadcom Corporation",
    "0x43": "Cavium Inc",
    "0x48": "HiSilicon",
    "0x4e": "NVIDIA Corporation",
    "0x50": "APM",
    "0x51": "Qualcomm",
    "0x53": "Samsung",
    "0x56": "Marvell",
    "0x61": "Apple",
    "0x69": "Intel",
    "0xc0": "Ampere Computing",
}

# CPU flags advertising hardware virtualization on x86
VIRTUALIZATION_FLAGS = ("vmx", "svm")


@dataclass(frozen=True)
class HostPaths:
    """Locations of the host files consulted for the report."""

    proc_version: str = "/proc/version"
    proc_cpuinfo: str = "/proc/cpuinfo"
    os_release: str = "/etc/os-release"
    os_release_alt: str = "/usr/lib/os-release"
    kvm_device: str = "/dev/kvm"
    vhost_vsock_device: str = "/dev/vhost-vsock"


def get_host_arch() -> str:
    """Architecture of the running host, e.g. ``amd64``."""
    machine = platform.machine()
    return ARCH_NAMES.get(machine.lower(), machine.lower())


def collect_host_info(paths: Optional[HostPaths] = None, arch: Optional[str] = None) -> HostInfo:
    """
    Collect host information.

    Args:
        paths: Host file locations, defaults to the real system files
        arch: Architecture name, defaults to the running host's

    Returns:
        HostInfo: Collected host facts

    Raises:
        HostInfoError: If the kernel version or CPU information cannot be read
    """
    paths = paths or HostPaths()
    arch = arch or get_host_arch()
    logger.debug(f"Collecting host information for {arch}")

    kernel = get_kernel_version(paths.proc_version)

    cpuinfo = _read_cpuinfo_section(paths.proc_cpuinfo)
    cpu = get_cpu_details(cpuinfo, arch)

    distro = get_distro_details(paths.os_release, paths.os_release_alt)

    return HostInfo(
        kernel=kernel,
        architecture=arch,
        distro=distro,
        cpu=cpu,
        vm_container_capable=is_vm_container_capable(cpuinfo, arch, paths.kvm_device),
        support_vsocks=supports_vsocks(paths.vhost_vsock_device),
    )


def get_kernel_version(proc_version: str) -> str:
    """
    Extract the kernel version from a ``/proc/version`` style file.

    The file reads ``Linux version <version> ...``; the version is the third
    whitespace-separated word.

    Raises:
        HostInfoError: If the file is missing, unreadable or malformed
    """
    contents = _read_file(proc_version, "kernel version")

    for line in contents.splitlines():
        fields = line.split()
        if len(fields) >= 3 and fields[1] == "version":
            return fields[2]

    raise HostInfoError(f"unexpected contents in kernel version file {proc_version}: {contents[:80]!r}", proc_version)


def get_cpu_details(cpuinfo: Dict[str, str], arch: str) -> CPUInfo:
    """
    Extract the CPU vendor and model for the given architecture.

    Keys missing from the CPU information leave the matching field empty.
    """
    vendor_key, model_key, default_vendor = CPU_FIELDS.get(arch, CPU_FIELDS["amd64"])

    vendor = cpuinfo.get(vendor_key, default_vendor) if vendor_key else default_vendor
    model = cpuinfo.get(model_key, "")

    if arch == "arm64":
        vendor = ARM_IMPLEMENTERS.get(vendor.lower(), vendor)
        if model.isdigit():
            model = f"v{model}"

    return CPUInfo(vendor=vendor, model=model)


def get_distro_details(os_release: str, os_release_alt: str) -> DistroInfo:
    """
    Read the distribution name and version.

    The alternate release file is only consulted when the primary file
    names a distribution listed in ALTERNATE_DISTRO_NAMES. Missing files
    yield empty values.
    """
    name, version = _read_os_release(os_release)

    if name in ALTERNATE_DISTRO_NAMES:
        logger.debug(f"Distribution {name} detected, consulting {os_release_alt}")
        alt_name, alt_version = _read_os_release(os_release_alt)
        if alt_name or alt_version:
            name, version = alt_name or name, alt_version or version

    return DistroInfo(name=name, version=version)


def is_vm_container_capable(cpuinfo: Dict[str, str], arch: str, kvm_device: str) -> bool:
    """
    Check whether the host can run VM-based containers.

    On x86 the CPU must advertise hardware virtualization; elsewhere the KVM
    device must be present.
    """
    if arch == "amd64":
        flags = cpuinfo.get("flags", "").split()
        return any(flag in flags for flag in VIRTUALIZATION_FLAGS)

    return os.path.exists(kvm_device)


def supports_vsocks(vhost_vsock_device: str) -> bool:
    """Check whether the host provides vhost vsock sockets."""
    return os.path.exists(vhost_vsock_device)


def _read_file(path: str, description: str) -> str:
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as e:
        raise HostInfoError(f"unable to read {description} file {path}: {e}", path) from e


def _read_cpuinfo_section(proc_cpuinfo: str) -> Dict[str, str]:
    """
    Parse the first processor section of a ``/proc/cpuinfo`` style file.

    Raises:
        HostInfoError: If the file is missing, unreadable or empty
    """
    contents = _read_file(proc_cpuinfo, "CPU information")

    section: Dict[str, str] = {}
    for line in contents.splitlines():
        if not line.strip():
            if section:
                # End of the first processor block
                break
            continue
        if ":" not in line:
            continue
        key, value = line.split(":", 1)
        section.setdefault(key.strip(), value.strip())

    if not section:
        raise HostInfoError(f"no CPU details found in {proc_cpuinfo}", proc_cpuinfo)

    return section


def _read_os_release(path: str) -> Tuple[str, str]:
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            lines = f.readlines()
    except FileNotFoundError:
        logger.debug(f"Distribution release file {path} not found")
        return "", ""
    except OSError as e:
        logger.warning(f"Could not read distribution release file {path}: {e}")
        return "", ""

    os_release = {}
    for line in lines:
        if "=" in line:
            key, value = line.strip().split("=", 1)
            os_release[key] = value.strip().strip("\"'")

    return os_release.get("NAME", ""), os_release.get("VERSION_ID", "")
