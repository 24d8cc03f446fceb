# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: Apache-2.0

"""
Environment report data model.

Every descriptor is a frozen dataclass. The declared field order is the
order used when the report is rendered, and the rendered key of a field is
its CamelCase name unless the field declares an explicit ``key`` in its
metadata (used for acronyms such as ``PCIeRootPort``).
"""

import re
from dataclasses import dataclass, field
from typing import Optional

# Version of the report layout, bumped whenever a field is added or renamed
FORMAT_VERSION = "1.0.24"

# Placeholder rendered when a version cannot be determined
UNKNOWN = "<<unknown>>"

# MAJOR.MINOR[.PATCH][-PRERELEASE][+BUILD]
_VERSION_TOKEN_RE = re.compile(
    r"(?<![\w.])v?(?P<major>\d+)\.(?P<minor>\d+)(?:\.(?P<patch>\d+))?"
    r"(?P<pre>-[0-9A-Za-z.-]+)?(?P<build>\+[0-9A-Za-z.-]+)?"
)
_COMMIT_LINE_RE = re.compile(r"commit\s*[:=]?\s*(?P<commit>[0-9a-fA-F]{7,40})\b", re.IGNORECASE)
_COMMIT_SUFFIX_RE = re.compile(r"(?:\+git\.|-g)(?P<commit>[0-9a-fA-F]{7,40})\b")


def _key(name: str) -> dict:
    return {"key": name}


@dataclass(frozen=True)
class VersionInfo:
    """
    Version of a component.

    Build instances with ``VersionInfo.from_output()`` or
    ``VersionInfo.unknown()``. Only a parsed semantic version is known; the
    unknown variant and the empty zero value both report ``is_known`` False.
    """

    semver: str = ""
    major: int = 0
    minor: int = 0
    patch: int = 0
    commit: str = ""

    @classmethod
    def unknown(cls) -> "VersionInfo":
        return cls(semver=UNKNOWN, commit=UNKNOWN)

    @classmethod
    def from_output(cls, output: Optional[str]) -> "VersionInfo":
        """
        Parse free-form ``--version`` output.

        The first version token found in the output becomes the semantic
        version; a commit is taken from a ``commit: <hash>`` line or from a
        ``+git.<hash>`` / ``-g<hash>`` suffix when present.

        Args:
            output: Text printed by the component, or None if it could not be run

        Returns:
            VersionInfo: Parsed version, or the unknown variant
        """
        if not output:
            return cls.unknown()

        match = _VERSION_TOKEN_RE.search(output)
        if not match:
            return cls.unknown()

        commit = ""
        commit_match = _COMMIT_LINE_RE.search(output) or _COMMIT_SUFFIX_RE.search(match.group(0))
        if commit_match:
            commit = commit_match.group("commit")

        return cls(
            semver=match.group(0).lstrip("v"),
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch") or 0),
            commit=commit,
        )

    @property
    def is_known(self) -> bool:
        return bool(self.semver) and self.semver != UNKNOWN


@dataclass(frozen=True)
class MetaInfo:
    version: str = FORMAT_VERSION


@dataclass(frozen=True)
class RuntimeConfigInfo:
    path: str = ""


@dataclass(frozen=True)
class RuntimeVersionInfo:
    version: VersionInfo = field(default_factory=VersionInfo.unknown)
    oci: str = field(default="", metadata=_key("OCI"))


@dataclass(frozen=True)
class RuntimeInfo:
    version: RuntimeVersionInfo = field(default_factory=RuntimeVersionInfo)
    config: RuntimeConfigInfo = field(default_factory=RuntimeConfigInfo)
    path: str = ""
    debug: bool = False
    trace: bool = False
    disable_new_net_ns: bool = False


@dataclass(frozen=True)
class HypervisorInfo:
    machine_type: str = ""
    version: str = ""
    path: str = ""
    block_device_driver: str = ""
    entropy_source: str = ""
    shared_fs: str = field(default="", metadata=_key("SharedFS"))
    virtio_fs_daemon: str = field(default="", metadata=_key("VirtioFSDaemon"))
    msize_9p: int = field(default=0, metadata=_key("Msize9p"))
    memory_slots: int = 0
    pcie_root_port: int = field(default=0, metadata=_key("PCIeRootPort"))
    hotplug_vfio_on_root_bus: bool = field(default=False, metadata=_key("HotplugVFIOOnRootBus"))
    debug: bool = False


@dataclass(frozen=True)
class ImageInfo:
    path: str = ""


@dataclass(frozen=True)
class KernelInfo:
    path: str = ""
    parameters: str = ""


@dataclass(frozen=True)
class ProxyInfo:
    type: str = ""
    version: VersionInfo = field(default_factory=VersionInfo.unknown)
    path: str = ""
    debug: bool = False


@dataclass(frozen=True)
class ShimInfo:
    type: str = ""
    version: VersionInfo = field(default_factory=VersionInfo.unknown)
    path: str = ""
    debug: bool = False


@dataclass(frozen=True)
class AgentInfo:
    type: str = ""
    debug: bool = False
    trace: bool = False
    trace_mode: str = ""
    trace_type: str = ""


@dataclass(frozen=True)
class DistroInfo:
    name: str = ""
    version: str = ""


@dataclass(frozen=True)
class CPUInfo:
    vendor: str = ""
    model: str = ""


@dataclass(frozen=True)
class HostInfo:
    kernel: str = ""
    architecture: str = ""
    distro: DistroInfo = field(default_factory=DistroInfo)
    cpu: CPUInfo = field(default_factory=CPUInfo, metadata=_key("CPU"))
    vm_container_capable: bool = field(default=False, metadata=_key("VMContainerCapable"))
    support_vsocks: bool = field(default=False, metadata=_key("SupportVSocks"))


@dataclass(frozen=True)
class NetmonInfo:
    version: VersionInfo = field(default_factory=VersionInfo.unknown)
    path: str = ""
    debug: bool = False
    enable: bool = False


@dataclass(frozen=True)
class EnvInfo:
    """Complete environment report, one descriptor per subsystem plus the host."""

    meta: MetaInfo = field(default_factory=MetaInfo)
    runtime: RuntimeInfo = field(default_factory=RuntimeInfo)
    hypervisor: HypervisorInfo = field(default_factory=HypervisorInfo)
    image: ImageInfo = field(default_factory=ImageInfo)
    kernel: KernelInfo = field(default_factory=KernelInfo)
    proxy: ProxyInfo = field(default_factory=ProxyInfo)
    shim: ShimInfo = field(default_factory=ShimInfo)
    agent: AgentInfo = field(default_factory=AgentInfo)
    host: HostInfo = field(default_factory=HostInfo)
    netmon: NetmonInfo = field(default_factory=NetmonInfo)
