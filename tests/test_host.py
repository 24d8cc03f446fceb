# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: Apache-2.0

import os
from dataclasses import replace

import pytest

from vcenv.utils.core.errors import HostInfoError
from vcenv.utils.env.models import CPUInfo, DistroInfo
from vcenv.utils.system import host
from vcenv.utils.system.host import (
    collect_host_info,
    get_cpu_details,
    get_distro_details,
    get_host_arch,
    get_kernel_version,
    is_vm_container_capable,
)

ARM64_CPUINFO = """processor\t: 0
BogoMIPS\t: 100.00
Features\t: fp asimd evtstrm
CPU implementer\t: 0x41
CPU architecture: 8
CPU variant\t: 0x0
CPU part\t: 0xd08
"""


def test_collect_host_info(host_paths):
    info = collect_host_info(host_paths, arch="amd64")

    assert info.kernel == "5.4.0-test"
    assert info.architecture == "amd64"
    assert info.distro == DistroInfo(name="Ubuntu", version="20.04")
    assert info.cpu == CPUInfo(vendor="GenuineIntel", model="Intel(R) Xeon(R) CPU E5-2680 v4 @ 2.40GHz")
    assert info.vm_container_capable
    assert info.support_vsocks


def test_missing_kernel_version_file_is_fatal(host_paths):
    os.remove(host_paths.proc_version)

    with pytest.raises(HostInfoError) as exc_info:
        collect_host_info(host_paths, arch="amd64")

    assert exc_info.value.path == host_paths.proc_version


def test_missing_cpuinfo_file_is_fatal(host_paths):
    os.remove(host_paths.proc_cpuinfo)

    with pytest.raises(HostInfoError) as exc_info:
        collect_host_info(host_paths, arch="amd64")

    assert exc_info.value.path == host_paths.proc_cpuinfo


def test_empty_cpuinfo_file_is_fatal(host_paths):
    with open(host_paths.proc_cpuinfo, "w") as f:
        f.write("\n\n")

    with pytest.raises(HostInfoError, match="no CPU details"):
        collect_host_info(host_paths, arch="amd64")


def test_malformed_kernel_version_file(tmp_path):
    path = tmp_path / "version"
    path.write_text("garbage\n")

    with pytest.raises(HostInfoError, match="unexpected contents"):
        get_kernel_version(str(path))


def test_missing_os_release_is_not_fatal(host_paths):
    os.remove(host_paths.os_release)

    info = collect_host_info(host_paths, arch="amd64")

    assert info.distro == DistroInfo(name="", version="")
    assert info.kernel == "5.4.0-test"


def test_alternate_os_release_is_used_for_stateless_distros(tmp_path):
    primary = tmp_path / "os-release"
    primary.write_text('NAME="Clear Linux OS"\nVERSION_ID=1\n')
    alternate = tmp_path / "alt-os-release"
    alternate.write_text('NAME="Clear Linux OS"\nVERSION_ID=30450\n')

    assert get_distro_details(str(primary), str(alternate)) == DistroInfo(name="Clear Linux OS", version="30450")


def test_alternate_os_release_missing(tmp_path):
    primary = tmp_path / "os-release"
    primary.write_text('NAME="Clear Linux OS"\nVERSION_ID=1\n')

    assert get_distro_details(str(primary), str(tmp_path / "missing")) == DistroInfo(name="Clear Linux OS", version="1")


def test_alternate_os_release_ignored_for_other_distros(host_paths):
    with open(host_paths.os_release_alt, "w") as f:
        f.write('NAME="Other"\nVERSION_ID=99\n')

    assert get_distro_details(host_paths.os_release, host_paths.os_release_alt) == DistroInfo(
        name="Ubuntu", version="20.04"
    )


def test_arm64_cpu_details(host_paths, tmp_path):
    with open(host_paths.proc_cpuinfo, "w") as f:
        f.write(ARM64_CPUINFO)
    kvm = tmp_path / "kvm"
    kvm.write_text("")
    paths = replace(host_paths, kvm_device=str(kvm))

    info = collect_host_info(paths, arch="arm64")

    assert info.cpu == CPUInfo(vendor="ARM Limited", model="v8")
    assert info.vm_container_capable


def test_unknown_arm_implementer_is_kept():
    cpu = get_cpu_details({"CPU implementer": "0xff", "CPU architecture": "AArch64"}, "arm64")

    assert cpu == CPUInfo(vendor="0xff", model="AArch64")


def test_ppc64le_cpu_details():
    assert get_cpu_details({"cpu": "POWER9"}, "ppc64le") == CPUInfo(vendor="IBM", model="POWER9")


def test_vm_container_capable(tmp_path):
    missing_kvm = str(tmp_path / "kvm")

    assert is_vm_container_capable({"flags": "fpu svm"}, "amd64", missing_kvm)
    assert not is_vm_container_capable({"flags": "fpu sse"}, "amd64", missing_kvm)
    assert not is_vm_container_capable({}, "s390x", missing_kvm)


def test_missing_vsock_device(host_paths):
    os.remove(host_paths.vhost_vsock_device)

    assert not collect_host_info(host_paths, arch="amd64").support_vsocks


@pytest.mark.parametrize("machine, expected", [("x86_64", "amd64"), ("aarch64", "arm64"), ("riscv64", "riscv64")])
def test_get_host_arch(monkeypatch, machine, expected):
    monkeypatch.setattr(host.platform, "machine", lambda: machine)

    assert get_host_arch() == expected
