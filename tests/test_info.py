# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: Apache-2.0

import io
import os

import pytest

from vcenv.utils.core.errors import ConfigTypeError, EnvInfoError, HostInfoError, ReportWriteError
from vcenv.utils.env.formatter import load_report
from vcenv.utils.env.info import get_env_info, handle_settings
from vcenv.utils.env.models import UNKNOWN


def test_get_env_info(runtime_config, host_paths):
    report = get_env_info("/etc/kata/configuration.toml", runtime_config, host_paths=host_paths, arch="amd64")

    assert report.runtime.config.path == "/etc/kata/configuration.toml"
    assert report.hypervisor.version == "QEMU emulator version 2.7.0"
    assert report.proxy.version.semver == "1.0.0-rc1"
    assert report.shim.version.semver == "1.2.3"
    assert report.netmon.version.semver == "0.9.1"
    assert report.kernel.parameters == "foo=bar xyz"
    assert report.host.kernel == "5.4.0-test"
    assert report.agent.trace_mode == "dynamic"


def test_get_env_info_with_missing_hypervisor(runtime_config, host_paths):
    os.remove(runtime_config.hypervisor_config.hypervisor_path)

    report = get_env_info("/etc/kata/configuration.toml", runtime_config, host_paths=host_paths, arch="amd64")

    assert report.hypervisor.version == UNKNOWN
    assert report.hypervisor.path == runtime_config.hypervisor_config.hypervisor_path
    assert report.hypervisor.machine_type == "q35"
    assert report.shim.version.semver == "1.2.3"


def test_get_env_info_host_failure_is_fatal(runtime_config, host_paths):
    os.remove(host_paths.proc_cpuinfo)

    with pytest.raises(HostInfoError):
        get_env_info("/etc/kata/configuration.toml", runtime_config, host_paths=host_paths, arch="amd64")


def test_get_env_info_shim_type_error_is_fatal(runtime_config, host_paths):
    runtime_config.shim_config = "not a shim config"

    with pytest.raises(ConfigTypeError):
        get_env_info("/etc/kata/configuration.toml", runtime_config, host_paths=host_paths, arch="amd64")


def test_handle_settings_writes_toml(runtime_config, host_paths):
    output = io.StringIO()
    metadata = {"configFile": "/etc/kata/configuration.toml", "runtimeConfig": runtime_config}

    report = handle_settings(output, metadata, host_paths=host_paths)

    assert load_report(output.getvalue()) == report


def test_handle_settings_writes_json(runtime_config, host_paths):
    output = io.StringIO()
    metadata = {"configFile": "/etc/kata/configuration.toml", "runtimeConfig": runtime_config}

    report = handle_settings(output, metadata, use_json=True, host_paths=host_paths)

    assert load_report(output.getvalue(), use_json=True) == report


@pytest.mark.parametrize(
    "metadata, message",
    [
        ({}, "configFile"),
        ({"configFile": 42}, "configFile"),
        ({"configFile": "/etc/kata/configuration.toml"}, "runtimeConfig"),
        ({"configFile": "/etc/kata/configuration.toml", "runtimeConfig": {"debug": True}}, "runtimeConfig"),
        (None, "metadata"),
    ],
)
def test_handle_settings_invalid_metadata(metadata, message):
    output = io.StringIO()

    with pytest.raises(EnvInfoError, match=message):
        handle_settings(output, metadata)

    assert output.getvalue() == ""


def test_handle_settings_requires_output(runtime_config):
    with pytest.raises(EnvInfoError, match="output"):
        handle_settings(None, {"configFile": "/etc/kata/configuration.toml", "runtimeConfig": runtime_config})


def test_handle_settings_closed_output(runtime_config, host_paths):
    output = io.StringIO()
    output.close()

    with pytest.raises(ReportWriteError):
        handle_settings(
            output,
            {"configFile": "/etc/kata/configuration.toml", "runtimeConfig": runtime_config},
            host_paths=host_paths,
        )
