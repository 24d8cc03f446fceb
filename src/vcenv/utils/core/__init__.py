# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: Apache-2.0

"""
Core utilities package.

This package contains core functionality shared by the other packages:
- Error hierarchy for report generation
- Secure process execution
"""

from . import errors, process
from .errors import ConfigLoadError, ConfigTypeError, EnvInfoError, HostInfoError, ReportWriteError
from .process import ProcessResult, ProcessSecurityConfig, SecureProcessExecutor, SecurityError, run_command

__all__ = [
    # Errors
    "EnvInfoError",
    "HostInfoError",
    "ConfigTypeError",
    "ConfigLoadError",
    "ReportWriteError",
    # Process execution
    "SecureProcessExecutor",
    "ProcessResult",
    "ProcessSecurityConfig",
    "SecurityError",
    "run_command",
    # Sub-modules
    "errors",
    "process",
]
