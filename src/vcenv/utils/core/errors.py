# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: Apache-2.0

"""
Exception hierarchy for environment report generation.

Only fatal conditions are modelled here. A helper binary whose version
cannot be queried is not an error: it is reported as an unknown version.
"""

from typing import Any, Optional


class EnvInfoError(Exception):
    """Base class for errors that abort environment report generation."""

    pass


class HostInfoError(EnvInfoError):
    """Raised when a mandatory host file is missing or unreadable."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ConfigTypeError(EnvInfoError):
    """Raised when a subsystem configuration holds an unexpected variant."""

    def __init__(self, subsystem: str, expected: type, actual: Any):
        self.subsystem = subsystem
        self.expected = expected.__name__
        self.actual = type(actual).__name__
        super().__init__(
            f"invalid {subsystem} configuration: expected {self.expected}, got {self.actual} ({actual!r})"
        )


class ConfigLoadError(EnvInfoError):
    """Raised when the runtime configuration file cannot be loaded."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ReportWriteError(EnvInfoError):
    """Raised when the report cannot be written to its destination."""

    pass
