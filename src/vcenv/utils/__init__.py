# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: Apache-2.0

"""
Utilities package for vcenv.

Contains the configuration model and loader, core errors and process
execution, the environment report model and formatting, logging setup and
system information collection.
"""

from . import config, core, env, logging, system

__all__ = [
    "config",
    "core",
    "env",
    "logging",
    "system",
]
