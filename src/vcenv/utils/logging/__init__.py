# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: Apache-2.0

"""
Logging utilities package.

Provides console logging configuration and handler management.
"""

from .logging_config import *

__all__ = [
    # Logging configuration
    "configure_logging",
    # Handler management
    "remove_log_handlers",
    "cleanup_logging",
    # Constants
    "DEFAULT_LOG_FORMAT",
    "MESSAGE_ONLY_FORMAT",
    "CONSOLE_HANDLER_NAME",
]
