# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: Apache-2.0

"""
CLI command implementations package.

Contains individual command implementations for the CLI.
"""

# Commands are imported dynamically to avoid circular imports
# Use get_command_function() to safely import and get command functions


def get_command_function(command_name: str):
    """
    Dynamically import and return a command function.

    Args:
        command_name: Name of the command to import

    Returns:
        The command function
    """
    if command_name == "show_env":
        from .env import show_env

        return show_env
    else:
        raise ValueError(f"Unknown command: {command_name}")


__all__ = ["get_command_function"]
