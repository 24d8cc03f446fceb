# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: Apache-2.0

"""
Argument parser setup for CLI commands.

Contains the main argument parser configuration and the subparsers for the
CLI commands, keeping argument definitions centralized.
"""

import argparse

from vcenv.utils.config import CONFIG_ENV_VAR, DEFAULT_CONFIG_PATHS, get_dist_version
from vcenv.utils.system import DEFAULT_PROBE_TIMEOUT

CLI_NAME = "vcenv"


def positive_float(value: str) -> float:
    """argparse type accepting a number of seconds greater than zero."""
    try:
        result = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number of seconds: {value!r}")
    if result <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than zero: {value!r}")
    return result


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the main argument parser with all subcommands.

    Returns:
        argparse.ArgumentParser: Configured parser ready for argument parsing
    """
    parser = argparse.ArgumentParser(
        prog=CLI_NAME,
        description="VM container runtime environment diagnostics",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument("--version", action="version", version=f"{get_dist_version()}")

    parser.add_argument(
        "--config",
        "-c",
        default=None,
        help=f"Runtime configuration file (when not given: ${CONFIG_ENV_VAR}, else the first of "
        f"{', '.join(DEFAULT_CONFIG_PATHS)} that exists)",
    )

    parser.add_argument("--verbose", "-v", action="store_true", help="Display informational messages")

    parser.add_argument("--debug", "-d", action="store_true", help="Display debug output with full traceback")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Env command
    env_parser = subparsers.add_parser(
        "env",
        help="Show the runtime environment",
        description=f"""
Show details of the runtime environment: the runtime, hypervisor, guest
kernel and image, proxy, shim, agent, network monitor and host.

EXAMPLES:
  {CLI_NAME} env                        # TOML report
  {CLI_NAME} env --json                 # JSON report
  {CLI_NAME} -c ./configuration.toml env --probe-timeout 2
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    env_parser.add_argument("--json", action="store_true", help="Write the report in JSON instead of TOML")
    env_parser.add_argument(
        "--probe-timeout",
        type=positive_float,
        default=DEFAULT_PROBE_TIMEOUT,
        metavar="SECONDS",
        help="Maximum time to wait for each component version query",
    )

    return parser
