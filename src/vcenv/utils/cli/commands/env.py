# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: Apache-2.0

"""
Environment report command implementation.

Loads the runtime configuration, collects the environment information and
writes the report to standard output.
"""

import logging
import sys
from typing import Optional, TextIO

from vcenv.utils.config import load_runtime_config, resolve_config_path
from vcenv.utils.core.errors import EnvInfoError
from vcenv.utils.env.info import CONFIG_FILE_KEY, RUNTIME_CONFIG_KEY, handle_settings

logger = logging.getLogger(__name__)


def show_env(
    config_path: Optional[str] = None,
    use_json: bool = False,
    probe_timeout: Optional[float] = None,
    verbose: bool = False,
    debug: bool = False,
    output: Optional[TextIO] = None,
) -> int:
    """
    Show the runtime environment.

    Args:
        config_path: Runtime configuration file, looked up when not given
        use_json: Whether to write JSON instead of TOML
        probe_timeout: Maximum time for each version probe, in seconds
        verbose: Whether to show more detailed output
        debug: Whether to show debug level logs and tracebacks
        output: Destination stream, standard output by default

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    try:
        config_file = resolve_config_path(config_path)
        config = load_runtime_config(config_file)

        metadata = {CONFIG_FILE_KEY: config_file, RUNTIME_CONFIG_KEY: config}
        handle_settings(output or sys.stdout, metadata, use_json=use_json, probe_timeout=probe_timeout)

        logger.debug("Environment report written")
        return 0

    except EnvInfoError as e:
        logger.error(f"{e}", exc_info=debug)
        return 1
