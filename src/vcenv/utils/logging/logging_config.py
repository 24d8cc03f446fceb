# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: Apache-2.0

"""
Logging configuration utilities.

Log records always go to standard error so that standard output only ever
carries the environment report.
"""

import logging
import sys

# Detailed format used with --debug
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"
# Simple message-only format for regular console output
MESSAGE_ONLY_FORMAT = "%(message)s"

# Name given to the console handler installed by configure_logging()
CONSOLE_HANDLER_NAME = "vcenv-console"


def configure_logging(verbose: bool = False, debug: bool = False) -> None:
    """
    Configure console logging based on verbose and debug flags.

    Args:
        verbose: Whether to display INFO level logs
        debug: Whether to display DEBUG level logs

    Note:
        By default only warnings and errors are shown. Reconfiguring replaces
        the console handler installed by a previous call.
    """
    remove_log_handlers()

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.set_name(CONSOLE_HANDLER_NAME)

    if debug:
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
    else:
        console_handler.setFormatter(logging.Formatter(MESSAGE_ONLY_FORMAT))
        if verbose:
            console_handler.setLevel(logging.INFO)
        else:
            console_handler.setLevel(logging.WARNING)

    root_logger.addHandler(console_handler)


def remove_log_handlers() -> None:
    """
    Remove the console handlers installed by configure_logging().
    """
    root_logger = logging.getLogger()
    handlers_to_remove = [h for h in root_logger.handlers if h.get_name() == CONSOLE_HANDLER_NAME]

    for handler in handlers_to_remove:
        root_logger.removeHandler(handler)
        handler.close()


def cleanup_logging() -> None:
    """
    Clean up logging handlers on application exit.

    This function should be called when the command finishes so the handler
    does not outlive the stream it writes to.
    """
    remove_log_handlers()
