# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: Apache-2.0

"""
Command Line Interface for vcenv.

This is the main CLI entry point; the command implementations live in
vcenv.utils.cli.commands.
"""

import logging
import sys
from typing import List, Optional

from vcenv.utils.cli.commands import get_command_function
from vcenv.utils.cli.parsers import create_argument_parser
from vcenv.utils.logging import cleanup_logging, configure_logging

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments, ``sys.argv[1:]`` by default

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, debug=args.debug)

    # Route to appropriate command handler
    try:
        if args.command == "env":
            show_env = get_command_function("show_env")
            return show_env(
                config_path=args.config,
                use_json=args.json,
                probe_timeout=args.probe_timeout,
                verbose=args.verbose,
                debug=args.debug,
            )
        else:
            parser.print_help(sys.stderr)
            return 0
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130
    except Exception as e:
        logger.error(f"Command execution failed: {e}", exc_info=args.debug)
        return 1
    finally:
        cleanup_logging()


if __name__ == "__main__":
    sys.exit(main())
