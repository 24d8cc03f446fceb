# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: Apache-2.0

import logging
import sys

import pytest

from vcenv.utils.logging import CONSOLE_HANDLER_NAME, cleanup_logging, configure_logging


def _console_handlers():
    return [h for h in logging.getLogger().handlers if h.get_name() == CONSOLE_HANDLER_NAME]


@pytest.fixture(autouse=True)
def _cleanup():
    yield
    cleanup_logging()


@pytest.mark.parametrize(
    "verbose, debug, level",
    [(False, False, logging.WARNING), (True, False, logging.INFO), (False, True, logging.DEBUG)],
)
def test_configure_logging_levels(verbose, debug, level):
    configure_logging(verbose=verbose, debug=debug)

    handlers = _console_handlers()
    assert len(handlers) == 1
    assert handlers[0].level == level
    assert handlers[0].stream is sys.stderr


def test_reconfigure_replaces_handler():
    configure_logging()
    configure_logging(debug=True)

    assert len(_console_handlers()) == 1


def test_cleanup_logging_removes_handler():
    configure_logging()
    cleanup_logging()

    assert _console_handlers() == []
