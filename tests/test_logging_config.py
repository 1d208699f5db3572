"""Tests for logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from token_audit.logging_config import get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    package = logging.getLogger("token_audit")
    saved = (root.handlers[:], root.level, package.level)
    yield
    root.handlers[:] = saved[0]
    root.setLevel(saved[1])
    package.setLevel(saved[2])


class TestSetupLogging:
    @pytest.mark.parametrize(
        "verbose, quiet, level",
        [
            (False, False, logging.WARNING),
            (True, False, logging.DEBUG),
            (False, True, logging.ERROR),
            (True, True, logging.ERROR),
        ],
    )
    def test_levels(self, verbose, quiet, level):
        logger = setup_logging(verbose=verbose, quiet=quiet)
        assert logger.name == "token_audit"
        assert logger.level == level

    def test_single_rich_handler_on_stderr(self):
        setup_logging()
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], RichHandler)
        assert handlers[0].console.stderr

    def test_repeated_setup_replaces_handler(self):
        setup_logging()
        setup_logging(verbose=True)
        assert len(logging.getLogger().handlers) == 1


class TestGetLogger:
    def test_root_package_logger(self):
        assert get_logger().name == "token_audit"

    def test_module_name_kept(self):
        assert get_logger("token_audit.deep.analyzer").name == "token_audit.deep.analyzer"

    def test_foreign_name_prefixed(self):
        assert get_logger("scanner").name == "token_audit.scanner"
