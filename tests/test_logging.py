"""Tests for the logging helper."""

import logging

from jsonsyslog_common.logging import setup_logging


class TestSetupLogging:
    def test_single_handler(self):
        name = "jsonsyslog.test.single"
        logger = setup_logging(name)
        again = setup_logging(name)
        assert logger is again
        assert len(logger.handlers) == 1
        assert logger.level == logging.INFO

    def test_level_name(self):
        logger = setup_logging("jsonsyslog.test.level", level="debug")
        assert logger.level == logging.DEBUG
