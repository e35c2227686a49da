#!/usr/bin/env python3
"""
Tests for logging utilities.
"""

import logging

import pytest
from rich.logging import RichHandler

from pkgsettings.utils.logger import (
    ROOT_LOGGER_NAME,
    ColoredFormatter,
    get_logger,
    set_log_level,
    setup_logging,
)


@pytest.fixture
def root_logger():
    """The top-level logger, with its handlers and level restored afterwards."""
    logger = get_logger()
    handlers = list(logger.logger.handlers)
    level = logger.logger.level
    yield logger
    for handler in list(logger.logger.handlers):
        if handler not in handlers:
            logger.logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in logger.logger.handlers:
            logger.logger.addHandler(handler)
    logger.set_level(logging.getLevelName(level))


class TestGetLogger:
    """Test logger creation."""

    def test_loggers_are_cached(self):
        """Test that the same name returns the same facade."""
        assert get_logger('pkgsettings.tests') is get_logger('pkgsettings.tests')

    def test_only_root_logger_has_handlers(self, root_logger):
        """Test that module loggers propagate to the root logger."""
        child = get_logger('pkgsettings.core.something')

        assert child.logger.handlers == []
        assert child.logger.propagate is True
        assert any(isinstance(h, RichHandler) for h in root_logger.logger.handlers)

    def test_child_records_reach_caplog(self, caplog):
        """Test that messages from module loggers can be observed."""
        caplog.set_level(logging.INFO, logger=ROOT_LOGGER_NAME)
        get_logger('pkgsettings.core.service').warning("Nothing to change")
        assert "Nothing to change" in caplog.text


class TestLevels:
    """Test level handling."""

    def test_set_log_level(self, root_logger):
        """Test that console handlers follow the logger level."""
        set_log_level('warning')

        assert root_logger.logger.level == logging.WARNING
        for handler in root_logger.logger.handlers:
            if isinstance(handler, logging.FileHandler):
                assert handler.level == logging.DEBUG
            else:
                assert handler.level == logging.WARNING

    def test_unknown_level_defaults_to_info(self, root_logger):
        """Test that unknown level names fall back to INFO."""
        root_logger.set_level('chatty')
        assert root_logger.logger.level == logging.INFO


class TestSetupLogging:
    """Test setup_logging options."""

    def test_verbose_means_debug(self, root_logger):
        """Test that verbose switches to DEBUG."""
        setup_logging(level='INFO', verbose=True)
        assert root_logger.logger.level == logging.DEBUG

    def test_log_file(self, root_logger, tmp_path):
        """Test logging to a custom file."""
        log_file = tmp_path / "logs" / "run.log"

        setup_logging(log_file=log_file)
        get_logger('pkgsettings.tests').info("Added myfeed - https://feed/")
        for handler in root_logger.logger.handlers:
            handler.flush()

        assert "Added myfeed - https://feed/" in log_file.read_text(encoding="utf-8")

    def test_plain_console(self, root_logger):
        """Test that plain mode replaces the rich handler."""
        setup_logging(plain=True)

        handlers = root_logger.logger.handlers
        assert not any(isinstance(h, RichHandler) for h in handlers)
        assert any(isinstance(h.formatter, ColoredFormatter) for h in handlers)


class TestColoredFormatter:
    """Test the plain console formatter."""

    def _record(self, level):
        return logging.LogRecord('pkgsettings', level, __file__, 1, "Disabled myfeed", None, None)

    def test_colours_level_name(self):
        """Test that the level name is wrapped in ANSI colour codes."""
        formatter = ColoredFormatter("[%(levelname)s] %(message)s")
        record = self._record(logging.WARNING)

        formatted = formatter.format(record)

        assert formatted == "[\033[33mWARNING\033[0m] Disabled myfeed"
        assert record.levelname == "WARNING"

    def test_without_colours(self):
        """Test output with colours turned off."""
        formatter = ColoredFormatter("[%(levelname)s] %(message)s", use_colors=False)
        assert formatter.format(self._record(logging.INFO)) == "[INFO] Disabled myfeed"
