#!/usr/bin/env python3
"""
Logging utilities for pkgsettings.

Every outcome the settings service reports (added, removed, nothing to change,
overriding a default) goes through the loggers built here. Console output is
rendered by rich, or by a plain coloured formatter for scripts, and a rotating
log file is kept next to the settings document.
"""

import sys
import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Dict

from colorama import init as colorama_init
from rich.console import Console
from rich.logging import RichHandler

from .platform import APP_NAME, platform_detector

colorama_init()

ROOT_LOGGER_NAME = APP_NAME

FILE_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "%(filename)s:%(lineno)d - %(message)s"
)
FILE_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colored output for console logging."""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, fmt: str = None, datefmt: str = None, use_colors: bool = True):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_colors:
            return super().format(record)

        original_levelname = record.levelname
        color = self.COLORS.get(record.levelname, '')
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname


class PkgSettingsLogger:
    """Thin facade over a standard library logger.

    Only the top-level ``pkgsettings`` logger owns handlers; module loggers
    created through :func:`get_logger` propagate their records to it.
    """

    def __init__(self, name: str = ROOT_LOGGER_NAME):
        self.name = name
        self.logger = logging.getLogger(name)

        if name != ROOT_LOGGER_NAME:
            return

        self.logger.setLevel(logging.INFO)

        # Prevent duplicate handlers
        if self.logger.handlers:
            return

        self._setup_handlers()

    def _setup_handlers(self):
        """Setup logging handlers for console and file output."""
        console_handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            rich_tracebacks=True
        )
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        console_handler.setLevel(logging.INFO)
        self.logger.addHandler(console_handler)

        self._setup_file_handler()

    def _setup_file_handler(self):
        """Setup the rotating file handler in the per-OS log directory."""
        try:
            log_dir = platform_detector.get_log_dir()
            log_dir.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                log_dir / f'{APP_NAME}.log',
                maxBytes=5 * 1024 * 1024,  # 5MB
                backupCount=5,
                encoding='utf-8'
            )
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
            file_handler.setLevel(logging.DEBUG)
            self.logger.addHandler(file_handler)

        except OSError as e:
            # Console logging still works without a log file
            self.logger.warning(f"Could not setup file logging: {e}")

    def use_plain_console(self):
        """Replace the rich console handler with the coloured plain one."""
        for handler in list(self.logger.handlers):
            if isinstance(handler, RichHandler):
                self.logger.removeHandler(handler)
        plain_handler = logging.StreamHandler(sys.stderr)
        plain_handler.setFormatter(ColoredFormatter("[%(levelname)s] %(message)s"))
        plain_handler.setLevel(self.logger.level or logging.INFO)
        self.logger.addHandler(plain_handler)

    def set_level(self, level: str):
        """Set the logging level."""
        level_map = {
            'DEBUG': logging.DEBUG,
            'INFO': logging.INFO,
            'WARNING': logging.WARNING,
            'ERROR': logging.ERROR,
            'CRITICAL': logging.CRITICAL,
        }

        log_level = level_map.get(level.upper(), logging.INFO)
        self.logger.setLevel(log_level)

        # Console handlers follow the logger; the file handler keeps DEBUG
        for handler in self.logger.handlers:
            if not isinstance(handler, logging.FileHandler):
                handler.setLevel(log_level)

    def debug(self, message: str, *args, **kwargs):
        """Log debug message."""
        self.logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        """Log info message."""
        self.logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        """Log warning message."""
        self.logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        """Log error message."""
        self.logger.error(message, *args, **kwargs)

    def critical(self, message: str, *args, **kwargs):
        """Log critical message."""
        self.logger.critical(message, *args, **kwargs)

    def exception(self, message: str, *args, **kwargs):
        """Log exception with traceback."""
        self.logger.exception(message, *args, **kwargs)


_loggers: Dict[str, PkgSettingsLogger] = {}


def get_logger(name: str = ROOT_LOGGER_NAME) -> PkgSettingsLogger:
    """Get or create a logger instance."""
    if name not in _loggers:
        _loggers[name] = PkgSettingsLogger(name)
    return _loggers[name]


def set_log_level(level: str, logger_name: str = ROOT_LOGGER_NAME):
    """Set logging level for a specific logger."""
    get_logger(logger_name).set_level(level)


def setup_logging(
    level: str = 'INFO',
    log_file: Optional[Path] = None,
    verbose: bool = False,
    plain: bool = False
):
    """Setup logging configuration."""
    if verbose:
        level = 'DEBUG'

    logger = get_logger()
    if plain:
        logger.use_plain_console()
    logger.set_level(level)

    if log_file:
        try:
            log_file = Path(log_file)
            log_file.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
            file_handler.setLevel(logging.DEBUG)

            logger.logger.addHandler(file_handler)
            logger.debug(f"Logging to file: {log_file}")

        except OSError as e:
            logger.warning(f"Could not setup custom log file {log_file}: {e}")

    return logger
