#!/usr/bin/env python3
"""
Logger Module

Colored console logging, optional systemd journal integration and a
SUCCESS log level used for per-domain update reports.

Created: 2025-10-27
Author: Manuel Ziel
License: MIT
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

import os
import sys
import logging
import threading
from typing import Dict, Any, Union

from .colors import LOG_COLORS, LOG_SYMBOLS

SYSLOG_IDENTIFIER = os.environ.get('SYSLOG_IDENTIFIER', 'dnspod-dyndns')

################################################################################
# FORMATTER CLASSES - ANSI Color Formatting
################################################################################

class ColoredFormatter(logging.Formatter):
    """Formatter that prefixes a level symbol and wraps the line in ANSI colors."""

    COLORS = LOG_COLORS
    SYMBOLS = LOG_SYMBOLS

    def __init__(self, include_timestamp: bool = False, use_colors: bool = True) -> None:
        self.include_timestamp = include_timestamp
        self.use_colors = use_colors
        format_string = '%(asctime)s - %(message)s' if include_timestamp else '%(message)s'
        super().__init__(format_string, datefmt='%H:%M:%S')

    def format(self, record: logging.LogRecord) -> str:
        level_name = record.levelname
        symbol = self.SYMBOLS.get(level_name, '')
        message = record.getMessage()

        if symbol:
            message = f"{symbol} {message}"
        if self.use_colors:
            message = f"{self.COLORS.get(level_name, '')}{message}{self.COLORS['RESET']}"

        # Format a copy so other handlers still see the raw message
        colored = logging.makeLogRecord(record.__dict__)
        colored.msg = message
        colored.args = None

        return super().format(colored)


class LoggerManager:
    """Logger factory with console and systemd journal handlers."""

    _loggers: Dict[str, logging.Logger] = {}
    _lock = threading.Lock()

    ################################################################################
    # PUBLIC CLASS METHODS - Logger Factory
    ################################################################################

    @classmethod
    def get_logger(cls, name: str, **kwargs: Any) -> logging.Logger:
        """Get or create logger instance (thread-safe). Use daemon_mode=True to skip console output."""
        with cls._lock:
            if name not in cls._loggers:
                cls._loggers[name] = cls._create_logger(name, **kwargs)
            return cls._loggers[name]

    @classmethod
    def reset(cls) -> None:
        """Forget cached loggers so the next get_logger() call rebuilds handlers."""
        with cls._lock:
            for logger in list(cls._loggers.values()) + [logging.getLogger(__package__)]:
                for handler in logger.handlers[:]:
                    logger.removeHandler(handler)
                logger.propagate = True
            cls._loggers.clear()

    ################################################################################
    # PRIVATE CLASS METHODS - Logger Configuration
    ################################################################################

    @classmethod
    def _create_logger(cls, name: str, **kwargs: Any) -> logging.Logger:
        """Create logger. Level comes from kwargs, else DEBUG=1 env var, else INFO."""
        daemon_mode = kwargs.get('daemon_mode', False)
        use_colors = kwargs.get('use_colors', True)
        log_level = cls._resolve_level(kwargs.get('level'))

        logger = logging.getLogger(name)
        logger.setLevel(log_level)
        logger.propagate = False

        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

        if not daemon_mode:
            cls._setup_console_handler(logger, log_level, use_colors)

        cls._setup_journal_handler(logger, log_level)
        cls._setup_live_logging()

        # Library modules log under the package namespace
        package_logger = logging.getLogger(__package__)
        package_logger.setLevel(log_level)
        package_logger.handlers = list(logger.handlers)
        package_logger.propagate = False

        return logger

    @staticmethod
    def _resolve_level(level: Union[int, str, None]) -> int:
        if level is None:
            return logging.DEBUG if os.getenv('DEBUG', '0') == '1' else logging.INFO
        if isinstance(level, str):
            return getattr(logging, level.upper(), logging.INFO)
        return level

    @classmethod
    def _setup_console_handler(cls, logger: logging.Logger, level: int, use_colors: bool) -> None:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(ColoredFormatter(include_timestamp=False, use_colors=use_colors))
        logger.addHandler(console_handler)

    @classmethod
    def _setup_journal_handler(cls, logger: logging.Logger, level: int) -> None:
        """Setup systemd journal handler if systemd-python is installed."""
        try:
            from systemd import journal
        except ImportError:
            return

        try:
            journal_handler = journal.JournalHandler(SYSLOG_IDENTIFIER=SYSLOG_IDENTIFIER)
            journal_handler.setLevel(level)
            journal_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
            logger.addHandler(journal_handler)
        except Exception as e:
            print(f"Warning: Could not setup journal logging: {e}", file=sys.stderr)

    @classmethod
    def _setup_live_logging(cls) -> None:
        """Line-buffer stdout/stderr for real-time output under systemd."""
        for stream in (sys.stdout, sys.stderr):
            reconfigure = getattr(stream, 'reconfigure', None)
            if reconfigure:
                reconfigure(line_buffering=True)


# SUCCESS sits between INFO (20) and WARNING (30)
SUCCESS_LEVEL = 25
logging.addLevelName(SUCCESS_LEVEL, 'SUCCESS')

def success(self: logging.Logger, message: str, *args: Any, **kwargs: Any) -> None:
    """Log a success message."""
    if self.isEnabledFor(SUCCESS_LEVEL):
        self._log(SUCCESS_LEVEL, message, args, **kwargs)

logging.Logger.success = success
