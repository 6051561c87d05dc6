"""
Logging configuration with a tag-coloured console handler.

Usage:
    from logging_config import get_logger
    logger = get_logger("github")
    logger.info("Skill loaded", extra={"tool": "list_repos"})
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime

# ANSI color codes for console output
COLORS = {
    "DEBUG": "\033[36m",  # Cyan
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[35m",  # Magenta
    "RESET": "\033[0m",
}

# Module-specific colors for tags
TAG_COLORS = {
    "github": "\033[94m",  # Blue
    "tools": "\033[96m",  # Cyan
    "config": "\033[92m",  # Green
}


class ColoredConsoleFormatter(logging.Formatter):
    """Formatter that adds colors and the [tag] prefix."""

    def __init__(self, use_color: bool = True) -> None:
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        level_color = COLORS.get(record.levelname, "") if self.use_color else ""
        reset = COLORS["RESET"] if self.use_color else ""

        tag = record.name
        tag_color = TAG_COLORS.get(tag, "\033[37m") if self.use_color else ""

        timestamp = datetime.now().strftime("%H:%M:%S")
        level_str = f"{level_color}{record.levelname:8}{reset}"
        tag_str = f"{tag_color}[{tag}]{reset}"

        extra_parts = []
        if getattr(record, "tool", None):
            extra_parts.append(f"tool={record.tool}")
        if getattr(record, "status_code", None):
            extra_parts.append(f"status={record.status_code}")

        extra_str = f" ({', '.join(extra_parts)})" if extra_parts else ""
        msg = f"{timestamp} {level_str} {tag_str} {record.getMessage()}{extra_str}"

        if record.exc_info:
            msg += "\n" + self.formatException(record.exc_info)

        return msg


# Global state
_console_handler: logging.Handler | None = None
_initialized = False


def _get_console_level() -> int:
    """Get console log level from environment variable."""
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def _to_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def init_logging(console_level: int | str | None = None) -> None:
    """Initialize the logging system with a console handler.

    If logging is already running, an explicit console_level is still applied
    to the existing handler.
    """
    global _console_handler, _initialized

    if _initialized:
        if console_level is not None and _console_handler is not None:
            _console_handler.setLevel(_to_level(console_level))
        return

    if console_level is None:
        console_level = _get_console_level()
    else:
        console_level = _to_level(console_level)

    _console_handler = logging.StreamHandler(sys.stdout)
    _console_handler.setLevel(console_level)
    _console_handler.setFormatter(ColoredConsoleFormatter(use_color=sys.stdout.isatty()))

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(_console_handler)

    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    if not _initialized:
        init_logging()
    return logging.getLogger(name)


def shutdown_logging() -> None:
    """Detach the console handler."""
    global _console_handler, _initialized
    if _console_handler:
        logging.getLogger().removeHandler(_console_handler)
        _console_handler = None
    _initialized = False
