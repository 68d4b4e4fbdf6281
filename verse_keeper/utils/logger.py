"""
Logging system with colored console output and rotating log files.

Loggers are created once per module name and share a process-wide
level that can be adjusted from settings at startup.

Author: Kasim Lyee <lyee@codewithlyee.com>
Company: Softlite Inc.
License: MIT
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional, Union

import colorlog

# Global logger registry
_loggers = {}

CONSOLE_FORMAT = '%(log_color)s%(levelname)-8s%(reset)s %(blue)s%(name)s%(reset)s: %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

LOG_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'red,bg_white',
}


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        return resolved if isinstance(resolved, int) else logging.INFO
    return level


def _file_handler(name: str, log_dir: Path) -> RotatingFileHandler:
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        log_dir / f"{name.replace('.', '_')}.log",
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding='utf-8',
    )
    handler.setLevel(logging.DEBUG)  # Log everything to file
    handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    return handler


def get_logger(
    name: str,
    level: Union[int, str] = logging.INFO,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """
    Get or create a configured logger instance.

    Args:
        name: Logger name (typically __name__)
        level: Logging level, as a number or a name such as "DEBUG"
        log_dir: Optional directory for rotating log files

    Returns:
        Configured Logger instance
    """
    if name in _loggers:
        return _loggers[name]

    level = _resolve_level(level)
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    # Prevent duplicate handlers
    if logger.handlers:
        _loggers[name] = logger
        return logger

    console_handler = colorlog.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        colorlog.ColoredFormatter(fmt=CONSOLE_FORMAT, log_colors=LOG_COLORS)
    )
    logger.addHandler(console_handler)

    if log_dir:
        logger.addHandler(_file_handler(name, log_dir))

    _loggers[name] = logger
    return logger


def configure_logging(level: Union[int, str], log_dir: Optional[Path] = None) -> None:
    """
    Apply a level (and optionally file logging) to every registered logger.

    Called once at startup after settings are loaded, since module loggers
    are created at import time with the default level.

    Args:
        level: New logging level
        log_dir: Optional directory for rotating log files
    """
    level = _resolve_level(level)
    for name, logger in _loggers.items():
        logger.setLevel(level)
        for handler in logger.handlers:
            if not isinstance(handler, RotatingFileHandler):
                handler.setLevel(level)
        has_file = any(isinstance(h, RotatingFileHandler) for h in logger.handlers)
        if log_dir and not has_file:
            logger.addHandler(_file_handler(name, log_dir))
