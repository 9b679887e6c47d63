"""Logging configuration with console and optional file handlers."""

import logging
import sys
from pathlib import Path

from watch_server.settings import settings

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_LOGGERS_CACHE: dict[str, logging.Logger] = {}


def setup_logger(
    name: str,
    level: int | str | None = None,
    log_file: Path | None = None,
) -> logging.Logger:
    """Configure and return a cached logger.

    Args:
        name: Logger name (e.g., 'api.users').
        level: Logging level. Defaults to LOG_LEVEL.
        log_file: File receiving a copy of the records. Defaults to
            LOG_FILE; console only when neither is set.

    Returns:
        Configured logger instance.
    """
    if name in _LOGGERS_CACHE:
        return _LOGGERS_CACHE[name]

    resolved_level = _resolve_level(level)
    logger = logging.getLogger(name)
    logger.setLevel(resolved_level)
    logger.handlers.clear()
    logger.propagate = False

    formatter = logging.Formatter(_LOG_FORMAT, _LOG_DATE_FORMAT)
    logger.addHandler(_create_console_handler(formatter, resolved_level))

    target = log_file if log_file is not None else settings.logging.log_file
    if target is not None:
        file_handler = _create_file_handler(target, formatter, resolved_level)
        if file_handler:
            logger.addHandler(file_handler)

    _LOGGERS_CACHE[name] = logger
    return logger


def _resolve_level(level: int | str | None) -> int:
    """Translate a level name or number into a logging level.

    Args:
        level: Level number, level name, or None for LOG_LEVEL.

    Returns:
        Numeric logging level.
    """
    if level is None:
        level = settings.logging.level
    if isinstance(level, str):
        return logging.getLevelName(level.upper())
    return level


def _create_console_handler(
    formatter: logging.Formatter,
    level: int,
) -> logging.StreamHandler:
    """Create console stream handler."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _create_file_handler(
    log_file: Path,
    formatter: logging.Formatter,
    level: int,
) -> logging.FileHandler | None:
    """Create file handler appending to the given file.

    Args:
        log_file: Destination file. Parent directories are created.
        formatter: Log formatter.
        level: Logging level.

    Returns:
        Configured FileHandler or None on failure.
    """
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(level)
        handler.setFormatter(formatter)
        return handler
    except OSError as e:
        print(f"Warning: Could not create log file: {e}", file=sys.stderr)
        return None
