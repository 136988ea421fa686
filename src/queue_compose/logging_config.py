"""
Logging Configuration for queue_compose.

Provides the trace logger used by the execution engine. The logger is
silent unless enabled through environment variables:

- QUEUE_COMPOSE_TRACE: non-empty value attaches a stderr handler
- QUEUE_COMPOSE_LOG_DIR: directory for an additional trace.log file
- QUEUE_COMPOSE_LOG_LEVEL: level name (default DEBUG when tracing, else WARNING)
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

TRACE_LOGGER_NAME = "queue_compose.trace"
TRACE_LOG_FILENAME = "trace.log"

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _trace_enabled() -> bool:
    return bool(os.getenv("QUEUE_COMPOSE_TRACE"))


def _get_log_directory() -> Optional[Path]:
    """Get the log directory path, or None when file logging is off."""
    log_dir = os.getenv("QUEUE_COMPOSE_LOG_DIR")
    if not log_dir:
        return None
    return Path(log_dir)


def _get_log_level() -> int:
    """Resolve QUEUE_COMPOSE_LOG_LEVEL, falling back on the trace switch."""
    default = logging.DEBUG if _trace_enabled() else logging.WARNING
    name = os.getenv("QUEUE_COMPOSE_LOG_LEVEL")
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    # getLevelName returns a "Level X" string for unknown names
    return level if isinstance(level, int) else default


def _create_file_handler(log_filename: str) -> Optional[logging.FileHandler]:
    """
    Create a file handler for the specified log file.

    Args:
        log_filename: Name of the log file (e.g., 'trace.log')

    Returns:
        Configured FileHandler, or None if file logging is disabled
    """
    log_dir = _get_log_directory()
    if log_dir is None:
        return None

    log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_dir / log_filename, mode='a', encoding='utf-8')
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(_FORMAT))
    return handler


class FlushingStreamHandler(logging.StreamHandler):
    """StreamHandler that flushes after every emit."""
    def emit(self, record):
        super().emit(record)
        self.flush()


def _create_stderr_handler() -> logging.StreamHandler:
    """Create a stderr handler for console output with auto-flush."""
    handler = FlushingStreamHandler(sys.stderr)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(_FORMAT))
    return handler


def _configure(logger: logging.Logger) -> None:
    logger.setLevel(_get_log_level())

    file_handler = _create_file_handler(TRACE_LOG_FILENAME)
    if file_handler:
        logger.addHandler(file_handler)

    if _trace_enabled():
        logger.addHandler(_create_stderr_handler())


def get_trace_logger() -> logging.Logger:
    """
    Get the trace logger for pipeline execution.

    The engine logs stage entry, consumed arity and results here at DEBUG
    level. Records still propagate to the root logger so applications and
    pytest's caplog can capture them.

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(TRACE_LOGGER_NAME)

    # Only configure once
    if not getattr(logger, "_queue_compose_configured", False):
        _configure(logger)
        logger._queue_compose_configured = True  # type: ignore[attr-defined]

    return logger


def reset_trace_logger() -> logging.Logger:
    """
    Drop the trace logger's handlers and configure it again.

    Call this after changing the QUEUE_COMPOSE_* environment variables.

    Returns:
        Reconfigured logger instance
    """
    logger = logging.getLogger(TRACE_LOGGER_NAME)
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    _configure(logger)
    logger._queue_compose_configured = True  # type: ignore[attr-defined]
    return logger


__all__ = [
    "TRACE_LOGGER_NAME",
    "FlushingStreamHandler",
    "get_trace_logger",
    "reset_trace_logger",
]
