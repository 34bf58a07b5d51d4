"""
Logging utilities for depmatrix.

This module centralizes logger configuration, formatting, and retrieval
for the depmatrix package. Outside CI, records are rendered with optional
ANSI colors. Inside a GitHub Actions runner, records are rendered as
workflow commands (``::debug::``, ``::warning::``, ``::error::``) so they
show up as step annotations.
"""

from __future__ import annotations

import os
import sys
import logging
import threading
from typing import IO, Optional

from depmatrix.constants import (
    ENV_RUNNER_DEBUG,
    LOG_DATE_FORMAT,
    LOG_DEFAULT_FORMAT,
    LOG_VERBOSE_FORMAT,
)

_ROOT_LOGGER_NAME = "depmatrix"

_logging_configured: bool = False
_lock = threading.Lock()


class ColoredFormatter(logging.Formatter):
    """Logging formatter with optional ANSI color support."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(
        self,
        fmt: str,
        *,
        datefmt: Optional[str] = None,
        use_color: bool = True,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        if self.use_color and self._should_use_color():
            color = self.COLORS.get(record.levelname)
            if color:
                # Work on a copy so other handlers see the plain level name
                record = logging.makeLogRecord(record.__dict__)
                record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)

    @staticmethod
    def _should_use_color() -> bool:
        """Determine whether ANSI colors should be emitted."""
        if os.environ.get("NO_COLOR"):
            return False
        if os.environ.get("CI"):
            return False
        try:
            return sys.stderr.isatty()
        except (AttributeError, OSError):
            return False


class WorkflowCommandFormatter(logging.Formatter):
    """Render records as GitHub Actions workflow commands.

    ``DEBUG`` and ``INFO`` map to ``::debug::`` (only shown when step
    debugging is on), ``WARNING`` to ``::warning::`` and anything above to
    ``::error::``. Newlines are escaped as the runner expects.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        message = (
            message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        )

        if record.levelno >= logging.ERROR:
            command = "error"
        elif record.levelno >= logging.WARNING:
            command = "warning"
        else:
            command = "debug"

        return f"::{command}::{message}"


def running_in_github_actions() -> bool:
    """Return True when executing inside a GitHub Actions runner."""
    return os.environ.get("GITHUB_ACTIONS") == "true"


def level_from_verbosity(verbose: int) -> int:
    """Map a ``-v`` count to a logging level.

    The runner's debug switch (``RUNNER_DEBUG=1``) behaves like ``-vv``.
    """
    if os.environ.get(ENV_RUNNER_DEBUG) == "1":
        verbose = max(verbose, 2)

    if verbose <= 0:
        return logging.WARNING
    if verbose == 1:
        return logging.INFO
    return logging.DEBUG


def setup_logging(
    *,
    level: int = logging.INFO,
    verbose: bool = False,
    stream: Optional[IO[str]] = None,
) -> None:
    """Configure logging for depmatrix.

    This function is safe to call multiple times; configuration is
    protected by a process-wide lock. Output always goes to stderr by
    default so stdout stays free for the emitted matrix.

    Args:
        level: Logging level (e.g., ``logging.INFO``, ``logging.DEBUG``).
        verbose: Enable verbose formatting with timestamps.
        stream: Output stream; defaults to ``sys.stderr``.
    """
    global _logging_configured

    with _lock:
        root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
        root_logger.handlers.clear()
        root_logger.setLevel(level)

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setLevel(level)

        formatter: logging.Formatter
        if running_in_github_actions():
            formatter = WorkflowCommandFormatter("%(message)s")
        else:
            fmt = LOG_VERBOSE_FORMAT if verbose else LOG_DEFAULT_FORMAT
            formatter = ColoredFormatter(
                fmt,
                datefmt=LOG_DATE_FORMAT,
                use_color=not os.environ.get("NO_COLOR"),
            )
        handler.setFormatter(formatter)

        root_logger.addHandler(handler)
        root_logger.propagate = False
        _logging_configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger within the depmatrix namespace.

    Args:
        name: Logger name. Use ``__name__`` for module-relative naming.

    Returns:
        A logger instance under the ``depmatrix`` hierarchy.
    """
    if not name or name == _ROOT_LOGGER_NAME:
        logger = logging.getLogger(_ROOT_LOGGER_NAME)
    elif name.startswith(f"{_ROOT_LOGGER_NAME}."):
        logger = logging.getLogger(name)
    else:
        logger = logging.getLogger(f"{_ROOT_LOGGER_NAME}.{name}")

    # Ensure library-safe behavior if logging is not configured
    if not logger.handlers and (not logger.parent or not logger.parent.handlers):
        logger.addHandler(logging.NullHandler())

    return logger


def is_logging_configured() -> bool:
    """Return True if depmatrix logging has been configured."""
    return _logging_configured


def disable_logging() -> None:
    """Disable all depmatrix logging output."""
    global _logging_configured

    with _lock:
        root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
        root_logger.handlers.clear()
        root_logger.addHandler(logging.NullHandler())
        root_logger.setLevel(logging.NOTSET)
        _logging_configured = False
