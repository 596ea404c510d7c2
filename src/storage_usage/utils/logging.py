"""Logging infrastructure with per-target context tracking.

This module configures the application's logging handlers and tracks the root
address currently being listed or aggregated in a ContextVar, so that every
log line emitted while walking a tree names the command-line target it
belongs to. Log output goes to stderr; stdout is reserved for listing and
disk usage records.
"""

import contextvars
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Final, override

# Root address being processed, inherited by everything called within it
target_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "target",
    default=None,
)

DEFAULT_LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - [%(target)s] - %(message)s"

VALID_LOG_LEVELS: Final[frozenset[str]] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class TargetFilter(logging.Filter):
    """Logging filter that adds the current target address to log records."""

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        """Add target address to log record from ContextVar.

        Args:
            record: Log record to enhance with the target address

        Returns:
            True to allow the record to be logged
        """
        target = target_var.get()
        record.target = target if target is not None else "-"
        return True


def configure_logging(
    *,
    log_level: str = "WARNING",
    enable_console: bool = True,
) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_console: Enable the stderr handler

    Example:
        >>> configure_logging(log_level="DEBUG")
        >>> with target_context("s3/photos"):
        ...     logging.getLogger(__name__).debug("Listing prefix")
    """
    root_logger = logging.getLogger()

    level = getattr(logging, log_level.upper(), logging.WARNING)
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
        console_handler.addFilter(TargetFilter())
        root_logger.addHandler(console_handler)


def get_target() -> str | None:
    """Get the current target address from context."""
    return target_var.get()


@contextmanager
def target_context(target: str) -> Iterator[None]:
    """Scope the target address to a block, restoring the previous one after.

    Args:
        target: Root address being processed inside the block
    """
    token = target_var.set(target)
    try:
        yield
    finally:
        target_var.reset(token)
