"""Structured logging helpers.

Wraps the standard library logger so call sites can attach key=value pairs:

    logger = get_logger(__name__)
    logger.info("Workbook loaded", sheets=3, rows=120)

    with timed_operation(logger, "decode"):
        workbook = adapter.decode(data)
"""

import logging
import time
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class StructuredLogger:
    """Logger wrapper that appends structured key-value pairs to messages."""

    def __init__(self, name: str) -> None:
        self._logger = logging.getLogger(name)

    @property
    def logger(self) -> logging.Logger:
        """The underlying standard library logger."""
        return self._logger

    def _build_message(self, message: str, **kwargs: Any) -> str:
        if not kwargs:
            return message
        parts = [f"{k}={v}" for k, v in kwargs.items()]
        return f"{message} | {', '.join(parts)}"

    def debug(self, message: str, **kwargs: Any) -> None:
        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(self._build_message(message, **kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        self._logger.info(self._build_message(message, **kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        self._logger.warning(self._build_message(message, **kwargs))

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        self._logger.error(self._build_message(message, **kwargs), exc_info=exc_info)

    def exception(self, message: str, **kwargs: Any) -> None:
        self._logger.exception(self._build_message(message, **kwargs))


@contextmanager
def timed_operation(
    logger: StructuredLogger,
    operation: str,
    **kwargs: Any,
) -> Generator[dict[str, Any], None, None]:
    """Log how long a block took at DEBUG level.

    The yielded dict can be filled with extra metrics that are logged
    alongside the duration.

    Args:
        logger: Logger to use for output.
        operation: Name of the operation.
        **kwargs: Static key-value pairs to include.

    Yields:
        Mutable dict of additional metrics.
    """
    metrics: dict[str, Any] = dict(kwargs)
    start = time.perf_counter()
    try:
        yield metrics
    finally:
        duration = time.perf_counter() - start
        logger.debug(
            f"Performance: {operation}",
            duration_seconds=f"{duration:.4f}",
            **metrics,
        )


def configure_logging(
    level: int | str = logging.INFO,
    format_string: str | None = None,
) -> None:
    """Configure the root logger with a single stream handler.

    Args:
        level: Log level (int or string like "INFO").
        format_string: Custom format string (uses default if None).
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root_logger.addHandler(handler)


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger for a module.

    Args:
        name: Logger name (typically __name__).

    Returns:
        StructuredLogger instance.
    """
    return StructuredLogger(name)
