"""Utility helpers for sheetview."""

from sheetview.utils.logging import configure_logging, get_logger, timed_operation

__all__ = [
    "configure_logging",
    "get_logger",
    "timed_operation",
]
