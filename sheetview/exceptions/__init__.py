"""
Custom exceptions for the viewer.

Provides type-safe, descriptive exceptions for error handling throughout
the application.
"""

from sheetview.exceptions.viewer_exceptions import (
    InvalidMatchModeError,
    NoWorkbookLoadedError,
    ParseError,
    UnknownSheetError,
    ViewerError,
)

__all__ = [
    "ViewerError",
    "ParseError",
    "UnknownSheetError",
    "InvalidMatchModeError",
    "NoWorkbookLoadedError",
]
