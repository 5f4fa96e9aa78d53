"""
Data models for the viewer.

Contains the workbook/cell value types, filter and page results, and the
Pydantic models used for request/response validation.
"""

from sheetview.models.api_models import (
    ErrorResponse,
    GotoPageRequest,
    IgnoreCaseRequest,
    PageResponse,
    PredicateRequest,
    ScopeRequest,
    SelectSheetRequest,
)
from sheetview.models.workbook_models import (
    EMPTY_CELL,
    Cell,
    CellKind,
    FilterResult,
    MatchMode,
    MatchRule,
    Page,
    Row,
    SearchScope,
    SessionState,
    SessionStats,
    Sheet,
    Workbook,
)

__all__ = [
    "Cell",
    "CellKind",
    "EMPTY_CELL",
    "Row",
    "Sheet",
    "Workbook",
    "MatchMode",
    "MatchRule",
    "SearchScope",
    "SessionState",
    "FilterResult",
    "Page",
    "SessionStats",
    "PredicateRequest",
    "SelectSheetRequest",
    "ScopeRequest",
    "IgnoreCaseRequest",
    "GotoPageRequest",
    "PageResponse",
    "ErrorResponse",
]
