"""
Core data models for the viewer.

Workbooks, sheets and cells are immutable pydantic models built once per
decode. Filter results and pages are frozen dataclasses that hold references
to the workbook's row tuples, so slicing and filtering never copy cell data.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CellKind(str, Enum):
    """
    Closed set of cell value kinds.

    Every decoded cell is tagged with exactly one of these.
    """

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    EMPTY = "empty"


def canonical_text(value: Any) -> str:
    """
    Produce the textual representation of a raw cell value.

    This is the single string form every predicate is evaluated against.

    Args:
        value: Raw value as returned by a decoder.

    Returns:
        Empty string for empty values, lowercase words for booleans,
        natural decimal form for numbers, ISO 8601 for dates and times.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


class Cell(BaseModel):
    """
    A single cell as a tagged value.

    Attributes:
        kind: The value kind.
        value: The normalized Python value (None for empty cells).
        text: Canonical textual representation used for matching.
    """

    model_config = ConfigDict(frozen=True)

    kind: CellKind = Field(
        default=CellKind.EMPTY,
        description="The kind of value held by the cell",
    )
    value: Any = Field(
        default=None,
        description="Normalized cell value; None for empty cells",
    )
    text: str = Field(
        default="",
        description="Canonical textual representation of the value",
    )

    @property
    def is_empty(self) -> bool:
        return self.kind is CellKind.EMPTY

    @classmethod
    def from_value(cls, value: Any) -> "Cell":
        """
        Build a cell from a raw decoder value.

        Booleans are checked before numbers because bool is an int subclass.
        Integral floats are normalized to int so that 30.0 reads as "30", and
        datetimes at midnight to dates so that a date-formatted cell reads as
        "2024-01-05" whichever decoder produced it.

        Args:
            value: Raw value from python-calamine or openpyxl.

        Returns:
            Cell tagged with the matching kind.
        """
        if value is None or value == "":
            return EMPTY_CELL

        if isinstance(value, bool):
            kind = CellKind.BOOLEAN
        elif isinstance(value, (int, float)):
            kind = CellKind.NUMBER
            if isinstance(value, float) and value.is_integer():
                value = int(value)
        elif isinstance(value, (datetime, date, time, timedelta)):
            kind = CellKind.DATE
            if isinstance(value, datetime) and value.time() == time(0) and value.tzinfo is None:
                value = value.date()
        else:
            kind = CellKind.TEXT
            if not isinstance(value, str):
                value = str(value)

        return cls(kind=kind, value=value, text=canonical_text(value))


EMPTY_CELL = Cell()

Row = tuple[Cell, ...]


class Sheet(BaseModel):
    """
    One named table of a workbook.

    Rows keep source order and cells keep source column order. Rows may be
    ragged; the sheet's column count is the widest row and shorter rows read
    as having empty trailing cells.

    Attributes:
        name: The sheet name, unique within its workbook.
        rows: Row tuples in source order.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="The name of the sheet")
    rows: tuple[Row, ...] = Field(
        default=(),
        description="Rows in source order, each a tuple of cells",
    )

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        """Length of the widest row, 0 for an empty sheet."""
        return max((len(row) for row in self.rows), default=0)

    def cell(self, row: int, column: int) -> Cell:
        """
        Get a cell by 0-based position.

        Positions past the end of a short row, or past the last row, read as
        empty cells rather than raising.

        Args:
            row: 0-based row index.
            column: 0-based column index.

        Returns:
            The cell at that position, or an empty cell.
        """
        if row < 0 or column < 0:
            raise IndexError("Row and column indices must be non-negative")
        if row >= len(self.rows):
            return EMPTY_CELL
        cells = self.rows[row]
        if column >= len(cells):
            return EMPTY_CELL
        return cells[column]


class Workbook(BaseModel):
    """
    An ordered collection of uniquely named sheets.

    Sheet order matches the container's internal sheet order.

    Attributes:
        sheets: Sheets in container order.
    """

    model_config = ConfigDict(frozen=True)

    sheets: tuple[Sheet, ...] = Field(
        default=(),
        description="Sheets in container order",
    )

    @field_validator("sheets")
    @classmethod
    def validate_unique_names(cls, v: tuple[Sheet, ...]) -> tuple[Sheet, ...]:
        """Ensure sheet names are unique."""
        names = [sheet.name for sheet in v]
        if len(names) != len(set(names)):
            raise ValueError("Sheet names must be unique")
        return v

    @property
    def sheet_names(self) -> list[str]:
        return [sheet.name for sheet in self.sheets]

    def get_sheet(self, name: str) -> Sheet | None:
        """Return the sheet called `name`, or None."""
        for sheet in self.sheets:
            if sheet.name == name:
                return sheet
        return None

    def items(self) -> Iterator[tuple[str, Sheet]]:
        """Iterate (name, sheet) pairs in sheet order."""
        for sheet in self.sheets:
            yield sheet.name, sheet

    def __contains__(self, name: object) -> bool:
        return any(sheet.name == name for sheet in self.sheets)

    def __len__(self) -> int:
        return len(self.sheets)


class MatchMode(str, Enum):
    """Text-match modes a predicate can use."""

    CONTAINS = "contains"
    EXACT = "exact"
    STARTS_WITH = "startsWith"
    ENDS_WITH = "endsWith"
    WILDCARD = "wildcard"


class MatchRule(BaseModel):
    """
    How a query is compared against a cell's text.

    Immutable; rebuilt whenever the mode or case option changes.

    Attributes:
        mode: The comparison mode.
        case_sensitive: Whether letter case must match.
    """

    model_config = ConfigDict(frozen=True)

    mode: MatchMode = Field(
        default=MatchMode.CONTAINS,
        description="The comparison mode",
    )
    case_sensitive: bool = Field(
        default=False,
        description="Whether letter case must match",
    )


class SearchScope(str, Enum):
    """Which rows a filter considers."""

    CURRENT_SHEET = "currentSheetOnly"
    ALL_SHEETS = "allSheets"


class SessionState(str, Enum):
    """Lifecycle state of a ViewerSession."""

    EMPTY = "empty"
    LOADED = "loaded"


@dataclass(frozen=True)
class FilterResult:
    """
    Rows selected by a filter, in sheet-major, row-minor order.

    Attributes:
        rows: References to the source row tuples.
        sheet_names: Name of the sheet each row came from, parallel to rows.
    """

    rows: tuple[Row, ...] = ()
    sheet_names: tuple[str, ...] = ()

    @property
    def count(self) -> int:
        return len(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def groups(self) -> Iterator[tuple[str, tuple[Row, ...]]]:
        """
        Yield consecutive runs of rows that came from the same sheet.

        Yields:
            (sheet_name, rows) pairs in result order.
        """
        start = 0
        for index in range(1, len(self.rows) + 1):
            if index == len(self.rows) or self.sheet_names[index] != self.sheet_names[start]:
                yield self.sheet_names[start], self.rows[start:index]
                start = index


@dataclass(frozen=True)
class Page:
    """
    A contiguous window of a filter result.

    Attributes:
        index: 0-based page index.
        size: Configured page size (rows may be fewer on the last page).
        rows: The rows on this page.
        sheet_names: Source sheet per row, parallel to rows.
        total_pages: Page count for the whole result.
        start_row: Offset of the first row within the filter result.
    """

    index: int
    size: int
    rows: tuple[Row, ...] = ()
    sheet_names: tuple[str, ...] = ()
    total_pages: int = 0
    start_row: int = 0

    @property
    def has_previous(self) -> bool:
        return self.index > 0

    @property
    def has_next(self) -> bool:
        return self.index < self.total_pages - 1

    def __len__(self) -> int:
        return len(self.rows)


class SessionStats(BaseModel):
    """
    Summary counters a display layer renders next to the grid.

    Attributes:
        total_rows: Row count of the active sheet.
        total_columns: Widest row of the active sheet.
        filtered_count: Rows in the current filter result.
        sheet_names: All sheet names in workbook order.
        active_sheet: Name of the selected sheet, if any.
        page_index: Current 0-based page index.
        page_count: Number of pages in the current result.
        is_filtered: Whether any predicate has a non-empty query.
        source_name: Display name of the loaded byte source.
        source_size: Size of the loaded byte source in bytes.
        source_size_display: Human-readable size (B, KB, MB).
    """

    total_rows: int = Field(default=0, ge=0)
    total_columns: int = Field(default=0, ge=0)
    filtered_count: int = Field(default=0, ge=0)
    sheet_names: list[str] = Field(default_factory=list)
    active_sheet: str | None = None
    page_index: int = Field(default=0, ge=0)
    page_count: int = Field(default=0, ge=0)
    is_filtered: bool = False
    source_name: str | None = None
    source_size: int = Field(default=0, ge=0)
    source_size_display: str = "0 B"


def format_file_size(size: int) -> str:
    """
    Format a byte count the way the viewer's file card shows it.

    Args:
        size: Size in bytes.

    Returns:
        "N B" below 1 KiB, otherwise KB or MB with one decimal.
    """
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"

