"""
Pydantic request/response models for the display-layer surfaces.

Used by both the FastAPI and MCP interfaces. Pages are rendered as text
grids: every row is padded to the sheet's column count with empty strings.
"""

from pydantic import BaseModel, Field

from sheetview.models.workbook_models import MatchMode, Page, Row


class PredicateRequest(BaseModel):
    """
    Request model for setting one of the two predicates.

    Attributes:
        mode: Comparison mode.
        query: Query text; empty (after trimming) clears the predicate.
        case_sensitive: Optional override of the shared case option.
    """

    mode: MatchMode = Field(
        default=MatchMode.CONTAINS,
        description="Comparison mode",
    )
    query: str = Field(
        default="",
        description="Query text; empty clears the predicate",
    )
    case_sensitive: bool | None = Field(
        default=None,
        description="Overrides the shared case option when provided",
    )


class SelectSheetRequest(BaseModel):
    """Request model for switching the active sheet."""

    name: str = Field(description="Name of the sheet to activate")


class ScopeRequest(BaseModel):
    """Request model for changing the search scope."""

    all_sheets: bool = Field(description="Search every sheet instead of the active one")


class IgnoreCaseRequest(BaseModel):
    """Request model for the shared case option."""

    ignore_case: bool = Field(description="Compare text case-insensitively")


class GotoPageRequest(BaseModel):
    """Request model for page navigation. Out-of-range indices are clamped."""

    index: int = Field(description="0-based page index")


class PageResponse(BaseModel):
    """
    A page of rows rendered as text.

    Attributes:
        index: 0-based page index.
        size: Configured page size.
        total_pages: Number of pages in the current result.
        start_row: Offset of the first row within the filtered rows.
        column_count: Width every row is padded to.
        rows: Cell texts per row.
        sheet_names: Source sheet per row.
    """

    index: int = Field(ge=0, description="0-based page index")
    size: int = Field(ge=1, description="Configured page size")
    total_pages: int = Field(ge=0, description="Number of pages")
    start_row: int = Field(ge=0, description="Offset of the first row")
    column_count: int = Field(ge=0, description="Width every row is padded to")
    rows: list[list[str]] = Field(
        default_factory=list,
        description="Cell texts per row",
    )
    sheet_names: list[str] = Field(
        default_factory=list,
        description="Source sheet per row",
    )

    @classmethod
    def from_page(cls, page: Page, column_count: int) -> "PageResponse":
        """
        Render a Page for transport.

        Args:
            page: The page to render.
            column_count: Width to pad every row to.

        Returns:
            PageResponse with text cells.
        """
        width = max(column_count, max((len(row) for row in page.rows), default=0))
        return cls(
            index=page.index,
            size=page.size,
            total_pages=page.total_pages,
            start_row=page.start_row,
            column_count=width,
            rows=[render_row(row, width) for row in page.rows],
            sheet_names=list(page.sheet_names),
        )


def render_row(row: Row, width: int) -> list[str]:
    """Cell texts of `row`, padded with empty strings to `width`."""
    texts = [cell.text for cell in row]
    if len(texts) < width:
        texts.extend([""] * (width - len(texts)))
    return texts


class ErrorResponse(BaseModel):
    """
    Standard error response model for the API.

    Attributes:
        success: Always False for error responses.
        error_code: Machine-readable error code.
        message: Human-readable error description.
        details: Additional error context.
    """

    success: bool = Field(
        default=False,
        description="Always False for error responses",
    )
    error_code: str = Field(
        description="Machine-readable error code",
    )
    message: str = Field(
        description="Human-readable error description",
    )
    details: dict | None = Field(
        default=None,
        description="Additional error context",
    )
