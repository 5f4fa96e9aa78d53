"""
Test fixtures and utilities for the viewer tests.

Workbooks are produced in memory with XlsxWriter so every test starts from
real container bytes; sheets for pure engine tests are built directly.
"""

from collections.abc import Generator
from io import BytesIO
from pathlib import Path
from typing import Any

import pytest
import xlsxwriter

from sheetview.adapters.calamine_adapter import CalamineAdapter
from sheetview.adapters.openpyxl_adapter import OpenpyxlAdapter
from sheetview.models.workbook_models import Cell, Sheet, Workbook
from sheetview.services.viewer_session import ViewerSession


def build_xlsx(sheets: dict[str, list[list[Any]]]) -> bytes:
    """
    Write sheets to an in-memory xlsx container.

    Args:
        sheets: Mapping of sheet name to rows, in sheet order.

    Returns:
        The xlsx bytes.
    """
    buffer = BytesIO()
    workbook = xlsxwriter.Workbook(
        buffer,
        {"in_memory": True, "default_date_format": "yyyy-mm-dd"},
    )
    for name, rows in sheets.items():
        worksheet = workbook.add_worksheet(name)
        for row_idx, row in enumerate(rows):
            worksheet.write_row(row_idx, 0, row)
    workbook.close()
    return buffer.getvalue()


def make_sheet(name: str, rows: list[list[Any]]) -> Sheet:
    """Build a Sheet from raw values, keeping rows ragged."""
    return Sheet(
        name=name,
        rows=tuple(tuple(Cell.from_value(value) for value in row) for row in rows),
    )


def make_workbook(sheets: dict[str, list[list[Any]]]) -> Workbook:
    """Build a Workbook from raw values."""
    return Workbook(sheets=tuple(make_sheet(name, rows) for name, rows in sheets.items()))


USERS_ROWS = [
    ["Name", "Age", "Email"],
    ["Alice", 30, "alice@example.com"],
    ["Bob", 25, "bob@example.com"],
    ["Charlie", 35, "charlie@example.com"],
]

PRODUCTS_ROWS = [
    ["Name", "Price"],
    ["Widget", 10.99],
    ["Gadget", 24.99],
]

ORDERS_ROWS = [
    ["OrderID", "Customer", "Product", "Quantity"],
    [1, "Alice", "Widget", 2],
    [2, "Bob", "Gadget", 1],
    [3, "Alice", "Gadget", 5],
]


@pytest.fixture
def calamine_adapter() -> CalamineAdapter:
    """
    Create a CalamineAdapter instance for testing.

    Returns:
        CalamineAdapter instance.
    """
    return CalamineAdapter()


@pytest.fixture
def openpyxl_adapter() -> OpenpyxlAdapter:
    """Create an OpenpyxlAdapter instance for testing."""
    return OpenpyxlAdapter()


@pytest.fixture
def session(calamine_adapter: CalamineAdapter) -> ViewerSession:
    """
    Create an empty ViewerSession with fixed options.

    Returns:
        ViewerSession using calamine, 50 rows per page, ignoring case.
    """
    return ViewerSession(decoder=calamine_adapter, page_size=50, ignore_case=True)


@pytest.fixture
def sample_xlsx_bytes() -> bytes:
    """
    Single-sheet workbook with a header row and three users.

    Returns:
        xlsx bytes.
    """
    return build_xlsx({"Users": USERS_ROWS})


@pytest.fixture
def multi_sheet_xlsx_bytes() -> bytes:
    """
    Workbook with Users, Products and Orders sheets, in that order.

    Returns:
        xlsx bytes.
    """
    return build_xlsx(
        {
            "Users": USERS_ROWS,
            "Products": PRODUCTS_ROWS,
            "Orders": ORDERS_ROWS,
        }
    )


@pytest.fixture
def large_xlsx_bytes() -> bytes:
    """
    Workbook with 120 data rows on "Log" and a small "Other" sheet.

    Rows are ["row-<n>", n, "even"|"odd"] for n in 0..119.

    Returns:
        xlsx bytes.
    """
    rows = [[f"row-{n}", n, "even" if n % 2 == 0 else "odd"] for n in range(120)]
    return build_xlsx({"Log": rows, "Other": [["x"]]})


@pytest.fixture
def multi_sheet_workbook() -> Workbook:
    """The multi-sheet workbook built directly as models."""
    return make_workbook(
        {
            "Users": USERS_ROWS,
            "Products": PRODUCTS_ROWS,
            "Orders": ORDERS_ROWS,
        }
    )


@pytest.fixture
def temp_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """
    Temporary directory for test files.

    Yields:
        Path to the temporary directory.
    """
    yield tmp_path
