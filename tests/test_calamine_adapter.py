"""
Tests for the CalamineAdapter.

Tests decoding in-memory workbook bytes with python-calamine.
"""

import pytest

from sheetview.adapters.calamine_adapter import CalamineAdapter
from sheetview.exceptions.viewer_exceptions import ParseError
from sheetview.models.workbook_models import CellKind
from tests.conftest import build_xlsx


class TestCalamineAdapterParseErrors:
    """Tests for rejecting bytes that are not a workbook."""

    def test_garbage_bytes_raise_parse_error(
        self,
        calamine_adapter: CalamineAdapter,
    ) -> None:
        """Test that arbitrary bytes raise ParseError."""
        with pytest.raises(ParseError) as exc_info:
            calamine_adapter.decode(b"this is not a spreadsheet", source_name="notes.txt")

        assert exc_info.value.error_code == "PARSE_ERROR"
        assert "notes.txt" in exc_info.value.message
        assert exc_info.value.source_name == "notes.txt"

    def test_empty_bytes_raise_parse_error(
        self,
        calamine_adapter: CalamineAdapter,
    ) -> None:
        """Test that an empty buffer raises ParseError."""
        with pytest.raises(ParseError) as exc_info:
            calamine_adapter.decode(b"")

        assert exc_info.value.reason == "Empty byte buffer"

    def test_truncated_container_raises_parse_error(
        self,
        calamine_adapter: CalamineAdapter,
        sample_xlsx_bytes: bytes,
    ) -> None:
        """Test that a structurally corrupt container raises ParseError."""
        with pytest.raises(ParseError):
            calamine_adapter.decode(sample_xlsx_bytes[: len(sample_xlsx_bytes) // 3])


class TestCalamineAdapterDecode:
    """Tests for decoding valid workbooks."""

    def test_sheet_order_matches_container(
        self,
        calamine_adapter: CalamineAdapter,
        multi_sheet_xlsx_bytes: bytes,
    ) -> None:
        """Test that sheets come back in container order."""
        workbook = calamine_adapter.decode(multi_sheet_xlsx_bytes)

        assert workbook.sheet_names == ["Users", "Products", "Orders"]

    def test_rows_and_columns_preserve_source_order(
        self,
        calamine_adapter: CalamineAdapter,
        sample_xlsx_bytes: bytes,
    ) -> None:
        """Test row order, column order and cell texts."""
        sheet = calamine_adapter.decode(sample_xlsx_bytes).get_sheet("Users")

        assert sheet.row_count == 4
        assert sheet.column_count == 3
        assert [cell.text for cell in sheet.rows[0]] == ["Name", "Age", "Email"]
        assert [cell.text for cell in sheet.rows[1]] == ["Alice", "30", "alice@example.com"]
        assert sheet.rows[3][0].text == "Charlie"

    def test_cell_kinds(
        self,
        calamine_adapter: CalamineAdapter,
    ) -> None:
        """Test that numbers, booleans and blanks are tagged."""
        data = build_xlsx({"Types": [["text", 42, 2.5, True, None, "end"]]})

        row = calamine_adapter.decode(data).get_sheet("Types").rows[0]

        assert row[0].kind is CellKind.TEXT
        assert row[1].kind is CellKind.NUMBER
        assert row[1].text == "42"
        assert row[2].text == "2.5"
        assert row[3].kind is CellKind.BOOLEAN
        assert row[3].text == "true"
        assert row[4].is_empty
        assert row[5].text == "end"

    def test_empty_sheet(
        self,
        calamine_adapter: CalamineAdapter,
    ) -> None:
        """Test that a sheet without data decodes to zero rows."""
        data = build_xlsx({"Data": [["a"]], "Blank": []})

        workbook = calamine_adapter.decode(data)

        assert workbook.sheet_names == ["Data", "Blank"]
        assert workbook.get_sheet("Blank").row_count == 0
        assert workbook.get_sheet("Blank").column_count == 0

    def test_decode_is_repeatable(
        self,
        calamine_adapter: CalamineAdapter,
        sample_xlsx_bytes: bytes,
    ) -> None:
        """Test that decoding the same bytes twice gives equal workbooks."""
        assert calamine_adapter.decode(sample_xlsx_bytes) == calamine_adapter.decode(
            sample_xlsx_bytes
        )
