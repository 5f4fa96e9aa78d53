"""
Calamine adapter for workbook decoding.

This module provides the CalamineAdapter class that wraps python-calamine to
turn an in-memory byte buffer into a Workbook. python-calamine is a
Rust-based reader that handles every common spreadsheet container.

Supported formats:
    - .xlsx (Excel 2007+)
    - .xls (Excel 97-2003)
    - .xlsb (Excel Binary)
    - .xlsm (Excel Macro-Enabled)
    - .ods (OpenDocument Spreadsheet)

Example:
    adapter = CalamineAdapter()
    workbook = adapter.decode(Path("report.xlsx").read_bytes(), "report.xlsx")
    print(workbook.sheet_names)
"""

from io import BytesIO
from typing import Any

from python_calamine import CalamineWorkbook

from sheetview.exceptions.viewer_exceptions import ParseError
from sheetview.models.workbook_models import Cell, Row, Sheet, Workbook
from sheetview.utils.logging import get_logger, timed_operation

logger = get_logger(__name__)


class CalamineAdapter:
    """
    Adapter for python-calamine decoding.

    Decoding is a pure transformation: bytes in, Workbook out, no file
    system access. Sheet order follows the container, row order and column
    positions follow the source grid.

    Attributes:
        name: Decoder name used in configuration.
    """

    name = "calamine"

    def _open_workbook(self, data: bytes, source_name: str | None) -> CalamineWorkbook:
        """
        Open a calamine workbook over an in-memory buffer.

        Args:
            data: Raw workbook bytes.
            source_name: Display name for error messages.

        Returns:
            CalamineWorkbook instance.

        Raises:
            ParseError: If the bytes are not a readable container.
        """
        if not data:
            raise ParseError(source_name=source_name, reason="Empty byte buffer")

        try:
            return CalamineWorkbook.from_filelike(BytesIO(data))
        except Exception as e:
            raise ParseError(source_name=source_name, reason=str(e)) from e

    def _convert_row(self, row: list[Any]) -> Row:
        return tuple(Cell.from_value(value) for value in row)

    def decode(self, data: bytes, source_name: str | None = None) -> Workbook:
        """
        Decode workbook bytes into a Workbook.

        Args:
            data: Raw workbook bytes.
            source_name: Optional display name used in error messages.

        Returns:
            Workbook with one Sheet per container sheet, in container order.

        Raises:
            ParseError: If the bytes are not a recognizable spreadsheet
                container or a sheet cannot be read.
        """
        with timed_operation(logger, "decode", decoder=self.name, size=len(data)) as metrics:
            workbook = self._open_workbook(data, source_name)

            sheets: list[Sheet] = []
            for sheet_name in workbook.sheet_names:
                try:
                    raw_rows = workbook.get_sheet_by_name(sheet_name).to_python(
                        skip_empty_area=False
                    )
                except Exception as e:
                    raise ParseError(
                        source_name=source_name,
                        reason=f"Failed to read sheet '{sheet_name}': {e}",
                    ) from e

                sheets.append(
                    Sheet(
                        name=sheet_name,
                        rows=tuple(self._convert_row(row) for row in raw_rows),
                    )
                )

            metrics["sheets"] = len(sheets)

        return Workbook(sheets=tuple(sheets))
