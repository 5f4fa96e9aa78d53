"""
Openpyxl adapter for workbook decoding.

This module provides the OpenpyxlAdapter class, a pure Python decoder for
Office Open XML containers. It opens workbooks read-only with cached values
(formulas are never evaluated) and produces the same Workbook model as the
calamine adapter.

Supported formats:
    - .xlsx (Excel 2007+)
    - .xlsm (Excel Macro-Enabled)

Example:
    adapter = OpenpyxlAdapter()
    workbook = adapter.decode(data, source_name="report.xlsx")
"""

import zipfile
from io import BytesIO

from openpyxl import load_workbook

from sheetview.exceptions.viewer_exceptions import ParseError
from sheetview.models.workbook_models import Cell, Sheet, Workbook
from sheetview.utils.logging import get_logger, timed_operation

logger = get_logger(__name__)


class OpenpyxlAdapter:
    """
    Adapter for openpyxl decoding.

    Attributes:
        name: Decoder name used in configuration.
    """

    name = "openpyxl"

    def decode(self, data: bytes, source_name: str | None = None) -> Workbook:
        """
        Decode workbook bytes into a Workbook.

        Args:
            data: Raw workbook bytes.
            source_name: Optional display name used in error messages.

        Returns:
            Workbook with one Sheet per worksheet, in container order.
            Chart sheets carry no cells and are skipped.

        Raises:
            ParseError: If the bytes are not an Office Open XML workbook or
                the container is corrupt.
        """
        if not data:
            raise ParseError(source_name=source_name, reason="Empty byte buffer")

        buffer = BytesIO(data)
        if not zipfile.is_zipfile(buffer):
            raise ParseError(
                source_name=source_name,
                reason="Not an Office Open XML container",
            )
        buffer.seek(0)

        with timed_operation(logger, "decode", decoder=self.name, size=len(data)) as metrics:
            try:
                wb = load_workbook(buffer, read_only=True, data_only=True)
            except Exception as e:
                raise ParseError(source_name=source_name, reason=str(e)) from e

            try:
                sheets = [
                    Sheet(
                        name=ws.title,
                        rows=tuple(
                            tuple(Cell.from_value(value) for value in row)
                            for row in ws.iter_rows(values_only=True)
                        ),
                    )
                    for ws in wb.worksheets
                ]
            except Exception as e:
                raise ParseError(source_name=source_name, reason=str(e)) from e
            finally:
                wb.close()

            metrics["sheets"] = len(sheets)

        return Workbook(sheets=tuple(sheets))
