"""
Adapters for workbook decoding.

Implements the adapter pattern for different spreadsheet engines:
- CalamineAdapter: Default decoder using python-calamine (Rust-based)
- OpenpyxlAdapter: Pure Python decoder for xlsx/xlsm using openpyxl
"""

from sheetview.adapters.calamine_adapter import CalamineAdapter
from sheetview.adapters.openpyxl_adapter import OpenpyxlAdapter

WorkbookDecoder = CalamineAdapter | OpenpyxlAdapter

DECODERS: dict[str, type[WorkbookDecoder]] = {
    CalamineAdapter.name: CalamineAdapter,
    OpenpyxlAdapter.name: OpenpyxlAdapter,
}


def create_decoder(name: str) -> WorkbookDecoder:
    """
    Build the decoder registered under `name`.

    Raises:
        ValueError: If no decoder has that name.
    """
    try:
        return DECODERS[name]()
    except KeyError:
        raise ValueError(
            f"Unknown decoder: {name}. Available: {', '.join(DECODERS)}"
        ) from None


__all__ = [
    "CalamineAdapter",
    "OpenpyxlAdapter",
    "WorkbookDecoder",
    "DECODERS",
    "create_decoder",
]
