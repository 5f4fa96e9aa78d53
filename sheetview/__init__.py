"""
sheetview: spreadsheet viewer core with row filtering and pagination.

This package decodes workbook bytes into sheets of typed cells, filters rows
with up to two text-match predicates and serves fixed-size pages of the
result to a display layer.

Architecture:
    - Adapters decode raw bytes (python-calamine by default, openpyxl as fallback)
    - Services hold the predicate engine, row filter, paginator and session
    - FastAPI and MCP surfaces expose one ViewerSession to a display layer
"""

__version__ = "0.1.0"
