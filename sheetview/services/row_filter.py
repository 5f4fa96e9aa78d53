"""
Row filter: combines two predicates over a sequence of rows.

A row matches a predicate when any of its cells does (OR across cells). A
row is kept when it matches both predicates (AND across predicates), where
a predicate with an empty query always passes. Output preserves input order
and holds references to the input rows.
"""

from collections.abc import Sequence

from sheetview.models.workbook_models import FilterResult, MatchRule, Row, Sheet, Workbook
from sheetview.services.predicate_engine import row_matches

DEFAULT_RULE = MatchRule()


def filter_rows(
    rows: Sequence[Row],
    rule1: MatchRule | None,
    query1: str,
    rule2: MatchRule | None,
    query2: str,
) -> Sequence[Row]:
    """
    Keep the rows that satisfy both predicates.

    Args:
        rows: Rows to filter, in display order.
        rule1: Rule for the first predicate (default rule if None).
        query1: Query for the first predicate; empty means no filter.
        rule2: Rule for the second predicate (default rule if None).
        query2: Query for the second predicate; empty means no filter.

    Returns:
        The input itself when both queries are empty, otherwise a list of
        the matching rows in their original order.
    """
    if not query1 and not query2:
        return rows

    rule1 = rule1 or DEFAULT_RULE
    rule2 = rule2 or DEFAULT_RULE

    return [
        row
        for row in rows
        if (not query1 or row_matches(row, query1, rule1))
        and (not query2 or row_matches(row, query2, rule2))
    ]


def filter_sheet(
    sheet: Sheet,
    rule1: MatchRule | None,
    query1: str,
    rule2: MatchRule | None,
    query2: str,
) -> FilterResult:
    """Filter one sheet, attributing every kept row to it."""
    rows = tuple(filter_rows(sheet.rows, rule1, query1, rule2, query2))
    return FilterResult(rows=rows, sheet_names=(sheet.name,) * len(rows))


def search_all_sheets(
    workbook: Workbook,
    rule1: MatchRule | None,
    query1: str,
    rule2: MatchRule | None,
    query2: str,
) -> FilterResult:
    """
    Filter every sheet and concatenate the results.

    Rows of the first sheet come before rows of the second and so on, in
    workbook order; within a sheet original row order is kept.

    Returns:
        FilterResult whose sheet_names attribute each row to its sheet.
    """
    rows: list[Row] = []
    sheet_names: list[str] = []

    for sheet in workbook.sheets:
        kept = filter_rows(sheet.rows, rule1, query1, rule2, query2)
        rows.extend(kept)
        sheet_names.extend([sheet.name] * len(kept))

    return FilterResult(rows=tuple(rows), sheet_names=tuple(sheet_names))
