"""
Predicate engine: decides whether a cell's text satisfies a match rule.

All comparisons run on the cell's canonical text (see Cell.text). When a
rule is case-insensitive both sides are lower-cased with str.lower().

Wildcard queries treat `*` as "any run of characters, possibly empty" and
every other character literally. Matching is unanchored, so the pattern may
match anywhere inside the cell text. The scan is a greedy two-pointer walk
over the literal query; `.`, `+`, `(` and the like match only themselves.
"""

from sheetview.models.workbook_models import Cell, MatchMode, MatchRule, Row


def wildcard_match(text: str, pattern: str) -> bool:
    """
    Anchored glob match of `pattern` against the whole of `text`.

    Only `*` is special. Runs in O(len(text) * len(pattern)) worst case with
    O(1) extra space by remembering the most recent star and backtracking to
    it on mismatch.

    Args:
        text: Subject string.
        pattern: Pattern where `*` matches zero or more characters.

    Returns:
        True if the pattern covers the entire text.
    """
    t = p = 0
    star = -1
    star_t = 0

    while t < len(text):
        if p < len(pattern) and pattern[p] == "*":
            star = p
            star_t = t
            p += 1
        elif p < len(pattern) and pattern[p] == text[t]:
            t += 1
            p += 1
        elif star != -1:
            p = star + 1
            star_t += 1
            t = star_t
        else:
            return False

    while p < len(pattern) and pattern[p] == "*":
        p += 1

    return p == len(pattern)


def wildcard_search(text: str, pattern: str) -> bool:
    """True if `pattern` matches some substring of `text`."""
    return wildcard_match(text, f"*{pattern}*")


def matches(cell_text: str, query: str, rule: MatchRule) -> bool:
    """
    Test a cell's text against a query under a match rule.

    Callers filter out empty queries before calling; an empty cell never
    matches a non-empty query.

    Args:
        cell_text: Canonical text of the cell.
        query: Query text.
        rule: Mode and case sensitivity.

    Returns:
        Whether the cell satisfies the rule.
    """
    if not cell_text:
        return not query

    if not rule.case_sensitive:
        cell_text = cell_text.lower()
        query = query.lower()

    mode = rule.mode
    if mode is MatchMode.CONTAINS:
        return query in cell_text
    if mode is MatchMode.EXACT:
        return cell_text == query
    if mode is MatchMode.STARTS_WITH:
        return cell_text.startswith(query)
    if mode is MatchMode.ENDS_WITH:
        return cell_text.endswith(query)
    if mode is MatchMode.WILDCARD:
        return wildcard_search(cell_text, query)

    raise ValueError(f"Unsupported match mode: {mode}")


def cell_matches(cell: Cell, query: str, rule: MatchRule) -> bool:
    """Like matches(), for a Cell. Empty cells never match."""
    if cell.is_empty:
        return False
    return matches(cell.text, query, rule)


def row_matches(row: Row, query: str, rule: MatchRule) -> bool:
    """True if any cell in the row matches."""
    return any(cell_matches(cell, query, rule) for cell in row)
