"""
Tests for the predicate engine.

Tests every match mode, case handling and literal wildcard matching.
"""

import pytest

from sheetview.models.workbook_models import Cell, MatchMode, MatchRule
from sheetview.services.predicate_engine import (
    cell_matches,
    matches,
    row_matches,
    wildcard_match,
    wildcard_search,
)


def rule(mode: MatchMode, case_sensitive: bool = False) -> MatchRule:
    return MatchRule(mode=mode, case_sensitive=case_sensitive)


class TestCaseHandling:
    """Tests for case-sensitive and case-insensitive comparison."""

    def test_case_insensitive_contains(self) -> None:
        """Test that lowercase query finds uppercase text when ignoring case."""
        assert matches("ABC", "abc", rule(MatchMode.CONTAINS)) is True

    def test_case_sensitive_contains(self) -> None:
        """Test that case-sensitive comparison rejects different case."""
        assert matches("ABC", "abc", rule(MatchMode.CONTAINS, case_sensitive=True)) is False
        assert matches("ABC", "AB", rule(MatchMode.CONTAINS, case_sensitive=True)) is True

    def test_unicode_lowercasing(self) -> None:
        """Test non-ASCII letters are lower-cased too."""
        assert matches("ÉCOLE", "école", rule(MatchMode.EXACT)) is True


class TestModes:
    """Tests for each match mode."""

    @pytest.mark.parametrize(
        ("mode", "text", "query", "expected"),
        [
            (MatchMode.CONTAINS, "alice@example.com", "example", True),
            (MatchMode.CONTAINS, "alice@example.com", "bob", False),
            (MatchMode.EXACT, "Alice", "alice", True),
            (MatchMode.EXACT, "Alice Smith", "alice", False),
            (MatchMode.STARTS_WITH, "Alice Smith", "ali", True),
            (MatchMode.STARTS_WITH, "Alice Smith", "smith", False),
            (MatchMode.ENDS_WITH, "Alice Smith", "smith", True),
            (MatchMode.ENDS_WITH, "Alice Smith", "alice", False),
        ],
    )
    def test_mode(self, mode: MatchMode, text: str, query: str, expected: bool) -> None:
        """Test the standard text comparisons."""
        assert matches(text, query, rule(mode)) is expected

    def test_empty_cell_never_matches(self) -> None:
        """Test that empty cell text fails every mode for a non-empty query."""
        for mode in MatchMode:
            assert matches("", "a", rule(mode)) is False

    def test_number_text(self) -> None:
        """Test that numbers are matched on their canonical text."""
        assert cell_matches(Cell.from_value(30.0), "30", rule(MatchMode.EXACT)) is True
        assert cell_matches(Cell.from_value(True), "TRUE", rule(MatchMode.EXACT)) is True


class TestWildcard:
    """Tests for `*` wildcard matching."""

    def test_matches_file_name(self) -> None:
        """Test a wildcard between literal parts."""
        assert matches("report_2024.xlsx", "report_*.xlsx", rule(MatchMode.WILDCARD)) is True

    def test_rejects_other_extension(self) -> None:
        """Test the literal suffix is required."""
        assert matches("report.csv", "report_*.xlsx", rule(MatchMode.WILDCARD)) is False

    def test_dot_is_literal(self) -> None:
        """Test that '.' does not act as a regex any-character."""
        assert matches("reportXxlsx", "report*.xlsx", rule(MatchMode.WILDCARD)) is False
        assert matches("a.b", "a.b", rule(MatchMode.WILDCARD)) is True
        assert matches("axb", "a.b", rule(MatchMode.WILDCARD)) is False

    @pytest.mark.parametrize("query", ["(", "a+", "[x", "c++", "$5.00?", "\\d"])
    def test_regex_metacharacters_are_literal(self, query: str) -> None:
        """Test queries that would be malformed or special as regexes."""
        text = f"value {query} here"

        assert matches(text, query, rule(MatchMode.WILDCARD)) is True
        assert matches("plain text", query, rule(MatchMode.WILDCARD)) is False

    def test_unanchored(self) -> None:
        """Test the pattern may match anywhere inside the text."""
        assert matches("old_report_9.xlsx.bak", "report_*.xlsx", rule(MatchMode.WILDCARD))

    def test_star_only_matches_any_text(self) -> None:
        """Test that a lone star matches any non-empty cell."""
        assert matches("anything", "*", rule(MatchMode.WILDCARD)) is True
        assert matches("", "*", rule(MatchMode.WILDCARD)) is False

    def test_case_insensitive(self) -> None:
        """Test wildcard respects the case option."""
        assert matches("REPORT_1.XLSX", "report_*.xlsx", rule(MatchMode.WILDCARD))
        assert not matches(
            "REPORT_1.XLSX",
            "report_*.xlsx",
            rule(MatchMode.WILDCARD, case_sensitive=True),
        )

    @pytest.mark.parametrize(
        ("text", "pattern", "expected"),
        [
            ("", "", True),
            ("", "*", True),
            ("abc", "abc", True),
            ("abc", "a*c", True),
            ("ac", "a*c", True),
            ("abcbc", "a*bc", True),
            ("abcbd", "a*bc", False),
            ("aaa", "a*a*a", True),
            ("aa", "a*a*a", False),
            ("abc", "**c", True),
            ("abc", "ab", False),
        ],
    )
    def test_anchored_match(self, text: str, pattern: str, expected: bool) -> None:
        """Test the anchored two-pointer matcher, including backtracking."""
        assert wildcard_match(text, pattern) is expected

    def test_search_wraps_pattern(self) -> None:
        """Test that search finds the pattern inside longer text."""
        assert wildcard_search("xxabcxx", "a*c") is True
        assert wildcard_search("xxacbxx", "b*a") is False


class TestRowMatches:
    """Tests for OR-across-cells row matching."""

    def test_any_cell_matches(self) -> None:
        """Test that one matching cell is enough."""
        row = (Cell.from_value("Alice"), Cell.from_value(30), Cell.from_value(None))

        assert row_matches(row, "30", rule(MatchMode.EXACT)) is True
        assert row_matches(row, "ali", rule(MatchMode.STARTS_WITH)) is True
        assert row_matches(row, "bob", rule(MatchMode.CONTAINS)) is False

    def test_empty_row(self) -> None:
        """Test that a row without cells never matches."""
        assert row_matches((), "a", rule(MatchMode.CONTAINS)) is False
