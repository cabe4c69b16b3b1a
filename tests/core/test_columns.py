"""
Unit Tests for ColumnRange
"""

import pytest

from punchcard_toolkit.core.models.columns import ColumnRange, format_ranges


class TestColumnRange:
    """Tests for ColumnRange dataclass."""

    def test_init_when_valid_then_creates_range(self):
        r = ColumnRange(73, 80)
        assert r.width == 8
        assert list(r.columns()) == list(range(73, 81))

    @pytest.mark.parametrize("start, end", [(0, 5), (5, 4), (1, 81), (-1, 3)])
    def test_init_when_out_of_bounds_then_raises(self, start, end):
        """Ranges must satisfy 1 <= start <= end <= 80."""
        with pytest.raises(ValueError):
            ColumnRange(start, end)

    def test_contains_when_on_edges_then_true(self):
        r = ColumnRange(7, 72)
        assert r.contains(7)
        assert r.contains(72)
        assert not r.contains(6)
        assert not r.contains(73)

    def test_parse_when_range_text_then_returns_range(self):
        assert ColumnRange.parse("73-80") == ColumnRange(73, 80)
        assert ColumnRange.parse(" 6 ") == ColumnRange(6, 6)

    @pytest.mark.parametrize("text", ["a-b", "1-2-3", "", "80-73"])
    def test_parse_when_malformed_then_raises(self, text):
        with pytest.raises(ValueError):
            ColumnRange.parse(text)

    def test_str_when_formatted_then_uses_dash(self):
        assert str(ColumnRange(1, 5)) == "1-5"

    def test_format_ranges_when_empty_then_dash(self):
        assert format_ranges([]) == "-"
        assert format_ranges([ColumnRange(1, 5), ColumnRange(73, 80)]) == "1-5, 73-80"
