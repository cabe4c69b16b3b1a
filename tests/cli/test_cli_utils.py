"""
Unit Tests for CLI Helpers
"""

import io

import pytest

from punchcard_toolkit.cli.utils import (
    card_position,
    parse_range_expression,
    read_text_arg,
    resolve_actor,
    split_lines_fixed,
    write_output,
)
from punchcard_toolkit.core.errors import TextTooLong


class TestParseRangeExpression:
    """Tests for parse_range_expression()."""

    def test_parse_when_mixed_terms_then_ordered_unique_zero_based(self):
        assert parse_range_expression("2..3,1,3,$", 5) == [1, 2, 0, 4]

    def test_parse_when_dollar_range_then_runs_to_end(self):
        assert parse_range_expression("4..$", 6) == [3, 4, 5]

    def test_parse_when_spaces_and_empty_terms_then_ignored(self):
        assert parse_range_expression(" 1 , ,2 .. 3 ", 3) == [0, 1, 2]

    @pytest.mark.parametrize("expr,match", [
        ("", "empty"),
        ("0", "1-based"),
        ("3..1", "invalid"),
        ("abc", "not a number"),
        ("..2", "empty"),
        ("9", "out of range"),
        (",", "no indices"),
    ])
    def test_parse_when_malformed_then_raises(self, expr, match):
        with pytest.raises(ValueError, match=match):
            parse_range_expression(expr, 5)

    def test_parse_when_dollar_on_empty_deck_then_raises(self):
        with pytest.raises(ValueError, match="undefined"):
            parse_range_expression("$", 0)


class TestTextHelpers:
    """Tests for split_lines_fixed(), read_text_arg() and write_output()."""

    def test_split_when_long_line_then_raises_with_line_number(self):
        with pytest.raises(TextTooLong) as exc_info:
            split_lines_fixed("B\n" + "A" * 90)
        assert exc_info.value.line == 2
        assert exc_info.value.length == 90
        assert "line 2" in str(exc_info.value)

    def test_split_when_exactly_80_then_kept(self):
        assert split_lines_fixed("A" * 80 + "\nB") == ["A" * 80, "B".ljust(80)]

    def test_split_when_empty_then_one_blank_line(self):
        assert split_lines_fixed("") == [" " * 80]

    def test_read_when_inline_text_then_wins(self, tmp_path):
        assert read_text_arg("inline", tmp_path / "ignored.txt") == "inline"

    def test_read_when_file_then_contents(self, tmp_path):
        source = tmp_path / "in.txt"
        source.write_text("from file\n", encoding="utf-8")
        assert read_text_arg(None, source) == "from file\n"

    def test_read_when_dash_then_stdin(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("typed"))
        assert read_text_arg(None, "-") == "typed"

    def test_write_when_dash_then_stdout(self, capsys):
        write_output("-", "hello")
        assert capsys.readouterr().out == "hello"


class TestResolveActor:
    """Tests for resolve_actor() and card_position()."""

    def test_actor_when_punch_actor_set_then_preferred(self):
        assert resolve_actor({"PUNCH_ACTOR": "ada", "USER": "root"}) == "ada"

    def test_actor_when_only_username_then_used(self):
        assert resolve_actor({"USER": "  ", "USERNAME": "grace"}) == "grace"

    def test_actor_when_nothing_set_then_unknown(self):
        assert resolve_actor({}) == "unknown"

    def test_card_position_when_in_range_then_zero_based(self):
        assert card_position(3, 3) == 2

    @pytest.mark.parametrize("index", [0, 4, -1])
    def test_card_position_when_out_of_range_then_raises(self, index):
        with pytest.raises(ValueError, match="out of range 1..3"):
            card_position(index, 3)
