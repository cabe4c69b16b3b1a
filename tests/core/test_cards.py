"""
Unit Tests for CardRecord

Tests for card text normalization, punch caching and dict conversion.
"""

import pytest

from punchcard_toolkit.core.encoding import EncodingKind
from punchcard_toolkit.core.errors import TextTooLong
from punchcard_toolkit.core.models.cards import (
    CardMeta,
    CardRecord,
    CardType,
    format_punches,
    normalize_card_text,
    parse_punches,
)
from punchcard_toolkit.core.models.columns import ColumnRange
from punchcard_toolkit.core.punchcard import PunchCard


class TestNormalizeCardText:
    """Tests for normalize_card_text()."""

    def test_normalize_when_short_then_pads_to_80(self):
        assert normalize_card_text("HELLO") == "HELLO" + " " * 75

    def test_normalize_when_already_normalized_then_unchanged(self):
        """Normalization is idempotent."""
        once = normalize_card_text("      X = 1")
        assert normalize_card_text(once) == once

    def test_normalize_when_exactly_80_then_unchanged(self):
        text = "A" * 80
        assert normalize_card_text(text) == text

    def test_normalize_when_81_columns_then_raises(self):
        with pytest.raises(TextTooLong) as exc_info:
            normalize_card_text("A" * 81)
        assert exc_info.value.length == 81


class TestCardRecord:
    """Tests for CardRecord dataclass."""

    def test_from_text_when_short_text_then_pads_and_defaults(self):
        card = CardRecord.from_text("HELLO")
        assert len(card.text) == 80
        assert card.card_type is CardType.CODE
        assert card.encoding is EncodingKind.HOLLERITH
        assert card.seq is None
        assert card.punches is None

    def test_init_when_neither_text_nor_punches_then_raises(self):
        with pytest.raises(ValueError):
            CardRecord()

    def test_init_when_negative_seq_then_raises(self):
        with pytest.raises(ValueError):
            CardRecord(text="X", seq=-1)

    def test_init_when_string_enums_then_coerced(self):
        card = CardRecord(text="X", encoding="ebcdic", card_type="jcl")
        assert card.encoding is EncodingKind.EBCDIC
        assert card.card_type is CardType.JCL

    def test_with_punches_when_text_then_cache_matches_encoding(self, encoder):
        card = CardRecord.from_text("A").with_punches()
        masks = parse_punches(card.punches)
        assert masks[0] == encoder.encode("A")
        assert masks[1:] == [0] * 79

    def test_to_punch_card_when_text_then_text_is_authoritative(self):
        """A stale punch cache never overrides the text."""
        stale = format_punches([0] * 80)
        card = CardRecord(text="HELLO", punches=stale)
        assert card.to_punch_card().columns[0] != 0

    def test_to_punch_card_when_punches_only_then_decodes_masks(self, encoder):
        masks = [encoder.encode(ch) for ch in "HI".ljust(80)]
        card = CardRecord(punches=format_punches(masks))
        punch = card.to_punch_card()
        assert punch.text.rstrip() == "HI"
        assert card.display_text == " " * 80

    def test_char_at_when_one_based_column_then_returns_character(self):
        card = CardRecord.from_text("ABC")
        assert card.char_at(1) == "A"
        assert card.char_at(3) == "C"
        assert card.char_at(80) == " "

    def test_from_punch_card_when_built_then_keeps_text_and_masks(self, encoder):
        punch = PunchCard.from_text(encoder, "DATA")
        card = CardRecord.from_punch_card(punch, CardType.DATA)
        assert card.text == punch.text
        assert parse_punches(card.punches) == list(punch.columns)

    def test_to_dict_when_round_tripped_then_equal(self):
        card = CardRecord(
            text="      X = 1",
            seq=20,
            card_type=CardType.DATA,
            protected_cols=(ColumnRange(73, 80),),
            meta=CardMeta(note="check", color="red"),
        )
        assert CardRecord.from_dict(card.to_dict()) == card

    def test_to_dict_when_meta_unset_then_meta_empty(self):
        assert CardRecord.from_text("X").to_dict()["meta"] == {}

    def test_to_dict_when_text_has_trailing_spaces_then_kept(self):
        assert len(CardRecord.from_text("X").to_dict()["text"]) == 80


class TestPunchCache:
    """Tests for the punch cache string helpers."""

    def test_parse_punches_when_wrong_length_then_raises(self):
        with pytest.raises(ValueError):
            parse_punches("000 000")

    def test_parse_punches_when_over_twelve_bits_then_raises(self):
        with pytest.raises(ValueError):
            parse_punches(" ".join(["1000"] + ["000"] * 79))

    def test_format_punches_when_masks_then_three_hex_digits(self):
        assert format_punches([0xA01, 0]).split() == ["A01", "000"]
