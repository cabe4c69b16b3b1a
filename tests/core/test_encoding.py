"""
Unit Tests for the IBM 029 Encoder

Tests for character <-> hole mask conversion.
"""

import pytest

from punchcard_toolkit.core.encoding import (
    IBM029_TABLE,
    VALID_SET,
    EncodingKind,
    Ibm029Encoder,
    get_encoder,
    mask_from_rows,
    rows_from_mask,
)
from punchcard_toolkit.core.errors import UnknownHolePattern, UnsupportedCharacter


class TestIbm029Encoder:
    """Tests for Ibm029Encoder."""

    # ─────────────────────────────────────────────────────────────────────────
    # Known patterns
    # ─────────────────────────────────────────────────────────────────────────

    @pytest.mark.parametrize("ch, rows", [
        ("A", (12, 1)),
        ("J", (11, 1)),
        ("S", (0, 2)),
        ("0", (0,)),
        ("9", (9,)),
        ("&", (12,)),
        ("-", (11,)),
        ("/", (0, 1)),
        (".", (12, 3, 8)),
        ("$", (11, 3, 8)),
        (",", (0, 3, 8)),
        ("#", (3, 8)),
    ])
    def test_encode_when_known_character_then_punches_chart_rows(self, encoder, ch, rows):
        """Characters punch the rows of the 029 chart."""
        assert rows_from_mask(encoder.encode(ch)) == rows

    def test_encode_when_space_then_returns_zero(self, encoder):
        """Space is the only blank column."""
        assert encoder.encode(" ") == 0

    def test_encode_when_lowercase_then_matches_uppercase(self, encoder):
        """ASCII lowercase folds to uppercase."""
        for upper in "ABCDEFGHIJKLMNOPQRSTUVWXYZ":
            assert encoder.encode(upper.lower()) == encoder.encode(upper)

    @pytest.mark.parametrize("ch", ["~", "[", "\t", "é", "{"])
    def test_encode_when_unsupported_then_raises_with_character(self, encoder, ch):
        """Characters outside the chart raise UnsupportedCharacter."""
        with pytest.raises(UnsupportedCharacter) as exc_info:
            encoder.encode(ch)
        assert exc_info.value.char == ch
        assert exc_info.value.code_point == ord(ch)

    def test_encode_when_multiple_characters_then_raises_value_error(self, encoder):
        """encode() works on exactly one character."""
        with pytest.raises(ValueError):
            encoder.encode("AB")

    # ─────────────────────────────────────────────────────────────────────────
    # Table properties
    # ─────────────────────────────────────────────────────────────────────────

    def test_table_when_all_characters_encoded_then_masks_are_distinct(self, encoder):
        """No two supported characters share a hole pattern."""
        masks = [encoder.encode(ch) for ch in VALID_SET]
        assert len(set(masks)) == len(VALID_SET)

    def test_table_when_compared_to_valid_set_then_covers_it_exactly(self):
        """The table holds exactly the printable 029 set."""
        assert {ch for ch, _ in IBM029_TABLE} == set(VALID_SET)

    def test_masks_when_encoded_then_fit_in_twelve_bits(self, encoder):
        """Every mask is a 12-bit value."""
        assert all(0 <= encoder.encode(ch) < 4096 for ch in VALID_SET)

    def test_decode_when_mask_from_encode_then_returns_character(self, encoder):
        """decode() inverts encode() over the whole set."""
        for ch in VALID_SET:
            assert encoder.decode(encoder.encode(ch)) == ch

    def test_decode_when_unknown_mask_then_raises(self, encoder):
        """Patterns outside the chart raise UnknownHolePattern."""
        with pytest.raises(UnknownHolePattern):
            encoder.decode(mask_from_rows([1, 2, 3]))

    def test_is_supported_when_checked_then_matches_encode(self, encoder):
        assert encoder.is_supported("a")
        assert encoder.is_supported("¢")
        assert not encoder.is_supported("~")
        assert not encoder.is_supported("AB")


class TestGetEncoder:
    """Tests for get_encoder()."""

    @pytest.mark.parametrize("kind", list(EncodingKind))
    def test_get_encoder_when_any_kind_then_returns_ibm029(self, kind):
        """Every encoding tag punches with the 029 chart."""
        assert isinstance(get_encoder(kind), Ibm029Encoder)

    def test_get_encoder_when_unknown_kind_then_raises(self):
        with pytest.raises(ValueError):
            get_encoder("baudot")


class TestMaskHelpers:
    """Tests for row/mask conversion helpers."""

    def test_mask_from_rows_when_zone_rows_then_sets_high_bits(self):
        """Row 12 is bit 11 and row 11 is bit 10."""
        assert mask_from_rows([12]) == 1 << 11
        assert mask_from_rows([11]) == 1 << 10
        assert mask_from_rows([0, 9]) == 0b1000000001

    def test_mask_from_rows_when_invalid_row_then_raises(self):
        with pytest.raises(ValueError):
            mask_from_rows([10])
