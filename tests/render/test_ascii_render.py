"""
Unit Tests for ASCII Card Rendering
"""

import pytest

from punchcard_toolkit.core.models import CardMeta, CardRecord, CardType, Deck
from punchcard_toolkit.core.punchcard import PunchCard
from punchcard_toolkit.render.ascii import (
    HEADER_LINE,
    RenderStyle,
    render_card,
    render_deck,
    render_listing,
    ruler_line,
)


@pytest.fixture
def hello_card(encoder) -> PunchCard:
    return PunchCard.from_text(encoder, "HELLO")


class TestRenderCard:
    """Tests for render_card()."""

    def test_render_when_hello_then_frame_lines_fixed(self, hello_card):
        lines = render_card(hello_card).splitlines()
        assert len(lines) == 17
        assert lines[0] == HEADER_LINE == "IBM 5081 (80 cols) [IBM029]"
        assert lines[1] == "     " + ruler_line()
        assert lines[2] == "     " + "HELLO".ljust(80)
        assert lines[3] == lines[16] == "     " + "-" * 80

    def test_render_when_hello_then_zone_rows_marked(self, hello_card):
        lines = render_card(hello_card).splitlines()
        # H and E carry a 12 zone, L L O an 11 zone
        assert lines[4] == " 12 |" + "XX".ljust(80) + "|"
        assert lines[5] == " 11 |" + "  XXX".ljust(80) + "|"
        assert lines[6] == "  0 |" + " " * 80 + "|"

    def test_render_when_hello_then_digit_rows_marked(self, hello_card):
        rows = {line[:3].strip(): line[5:85] for line in render_card(hello_card).splitlines()[4:16]}
        assert rows["8"][0] == "X"  # H = 12-8
        assert rows["5"][1] == "X"  # E = 12-5
        assert rows["3"][2:4] == "XX"  # L = 11-3
        assert rows["6"][4] == "X"  # O = 11-6
        assert rows["1"].strip() == ""

    def test_render_when_ascii_01_then_ones_and_zeros(self, hello_card):
        lines = render_card(hello_card, RenderStyle.ASCII_01).splitlines()
        assert lines[4] == " 12 |" + "11" + "0" * 78 + "|"

    def test_render_when_called_then_ends_with_newline(self, hello_card):
        assert render_card(hello_card).endswith("-\n")

    def test_ruler_when_built_then_tens_digit_every_tenth_column(self):
        ruler = ruler_line()
        assert len(ruler) == 80
        assert ruler[:10] == ".........1"
        assert ruler[79] == "8"


class TestRenderDeck:
    """Tests for render_deck()."""

    def test_render_deck_when_two_cards_then_blank_line_between(self, encoder):
        cards = [PunchCard.from_text(encoder, "A"), PunchCard.from_text(encoder, "B")]
        output = render_deck(cards)
        first, second = render_card(cards[0]), render_card(cards[1])
        assert output == first + "\n" + second
        assert "\n\n" + HEADER_LINE in output

    def test_render_deck_when_empty_then_empty_string(self):
        assert render_deck([]) == ""


class TestRenderListing:
    """Tests for render_listing()."""

    def test_listing_when_deck_then_block_per_card(self, fortran_deck):
        listing = render_listing(fortran_deck)
        assert listing.startswith("Card    1 | seq (none) | type code\nText:\n")
        assert listing.count("Punches:\n") == 3
        assert "Card    3 | seq (none) | type code" in listing

    def test_listing_when_meta_set_then_note_and_color_lines(self, fortran_deck):
        fortran_deck.append(
            CardRecord(text="C PATCHED", seq=40, card_type=CardType.PATCH,
                       meta=CardMeta(note="fix loop", color="amber"))
        )
        block = render_listing(fortran_deck).split("\n\n")[-1].lstrip("\n")
        assert block.startswith("Card    4 | seq 40 | type patch\nNote: fix loop\nColor: amber\nText:\n")

    def test_listing_when_punches_only_then_marks_stored_punches(self, encoder):
        deck = Deck.new()
        record = CardRecord.from_text("X").with_punches(encoder)
        deck.append(CardRecord(text=None, punches=record.punches))
        listing = render_listing(deck)
        assert listing.startswith("Card    1 | seq (none) | type code\nText:\n(stored punches)\n")
        assert " 11 |X" not in listing
        assert "  7 |X" in listing
