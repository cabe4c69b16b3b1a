"""
Unit Tests for PDF Sheet Rendering
"""

import pytest

from punchcard_toolkit.core.punchcard import PunchCard
from punchcard_toolkit.render.config import ImageRenderOptions, SheetLayout
from punchcard_toolkit.render.pdf import render_cards_to_pdf, render_sheets


@pytest.fixture
def low_dpi() -> ImageRenderOptions:
    return ImageRenderOptions(dpi=72)


class TestSheetLayout:
    """Tests for SheetLayout validation and capacity."""

    def test_cards_per_page_when_a4_defaults_then_three(self):
        assert SheetLayout().cards_per_page == 3

    def test_cards_per_page_when_no_gap_tiny_margin_then_still_three(self):
        assert SheetLayout(margin_in=0.1, gap_in=0.0).cards_per_page == 3

    def test_layout_when_margin_too_wide_then_raises(self):
        with pytest.raises(ValueError, match="horizontally"):
            SheetLayout(margin_in=1.0)

    def test_layout_when_negative_gap_then_raises(self):
        with pytest.raises(ValueError):
            SheetLayout(gap_in=-0.1)


class TestRenderSheets:
    """Tests for render_sheets()."""

    def test_sheets_when_four_cards_then_two_pages(self, encoder, low_dpi):
        cards = [PunchCard.from_text(encoder, str(i)) for i in range(4)]
        pages = render_sheets(cards, low_dpi)
        assert len(pages) == 2
        assert pages[0].size == (595, 842)

    def test_sheets_when_no_cards_then_no_pages(self, low_dpi):
        assert render_sheets([], low_dpi) == []


class TestRenderCardsToPdf:
    """Tests for render_cards_to_pdf()."""

    def test_pdf_when_cards_then_file_written(self, tmp_path, encoder, low_dpi):
        cards = [PunchCard.from_text(encoder, "PAGE") for _ in range(7)]
        output = tmp_path / "pdf" / "deck.pdf"
        pages = render_cards_to_pdf(cards, output, low_dpi)
        assert pages == 3
        assert output.read_bytes().startswith(b"%PDF")

    def test_pdf_when_no_cards_then_still_valid_file(self, tmp_path, low_dpi):
        output = tmp_path / "empty.pdf"
        assert render_cards_to_pdf([], output, low_dpi) == 0
        assert output.read_bytes().startswith(b"%PDF")
