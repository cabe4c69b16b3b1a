"""
Unit Tests for Raster Card Rendering
"""

import pytest
from PIL import Image

from punchcard_toolkit.core.punchcard import PunchCard
from punchcard_toolkit.render.config import (
    CardImageStyle,
    ImageRenderOptions,
    PageLayout,
    palette_for,
    round_half_up,
)
from punchcard_toolkit.render.image import render_card_image, save_card_images


class TestImageRenderOptions:
    """Tests for ImageRenderOptions sizing."""

    @pytest.mark.parametrize("dpi,expected", [
        (100, (738, 325)),
        (300, (2213, 975)),
        (72, (531, 234)),
    ])
    def test_card_size_when_dpi_then_matches_physical_card(self, dpi, expected):
        assert ImageRenderOptions(dpi=dpi).card_size == expected

    def test_dpi_when_out_of_range_then_clamped(self):
        assert ImageRenderOptions(dpi=10).dpi == 72
        assert ImageRenderOptions(dpi=5000).dpi == 1200

    def test_page_size_when_a4_then_a4_pixels(self):
        options = ImageRenderOptions(dpi=100, layout=PageLayout.A4)
        assert options.page_size == (827, 1169)

    def test_options_when_strings_then_enums(self):
        options = ImageRenderOptions(style="keypunch", layout="a4")
        assert options.style is CardImageStyle.KEYPUNCH
        assert options.layout is PageLayout.A4

    def test_round_half_up_when_half_then_rounds_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1


class TestRenderCardImage:
    """Tests for render_card_image()."""

    def test_render_when_card_layout_then_card_sized_rgba(self, encoder):
        img = render_card_image(PunchCard.from_text(encoder, "HELLO"), ImageRenderOptions(dpi=100))
        assert img.mode == "RGBA"
        assert img.size == (738, 325)

    def test_render_when_a4_layout_then_page_sized(self, encoder):
        options = ImageRenderOptions(dpi=72, layout=PageLayout.A4)
        img = render_card_image(PunchCard.blank(), options)
        assert img.size == options.page_size
        page_bg = palette_for(CardImageStyle.INTERPRETER, card_only=False).page_bg
        assert img.getpixel((0, 0)) == page_bg

    def test_render_when_column_punched_then_hole_drawn(self, encoder):
        # Second column, row 12 sits at (27, 55) at 100 DPI
        options = ImageRenderOptions(style=CardImageStyle.PLAIN, dpi=100)
        palette = palette_for(CardImageStyle.PLAIN, card_only=True)
        punched = render_card_image(PunchCard.from_text(encoder, " &"), options)
        blank = render_card_image(PunchCard.blank(), options)
        assert punched.getpixel((27, 55)) == palette.hole
        assert blank.getpixel((27, 55)) == palette.card_bg

    def test_render_when_plain_then_no_header_band(self):
        options = ImageRenderOptions(style=CardImageStyle.PLAIN, dpi=100)
        img = render_card_image(PunchCard.blank(), options)
        assert img.getpixel((100, 10)) == palette_for(CardImageStyle.PLAIN, True).card_bg

    def test_render_when_interpreter_then_header_band(self):
        img = render_card_image(PunchCard.blank(), ImageRenderOptions(dpi=100))
        assert img.getpixel((100, 10)) == palette_for(CardImageStyle.INTERPRETER, True).header


class TestSaveCardImages:
    """Tests for save_card_images()."""

    def test_save_when_png_target_then_single_file(self, tmp_path, encoder):
        target = tmp_path / "card.png"
        paths = save_card_images([PunchCard.from_text(encoder, "A")], target,
                                 ImageRenderOptions(dpi=72))
        assert paths == [target]
        with Image.open(target) as img:
            assert img.size == (531, 234)

    def test_save_when_directory_then_numbered_files(self, tmp_path, encoder):
        cards = [PunchCard.from_text(encoder, t) for t in ("A", "B", "C")]
        paths = save_card_images(cards, tmp_path / "out", ImageRenderOptions(dpi=72))
        assert [p.name for p in paths] == ["card_0001.png", "card_0002.png", "card_0003.png"]
        assert all(p.exists() for p in paths)

    def test_save_when_many_cards_to_png_then_raises(self, tmp_path, encoder):
        cards = [PunchCard.from_text(encoder, t) for t in ("A", "B")]
        with pytest.raises(ValueError):
            save_card_images(cards, tmp_path / "card.png")
