"""
Module: render.image

Purpose:
    Rasterise a punched card into a Pillow image: paper background,
    border, optional header band, column grid every 10 columns, filled
    circles for punched holes and 5x7 bitmap glyphs of the card text.

Key Functions:
    - render_card_image(card, options): Card face as an RGBA image
    - save_card_images(cards, output, options): Write PNGs to a file or directory

Dependencies:
    - PIL: Image drawing
    - numpy: Hole positions from the card's hole matrix

Used By:
    - render.pdf: Sheet tiling
    - cli.render: ``punch render image``
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import List, Sequence

import numpy as np
from PIL import Image, ImageDraw

from ..core.encoding import ROW_COUNT
from ..core.punchcard import PunchCard
from .config import (
    ImageRenderOptions,
    PageLayout,
    Palette,
    palette_for,
    round_half_up,
)
from .glyphs import GLYPH_WIDTH, glyph_pixels

logger = logging.getLogger(__name__)

# Card geometry as fractions of an inch
MARGIN_X_IN = 0.18
MARGIN_TOP_IN = 0.55
MARGIN_BOTTOM_IN = 0.35
HEADER_BAND_IN = 0.4


def render_card_image(card: PunchCard, options: ImageRenderOptions = ImageRenderOptions()) -> Image.Image:
    """
    Render one card face.

    Args:
        card: Punched card to draw
        options: Style, DPI and page layout

    Returns:
        RGBA image. Card layout is exactly the card size at the clamped
        DPI; A4 layout centres the card on an A4 page.

    Example:
        >>> img = render_card_image(card, ImageRenderOptions(dpi=100))
        >>> img.size
        (738, 325)
    """
    palette = palette_for(options.style, options.layout is PageLayout.CARD)
    card_img = _draw_card(card, options.dpi, palette)

    if options.layout is PageLayout.CARD:
        return card_img

    page_w, page_h = options.page_size
    page = Image.new("RGBA", (page_w, page_h), palette.page_bg)
    offset_x = max(0, (page_w - card_img.width) // 2)
    offset_y = max(0, (page_h - card_img.height) // 2)
    page.paste(card_img, (offset_x, offset_y))
    return page


def _draw_card(card: PunchCard, dpi: int, palette: Palette) -> Image.Image:
    """Draw the card face at ``dpi`` without any surrounding page."""
    options = ImageRenderOptions(dpi=dpi)
    width, height = options.card_size
    img = Image.new("RGBA", (width, height), palette.card_bg)
    draw = ImageDraw.Draw(img)

    margin_x = round_half_up(MARGIN_X_IN * dpi)
    margin_top = round_half_up(MARGIN_TOP_IN * dpi)
    margin_bottom = round_half_up(MARGIN_BOTTOM_IN * dpi)

    if palette.header is not None:
        header_h = min(round_half_up(HEADER_BAND_IN * dpi), height)
        draw.rectangle([0, 0, width - 1, header_h - 1], fill=palette.header)

    draw.rectangle([0, 0, width - 1, height - 1], outline=palette.border)

    col_count = len(card.columns)
    col_spacing = max(width - 2 * margin_x, 1) / (col_count - 1)
    row_spacing = max(height - margin_top - margin_bottom, 1) / (ROW_COUNT - 1)
    hole_radius = max(2, round_half_up(min(col_spacing, row_spacing) * 0.2))

    # Grid: left edge, every 10th column, right edge
    for col in range(col_count + 1):
        if col == 0 or col == col_count or col % 10 == 0:
            x = margin_x + col * col_spacing
            draw.line([(x, margin_top), (x, height - margin_bottom)], fill=palette.grid)

    rows, cols = np.nonzero(card.to_matrix())
    for row_idx, col_idx in zip(rows.tolist(), cols.tolist()):
        cx = round_half_up(margin_x + col_idx * col_spacing)
        cy = round_half_up(margin_top + row_idx * row_spacing)
        draw.ellipse(
            [cx - hole_radius, cy - hole_radius, cx + hole_radius, cy + hole_radius],
            fill=palette.hole,
        )

    scale = max(2, math.ceil(dpi / 120))
    half_glyph = round_half_up(GLYPH_WIDTH * scale / 2)
    baseline = round_half_up(margin_top - row_spacing * 0.85)
    for col_idx, ch in enumerate(card.text):
        if ch == " ":
            continue
        left = round_half_up(margin_x + col_idx * col_spacing) - half_glyph
        for gx, gy in glyph_pixels(ch):
            px = left + gx * scale
            py = baseline + gy * scale
            draw.rectangle([px, py, px + scale - 1, py + scale - 1], fill=palette.text)

    return img


def save_card_images(
    cards: Sequence[PunchCard],
    output: Path,
    options: ImageRenderOptions = ImageRenderOptions(),
) -> List[Path]:
    """
    Write card images as PNG files.

    A ``.png`` output path receives a single card; any other path is
    treated as a directory and receives ``card_0001.png``, ``card_0002.png``...

    Raises:
        ValueError: If a single ``.png`` target is given more than one card.
    """
    output = Path(output)
    single_file = output.suffix.lower() == ".png"
    if single_file and len(cards) > 1:
        raise ValueError("output path must be a directory when rendering multiple cards")

    if single_file:
        output.parent.mkdir(parents=True, exist_ok=True)
        targets = [output]
    else:
        output.mkdir(parents=True, exist_ok=True)
        targets = [output / f"card_{idx:04d}.png" for idx in range(1, len(cards) + 1)]

    for card, target in zip(cards, targets):
        render_card_image(card, options).save(target)
        logger.debug("Wrote %s", target)

    logger.info("Rendered %d card image(s) to %s at %d DPI", len(targets), output, options.dpi)
    return targets
