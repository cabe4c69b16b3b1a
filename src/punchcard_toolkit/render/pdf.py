"""
Module: render.pdf

Purpose:
    Tile rendered cards onto printable pages and write them to PDF using
    ReportLab. Each sheet is one page; cards are stacked top to bottom and
    centred horizontally.

Key Functions:
    - render_sheets(cards, options, layout): Pillow page images
    - render_cards_to_pdf(cards, output_path, options, layout): PDF file

Dependencies:
    - reportlab: PDF generation
    - PIL: Page images
    - render.image: Card faces

Used By:
    - cli.render: ``punch render pdf``
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import List, Sequence

from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from ..core.punchcard import PunchCard
from .config import (
    CARD_HEIGHT_IN,
    ImageRenderOptions,
    PageLayout,
    SheetLayout,
    inches_to_px,
    palette_for,
)
from .image import render_card_image

logger = logging.getLogger(__name__)

POINTS_PER_INCH = 72.0


def render_sheets(
    cards: Sequence[PunchCard],
    options: ImageRenderOptions = ImageRenderOptions(),
    layout: SheetLayout = SheetLayout(),
) -> List[Image.Image]:
    """
    Arrange cards onto page images.

    Args:
        cards: Cards in output order
        options: Style and DPI (the page layout field is ignored)
        layout: Page size, margins and gap

    Returns:
        One RGBA image per page; empty when there are no cards.
    """
    dpi = options.dpi
    card_options = ImageRenderOptions(style=options.style, dpi=dpi, layout=PageLayout.CARD)
    palette = palette_for(options.style, card_only=False)

    page_w = inches_to_px(layout.page_width_in, dpi)
    page_h = inches_to_px(layout.page_height_in, dpi)
    margin = inches_to_px(layout.margin_in, dpi)
    pitch = inches_to_px(CARD_HEIGHT_IN + layout.gap_in, dpi)
    per_page = layout.cards_per_page

    pages: List[Image.Image] = []
    for start in range(0, len(cards), per_page):
        page = Image.new("RGBA", (page_w, page_h), palette.page_bg)
        for slot, card in enumerate(cards[start:start + per_page]):
            card_img = render_card_image(card, card_options)
            x = max(0, (page_w - card_img.width) // 2)
            y = margin + slot * pitch
            page.paste(card_img, (x, y))
        pages.append(page)

    logger.debug("Tiled %d cards onto %d page(s), %d per page", len(cards), len(pages), per_page)
    return pages


def render_cards_to_pdf(
    cards: Sequence[PunchCard],
    output_path: Path,
    options: ImageRenderOptions = ImageRenderOptions(),
    layout: SheetLayout = SheetLayout(),
) -> int:
    """
    Render cards to a PDF file, one sheet per page.

    Args:
        cards: Cards in output order
        output_path: Path to write the PDF
        options: Style and DPI of the embedded card images
        layout: Sheet geometry

    Returns:
        Number of pages written

    Raises:
        IOError: If the PDF cannot be written
    """
    output_path = Path(output_path)
    pages = render_sheets(cards, options, layout)
    if not pages:
        logger.warning("No cards to render, creating empty PDF")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    page_size = (
        layout.page_width_in * POINTS_PER_INCH,
        layout.page_height_in * POINTS_PER_INCH,
    )
    c = canvas.Canvas(str(output_path), pagesize=page_size)
    for page in pages:
        c.drawImage(_pil_to_reader(page), 0, 0, width=page_size[0], height=page_size[1])
        c.showPage()
    c.save()

    logger.info("Rendered %d cards on %d page(s) to %s", len(cards), len(pages), output_path)
    return len(pages)


def _pil_to_reader(img: Image.Image) -> ImageReader:
    """Convert a PIL image to a ReportLab ImageReader."""
    buf = io.BytesIO()
    img.convert("RGB").save(buf, format="PNG")
    buf.seek(0)
    return ImageReader(buf)
