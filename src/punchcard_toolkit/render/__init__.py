"""
Render Package

ASCII, raster and PDF renderers for punched cards.
"""

from .ascii import RenderStyle, render_card, render_deck, render_listing
from .config import CardImageStyle, ImageRenderOptions, PageLayout, SheetLayout
from .image import render_card_image, save_card_images
from .pdf import render_cards_to_pdf, render_sheets

__all__ = [
    "RenderStyle",
    "render_card",
    "render_deck",
    "render_listing",
    "CardImageStyle",
    "ImageRenderOptions",
    "PageLayout",
    "SheetLayout",
    "render_card_image",
    "save_card_images",
    "render_cards_to_pdf",
    "render_sheets",
]
