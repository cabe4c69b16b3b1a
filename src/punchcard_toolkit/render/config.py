"""
Module: render.config

Purpose:
    Configuration for the raster and PDF renderers. Defines card and page
    dimensions, DPI limits and the colour palette of each card style.

Key Classes:
    - CardImageStyle: Plain / Interpreter / Keypunch
    - PageLayout: Card-sized image or card centred on A4
    - ImageRenderOptions: Immutable raster options (DPI clamped)
    - SheetLayout: Immutable multi-card page layout
    - Palette: Colours for one style

Dependencies:
    - dataclasses (std)

Used By:
    - render.image: Card rasterisation
    - render.pdf: Sheet tiling and PDF export
    - cli.render: Flag mapping
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

# Physical card: IBM 5081, 7 3/8 x 3 1/4 inches
CARD_WIDTH_IN = 7.375
CARD_HEIGHT_IN = 3.25

A4_WIDTH_IN = 8.27
A4_HEIGHT_IN = 11.69

MIN_DPI = 72
MAX_DPI = 1200
DEFAULT_DPI = 300

RGBA = Tuple[int, int, int, int]


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def inches_to_px(inches: float, dpi: int) -> int:
    return round_half_up(inches * dpi)


def clamp_dpi(dpi: int) -> int:
    """Clamp DPI into the supported 72-1200 range."""
    return max(MIN_DPI, min(MAX_DPI, int(dpi)))


class CardImageStyle(str, Enum):
    """Visual style of a rendered card face."""
    PLAIN = "plain"
    INTERPRETER = "interpreter"
    KEYPUNCH = "keypunch"

    def __str__(self) -> str:
        return self.value


class PageLayout(str, Enum):
    """Output page for a single rendered card."""
    CARD = "card"
    A4 = "a4"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Palette:
    card_bg: RGBA
    page_bg: RGBA
    grid: RGBA
    hole: RGBA
    text: RGBA
    border: RGBA
    header: Optional[RGBA] = None


def _rgb(value: int) -> RGBA:
    return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF, 0xFF)


def palette_for(style: CardImageStyle, card_only: bool) -> Palette:
    """
    Colours for ``style``.

    The page background matches the card when the card is rendered on its
    own, and is a lighter paper tone when the card sits on a larger page.
    """
    style = CardImageStyle(style)
    if style is CardImageStyle.PLAIN:
        return Palette(
            card_bg=_rgb(0xF4E8CC),
            page_bg=_rgb(0xF4E8CC if card_only else 0xFDFAF3),
            grid=_rgb(0xD7C9A8),
            hole=_rgb(0x28241F),
            text=_rgb(0x28241F),
            border=_rgb(0x7D6B54),
        )
    if style is CardImageStyle.INTERPRETER:
        return Palette(
            card_bg=_rgb(0xF6E3C6),
            page_bg=_rgb(0xF6E3C6 if card_only else 0xFCF7EF),
            grid=_rgb(0xD1BA9B),
            hole=_rgb(0x24221D),
            text=_rgb(0x1F1B14),
            border=_rgb(0x86745D),
            header=_rgb(0xE6CBA6),
        )
    return Palette(
        card_bg=_rgb(0xF5D7B5),
        page_bg=_rgb(0xF5D7B5 if card_only else 0xFAF2E7),
        grid=_rgb(0xCAA079),
        hole=_rgb(0x2B211D),
        text=_rgb(0x211815),
        border=_rgb(0x82634D),
        header=_rgb(0xE6B88F),
    )


@dataclass(frozen=True)
class ImageRenderOptions:
    """
    Raster rendering options (immutable).

    Attributes:
        style: Card colour scheme
        dpi: Dots per inch; clamped to 72-1200 on construction
        layout: Card-sized output or card centred on an A4 page

    Example:
        >>> ImageRenderOptions(dpi=5000).dpi
        1200
        >>> ImageRenderOptions(dpi=100).card_size
        (738, 325)
    """

    style: CardImageStyle = CardImageStyle.INTERPRETER
    dpi: int = DEFAULT_DPI
    layout: PageLayout = PageLayout.CARD

    def __post_init__(self) -> None:
        """Normalize enums and clamp DPI on construction."""
        object.__setattr__(self, "style", CardImageStyle(self.style))
        object.__setattr__(self, "layout", PageLayout(self.layout))
        object.__setattr__(self, "dpi", clamp_dpi(self.dpi))

    @property
    def card_size(self) -> Tuple[int, int]:
        """Card (width, height) in pixels."""
        return inches_to_px(CARD_WIDTH_IN, self.dpi), inches_to_px(CARD_HEIGHT_IN, self.dpi)

    @property
    def page_size(self) -> Tuple[int, int]:
        """Output image (width, height) in pixels."""
        if self.layout is PageLayout.A4:
            return inches_to_px(A4_WIDTH_IN, self.dpi), inches_to_px(A4_HEIGHT_IN, self.dpi)
        return self.card_size


@dataclass(frozen=True)
class SheetLayout:
    """
    Multi-card page layout (immutable).

    Cards are stacked top to bottom, centred horizontally, as many per page
    as fit between the margins.

    Attributes:
        page_width_in: Page width in inches
        page_height_in: Page height in inches
        margin_in: Margin on every side in inches
        gap_in: Vertical gap between cards in inches
    """

    page_width_in: float = A4_WIDTH_IN
    page_height_in: float = A4_HEIGHT_IN
    margin_in: float = 0.4
    gap_in: float = 0.25

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_width_in <= 0 or self.page_height_in <= 0:
            raise ValueError(
                f"page size must be positive: {self.page_width_in}x{self.page_height_in}"
            )
        if self.margin_in < 0 or self.gap_in < 0:
            raise ValueError("margin and gap must not be negative")
        if self.available_width_in < CARD_WIDTH_IN:
            raise ValueError("Margins leave no room for a card horizontally")
        if self.available_height_in < CARD_HEIGHT_IN:
            raise ValueError("Margins leave no room for a card vertically")

    @property
    def available_width_in(self) -> float:
        """Width available for cards (excluding margins)."""
        return self.page_width_in - 2 * self.margin_in

    @property
    def available_height_in(self) -> float:
        """Height available for cards (excluding margins)."""
        return self.page_height_in - 2 * self.margin_in

    @property
    def cards_per_page(self) -> int:
        pitch = CARD_HEIGHT_IN + self.gap_in
        return max(1, int((self.available_height_in + self.gap_in) // pitch))
