"""
Module: render.ascii

Purpose:
    Text rendering of punched cards. The frame (header, ruler, text line,
    separators and row labels) is stable so listings and reports can be
    diffed line by line.

Key Functions:
    - render_card(card, style): One card as a 12-row hole diagram
    - render_deck(cards, style): Cards separated by a blank line
    - render_listing(deck, style): Per-card metadata plus punch diagram

Used By:
    - cli.render, cli.card, cli.encode
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Optional

from ..core.encoding import CARD_COLUMNS, ROW_BITS, ROW_ORDER, Ibm029Encoder
from ..core.models import Deck
from ..core.punchcard import PunchCard

HEADER_LINE = "IBM 5081 (80 cols) [IBM029]"
INDENT = " " * 5


class RenderStyle(str, Enum):
    """Mark/blank characters used for punched and unpunched positions."""
    ASCII_X = "ascii-x"
    ASCII_01 = "ascii-01"

    @property
    def mark(self) -> str:
        return "X" if self is RenderStyle.ASCII_X else "1"

    @property
    def blank(self) -> str:
        return " " if self is RenderStyle.ASCII_X else "0"

    def __str__(self) -> str:
        return self.value


def ruler_line() -> str:
    """Dots with the tens digit at every 10th column: ``.........1...``."""
    return "".join(
        str((col // 10) % 10) if col % 10 == 0 else "."
        for col in range(1, CARD_COLUMNS + 1)
    )


def render_card(card: PunchCard, style: RenderStyle = RenderStyle.ASCII_X) -> str:
    """
    Render one card.

    Layout::

        IBM 5081 (80 cols) [IBM029]
             .........1.........2 ...
             HELLO
             -----------------------
         12 |X   X ...|
         ...
          9 |    ...|
             -----------------------

    Every line, the last included, ends with a newline.
    """
    separator = "-" * CARD_COLUMNS
    lines = [
        HEADER_LINE,
        INDENT + ruler_line(),
        INDENT + card.text,
        INDENT + separator,
    ]
    for row, bit in zip(ROW_ORDER, ROW_BITS):
        cells = "".join(
            style.mark if (mask >> bit) & 1 else style.blank for mask in card.columns
        )
        lines.append(f"{row:>3} |{cells}|")
    lines.append(INDENT + separator)
    return "\n".join(lines) + "\n"


def render_deck(cards: Iterable[PunchCard], style: RenderStyle = RenderStyle.ASCII_X) -> str:
    """Render cards in order with one blank line between them."""
    return "\n".join(render_card(card, style) for card in cards)


def render_listing(
    deck: Deck,
    style: RenderStyle = RenderStyle.ASCII_X,
    encoder: Optional[Ibm029Encoder] = None,
) -> str:
    """
    Card-by-card listing with sequence, type and annotations.

    Each block reads::

        Card    1 | seq 10 | type code
        Note: ...            (when set)
        Color: ...           (when set)
        Text:
        <80-column text, or "(stored punches)">
        Punches:
        <render_card output>

    Blocks are separated by a blank line.
    """
    blocks: List[str] = []
    for idx, record in enumerate(deck.cards, start=1):
        seq = str(record.seq) if record.seq is not None else "(none)"
        parts = [f"Card {idx:>4} | seq {seq} | type {record.card_type}\n"]
        if record.meta.note is not None:
            parts.append(f"Note: {record.meta.note}\n")
        if record.meta.color is not None:
            parts.append(f"Color: {record.meta.color}\n")
        parts.append("Text:\n")
        parts.append((record.text if record.text is not None else "(stored punches)") + "\n")
        parts.append("Punches:\n")
        parts.append(render_card(record.to_punch_card(encoder), style))
        blocks.append("".join(parts))
    return "\n\n".join(blocks)
