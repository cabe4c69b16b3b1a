"""
Module: core.punchcard

Purpose:
    Provides PunchCard - one physical card as 80 hole masks plus the 80
    text columns printed along its top edge - and PunchDeck, which splits
    free text into a run of punched cards.

Key Functions:
    - PunchCard.from_text(encoder, text): Punch text (rejects > 80 columns)
    - PunchCard.from_masks(masks): Build from raw hole masks
    - PunchCard.with_sequence(encoder, seq): Non-destructive sequence field
    - PunchCard.decode_text(encoder): Read the holes back as text
    - PunchCard.to_matrix(): 12 x 80 boolean hole matrix
    - PunchDeck.from_text(encoder, text, with_seq_numbers): Split text into cards
    - encode_text_to_deck(): Module-level shortcut for PunchDeck.from_text

Dependencies:
    - numpy: Hole matrix for renderers
    - core.encoding, core.errors

Used By:
    - core.models.cards.CardRecord
    - render.ascii, render.image, render.pdf
    - cli.encode
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .encoding import CARD_COLUMNS, ROW_BITS, ROW_COUNT, Ibm029Encoder, get_encoder
from .errors import TextTooLong, UnknownHolePattern

logger = logging.getLogger(__name__)

SEQUENCE_WIDTH = 9
BLANK_CARD = " " * CARD_COLUMNS


@dataclass(frozen=True, slots=True)
class PunchCard:
    """
    In-memory punch card, column by column (immutable).

    Attributes:
        columns: 80 hole masks
        text: 80 characters shown above the punch grid

    Invariants:
        - len(columns) == len(text) == 80
        - every mask fits in 12 bits

    Example:
        >>> enc = get_encoder()
        >>> card = PunchCard.from_text(enc, "HELLO")
        >>> card.text.rstrip()
        'HELLO'
        >>> card.decode_text(enc) == card.text
        True
    """

    columns: Tuple[int, ...]
    text: str

    def __post_init__(self) -> None:
        """Validate card geometry on construction."""
        if len(self.columns) != CARD_COLUMNS:
            raise ValueError(f"card must have {CARD_COLUMNS} columns, got {len(self.columns)}")
        if len(self.text) != CARD_COLUMNS:
            raise ValueError(f"card text must have {CARD_COLUMNS} characters, got {len(self.text)}")
        for mask in self.columns:
            if not 0 <= mask < (1 << ROW_COUNT):
                raise ValueError(f"hole mask out of range: {mask}")

    # ─────────────────────────────────────────────────────────────────────────
    # Construction
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def blank(cls) -> PunchCard:
        return cls(columns=(0,) * CARD_COLUMNS, text=BLANK_CARD)

    @classmethod
    def from_text(
        cls,
        encoder: Ibm029Encoder,
        text: str,
        *,
        truncate: bool = False,
    ) -> PunchCard:
        """
        Punch ``text`` into a card.

        Args:
            encoder: Character table to punch with
            text: Up to 80 characters; shorter text is space-padded
            truncate: Drop columns past 80 instead of failing. Only the
                rendering pipeline should ask for this.

        Raises:
            TextTooLong: If text exceeds 80 columns and truncate is False
            UnsupportedCharacter: If a character is not in the table
        """
        if len(text) > CARD_COLUMNS:
            if not truncate:
                raise TextTooLong(len(text), CARD_COLUMNS)
            logger.debug("Truncating %d-column text to %d for rendering", len(text), CARD_COLUMNS)
            text = text[:CARD_COLUMNS]
        text = text.ljust(CARD_COLUMNS)
        return cls(columns=tuple(encoder.encode_text(text)), text=text)

    @classmethod
    def from_masks(
        cls,
        masks: Sequence[int],
        text: Optional[str] = None,
        *,
        encoder: Optional[Ibm029Encoder] = None,
    ) -> PunchCard:
        """
        Build a card from raw hole masks.

        When ``text`` is omitted each column is interpreted through the
        encoder; patterns with no character print as blanks.
        """
        masks = tuple(masks)
        if text is None:
            encoder = encoder or get_encoder()
            chars = []
            for mask in masks:
                try:
                    chars.append(encoder.decode(mask))
                except UnknownHolePattern:
                    chars.append(" ")
            text = "".join(chars)
        return cls(columns=masks, text=text.ljust(CARD_COLUMNS))

    # ─────────────────────────────────────────────────────────────────────────
    # Transformations
    # ─────────────────────────────────────────────────────────────────────────

    def with_sequence(self, encoder: Ibm029Encoder, seq: int) -> PunchCard:
        """
        Write ``seq`` right-aligned into columns 72-80.

        Columns that already hold a non-space character are left alone, so
        sequence numbering never overwrites content. Only the columns that
        change are re-encoded.

        Raises:
            ValueError: If seq is negative or wider than 9 digits.
        """
        if seq < 0:
            raise ValueError(f"sequence number must be >= 0: {seq}")
        digits = str(seq)
        if len(digits) > SEQUENCE_WIDTH:
            raise ValueError(f"sequence number {seq} exceeds {SEQUENCE_WIDTH} digits")
        field = digits.rjust(SEQUENCE_WIDTH)
        start = CARD_COLUMNS - SEQUENCE_WIDTH
        text = list(self.text)
        columns = list(self.columns)
        for offset, ch in enumerate(field):
            idx = start + offset
            if text[idx] != " " or ch == " ":
                continue
            text[idx] = ch
            columns[idx] = encoder.encode(ch)
        return replace(self, columns=tuple(columns), text="".join(text))

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    def decode_text(self, encoder: Optional[Ibm029Encoder] = None) -> str:
        """
        Read the punched holes back as text.

        Raises:
            UnknownHolePattern: With the 1-based column of the first bad mask.
        """
        encoder = encoder or get_encoder()
        chars = []
        for col, mask in enumerate(self.columns, start=1):
            try:
                chars.append(encoder.decode(mask))
            except UnknownHolePattern:
                raise UnknownHolePattern(mask, column=col) from None
        return "".join(chars)

    def is_punched(self, row_index: int, col: int) -> bool:
        """Whether physical row ``row_index`` (0 = row 12) of 0-based ``col`` is punched."""
        return bool((self.columns[col] >> ROW_BITS[row_index]) & 1)

    def to_matrix(self) -> np.ndarray:
        """
        Hole matrix in physical row order.

        Returns:
            Boolean array of shape (12, 80); ``[r, c]`` is True when row
            ``ROW_ORDER[r]`` is punched in 0-based column ``c``.
        """
        cols = np.asarray(self.columns, dtype=np.uint16)
        bits = np.asarray(ROW_BITS, dtype=np.uint16)[:, np.newaxis]
        return ((cols[np.newaxis, :] >> bits) & 1).astype(bool)

    @property
    def hole_count(self) -> int:
        return sum(bin(mask).count("1") for mask in self.columns)


@dataclass(frozen=True)
class PunchDeck:
    """
    Logical run of punched cards produced from free text.

    Not persisted; see core.models.deck.Deck for the stored form.
    """

    cards: Tuple[PunchCard, ...]

    @classmethod
    def from_text(
        cls,
        encoder: Ibm029Encoder,
        text: str,
        with_seq_numbers: bool = False,
    ) -> PunchDeck:
        """
        Split text into 80-column cards.

        Rules:
        1. Each input line is cut every 80 characters.
        2. A remainder shorter than 80 becomes one padded card.
        3. An empty line becomes one blank card.
        4. Empty input yields a single blank card.

        Sequence numbers, when requested, start at 1 and are written with
        PunchCard.with_sequence.
        """
        cards: List[PunchCard] = []
        for line in text.splitlines():
            if not line:
                cards.append(PunchCard.from_text(encoder, BLANK_CARD))
                continue
            for offset in range(0, len(line), CARD_COLUMNS):
                cards.append(PunchCard.from_text(encoder, line[offset:offset + CARD_COLUMNS]))
        if not cards:
            cards.append(PunchCard.from_text(encoder, BLANK_CARD))
        if with_seq_numbers:
            cards = [card.with_sequence(encoder, seq) for seq, card in enumerate(cards, start=1)]
        logger.debug("Split %d characters into %d cards", len(text), len(cards))
        return cls(cards=tuple(cards))

    def __len__(self) -> int:
        return len(self.cards)


def encode_text_to_deck(
    encoder: Ibm029Encoder,
    text: str,
    with_seq_numbers: bool = False,
) -> PunchDeck:
    """Split the entire input text into 80-column punch cards and encode them."""
    return PunchDeck.from_text(encoder, text, with_seq_numbers)
