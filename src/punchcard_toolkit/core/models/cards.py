"""
Module: cards

Purpose:
    Provides CardRecord - the persisted unit of a deck - and its small
    companion types (CardType, CardMeta). A record keeps the authoritative
    80-column text; the hole masks are derived from it and may be cached.

Key Functions:
    - normalize_card_text(text): Pad to 80 columns or raise TextTooLong
    - CardRecord.from_text(text, encoding, card_type): Build a normalized record
    - CardRecord.with_punches(encoder): Copy with the punch cache filled
    - CardRecord.to_punch_card(encoder): Materialize a PunchCard
    - CardRecord.to_dict() / CardRecord.from_dict(): Serialization

Dependencies:
    - dataclasses (std)
    - core.encoding, core.punchcard, core.errors
    - .columns.ColumnRange

Used By:
    - core.models.deck.Deck
    - core.utils.serialization
    - templates.registry
    - cli
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Tuple

from ..encoding import CARD_COLUMNS, EncodingKind, Ibm029Encoder, get_encoder
from ..errors import TextTooLong
from ..punchcard import PunchCard
from .columns import ColumnRange


class CardType(str, Enum):
    """Provenance/intent tag; has no effect on encoding."""
    CODE = "code"
    DATA = "data"
    JCL = "jcl"
    COMMENT = "comment"
    SEPARATOR = "separator"
    PATCH = "patch"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class CardMeta:
    """Free-form, non-semantic annotations."""

    note: Optional[str] = None
    color: Optional[str] = None

    def to_dict(self) -> dict:
        d = {}
        if self.color is not None:
            d["color"] = self.color
        if self.note is not None:
            d["note"] = self.note
        return d

    @classmethod
    def from_dict(cls, data: dict) -> CardMeta:
        return cls(note=data.get("note"), color=data.get("color"))


def normalize_card_text(text: str) -> str:
    """
    Pad card text with trailing spaces to exactly 80 columns.

    Already-normalized text is returned unchanged.

    Raises:
        TextTooLong: If ``text`` is wider than 80 columns.
    """
    if len(text) > CARD_COLUMNS:
        raise TextTooLong(len(text), CARD_COLUMNS)
    return text.ljust(CARD_COLUMNS)


def format_punches(masks: List[int]) -> str:
    """Cache form of a mask list: space-separated 3-digit hex values."""
    return " ".join(f"{mask:03X}" for mask in masks)


def parse_punches(punches: str) -> List[int]:
    """
    Inverse of :func:`format_punches`.

    Raises:
        ValueError: If the string does not hold 80 12-bit hex values.
    """
    tokens = punches.split()
    if len(tokens) != CARD_COLUMNS:
        raise ValueError(f"punches must hold {CARD_COLUMNS} columns, got {len(tokens)}")
    masks = []
    for token in tokens:
        value = int(token, 16)
        if not 0 <= value < (1 << 12):
            raise ValueError(f"hole mask out of range: {token!r}")
        masks.append(value)
    return masks


@dataclass(frozen=True, slots=True)
class CardRecord:
    """
    Single card stored in a deck file (immutable).

    Attributes:
        text: 80-column text, or None for a card stored only as punches
        punches: Optional cached hole masks (see format_punches)
        encoding: Encoding tag the card was captured with
        seq: Optional sequence number
        card_type: Provenance tag
        protected_cols: Per-card protected ranges (informational)
        meta: Note/color annotations

    Invariants:
        - text is None or exactly 80 columns (shorter text is padded)
        - seq is None or >= 0
        - at least one of text/punches is set

    Example:
        >>> card = CardRecord.from_text("HELLO")
        >>> len(card.text)
        80
        >>> card.card_type
        <CardType.CODE: 'code'>
    """

    text: Optional[str] = None
    punches: Optional[str] = None
    encoding: EncodingKind = EncodingKind.HOLLERITH
    seq: Optional[int] = None
    card_type: CardType = CardType.CODE
    protected_cols: Tuple[ColumnRange, ...] = ()
    meta: CardMeta = field(default_factory=CardMeta)

    def __post_init__(self) -> None:
        """Normalize text and validate on construction."""
        if self.text is None and self.punches is None:
            raise ValueError("card must carry text or punches")
        if self.text is not None:
            object.__setattr__(self, "text", normalize_card_text(self.text))
        if self.punches is not None:
            parse_punches(self.punches)
        if self.seq is not None and self.seq < 0:
            raise ValueError(f"seq must be >= 0: {self.seq}")
        object.__setattr__(self, "encoding", EncodingKind(self.encoding))
        object.__setattr__(self, "card_type", CardType(self.card_type))
        object.__setattr__(self, "protected_cols", tuple(self.protected_cols))

    # ─────────────────────────────────────────────────────────────────────────
    # Construction
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def from_text(
        cls,
        text: str,
        encoding: EncodingKind = EncodingKind.HOLLERITH,
        card_type: CardType = CardType.CODE,
    ) -> CardRecord:
        """
        Build a record from user text, padded to 80 columns.

        Raises:
            TextTooLong: If ``text`` is wider than 80 columns.
        """
        return cls(text=normalize_card_text(text), encoding=encoding, card_type=card_type)

    @classmethod
    def from_punch_card(cls, card: PunchCard, card_type: CardType = CardType.CODE) -> CardRecord:
        """Build a record from a punched card, keeping both text and masks."""
        return cls(
            text=card.text,
            punches=format_punches(card.columns),
            card_type=card_type,
        )

    def with_seq(self, seq: Optional[int]) -> CardRecord:
        return replace(self, seq=seq)

    def with_meta(self, note: Optional[str] = None, color: Optional[str] = None) -> CardRecord:
        return replace(self, meta=CardMeta(note=note, color=color))

    def with_punches(self, encoder: Optional[Ibm029Encoder] = None) -> CardRecord:
        """
        Return a copy whose punch cache matches the text.

        Raises:
            UnsupportedCharacter: If the text holds an unencodable character.
        """
        if self.text is None:
            return self
        encoder = encoder or get_encoder(self.encoding)
        card = PunchCard.from_text(encoder, self.text)
        return replace(self, punches=format_punches(card.columns))

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def display_text(self) -> str:
        """Text for listings: the card text, or 80 blanks for punches-only cards."""
        return self.text if self.text is not None else " " * CARD_COLUMNS

    def char_at(self, col: int) -> str:
        """Character in 1-based column ``col`` (space for punches-only cards)."""
        return self.display_text[col - 1]

    def to_punch_card(self, encoder: Optional[Ibm029Encoder] = None) -> PunchCard:
        """
        Materialize the hole pattern.

        Text is authoritative; the punch cache is used only when the card
        has no text.
        """
        encoder = encoder or get_encoder(self.encoding)
        if self.text is not None:
            return PunchCard.from_text(encoder, self.text)
        return PunchCard.from_masks(parse_punches(self.punches), encoder=encoder)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """
        Serialize to dictionary for JSON storage.

        Text is always written with all 80 columns, trailing spaces kept.
        """
        return {
            "text": self.text,
            "punches": self.punches,
            "encoding": self.encoding.value,
            "seq": self.seq,
            "card_type": self.card_type.value,
            "protected_cols": [r.to_dict() for r in self.protected_cols],
            "meta": self.meta.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> CardRecord:
        return cls(
            text=data.get("text"),
            punches=data.get("punches"),
            encoding=EncodingKind(data.get("encoding", EncodingKind.HOLLERITH.value)),
            seq=data.get("seq"),
            card_type=CardType(data.get("card_type", CardType.CODE.value)),
            protected_cols=tuple(
                ColumnRange.from_dict(r) for r in data.get("protected_cols", [])
            ),
            meta=CardMeta.from_dict(data.get("meta") or {}),
        )
