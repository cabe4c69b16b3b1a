"""
Module: deck

Purpose:
    Provides the Deck - an ordered, persistent collection of CardRecords
    under a DeckHeader - together with AuditEvent and DeckHeader. The deck
    enforces header policy (protected columns, read-only flag) on every
    mutation and keeps an append-only audit history.

Key Functions:
    - Deck.append / insert / replace: Protected-column checked mutation
    - Deck.number_sequence(start, step): Rewrite the sequence field
    - Deck.sort_by_sequence(): Stable sort, unnumbered cards last
    - Deck.merge_from(other): Append a compatible deck
    - Deck.slice / slice_indices: New deck from selected cards
    - Deck.hash(): SHA-256 over the canonical serialization
    - Deck.log_action(description, actor): Append an audit event
    - Deck.as_text(): 80-column text of each card

Dependencies:
    - hashlib, copy, datetime (std)
    - .cards.CardRecord, .columns.ColumnRange
    - core.errors
    - core.utils.serialization (lazy, for hashing and file I/O)

Used By:
    - core.utils.serialization
    - render.ascii (listing)
    - cli

Atomicity:
    Every mutating method validates before touching state, so a failed
    call leaves the deck exactly as it was.
"""

from __future__ import annotations

import copy
import hashlib
import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from ..encoding import Ibm029Encoder
from ..errors import (
    IncompatibleMerge,
    IndexOutOfRange,
    ProtectedColumnViolation,
    ReadOnlyDeck,
)
from ..punchcard import PunchDeck
from .cards import CardRecord
from .columns import ColumnRange, format_ranges

logger = logging.getLogger(__name__)

DECK_VERSION = 1
SEQUENCE_FIELD = ColumnRange(73, 80)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class AuditEvent:
    """One entry of a deck's change history."""

    timestamp: datetime
    actor: str
    action: str

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp.isoformat(),
            "actor": self.actor,
            "action": self.action,
        }

    @classmethod
    def from_dict(cls, data: dict) -> AuditEvent:
        return cls(
            timestamp=datetime.fromisoformat(data["timestamp"]),
            actor=data["actor"],
            action=data["action"],
        )


@dataclass(frozen=True, slots=True)
class DeckHeader:
    """
    Per-deck metadata stored as the first record of a deck file.

    Attributes:
        version: Deck format version
        created_at: Creation time (UTC)
        language: Optional language name (e.g. "fortran")
        template: Optional template name
        protected_cols: Deck-wide protected column ranges
        readonly: Reject every mutation when set
        history: Audit events, oldest first (append-only)
    """

    version: int = DECK_VERSION
    created_at: datetime = None  # type: ignore[assignment]
    language: Optional[str] = None
    template: Optional[str] = None
    protected_cols: Tuple[ColumnRange, ...] = ()
    readonly: bool = False
    history: Tuple[AuditEvent, ...] = ()

    def __post_init__(self) -> None:
        """Fill the creation time and freeze sequences."""
        if self.created_at is None:
            object.__setattr__(self, "created_at", utc_now())
        object.__setattr__(self, "protected_cols", tuple(self.protected_cols))
        object.__setattr__(self, "history", tuple(self.history))

    def with_event(self, event: AuditEvent) -> DeckHeader:
        return replace(self, history=self.history + (event,))

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "created_at": self.created_at.isoformat(),
            "language": self.language,
            "template": self.template,
            "protected_cols": [r.to_dict() for r in self.protected_cols],
            "readonly": self.readonly,
            "history": [event.to_dict() for event in self.history],
        }

    @classmethod
    def from_dict(cls, data: dict) -> DeckHeader:
        return cls(
            version=data["version"],
            created_at=datetime.fromisoformat(data["created_at"]),
            language=data.get("language"),
            template=data.get("template"),
            protected_cols=tuple(
                ColumnRange.from_dict(r) for r in data.get("protected_cols", [])
            ),
            readonly=data.get("readonly", False),
            history=tuple(AuditEvent.from_dict(e) for e in data.get("history", [])),
        )


class Deck:
    """
    In-memory representation of a deck file.

    A deck exclusively owns its header and card list. Cards are immutable
    records, so mutation always swaps whole records in or out.

    Example:
        >>> deck = Deck.new(protected_cols=[ColumnRange(73, 80)])
        >>> deck.append(CardRecord.from_text("      PROGRAM MAIN"))
        >>> len(deck)
        1
    """

    def __init__(
        self,
        header: Optional[DeckHeader] = None,
        cards: Optional[Iterable[CardRecord]] = None,
        path: Optional[Path] = None,
    ) -> None:
        self.header = header if header is not None else DeckHeader()
        self.cards: List[CardRecord] = list(cards or [])
        self.path = path

    @classmethod
    def new(
        cls,
        language: Optional[str] = None,
        template: Optional[str] = None,
        protected_cols: Sequence[ColumnRange] = (),
        *,
        created_at: Optional[datetime] = None,
    ) -> Deck:
        """Create an empty deck with a fresh header."""
        header = DeckHeader(
            created_at=created_at or utc_now(),
            language=language,
            template=template,
            protected_cols=tuple(protected_cols),
        )
        return cls(header)

    # ─────────────────────────────────────────────────────────────────────────
    # Container protocol
    # ─────────────────────────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[CardRecord]:
        return iter(self.cards)

    def __getitem__(self, index: int) -> CardRecord:
        return self.cards[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Deck):
            return NotImplemented
        return self.header == other.header and self.cards == other.cards

    def __repr__(self) -> str:
        return f"Deck(cards={len(self.cards)}, template={self.header.template!r})"

    def clone(self) -> Deck:
        """Deep copy of header and cards."""
        return copy.deepcopy(self)

    # ─────────────────────────────────────────────────────────────────────────
    # Mutation
    # ─────────────────────────────────────────────────────────────────────────

    def append(self, card: CardRecord, *, actor: Optional[str] = None) -> None:
        """
        Append a card, enforcing protected columns.

        Raises:
            ReadOnlyDeck, ProtectedColumnViolation
        """
        self._check_writable()
        self.enforce_protection(None, card)
        self.cards.append(card)
        self._record(actor, f"append card {len(self.cards)}")

    def insert(self, index: int, card: CardRecord, *, actor: Optional[str] = None) -> None:
        """
        Insert a card before zero-based ``index`` (``index == len`` appends).

        Raises:
            IndexOutOfRange: If index is outside 0..len
            ReadOnlyDeck, ProtectedColumnViolation
        """
        self._check_writable()
        if not 0 <= index <= len(self.cards):
            raise IndexOutOfRange(index, len(self.cards), inclusive=True)
        self.enforce_protection(None, card)
        self.cards.insert(index, card)
        self._record(actor, f"insert card at {index}")

    def replace(self, index: int, card: CardRecord, *, actor: Optional[str] = None) -> None:
        """
        Replace the card at zero-based ``index``.

        Protected columns are compared against the card being replaced.

        Raises:
            IndexOutOfRange: If index is outside 0..len-1
            ReadOnlyDeck, ProtectedColumnViolation
        """
        self._check_writable()
        if not 0 <= index < len(self.cards):
            raise IndexOutOfRange(index, len(self.cards))
        self.enforce_protection(self.cards[index], card)
        self.cards[index] = card
        self._record(actor, f"replace card {index}")

    def enforce_protection(self, original: Optional[CardRecord], updated: CardRecord) -> None:
        """
        Check ``updated`` against the header's protected columns.

        With an ``original`` every protected column must be unchanged;
        without one (a new card) every protected column must be blank.

        Raises:
            ProtectedColumnViolation: On the first offending column.
        """
        if not self.header.protected_cols:
            return
        if updated.text is None:
            first = self.header.protected_cols[0].start
            raise ProtectedColumnViolation(
                first, " ", "",
                message="card without text cannot be checked for protection",
            )
        for column_range in self.header.protected_cols:
            for col in column_range.columns():
                new_char = updated.char_at(col)
                if original is not None:
                    old_char = original.char_at(col)
                    if new_char != old_char:
                        raise ProtectedColumnViolation(col, old_char, new_char)
                elif new_char != " ":
                    raise ProtectedColumnViolation(
                        col, " ", new_char,
                        message=f"column {col} is protected; new cards must leave it blank "
                                f"(found {new_char!r})",
                    )

    def number_sequence(self, start: int = 10, step: int = 10, *, actor: Optional[str] = None) -> None:
        """
        Assign ``start, start+step, ...`` to every card in order.

        Columns 73-80 of each card's text are overwritten with the
        zero-padded value. This is the one operation allowed to rewrite the
        sequence field regardless of protection. Text-less cards only get
        their ``seq`` attribute.

        Raises:
            ValueError: If start/step are negative or a value needs more
                than 8 digits (checked before any card changes).
        """
        self._check_writable()
        if start < 0 or step < 0:
            raise ValueError(f"start and step must be >= 0: start={start}, step={step}")
        width = SEQUENCE_FIELD.width
        last = start + step * max(len(self.cards) - 1, 0)
        if len(str(last)) > width:
            raise ValueError(f"sequence value {last} does not fit in {width} columns")

        numbered = []
        for offset, card in enumerate(self.cards):
            value = start + offset * step
            updated = card.with_seq(value)
            if card.text is not None:
                prefix = card.text[:SEQUENCE_FIELD.start - 1]
                updated = replace(updated, text=prefix + f"{value:0{width}d}")
                if card.punches is not None:
                    updated = updated.with_punches()
            numbered.append(updated)
        self.cards = numbered
        self._record(actor, f"seq number start={start} step={step}")

    def sort_by_sequence(self, *, actor: Optional[str] = None) -> None:
        """Stable sort by ``seq``; cards without a sequence number go last."""
        self._check_writable()
        self.cards.sort(key=lambda card: (card.seq is None, card.seq or 0))
        self._record(actor, "seq sort")

    def merge_from(self, other: Deck, *, actor: Optional[str] = None) -> None:
        """
        Append another deck's cards and history.

        Raises:
            IncompatibleMerge: If protected columns, template or language
                differ. Neither deck is modified.
            ReadOnlyDeck
        """
        self._check_writable()
        ours, theirs = self.header, other.header
        if ours.protected_cols != theirs.protected_cols:
            raise IncompatibleMerge(
                "protected columns",
                format_ranges(ours.protected_cols),
                format_ranges(theirs.protected_cols),
            )
        if ours.template != theirs.template:
            raise IncompatibleMerge("templates", ours.template, theirs.template)
        if ours.language != theirs.language:
            raise IncompatibleMerge("languages", ours.language, theirs.language)
        self.cards.extend(copy.deepcopy(other.cards))
        self.header = replace(ours, history=ours.history + theirs.history)
        self._record(actor, f"merge {len(other.cards)} cards")

    # ─────────────────────────────────────────────────────────────────────────
    # Derived decks
    # ─────────────────────────────────────────────────────────────────────────

    def slice(self, start: int, stop: int) -> Deck:
        """
        New deck (same header) with the contiguous cards ``start:stop``.

        Raises:
            IndexOutOfRange: If the range falls outside the deck.
        """
        if not 0 <= start <= len(self.cards):
            raise IndexOutOfRange(start, len(self.cards), inclusive=True)
        if not start <= stop <= len(self.cards):
            raise IndexOutOfRange(stop, len(self.cards), inclusive=True)
        return self.slice_indices(range(start, stop))

    def slice_indices(self, indices: Iterable[int]) -> Deck:
        """
        New deck (same header) with exactly the given zero-based indices.

        The given order is kept; indices are not re-sorted.

        Raises:
            IndexOutOfRange: If any index is outside the deck.
        """
        selected = []
        for idx in indices:
            if not 0 <= idx < len(self.cards):
                raise IndexOutOfRange(idx, len(self.cards))
            selected.append(self.cards[idx])
        return Deck(copy.deepcopy(self.header), copy.deepcopy(selected))

    def to_punch_deck(self, encoder: Optional[Ibm029Encoder] = None) -> PunchDeck:
        """Punch every card (text-less cards use their cached masks)."""
        return PunchDeck(cards=tuple(card.to_punch_card(encoder) for card in self.cards))

    # ─────────────────────────────────────────────────────────────────────────
    # Audit
    # ─────────────────────────────────────────────────────────────────────────

    def log_action(
        self,
        description: str,
        actor: str,
        *,
        timestamp: Optional[datetime] = None,
    ) -> AuditEvent:
        """
        Append an audit event.

        The actor is resolved by the caller; the deck never consults the
        process environment. History is append-only.
        """
        event = AuditEvent(timestamp=timestamp or utc_now(), actor=actor, action=description)
        self.header = self.header.with_event(event)
        logger.debug("Audit: %s by %s", description, actor)
        return event

    def hash(self) -> str:
        """
        SHA-256 hex digest of the canonical serialization.

        Covers the header (history included) and every card, in order.
        """
        from ..utils.serialization import dump_record

        hasher = hashlib.sha256()
        hasher.update(dump_record("header", self.header.to_dict()).encode("utf-8"))
        for card in self.cards:
            hasher.update(dump_record("card", card.to_dict()).encode("utf-8"))
        return hasher.hexdigest()

    # ─────────────────────────────────────────────────────────────────────────
    # Views and persistence
    # ─────────────────────────────────────────────────────────────────────────

    def as_text(self) -> List[str]:
        """80-column text per card; all blanks for cards stored as punches."""
        return [card.display_text for card in self.cards]

    @classmethod
    def load(cls, path: Path) -> Deck:
        from ..utils.serialization import load_deck

        return load_deck(path)

    def save(self, path: Path) -> None:
        from ..utils.serialization import save_deck

        save_deck(self, path)

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _check_writable(self) -> None:
        if self.header.readonly:
            raise ReadOnlyDeck("deck is read-only")

    def _record(self, actor: Optional[str], description: str) -> None:
        if actor is not None:
            self.log_action(description, actor)