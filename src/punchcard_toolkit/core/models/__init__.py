"""
Core Models Package

Validated data models for cards and decks.

Cards, headers and audit events are frozen dataclasses; any change builds a
new instance. The Deck is the one mutable container and enforces header
policy (protected columns, read-only flag) on every mutation.

| Type | Role |
|------|------|
| `ColumnRange` | Inclusive 1-based column span |
| `CardRecord` | One stored card (text authoritative, punches cached) |
| `DeckHeader` | Deck-wide policy and audit history |
| `Deck` | Ordered cards under a header |
"""

from .columns import ColumnRange, format_ranges
from .cards import CardMeta, CardRecord, CardType
from .deck import DECK_VERSION, AuditEvent, Deck, DeckHeader

__all__ = [
    "ColumnRange",
    "format_ranges",
    "CardMeta",
    "CardRecord",
    "CardType",
    "DECK_VERSION",
    "AuditEvent",
    "Deck",
    "DeckHeader",
]
