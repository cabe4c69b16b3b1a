"""
Punch Card Toolkit Core Package

Shared encoder, data models and persistence used by the renderers,
templates and the command-line interface.

1. **Encoder** (`encoding`): IBM 029 character <-> 12-bit hole mask
2. **Cards** (`punchcard`): transient 80-column punched cards
3. **Models** (`models`): persisted CardRecord / Deck with protection rules
4. **Persistence** (`utils.serialization`, `schemas`): JSON Lines deck files
"""

from .encoding import EncodingKind, Ibm029Encoder, get_encoder
from .errors import PunchCardError
from .models import AuditEvent, CardMeta, CardRecord, CardType, ColumnRange, Deck, DeckHeader
from .punchcard import PunchCard, PunchDeck

__all__ = [
    "EncodingKind",
    "Ibm029Encoder",
    "get_encoder",
    "PunchCardError",
    "AuditEvent",
    "CardMeta",
    "CardRecord",
    "CardType",
    "ColumnRange",
    "Deck",
    "DeckHeader",
    "PunchCard",
    "PunchDeck",
]
