"""
Serialization Utilities

JSON Lines persistence for decks.

File layout:
- Line 1 is the header record: ``{"kind": "header", ...DeckHeader fields}``
- Every following non-blank line is a card: ``{"kind": "card", ...CardRecord fields}``
- UTF-8, one compact JSON object per line, keys sorted

The same canonical form is hashed by ``Deck.hash()``, so two decks with
equal content always hash alike regardless of how they were built.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional

from ..errors import DeckFormatError
from ..models.cards import CardRecord
from ..models.deck import Deck, DeckHeader
from ..schemas.validator import ValidationError, validate_card, validate_header

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Record encoding
# ─────────────────────────────────────────────────────────────────────────────

def dump_record(kind: str, payload: dict[str, Any]) -> str:
    """
    Canonical single-line JSON for one deck record.

    Args:
        kind: "header" or "card"
        payload: Output of the model's ``to_dict()``

    Returns:
        JSON text without trailing newline
    """
    record = {"kind": kind}
    record.update(payload)
    return json.dumps(record, ensure_ascii=False, sort_keys=True, separators=(",", ":"))


def serialize_deck(deck: Deck) -> List[str]:
    """Every line of the deck file, header first."""
    lines = [dump_record("header", deck.header.to_dict())]
    lines.extend(dump_record("card", card.to_dict()) for card in deck.cards)
    return lines


def deserialize_deck(lines: Iterable[str], *, path: Optional[Path] = None) -> Deck:
    """
    Build a Deck from deck file lines.

    Args:
        lines: Raw lines split on "\n" only (blank lines are skipped)
        path: Source path, used only in error messages

    Raises:
        DeckFormatError: With the offending 1-based line number
    """
    header: Optional[DeckHeader] = None
    cards: List[CardRecord] = []
    seen_any = False

    for line_no, line in enumerate(lines, 1):
        line = line.strip()
        if not line:
            continue

        try:
            data = json.loads(line)
        except json.JSONDecodeError as e:
            raise DeckFormatError(f"invalid JSON: {e.msg}", path=path, line=line_no) from e
        if not isinstance(data, dict):
            raise DeckFormatError("record must be a JSON object", path=path, line=line_no)

        kind = data.get("kind")
        if not seen_any:
            seen_any = True
            if kind != "header":
                raise DeckFormatError("first record must be the deck header", path=path, line=line_no)
        elif kind == "header":
            raise DeckFormatError("multiple header records", path=path, line=line_no)

        try:
            if kind == "header":
                validate_header(data, strict=True)
                header = DeckHeader.from_dict(data)
            else:
                validate_card(data, strict=True)
                cards.append(CardRecord.from_dict(data))
        except (ValidationError, ValueError, KeyError) as e:
            raise DeckFormatError(f"invalid {kind} record: {e}", path=path, line=line_no) from e

    if header is None:
        raise DeckFormatError("deck file is empty", path=path)

    return Deck(header, cards, path=path)


# ─────────────────────────────────────────────────────────────────────────────
# File I/O
# ─────────────────────────────────────────────────────────────────────────────

def load_deck(path: Path) -> Deck:
    """
    Load a deck from a JSONL file.

    Args:
        path: Path to the deck file

    Returns:
        Deck with ``path`` set to the source file

    Raises:
        FileNotFoundError: If file doesn't exist
        DeckFormatError: If any record is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Deck file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        deck = deserialize_deck(f, path=path)

    logger.debug("Loaded %d cards from %s", len(deck), path)
    return deck


def save_deck(deck: Deck, path: Path) -> None:
    """
    Save a deck to a JSONL file, replacing any previous content.

    Args:
        deck: Deck to write
        path: Output path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        for line in serialize_deck(deck):
            f.write(line)
            f.write("\n")

    deck.path = path
    logger.debug("Saved %d cards to %s", len(deck), path)
