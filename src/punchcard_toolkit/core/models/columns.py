"""
Module: columns

Purpose:
    Provides the ColumnRange dataclass - an inclusive, 1-based span of card
    columns. Used for protected regions, template field layouts and
    verification masks.

Key Functions:
    - ColumnRange.contains(col): Check if a column is in the range
    - ColumnRange.columns(): Iterate the columns of the range
    - ColumnRange.parse(text): Parse "73-80" (or "7") into a range
    - ColumnRange.to_dict() / ColumnRange.from_dict(): Serialization

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.cards.CardRecord
    - core.models.deck.DeckHeader
    - templates.registry
    - verify
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

from ..encoding import CARD_COLUMNS


@dataclass(frozen=True, slots=True)
class ColumnRange:
    """
    Inclusive 1-based column range.

    Attributes:
        start: First column (inclusive)
        end: Last column (inclusive)

    Invariants:
        - 1 <= start <= end <= 80

    Example:
        >>> r = ColumnRange(73, 80)
        >>> r.contains(80)
        True
        >>> r.width
        8
        >>> str(r)
        '73-80'
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate range on construction."""
        if not (1 <= self.start <= self.end <= CARD_COLUMNS):
            raise ValueError(
                f"column range must satisfy 1 <= start <= end <= {CARD_COLUMNS}: "
                f"{self.start}-{self.end}"
            )

    @property
    def width(self) -> int:
        """Number of columns covered."""
        return self.end - self.start + 1

    def contains(self, col: int) -> bool:
        return self.start <= col <= self.end

    def columns(self) -> Iterator[int]:
        """Iterate the 1-based columns of this range."""
        return iter(range(self.start, self.end + 1))

    @classmethod
    def parse(cls, text: str) -> ColumnRange:
        """
        Parse ``START-END`` or a single column number.

        Raises:
            ValueError: If the text is malformed or out of range.
        """
        parts = text.strip().split("-")
        if len(parts) == 1:
            parts = [parts[0], parts[0]]
        if len(parts) != 2:
            raise ValueError(f"column range must be START-END: {text!r}")
        try:
            start, end = int(parts[0]), int(parts[1])
        except ValueError:
            raise ValueError(f"column range bounds must be numbers: {text!r}") from None
        return cls(start, end)

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end}

    @classmethod
    def from_dict(cls, data: dict) -> ColumnRange:
        return cls(start=data["start"], end=data["end"])

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


def format_ranges(ranges: Sequence[ColumnRange]) -> str:
    """Human-readable list of ranges, ``-`` when empty."""
    if not ranges:
        return "-"
    return ", ".join(str(r) for r in ranges)
