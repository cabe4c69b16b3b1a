"""
Module: core.errors

Purpose:
    Typed exception hierarchy for the punch card core. Every error carries
    the context a caller needs to act on it (index, column, characters,
    path, line) as attributes, not only in the message.

Key Classes:
    - PunchCardError: Base class for all toolkit errors
    - UnsupportedCharacter / UnknownHolePattern: Encoder failures
    - TextTooLong: Card text wider than 80 columns
    - IndexOutOfRange: Bad card index for insert/replace/slice
    - ProtectedColumnViolation: Mutation touching a protected column
    - DeckFormatError: Malformed deck file
    - IncompatibleMerge: Decks with different layouts
    - ReadOnlyDeck: Mutation attempted on a read-only deck
    - UnknownTemplate: Template name not in the registry
    - VerificationFailed: Strict verification found differences

Used By:
    - All core modules, templates, verify, cli
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class PunchCardError(Exception):
    """Base class for every error raised by the toolkit."""


class UnsupportedCharacter(PunchCardError):
    """Raised when a character has no hole pattern in the active table."""

    def __init__(self, char: str):
        super().__init__(f"unsupported character: {char!r} (U+{ord(char):04X})")
        self.char = char
        self.code_point = ord(char)


class UnknownHolePattern(PunchCardError):
    """Raised when a hole mask does not decode to any character."""

    def __init__(self, mask: int, column: Optional[int] = None):
        where = f" in column {column}" if column is not None else ""
        super().__init__(f"unknown hole pattern 0x{mask:03X}{where}")
        self.mask = mask
        self.column = column


class TextTooLong(PunchCardError):
    """Raised when card text exceeds the card width."""

    def __init__(self, length: int, limit: int = 80, line: Optional[int] = None):
        where = f"line {line}: " if line is not None else ""
        super().__init__(f"{where}card text must not exceed {limit} columns (got {length})")
        self.length = length
        self.limit = limit
        self.line = line


class IndexOutOfRange(PunchCardError):
    """Raised for card indices outside the valid range of an operation."""

    def __init__(self, index: int, length: int, *, inclusive: bool = False):
        upper = length if inclusive else length - 1
        if upper < 0:
            bounds = "deck is empty"
        else:
            bounds = f"valid range 0..{upper}"
        super().__init__(f"card index {index} out of range ({bounds})")
        self.index = index
        self.length = length


class ProtectedColumnViolation(PunchCardError):
    """
    Raised when a mutation would change a protected column.

    Attributes:
        column: 1-based column number
        expected: Character the column must keep (space for new cards)
        actual: Character the new card carries
    """

    def __init__(self, column: int, expected: str, actual: str, message: Optional[str] = None):
        if message is None:
            message = (
                f"column {column} is protected; attempted to change "
                f"{expected!r} -> {actual!r}"
            )
        super().__init__(message)
        self.column = column
        self.expected = expected
        self.actual = actual


class DeckFormatError(PunchCardError):
    """Raised when a persisted deck cannot be parsed."""

    def __init__(self, message: str, path: Optional[Path] = None, line: Optional[int] = None):
        location = ""
        if path is not None:
            location = f"{path}"
            if line is not None:
                location += f":{line}"
            location += ": "
        super().__init__(f"{location}{message}")
        self.path = path
        self.line = line


class IncompatibleMerge(PunchCardError):
    """Raised when two decks disagree on protected columns, template or language."""

    def __init__(self, field: str, ours: object, theirs: object):
        super().__init__(f"{field} differ between decks ({ours} vs {theirs})")
        self.field = field
        self.ours = ours
        self.theirs = theirs


class ReadOnlyDeck(PunchCardError):
    """Raised when mutating a deck whose header is marked read-only."""


class UnknownTemplate(PunchCardError):
    """Raised when a template name is not registered."""

    def __init__(self, name: str):
        super().__init__(f"unknown template {name!r}")
        self.name = name


class VerificationFailed(PunchCardError):
    """Raised by strict verification when the second pass differs."""

    def __init__(self, diff_path: Path):
        super().__init__(f"verification failed; see diff at {diff_path}")
        self.diff_path = diff_path
