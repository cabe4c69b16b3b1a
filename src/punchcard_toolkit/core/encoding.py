"""
Module: core.encoding

Purpose:
    Bidirectional mapping between printable characters and 12-bit hole
    masks, reproducing the IBM 029 keypunch code chart.

Key Functions:
    - Ibm029Encoder.encode(ch): Character -> hole mask
    - Ibm029Encoder.decode(mask): Hole mask -> character
    - get_encoder(kind): Encoder for an EncodingKind
    - mask_from_rows(rows): Build a mask from physical row numbers
    - rows_from_mask(mask): Physical rows punched in a mask

Dependencies:
    - core.errors

Used By:
    - core.punchcard.PunchCard
    - core.models.cards.CardRecord
    - core.models.deck.Deck
    - render.ascii / render.image

Mask layout:
    bit 0..9 = rows 0..9, bit 10 = row 11, bit 11 = row 12.
    Physical order top to bottom is 12, 11, 0, 1, ..., 9.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Iterable, List, Mapping, Tuple

from .errors import UnknownHolePattern, UnsupportedCharacter

ROW_COUNT = 12
CARD_COLUMNS = 80

# Physical rows, top to bottom.
ROW_ORDER: Tuple[int, ...] = (12, 11, 0, 1, 2, 3, 4, 5, 6, 7, 8, 9)

# Bit index for each entry of ROW_ORDER.
ROW_BITS: Tuple[int, ...] = (11, 10, 0, 1, 2, 3, 4, 5, 6, 7, 8, 9)

# Printable set of the 029 chart, space included.
VALID_SET = "&-0123456789ABCDEFGHIJKLMNOPQR/STUVWXYZ:#@'=\"¢.<(+|!$*);¬ ,%_>?"

# Row strings are read in ROW_ORDER: 12, 11, 0, 1, ..., 9.
IBM029_TABLE: Tuple[Tuple[str, str], ...] = (
    ("&", "100000000000"),
    ("-", "010000000000"),
    ("0", "001000000000"),
    ("1", "000100000000"),
    ("2", "000010000000"),
    ("3", "000001000000"),
    ("4", "000000100000"),
    ("5", "000000010000"),
    ("6", "000000001000"),
    ("7", "000000000100"),
    ("8", "000000000010"),
    ("9", "000000000001"),
    ("A", "100100000000"),
    ("B", "100010000000"),
    ("C", "100001000000"),
    ("D", "100000100000"),
    ("E", "100000010000"),
    ("F", "100000001000"),
    ("G", "100000000100"),
    ("H", "100000000010"),
    ("I", "100000000001"),
    ("J", "010100000000"),
    ("K", "010010000000"),
    ("L", "010001000000"),
    ("M", "010000100000"),
    ("N", "010000010000"),
    ("O", "010000001000"),
    ("P", "010000000100"),
    ("Q", "010000000010"),
    ("R", "010000000001"),
    ("/", "001100000000"),
    ("S", "001010000000"),
    ("T", "001001000000"),
    ("U", "001000100000"),
    ("V", "001000010000"),
    ("W", "001000001000"),
    ("X", "001000000100"),
    ("Y", "001000000010"),
    ("Z", "001000000001"),
    (":", "000010000010"),
    ("#", "000001000010"),
    ("@", "000000100010"),
    ("'", "000000010010"),
    ("=", "000000001010"),
    ('"', "000000000110"),
    ("¢", "100010000010"),
    (".", "100001000010"),
    ("<", "100000100010"),
    ("(", "100000010010"),
    ("+", "100000001010"),
    ("|", "100000000110"),
    ("!", "010010000010"),
    ("$", "010001000010"),
    ("*", "010000100010"),
    (")", "010000010010"),
    (";", "010000001010"),
    ("¬", "010000000110"),
    (" ", "000000000000"),
    (",", "001001000010"),
    ("%", "001000100010"),
    ("_", "001000010010"),
    (">", "001000001010"),
    ("?", "001000000110"),
)


class EncodingKind(str, Enum):
    """Encoding tag recorded on each card."""
    HOLLERITH = "hollerith"
    ASCII = "ascii"
    EBCDIC = "ebcdic"

    def __str__(self) -> str:
        return self.value


def mask_from_bits(bits: str) -> int:
    """Convert a 12-character row string (ROW_ORDER) to a hole mask."""
    if len(bits) != ROW_COUNT:
        raise ValueError(f"row strings must have {ROW_COUNT} characters: {bits!r}")
    value = 0
    for bit, flag in zip(ROW_BITS, bits):
        if flag == "1":
            value |= 1 << bit
        elif flag != "0":
            raise ValueError(f"unexpected character {flag!r} in row string {bits!r}")
    return value


def mask_from_rows(rows: Iterable[int]) -> int:
    """
    Build a hole mask from physical row numbers.

    Example:
        >>> mask_from_rows([12, 1]) == Ibm029Encoder().encode("A")
        True
    """
    value = 0
    for row in rows:
        if row not in ROW_ORDER:
            raise ValueError(f"no such card row: {row}")
        value |= 1 << ROW_BITS[ROW_ORDER.index(row)]
    return value


def rows_from_mask(mask: int) -> Tuple[int, ...]:
    """Physical rows punched in ``mask``, top to bottom."""
    return tuple(row for row, bit in zip(ROW_ORDER, ROW_BITS) if (mask >> bit) & 1)


def _build_tables() -> Tuple[Mapping[str, int], Mapping[int, str]]:
    forward: dict[str, int] = {}
    reverse: dict[int, str] = {}
    for char, bits in IBM029_TABLE:
        mask = mask_from_bits(bits)
        if char in forward:
            raise ValueError(f"duplicate character in IBM 029 table: {char!r}")
        if mask in reverse:
            raise ValueError(
                f"characters {reverse[mask]!r} and {char!r} share the same punches"
            )
        forward[char] = mask
        reverse[mask] = char
    return MappingProxyType(forward), MappingProxyType(reverse)


_CHAR_TO_MASK, _MASK_TO_CHAR = _build_tables()


def _fold(ch: str) -> str:
    # Only ASCII lowercase folds; "¢" and "¬" stay as they are.
    if "a" <= ch <= "z":
        return ch.upper()
    return ch


class Ibm029Encoder:
    """
    IBM 029 keypunch encoder.

    Stateless apart from the immutable module tables, so one shared
    instance (``get_encoder()``) serves every caller.

    Example:
        >>> enc = Ibm029Encoder()
        >>> rows_from_mask(enc.encode("a"))
        (12, 1)
        >>> enc.decode(enc.encode("Z"))
        'Z'
    """

    name = "IBM029"

    def encode(self, ch: str) -> int:
        """
        Encode a single character.

        Raises:
            UnsupportedCharacter: If ``ch`` is outside the 029 chart.
        """
        if len(ch) != 1:
            raise ValueError(f"encode() expects a single character, got {ch!r}")
        try:
            return _CHAR_TO_MASK[_fold(ch)]
        except KeyError:
            raise UnsupportedCharacter(ch) from None

    def decode(self, mask: int) -> str:
        """
        Decode a hole mask back to its character.

        Raises:
            UnknownHolePattern: If no character has this pattern.
        """
        try:
            return _MASK_TO_CHAR[mask]
        except KeyError:
            raise UnknownHolePattern(mask) from None

    def is_supported(self, ch: str) -> bool:
        return len(ch) == 1 and _fold(ch) in _CHAR_TO_MASK

    def encode_text(self, text: str) -> List[int]:
        """Encode every character of ``text``; fails on the first unsupported one."""
        return [self.encode(ch) for ch in text]

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


_DEFAULT_ENCODER = Ibm029Encoder()


def get_encoder(kind: EncodingKind = EncodingKind.HOLLERITH) -> Ibm029Encoder:
    """
    Return the encoder for an encoding kind.

    ASCII and EBCDIC tags are provenance labels only; every kind punches
    with the IBM 029 chart.
    """
    EncodingKind(kind)
    return _DEFAULT_ENCODER
