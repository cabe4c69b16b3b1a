"""
Module: cli.utils

Purpose:
    Helpers shared by the ``punch`` subcommands: text input/output with
    ``-`` meaning stdin/stdout, 1-based card range expressions, fixed-width
    line splitting and audit actor resolution.

Key Functions:
    - resolve_actor(environ): PUNCH_ACTOR, USER, USERNAME, else "unknown"
    - read_text_arg(text, source): Inline text, file or stdin
    - write_output(path, content): File or stdout
    - parse_range_expression(expr, deck_len): "1..10,25,40..$" -> 0-based indices
    - split_lines_fixed(text): One 80-column line per input line
    - card_position(index, deck_len): 1-based user index -> 0-based
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import List, Mapping, Optional

from ..core.encoding import CARD_COLUMNS
from ..core.errors import TextTooLong

ACTOR_VARIABLES = ("PUNCH_ACTOR", "USER", "USERNAME")
UNKNOWN_ACTOR = "unknown"


def resolve_actor(environ: Optional[Mapping[str, str]] = None) -> str:
    """Name recorded in audit events for the current user."""
    environ = os.environ if environ is None else environ
    for name in ACTOR_VARIABLES:
        value = environ.get(name, "").strip()
        if value:
            return value
    return UNKNOWN_ACTOR


def read_text_arg(text: Optional[str], source: Optional[Path]) -> str:
    """
    Resolve command input.

    Inline ``text`` wins; otherwise ``source`` is read (``-`` is stdin);
    with neither, stdin is read.
    """
    if text is not None:
        return text
    if source is not None and str(source) != "-":
        return Path(source).read_text(encoding="utf-8")
    return sys.stdin.read()


def write_output(path: Path, content: str) -> None:
    """Write ``content`` to ``path``, or to stdout when path is ``-``."""
    if str(path) == "-":
        sys.stdout.write(content)
        return
    Path(path).write_text(content, encoding="utf-8")


def _parse_bound(token: str, deck_len: int) -> int:
    if not token:
        raise ValueError("range bound cannot be empty")
    if token == "$":
        if deck_len == 0:
            raise ValueError("deck is empty; '$' is undefined")
        return deck_len
    try:
        value = int(token)
    except ValueError:
        raise ValueError(f"range bound {token!r} is not a number") from None
    if value <= 0:
        raise ValueError("card indices are 1-based")
    return value


def parse_range_expression(expr: str, deck_len: int) -> List[int]:
    """
    Expand a 1-based range expression into 0-based indices.

    Terms are separated by commas; ``A..B`` is inclusive and ``$`` means
    the last card. Order is kept and repeated indices are dropped.

    Example:
        >>> parse_range_expression("2..3,1,3,$", 5)
        [1, 2, 0, 4]

    Raises:
        ValueError: On malformed terms or indices past the deck end.
    """
    if not expr.strip():
        raise ValueError("range expression cannot be empty")

    indices: List[int] = []
    for part in expr.split(","):
        part = part.strip()
        if not part:
            continue
        if ".." in part:
            start_raw, end_raw = part.split("..", 1)
            start = _parse_bound(start_raw.strip(), deck_len)
            end = _parse_bound(end_raw.strip(), deck_len)
            if start > end:
                raise ValueError(f"range {start}..{end} is invalid")
            indices.extend(value - 1 for value in range(start, end + 1))
        else:
            indices.append(_parse_bound(part, deck_len) - 1)

    if not indices:
        raise ValueError(f"no indices resolved from {expr!r}")

    unique: List[int] = []
    for idx in indices:
        if idx >= deck_len:
            raise ValueError(f"card index {idx + 1} out of range 1..{deck_len}")
        if idx not in unique:
            unique.append(idx)
    return unique


def split_lines_fixed(text: str) -> List[str]:
    """
    One 80-column line per input line.

    Empty input yields one blank line.

    Raises:
        TextTooLong: If a line is wider than 80 columns, with its 1-based
            line number in ``line``.
    """
    lines = []
    for line_no, line in enumerate(text.splitlines(), 1):
        if len(line) > CARD_COLUMNS:
            raise TextTooLong(len(line), CARD_COLUMNS, line=line_no)
        lines.append(line.ljust(CARD_COLUMNS))
    return lines or [" " * CARD_COLUMNS]


def card_position(index: int, deck_len: int) -> int:
    """
    Convert a 1-based card number to a list index.

    Raises:
        ValueError: If the number is outside 1..deck_len.
    """
    if not 1 <= index <= deck_len:
        raise ValueError(f"card index {index} out of range 1..{deck_len}")
    return index - 1
