"""
Module: verify

Purpose:
    Verification pass workflow: snapshot a deck's text as a baseline, then
    compare freshly keyed text against it line by line. Masked column
    ranges are ignored by the comparison.

Key Functions:
    - snapshot_path(deck_path) / diff_path(deck_path): Sidecar file names
    - diff_text(expected, actual, mask): Masked line diff
    - store_baseline(deck, deck_path): Write ``<deck>.verify.base``
    - run_pass(deck_path, actual, mask, strict): Write ``<deck>.verify.diff``

Used By:
    - cli.verify
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence, Tuple

from .core.errors import VerificationFailed
from .core.models import ColumnRange, Deck

logger = logging.getLogger(__name__)

MASK_CHAR = "_"
PASSED_MESSAGE = "verification passed: no differences\n"


def snapshot_path(deck_path: Path) -> Path:
    """``deck.jsonl`` -> ``deck.verify.base``"""
    return Path(deck_path).with_suffix(".verify.base")


def diff_path(deck_path: Path) -> Path:
    """``deck.jsonl`` -> ``deck.verify.diff``"""
    return Path(deck_path).with_suffix(".verify.diff")


def _apply_mask(line: str, mask: Sequence[ColumnRange]) -> str:
    if not mask:
        return line
    width = max(r.end for r in mask)
    chars: List[str] = list(line.ljust(width))
    for column_range in mask:
        for col in column_range.columns():
            chars[col - 1] = MASK_CHAR
    return "".join(chars)


def lines_match(expected: str, actual: str, mask: Sequence[ColumnRange] = ()) -> bool:
    """Compare two lines with masked columns replaced by ``_``."""
    return _apply_mask(expected, mask) == _apply_mask(actual, mask)


def diff_text(
    expected: str,
    actual: str,
    mask: Sequence[ColumnRange] = (),
) -> Tuple[str, bool]:
    """
    Line-by-line diff of two texts.

    Missing lines compare as empty. Each differing line is reported as::

        line    3:
          expected |...|
          actual   |...|

    Returns:
        (report, changed). The report is a fixed success message when
        nothing differs.
    """
    exp_lines = expected.splitlines()
    act_lines = actual.splitlines()
    report: List[str] = []
    for i in range(max(len(exp_lines), len(act_lines))):
        exp = exp_lines[i] if i < len(exp_lines) else ""
        act = act_lines[i] if i < len(act_lines) else ""
        if not lines_match(exp, act, mask):
            report.append(f"line {i + 1:>4}:\n")
            report.append(f"  expected |{exp}|\n")
            report.append(f"  actual   |{act}|\n")
    if not report:
        return PASSED_MESSAGE, False
    return "".join(report), True


def store_baseline(deck: Deck, deck_path: Path) -> Path:
    """Write the deck's card text as the verification baseline."""
    target = snapshot_path(deck_path)
    target.write_text("\n".join(deck.as_text()), encoding="utf-8")
    logger.debug("Stored %d baseline lines at %s", len(deck), target)
    return target


def run_pass(
    deck_path: Path,
    actual: str,
    mask: Sequence[ColumnRange] = (),
    *,
    strict: bool = False,
) -> Tuple[Path, bool]:
    """
    Compare ``actual`` against the stored baseline and write the diff.

    Returns:
        (diff file path, changed)

    Raises:
        FileNotFoundError: If no baseline exists yet
        VerificationFailed: If strict and any unmasked line differs
    """
    base = snapshot_path(deck_path)
    if not base.exists():
        raise FileNotFoundError(
            f"no verification snapshot found at {base}. Run `punch verify start` first."
        )
    expected = base.read_text(encoding="utf-8")
    report, changed = diff_text(expected, actual, mask)
    target = diff_path(deck_path)
    target.write_text(report, encoding="utf-8")
    if strict and changed:
        raise VerificationFailed(target)
    return target, changed
