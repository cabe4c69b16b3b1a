"""``punch verify ...``: baseline, verification pass and diff report."""

from __future__ import annotations

import argparse
from pathlib import Path

from ..core.models import ColumnRange, Deck
from ..verify import diff_path, run_pass, store_baseline
from .utils import read_text_arg


def register(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("verify", help="Verification passes against a baseline")
    commands = parser.add_subparsers(dest="verify_command", required=True)

    start = commands.add_parser("start", help="Store the deck text as the baseline")
    start.add_argument("deck", type=Path)
    start.set_defaults(func=start_command)

    pas = commands.add_parser("pass", help="Compare re-keyed text against the baseline")
    pas.add_argument("deck", type=Path)
    pas.add_argument("--from", dest="source", type=Path, help="Re-keyed text ('-' for stdin)")
    pas.add_argument("--strict", action="store_true", help="Fail when any line differs")
    pas.add_argument("--mask", type=ColumnRange.parse, action="append", default=[],
                     metavar="START-END", help="Ignore a column range (repeatable)")
    pas.set_defaults(func=pass_command)

    report = commands.add_parser("report", help="Print the last verification diff")
    report.add_argument("deck", type=Path)
    report.set_defaults(func=report_command)


def start_command(args: argparse.Namespace) -> None:
    deck = Deck.load(args.deck)
    target = store_baseline(deck, args.deck)
    print(f"Stored verification baseline at {target}")


def pass_command(args: argparse.Namespace) -> None:
    Deck.load(args.deck)
    actual = read_text_arg(None, args.source)
    target, changed = run_pass(args.deck, actual, args.mask, strict=args.strict)
    if changed:
        print(f"Verification diff written to {target}")
    else:
        print(f"Verification passed with ignored masks; diff stored at {target}")


def report_command(args: argparse.Namespace) -> None:
    target = diff_path(args.deck)
    if not target.exists():
        print(f"No verification diff at {target}. Run `punch verify pass` first.")
        return
    print(target.read_text(encoding="utf-8"))
