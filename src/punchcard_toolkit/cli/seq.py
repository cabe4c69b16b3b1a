"""``punch seq ...``: sequence numbering and sorting."""

from __future__ import annotations

import argparse
from pathlib import Path

from ..core.models import Deck
from .utils import resolve_actor


def register(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("seq", help="Sequence number operations")
    commands = parser.add_subparsers(dest="seq_command", required=True)

    number = commands.add_parser("number", help="Renumber every card (columns 73-80)")
    number.add_argument("deck", type=Path)
    number.add_argument("--start", type=int, default=10)
    number.add_argument("--step", type=int, default=10)
    number.set_defaults(func=number_cards)

    sort = commands.add_parser("sort", help="Sort cards by sequence number")
    sort.add_argument("deck", type=Path)
    sort.set_defaults(func=sort_cards)


def number_cards(args: argparse.Namespace) -> None:
    deck = Deck.load(args.deck)
    deck.number_sequence(args.start, args.step, actor=resolve_actor())
    deck.save(args.deck)
    print(f"Applied sequence numbers (start {args.start}, step {args.step}) to {args.deck}")


def sort_cards(args: argparse.Namespace) -> None:
    deck = Deck.load(args.deck)
    deck.sort_by_sequence(actor=resolve_actor())
    deck.save(args.deck)
    print(f"Sorted {args.deck} by sequence numbers")
