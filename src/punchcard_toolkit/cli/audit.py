"""``punch audit ...``: content hash and change history."""

from __future__ import annotations

import argparse
from pathlib import Path

from ..core.models import Deck


def register(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("audit", help="Hashing and audit history")
    commands = parser.add_subparsers(dest="audit_command", required=True)

    digest = commands.add_parser("hash", help="Print the deck's SHA-256 digest")
    digest.add_argument("deck", type=Path)
    digest.set_defaults(func=hash_command)

    log = commands.add_parser("log", help="Print the audit history")
    log.add_argument("deck", type=Path)
    log.set_defaults(func=log_command)


def hash_command(args: argparse.Namespace) -> None:
    print(Deck.load(args.deck).hash())


def log_command(args: argparse.Namespace) -> None:
    deck = Deck.load(args.deck)
    if not deck.header.history:
        print("No audit events recorded.")
        return
    for event in deck.header.history:
        print(f"{event.timestamp.isoformat()} {event.actor} - {event.action}")
