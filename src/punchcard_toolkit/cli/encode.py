"""``punch encode text``: punch free text without touching a deck."""

from __future__ import annotations

import argparse
from pathlib import Path

from ..core.encoding import get_encoder
from ..core.punchcard import encode_text_to_deck
from ..render.ascii import RenderStyle, render_deck
from .utils import read_text_arg


def register(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("encode", help="Encode text to punch patterns")
    commands = parser.add_subparsers(dest="encode_command", required=True)

    text = commands.add_parser("text", help="Split text into sequence-numbered cards")
    text.add_argument("--text")
    text.add_argument("--from", dest="source", type=Path)
    text.add_argument("--render", action="store_true", help="Print the punch diagrams")
    text.add_argument("--style", type=RenderStyle, choices=list(RenderStyle),
                      default=RenderStyle.ASCII_X)
    text.set_defaults(func=encode_text)


def encode_text(args: argparse.Namespace) -> None:
    text = read_text_arg(args.text, args.source)
    deck = encode_text_to_deck(get_encoder(), text, with_seq_numbers=True)
    if args.render:
        print(render_deck(deck.cards, args.style))
    else:
        print(f"Encoded {len(text)} columns into {len(deck)} cards")
