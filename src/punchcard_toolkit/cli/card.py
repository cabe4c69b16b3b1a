"""``punch card ...``: add, type, replace, show and patch individual cards."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from ..core.encoding import EncodingKind
from ..core.models import CardMeta, CardRecord, CardType, Deck
from ..render.ascii import RenderStyle, render_card
from ..templates import Template, get_template
from .utils import card_position, read_text_arg, resolve_actor, split_lines_fixed

PATCH_NOTE = "patch card"
PATCH_COLOR = "amber"


def _add_text_source(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--text", help="Inline card text")
    parser.add_argument("--from", dest="source", type=Path,
                        help="Read text from a file ('-' for stdin)")


def _add_meta(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--note")
    parser.add_argument("--color")


def register(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("card", help="Card level operations")
    commands = parser.add_subparsers(dest="card_command", required=True)

    add = commands.add_parser("add", help="Add cards, one per input line")
    add.add_argument("deck", type=Path)
    _add_text_source(add)
    add.add_argument("--template")
    add.add_argument("--type", dest="card_type", type=CardType, choices=list(CardType),
                     default=CardType.CODE)
    _add_meta(add)
    add.add_argument("--position", type=int, help="1-based position to insert at (1..N+1)")
    add.set_defaults(func=add_cards)

    typ = commands.add_parser("type", help="Append cards typed on stdin")
    typ.add_argument("deck", type=Path)
    typ.add_argument("--template")
    typ.add_argument("--type", dest="card_type", type=CardType, choices=list(CardType),
                     default=CardType.CODE)
    _add_meta(typ)
    typ.set_defaults(func=type_cards)

    rep = commands.add_parser("replace", help="Replace one card")
    rep.add_argument("deck", type=Path)
    rep.add_argument("-i", "--index", type=int, required=True, help="1-based card number")
    _add_text_source(rep)
    _add_meta(rep)
    rep.add_argument("--type", dest="card_type", type=CardType, choices=list(CardType))
    rep.set_defaults(func=replace_card)

    show = commands.add_parser("show", help="Print one card")
    show.add_argument("deck", type=Path)
    show.add_argument("-i", "--index", type=int, required=True, help="1-based card number")
    show.add_argument("--interpret", action="store_true", help="Also print the punch diagram")
    show.set_defaults(func=show_card)

    patch = commands.add_parser("patch", help="Append a patch card")
    patch.add_argument("deck", type=Path)
    _add_text_source(patch)
    patch.add_argument("--note")
    patch.set_defaults(func=patch_card)


def _build_records(
    lines: List[str],
    template: Optional[Template],
    card_type: CardType,
    meta: CardMeta,
) -> List[CardRecord]:
    records = []
    for line in lines:
        if template is not None:
            record = template.apply(line)
        else:
            record = CardRecord.from_text(line, EncodingKind.HOLLERITH, card_type)
        records.append(record.with_meta(meta.note, meta.color))
    return records


def add_cards(args: argparse.Namespace) -> None:
    deck = Deck.load(args.deck)
    template = get_template(args.template) if args.template else None
    lines = split_lines_fixed(read_text_arg(args.text, args.source))
    records = _build_records(lines, template, args.card_type, CardMeta(args.note, args.color))

    # one past the last card appends
    start = card_position(args.position, len(deck) + 1) if args.position is not None else None
    for offset, record in enumerate(records):
        if start is not None:
            deck.insert(start + offset, record)
        else:
            deck.append(record)
    deck.log_action("card add", resolve_actor())
    deck.save(args.deck)
    print(f"Added {len(records)} card(s) into {args.deck}")


def type_cards(args: argparse.Namespace) -> None:
    deck = Deck.load(args.deck)
    template = get_template(args.template) if args.template else None
    lines = split_lines_fixed(sys.stdin.read())
    records = _build_records(lines, template, args.card_type, CardMeta(args.note, args.color))

    for record in records:
        deck.append(record)
    deck.log_action("card type", resolve_actor())
    deck.save(args.deck)
    print(f"Typed cards appended to {args.deck}")


def replace_card(args: argparse.Namespace) -> None:
    deck = Deck.load(args.deck)
    position = card_position(args.index, len(deck))
    text = read_text_arg(args.text, args.source)
    card_type = args.card_type or deck[position].card_type
    record = CardRecord.from_text(text.rstrip("\r\n"), EncodingKind.HOLLERITH, card_type)
    deck.replace(position, record.with_meta(args.note, args.color))
    deck.log_action(f"card replace {args.index}", resolve_actor())
    deck.save(args.deck)
    print(f"Replaced card {args.index} in {args.deck}")


def show_card(args: argparse.Namespace) -> None:
    deck = Deck.load(args.deck)
    card = deck[card_position(args.index, len(deck))]
    print(f"Card {args.index} of {len(deck)}")
    print(f"Type: {card.card_type}")
    if card.seq is not None:
        print(f"Sequence: {card.seq}")
    if card.meta.note is not None:
        print(f"Note: {card.meta.note}")
    if card.meta.color is not None:
        print(f"Color: {card.meta.color}")
    if card.text is not None:
        print(f"Text:\n{card.text}")
    else:
        print("(card stored as punches)")
    if args.interpret:
        print(render_card(card.to_punch_card(), RenderStyle.ASCII_X))


def patch_card(args: argparse.Namespace) -> None:
    deck = Deck.load(args.deck)
    text = read_text_arg(args.text, args.source)
    record = CardRecord.from_text(text.rstrip("\r\n"), EncodingKind.HOLLERITH, CardType.PATCH)
    deck.append(record.with_meta(args.note or PATCH_NOTE, PATCH_COLOR))
    deck.log_action("card patch", resolve_actor())
    deck.save(args.deck)
    print(f"Appended patch card to {args.deck}")
