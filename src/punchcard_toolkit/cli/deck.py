"""``punch deck ...``: create, import, export, inspect, merge and slice decks."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from ..core.encoding import EncodingKind
from ..core.errors import DeckFormatError, TextTooLong
from ..core.models import CardRecord, CardType, ColumnRange, Deck, format_ranges
from ..templates import get_template
from .utils import parse_range_expression, resolve_actor, write_output

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("text80", "deck")


def register(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("deck", help="Deck level operations")
    commands = parser.add_subparsers(dest="deck_command", required=True)

    init = commands.add_parser("init", help="Create an empty deck file")
    init.add_argument("path", type=Path)
    init.add_argument("-l", "--language")
    init.add_argument("-t", "--template")
    init.add_argument("--protect", type=ColumnRange.parse, action="append", default=[],
                      metavar="START-END", help="Protected column range (repeatable)")
    init.set_defaults(func=init_deck)

    imp = commands.add_parser("import", help="Import a plain text file, one card per line")
    imp.add_argument("source", type=Path)
    imp.add_argument("-o", "--output", type=Path, required=True)
    imp.add_argument("--encoding", type=EncodingKind, choices=list(EncodingKind),
                     default=EncodingKind.HOLLERITH)
    imp.add_argument("--type", dest="card_type", type=CardType, choices=list(CardType),
                     default=CardType.CODE)
    imp.set_defaults(func=import_deck)

    export = commands.add_parser("export", help="Export a deck as 80-column text or a deck copy")
    export.add_argument("deck", type=Path)
    export.add_argument("-o", "--output", type=Path, required=True)
    export.add_argument("--format", choices=EXPORT_FORMATS, default="text80")
    export.set_defaults(func=export_deck)

    info = commands.add_parser("info", help="Show deck metadata")
    info.add_argument("deck", type=Path)
    info.set_defaults(func=deck_info)

    merge = commands.add_parser("merge", help="Concatenate compatible decks")
    merge.add_argument("inputs", type=Path, nargs="+")
    merge.add_argument("-o", "--output", type=Path, required=True)
    merge.set_defaults(func=merge_decks)

    slc = commands.add_parser("slice", help="Extract cards by range expression")
    slc.add_argument("deck", type=Path)
    slc.add_argument("-r", "--range", dest="range_expr", required=True,
                     help="e.g. 1..10,25,40..$")
    slc.add_argument("-o", "--output", type=Path, required=True)
    slc.set_defaults(func=slice_deck)


def init_deck(args: argparse.Namespace) -> None:
    if args.template:
        get_template(args.template)
    deck = Deck.new(args.language, args.template, args.protect)
    deck.log_action("deck init", resolve_actor())
    deck.save(args.path)
    print(f"Created deck {args.path} (language: {args.language}, template: {args.template})")


def import_deck(args: argparse.Namespace) -> None:
    contents = args.source.read_text(encoding="utf-8")
    deck = Deck.new()
    for line_no, line in enumerate(contents.splitlines(), 1):
        try:
            record = CardRecord.from_text(line, args.encoding, args.card_type)
        except TextTooLong as e:
            raise DeckFormatError("line exceeds 80 columns", path=args.source, line=line_no) from e
        deck.append(record)
    deck.log_action(f"import from {args.source} as {args.encoding}", resolve_actor())
    deck.save(args.output)
    print(f"Imported {len(deck)} cards into {args.output}")


def export_deck(args: argparse.Namespace) -> None:
    deck = Deck.load(args.deck)
    if args.format == "text80":
        write_output(args.output, "\n".join(deck.as_text()))
    else:
        deck.clone().save(args.output)
    logger.info("Exported deck %s as %s -> %s", args.deck, args.format, args.output)


def deck_info(args: argparse.Namespace) -> None:
    deck = Deck.load(args.deck)
    header = deck.header
    print(f"Deck: {args.deck}")
    print(f"Cards: {len(deck)}")
    print(f"Language: {header.language or '(unspecified)'}")
    if header.template:
        print(f"Template: {header.template}")
    if header.protected_cols:
        print(f"Protected cols: {format_ranges(header.protected_cols)}")
    if header.readonly:
        print("Read-only: yes")
    print(f"History entries: {len(header.history)}")


def merge_decks(args: argparse.Namespace) -> None:
    if len(args.inputs) < 2:
        raise ValueError("merge requires at least two input decks")
    merged = Deck.load(args.inputs[0])
    for path in args.inputs[1:]:
        merged.merge_from(Deck.load(path))
    merged.log_action(f"merge {len(args.inputs)} decks into {args.output}", resolve_actor())
    merged.save(args.output)
    print(f"Merged {len(merged)} cards into {args.output}")


def slice_deck(args: argparse.Namespace) -> None:
    source = Deck.load(args.deck)
    indices = parse_range_expression(args.range_expr, len(source))
    sliced = source.slice_indices(indices)
    sliced.log_action(f"slice {args.range_expr} -> {args.output}", resolve_actor())
    sliced.save(args.output)
    print(f"Sliced {len(sliced)} cards into {args.output}")
