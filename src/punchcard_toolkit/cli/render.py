"""``punch render ...``: images, PDF sheets, interpreted listings."""

from __future__ import annotations

import argparse
from pathlib import Path

from ..core.models import Deck
from ..render.ascii import RenderStyle, render_deck, render_listing
from ..render.config import DEFAULT_DPI, CardImageStyle, ImageRenderOptions, PageLayout, SheetLayout
from ..render.image import save_card_images
from ..render.pdf import render_cards_to_pdf
from .utils import write_output


def _add_image_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--style", type=CardImageStyle, choices=list(CardImageStyle),
                        default=CardImageStyle.INTERPRETER)
    parser.add_argument("--dpi", type=int, default=DEFAULT_DPI,
                        help="Dots per inch (clamped to 72-1200)")


def _add_text_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("deck", type=Path)
    parser.add_argument("-o", "--output", type=Path, help="Output file ('-' for stdout)")
    parser.add_argument("--style", type=RenderStyle, choices=list(RenderStyle),
                        default=RenderStyle.ASCII_X)


def register(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("render", help="Render decks")
    commands = parser.add_subparsers(dest="render_command", required=True)

    image = commands.add_parser("image", help="Render PNG images of the card faces")
    image.add_argument("deck", type=Path)
    image.add_argument("-o", "--output", type=Path, required=True,
                       help="PNG file (single card) or output directory")
    _add_image_options(image)
    image.add_argument("--pagesize", type=PageLayout, choices=list(PageLayout),
                       default=PageLayout.CARD)
    image.set_defaults(func=image_command)

    pdf = commands.add_parser("pdf", help="Render printable A4 sheets to PDF")
    pdf.add_argument("deck", type=Path)
    pdf.add_argument("-o", "--output", type=Path, required=True)
    _add_image_options(pdf)
    pdf.add_argument("--margin", type=float, default=SheetLayout.margin_in,
                     help="Page margin in inches")
    pdf.add_argument("--gap", type=float, default=SheetLayout.gap_in,
                     help="Gap between cards in inches")
    pdf.set_defaults(func=pdf_command)

    interpret = commands.add_parser("interpret", help="Interpreter-style punch diagrams")
    _add_text_options(interpret)
    interpret.set_defaults(func=interpret_command)

    listing = commands.add_parser("listing", help="Card-by-card textual listing")
    _add_text_options(listing)
    listing.set_defaults(func=listing_command)


def image_command(args: argparse.Namespace) -> None:
    deck = Deck.load(args.deck)
    options = ImageRenderOptions(style=args.style, dpi=args.dpi, layout=args.pagesize)
    written = save_card_images(deck.to_punch_deck().cards, args.output, options)
    print(f"Rendered {len(written)} card image(s) to {args.output} at {options.dpi} DPI")


def pdf_command(args: argparse.Namespace) -> None:
    deck = Deck.load(args.deck)
    options = ImageRenderOptions(style=args.style, dpi=args.dpi)
    layout = SheetLayout(margin_in=args.margin, gap_in=args.gap)
    pages = render_cards_to_pdf(deck.to_punch_deck().cards, args.output, options, layout)
    print(f"Rendered {len(deck)} cards on {pages} page(s) to {args.output}")


def _emit(args: argparse.Namespace, output: str, what: str) -> None:
    if args.output is None:
        print(output, end="")
        return
    write_output(args.output, output)
    if str(args.output) != "-":
        print(f"Wrote {what} for {args.deck} to {args.output}")


def interpret_command(args: argparse.Namespace) -> None:
    deck = Deck.load(args.deck)
    _emit(args, render_deck(deck.to_punch_deck().cards, args.style), "interpreted listing")


def listing_command(args: argparse.Namespace) -> None:
    deck = Deck.load(args.deck)
    _emit(args, render_listing(deck, args.style), "listing")
