"""``punch template ...``: list and describe column layouts."""

from __future__ import annotations

import argparse

from ..templates import get_template, list_templates


def register(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("template", help="Built-in column templates")
    commands = parser.add_subparsers(dest="template_command", required=True)

    lst = commands.add_parser("list", help="List available templates")
    lst.set_defaults(func=list_command)

    show = commands.add_parser("show", help="Show a template's column layout")
    show.add_argument("name")
    show.set_defaults(func=show_command)


def list_command(args: argparse.Namespace) -> None:
    print("Available templates:")
    for template in list_templates():
        print(f"  - {template.name}: {template.description}")


def show_command(args: argparse.Namespace) -> None:
    template = get_template(args.name)
    print(f"Template: {template.name}")
    print(template.description)
    for column in template.columns:
        print(f"  {column.range.start:>2}-{column.range.end:>2}: {column.label}")
