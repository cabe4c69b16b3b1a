"""
Module: cli.main

Purpose:
    Entry point of the ``punch`` command. Builds the argparse tree from the
    command modules, configures logging and turns toolkit errors into a
    single message on stderr with exit status 1.

Key Functions:
    - build_parser(): Full argument parser
    - main(argv): Run one command, return the exit status
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from .. import __version__
from ..core.errors import PunchCardError
from . import audit, card, deck, encode, render, seq, template, verify

logger = logging.getLogger(__name__)

COMMAND_MODULES = (deck, card, seq, render, template, encode, audit, verify)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="punch",
        description="IBM punch card workflow toolkit",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)
    for module in COMMAND_MODULES:
        module.register(subparsers)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        args.func(args)
    except (PunchCardError, OSError, ValueError) as e:
        logger.error("error: %s", e)
        return 1
    return 0
