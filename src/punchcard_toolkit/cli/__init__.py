"""
CLI Package

The ``punch`` command: deck, card, seq, render, template, encode, audit and
verify command families.
"""

from .main import build_parser, main

__all__ = ["build_parser", "main"]
