"""
Utils Package

Serialization and utility functions.
"""

from .serialization import (
    dump_record,
    serialize_deck,
    deserialize_deck,
    load_deck,
    save_deck,
)

__all__ = [
    "dump_record",
    "serialize_deck",
    "deserialize_deck",
    "load_deck",
    "save_deck",
]
