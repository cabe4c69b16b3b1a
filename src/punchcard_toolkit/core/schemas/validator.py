"""
Schema Validation Utilities

Validates deck file records before they are turned into models.

Every line of a deck file is one JSON object tagged with ``kind``. The
header line and the card lines each have a JSON Schema next to this module
(``deck_header.schema.json``, ``deck_card.schema.json``). Basic structural
checks always run; ``strict=True`` adds full jsonschema validation.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

# Schema version constants
DECK_SCHEMA_VERSION = 1  # v1: kind-tagged JSON Lines, header first


_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when a deck record fails validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def _check_schema(data: dict[str, Any], schema_name: str) -> None:
    schema = _load_schema(schema_name)
    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        raise ValidationError(
            f"Schema validation failed: {e.message}",
            path=".".join(str(p) for p in e.absolute_path),
            errors=[e.message],
        ) from e


def validate_header(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate a deck header record.

    Args:
        data: Parsed JSON object of the first deck line
        strict: If True, also run jsonschema

    Raises:
        ValidationError: If data is invalid
    """
    if data.get("kind") != "header":
        raise ValidationError(f"Expected a header record, got kind {data.get('kind')!r}", path="kind")

    required = ["version", "created_at"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            errors=[f"Missing field: {f}" for f in missing],
        )

    version = data.get("version")
    if version != DECK_SCHEMA_VERSION:
        raise ValidationError(
            f"Unsupported deck version: {version} (expected {DECK_SCHEMA_VERSION})",
            path="version",
        )

    if strict:
        _check_schema(data, "deck_header")


def validate_card(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate a card record.

    Raises:
        ValidationError: If data is invalid
    """
    kind = data.get("kind")
    if kind != "card":
        raise ValidationError(f"Expected a card record, got kind {kind!r}", path="kind")

    if data.get("text") is None and data.get("punches") is None:
        raise ValidationError("Card must carry text or punches", path="text")

    text = data.get("text")
    if text is not None and (not isinstance(text, str) or len(text) > 80):
        raise ValidationError("text must be a string of at most 80 characters", path="text")

    seq = data.get("seq")
    if seq is not None and (not isinstance(seq, int) or isinstance(seq, bool) or seq < 0):
        raise ValidationError(f"Invalid seq: {seq!r} (must be non-negative integer)", path="seq")

    if strict:
        _check_schema(data, "deck_card")
