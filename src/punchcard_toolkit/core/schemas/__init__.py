"""
Schemas Package

JSON schema definitions and validation utilities for deck files.
"""

from .validator import (
    validate_header,
    validate_card,
    ValidationError,
    DECK_SCHEMA_VERSION,
)

__all__ = [
    "validate_header",
    "validate_card",
    "ValidationError",
    "DECK_SCHEMA_VERSION",
]
