"""
Unit Tests for Deck Record Validation
"""

import pytest

from punchcard_toolkit.core.models import CardRecord, Deck
from punchcard_toolkit.core.schemas.validator import (
    DECK_SCHEMA_VERSION,
    ValidationError,
    validate_card,
    validate_header,
)


def _header() -> dict:
    data = Deck.new().header.to_dict()
    data["kind"] = "header"
    return data


def _card(**overrides) -> dict:
    data = CardRecord.from_text("HELLO").to_dict()
    data["kind"] = "card"
    data.update(overrides)
    return data


class TestValidateHeader:
    """Tests for validate_header()."""

    def test_validate_when_model_output_then_passes_strict(self):
        validate_header(_header(), strict=True)

    def test_validate_when_wrong_kind_then_raises(self):
        data = _header()
        data["kind"] = "card"
        with pytest.raises(ValidationError):
            validate_header(data)

    def test_validate_when_missing_created_at_then_raises(self):
        data = _header()
        del data["created_at"]
        with pytest.raises(ValidationError, match="Missing required fields"):
            validate_header(data)

    def test_validate_when_wrong_version_then_raises(self):
        data = _header()
        data["version"] = DECK_SCHEMA_VERSION + 1
        with pytest.raises(ValidationError) as exc_info:
            validate_header(data)
        assert exc_info.value.path == "version"

    def test_validate_when_unknown_field_then_strict_rejects(self):
        data = _header()
        data["owner"] = "ada"
        validate_header(data)
        with pytest.raises(ValidationError, match="Schema validation failed"):
            validate_header(data, strict=True)


class TestValidateCard:
    """Tests for validate_card()."""

    def test_validate_when_model_output_then_passes_strict(self):
        validate_card(_card(), strict=True)

    def test_validate_when_no_text_or_punches_then_raises(self):
        with pytest.raises(ValidationError):
            validate_card(_card(text=None))

    def test_validate_when_negative_seq_then_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_card(_card(seq=-5))
        assert exc_info.value.path == "seq"

    def test_validate_when_unknown_card_type_then_strict_rejects(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_card(_card(card_type="punch"), strict=True)
        assert exc_info.value.path == "card_type"
