"""
Unit Tests for the Built-in Card Templates
"""

import pytest

from punchcard_toolkit.core.errors import TextTooLong, UnknownTemplate
from punchcard_toolkit.core.models import CardType
from punchcard_toolkit.templates import get_template, list_templates


class TestTemplateRegistry:
    """Tests for list_templates() and get_template()."""

    def test_list_when_called_then_four_builtins_in_order(self):
        assert [t.name for t in list_templates()] == ["fortran", "cobol", "jcl", "assembler"]

    def test_get_when_mixed_case_then_resolves(self):
        assert get_template("  COBOL ").name == "cobol"

    def test_get_when_unknown_then_raises(self):
        with pytest.raises(UnknownTemplate) as exc_info:
            get_template("pl1")
        assert exc_info.value.name == "pl1"

    @pytest.mark.parametrize("template", list_templates(), ids=lambda t: t.name)
    def test_template_when_listed_then_fields_ordered_within_card(self, template):
        ranges = [column.range for column in template.columns]
        assert ranges[0].start == 1
        assert ranges[-1].end == 80
        assert all(a.end < b.start for a, b in zip(ranges, ranges[1:]))


class TestTemplateApply:
    """Tests for Template.apply() and field_at()."""

    def test_apply_when_jcl_then_jcl_card_type(self):
        record = get_template("jcl").apply("//JOB1     JOB")
        assert record.card_type is CardType.JCL
        assert len(record.text) == 80

    def test_apply_when_fortran_then_code_card(self):
        assert get_template("fortran").apply("      END").card_type is CardType.CODE

    def test_apply_when_text_too_wide_then_raises(self):
        with pytest.raises(TextTooLong):
            get_template("cobol").apply("X" * 81)

    def test_field_at_when_sequence_column_then_sequence_field(self):
        assert get_template("fortran").field_at(75).label == "Sequence number"
        assert get_template("cobol").field_at(7).label.startswith("Indicator")
