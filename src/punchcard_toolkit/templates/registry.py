"""
Module: templates.registry

Purpose:
    Built-in column layouts for classic fixed-format card languages. The
    layouts are labels only: applying a template pads the text and sets the
    default card type, it never validates field contents.

Key Functions:
    - get_template(name): Case-insensitive lookup
    - list_templates(): All built-in templates, in display order
    - Template.apply(text): Build a CardRecord with the template defaults
    - Template.field_at(col): Field label covering a column

Used By:
    - cli.template, cli.card, cli.deck
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.encoding import EncodingKind
from ..core.errors import UnknownTemplate
from ..core.models import CardRecord, CardType, ColumnRange


@dataclass(frozen=True, slots=True)
class TemplateColumn:
    """One labelled field of a template."""

    range: ColumnRange
    label: str


@dataclass(frozen=True, slots=True)
class Template:
    """
    Named column layout.

    Attributes:
        name: Registry key (lowercase)
        description: One-line summary
        columns: Labelled fields, left to right
        default_type: CardType given to cards built with apply()
    """

    name: str
    description: str
    columns: Tuple[TemplateColumn, ...]
    default_type: CardType = CardType.CODE

    def apply(self, text: str) -> CardRecord:
        """
        Pad ``text`` to a full card with this template's defaults.

        Raises:
            TextTooLong: If ``text`` is wider than 80 columns.
        """
        return CardRecord.from_text(text, EncodingKind.HOLLERITH, self.default_type)

    def field_at(self, col: int) -> Optional[TemplateColumn]:
        for column in self.columns:
            if column.range.contains(col):
                return column
        return None


def _field(start: int, end: int, label: str) -> TemplateColumn:
    return TemplateColumn(ColumnRange(start, end), label)


FORTRAN = Template(
    name="fortran",
    description="FORTRAN IV layout with fixed-format areas.",
    columns=(
        _field(1, 5, "Statement label / comment (C in col 1)"),
        _field(6, 6, "Continuation (non-blank for continuation)"),
        _field(7, 72, "Source statement"),
        _field(73, 80, "Sequence number"),
    ),
)

COBOL = Template(
    name="cobol",
    description="COBOL columnar layout (sequence, area A/B, comments).",
    columns=(
        _field(1, 6, "Sequence number / identification"),
        _field(7, 7, "Indicator (e.g., * comment)"),
        _field(8, 11, "Area A"),
        _field(12, 72, "Area B"),
        _field(73, 80, "Identification / sequence"),
    ),
)

JCL = Template(
    name="jcl",
    description="IBM JCL job card layout.",
    columns=(
        _field(1, 2, "Job card '//'"),
        _field(3, 10, "Job/step name"),
        _field(11, 15, "Operation (JOB/EXEC/DD)"),
        _field(16, 71, "Parameters"),
        _field(72, 72, "Continuation indicator"),
        _field(73, 80, "Sequence number"),
    ),
    default_type=CardType.JCL,
)

ASSEMBLER = Template(
    name="assembler",
    description="IBM System/360 assembler (H) columns.",
    columns=(
        _field(1, 8, "Label"),
        _field(9, 9, "Continuation"),
        _field(10, 15, "Operation"),
        _field(16, 71, "Operands / comments"),
        _field(72, 72, "Continuation"),
        _field(73, 80, "Sequence number"),
    ),
)

_TEMPLATES: Tuple[Template, ...] = (FORTRAN, COBOL, JCL, ASSEMBLER)


def list_templates() -> Tuple[Template, ...]:
    return _TEMPLATES


def get_template(name: str) -> Template:
    """
    Resolve a template by name, ignoring case.

    Raises:
        UnknownTemplate: If no built-in template has this name.
    """
    wanted = name.strip().lower()
    for template in _TEMPLATES:
        if template.name == wanted:
            return template
    raise UnknownTemplate(name)
