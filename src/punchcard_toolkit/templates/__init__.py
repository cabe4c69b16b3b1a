"""
Templates Package

Column layouts for FORTRAN, COBOL, JCL and assembler cards.
"""

from .registry import Template, TemplateColumn, get_template, list_templates

__all__ = ["Template", "TemplateColumn", "get_template", "list_templates"]
