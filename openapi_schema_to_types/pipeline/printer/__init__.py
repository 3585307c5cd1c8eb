"""
Printer module.

Turns type nodes into TypeScript source.
"""

from __future__ import annotations

from .typescript_printer import RenderedDeclaration, TypeScriptPrinter, format_comment, format_property_name

__all__ = [
    "TypeScriptPrinter",
    "RenderedDeclaration",
    "format_comment",
    "format_property_name",
]
