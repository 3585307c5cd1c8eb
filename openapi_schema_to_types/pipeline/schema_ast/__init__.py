"""
Schema AST module.

Contains the schema node variant, its parser and type inference for
schemas that omit ``type``.
"""

from __future__ import annotations

from .inferred_type import get_inferred_schema, infer_type
from .nodes import (
    BooleanSchema,
    CompositionKind,
    CompositionSchema,
    RefSchema,
    SchemaNode,
    TypedSchema,
    UntypedSchema,
    ValueSchema,
)
from .parser import SchemaParser

__all__ = [
    "SchemaNode",
    "BooleanSchema",
    "RefSchema",
    "CompositionKind",
    "CompositionSchema",
    "ValueSchema",
    "TypedSchema",
    "UntypedSchema",
    "SchemaParser",
    "infer_type",
    "get_inferred_schema",
]
