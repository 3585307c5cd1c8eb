"""
Analyzer module.

Resolves references and converts schema nodes into type nodes.
"""

from __future__ import annotations

from .converter import FormatTypeHook, TypeConverter
from .diagnostics import Diagnostic, DiagnosticLevel, DiagnosticSink, LoggingDiagnosticSink
from .name_registry import NameRegistry, RegistryEntry
from .reference_resolver import ReferenceKind, ReferencePointer, ReferenceResolver, ResolvedReference
from .type_nodes import (
    AnyType,
    ArrayType,
    IndexSignature,
    IntersectionType,
    LiteralUnionType,
    NamedDeclaration,
    NullType,
    ObjectType,
    PrimitiveType,
    PropertySignature,
    TypeKind,
    TypeNode,
    TypeReference,
    UnionType,
    nullable,
)

__all__ = [
    "TypeConverter",
    "FormatTypeHook",
    "Diagnostic",
    "DiagnosticLevel",
    "DiagnosticSink",
    "LoggingDiagnosticSink",
    "NameRegistry",
    "RegistryEntry",
    "ReferenceKind",
    "ReferencePointer",
    "ReferenceResolver",
    "ResolvedReference",
    "TypeKind",
    "TypeNode",
    "PrimitiveType",
    "LiteralUnionType",
    "ArrayType",
    "ObjectType",
    "PropertySignature",
    "IndexSignature",
    "UnionType",
    "IntersectionType",
    "TypeReference",
    "AnyType",
    "NullType",
    "NamedDeclaration",
    "nullable",
]
