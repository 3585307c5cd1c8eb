"""
AST (Abstract Syntax Tree) node definitions for OpenAPI schemas.

These nodes represent the parsed structure of a schema before any
reference resolution. The variant is closed: every schema parses to
exactly one of BooleanSchema, RefSchema, CompositionSchema, TypedSchema
or UntypedSchema.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


@dataclass
class SchemaNode:
    """Base class for all AST nodes."""

    # Location in the owning document (for error messages)
    source_path: str = "#"

    # Raw schema as found in the document
    raw: Any = field(default=None, repr=False, compare=False)


@dataclass
class BooleanSchema(SchemaNode):
    """A free-form boolean schema (``true`` / ``false``)."""

    value: bool = True


@dataclass
class RefSchema(SchemaNode):
    """A ``$ref`` schema (unresolved reference)."""

    ref: str = ""  # e.g. "#/components/schemas/Pet" or "./Pet.yml"


class CompositionKind(str, Enum):
    """Composition keyword of a CompositionSchema."""

    ONE_OF = "oneOf"
    ANY_OF = "anyOf"
    ALL_OF = "allOf"


@dataclass
class CompositionSchema(SchemaNode):
    """A oneOf / anyOf / allOf schema."""

    kind: CompositionKind = CompositionKind.ONE_OF
    members: list[SchemaNode] = field(default_factory=list)
    nullable: bool = False


# Raw items as found in the document: tuple-style lists and booleans are
# kept so the converter can reject them with the offending value
ItemsValue = Union[SchemaNode, list, bool, None]


@dataclass
class ValueSchema(SchemaNode):
    """Common keywords of typed and untyped schemas."""

    nullable: bool | None = None  # None when absent
    enum: list[Any] | None = None
    format: str | None = None
    read_only: bool = False
    description: str | None = None

    # Array keywords
    items: ItemsValue = None

    # Object keywords (properties keep document order)
    properties: dict[str, SchemaNode] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)
    additional_properties: SchemaNode | bool | None = None  # None when absent


@dataclass
class TypedSchema(ValueSchema):
    """A schema with a declared ``type``."""

    type_name: str | list[str] = ""  # "string", "object", ... (list in OpenAPI 3.1)


@dataclass
class UntypedSchema(ValueSchema):
    """A schema without ``type``, ``$ref`` or composition keywords."""
