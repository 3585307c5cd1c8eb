"""
Type node definitions.

These nodes are the output of the converter: an abstract type tree,
independent of any printed syntax. Nullability is never a flag on a node;
a nullable type is always ``UnionType([node, NullType()])``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TypeKind(Enum):
    """Kind of type node."""

    PRIMITIVE = "primitive"  # boolean, integer, number, string
    LITERAL_UNION = "literal_union"  # "a" | "b" (from enum)
    ARRAY = "array"  # T[]
    OBJECT = "object"  # { a: T; [key: string]: U }
    UNION = "union"  # T | U
    INTERSECTION = "intersection"  # T & U
    REFERENCE = "reference"  # Named type
    ANY = "any"
    NULL = "null"


@dataclass
class TypeNode:
    """Base class for all type nodes."""

    kind: TypeKind = field(default=TypeKind.ANY, init=False)


@dataclass
class PrimitiveType(TypeNode):
    """A primitive type."""

    name: str = "string"  # "boolean", "integer", "number", "string"

    def __post_init__(self):
        self.kind = TypeKind.PRIMITIVE


@dataclass
class LiteralUnionType(TypeNode):
    """A union of literal values built from ``enum``."""

    base: str = "string"
    values: list[Any] = field(default_factory=list)

    def __post_init__(self):
        self.kind = TypeKind.LITERAL_UNION


@dataclass
class ArrayType(TypeNode):
    """An array of a single item type."""

    item: TypeNode | None = None

    def __post_init__(self):
        self.kind = TypeKind.ARRAY


@dataclass
class PropertySignature:
    """A named member of an object type."""

    name: str = ""
    type: TypeNode | None = None
    optional: bool = False
    read_only: bool = False
    comment: str | None = None


@dataclass
class IndexSignature:
    """An index signature (``[key: string]: T``)."""

    type: TypeNode | None = None
    key_name: str = "key"


@dataclass
class ObjectType(TypeNode):
    """A structural object type.

    An ObjectType with no properties and no index signature accepts any
    keyed values (free-form object).
    """

    properties: list[PropertySignature] = field(default_factory=list)
    index_signature: IndexSignature | None = None

    def __post_init__(self):
        self.kind = TypeKind.OBJECT

    @property
    def is_empty(self) -> bool:
        return not self.properties and self.index_signature is None


@dataclass
class UnionType(TypeNode):
    """A union of member types."""

    members: list[TypeNode] = field(default_factory=list)

    def __post_init__(self):
        self.kind = TypeKind.UNION


@dataclass
class IntersectionType(TypeNode):
    """An intersection of member types."""

    members: list[TypeNode] = field(default_factory=list)

    def __post_init__(self):
        self.kind = TypeKind.INTERSECTION


@dataclass
class TypeReference(TypeNode):
    """A reference to a named type declaration."""

    name: str = ""

    def __post_init__(self):
        self.kind = TypeKind.REFERENCE


@dataclass
class AnyType(TypeNode):
    """The ``any`` type."""

    def __post_init__(self):
        self.kind = TypeKind.ANY


@dataclass
class NullType(TypeNode):
    """The ``null`` type."""

    def __post_init__(self):
        self.kind = TypeKind.NULL


def nullable(type_node: TypeNode, is_nullable: bool) -> TypeNode:
    """Union a type with null when it is nullable."""
    if is_nullable:
        return UnionType(members=[type_node, NullType()])
    return type_node


@dataclass
class NamedDeclaration:
    """A named type declaration produced by a generation run."""

    identifier: str = ""
    type_node: TypeNode | None = None
    canonical_path: str = ""
    description: str | None = None
