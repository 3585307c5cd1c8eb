"""
Type converter that transforms schema nodes into type nodes.

Walks a schema recursively, resolving $ref through the reference
resolver. Nameable references become TypeReference nodes; every other
reference is expanded in place.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ..config import ConverterConfig
from ..errors import UnsupportedSchemaShapeError, format_location
from ..schema_ast import (
    BooleanSchema,
    CompositionKind,
    CompositionSchema,
    RefSchema,
    SchemaNode,
    SchemaParser,
    TypedSchema,
    UntypedSchema,
    get_inferred_schema,
)
from .diagnostics import DiagnosticSink
from .reference_resolver import ReferenceResolver
from .type_nodes import (
    AnyType,
    ArrayType,
    IndexSignature,
    IntersectionType,
    LiteralUnionType,
    NullType,
    ObjectType,
    PrimitiveType,
    PropertySignature,
    TypeNode,
    TypeReference,
    UnionType,
    nullable,
)

# Hook returning a replacement type for a schema with a "format", or None
FormatTypeHook = Callable[[TypedSchema], "TypeNode | None"]

PRIMITIVE_TYPES = ("boolean", "integer", "number", "string")

UNTYPED_SCHEMA_MESSAGE = "Schema Type is not found and is converted to the type any. The parent Schema is as follows."


def _enum_matches(type_name: str, values: list[Any]) -> bool:
    """Check that every enum value has the runtime kind of the declared type."""
    if not values:
        return False
    if type_name == "boolean":
        return all(isinstance(v, bool) for v in values)
    if type_name in ("integer", "number"):
        return all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in values)
    if type_name == "string":
        return all(isinstance(v, str) for v in values)
    return False


def _has_no_members(raw: dict[str, Any]) -> bool:
    """A schema that declares nothing at all (``{}``)."""
    return not raw


class TypeConverter:
    """Converts schema nodes into type nodes."""

    def __init__(
        self,
        resolver: ReferenceResolver,
        sink: DiagnosticSink,
        config: ConverterConfig | None = None,
        format_type_hook: FormatTypeHook | None = None,
    ):
        """
        Initialize the converter.

        Args:
            resolver: Reference resolver shared by the run
            sink: Receives non-fatal diagnostics
            config: Converter configuration
            format_type_hook: Optional hook overriding types by "format"
        """
        self.resolver = resolver
        self.sink = sink
        self.config = config or ConverterConfig()
        self.format_type_hook = format_type_hook
        self.parser = SchemaParser()

    def convert(self, current_point: str, schema: Any, parent: Any = None, source_path: str = "#") -> TypeNode:
        """
        Convert a schema into a type node.

        Args:
            current_point: Document the schema was read from
            schema: Raw schema or parsed SchemaNode
            parent: Parent schema, reported with diagnostics
            source_path: JSON pointer of a raw schema in its document

        Returns:
            The converted type node
        """
        node = self.parser.parse(schema, source_path)

        if isinstance(node, BooleanSchema):
            # Free-form schema
            return ObjectType()

        if isinstance(node, RefSchema):
            return self._convert_reference(current_point, node)

        if isinstance(node, CompositionSchema):
            return self._convert_composition(current_point, node)

        if isinstance(node, UntypedSchema):
            if _has_no_members(node.raw):
                return ObjectType()
            return self._convert_untyped(current_point, node, parent)

        if isinstance(node, TypedSchema):
            return self._convert_typed(current_point, node)

        raise TypeError(f"Unexpected schema node {type(node).__name__}")

    def _convert_reference(self, current_point: str, node: RefSchema) -> TypeNode:
        """Convert a $ref, either by name or by expanding its target."""
        resolved = self.resolver.resolve(current_point, node.ref)
        if resolved.nameable:
            return TypeReference(name=resolved.identifier)

        with self.resolver.expanding(resolved.canonical_path):
            target = self.resolver.lookup(resolved)
            return self.convert(
                resolved.document_point,
                target,
                parent=node.raw,
                source_path=format_location("", resolved.path_array),
            )

    def _convert_composition(self, current_point: str, node: CompositionSchema) -> TypeNode:
        """Convert oneOf / anyOf to a union and allOf to an intersection."""
        members = [self.convert(current_point, member) for member in node.members]
        if node.kind == CompositionKind.ALL_OF:
            type_node: TypeNode = IntersectionType(members=members)
        else:
            type_node = UnionType(members=members)
        return nullable(type_node, node.nullable)

    def _convert_untyped(self, current_point: str, node: UntypedSchema, parent: Any) -> TypeNode:
        """Convert a schema without "type"."""
        inferred = get_inferred_schema(node.raw)
        if inferred is not None:
            return self.convert(current_point, inferred, parent=node.raw, source_path=node.source_path)

        if node.nullable is not None:
            return nullable(AnyType(), node.nullable)

        if parent is not None:
            self.sink.warning(UNTYPED_SCHEMA_MESSAGE, parent)
        return AnyType()

    def _convert_typed(self, current_point: str, node: TypedSchema) -> TypeNode:
        """Convert a schema by its declared "type"."""
        type_name = node.type_name
        if isinstance(type_name, list):
            return self._convert_type_list(current_point, node)

        if type_name in PRIMITIVE_TYPES:
            return self._convert_primitive(node)
        if type_name == "null":
            return NullType()
        if type_name == "array":
            return self._convert_array(current_point, node)
        if type_name == "object":
            return self._convert_object(current_point, node)

        # Unknown type
        return AnyType()

    def _convert_type_list(self, current_point: str, node: TypedSchema) -> TypeNode:
        """Convert an OpenAPI 3.1 type list ("type": ["string", "null"])."""
        if not node.type_name:
            return AnyType()
        members = [self.convert(current_point, {**node.raw, "type": type_name}, source_path=node.source_path) for type_name in node.type_name]
        if len(members) == 1:
            return members[0]
        return UnionType(members=members)

    def _convert_primitive(self, node: TypedSchema) -> TypeNode:
        """Convert boolean / integer / number / string."""
        is_nullable = bool(node.nullable)

        format_type = self._convert_format(node)
        if format_type is not None:
            return nullable(format_type, is_nullable)

        if node.enum is not None and _enum_matches(node.type_name, node.enum):
            type_node: TypeNode = LiteralUnionType(base=node.type_name, values=list(node.enum))
        else:
            type_node = PrimitiveType(name=node.type_name)
        return nullable(type_node, is_nullable)

    def _convert_format(self, node: TypedSchema) -> TypeNode | None:
        """Apply a registered format override, if any."""
        if not node.format:
            return None
        if self.format_type_hook is not None:
            type_node = self.format_type_hook(node)
            if type_node is not None:
                return type_node
        override = self.config.format_overrides.get(node.format)
        if override:
            return TypeReference(name=override)
        return None

    def _convert_array(self, current_point: str, node: TypedSchema) -> TypeNode:
        """Convert an array with a single item schema."""
        items = node.items
        if isinstance(items, (list, bool)):
            raise UnsupportedSchemaShapeError(items, format_location(current_point, node.source_path))

        if items is None:
            item_type: TypeNode = AnyType()
        else:
            item_type = self.convert(current_point, items, parent=node.raw)
        return nullable(ArrayType(item=item_type), bool(node.nullable))

    def _convert_object(self, current_point: str, node: TypedSchema) -> TypeNode:
        """Convert an object schema."""
        if node.additional_properties is True:
            # Free-form object: declared properties are ignored
            return ObjectType()

        properties = self._convert_properties(current_point, node)
        is_nullable = bool(node.nullable)

        additional = node.additional_properties
        if isinstance(additional, SchemaNode):
            index_signature = IndexSignature(
                type=self.convert(current_point, additional, parent=node.raw.get("properties")),
                key_name=self.config.index_signature_key,
            )
            if any(prop.optional for prop in properties):
                # Optional members cannot share an object with an index signature
                intersection = IntersectionType(
                    members=[
                        ObjectType(properties=properties),
                        ObjectType(index_signature=index_signature),
                    ]
                )
                return nullable(intersection, is_nullable)
            return ObjectType(properties=properties, index_signature=index_signature)

        return nullable(ObjectType(properties=properties), is_nullable)

    def _convert_properties(self, current_point: str, node: TypedSchema) -> list[PropertySignature]:
        """Convert declared properties, keeping document order."""
        required = set(node.required)
        parent = node.raw.get("properties")
        properties = []
        for name, prop in node.properties.items():
            properties.append(
                PropertySignature(
                    name=name,
                    type=self.convert(current_point, prop, parent=parent),
                    optional=name not in required,
                    read_only=bool(isinstance(prop.raw, dict) and prop.raw.get("readOnly")),
                    comment=prop.raw.get("description") if isinstance(prop.raw, dict) else None,
                )
            )
        return properties
