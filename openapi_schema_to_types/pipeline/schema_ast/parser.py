"""
Schema parser that builds an AST.

Parses a raw schema mapping into the closed SchemaNode variant without
resolving references. Child schemas (properties, items, composition
members, additionalProperties) are parsed recursively.
"""

from __future__ import annotations

from typing import Any

from ..errors import UnsupportedSchemaShapeError
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

# Composition keywords in the order they are checked
COMPOSITION_KEYWORDS = (CompositionKind.ONE_OF, CompositionKind.ALL_OF, CompositionKind.ANY_OF)


def _child_path(path: str, *segments: str) -> str:
    escaped = [str(segment).replace("~", "~0").replace("/", "~1") for segment in segments]
    return "/".join([path.rstrip("/"), *escaped])


class SchemaParser:
    """Parses raw schemas into SchemaNode trees."""

    def parse(self, schema: Any, source_path: str = "#") -> SchemaNode:
        """
        Parse a schema recursively.

        Args:
            schema: The raw schema (mapping or boolean)
            source_path: JSON pointer of the schema in its document

        Returns:
            Appropriate SchemaNode subclass
        """
        if isinstance(schema, SchemaNode):
            return schema

        if isinstance(schema, bool):
            return BooleanSchema(value=schema, source_path=source_path, raw=schema)

        if not isinstance(schema, dict):
            raise UnsupportedSchemaShapeError(
                schema,
                source_path,
                f"Schema must be an object or a boolean, got {schema!r}",
            )

        if "$ref" in schema:
            return RefSchema(ref=schema["$ref"], source_path=source_path, raw=schema)

        for kind in COMPOSITION_KEYWORDS:
            if kind.value in schema:
                return self._parse_composition(schema, kind, source_path)

        if "type" in schema:
            node = TypedSchema(type_name=schema["type"], source_path=source_path, raw=schema)
        else:
            node = UntypedSchema(source_path=source_path, raw=schema)
        self._fill_value_schema(node, schema, source_path)
        return node

    def _parse_composition(self, schema: dict[str, Any], kind: CompositionKind, path: str) -> CompositionSchema:
        """Parse a oneOf / anyOf / allOf node."""
        members_schema = schema[kind.value]
        if not isinstance(members_schema, list):
            raise UnsupportedSchemaShapeError(
                members_schema,
                path,
                f"{kind.value} must be a list of schemas, got {members_schema!r}",
            )
        members = [self.parse(member, _child_path(path, kind.value, str(i))) for i, member in enumerate(members_schema)]
        return CompositionSchema(
            kind=kind,
            members=members,
            nullable=bool(schema.get("nullable", False)),
            source_path=path,
            raw=schema,
        )

    def _fill_value_schema(self, node: ValueSchema, schema: dict[str, Any], path: str) -> None:
        """Fill the keywords shared by typed and untyped schemas."""
        nullable = schema.get("nullable")
        node.nullable = nullable if isinstance(nullable, bool) else None
        node.enum = schema.get("enum")
        node.format = schema.get("format")
        node.read_only = bool(schema.get("readOnly", False))
        node.description = schema.get("description")

        items = schema.get("items")
        if isinstance(items, dict):
            node.items = self.parse(items, _child_path(path, "items"))
        else:
            # Tuple-style and boolean items are rejected by the converter
            node.items = items

        properties = schema.get("properties") or {}
        node.properties = {name: self.parse(prop, _child_path(path, "properties", name)) for name, prop in properties.items()}
        node.required = list(schema.get("required") or [])

        additional = schema.get("additionalProperties")
        if isinstance(additional, dict):
            node.additional_properties = self.parse(additional, _child_path(path, "additionalProperties"))
        elif isinstance(additional, bool):
            node.additional_properties = additional
        else:
            node.additional_properties = None
