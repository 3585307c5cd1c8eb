"""
Structural type inference for schemas that omit ``type``.
"""

from __future__ import annotations

from typing import Any

OBJECT_KEYWORDS = ("properties", "additionalProperties", "required", "minProperties", "maxProperties")
ARRAY_KEYWORDS = ("items", "minItems", "maxItems", "uniqueItems")
STRING_KEYWORDS = ("format", "pattern", "minLength", "maxLength")
NUMBER_KEYWORDS = ("minimum", "maximum", "exclusiveMinimum", "exclusiveMaximum", "multipleOf")


def _infer_enum_type(values: list[Any]) -> str | None:
    """Infer a primitive type from enum values, if they all share one."""
    if not values:
        return None
    if all(isinstance(v, bool) for v in values):
        return "boolean"
    if all(isinstance(v, int) and not isinstance(v, bool) for v in values):
        return "integer"
    if all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in values):
        return "number"
    if all(isinstance(v, str) for v in values):
        return "string"
    return None


def infer_type(schema: dict[str, Any]) -> str | None:
    """
    Infer the type an untyped schema most likely declares.

    Keyword families are checked in order: object, array, enum values,
    string constraints, then numeric constraints.

    Returns:
        The inferred type name, or None when nothing implies a type
    """
    if any(keyword in schema for keyword in OBJECT_KEYWORDS):
        return "object"
    if any(keyword in schema for keyword in ARRAY_KEYWORDS):
        return "array"
    if isinstance(schema.get("enum"), list):
        enum_type = _infer_enum_type(schema["enum"])
        if enum_type:
            return enum_type
    if any(keyword in schema for keyword in STRING_KEYWORDS):
        return "string"
    if any(keyword in schema for keyword in NUMBER_KEYWORDS):
        return "number"
    return None


def get_inferred_schema(schema: dict[str, Any]) -> dict[str, Any] | None:
    """Return a copy of the schema with the inferred ``type`` filled in."""
    inferred = infer_type(schema)
    if inferred is None:
        return None
    return {**schema, "type": inferred}
