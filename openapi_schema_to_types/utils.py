"""
Utility functions for naming generated types.
"""

import re

# Regex pattern to split text into words, handling camelCase boundaries
_WORD_PATTERN = re.compile(r"[a-z]+|[A-Z][a-z]*|[0-9]+")

_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_INVALID_IDENTIFIER_CHARS = re.compile(r"[^A-Za-z0-9_$]")

# TypeScript reserved words that cannot name a type declaration
TS_RESERVED_WORDS = {
    "any",
    "boolean",
    "break",
    "case",
    "catch",
    "class",
    "const",
    "continue",
    "debugger",
    "default",
    "delete",
    "do",
    "else",
    "enum",
    "export",
    "extends",
    "false",
    "finally",
    "for",
    "function",
    "if",
    "import",
    "in",
    "instanceof",
    "never",
    "new",
    "null",
    "number",
    "object",
    "return",
    "string",
    "super",
    "switch",
    "symbol",
    "this",
    "throw",
    "true",
    "try",
    "typeof",
    "undefined",
    "unknown",
    "var",
    "void",
    "while",
    "with",
}


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens, dots, slashes) to spaces."""
    return re.sub(r"[_\-./]", " ", text)


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return _WORD_PATTERN.findall(text)


def _capitalize_and_join(words: list[str]) -> str:
    """Capitalize each word and join them together."""
    return "".join(word.capitalize() for word in words if word)


def snake_to_pascal_case(text: str) -> str:
    """Convert snake_case, camelCase, or space-separated text to PascalCase.

    Examples:
        "first_name" -> "FirstName"
        "FIRST_NAME" -> "FirstName"
        "actionTemplate" -> "ActionTemplate"
        "pets/{petId}" -> "PetsPetId"

    Args:
        text: The text to convert

    Returns:
        PascalCase string
    """
    if not text:
        return ""
    normalized = _normalize_separators(text)
    words = _split_into_words(normalized)
    return _capitalize_and_join(words)


def is_valid_identifier(text: str) -> bool:
    """Check whether text can be used verbatim as a TypeScript identifier."""
    return bool(_IDENTIFIER_PATTERN.match(text)) and text not in TS_RESERVED_WORDS


def escape_identifier(text: str) -> str:
    """Turn arbitrary schema names into a valid type identifier.

    Examples:
        "Pet" -> "Pet"
        "pet-store.Pet" -> "pet_store_Pet"
        "2xx" -> "_2xx"
        "string" -> "string_"
    """
    if not text:
        return "_"
    escaped = _INVALID_IDENTIFIER_CHARS.sub("_", text)
    if escaped[0].isdigit():
        escaped = "_" + escaped
    if escaped in TS_RESERVED_WORDS:
        escaped = escaped + "_"
    return escaped


def is_valid_property_name(text: str) -> bool:
    """Check whether a property name can be printed without quotes."""
    return bool(_IDENTIFIER_PATTERN.match(text))
