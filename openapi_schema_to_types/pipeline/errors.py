"""
Errors raised while resolving and converting schemas.

Every fatal condition aborts the conversion of the current entry point.
Untyped schemas are not errors: they are reported as warnings through
the diagnostic sink instead.
"""

from __future__ import annotations

from typing import Any


def format_location(document_point: str, path: list[str] | tuple[str, ...] | str) -> str:
    """Format a schema location as ``document#/json/pointer``."""
    if isinstance(path, str):
        pointer = path
    else:
        pointer = "/".join(segment.replace("~", "~0").replace("/", "~1") for segment in path)
    if pointer.startswith("#"):
        pointer = pointer[1:]
    if pointer and not pointer.startswith("/"):
        pointer = "/" + pointer
    return f"{document_point}#{pointer}"


class SchemaConversionError(Exception):
    """Base class for fatal errors raised during a generation run.

    Attributes:
        location: Schema location at fault (``document#/pointer``), if known
    """

    def __init__(self, message: str, location: str = ""):
        self.location = location
        if location:
            message = f"{message} (at {location})"
        super().__init__(message)


class UnsupportedSchemaShapeError(SchemaConversionError):
    """Raised for structurally disallowed schemas.

    This happens for:
    - Tuple-style ``items`` (a list of schemas)
    - Boolean ``items``
    """

    def __init__(self, value: Any, location: str = "", message: str = ""):
        self.value = value
        super().__init__(message or f"Unsupported schema: items = {value!r}", location)


class InvalidRequestPathError(UnsupportedSchemaShapeError):
    """Raised when a request path is empty or does not start with a slash."""

    def __init__(self, request_uri: str, location: str = ""):
        super().__init__(request_uri, location, f"Request path must start with '/': {request_uri!r}")


class ReferenceCycleError(SchemaConversionError):
    """Raised when an inline $ref chain revisits a path still being expanded."""

    def __init__(self, canonical_path: str, chain: list[str]):
        self.canonical_path = canonical_path
        self.chain = list(chain)
        cycle = " -> ".join([*chain, canonical_path])
        super().__init__(f"Reference cycle detected: {cycle}", canonical_path)


class UnresolvedReferenceError(SchemaConversionError):
    """Raised when a $ref path or its target document cannot be found."""

    def __init__(self, reference: str, location: str = ""):
        self.reference = reference
        super().__init__(f"Cannot resolve reference {reference!r}", location)
