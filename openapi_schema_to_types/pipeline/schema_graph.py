"""
Read-only view over a set of loaded OpenAPI / JSON-Schema documents.

Documents are keyed by their "document point": a posix path relative to
the directory of the entry document (e.g. "openapi.yml",
"components/schemas/Pet.yml"). Loading the documents is the caller's job.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Any

from .errors import UnresolvedReferenceError, format_location


@dataclass(frozen=True)
class DocumentPoint:
    """An absolute document point, plus its component identity if it has one.

    Attributes:
        point: Normalized document path
        component_name: Component name when the document lives in a
            recognized component directory (e.g. "Pet" for
            "components/schemas/Pet.yml"), else None
        component_directory: The component directory ("schemas"), else None
    """

    point: str
    component_name: str | None = None
    component_directory: str | None = None

    @property
    def is_component(self) -> bool:
        return self.component_name is not None


def normalize_point(point: str) -> str:
    """Normalize a document path ("./a/../b.yml" -> "b.yml")."""
    normalized = posixpath.normpath(point.replace("\\", "/"))
    return "" if normalized == "." else normalized


def split_pointer(pointer: str) -> list[str]:
    """Split a JSON pointer fragment into unescaped segments.

    "#/components/schemas/a~1b" -> ["components", "schemas", "a/b"]
    """
    if pointer.startswith("#"):
        pointer = pointer[1:]
    pointer = pointer.strip("/")
    if not pointer:
        return []
    return [segment.replace("~1", "/").replace("~0", "~") for segment in pointer.split("/")]


class SchemaGraph:
    """Read-only view over one or more loaded schema documents."""

    def __init__(
        self,
        documents: dict[str, Any],
        entry_point: str,
        component_root: str = "components",
        component_directories: list[str] | tuple[str, ...] = ("schemas",),
    ):
        """
        Initialize the graph.

        Args:
            documents: Mapping from document point to parsed document
            entry_point: Document point of the root document
            component_root: Directory holding component directories
            component_directories: Directories whose files are named components
        """
        self.documents = {normalize_point(point): document for point, document in documents.items()}
        self.entry_point = normalize_point(entry_point)
        self.component_root = component_root
        self.component_directories = tuple(component_directories)
        if self.entry_point not in self.documents:
            raise UnresolvedReferenceError(entry_point, format_location(entry_point, ""))

    @property
    def root_document(self) -> Any:
        """The entry document."""
        return self.documents[self.entry_point]

    def document(self, document_point: str) -> Any:
        """Get a loaded document by its point."""
        point = normalize_point(document_point)
        try:
            return self.documents[point]
        except KeyError:
            raise UnresolvedReferenceError(point, format_location(point, "")) from None

    def lookup(self, document_point: str, path_segments: list[str]) -> Any:
        """
        Return the schema node at a location.

        Args:
            document_point: Document to look in
            path_segments: Unescaped JSON pointer segments

        Returns:
            The raw node found at that location

        Raises:
            UnresolvedReferenceError: If the path does not resolve
        """
        node = self.document(document_point)
        for index, segment in enumerate(path_segments):
            if isinstance(node, dict) and segment in node:
                node = node[segment]
            elif isinstance(node, list) and segment.isdigit() and int(segment) < len(node):
                node = node[int(segment)]
            else:
                missing = path_segments[: index + 1]
                raise UnresolvedReferenceError(
                    format_location(document_point, path_segments),
                    format_location(document_point, missing),
                )
        return node

    def resolve_document_point(self, current_point: str, relative_reference: str) -> DocumentPoint:
        """
        Resolve a document reference relative to the current document.

        Args:
            current_point: Document the reference was read from
            relative_reference: Document part of a $ref (before "#")

        Returns:
            DocumentPoint with the absolute point and component identity
        """
        base_dir = posixpath.dirname(normalize_point(current_point))
        point = normalize_point(posixpath.join(base_dir, relative_reference))

        entry_dir = posixpath.dirname(self.entry_point)
        relative_to_entry = posixpath.relpath(point, entry_dir) if entry_dir else point
        parts = relative_to_entry.split("/")
        if len(parts) >= 3 and parts[0] == self.component_root and parts[1] in self.component_directories:
            name = posixpath.splitext("/".join(parts[2:]))[0]
            return DocumentPoint(point=point, component_name=name, component_directory=parts[1])
        return DocumentPoint(point=point)
