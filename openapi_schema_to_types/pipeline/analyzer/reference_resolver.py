"""
Reference resolver for $ref resolution.

Classifies $ref strings, registers nameable targets with the name
registry and guards inline expansions against reference cycles.
"""

from __future__ import annotations

import posixpath
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..config import ConverterConfig
from ..errors import ReferenceCycleError, format_location
from ..schema_graph import SchemaGraph, normalize_point, split_pointer
from .name_registry import NameRegistry


class ReferenceKind(str, Enum):
    """Classification of a $ref."""

    LOCAL = "local"  # "#/components/schemas/Pet"
    REMOTE_COMPONENT = "remote-component"  # "./components/schemas/Pet.yml"
    REMOTE_INLINE = "remote-inline"  # "./shared.yml#/Pet"


@dataclass
class ReferencePointer:
    """A raw $ref plus the document point it was read from, classified."""

    ref: str = ""
    current_point: str = ""
    kind: ReferenceKind = ReferenceKind.LOCAL
    document_point: str = ""  # Document the pointer resolves into
    path: list[str] = field(default_factory=list)  # Fragment segments
    component_name: str | None = None  # For remote components
    component_directory: str | None = None


@dataclass
class ResolvedReference:
    """A resolved $ref."""

    name: str = ""  # Canonical (display) name
    maybe_resolved_name: str = ""  # Identifier if already registered, else escaped leaf name
    depth: int = 0  # Segments below the components root
    path_array: list[str] = field(default_factory=list)
    unresolved_paths: list[str] = field(default_factory=list)  # Segments below the component
    kind: ReferenceKind = ReferenceKind.LOCAL
    document_point: str = ""
    canonical_path: str = ""
    nameable: bool = False
    identifier: str | None = None  # Registered identifier (nameable only)


class ReferenceResolver:
    """Resolves $ref strings into named types or inline expansions."""

    def __init__(self, graph: SchemaGraph, registry: NameRegistry, config: ConverterConfig):
        """
        Initialize the resolver.

        Args:
            graph: Read-only view over the loaded documents
            registry: Name registry shared by the whole run
            config: Converter configuration
        """
        self.graph = graph
        self.registry = registry
        self.config = config
        # Canonical paths being expanded inline on the active call stack
        self._in_flight: list[str] = []

    def classify(self, current_point: str, ref: str) -> ReferencePointer:
        """
        Classify a $ref read from a document.

        Args:
            current_point: Document the $ref was read from
            ref: Raw $ref string

        Returns:
            ReferencePointer with kind and target location
        """
        current_point = normalize_point(current_point)
        if ref.startswith("#"):
            return ReferencePointer(
                ref=ref,
                current_point=current_point,
                kind=ReferenceKind.LOCAL,
                document_point=current_point,
                path=split_pointer(ref),
            )

        document_part, _, fragment = ref.partition("#")
        target = self.graph.resolve_document_point(current_point, document_part)
        path = split_pointer(fragment)
        if target.is_component and not path:
            return ReferencePointer(
                ref=ref,
                current_point=current_point,
                kind=ReferenceKind.REMOTE_COMPONENT,
                document_point=target.point,
                path=path,
                component_name=target.component_name,
                component_directory=target.component_directory,
            )
        return ReferencePointer(
            ref=ref,
            current_point=current_point,
            kind=ReferenceKind.REMOTE_INLINE,
            document_point=target.point,
            path=path,
        )

    def resolve(self, current_point: str, ref_path: str) -> ResolvedReference:
        """
        Resolve a $ref, registering it when it names a component.

        Args:
            current_point: Document the $ref was read from
            ref_path: Raw $ref string

        Returns:
            ResolvedReference describing the target

        Raises:
            UnresolvedReferenceError: If a nameable target does not exist
        """
        pointer = self.classify(current_point, ref_path)
        if pointer.kind == ReferenceKind.REMOTE_COMPONENT:
            return self._resolve_remote_component(pointer)
        return self._resolve_path(pointer)

    def _resolve_path(self, pointer: ReferencePointer) -> ResolvedReference:
        """Resolve a pointer to a location inside a document."""
        segments = pointer.path
        root = self.config.component_root
        under_root = bool(segments) and segments[0] == root
        component_segments = segments[1:] if under_root else segments
        depth = len(component_segments)
        prefix_length = (1 if under_root else 0) + self.config.component_depth

        canonical_path = format_location(pointer.document_point, segments)
        nameable = pointer.kind == ReferenceKind.LOCAL and depth == self.config.component_depth
        leaf = segments[prefix_length - 1] if 0 < prefix_length <= len(segments) else (segments[-1] if segments else "")

        resolved = ResolvedReference(
            name=self.registry.escape(leaf) if leaf else "",
            depth=depth,
            path_array=list(segments),
            unresolved_paths=segments[prefix_length:],
            kind=pointer.kind,
            document_point=pointer.document_point,
            canonical_path=canonical_path,
            nameable=nameable,
        )
        if nameable:
            # A missing target must fail before it is registered
            self.graph.lookup(pointer.document_point, segments)
            resolved.identifier = self.registry.ensure_named(
                canonical_path,
                leaf,
                namespace=self._namespace_for(pointer.document_point),
                document_point=pointer.document_point,
                path_segments=segments,
            )
            resolved.name = resolved.identifier

        component_path = format_location(pointer.document_point, segments[:prefix_length])
        resolved.maybe_resolved_name = self.registry.name_for(component_path) or resolved.name
        return resolved

    def _resolve_remote_component(self, pointer: ReferencePointer) -> ResolvedReference:
        """Resolve a reference to a document in a component directory."""
        component_name = pointer.component_name or ""
        namespace, leaf = posixpath.split(component_name)
        directory = pointer.component_directory or ""

        canonical_path = format_location(pointer.document_point, [])
        self.graph.document(pointer.document_point)
        identifier = self.registry.ensure_named(
            canonical_path,
            leaf,
            namespace=namespace or directory,
            document_point=pointer.document_point,
            path_segments=[],
        )
        path_array = [self.config.component_root, directory, *component_name.split("/")]
        return ResolvedReference(
            name=identifier,
            maybe_resolved_name=identifier,
            depth=len(path_array) - 1,
            path_array=path_array,
            unresolved_paths=[],
            kind=pointer.kind,
            document_point=pointer.document_point,
            canonical_path=canonical_path,
            nameable=True,
            identifier=identifier,
        )

    def _namespace_for(self, document_point: str) -> str:
        """Namespace used to qualify names from non-entry documents."""
        if normalize_point(document_point) == self.graph.entry_point:
            return ""
        return posixpath.splitext(posixpath.basename(document_point))[0]

    def lookup(self, resolved: ResolvedReference) -> Any:
        """Look up the raw schema a resolved reference points at."""
        if resolved.kind == ReferenceKind.REMOTE_COMPONENT:
            return self.graph.document(resolved.document_point)
        return self.graph.lookup(resolved.document_point, resolved.path_array)

    @contextmanager
    def expanding(self, canonical_path: str) -> Iterator[None]:
        """
        Mark a canonical path as being expanded inline.

        Raises:
            ReferenceCycleError: If the path is already being expanded
        """
        if canonical_path in self._in_flight:
            raise ReferenceCycleError(canonical_path, self._in_flight)
        self._in_flight.append(canonical_path)
        try:
            yield
        finally:
            self._in_flight.pop()

    @property
    def in_flight(self) -> list[str]:
        """Canonical paths currently being expanded (outermost first)."""
        return list(self._in_flight)
