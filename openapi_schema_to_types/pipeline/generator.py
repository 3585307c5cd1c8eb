"""
Generation run: the public entry point of the conversion pipeline.

A GenerationRun owns the only mutable state of a conversion (the name
registry and the resolver's in-flight set), so separate runs in the same
process never interfere.
"""

from __future__ import annotations

import logging
from typing import Any

from .analyzer.converter import FormatTypeHook, TypeConverter
from .analyzer.diagnostics import Diagnostic, DiagnosticSink, LoggingDiagnosticSink
from .analyzer.name_registry import NameRegistry, RegistryEntry
from .analyzer.reference_resolver import ReferenceResolver
from .analyzer.type_nodes import NamedDeclaration, TypeNode
from .config import ConverterConfig
from .errors import SchemaConversionError, format_location
from .schema_graph import SchemaGraph

logger = logging.getLogger(__name__)


class GenerationRun:
    """Converts the schemas of one document graph into type nodes."""

    def __init__(
        self,
        graph: SchemaGraph,
        config: ConverterConfig | None = None,
        sink: DiagnosticSink | None = None,
        format_type_hook: FormatTypeHook | None = None,
    ):
        """
        Initialize the run.

        Args:
            graph: Loaded documents (read-only)
            config: Converter configuration
            sink: Receives diagnostics (defaults to a logging sink)
            format_type_hook: Optional hook overriding types by "format"
        """
        self.graph = graph
        self.config = config or ConverterConfig()
        self.sink = sink if sink is not None else LoggingDiagnosticSink()
        self.registry = NameRegistry(pascal_case_names=self.config.pascal_case_names)
        self.resolver = ReferenceResolver(graph, self.registry, self.config)
        self.converter = TypeConverter(self.resolver, self.sink, self.config, format_type_hook)
        self._declarations: dict[str, NamedDeclaration] = {}

    @property
    def entry_point(self) -> str:
        return self.graph.entry_point

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """Diagnostics reported so far."""
        return list(self.sink.records)

    def convert(self, entry_point: str, current_point: str, schema: Any, source_path: str = "#") -> TypeNode:
        """
        Convert an ad hoc schema (e.g. a request or response body).

        Args:
            entry_point: Entry document of the run (used in error reports)
            current_point: Document the schema was read from
            schema: Raw schema
            source_path: JSON pointer of the schema in its document

        Returns:
            The converted type node

        Raises:
            SchemaConversionError: On any fatal condition; it is also
                reported to the sink as an error diagnostic
        """
        try:
            return self.converter.convert(current_point, schema, source_path=source_path)
        except SchemaConversionError as e:
            self.sink.error(f"{entry_point}: {e}", schema)
            raise

    def register_components(self) -> list[str]:
        """
        Register every schema under the entry document's component directories.

        Returns:
            The identifiers of the registered components
        """
        root = self.config.component_root
        components = self.graph.root_document.get(root) or {}
        identifiers = []
        for directory in self.config.component_directories:
            for name in components.get(directory) or {}:
                ref = format_location("", [root, directory, name])
                resolved = self.resolver.resolve(self.entry_point, ref)
                identifiers.append(resolved.identifier)
        return identifiers

    def generate_named_declarations(self) -> list[NamedDeclaration]:
        """
        Convert every registered schema into a named declaration.

        Schemas registered while converting others are converted too.

        Returns:
            Declarations in first-registration order
        """
        index = 0
        entries = self.registry.entries()
        while index < len(entries):
            entry = entries[index]
            index += 1
            if entry.canonical_path not in self._declarations:
                self._declarations[entry.canonical_path] = self._declare(entry)
            entries = self.registry.entries()

        logger.debug("Generated %d named declarations", len(self._declarations))
        return [self._declarations[entry.canonical_path] for entry in self.registry.entries()]

    def _declare(self, entry: RegistryEntry) -> NamedDeclaration:
        """Convert the schema of a registry entry."""
        try:
            if entry.path_segments:
                schema = self.graph.lookup(entry.document_point, entry.path_segments)
            else:
                schema = self.graph.document(entry.document_point)
        except SchemaConversionError as e:
            self.sink.error(f"{self.entry_point}: {e}")
            raise

        type_node = self.convert(
            self.entry_point,
            entry.document_point,
            schema,
            source_path=format_location("", entry.path_segments),
        )
        description = schema.get("description") if isinstance(schema, dict) else None
        return NamedDeclaration(
            identifier=entry.identifier,
            type_node=type_node,
            canonical_path=entry.canonical_path,
            description=description,
        )
