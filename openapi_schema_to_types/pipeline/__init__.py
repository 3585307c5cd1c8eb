"""
Pipeline - OpenAPI schema to type node converter.

This module provides a multi-phase architecture for turning an OpenAPI /
JSON-Schema document graph into type nodes:

1. Phase 1 (Parser): Parse raw schemas into the Schema AST
2. Phase 2 (Analyzer): Resolve references, register named types and
   convert every schema into a type node tree
3. Phase 3 (Operations): Convert parameters, request and response bodies
   of every operation under "paths"
4. Phase 4 (Printer): Optionally print the type nodes as TypeScript
"""

from __future__ import annotations

from .config import ConverterConfig, GeneratorConfig, PrinterConfig
from .errors import (
    InvalidRequestPathError,
    ReferenceCycleError,
    SchemaConversionError,
    UnresolvedReferenceError,
    UnsupportedSchemaShapeError,
)
from .generator import GenerationRun
from .operations import Operation, UrlTemplatePart, collect_operations, generate_url_template
from .printer import TypeScriptPrinter
from .schema_graph import DocumentPoint, SchemaGraph

__all__ = [
    "GenerationRun",
    "SchemaGraph",
    "DocumentPoint",
    "ConverterConfig",
    "PrinterConfig",
    "GeneratorConfig",
    "SchemaConversionError",
    "UnsupportedSchemaShapeError",
    "InvalidRequestPathError",
    "ReferenceCycleError",
    "UnresolvedReferenceError",
    "Operation",
    "UrlTemplatePart",
    "collect_operations",
    "generate_url_template",
    "TypeScriptPrinter",
]
