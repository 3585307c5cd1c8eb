"""OpenAPI Schema to Types

A Python package for converting OpenAPI / JSON-Schema document graphs
into structural type nodes, with reference resolution across documents,
cycle detection, and a TypeScript printer.
"""

__version__ = "0.1.0"

from .pipeline import (
    ConverterConfig,
    GenerationRun,
    GeneratorConfig,
    PrinterConfig,
    ReferenceCycleError,
    SchemaConversionError,
    SchemaGraph,
    TypeScriptPrinter,
    UnresolvedReferenceError,
    UnsupportedSchemaShapeError,
)

__all__ = [
    "GenerationRun",
    "SchemaGraph",
    "ConverterConfig",
    "PrinterConfig",
    "GeneratorConfig",
    "TypeScriptPrinter",
    "SchemaConversionError",
    "UnsupportedSchemaShapeError",
    "ReferenceCycleError",
    "UnresolvedReferenceError",
]
