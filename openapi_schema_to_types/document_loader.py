"""
Loads an OpenAPI document and every document it references.
"""

import json
import logging
import posixpath
from pathlib import Path
from typing import Any

import yaml

from .pipeline.config import ConverterConfig
from .pipeline.errors import UnresolvedReferenceError
from .pipeline.schema_graph import SchemaGraph, normalize_point

logger = logging.getLogger(__name__)


def load_document(path: Path) -> Any:
    """Load a JSON or YAML document."""
    with open(path, encoding="utf-8") as f:
        if path.suffix == ".json":
            return json.load(f)
        return yaml.safe_load(f)


def _iter_remote_refs(node: Any):
    """Yield the document part of every remote $ref in a document."""
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str) and not ref.startswith("#"):
            yield ref.partition("#")[0]
        for value in node.values():
            yield from _iter_remote_refs(value)
    elif isinstance(node, list):
        for value in node:
            yield from _iter_remote_refs(value)


def load_schema_graph(entry_path: str | Path, config: ConverterConfig | None = None) -> SchemaGraph:
    """
    Load the entry document and every document reachable through $ref.

    Args:
        entry_path: Path of the entry document
        config: Converter configuration (component directories)

    Returns:
        SchemaGraph keyed by paths relative to the entry document's directory
    """
    config = config or ConverterConfig()
    entry_path = Path(entry_path)
    base_dir = entry_path.parent
    entry_point = entry_path.name

    documents: dict[str, Any] = {}
    pending = [entry_point]
    while pending:
        point = pending.pop()
        if point in documents:
            continue
        path = base_dir / point
        if not path.exists():
            raise UnresolvedReferenceError(point)
        logger.debug("Loading %s", path)
        documents[point] = load_document(path)
        for relative in _iter_remote_refs(documents[point]):
            target = normalize_point(posixpath.join(posixpath.dirname(point), relative))
            if target not in documents:
                pending.append(target)

    return SchemaGraph(
        documents,
        entry_point,
        component_root=config.component_root,
        component_directories=config.component_directories,
    )
