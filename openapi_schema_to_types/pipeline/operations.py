"""
Operation collector for the "paths" section of an OpenAPI document.

Converts the parameters, request bodies and responses of every operation
into type nodes, and splits request paths into URL templates.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from ..utils import snake_to_pascal_case
from .analyzer.reference_resolver import ReferenceKind
from .analyzer.type_nodes import ObjectType, PropertySignature, TypeNode
from .errors import InvalidRequestPathError, format_location
from .generator import GenerationRun

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

# Parameter locations, in the order they appear in the parameter type
PARAMETER_LOCATIONS = ("header", "path", "query", "cookie")


@dataclass
class UrlTemplatePart:
    """A piece of a request URL: literal text or a path parameter."""

    kind: str = "string"  # "string" or "property"
    value: str = ""


@dataclass
class Operation:
    """An operation under "paths", with its types converted."""

    operation_id: str = ""
    method: str = ""
    request_uri: str = ""
    summary: str | None = None
    deprecated: bool = False

    # Parameters grouped by location ({"path": {...}, "query": {...}}), or None
    parameters: TypeNode | None = None
    path_parameter_names: list[str] = field(default_factory=list)

    # Content type -> body type
    request_bodies: dict[str, TypeNode] = field(default_factory=dict)

    # Status code -> content type -> body type
    responses: dict[str, dict[str, TypeNode]] = field(default_factory=dict)

    url_template: list[UrlTemplatePart] = field(default_factory=list)


def generate_url_template(request_uri: str, path_parameter_names: list[str]) -> list[UrlTemplatePart]:
    """
    Split a request path into literal and parameter parts.

    Examples:
        "/pets/{petId}/toys", ["petId"] ->
            [string "/pets/", property "petId", string "/toys"]

    Args:
        request_uri: Request path ("/pets/{petId}")
        path_parameter_names: Names of the declared path parameters

    Returns:
        Template parts in order; consecutive literal text is merged
    """
    placeholders = {f"{{{name}}}": name for name in path_parameter_names}
    if not placeholders:
        return [UrlTemplatePart("string", request_uri)]

    pattern = re.compile("(" + "|".join(re.escape(p) for p in placeholders) + ")")
    parts: list[UrlTemplatePart] = []
    for piece in pattern.split(request_uri):
        if not piece:
            continue
        if piece in placeholders:
            parts.append(UrlTemplatePart("property", placeholders[piece]))
        elif parts and parts[-1].kind == "string":
            parts[-1].value += piece
        else:
            parts.append(UrlTemplatePart("string", piece))
    return parts


def default_operation_id(method: str, request_uri: str) -> str:
    """Build an operation id for operations that do not declare one."""
    return f"{method}{snake_to_pascal_case(request_uri)}"


class OperationCollector:
    """Collects the operations of the entry document of a run."""

    def __init__(self, run: GenerationRun):
        self.run = run

    def collect(self) -> list[Operation]:
        """
        Collect every operation under "paths".

        Raises:
            InvalidRequestPathError: If a request path does not start with "/"
        """
        operations = []
        entry_point = self.run.entry_point
        paths = self.run.graph.root_document.get("paths") or {}
        for request_uri, path_item in paths.items():
            if not request_uri.startswith("/"):
                raise InvalidRequestPathError(request_uri, format_location(entry_point, ["paths", request_uri]))

            current_point, path_item = self._dereference(entry_point, path_item)
            operations.extend(self._collect_path_item(current_point, request_uri, path_item))

        logger.debug("Collected %d operations", len(operations))
        return operations

    def _dereference(self, current_point: str, obj: Any) -> tuple[str, Any]:
        """
        Follow $ref chains of non-schema objects (path items, parameters, ...).

        Returns:
            The document point the object was found in, and the object
        """
        if not (isinstance(obj, dict) and "$ref" in obj):
            return current_point, obj

        resolver = self.run.resolver
        pointer = resolver.classify(current_point, obj["$ref"])
        canonical_path = format_location(pointer.document_point, pointer.path)
        with resolver.expanding(canonical_path):
            if pointer.kind == ReferenceKind.REMOTE_COMPONENT or not pointer.path:
                target = self.run.graph.document(pointer.document_point)
            else:
                target = self.run.graph.lookup(pointer.document_point, pointer.path)
            return self._dereference(pointer.document_point, target)

    def _collect_path_item(self, current_point: str, request_uri: str, path_item: dict[str, Any]) -> list[Operation]:
        """Collect the operations of one path item."""
        operations = []
        shared_parameters = path_item.get("parameters") or []
        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if operation is None:
                continue
            operations.append(self._collect_operation(current_point, request_uri, method, operation, shared_parameters))
        return operations

    def _collect_operation(
        self,
        current_point: str,
        request_uri: str,
        method: str,
        operation: dict[str, Any],
        shared_parameters: list[Any],
    ) -> Operation:
        """Convert a single operation."""
        parameters = self._merge_parameters(current_point, shared_parameters, operation.get("parameters") or [])
        path_parameter_names = [p["name"] for _, p in parameters if p.get("in") == "path"]

        return Operation(
            operation_id=operation.get("operationId") or default_operation_id(method, request_uri),
            method=method,
            request_uri=request_uri,
            summary=operation.get("summary"),
            deprecated=bool(operation.get("deprecated", False)),
            parameters=self._convert_parameters(parameters),
            path_parameter_names=path_parameter_names,
            request_bodies=self._convert_request_body(current_point, operation.get("requestBody")),
            responses=self._convert_responses(current_point, operation.get("responses") or {}),
            url_template=generate_url_template(request_uri, path_parameter_names),
        )

    def _merge_parameters(self, current_point: str, shared: list[Any], own: list[Any]) -> list[tuple[str, dict[str, Any]]]:
        """Merge path-item and operation parameters; operation ones win."""
        merged: dict[tuple[str, str], tuple[str, dict[str, Any]]] = {}
        for parameter in [*shared, *own]:
            point, resolved = self._dereference(current_point, parameter)
            merged[(resolved.get("name", ""), resolved.get("in", ""))] = (point, resolved)
        return list(merged.values())

    def _convert_parameters(self, parameters: list[tuple[str, dict[str, Any]]]) -> TypeNode | None:
        """Group parameters by location into one object type."""
        if not parameters:
            return None

        grouped: dict[str, list[PropertySignature]] = {}
        for point, parameter in parameters:
            location = parameter.get("in", "query")
            schema = parameter.get("schema")
            if schema is None:
                schema = self._first_content_schema(parameter.get("content") or {})
            grouped.setdefault(location, []).append(
                PropertySignature(
                    name=parameter.get("name", ""),
                    type=self.run.convert(self.run.entry_point, point, schema if schema is not None else {}),
                    optional=not (location == "path" or parameter.get("required", False)),
                    comment=parameter.get("description"),
                )
            )

        properties = []
        for location in [*PARAMETER_LOCATIONS, *(loc for loc in grouped if loc not in PARAMETER_LOCATIONS)]:
            if location in grouped:
                members = grouped[location]
                properties.append(
                    PropertySignature(
                        name=location,
                        type=ObjectType(properties=members),
                        optional=all(member.optional for member in members),
                    )
                )
        return ObjectType(properties=properties)

    def _first_content_schema(self, content: dict[str, Any]) -> Any:
        for media_type in content.values():
            if isinstance(media_type, dict) and "schema" in media_type:
                return media_type["schema"]
        return None

    def _convert_content(self, current_point: str, content: dict[str, Any]) -> dict[str, TypeNode]:
        """Convert a content map (media type -> schema)."""
        converted = {}
        for content_type, media_type in content.items():
            if not isinstance(media_type, dict) or "schema" not in media_type:
                continue
            converted[content_type] = self.run.convert(self.run.entry_point, current_point, media_type["schema"])
        return converted

    def _convert_request_body(self, current_point: str, request_body: Any) -> dict[str, TypeNode]:
        if request_body is None:
            return {}
        point, request_body = self._dereference(current_point, request_body)
        return self._convert_content(point, request_body.get("content") or {})

    def _convert_responses(self, current_point: str, responses: dict[str, Any]) -> dict[str, dict[str, TypeNode]]:
        converted = {}
        for status, response in responses.items():
            point, response = self._dereference(current_point, response)
            content = self._convert_content(point, response.get("content") or {})
            if content:
                converted[str(status)] = content
        return converted


def collect_operations(run: GenerationRun) -> list[Operation]:
    """Collect every operation of the run's entry document."""
    return OperationCollector(run).collect()
