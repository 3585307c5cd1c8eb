"""
TypeScript printer for type nodes.

Renders type nodes as TypeScript type expressions and whole declaration
modules through Jinja2 templates.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path

import jinja2

from ...utils import escape_identifier, is_valid_property_name
from ..analyzer.type_nodes import (
    AnyType,
    ArrayType,
    IndexSignature,
    IntersectionType,
    LiteralUnionType,
    NamedDeclaration,
    NullType,
    ObjectType,
    PrimitiveType,
    PropertySignature,
    TypeNode,
    TypeReference,
    UnionType,
)
from ..config import PrinterConfig
from ..operations import Operation

# Type mapping from schema primitive names to TypeScript
TYPE_MAP: dict[str, str] = {
    "boolean": "boolean",
    "integer": "number",
    "number": "number",
    "string": "string",
}

# Status codes ("200", "2XX", "default") are used verbatim inside names
_INVALID_NAME_CHARS = re.compile(r"[^A-Za-z0-9_$]")


@dataclass
class RenderedDeclaration:
    """A declaration ready for the declaration template."""

    name: str
    body: str
    comment: str | None = None
    is_interface: bool = False


def format_comment(text: str, indent: str = "") -> str:
    """Format a description as a JSDoc comment."""
    lines = text.strip().replace("*/", "*\\/").splitlines()
    if len(lines) == 1:
        return f"{indent}/** {lines[0]} */"
    body = "\n".join(f"{indent} * {line}".rstrip() for line in lines)
    return f"{indent}/**\n{body}\n{indent} */"


def format_property_name(name: str) -> str:
    """Quote property names that are not valid identifiers."""
    if is_valid_property_name(name):
        return name
    return json.dumps(name)


class TypeScriptPrinter:
    """Prints type nodes as TypeScript."""

    # Template directory name
    TEMPLATE_LANG: str = "typescript"

    # File extension
    FILE_EXTENSION: str = "ts"

    def __init__(self, config: PrinterConfig | None = None):
        """
        Initialize the printer.

        Args:
            config: Printer configuration
        """
        self.config = config or PrinterConfig()
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
        )
        self.prefix_template = self.jinja_env.get_template(f"prefix.{self.FILE_EXTENSION}.jinja2")
        self.declaration_template = self.jinja_env.get_template(f"declaration.{self.FILE_EXTENSION}.jinja2")

    def print_type(self, node: TypeNode | None, level: int = 0) -> str:
        """
        Print a type node as a TypeScript type expression.

        Args:
            node: The type node (None prints as "undefined")
            level: Nesting level, for indenting object members

        Returns:
            TypeScript source for the type
        """
        if node is None:
            return "undefined"
        if isinstance(node, PrimitiveType):
            return TYPE_MAP.get(node.name, node.name)
        if isinstance(node, LiteralUnionType):
            return " | ".join(json.dumps(value) for value in node.values)
        if isinstance(node, ArrayType):
            item = self.print_type(node.item, level)
            if self._needs_parentheses(node.item):
                item = f"({item})"
            return f"{item}[]"
        if isinstance(node, ObjectType):
            return self._print_object(node, level)
        if isinstance(node, UnionType):
            return " | ".join(self.print_type(member, level) for member in node.members)
        if isinstance(node, IntersectionType):
            members = []
            for member in node.members:
                text = self.print_type(member, level)
                if isinstance(member, (UnionType, LiteralUnionType)) and self._needs_parentheses(member):
                    text = f"({text})"
                members.append(text)
            return " & ".join(members)
        if isinstance(node, TypeReference):
            return node.name
        if isinstance(node, NullType):
            return "null"
        if isinstance(node, AnyType):
            return "any"
        raise TypeError(f"Unknown type node {type(node).__name__}")

    def _needs_parentheses(self, node: TypeNode | None) -> bool:
        """Whether a node must be wrapped when used as an array item or intersection member."""
        if isinstance(node, (UnionType, IntersectionType)):
            return len(node.members) > 1
        if isinstance(node, LiteralUnionType):
            return len(node.values) > 1
        return False

    def _print_object(self, node: ObjectType, level: int) -> str:
        if node.is_empty:
            return "{}"
        indent = self.config.indent * (level + 1)
        lines = ["{"]
        for prop in node.properties:
            lines.extend(self._print_property(prop, level, indent))
        if node.index_signature is not None:
            lines.append(self._print_index_signature(node.index_signature, level, indent))
        lines.append(self.config.indent * level + "}")
        return "\n".join(lines)

    def _print_property(self, prop: PropertySignature, level: int, indent: str) -> list[str]:
        lines = []
        if prop.comment:
            lines.append(format_comment(prop.comment, indent))
        modifier = "readonly " if prop.read_only else ""
        optional = "?" if prop.optional else ""
        lines.append(f"{indent}{modifier}{format_property_name(prop.name)}{optional}: {self.print_type(prop.type, level + 1)};")
        return lines

    def _print_index_signature(self, index: IndexSignature, level: int, indent: str) -> str:
        return f"{indent}[{index.key_name}: string]: {self.print_type(index.type, level + 1)};"

    def render_declaration(self, declaration: NamedDeclaration) -> RenderedDeclaration:
        """Prepare a named declaration for the template."""
        node = declaration.type_node
        is_interface = self.config.use_interfaces and isinstance(node, ObjectType) and not node.is_empty
        return RenderedDeclaration(
            name=declaration.identifier,
            body=self.print_type(node),
            comment=format_comment(declaration.description) if declaration.description else None,
            is_interface=is_interface,
        )

    def render_operation(self, operation: Operation) -> list[RenderedDeclaration]:
        """Prepare the parameter, request body and response types of an operation."""
        base_name = escape_identifier(operation.operation_id)
        comment = format_comment(operation.summary) if operation.summary else None
        rendered = []
        if operation.parameters is not None:
            rendered.append(RenderedDeclaration(name=f"Parameter${base_name}", body=self.print_type(operation.parameters), comment=comment))
        if operation.request_bodies:
            rendered.append(
                RenderedDeclaration(
                    name=f"RequestBody${base_name}",
                    body=self._print_content_map(operation.request_bodies),
                )
            )
        for status, content in operation.responses.items():
            rendered.append(
                RenderedDeclaration(
                    name=f"Response${base_name}$Status${_INVALID_NAME_CHARS.sub('_', status)}",
                    body=self._print_content_map(content),
                )
            )
        return rendered

    def _print_content_map(self, content: dict[str, TypeNode]) -> str:
        """Print a media type -> type map as an object type."""
        properties = [PropertySignature(name=content_type, type=type_node) for content_type, type_node in content.items()]
        return self.print_type(ObjectType(properties=properties))

    def print_declarations(
        self,
        declarations: list[NamedDeclaration],
        operations: list[Operation] | None = None,
        generation_comment: str = "",
    ) -> str:
        """
        Print a module with every declaration.

        Args:
            declarations: Named declarations, in output order
            operations: Operations whose types should be printed too
            generation_comment: Comment to put at the top of the module

        Returns:
            The TypeScript module source
        """
        rendered = [self.render_declaration(declaration) for declaration in declarations]
        if operations and self.config.emit_operations:
            for operation in operations:
                rendered.extend(self.render_operation(operation))

        out = self.prefix_template.render(
            generation_comment=generation_comment if self.config.add_generation_comment else "",
        )
        for declaration in rendered:
            out += self.declaration_template.render(declaration=declaration)
        return out
