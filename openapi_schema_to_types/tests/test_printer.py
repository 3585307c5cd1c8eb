"""
Tests for the TypeScript printer.
"""

from __future__ import annotations

import pytest

from openapi_schema_to_types.pipeline import Operation, PrinterConfig, TypeScriptPrinter
from openapi_schema_to_types.pipeline.analyzer import (
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
    TypeReference,
    UnionType,
)
from openapi_schema_to_types.pipeline.printer import format_comment, format_property_name

STRING = PrimitiveType(name="string")


@pytest.fixture
def printer():
    return TypeScriptPrinter(PrinterConfig(add_generation_comment=False))


class TestPrintType:
    """Type expressions"""

    @pytest.mark.parametrize(
        "node,expected",
        [
            (PrimitiveType(name="integer"), "number"),
            (PrimitiveType(name="boolean"), "boolean"),
            (AnyType(), "any"),
            (NullType(), "null"),
            (None, "undefined"),
            (TypeReference(name="Pet"), "Pet"),
            (LiteralUnionType(base="string", values=["a", "b"]), '"a" | "b"'),
            (LiteralUnionType(base="integer", values=[1, 2]), "1 | 2"),
            (UnionType(members=[STRING, NullType()]), "string | null"),
            (ArrayType(item=STRING), "string[]"),
            (ArrayType(item=UnionType(members=[STRING, NullType()])), "(string | null)[]"),
            (ArrayType(item=ArrayType(item=AnyType())), "any[][]"),
            (IntersectionType(members=[TypeReference(name="A"), UnionType(members=[TypeReference(name="B"), NullType()])]), "A & (B | null)"),
            (ObjectType(), "{}"),
        ],
    )
    def test_print_type(self, printer, node, expected):
        assert printer.print_type(node) == expected

    def test_object_members(self, printer):
        node = ObjectType(
            properties=[
                PropertySignature(name="id", type=PrimitiveType(name="integer"), read_only=True),
                PropertySignature(name="content-type", type=STRING, optional=True, comment="Media type"),
            ],
            index_signature=IndexSignature(type=STRING, key_name="name"),
        )
        assert printer.print_type(node) == (
            "{\n"
            "  readonly id: number;\n"
            "  /** Media type */\n"
            '  "content-type"?: string;\n'
            "  [name: string]: string;\n"
            "}"
        )

    def test_nested_objects_are_indented(self, printer):
        inner = ObjectType(properties=[PropertySignature(name="q", type=STRING)])
        node = ObjectType(properties=[PropertySignature(name="p", type=inner)])
        assert printer.print_type(node) == "{\n  p: {\n    q: string;\n  };\n}"

    def test_intersection_of_objects(self, printer):
        node = IntersectionType(
            members=[
                ObjectType(properties=[PropertySignature(name="a", type=STRING, optional=True)]),
                ObjectType(index_signature=IndexSignature(type=STRING)),
            ]
        )
        assert printer.print_type(node) == "{\n  a?: string;\n} & {\n  [key: string]: string;\n}"

    def test_custom_indent(self):
        printer = TypeScriptPrinter(PrinterConfig(indent="    "))
        node = ObjectType(properties=[PropertySignature(name="a", type=STRING)])
        assert printer.print_type(node) == "{\n    a: string;\n}"


class TestHelpers:
    """Comment and property name formatting"""

    def test_single_line_comment(self):
        assert format_comment("A pet") == "/** A pet */"

    def test_multi_line_comment(self):
        assert format_comment("A pet\nin the store", "  ") == "  /**\n   * A pet\n   * in the store\n   */"

    def test_comment_terminator_is_escaped(self):
        assert "*/ " not in format_comment("ends */ early")

    def test_property_names(self):
        assert format_property_name("petId") == "petId"
        assert format_property_name("$ref") == "$ref"
        assert format_property_name("X-Trace-Id") == '"X-Trace-Id"'
        assert format_property_name("2xx") == '"2xx"'


class TestDeclarations:
    """Whole modules"""

    def test_type_alias(self, printer):
        declarations = [NamedDeclaration(identifier="Id", type_node=STRING)]
        assert printer.print_declarations(declarations) == "export type Id = string;\n\n"

    def test_interface_with_description(self, printer):
        pet = ObjectType(properties=[PropertySignature(name="name", type=STRING)])
        declarations = [NamedDeclaration(identifier="Pet", type_node=pet, description="A pet")]
        assert printer.print_declarations(declarations) == "/** A pet */\nexport interface Pet {\n  name: string;\n}\n\n"

    def test_empty_object_is_a_type_alias(self, printer):
        declarations = [NamedDeclaration(identifier="Free", type_node=ObjectType())]
        assert printer.print_declarations(declarations) == "export type Free = {};\n\n"

    def test_use_interfaces_disabled(self):
        printer = TypeScriptPrinter(PrinterConfig(add_generation_comment=False, use_interfaces=False))
        pet = ObjectType(properties=[PropertySignature(name="name", type=STRING)])
        out = printer.print_declarations([NamedDeclaration(identifier="Pet", type_node=pet)])
        assert out.startswith("export type Pet = {")
        assert out.endswith("};\n\n")

    def test_generation_comment(self):
        printer = TypeScriptPrinter(PrinterConfig())
        out = printer.print_declarations([], generation_comment="Generated by openapi_schema_to_types")
        assert out == "//\n// Generated by openapi_schema_to_types\n//\n// Do not edit this file by hand.\n//\n\n"

    def test_generation_comment_disabled(self, printer):
        assert printer.print_declarations([], generation_comment="Generated by openapi_schema_to_types") == ""


class TestOperations:
    """Operation types"""

    @pytest.fixture
    def operation(self):
        return Operation(
            operation_id="listPets",
            method="get",
            request_uri="/pets",
            summary="List all pets",
            parameters=ObjectType(
                properties=[
                    PropertySignature(
                        name="query",
                        type=ObjectType(properties=[PropertySignature(name="limit", type=PrimitiveType(name="integer"), optional=True)]),
                        optional=True,
                    )
                ]
            ),
            request_bodies={"application/json": TypeReference(name="NewPet")},
            responses={
                "200": {"application/json": TypeReference(name="Pets")},
                "default": {"application/json": TypeReference(name="Error")},
            },
        )

    def test_render_operation(self, printer, operation):
        rendered = printer.render_operation(operation)
        assert [r.name for r in rendered] == [
            "Parameter$listPets",
            "RequestBody$listPets",
            "Response$listPets$Status$200",
            "Response$listPets$Status$default",
        ]
        assert rendered[0].comment == "/** List all pets */"
        assert rendered[1].body == '{\n  "application/json": NewPet;\n}'

    def test_operations_follow_declarations(self, printer, operation):
        declarations = [NamedDeclaration(identifier="Pets", type_node=ArrayType(item=TypeReference(name="Pet")))]
        out = printer.print_declarations(declarations, [operation])
        assert out.index("export type Pets = Pet[];") < out.index("export type Parameter$listPets = {")

    def test_operations_disabled(self, operation):
        printer = TypeScriptPrinter(PrinterConfig(add_generation_comment=False, emit_operations=False))
        assert printer.print_declarations([], [operation]) == ""
