"""
Tests for $ref classification, naming and cycle detection.
"""

from __future__ import annotations

import pytest

from openapi_schema_to_types.pipeline import (
    GenerationRun,
    ReferenceCycleError,
    SchemaGraph,
    UnresolvedReferenceError,
)
from openapi_schema_to_types.pipeline.analyzer import (
    ArrayType,
    DiagnosticSink,
    ObjectType,
    PrimitiveType,
    PropertySignature,
    ReferenceKind,
    TypeReference,
)

ENTRY = "openapi.json"

WIDGET = {
    "type": "object",
    "required": ["id"],
    "properties": {"id": {"type": "integer"}, "label": {"type": "string"}},
}

NEW_PET = {"type": "object", "required": ["name"], "properties": {"name": {"type": "string"}}}

SHARED = {
    "Address": {
        "type": "object",
        "properties": {"city": {"type": "string"}, "zip": {"$ref": "#/Zip"}},
    },
    "Zip": {"type": "string"},
}


def make_run(schemas: dict | None = None, documents: dict | None = None) -> GenerationRun:
    root = {"openapi": "3.0.3", "components": {"schemas": schemas or {}}}
    graph = SchemaGraph({ENTRY: root, **(documents or {})}, ENTRY)
    return GenerationRun(graph, sink=DiagnosticSink())


def convert(run: GenerationRun, ref: str, current_point: str = ENTRY):
    return run.convert(ENTRY, current_point, {"$ref": ref})


class TestClassify:
    """Classification of $ref strings"""

    def test_local(self):
        run = make_run()
        pointer = run.resolver.classify(ENTRY, "#/components/schemas/Widget")
        assert pointer.kind == ReferenceKind.LOCAL
        assert pointer.document_point == ENTRY
        assert pointer.path == ["components", "schemas", "Widget"]

    def test_remote_component(self):
        run = make_run(documents={"components/schemas/NewPet.json": NEW_PET})
        pointer = run.resolver.classify(ENTRY, "./components/schemas/NewPet.json")
        assert pointer.kind == ReferenceKind.REMOTE_COMPONENT
        assert pointer.document_point == "components/schemas/NewPet.json"
        assert pointer.component_name == "NewPet"

    def test_remote_inline(self):
        run = make_run(documents={"shared.json": SHARED})
        pointer = run.resolver.classify(ENTRY, "shared.json#/Address")
        assert pointer.kind == ReferenceKind.REMOTE_INLINE
        assert pointer.document_point == "shared.json"
        assert pointer.path == ["Address"]

    def test_fragment_into_component_document_is_inline(self):
        run = make_run(documents={"components/schemas/NewPet.json": NEW_PET})
        pointer = run.resolver.classify(ENTRY, "./components/schemas/NewPet.json#/properties/name")
        assert pointer.kind == ReferenceKind.REMOTE_INLINE


class TestResolve:
    """Resolution of reference paths"""

    def test_component_depth_is_nameable(self):
        run = make_run({"Widget": WIDGET})
        resolved = run.resolver.resolve(ENTRY, "#/components/schemas/Widget")
        assert resolved.depth == 2
        assert resolved.nameable is True
        assert resolved.identifier == "Widget"
        assert resolved.unresolved_paths == []
        assert resolved.canonical_path == "openapi.json#/components/schemas/Widget"

    def test_deeper_path_is_not_nameable(self):
        run = make_run({"Widget": WIDGET})
        resolved = run.resolver.resolve(ENTRY, "#/components/schemas/Widget/properties/id")
        assert resolved.depth == 4
        assert resolved.nameable is False
        assert resolved.identifier is None
        assert resolved.unresolved_paths == ["properties", "id"]
        assert len(run.registry) == 0

    def test_maybe_resolved_name_uses_registered_component(self):
        run = make_run({"Widget": WIDGET})
        run.resolver.resolve(ENTRY, "#/components/schemas/Widget")
        resolved = run.resolver.resolve(ENTRY, "#/components/schemas/Widget/properties/id")
        assert resolved.maybe_resolved_name == "Widget"

    def test_escaped_pointer_segments(self):
        run = make_run({"a/b": {"type": "string"}})
        resolved = run.resolver.resolve(ENTRY, "#/components/schemas/a~1b")
        assert resolved.path_array == ["components", "schemas", "a/b"]
        assert resolved.identifier == "a_b"


class TestNamedReferences:
    """References that become type references"""

    def test_same_reference_twice_is_named_once(self):
        run = make_run({"Widget": WIDGET})
        first = convert(run, "#/components/schemas/Widget")
        second = convert(run, "#/components/schemas/Widget")
        assert first == second == TypeReference(name="Widget")

        declarations = run.generate_named_declarations()
        assert [d.identifier for d in declarations] == ["Widget"]
        assert declarations[0].type_node == ObjectType(
            properties=[
                PropertySignature(name="id", type=PrimitiveType(name="integer"), optional=False),
                PropertySignature(name="label", type=PrimitiveType(name="string"), optional=True),
            ]
        )

    def test_generate_named_declarations_is_repeatable(self):
        run = make_run({"Widget": WIDGET})
        convert(run, "#/components/schemas/Widget")
        assert run.generate_named_declarations() == run.generate_named_declarations()

    def test_recursive_named_schema(self):
        node = {
            "type": "object",
            "properties": {"children": {"type": "array", "items": {"$ref": "#/components/schemas/Node"}}},
        }
        run = make_run({"Node": node})
        assert convert(run, "#/components/schemas/Node") == TypeReference(name="Node")

        declarations = run.generate_named_declarations()
        assert len(declarations) == 1
        children = declarations[0].type_node.properties[0]
        assert children.type == ArrayType(item=TypeReference(name="Node"))

    def test_declarations_follow_registration_order(self):
        schemas = {
            "A": {"type": "object", "properties": {"c": {"$ref": "#/components/schemas/C"}}},
            "B": {"type": "string"},
            "C": {"type": "integer"},
        }
        run = make_run(schemas)
        convert(run, "#/components/schemas/A")
        convert(run, "#/components/schemas/B")
        assert [d.identifier for d in run.generate_named_declarations()] == ["A", "B", "C"]

    def test_register_components(self):
        run = make_run({"Widget": WIDGET, "Gadget": {"type": "string", "description": "A gadget"}})
        assert run.register_components() == ["Widget", "Gadget"]
        declarations = run.generate_named_declarations()
        assert declarations[1].description == "A gadget"

    def test_missing_named_target_is_not_registered(self):
        run = make_run()
        with pytest.raises(UnresolvedReferenceError) as exc_info:
            convert(run, "#/components/schemas/Missing")
        assert exc_info.value.location == "openapi.json#/components/schemas/Missing"
        assert len(run.registry) == 0
        assert len(run.sink.errors) == 1

    def test_missing_remote_component_is_not_registered(self):
        run = make_run()
        with pytest.raises(UnresolvedReferenceError):
            convert(run, "./components/schemas/Nope.yml")
        assert len(run.registry) == 0

    def test_missing_target_does_not_affect_other_declarations(self):
        run = make_run({"Widget": WIDGET})
        with pytest.raises(UnresolvedReferenceError):
            convert(run, "#/components/schemas/Missing")
        assert convert(run, "#/components/schemas/Widget") == TypeReference(name="Widget")
        assert [d.identifier for d in run.generate_named_declarations()] == ["Widget"]


class TestInlineReferences:
    """References expanded in place"""

    def test_deeper_path_is_inlined(self):
        run = make_run({"Widget": WIDGET})
        assert convert(run, "#/components/schemas/Widget/properties/id") == PrimitiveType(name="integer")
        assert run.generate_named_declarations() == []

    def test_unresolved_inline_reference(self):
        run = make_run({"Widget": WIDGET})
        with pytest.raises(UnresolvedReferenceError) as exc_info:
            convert(run, "#/components/schemas/Widget/properties/missing")
        assert "missing" in str(exc_info.value)

    def test_self_referential_inline_reference_is_a_cycle(self):
        loop = {"type": "object", "properties": {"self": {"$ref": "#/components/schemas/Loop/properties/self"}}}
        run = make_run({"Loop": loop})
        with pytest.raises(ReferenceCycleError) as exc_info:
            convert(run, "#/components/schemas/Loop/properties/self")
        assert exc_info.value.canonical_path == "openapi.json#/components/schemas/Loop/properties/self"

    def test_mutual_inline_references_are_a_cycle(self):
        schemas = {
            "A": {"type": "object", "properties": {"x": {"$ref": "#/components/schemas/B/properties/y"}}},
            "B": {"type": "object", "properties": {"y": {"$ref": "#/components/schemas/A/properties/x"}}},
        }
        run = make_run(schemas)
        with pytest.raises(ReferenceCycleError) as exc_info:
            convert(run, "#/components/schemas/A/properties/x")
        assert len(exc_info.value.chain) == 2

    def test_in_flight_set_is_cleared_after_a_cycle(self):
        loop = {"type": "object", "properties": {"self": {"$ref": "#/components/schemas/Loop/properties/self"}}}
        run = make_run({"Loop": loop, "Widget": WIDGET})
        with pytest.raises(ReferenceCycleError):
            convert(run, "#/components/schemas/Loop/properties/self")
        assert run.resolver.in_flight == []
        assert convert(run, "#/components/schemas/Widget/properties/label") == PrimitiveType(name="string")

    def test_repeated_inline_reference_in_sibling_branches_is_not_a_cycle(self):
        run = make_run({"Widget": WIDGET})
        schema = {
            "type": "object",
            "properties": {
                "a": {"$ref": "#/components/schemas/Widget/properties/id"},
                "b": {"$ref": "#/components/schemas/Widget/properties/id"},
            },
        }
        result = run.convert(ENTRY, ENTRY, schema)
        assert [p.type for p in result.properties] == [PrimitiveType(name="integer")] * 2


class TestRemoteReferences:
    """References into other documents"""

    def test_remote_component_is_named(self):
        run = make_run(documents={"components/schemas/NewPet.json": NEW_PET})
        assert convert(run, "./components/schemas/NewPet.json") == TypeReference(name="NewPet")
        assert convert(run, "components/schemas/NewPet.json") == TypeReference(name="NewPet")

        declarations = run.generate_named_declarations()
        assert [d.identifier for d in declarations] == ["NewPet"]
        assert declarations[0].canonical_path == "components/schemas/NewPet.json#"
        assert declarations[0].type_node.properties[0].name == "name"

    def test_remote_component_name_collision_is_namespaced(self):
        run = make_run(
            {"NewPet": {"type": "string"}},
            documents={"components/schemas/NewPet.json": NEW_PET},
        )
        assert convert(run, "#/components/schemas/NewPet") == TypeReference(name="NewPet")
        assert convert(run, "./components/schemas/NewPet.json") == TypeReference(name="SchemasNewPet")

    def test_remote_inline_carries_current_point(self):
        run = make_run(documents={"shared.json": SHARED})
        result = convert(run, "shared.json#/Address")
        assert result == ObjectType(
            properties=[
                PropertySignature(name="city", type=PrimitiveType(name="string"), optional=True),
                PropertySignature(name="zip", type=PrimitiveType(name="string"), optional=True),
            ]
        )

    def test_relative_reference_from_nested_document(self):
        documents = {
            "paths/pet.json": {"schema": {"$ref": "../shared.json#/Zip"}},
            "shared.json": SHARED,
        }
        run = make_run(documents=documents)
        schema = run.graph.lookup("paths/pet.json", ["schema"])
        assert run.convert(ENTRY, "paths/pet.json", schema) == PrimitiveType(name="string")

    def test_named_reference_inside_remote_document(self):
        documents = {"shared.json": {"components": {"schemas": {"Money": {"type": "number"}}}}}
        run = make_run({"Money": {"type": "integer"}}, documents=documents)
        assert convert(run, "#/components/schemas/Money") == TypeReference(name="Money")
        result = run.convert(ENTRY, "shared.json", {"$ref": "#/components/schemas/Money"})
        assert result == TypeReference(name="SharedMoney")

        declarations = {d.identifier: d.type_node for d in run.generate_named_declarations()}
        assert declarations == {"Money": PrimitiveType(name="integer"), "SharedMoney": PrimitiveType(name="number")}

    def test_missing_document(self):
        run = make_run()
        with pytest.raises(UnresolvedReferenceError):
            convert(run, "missing.json#/Thing")
