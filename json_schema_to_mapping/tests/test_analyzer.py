"""
Tests for the schema analyzer: type model construction from schema nodes.
"""

from __future__ import annotations

import pytest

from json_schema_to_mapping.pipeline import (
    BrokenReferenceError,
    CyclicReferenceError,
    DegenerateTypeError,
    EmptyReferenceError,
    GeneratorConfig,
    PipelineGenerator,
    UnknownPrimitiveTypeError,
)
from json_schema_to_mapping.pipeline.analyzer import SchemaAnalyzer, primitive_type_name
from json_schema_to_mapping.pipeline.schema_ast import SchemaNode


def analyze(*schemas, **config):
    return PipelineGenerator(list(schemas), GeneratorConfig(**config)).analyze()


PERSON_SCHEMA = {
    "title": "Person",
    "description": "A person",
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "age": {"type": "integer"},
        "height": {"type": "number"},
        "active": {"type": "boolean"},
        "tags": {"type": "array", "items": {"type": "string"}},
    },
    "required": ["name"],
}


class TestObjects:
    def test_record_fields(self):
        model = analyze(PERSON_SCHEMA)

        assert list(model.structs) == ["Person"]
        assert model.aliases == {}
        person = model.structs["Person"]
        assert person.description == "A person"
        assert {f.name: f.type for f in person.fields.values()} == {
            "Active": "bool",
            "Age": "int",
            "Height": "float64",
            "Name": "string",
            "Tags": "[]string",
        }
        assert person.fields["Name"].json_name == "name"
        assert person.fields["Name"].required
        assert not person.fields["Age"].required
        assert person.generate_code

    def test_fields_sorted_by_key(self):
        model = analyze(PERSON_SCHEMA)
        assert list(model.structs["Person"].fields) == ["Active", "Age", "Height", "Name", "Tags"]

    def test_fields_in_declaration_order(self):
        model = analyze(PERSON_SCHEMA, sort_properties=False)
        assert list(model.structs["Person"].fields) == ["Name", "Age", "Height", "Active", "Tags"]

    def test_no_required_fields_means_no_generated_code(self):
        schema = {"title": "Plain", "type": "object", "properties": {"a": {"type": "string"}}}
        assert not analyze(schema).structs["Plain"].generate_code

    def test_missing_type_with_properties_is_object(self):
        model = analyze({"properties": {"a": {"type": "string"}}})
        assert model.structs["Root"].fields["A"].type == "string"

    def test_inline_object_named_after_property(self):
        schema = {
            "type": "object",
            "properties": {"home_address": {"type": "object", "properties": {"city": {"type": "string"}}}},
        }
        model = analyze(schema)
        assert model.structs["Root"].fields["HomeAddress"].type == "*HomeAddress"
        assert "HomeAddress" in model.structs

    def test_record_id_is_schema_pointer(self):
        schema = {"$id": "http://example.com/person.json", "definitions": {"address": {"type": "object"}}}
        model = analyze(schema)
        assert model.structs["Address"].id == "http://example.com/person.json#/definitions/address"

    def test_conventions(self):
        schema = {"title": "user", "type": "object", "properties": {"user_id": {"type": "string"}}}
        model = analyze(schema, conventions={"Id": "ID"})
        assert list(model.structs["User"].fields) == ["UserID"]

    def test_custom_string_formats_record_imports(self):
        schema = {
            "title": "Event",
            "type": "object",
            "properties": {
                "created": {"type": "string", "format": "date-time"},
                "id": {"type": "string", "format": "uuid"},
                "updated": {"type": "string", "format": "date-time"},
                "email": {"type": "string", "format": "email"},
            },
        }
        event = analyze(schema).structs["Event"]
        assert event.import_types == ["time", "github.com/google/uuid"]
        # the field type itself stays a plain string
        assert event.fields["Created"].type == "string"
        assert event.fields["Created"].format == "date-time"


class TestAdditionalProperties:
    def test_inline_object_collapses_to_map(self):
        model = analyze({"type": "object", "additionalProperties": {"type": "string"}})
        assert model.structs == {}
        assert model.aliases["Root"].type == "map[string]string"

    def test_inline_property_collapses_to_map(self):
        schema = {
            "type": "object",
            "properties": {"labels": {"type": "object", "additionalProperties": {"type": "string"}}},
        }
        model = analyze(schema)
        assert list(model.structs) == ["Root"]
        assert model.structs["Root"].fields["Labels"].type == "map[string]string"

    def test_definition_does_not_collapse(self):
        schema = {"definitions": {"counts": {"type": "object", "additionalProperties": {"type": "integer"}}}}
        model = analyze(schema)
        counts = model.structs["Counts"]
        field = counts.fields["AdditionalProperties"]
        assert field.type == "map[string]int"
        assert field.json_name == "-"
        assert counts.additional_type == "int"
        assert counts.generate_code

    def test_typed_with_properties(self):
        schema = {
            "title": "Mixed",
            "type": "object",
            "properties": {"a": {"type": "string"}},
            "additionalProperties": {"type": "number"},
        }
        mixed = analyze(schema).structs["Mixed"]
        assert list(mixed.fields) == ["A", "AdditionalProperties"]
        assert mixed.fields["AdditionalProperties"].type == "map[string]float64"
        assert mixed.additional_type == "float64"

    def test_true_captures_everything(self):
        schema = {"title": "Open", "type": "object", "properties": {"a": {"type": "string"}}, "additionalProperties": True}
        open_struct = analyze(schema).structs["Open"]
        assert open_struct.fields["AdditionalProperties"].type == "map[string]interface{}"
        assert open_struct.additional_type == "interface{}"
        assert open_struct.generate_code

    def test_false_forbids_extra_keys(self):
        schema = {"title": "Closed", "type": "object", "properties": {"a": {"type": "string"}}, "additionalProperties": False}
        closed = analyze(schema).structs["Closed"]
        assert list(closed.fields) == ["A"]
        assert closed.additional_type == "false"
        assert closed.generate_code

    def test_absent(self):
        schema = {"title": "Plain", "type": "object", "properties": {"a": {"type": "string"}}}
        assert analyze(schema).structs["Plain"].additional_type is None


class TestArrays:
    def test_integer_items_are_widened(self):
        model = analyze({"type": "array", "items": {"type": "integer"}})
        assert model.aliases["Root"].type == "[]int64"

    def test_scalar_integer_is_not_widened(self):
        schema = {"type": "object", "properties": {"n": {"type": "integer"}, "ns": {"type": "array", "items": {"type": "integer"}}}}
        fields = analyze(schema).structs["Root"].fields
        assert fields["N"].type == "int"
        assert fields["Ns"].type == "[]int64"

    def test_array_without_items(self):
        schema = {"type": "object", "properties": {"anything": {"type": "array"}}}
        assert analyze(schema).structs["Root"].fields["Anything"].type == "[]interface{}"

    def test_array_of_inline_objects(self):
        schema = {
            "type": "object",
            "properties": {"lines": {"type": "array", "items": {"type": "object", "properties": {"sku": {"type": "string"}}}}},
        }
        model = analyze(schema)
        assert model.structs["Root"].fields["Lines"].type == "[]LinesItems"
        assert "LinesItems" in model.structs

    def test_inline_arrays_are_not_aliased(self):
        schema = {"type": "object", "properties": {"tags": {"type": "array", "items": {"type": "string"}}}}
        assert analyze(schema).aliases == {}

    def test_missing_type_with_items_is_array(self):
        model = analyze({"items": {"type": "string"}})
        assert model.aliases["Root"].type == "[]string"


class TestUnions:
    def test_union_field_is_dynamic(self):
        schema = {"type": "object", "properties": {"foo": {"type": ["string", "integer"]}}}
        model = analyze(schema)
        assert model.structs["Root"].fields["Foo"].type == "interface{}"
        assert model.aliases["Foo_string"].type == "string"
        assert model.aliases["Foo_integer"].type == "int"

    def test_union_registers_object_variant(self):
        schema = {
            "type": "object",
            "properties": {"value": {"type": ["object", "null"], "properties": {"a": {"type": "string"}}}},
        }
        model = analyze(schema)
        assert model.structs["Root"].fields["Value"].type == "interface{}"
        assert "Value_object" in model.structs
        assert model.aliases["Value_null"].type == "nil"

    def test_single_element_type_list_is_not_a_union(self):
        schema = {"type": "object", "properties": {"foo": {"type": ["string"]}}}
        model = analyze(schema)
        assert model.structs["Root"].fields["Foo"].type == "string"
        assert model.aliases == {}

    def test_reference_to_union_is_dynamic(self):
        schema = {
            "definitions": {"scalar": {"type": ["string", "number"]}},
            "type": "object",
            "properties": {"a": {"$ref": "#/definitions/scalar"}},
        }
        assert analyze(schema).structs["Root"].fields["A"].type == "interface{}"


class TestReferences:
    def test_same_target_resolved_once(self, monkeypatch):
        calls = []
        original = SchemaAnalyzer.process_object

        def spy(self, name, schema):
            calls.append(name)
            return original(self, name, schema)

        monkeypatch.setattr(SchemaAnalyzer, "process_object", spy)
        schema = {
            "type": "object",
            "properties": {
                "home": {"$ref": "#/definitions/address"},
                "work": {"$ref": "#/$defs/address"},
            },
            "definitions": {"address": {"type": "object", "properties": {"city": {"type": "string"}}}},
        }
        model = analyze(schema)

        assert calls.count("Address") == 1
        fields = model.structs["Root"].fields
        assert fields["Home"].type == fields["Work"].type == "*Address"

    def test_forward_reference_between_definitions(self):
        schema = {
            "definitions": {
                "a": {"type": "object", "properties": {"b": {"$ref": "#/definitions/b"}}},
                "b": {"title": "Bee", "type": "object", "properties": {"x": {"type": "string"}}},
            }
        }
        model = analyze(schema)
        assert model.structs["A"].fields["B"].type == "*Bee"
        assert "B" not in model.structs

    def test_reference_into_sibling_array_items(self):
        schema = {
            "type": "object",
            "properties": {
                "a": {"$ref": "#/properties/list/items"},
                "list": {"type": "array", "items": {"type": "object", "properties": {"x": {"type": "string"}}}},
            },
        }
        model = analyze(schema)

        assert sorted(model.structs) == ["ListItem", "Root"]
        fields = model.structs["Root"].fields
        assert fields["A"].type == "*ListItem"
        assert fields["List"].type == "[]ListItem"

    def test_reference_into_sibling_property(self):
        schema = {
            "type": "object",
            "properties": {
                "copy": {"$ref": "#/properties/original"},
                "original": {"type": "object", "properties": {"x": {"type": "string"}}},
            },
        }
        model = analyze(schema)
        assert sorted(model.structs) == ["Original", "Root"]
        assert model.structs["Root"].fields["Copy"].type == "*Original"

    def test_self_reference(self):
        schema = {
            "title": "Node",
            "type": "object",
            "properties": {
                "value": {"type": "string"},
                "next": {"$ref": "#"},
                "children": {"type": "array", "items": {"$ref": "#"}},
            },
        }
        fields = analyze(schema).structs["Node"].fields
        assert fields["Next"].type == "*Node"
        assert fields["Children"].type == "[]Node"

    def test_definition_referencing_its_root(self):
        schema = {
            "title": "Tree",
            "type": "object",
            "properties": {"branch": {"$ref": "#/definitions/branch"}},
            "definitions": {"branch": {"type": "object", "properties": {"tree": {"$ref": "#"}}}},
        }
        model = analyze(schema)
        assert model.structs["Tree"].fields["Branch"].type == "*Branch"
        assert model.structs["Branch"].fields["Tree"].type == "*Tree"

    def test_indirect_cycle(self):
        schema = {
            "definitions": {
                "a": {"type": "object", "properties": {"b": {"$ref": "#/definitions/b"}}},
                "b": {"type": "object", "properties": {"a": {"$ref": "#/definitions/a"}}},
            }
        }
        model = analyze(schema)
        assert model.structs["A"].fields["B"].type == "*B"
        assert model.structs["B"].fields["A"].type == "*A"

    def test_array_cycle_is_rejected(self):
        schema = {"type": "array", "items": {"$ref": "#"}}
        with pytest.raises(CyclicReferenceError):
            analyze(schema)

    def test_cross_document_reference(self):
        person = {
            "$id": "http://example.com/person.json",
            "title": "Person",
            "type": "object",
            "properties": {"address": {"$ref": "address.json"}},
        }
        address = {
            "$id": "http://example.com/address.json",
            "title": "Address",
            "type": "object",
            "properties": {"city": {"type": "string"}},
        }
        model = analyze(person, address)
        assert model.structs["Person"].fields["Address"].type == "*Address"
        assert sorted(model.structs) == ["Address", "Person"]
        assert model.aliases == {}

    def test_broken_reference(self):
        schema = {"type": "object", "properties": {"a": {"$ref": "#/definitions/missing"}}}
        with pytest.raises(BrokenReferenceError) as exc_info:
            analyze(schema)
        message = str(exc_info.value)
        assert "#/definitions/missing" in message
        assert "#/properties/a" in message

    def test_empty_reference(self):
        root = SchemaNode()
        analyzer = SchemaAnalyzer([root])
        with pytest.raises(EmptyReferenceError):
            analyzer.process_reference(root)


class TestErrors:
    def test_unknown_primitive(self):
        schema = {"type": "object", "properties": {"a": {"type": "date"}}}
        with pytest.raises(UnknownPrimitiveTypeError) as exc_info:
            analyze(schema)
        assert "date" in str(exc_info.value)

    def test_object_without_name(self):
        with pytest.raises(DegenerateTypeError):
            analyze({"title": "!!!", "type": "object"})

    def test_array_without_element_type(self):
        with pytest.raises(DegenerateTypeError):
            primitive_type_name("array", "")

    @pytest.mark.parametrize(
        "schema_type, sub_type, expected",
        [
            ("boolean", "", "bool"),
            ("integer", "", "int"),
            ("number", "", "float64"),
            ("string", "", "string"),
            ("null", "", "nil"),
            ("array", "int", "[]int64"),
            ("array", "*Address", "[]Address"),
            ("object", "Address", "Address"),
        ],
    )
    def test_primitive_type_name(self, schema_type, sub_type, expected):
        assert primitive_type_name(schema_type, sub_type) == expected


class TestModel:
    def test_anonymous_records_across_documents(self):
        def doc(title):
            return {
                "title": title,
                "type": "object",
                "properties": {"a": {"type": "string"}},
                "additionalProperties": {"type": "object", "properties": {"x": {"type": "string"}}},
            }

        model = analyze(doc("A"), doc("B"))
        assert sorted(model.structs) == ["A", "Anonymous1", "Anonymous2", "B"]
        assert model.structs["A"].fields["AdditionalProperties"].type == "map[string]*Anonymous1"
        assert model.structs["B"].additional_type == "*Anonymous2"

    def test_determinism(self):
        schema = {
            "type": "object",
            "properties": {
                "z": {"type": "object", "additionalProperties": {"type": "object", "properties": {"q": {"type": "string"}}}},
                "a": {"type": ["string", "object"]},
                "m": {"type": "array", "items": {"type": "object"}},
            },
        }
        assert analyze(schema) == analyze(schema)

    def test_analyze_twice_on_one_generator(self):
        generator = PipelineGenerator([PERSON_SCHEMA])
        assert generator.analyze() == generator.analyze()

    def test_no_cross_registry_collisions(self):
        schema = {
            "definitions": {"ids": {"type": "array", "items": {"type": "integer"}}, "user": {"type": "object"}},
            "type": "object",
            "properties": {"u": {"$ref": "#/definitions/user"}},
        }
        model = analyze(schema)
        assert model.name_collisions() == set()

    def test_collision_is_logged(self, caplog):
        # a root array named like a definition record
        schema = {
            "title": "Item",
            "type": "array",
            "items": {"$ref": "#/definitions/item"},
            "definitions": {"item": {"type": "object", "properties": {"a": {"type": "string"}}}},
        }
        model = analyze(schema)
        assert model.name_collisions() == {"Item"}
        assert "collides" in caplog.text
