import pytest

from json_schema_inspector.errors import UnresolvableReferenceError
from json_schema_inspector.paths import derive_base_uri
from json_schema_inspector.schema import JsonSchema
from json_schema_inspector.scope import RefScope


def test_find_empty_fragment_returns_root():
    schema = JsonSchema({"title": "Root"})
    assert schema.scope.find("#") is schema


def test_empty_schema_has_no_refs():
    scope = RefScope(JsonSchema({}))
    assert scope.internal_refs == {}
    assert scope.external_refs == {}


@pytest.mark.parametrize("defs_keyword", ["definitions", "$defs"])
def test_definitions_are_registered(defs_keyword):
    raw = {defs_keyword: {"A": {"type": "string"}, "B": {"type": "integer"}}}
    schema = JsonSchema(raw)
    for key, raw_definition in raw[defs_keyword].items():
        found = schema.scope.find(f"#/{defs_keyword}/{key}")
        assert found.schema is raw_definition
        assert found.scope is schema.scope
        # same node on every look-up
        assert schema.scope.find(f"#/{defs_keyword}/{key}") is found


def test_defs_take_precedence_over_definitions():
    schema = JsonSchema({"$defs": {"A": {"title": "new"}}, "definitions": {"A": {"title": "old"}}})
    assert schema.scope.find("#/$defs/A").schema == {"title": "new"}
    with pytest.raises(UnresolvableReferenceError):
        schema.scope.find("#/definitions/A")


def test_empty_definitions_are_skipped():
    schema = JsonSchema({"definitions": {"A": {}, "B": {"title": "B"}}})
    assert "#/definitions/A" not in schema.scope.internal_refs
    assert "#/definitions/B" in schema.scope.internal_refs


def test_definition_alias_and_anchor():
    schema = JsonSchema({
        "definitions": {
            "A": {"$id": "#alias", "title": "A"},
            "B": {"$anchor": "bee", "title": "B"},
        },
    })
    assert schema.scope.find("#alias").schema["title"] == "A"
    assert schema.scope.find("#bee").schema["title"] == "B"


def test_external_refs_require_id():
    schema = JsonSchema({"definitions": {"A": {"title": "A"}}})
    assert schema.scope.external_refs == {}


@pytest.mark.parametrize("id_keyword", ["$id", "id"])
def test_external_refs_from_main_id(id_keyword):
    main = JsonSchema({
        id_keyword: "https://base.org/main.json",
        "definitions": {"A": {"title": "A", "$anchor": "anc"}},
    })
    external = main.scope.external_refs
    assert external["https://base.org/main.json"] is main
    assert external["https://base.org/main.json#"] is main
    assert external["https://base.org/main.json#/definitions/A"].schema["title"] == "A"
    assert external["https://base.org/main.json#anc"].schema["title"] == "A"
    assert main.scope.base_uri == "https://base.org/"


def test_relative_id_has_no_base_uri():
    main = JsonSchema({"$id": "main.json"})
    assert main.scope.external_refs["main.json#"] is main
    assert main.scope.base_uri is None


def test_other_scope_offers_only_external_refs():
    main = JsonSchema({"$id": "https://base.org/main.json", "definitions": {"A": {"title": "A"}}})
    other = JsonSchema({"title": "Other"})
    other.scope.add_other_scope(main.scope)

    found = other.scope.find("https://base.org/main.json#/definitions/A")
    assert found is main.scope.find("#/definitions/A")
    assert other.scope.find("https://base.org/main.json") is main
    with pytest.raises(UnresolvableReferenceError, match='Cannot resolve \\$ref: "#/definitions/A"'):
        other.scope.find("#/definitions/A")


def test_own_refs_take_precedence_over_other_scopes():
    first = JsonSchema({"$id": "https://base.org/a.json", "definitions": {"X": {"title": "first"}}})
    second = JsonSchema({"$id": "https://base.org/a.json", "definitions": {"X": {"title": "second"}}})
    first.scope.add_other_scope(second.scope)
    assert first.scope.find("https://base.org/a.json#/definitions/X").schema["title"] == "first"


def test_relative_ref_is_qualified_with_base_uri():
    main = JsonSchema({"$id": "https://base.org/schemas/main.json"})
    target = JsonSchema({"$id": "https://base.org/schemas/other.json", "title": "Other"})
    main.scope.add_other_scope(target.scope)
    assert main.scope.find("other.json") is target


def test_error_message_contains_qualified_ref():
    main = JsonSchema({"$id": "https://base.org/schemas/main.json"})
    with pytest.raises(UnresolvableReferenceError) as exc_info:
        main.scope.find("missing.json")
    assert str(exc_info.value) == 'Cannot resolve $ref: "missing.json"/"https://base.org/schemas/missing.json"'
    assert exc_info.value.ref == "missing.json"
    assert exc_info.value.qualified_ref == "https://base.org/schemas/missing.json"


@pytest.mark.parametrize("ref", ["#/definitions/Missing", "https://elsewhere.org/x.json"])
def test_fragment_and_absolute_refs_are_not_qualified(ref):
    main = JsonSchema({"$id": "https://base.org/schemas/main.json"})
    with pytest.raises(UnresolvableReferenceError) as exc_info:
        main.scope.find(ref)
    assert str(exc_info.value) == f'Cannot resolve $ref: "{ref}"'


def test_unresolvable_reference_is_value_error():
    with pytest.raises(ValueError):
        JsonSchema({}).scope.find("#/definitions/A")


@pytest.mark.parametrize(
    "uri,expected",
    [
        ("https://base.org/schemas/main.json", "https://base.org/schemas/"),
        ("https://base.org/main.json?version=2", "https://base.org/"),
        ("https://base.org/main.json#/definitions/A", "https://base.org/"),
        ("https://base.org", "https://base.org/"),
    ],
)
def test_derive_base_uri(uri, expected):
    assert derive_base_uri(uri) == expected
