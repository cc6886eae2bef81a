import json

import pytest

from json_schema_inspector.handlers import (
    build_column_views,
    breadcrumbs_handler,
    decode_selection,
    details_handler,
    load_schemas_handler,
    select_in_column_handler,
    selection_changed_handler,
)


def write_json(path, content):
    path.write_text(json.dumps(content), encoding="utf-8")
    return str(path)


def test_load_schemas(tmp_path, person_schemas):
    schema_file = write_json(tmp_path / "person.json", person_schemas["Person"])
    reference_file = write_json(tmp_path / "ref.json", {"$id": "https://example.org/ref.json"})
    schemas, reference_schemas, selected_items, message = load_schemas_handler([schema_file], [reference_file])
    assert schemas == {"person": person_schemas["Person"]}
    assert reference_schemas == [{"$id": "https://example.org/ref.json"}]
    assert selected_items == []
    assert message.startswith("Successfully loaded 1 schema(s)")


def test_load_schemas_without_files():
    assert load_schemas_handler(None, None) == (None, [], [], "No file uploaded.")


def test_load_invalid_json(tmp_path):
    broken_file = tmp_path / "broken.json"
    broken_file.write_text("{not json", encoding="utf-8")
    schemas, _, _, message = load_schemas_handler([str(broken_file)], None)
    assert schemas is None
    assert message.startswith("Error parsing JSON:")


def test_load_non_object_schema(tmp_path):
    schemas, _, _, message = load_schemas_handler([write_json(tmp_path / "list.json", [1, 2])], None)
    assert schemas is None
    assert message.startswith("Error parsing JSON:")


def test_load_unresolvable_reference(tmp_path):
    schema_file = write_json(tmp_path / "root.json", {"$ref": "https://example.org/missing.json"})
    schemas, _, _, message = load_schemas_handler([schema_file], None)
    assert schemas is None
    assert message == 'Error resolving schema: Cannot resolve $ref: "https://example.org/missing.json"'


def test_column_views_for_items(person_schemas):
    views, error_message = build_column_views(person_schemas, [], ["Person"])
    assert error_message == ""
    assert [view["kind"] for view in views] == ["items", "items"]
    assert views[0]["choices"] == [("Person", "Person")]
    assert views[0]["selected"] == "Person"
    assert views[0]["trailing"] is True
    assert views[1]["choices"] == [("firstName", "firstName")]
    assert views[1]["selected"] is None


def test_column_views_for_options(one_of_schemas):
    views, _ = build_column_views(one_of_schemas, [], ["Root", [1]])
    options_view = views[1]
    assert options_view["kind"] == "options"
    assert options_view["title"] == "one of"
    assert options_view["choices"] == [("Option 1", "[0]"), ("Option 2", "[1]")]
    assert options_view["selected"] == "[1]"


def test_column_views_with_search(one_of_schemas):
    views, _ = build_column_views(one_of_schemas, [], ["Root"], "B", ["title"])
    assert views[0]["choices"] == [("Root", "Root")]
    assert views[1]["choices"] == [("Option 2", "[1]")]


def test_column_views_report_unresolvable_reference():
    views, error_message = build_column_views({"Root": {"$ref": "#/definitions/Missing"}}, [], [])
    assert views == []
    assert error_message.startswith("Error resolving schema:")


def test_column_views_without_schemas():
    assert build_column_views(None, [], []) == ([], "")


@pytest.mark.parametrize(
    "value,kind,expected",
    [
        ("name", "items", "name"),
        ("[1, 0]", "options", [1, 0]),
        ("", "items", None),
        (None, "options", None),
    ],
)
def test_decode_selection(value, kind, expected):
    assert decode_selection(value, kind) == expected


def test_select_in_column(one_of_schemas):
    selected_items = select_in_column_handler(0, "items", one_of_schemas, [], [], "Root")
    assert selected_items == ["Root"]
    selected_items = select_in_column_handler(1, "options", one_of_schemas, [], selected_items, "[0]")
    assert selected_items == ["Root", [0]]
    assert select_in_column_handler(0, "items", one_of_schemas, [], selected_items, None) == []


def test_breadcrumbs_and_details(person_schemas):
    assert breadcrumbs_handler(person_schemas, [], ["Person", "firstName"]) == "Person.firstName"
    assert details_handler(person_schemas, [], ["Person", "firstName"]) == [["Type", "string"]]
    assert selection_changed_handler(None, [], []) == ("", [])


def test_details_values_are_shown_as_json():
    schemas = {"Root": {"type": ["string", "null"], "default": False, "minLength": 2, "enum": [{"a": 1}, None]}}
    assert dict(details_handler(schemas, [], ["Root"])) == {
        "Type": '["string", "null"]',
        "Possible Values": '[{"a": 1}, null]',
        "Default Value": "false",
        "Min Length": "2",
    }


def test_breadcrumbs_skip_options_columns(one_of_schemas):
    assert breadcrumbs_handler(one_of_schemas, [], ["Root", [0], "a"]) == "Root.a"
