import pytest

from json_schema_inspector.columns import create_render_data_builder


# --- Schema fixtures ----------------------------------------------------------
@pytest.fixture()
def person_schemas():
    return {
        "Person": {
            "properties": {
                "firstName": {"type": "string"},
            },
        },
    }


@pytest.fixture()
def one_of_schemas():
    return {
        "Root": {
            "oneOf": [
                {"properties": {"a": {"title": "A"}}},
                {"properties": {"b": {"title": "B"}}},
            ],
        },
    }


@pytest.fixture()
def nested_options_schema():
    """Options hierarchy: [0], [1, 0], [1, 1]."""
    return {
        "oneOf": [
            {"title": "A"},
            {
                "title": "B",
                "oneOf": [{"title": "B1"}, {"title": "B2"}],
            },
        ],
    }


@pytest.fixture()
def circular_schema():
    return {
        "definitions": {
            "A": {"title": "A", "properties": {"b": {"$ref": "#/definitions/B"}}},
            "B": {"title": "B", "properties": {"a": {"$ref": "#/definitions/A"}}},
        },
        "$ref": "#/definitions/A",
    }


# --- Column builder fixtures --------------------------------------------------
@pytest.fixture()
def selections():
    """Records (column_index, selected_item) for every invoked on_select callback."""
    return []


@pytest.fixture()
def build_render_data(selections):
    def on_select_in_column(column_index):
        def on_select(_event, selected_item):
            selections.append((column_index, selected_item))

        return on_select

    return create_render_data_builder(on_select_in_column)
