import pytest

from json_schema_inspector.session import InspectorSession


@pytest.fixture()
def company_schemas():
    return {
        "Person": {
            "title": "Person",
            "properties": {
                "firstName": {"title": "First Name", "type": "string"},
                "address": {"properties": {"street": {"type": "string"}}},
            },
        },
        "Company": {
            "description": "An employer",
            "properties": {"name": {"type": "string"}},
        },
    }


@pytest.fixture()
def notifications():
    return []


@pytest.fixture()
def session(company_schemas, notifications):
    def on_select(selected_items, render_data, breadcrumbs):
        notifications.append((selected_items, render_data, breadcrumbs))

    return InspectorSession(company_schemas, breadcrumbs_options={}, on_select=on_select)


def test_initial_render_data(session):
    column_data = session.get_render_data()["column_data"]
    assert len(column_data) == 1
    assert list(column_data[0].items) == ["Person", "Company"]


def test_default_selection(company_schemas):
    session = InspectorSession(company_schemas, default_selected_items=["Person", "address"])
    assert len(session.get_render_data()["column_data"]) == 3


def test_on_select_updates_selection_and_notifies(session, notifications):
    session.get_render_data()["column_data"][0].on_select(None, "Person")
    assert session.selected_items == ["Person"]
    selected_items, render_data, breadcrumbs = notifications[-1]
    assert selected_items == ["Person"]
    assert len(render_data["column_data"]) == 2
    assert breadcrumbs == ["Person"]


def test_selection_truncates_later_columns(session):
    session.select(0, "Person")
    session.select(1, "address")
    assert session.select(0, "Company") is True
    assert session.selected_items == ["Company"]


def test_clearing_selection(session, notifications):
    session.select(0, "Person")
    session.select(1, "address")
    assert session.select(1, None) is True
    assert session.selected_items == ["Person"]
    assert notifications[-1][2] == ["Person"]


@pytest.mark.parametrize("column_index,selected_item", [(1, None), (1, ""), (0, "Person")])
def test_no_op_selections(session, notifications, column_index, selected_item):
    session.select(0, "Person")
    notification_count = len(notifications)
    assert session.select(column_index, selected_item) is False
    assert session.selected_items == ["Person"]
    assert len(notifications) == notification_count


def test_render_data_is_memoized(session):
    session.select(0, "Person")
    assert session.get_render_data() is session.get_render_data()


def test_search_sets_filtered_items(company_schemas):
    session = InspectorSession(company_schemas, search_options={"fields": ["title", "description"]})
    column_data = session.set_search_filter("employ")["column_data"]
    assert column_data[0].filtered_items == ["Company"]

    column_data = session.set_search_filter("")["column_data"]
    assert column_data[0].filtered_items is None


def test_search_finds_nested_matches(company_schemas):
    session = InspectorSession(company_schemas, search_options={"fields": ["title"]}, default_selected_items=["Person"])
    column_data = session.set_search_filter("first")["column_data"]
    assert column_data[0].filtered_items == ["Person"]
    assert column_data[1].filtered_items == ["firstName"]


def test_search_by_property_name(company_schemas):
    session = InspectorSession(company_schemas, search_options={"byPropertyName": True}, default_selected_items=["Person"])
    column_data = session.set_search_filter("street")["column_data"]
    assert column_data[0].filtered_items == ["Person"]
    assert column_data[1].filtered_items == ["address"]


def test_filter_by_takes_precedence_over_fields(company_schemas):
    def filter_by(search_filter):
        return lambda raw_schema, _include=True: raw_schema.get("description") == search_filter

    session = InspectorSession(company_schemas, search_options={"fields": ["title"], "filterBy": filter_by})
    column_data = session.set_search_filter("An employer")["column_data"]
    assert column_data[0].filtered_items == ["Company"]


def test_search_without_options_is_inactive(session):
    column_data = session.set_search_filter("Person")["column_data"]
    assert column_data[0].filtered_items is None


def test_breadcrumbs_require_options(company_schemas):
    session = InspectorSession(company_schemas, default_selected_items=["Person", "firstName"])
    assert session.get_breadcrumbs() is None
    session = InspectorSession(
        company_schemas,
        breadcrumbs_options={"prefix": "$."},
        default_selected_items=["Person", "firstName"],
    )
    assert session.get_breadcrumbs() == ["$.Person", ".firstName"]


def test_details_of_trailing_selection(session):
    assert session.get_details() == []
    session.select(0, "Person")
    session.select(1, "firstName")
    assert session.get_details() == [
        {"label_text": "Title", "row_value": "First Name"},
        {"label_text": "Type", "row_value": "string"},
    ]


def test_search_with_nothing_to_search_in_is_inactive(company_schemas):
    session = InspectorSession(company_schemas, search_options={"fields": []})
    column_data = session.set_search_filter("Person")["column_data"]
    assert column_data[0].filtered_items is None
