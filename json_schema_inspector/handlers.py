from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from .breadcrumbs import breadcrumbs_text
from .columns import RenderItemsColumn
from .config import default_option_name_for_index
from .errors import SchemaInspectorError
from .groups import RenderOptions
from .io_utils import load_reference_files, load_schema_files
from .paths import get_index_permutations_for_options
from .session import InspectorSession

logger = logging.getLogger(__name__)

ITEMS_COLUMN = 'items'
OPTIONS_COLUMN = 'options'
BREADCRUMBS_OPTIONS = {'prefix': '', 'separator': '.'}


def load_schemas_handler(schema_files, reference_files):
    """Read the uploaded schemas. Returns (schemas, reference_schemas, selected_items, status message)."""
    if not schema_files:
        return None, [], [], "No file uploaded."
    try:
        schemas = load_schema_files(schema_files)
        reference_schemas = load_reference_files(reference_files)
    except (ValueError, SchemaInspectorError) as e:
        return None, [], [], f"Error parsing JSON: {str(e)}"
    try:
        # resolve all root $refs once, so broken references are reported right away
        create_session(schemas, reference_schemas).get_render_data()
    except SchemaInspectorError as e:
        return None, [], [], f"Error resolving schema: {str(e)}"
    return schemas, reference_schemas, [], f"Successfully loaded {len(schemas)} schema(s) and {len(reference_schemas)} reference schema(s)."


def create_session(
    schemas: Dict[str, Any],
    reference_schemas: Optional[List[Any]] = None,
    selected_items: Optional[List[Any]] = None,
    search_fields: Optional[List[str]] = None,
    by_property_name: bool = False,
) -> InspectorSession:
    return InspectorSession(
        schemas,
        reference_schemas=reference_schemas,
        search_options={'fields': list(search_fields or []), 'by_property_name': bool(by_property_name)},
        breadcrumbs_options=BREADCRUMBS_OPTIONS,
        default_selected_items=selected_items,
    )


def encode_option_path(option_indexes: List[int]) -> str:
    return json.dumps(list(option_indexes))


def decode_selection(value: Optional[str], kind: str):
    if value is None or value == '':
        return None
    if kind == OPTIONS_COLUMN:
        return json.loads(value)
    return value


def _option_label(options: RenderOptions, option_indexes: List[int]) -> str:
    # the innermost naming function along the path wins
    name_for_index = options.option_name_for_index
    part = options
    for index in option_indexes[:-1]:
        part = part.options[index]
        if part.option_name_for_index is not None:
            name_for_index = part.option_name_for_index
    label = name_for_index(list(option_indexes)) if name_for_index is not None else None
    return label or default_option_name_for_index(list(option_indexes))


def _describe_column(column, index: int) -> Dict[str, Any]:
    if isinstance(column, RenderItemsColumn):
        names = list(column.items)
        if column.filtered_items is not None:
            names = [name for name in names if name in column.filtered_items or name == column.selected_item]
        return {
            'index': index,
            'kind': ITEMS_COLUMN,
            'title': None,
            'choices': [(name, name) for name in names],
            'selected': column.selected_item,
            'trailing': column.trailing_selection,
        }
    paths = get_index_permutations_for_options(column.options)
    if column.filtered_items is not None:
        paths = [path for path in paths if path in column.filtered_items or path == column.selected_item]
    return {
        'index': index,
        'kind': OPTIONS_COLUMN,
        'title': column.options.group_title,
        'choices': [(_option_label(column.options, path), encode_option_path(path)) for path in paths],
        'selected': encode_option_path(column.selected_item) if column.selected_item is not None else None,
        'trailing': column.trailing_selection,
    }


def build_column_views(
    schemas: Optional[Dict[str, Any]],
    reference_schemas: Optional[List[Any]],
    selected_items: Optional[List[Any]],
    search_filter: Optional[str] = None,
    search_fields: Optional[List[str]] = None,
    by_property_name: bool = False,
) -> Tuple[List[Dict[str, Any]], str]:
    """Describe every column for display. Returns (column views, error message)."""
    if not schemas:
        return [], ""
    session = create_session(schemas, reference_schemas, selected_items, search_fields, by_property_name)
    try:
        render_data = session.set_search_filter(search_filter)
    except SchemaInspectorError as e:
        logger.warning("Failed to derive columns: %s", e)
        return [], f"Error resolving schema: {str(e)}"
    return [_describe_column(column, index) for index, column in enumerate(render_data['column_data'])], ""


def select_in_column_handler(column_index: int, kind: str, schemas, reference_schemas, selected_items, value):
    """Apply a selection made in one column. Returns the new list of selected items."""
    if not schemas:
        return []
    session = create_session(schemas, reference_schemas, selected_items)
    session.select(column_index, decode_selection(value, kind))
    return session.selected_items


def breadcrumbs_handler(schemas, reference_schemas, selected_items) -> str:
    if not schemas:
        return ""
    try:
        session = create_session(schemas, reference_schemas, selected_items)
        return breadcrumbs_text(session.get_render_data()['column_data'], session.breadcrumbs_options)
    except SchemaInspectorError:
        return ""


def _format_row_value(row_value: Any) -> str:
    # shown as JSON, except for plain text
    if isinstance(row_value, str):
        return row_value
    return json.dumps(row_value)


def details_handler(schemas, reference_schemas, selected_items) -> List[List[Any]]:
    """Rows of (label, value) describing the currently open schema."""
    if not schemas:
        return []
    try:
        form_fields = create_session(schemas, reference_schemas, selected_items).get_details()
    except SchemaInspectorError:
        return []
    return [[field['label_text'], _format_row_value(field['row_value'])] for field in form_fields]


def selection_changed_handler(schemas, reference_schemas, selected_items):
    return (
        breadcrumbs_handler(schemas, reference_schemas, selected_items),
        details_handler(schemas, reference_schemas, selected_items),
    )
