from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional

from .accessors import get_field_value_from_schema_group
from .columns import RenderColumn, RenderItemsColumn
from .groups import JsonSchemaGroup
from .paths import create_option_target
from .schema_utils import get_required_property_names
from .utils import common_values, is_defined, list_values, maximum_value, minimum_value


def _contains_true_or_reduce(all_values: Any, reduce_non_booleans: Callable[[Any, Any], Any]) -> Any:
    # "exclusiveMinimum"/"exclusiveMaximum" may be booleans (draft 4) or numbers (draft 6)
    if isinstance(all_values, list):
        if any(value is True for value in all_values):
            return True
        result = None
        for value in all_values:
            if not isinstance(value, bool):
                result = reduce_non_booleans(result, value)
        return result
    return all_values


def check_if_is_required(selection_column_index: int, column_data: List[RenderColumn]) -> bool:
    """Whether the property selected in the given column is listed as "required" by its parent."""
    if selection_column_index < 1:
        return False
    selected_item = column_data[selection_column_index].selected_item
    if not isinstance(selected_item, str):
        # an option is required if the property it belongs to is
        return check_if_is_required(selection_column_index - 1, column_data)
    parent_column = column_data[selection_column_index - 1]
    if isinstance(parent_column, RenderItemsColumn):
        parent_group = parent_column.items[parent_column.selected_item]
        option_target = None
    else:
        parent_group = parent_column.context_group
        option_target = create_option_target(parent_column.selected_item)
    return parent_group.some_entry(
        lambda schema, _is_exact: selected_item in get_required_property_names(schema.schema),
        option_target,
    )


def _describe_bound(value: Any, exclusive: Any) -> Optional[str]:
    if is_defined(value):
        # draft 4: boolean flag next to the inclusive bound
        return f"{value} ({'exclusive' if exclusive else 'inclusive'})"
    if is_defined(exclusive):
        # draft 6: numeric bound on its own
        return f"{exclusive} (exclusive)"
    return None


def collect_form_fields(
    item_schema_group: JsonSchemaGroup,
    column_data: List[RenderColumn],
    selection_column_index: int,
) -> List[Dict[str, Any]]:
    """Build the labelled values to show for the selected entry.

    Returns a list of `{'label_text': ..., 'row_value': ...}`, omitting undefined values.
    """
    form_fields: List[Dict[str, Any]] = []

    def add_form_field(label_text: str, row_value: Any = None) -> None:
        if is_defined(row_value):
            form_fields.append({'label_text': label_text, 'row_value': row_value})

    selected_item = column_data[selection_column_index].selected_item
    option_indexes = None if isinstance(selected_item, str) else selected_item

    def get_value(field_name: str, merge_values=list_values):
        return get_field_value_from_schema_group(
            item_schema_group, field_name, merge_values, option_indexes=option_indexes
        )

    add_form_field('Title', get_value('title'))
    add_form_field('Description', get_value('description'))
    add_form_field('Required', 'Yes' if check_if_is_required(selection_column_index, column_data) else None)
    add_form_field('Type', get_value('type', common_values))

    enum_values = common_values(get_value('const', common_values), get_value('enum', common_values))
    if is_defined(enum_values):
        if not isinstance(enum_values, list):
            add_form_field('Constant Value', enum_values)
        elif len(enum_values) == 1:
            add_form_field('Constant Value', enum_values[0])
        else:
            add_form_field('Possible Values', enum_values)

    # the highest minimum and the lowest maximum apply
    add_form_field('Min Value', _describe_bound(
        get_value('minimum', maximum_value),
        _contains_true_or_reduce(get_value('exclusiveMinimum'), maximum_value),
    ))
    add_form_field('Max Value', _describe_bound(
        get_value('maximum', minimum_value),
        _contains_true_or_reduce(get_value('exclusiveMaximum'), minimum_value),
    ))

    default_value = get_value('default')
    add_form_field(
        'Default Value',
        json.dumps(default_value) if isinstance(default_value, (dict, list)) else default_value,
    )
    examples = get_value('examples')
    if isinstance(examples, list) and not examples:
        examples = None
    if isinstance(examples, list) and isinstance(examples[0], (dict, list)):
        examples = json.dumps(examples)
    add_form_field('Example(s)', examples)
    add_form_field('Value Pattern', get_value('pattern'))
    add_form_field('Value Format', get_value('format', common_values))
    add_form_field('Min Length', get_value('minLength', maximum_value))
    add_form_field('Max Length', get_value('maxLength', minimum_value))
    add_form_field('Min Items', get_value('minItems', maximum_value))
    add_form_field('Max Items', get_value('maxItems', minimum_value))
    unique_items = get_value('uniqueItems')
    is_unique = unique_items is True or (isinstance(unique_items, list) and any(value is True for value in unique_items))
    add_form_field('Items Unique', 'Yes' if is_unique else None)
    return form_fields


def get_trailing_selection(column_data: List[RenderColumn]):
    """Return `(schema_group, column_index)` of the trailing selection, or `(None, None)`."""
    for index, column in enumerate(column_data):
        if not column.trailing_selection:
            continue
        if isinstance(column, RenderItemsColumn):
            return column.items[column.selected_item], index
        return column.context_group, index
    return None, None
