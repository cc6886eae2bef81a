from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from .config import ParserConfig, as_parser_config
from .groups import JsonSchemaGroup, RenderOptions
from .paths import is_option_path, is_option_path_valid
from .schema import JsonSchema
from .schema_utils import (
    create_group_from_schema,
    get_options_in_schema_group,
    get_properties_from_schema_group,
    get_required_property_names,
    get_type_of_array_items_from_schema_group,
)
from .utils import is_non_empty_object, map_object_values

logger = logging.getLogger(__name__)

Selection = Union[str, List[int]]
# (array_item_schema, array_schema_group, option_indexes) -> {name: JsonSchema or raw schema}
BuildArrayPropertiesFunction = Callable[[JsonSchema, JsonSchemaGroup, Optional[List[int]]], Dict[str, Any]]
# (event, selected_item) -> None
OnSelectFunction = Callable[[Any, Optional[Selection]], None]


@dataclass
class RenderItemsColumn:
    items: Dict[str, JsonSchemaGroup]
    selected_item: Optional[str] = None
    trailing_selection: bool = False
    filtered_items: Optional[List[str]] = None
    on_select: Optional[OnSelectFunction] = None


@dataclass
class RenderOptionsColumn:
    options: RenderOptions
    context_group: JsonSchemaGroup
    selected_item: Optional[List[int]] = None
    trailing_selection: bool = False
    filtered_items: Optional[List[List[int]]] = None
    on_select: Optional[OnSelectFunction] = None


RenderColumn = Union[RenderItemsColumn, RenderOptionsColumn]


def build_default_array_properties(array_item_schema: JsonSchema, *_args) -> Dict[str, Any]:
    """Offer access to the declared type of an array's items via a single '[0]' entry."""
    return {'[0]': array_item_schema}


def build_next_column(
    schema_group: JsonSchemaGroup,
    option_indexes: Optional[Sequence[int]] = None,
    build_array_properties: Optional[BuildArrayPropertiesFunction] = None,
) -> Optional[RenderColumn]:
    """Determine what to offer after selecting the given group (and option path within it).

    Returns None if there is nothing further to navigate into.
    """
    if option_indexes is None:
        options = get_options_in_schema_group(schema_group)
        if options.options is not None:
            # an option has to be chosen before any properties can be listed
            return RenderOptionsColumn(options=options, context_group=schema_group)
    property_schemas = get_properties_from_schema_group(schema_group, option_indexes)
    if property_schemas:
        return RenderItemsColumn(items=map_object_values(property_schemas, create_group_from_schema))
    # no properties, but this might be an array
    array_item_schema = get_type_of_array_items_from_schema_group(schema_group, option_indexes)
    if array_item_schema is None:
        return None
    build_array_properties = build_array_properties or build_default_array_properties
    array_properties = build_array_properties(
        array_item_schema,
        schema_group,
        list(option_indexes) if option_indexes is not None else None,
    )
    items = {
        name: create_group_from_schema(
            value if isinstance(value, JsonSchema)
            else JsonSchema(value, array_item_schema.parser_config, array_item_schema.scope)
        )
        for name, value in (array_properties or {}).items()
        if value is not None
    }
    return RenderItemsColumn(items=items) if items else None


def _create_root_column(
    schemas: Dict[str, Any],
    reference_schemas: Optional[List[Any]],
    parser_config: ParserConfig,
) -> RenderItemsColumn:
    # reference schemas may be referenced by the root schemas and by each other
    reference_scopes = []
    for raw_reference_schema in reference_schemas or []:
        new_scope = JsonSchema(raw_reference_schema, parser_config).scope
        for other_scope in reference_scopes:
            new_scope.add_other_scope(other_scope)
            other_scope.add_other_scope(new_scope)
        reference_scopes.append(new_scope)

    root_schemas = {name: JsonSchema(raw_schema, parser_config) for name, raw_schema in schemas.items()}
    # all scopes must be linked before any $ref gets resolved while building the groups
    for name, schema in root_schemas.items():
        schema.scope.add_other_scopes(
            [other.scope for other_name, other in root_schemas.items() if other_name != name]
        )
        schema.scope.add_other_scopes(reference_scopes)
    return RenderItemsColumn(items=map_object_values(root_schemas, create_group_from_schema))


def create_render_data_builder(on_select_in_column: Callable[[int], OnSelectFunction]):
    """Create the function deriving all columns from the root schemas and the current selection.

    The created function expects: `schemas` (name -> raw schema), `reference_schemas`
    (raw schemas that may be referenced but are not listed), `selected_items`
    (per column: a property name or an option path), `parser_config` and an optional
    `build_array_properties` function. It returns `{'column_data': [...]}`.
    """

    def build_render_data(
        schemas: Dict[str, Any],
        reference_schemas: Optional[List[Any]] = None,
        selected_items: Sequence[Selection] = (),
        parser_config: Any = None,
        build_array_properties: Optional[BuildArrayPropertiesFunction] = None,
    ) -> Dict[str, List[RenderColumn]]:
        parser_config = as_parser_config(parser_config)
        next_column: Optional[RenderColumn] = _create_root_column(schemas, reference_schemas, parser_config)
        selected_group: Optional[JsonSchemaGroup] = None
        column_data: List[RenderColumn] = []
        for index, selection in enumerate(selected_items):
            current_column = next_column
            is_option_selection = is_option_path(selection)
            is_valid_selection = False
            if is_option_selection:
                if selected_group is not None and isinstance(current_column, RenderOptionsColumn):
                    is_valid_selection = is_option_path_valid(selection, current_column.options)
            elif isinstance(current_column, RenderItemsColumn):
                selected_group = current_column.items.get(selection)
                is_valid_selection = selected_group is not None
            if is_valid_selection:
                next_column = build_next_column(
                    selected_group,
                    list(selection) if is_option_selection else None,
                    build_array_properties,
                )
                if is_option_selection:
                    selected_group = None
            else:
                if current_column is not None:
                    logger.debug("Ignoring invalid selection %r in column %d", selection, index)
                next_column = None
            if current_column is None:
                continue
            if not is_valid_selection:
                current_column.selected_item = None
            elif is_option_selection:
                current_column.selected_item = list(selection)
            else:
                current_column.selected_item = selection
            current_column.on_select = on_select_in_column(index)
            column_data.append(current_column)

        if column_data:
            selected_in_last_column = column_data[-1].selected_item is not None
            # without a valid selection in the last column, the one before must have one
            if selected_in_last_column or len(column_data) > 1:
                column_data[-1 if selected_in_last_column else -2].trailing_selection = True
        # offer the next column (without a selection yet) if there is something to choose from
        if next_column is not None:
            next_column.on_select = on_select_in_column(len(selected_items))
            column_data.append(next_column)
        return {'column_data': column_data}

    return build_render_data


def _has_schema_nested_items(schema: JsonSchema, _is_exact_option_match: bool = True) -> bool:
    raw_schema = schema.schema
    return (
        is_non_empty_object(raw_schema.get('properties'))
        or bool(get_required_property_names(raw_schema))
        or is_non_empty_object(raw_schema.get('items'))
        or is_non_empty_object(raw_schema.get('additionalItems'))
    )


def has_schema_group_nested_items(
    schema_group: JsonSchemaGroup,
    option_indexes: Optional[Sequence[int]] = None,
) -> bool:
    """Whether selecting the group (or option) would open another column."""
    if schema_group.some_entry(_has_schema_nested_items, option_indexes):
        return True
    return option_indexes is None and get_options_in_schema_group(schema_group).options is not None
