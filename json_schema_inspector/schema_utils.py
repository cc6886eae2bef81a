from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Type, Union

from .accessors import get_field_value_from_schema_group
from .groups import (
    JsonSchemaAllOfGroup,
    JsonSchemaAnyOfGroup,
    JsonSchemaGroup,
    JsonSchemaOneOfGroup,
    RenderOptions,
)
from .schema import JsonSchema
from .utils import is_non_empty_object, list_values, map_object_values


def get_options_in_schema_group(schema_group: JsonSchemaGroup) -> RenderOptions:
    """Determine the (nested) selectable options in a schema group."""
    if schema_group.should_be_treated_like_all_of():
        # plain schemas and nested groups without options of their own can be ignored
        nested = [
            get_options_in_schema_group(entry)
            for entry in schema_group.entries
            if isinstance(entry, JsonSchemaGroup)
        ]
        contained_options = [options for options in nested if options.options is not None]
    else:
        schemas_are_options = schema_group.considers_schemas_as_separate_options()
        contained_options = [
            get_options_in_schema_group(entry) if isinstance(entry, JsonSchemaGroup) else RenderOptions()
            for entry in schema_group.entries
            if schemas_are_options or isinstance(entry, JsonSchemaGroup)
        ]
    return schema_group.create_options_representation(contained_options)


def _create_group_from_raw_schema_array(
    group_class: Type[JsonSchemaGroup],
    schema: JsonSchema,
    raw_schema_array: List[Any],
) -> JsonSchemaGroup:
    if group_class is JsonSchemaAllOfGroup:
        group = JsonSchemaAllOfGroup()
    else:
        group = group_class(schema.parser_config)
    for raw_part in raw_schema_array:
        if isinstance(raw_part, bool):
            continue
        group.with_entry(create_group_from_schema(JsonSchema(raw_part, schema.parser_config, schema.scope)))
    return group


def create_group_from_schema(schema: JsonSchema) -> JsonSchemaAllOfGroup:
    """Wrap a schema into a group, resolving `$ref`s and expanding `allOf`/`anyOf`/`oneOf`."""
    raw_schema = schema.schema
    if not is_non_empty_object(raw_schema):
        return JsonSchemaAllOfGroup()
    result = JsonSchemaAllOfGroup().with_entry(schema)
    for ref_keyword in ('$ref', '$recursiveRef'):
        # $recursiveRef is treated like a plain $ref
        ref = raw_schema.get(ref_keyword)
        if ref:
            result.with_entry(create_group_from_schema(schema.scope.find(ref)))
    if raw_schema.get('allOf'):
        result.with_entry(_create_group_from_raw_schema_array(JsonSchemaAllOfGroup, schema, raw_schema['allOf']))
    if raw_schema.get('anyOf'):
        result.with_entry(_create_group_from_raw_schema_array(JsonSchemaAnyOfGroup, schema, raw_schema['anyOf']))
    if raw_schema.get('oneOf'):
        result.with_entry(_create_group_from_raw_schema_array(JsonSchemaOneOfGroup, schema, raw_schema['oneOf']))
    return result


def _create_json_schema_if_not_empty(raw_schema: Any, schema: JsonSchema) -> Optional[JsonSchema]:
    if not is_non_empty_object(raw_schema):
        return None
    return JsonSchema(raw_schema, schema.parser_config, schema.scope)


def _get_schema_field_value(
    schema_group: JsonSchemaGroup,
    field_name: str,
    option_indexes: Optional[Sequence[int]],
) -> Union[JsonSchema, List[JsonSchema], None]:
    return get_field_value_from_schema_group(
        schema_group,
        field_name,
        merge_values=list_values,
        mapping_function=_create_json_schema_if_not_empty,
        option_indexes=option_indexes,
    )


def get_type_of_array_items_from_schema_group(
    schema_group: JsonSchemaGroup,
    option_indexes: Optional[Sequence[int]] = None,
) -> Optional[JsonSchema]:
    """Return the declared schema of the array items, if the group represents an array.

    A tuple-like `items` array is ignored in favour of `additionalItems`.
    """
    item_schema = _get_schema_field_value(schema_group, 'items', option_indexes)
    if item_schema is None:
        item_schema = _get_schema_field_value(schema_group, 'additionalItems', option_indexes)
    if isinstance(item_schema, list):
        # conflicting declarations in multiple parts: only the first one is considered
        return item_schema[0]
    return item_schema


def get_required_property_names(raw_schema: Any) -> List[str]:
    # a boolean "required" (draft 3) names no properties
    required = raw_schema.get('required')
    return required if isinstance(required, list) else []


def _get_properties_from_schema(schema: JsonSchema) -> Dict[str, Any]:
    raw_schema = schema.schema
    raw_properties: Dict[str, Any] = {name: True for name in get_required_property_names(raw_schema)}
    raw_properties.update(raw_schema.get('properties') or {})
    return {
        name: JsonSchema(raw_property, schema.parser_config, schema.scope)
        if is_non_empty_object(raw_property) else raw_property
        for name, raw_property in raw_properties.items()
    }


def _merge_properties(combined: Dict[str, Any], next_value: Dict[str, Any]) -> Dict[str, Any]:
    if not combined:
        return next_value
    merged = dict(combined)
    for name, value in next_value.items():
        # a placeholder (e.g. from "required") must not replace an actual schema
        if not isinstance(combined.get(name), JsonSchema) or isinstance(value, JsonSchema):
            merged[name] = value
    return merged


def get_properties_from_schema_group(
    schema_group: JsonSchemaGroup,
    option_indexes: Optional[Sequence[int]] = None,
) -> Dict[str, JsonSchema]:
    """Collect all properties (including required-but-undeclared ones) mentioned in the group."""
    extracted = schema_group.extract_values(_get_properties_from_schema, _merge_properties, {}, option_indexes)
    # remaining booleans/empty placeholders become schemas of their own
    return map_object_values(
        extracted,
        lambda value: value if isinstance(value, JsonSchema) else JsonSchema(value),
    )
