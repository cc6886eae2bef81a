from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

from .groups import JsonSchemaGroup
from .schema import JsonSchema
from .utils import common_values, list_values, maximum_value, minimum_value


def get_value_from_raw_schema(raw_schema: Any, field_name: str) -> Any:
    if not isinstance(raw_schema, dict):
        return None
    return raw_schema.get(field_name)


def get_field_value_from_schema(
    schema: JsonSchema,
    field_name: str,
    mapping_function: Optional[Callable[[Any, JsonSchema], Any]] = None,
) -> Any:
    """Look-up a single keyword's value in one schema, ignoring nested sub-schemas.

    `mapping_function(raw_value, schema)` may convert the raw value, e.g. into a JsonSchema.
    """
    raw_value = get_value_from_raw_schema(schema.schema, field_name)
    if mapping_function is not None:
        return mapping_function(raw_value, schema)
    return raw_value


def get_field_value_from_schema_group(
    schema_group: JsonSchemaGroup,
    field_name: str,
    merge_values: Callable[[Any, Any], Any] = list_values,
    default_value: Any = None,
    mapping_function: Optional[Callable[[Any, JsonSchema], Any]] = None,
    option_indexes: Optional[Sequence[int]] = None,
) -> Any:
    """Extract a keyword's value from all (selected) schemas in the group and merge them."""
    return schema_group.extract_values(
        lambda schema: get_field_value_from_schema(schema, field_name, mapping_function),
        merge_values,
        default_value,
        option_indexes,
    )


def get_minimum_field_value(schema_group, field_name, default_value=None, option_indexes=None):
    return get_field_value_from_schema_group(
        schema_group, field_name, minimum_value, default_value, option_indexes=option_indexes
    )


def get_maximum_field_value(schema_group, field_name, default_value=None, option_indexes=None):
    return get_field_value_from_schema_group(
        schema_group, field_name, maximum_value, default_value, option_indexes=option_indexes
    )


def get_listed_field_values(schema_group, field_name, default_value=None, option_indexes=None):
    """Union of all encountered values (a single value is not wrapped in a list)."""
    return get_field_value_from_schema_group(
        schema_group, field_name, list_values, default_value, option_indexes=option_indexes
    )


def get_common_field_values(schema_group, field_name, default_value=None, option_indexes=None):
    """Intersection of all encountered values; an empty list if they have nothing in common."""
    return get_field_value_from_schema_group(
        schema_group, field_name, common_values, default_value, option_indexes=option_indexes
    )
