from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, List, Optional, Set, Union

from .columns import RenderColumn, RenderItemsColumn
from .config import FlatSearchFilter
from .paths import create_option_target, get_index_permutations_for_options
from .schema import JsonSchema, RawJsonSchema
from .utils import is_non_empty_object, memoize_one

logger = logging.getLogger(__name__)

PropertyNameCheck = Callable[[str], Any]
SchemaFilterFunction = Callable[[JsonSchema, bool], bool]


def create_recursive_filter_function(
    flat_search_filter: Optional[FlatSearchFilter] = None,
    property_name_check: Optional[PropertyNameCheck] = None,
) -> SchemaFilterFunction:
    """Create a function applying the flat filter on a schema and all of its contained sub-schemas.

    `$ref`s are not followed here; referenced schemas are expected to be checked separately.
    """

    def recursive_filter_function(target: Optional[JsonSchema], include_nested_optionals: bool = True) -> bool:
        if target is None:
            return False
        raw_schema = target.schema
        if not is_non_empty_object(raw_schema):
            return False
        if flat_search_filter is not None and flat_search_filter(raw_schema, include_nested_optionals):
            return True

        def search_in_parts(group_keyword: str) -> bool:
            parts = raw_schema.get(group_keyword)
            return bool(parts) and any(
                recursive_filter_function(
                    JsonSchema(raw_part, target.parser_config, target.scope),
                    include_nested_optionals,
                )
                for raw_part in parts
            )

        if search_in_parts('allOf') or (
            include_nested_optionals and (search_in_parts('oneOf') or search_in_parts('anyOf'))
        ):
            return True

        def filter_sub_schema_including_optionals(raw_sub_schema: Any) -> bool:
            return recursive_filter_function(JsonSchema(raw_sub_schema, target.parser_config, target.scope), True)

        properties = raw_schema.get('properties')
        if is_non_empty_object(properties) and (
            (property_name_check is not None and any(property_name_check(name) for name in properties))
            or any(filter_sub_schema_including_optionals(value) for value in properties.values())
        ):
            return True
        # "additionalItems" only applies if "items" is not a single schema
        if is_non_empty_object(raw_schema.get('items')):
            return filter_sub_schema_including_optionals(raw_schema['items'])
        if is_non_empty_object(raw_schema.get('additionalItems')):
            return filter_sub_schema_including_optionals(raw_schema['additionalItems'])
        return False

    return recursive_filter_function


def collect_referenced_sub_schemas(schema: JsonSchema, include_nested_optionals: bool = True) -> Dict[JsonSchema, bool]:
    """Collect all schemas referenced (via `$ref`/`$recursiveRef`) from within the given schema.

    Each is mapped to whether it was reached while `oneOf`/`anyOf` parts were included.
    Self-references are omitted.
    """
    references: Dict[JsonSchema, bool] = {}

    def collect_references(raw_sub_schema: RawJsonSchema, is_including_optionals: bool) -> bool:
        for ref_keyword in ('$ref', '$recursiveRef'):
            ref = raw_sub_schema.get(ref_keyword)
            if ref:
                target_schema = schema.scope.find(ref)
                if references.get(target_schema) is not True:
                    references[target_schema] = bool(is_including_optionals)
        # never match, in order to visit every sub-schema
        return False

    create_recursive_filter_function(collect_references)(schema, include_nested_optionals)
    references.pop(schema, None)
    return references


def create_filter_function_for_schema(
    flat_search_filter: Optional[FlatSearchFilter] = None,
    property_name_check: Optional[PropertyNameCheck] = None,
) -> SchemaFilterFunction:
    """Create the (caching) function checking whether a schema or anything it references matches.

    Referenced schemas are visited iteratively, so circular `$ref`s terminate.
    The results are remembered for the lifetime of the returned function.
    """
    recursive_search_filter = create_recursive_filter_function(flat_search_filter, property_name_check)
    results_excluding_optionals: Dict[JsonSchema, bool] = {}
    results_including_optionals: Dict[JsonSchema, bool] = {}

    def get_remembered_result(schema: JsonSchema, include_nested_optionals: bool) -> Optional[bool]:
        if schema in results_excluding_optionals:
            result_excluding_optionals = results_excluding_optionals[schema]
            # a match without optionals is also a match with them
            if result_excluding_optionals or not include_nested_optionals:
                return result_excluding_optionals
        if include_nested_optionals and schema in results_including_optionals:
            return results_including_optionals[schema]
        return None

    def remember_result_including_optionals(schema: JsonSchema, result: bool) -> None:
        results_including_optionals[schema] = result
        if not result:
            # no match with optionals means no match without them either
            results_excluding_optionals[schema] = False

    def remember_result_excluding_optionals(schema: JsonSchema, result: bool) -> None:
        results_excluding_optionals[schema] = result

    def remember(include_nested_optionals: bool):
        if include_nested_optionals:
            return remember_result_including_optionals
        return remember_result_excluding_optionals

    def filter_function(schema: JsonSchema, include_nested_optionals_for_main_schema: bool = False) -> bool:
        include_main = bool(include_nested_optionals_for_main_schema)
        remembered_result = get_remembered_result(schema, include_main)
        if remembered_result is not None:
            return remembered_result
        # insertion ordered work list: schema -> include nested optionals
        sub_schemas_to_visit: Dict[JsonSchema, bool] = {schema: include_main}
        visited: Dict[bool, Set[JsonSchema]] = {True: set(), False: set()}

        while sub_schemas_to_visit:
            sub_schema = next(iter(sub_schemas_to_visit))
            include_for_sub_schema = sub_schemas_to_visit.pop(sub_schema)
            visited[include_for_sub_schema].add(sub_schema)
            remember_sub_schema_result = remember(include_for_sub_schema)
            if recursive_search_filter(sub_schema, include_for_sub_schema):
                remember_sub_schema_result(sub_schema, True)
                remember(include_main)(schema, True)
                return True
            sub_sub_schemas = collect_referenced_sub_schemas(sub_schema, include_for_sub_schema)
            remembered = [
                get_remembered_result(sub_sub_schema, including_optionals)
                for sub_sub_schema, including_optionals in sub_sub_schemas.items()
            ]
            if all(result is False for result in remembered):
                # no further references or all of them have already been ruled out
                remember_sub_schema_result(sub_schema, False)
            elif any(remembered):
                remember_sub_schema_result(sub_schema, True)
                remember(include_main)(schema, True)
                return True
            else:
                for sub_sub_schema, including_optionals in sub_sub_schemas.items():
                    # prevents revisiting the same schemas in case of circular references
                    if sub_sub_schema in visited[including_optionals]:
                        continue
                    already_queued_with_optionals = sub_schemas_to_visit.get(sub_sub_schema, False)
                    sub_schemas_to_visit[sub_sub_schema] = including_optionals or already_queued_with_optionals

        logger.debug(
            "No match in %d visited schema(s)",
            len(visited[True]) + len(visited[False]),
        )
        for sub_schema in visited[True]:
            remember_result_including_optionals(sub_schema, False)
        for sub_schema in visited[False]:
            remember_result_excluding_optionals(sub_schema, False)
        return False

    return filter_function


def create_filter_function_for_column(
    flat_search_filter: Optional[FlatSearchFilter],
    property_name_filter: PropertyNameCheck = lambda _name: False,
) -> Callable[[RenderColumn], Union[List[str], List[List[int]]]]:
    """Create the function listing the entries in a column that match the search."""
    contains_matching_items = create_filter_function_for_schema(flat_search_filter, property_name_filter)

    def filter_column(column: RenderColumn) -> Union[List[str], List[List[int]]]:
        if isinstance(column, RenderItemsColumn):
            return [
                name for name, group in column.items.items()
                if property_name_filter(name) or group.some_entry(contains_matching_items)
            ]
        return [
            option_indexes for option_indexes in get_index_permutations_for_options(column.options)
            if column.context_group.some_entry(contains_matching_items, create_option_target(option_indexes))
        ]

    return filter_column


@memoize_one
def filtering_by_fields(search_fields: Optional[List[str]], search_filter: Optional[str]) -> Optional[FlatSearchFilter]:
    """Flat filter matching if any of the given fields contains the search text (ignoring case).

    Returns None if there is nothing to filter by.
    """
    if not search_fields or not search_filter:
        return None
    regex = re.compile(re.escape(search_filter), re.IGNORECASE)

    def filter_by_fields(raw_schema: RawJsonSchema, *_args) -> bool:
        return any(
            isinstance(raw_schema.get(field_name), str) and regex.search(raw_schema[field_name]) is not None
            for field_name in search_fields
        )

    return filter_by_fields


@memoize_one
def filtering_by_property_name(search_filter: Optional[str]) -> Optional[PropertyNameCheck]:
    """Check whether a property's name contains the search text (ignoring case)."""
    if not search_filter:
        return None
    regex = re.compile(re.escape(search_filter), re.IGNORECASE)
    return lambda property_name: regex.search(property_name) is not None
