"""Core logic for JSON Schema Inspector.

The Gradio UI lives in `app.py`. This package contains the pure logic that:
- resolves `$ref`s across related schemas
- groups `allOf`/`anyOf`/`oneOf` parts and their selectable options
- derives the columns for a selection path
- filters columns by a search
"""
from .columns import (
    RenderItemsColumn,
    RenderOptionsColumn,
    build_default_array_properties,
    build_next_column,
    create_render_data_builder,
    has_schema_group_nested_items,
)
from .config import BreadcrumbsOptions, ParserConfig, SchemaPartParserConfig, SearchOptions
from .errors import SchemaInspectorError, UnresolvableReferenceError
from .groups import (
    JsonSchemaAllOfGroup,
    JsonSchemaAnyOfGroup,
    JsonSchemaGroup,
    JsonSchemaOneOfGroup,
    JsonSchemaOptionalsGroup,
    RenderOptions,
)
from .schema import JsonSchema
from .scope import RefScope
from .session import InspectorSession

__all__ = [
    'BreadcrumbsOptions',
    'InspectorSession',
    'JsonSchema',
    'JsonSchemaAllOfGroup',
    'JsonSchemaAnyOfGroup',
    'JsonSchemaGroup',
    'JsonSchemaOneOfGroup',
    'JsonSchemaOptionalsGroup',
    'ParserConfig',
    'RefScope',
    'RenderItemsColumn',
    'RenderOptions',
    'RenderOptionsColumn',
    'SchemaInspectorError',
    'SchemaPartParserConfig',
    'SearchOptions',
    'UnresolvableReferenceError',
    'build_default_array_properties',
    'build_next_column',
    'create_render_data_builder',
    'has_schema_group_nested_items',
]
