from __future__ import annotations

from typing import Any, Callable, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# (option_indexes) -> label shown for that option
OptionNameForIndex = Callable[[List[int]], Optional[str]]
# (raw_schema, include_nested_optionals) -> truthy if the schema itself matches
FlatSearchFilter = Callable[..., Any]


def default_option_name_for_index(option_indexes: List[int]) -> str:
    return 'Option ' + '-'.join(str(index + 1) for index in option_indexes)


class _InspectorModel(BaseModel):
    # accept both snake_case and the camelCase names used in schema tooling
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        arbitrary_types_allowed=True,
    )


class SchemaPartParserConfig(_InspectorModel):
    """How the alternatives of one `anyOf`/`oneOf` keyword are presented."""

    group_title: Optional[str] = None
    option_name_for_index: Optional[OptionNameForIndex] = None


class ParserConfig(_InspectorModel):
    """Settings steering how a schema's optional parts are traversed."""

    any_of: Optional[SchemaPartParserConfig] = None
    one_of: Optional[SchemaPartParserConfig] = None


class SearchOptions(_InspectorModel):
    fields: List[str] = Field(default_factory=list)
    # (search_filter) -> flat search filter; takes precedence over `fields`
    filter_by: Optional[Callable[[str], Optional[FlatSearchFilter]]] = None
    by_property_name: bool = False
    input_placeholder: str = 'Search'

    def is_enabled(self) -> bool:
        return bool(self.by_property_name or self.fields or self.filter_by)


class BreadcrumbsOptions(_InspectorModel):
    prefix: str = ''
    separator: str = '.'
    skip_separator: Optional[Callable[..., Any]] = None
    mutate_name: Optional[Callable[..., Any]] = None


def as_parser_config(parser_config: Any) -> ParserConfig:
    """Accept a ParserConfig, a plain dict (snake_case or camelCase keys) or None."""
    if isinstance(parser_config, ParserConfig):
        return parser_config
    return ParserConfig.model_validate(parser_config or {})


def as_search_options(search_options: Any) -> Optional[SearchOptions]:
    if search_options is None or isinstance(search_options, SearchOptions):
        return search_options
    return SearchOptions.model_validate(search_options)


def as_breadcrumbs_options(breadcrumbs_options: Any) -> Optional[BreadcrumbsOptions]:
    if breadcrumbs_options is None or isinstance(breadcrumbs_options, BreadcrumbsOptions):
        return breadcrumbs_options
    return BreadcrumbsOptions.model_validate(breadcrumbs_options)
