from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Union

from .config import OptionNameForIndex, ParserConfig, SchemaPartParserConfig
from .paths import OptionCounter, create_option_target
from .schema import JsonSchema
from .utils import list_values


@dataclass
class RenderOptions:
    """Hierarchy of selectable options in a schema group.

    An instance without `options` stands for a single concrete option.
    """

    group_title: Optional[str] = None
    options: Optional[List['RenderOptions']] = None
    option_name_for_index: Optional[OptionNameForIndex] = None

    def is_empty(self) -> bool:
        return self.group_title is None and self.options is None and self.option_name_for_index is None


class JsonSchemaGroup:
    """Array of schemas and nested groups, e.g. from `allOf`, `anyOf` or `oneOf`.

    Sub-classes must implement `considers_schemas_as_separate_options()`.
    """

    def __init__(self):
        if __debug__:
            if not callable(getattr(self, 'considers_schemas_as_separate_options', None)):
                raise TypeError(
                    "JsonSchemaGroup is abstract and expects considers_schemas_as_separate_options() "
                    "to be implemented by the instantiated sub-class"
                )
        self.entries: List[Union[JsonSchema, JsonSchemaGroup]] = []

    def should_be_treated_like_all_of(self) -> bool:
        """Whether the entries should be treated as if defined in a single schema.

        Otherwise each entry is an alternative option to choose from.
        """
        if len(self.entries) < 2:
            return True
        if self.considers_schemas_as_separate_options():
            return False
        found_group_with_options = False
        for entry in self.entries:
            if isinstance(entry, JsonSchema) or entry.should_be_treated_like_all_of():
                continue
            if found_group_with_options:
                return False
            found_group_with_options = True
        return True

    def with_entry(self, schema_or_group: Union[JsonSchema, 'JsonSchemaGroup']) -> 'JsonSchemaGroup':
        """Add the given schema or group, unwrapping a group with a single entry. Returns self."""
        if isinstance(schema_or_group, JsonSchemaGroup) and len(schema_or_group.entries) == 1:
            self.entries.append(schema_or_group.entries[0])
        else:
            self.entries.append(schema_or_group)
        return self

    def some_entry(
        self,
        check_entry: Callable[[JsonSchema, bool], Any],
        option_indexes: Optional[Sequence[int]] = None,
    ) -> bool:
        """Invoke `check_entry(schema, is_exact_option_match)` until it returns something truthy.

        With `option_indexes`, unselected alternatives are skipped without
        invoking `check_entry`. `is_exact_option_match` is True for schemas at the
        end of the option path (or for all of them if there is no option path).
        """
        return self._some_entry(check_entry, create_option_target(option_indexes))

    def _some_entry(self, check_entry, option_target: Optional[List[OptionCounter]]) -> bool:
        treat_like_all_of = self.should_be_treated_like_all_of()
        schemas_are_options = self.considers_schemas_as_separate_options()
        for entry in self.entries:
            remaining_target = option_target
            if not treat_like_all_of and (schemas_are_options or isinstance(entry, JsonSchemaGroup)):
                if option_target is not None:
                    is_selected_entry = bool(option_target) and option_target[0].index == 0
                    if option_target:
                        option_target[0].index -= 1
                    if not is_selected_entry:
                        continue
                    remaining_target = option_target[1:]
            if isinstance(entry, JsonSchemaGroup):
                if entry._some_entry(check_entry, remaining_target):
                    return True
            elif check_entry(entry, not remaining_target):
                return True
        return False

    def extract_values(
        self,
        extract_from_schema: Callable[[JsonSchema], Any],
        merge_results: Callable[[Any, Any], Any] = list_values,
        default_value: Any = None,
        option_indexes: Optional[Sequence[int]] = None,
    ) -> Any:
        """Collect `extract_from_schema()` from every (selected) schema and fold them with `merge_results`."""
        values: List[Any] = []

        def add_to_result_and_continue(entry: JsonSchema, _is_exact_option_match: bool) -> bool:
            single_value = extract_from_schema(entry)
            if single_value is not None:
                values.append(single_value)
            return False

        self.some_entry(add_to_result_and_continue, option_indexes)
        result = default_value
        for value in values:
            result = merge_results(result, value)
        return result

    def create_options_representation(self, contained_options: List[RenderOptions]) -> RenderOptions:
        if not contained_options:
            return RenderOptions()
        if len(contained_options) == 1:
            # skip the unnecessary hierarchy level
            return contained_options[0]
        return RenderOptions(options=contained_options)


class JsonSchemaAllOfGroup(JsonSchemaGroup):
    """Representation of an `allOf` element in a JSON Schema."""

    def considers_schemas_as_separate_options(self) -> bool:
        return False

    def with_entry(self, schema_or_group):
        if isinstance(schema_or_group, JsonSchemaGroup) and schema_or_group.should_be_treated_like_all_of():
            # flatten instead of nesting an allOf-like group in an allOf group
            for entry in schema_or_group.entries:
                self.with_entry(entry)
            return self
        return super().with_entry(schema_or_group)


class JsonSchemaOptionalsGroup(JsonSchemaGroup):
    """Array of schemas of which not all are mandatory (e.g. `anyOf`, `oneOf`)."""

    def __init__(self, settings: SchemaPartParserConfig):
        super().__init__()
        if __debug__:
            if settings is None:
                raise ValueError("Missing settings for the representation of optional schema parts")
        self.settings = settings

    def considers_schemas_as_separate_options(self) -> bool:
        return True

    def create_options_representation(self, contained_options):
        result = super().create_options_representation(contained_options)
        if result.options is not None:
            if result.group_title is None:
                result.group_title = self.settings.group_title
            result.option_name_for_index = self.settings.option_name_for_index
        return result


def _merge_settings(default_title: str, part_config: Optional[SchemaPartParserConfig]) -> SchemaPartParserConfig:
    if part_config is None:
        return SchemaPartParserConfig(group_title=default_title)
    if 'group_title' in part_config.model_fields_set:
        return part_config
    return part_config.model_copy(update={'group_title': default_title})


class JsonSchemaOneOfGroup(JsonSchemaOptionalsGroup):
    """Representation of a `oneOf` element: exactly one of the entries is expected to be fulfilled."""

    def __init__(self, parser_config: Optional[ParserConfig] = None):
        super().__init__(_merge_settings('one of', parser_config.one_of if parser_config else None))


class JsonSchemaAnyOfGroup(JsonSchemaOptionalsGroup):
    """Representation of an `anyOf` element: one or more of the entries are expected to be fulfilled."""

    def __init__(self, parser_config: Optional[ParserConfig] = None):
        super().__init__(_merge_settings('any of', parser_config.any_of if parser_config else None))
