from __future__ import annotations

from typing import Any, Dict, Optional, Union

from .config import ParserConfig, as_parser_config
from .scope import RefScope

RawJsonSchema = Dict[str, Any]


class JsonSchema:
    """A raw JSON Schema fragment in the context of its parser config and `$ref` scope.

    Boolean schemas are normalized: `true` becomes `{}` and `false` becomes
    `{'not': {}}` (i.e. nothing is valid against it).
    Two wrappers around the same raw fragment in the same scope are equal.
    """

    def __init__(
        self,
        schema: Union[RawJsonSchema, bool, None],
        parser_config: Union[ParserConfig, Dict[str, Any], None] = None,
        scope: Optional[RefScope] = None,
    ):
        if schema is True:
            schema = {}
        elif schema is False:
            schema = {'not': {}}
        self.schema = schema
        self.parser_config = as_parser_config(parser_config)
        self.scope = scope if scope is not None else RefScope(self)

    def __eq__(self, other):
        if not isinstance(other, JsonSchema):
            return NotImplemented
        return self.schema is other.schema and self.scope is other.scope

    def __hash__(self):
        return hash((id(self.schema), id(self.scope)))

    def __repr__(self):
        return f"JsonSchema({self.schema!r})"
