from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, List, Optional

from .errors import UnresolvableReferenceError
from .paths import derive_base_uri, is_absolute_uri
from .utils import is_non_empty_object

if TYPE_CHECKING:
    from .schema import JsonSchema

logger = logging.getLogger(__name__)


class RefScope:
    """Registry of the `$ref` targets offered by one main schema and its definitions.

    - `internal_refs` are only available from within the main schema itself.
    - `external_refs` are available from any scope this one was added to via
      `add_other_scope()`; they only exist if the main schema declares an `$id`.
    """

    def __init__(self, schema: Optional[JsonSchema] = None):
        self.internal_refs: Dict[str, JsonSchema] = {}
        self.external_refs: Dict[str, JsonSchema] = {}
        self.other_scopes: List[RefScope] = []
        self.base_uri: Optional[str] = None
        if schema is None or not is_non_empty_object(schema.schema):
            return
        self._collect_refs(schema)
        logger.debug(
            "Collected %d internal and %d external $ref targets",
            len(self.internal_refs),
            len(self.external_refs),
        )

    def _collect_refs(self, schema: JsonSchema) -> None:
        from .schema import JsonSchema

        raw_schema = schema.schema
        # a schema can always reference itself via the empty fragment
        self.internal_refs['#'] = schema

        # "$id" replaced "id" with JSON Schema Draft 6
        main_alias = raw_schema.get('$id') or raw_schema.get('id')
        external_ref_base = None
        if isinstance(main_alias, str) and not main_alias.startswith('#'):
            alias_with_fragment = main_alias if main_alias.endswith('#') else f"{main_alias}#"
            alias_without_fragment = alias_with_fragment[:-1]
            self.external_refs[alias_with_fragment] = schema
            self.external_refs[alias_without_fragment] = schema
            external_ref_base = alias_with_fragment
            if is_absolute_uri(alias_without_fragment):
                self.base_uri = derive_base_uri(alias_without_fragment)

        defs_keyword = '$defs' if '$defs' in raw_schema else 'definitions'
        definitions = raw_schema.get(defs_keyword)
        if not is_non_empty_object(definitions):
            return
        for key, definition in definitions.items():
            if not is_non_empty_object(definition):
                continue
            sub_schema = JsonSchema(definition, schema.parser_config, self)
            self.internal_refs[f"#/{defs_keyword}/{key}"] = sub_schema
            sub_alias = definition.get('$id') or definition.get('id')
            if sub_alias:
                # an alias inside the definitions is only a short-hand within this schema
                self.internal_refs[sub_alias] = sub_schema
            anchor = definition.get('$anchor')
            if anchor:
                self.internal_refs[f"#{anchor}"] = sub_schema
            if external_ref_base:
                self.external_refs[f"{external_ref_base}/{defs_keyword}/{key}"] = sub_schema
                if anchor:
                    self.external_refs[f"{external_ref_base}{anchor}"] = sub_schema

    def add_other_scope(self, ref_scope: RefScope) -> None:
        self.other_scopes.append(ref_scope)

    def add_other_scopes(self, ref_scopes: List[RefScope]) -> None:
        for ref_scope in ref_scopes:
            self.add_other_scope(ref_scope)

    def find_schema_in_this_scope(self, ref: str, include_internal_refs: bool = True) -> Optional[JsonSchema]:
        if include_internal_refs and ref in self.internal_refs:
            return self.internal_refs[ref]
        return self.external_refs.get(ref)

    def qualify_ref(self, ref: str) -> Optional[str]:
        """Prefix a relative (non-fragment) ref with this scope's base URI, if there is one."""
        if self.base_uri is None or ref.startswith('#') or is_absolute_uri(ref):
            return None
        return f"{self.base_uri}{ref}"

    def find(self, ref: str) -> JsonSchema:
        """Look-up the (sub-)schema associated with the given `$ref` value.

        Order: this scope's internal and external refs, then the base-URI
        qualified ref among the external refs, then the external refs of all
        other scopes (with the same fallback).
        """
        qualified_ref = self.qualify_ref(ref)
        result = self.find_schema_in_this_scope(ref)
        if result is None and qualified_ref is not None:
            result = self.external_refs.get(qualified_ref)
        if result is not None:
            return result
        for other_scope in self.other_scopes:
            result = other_scope.find_schema_in_this_scope(ref, include_internal_refs=False)
            if result is None and qualified_ref is not None:
                result = other_scope.find_schema_in_this_scope(qualified_ref, include_internal_refs=False)
            if result is not None:
                return result
        logger.debug("Failed to resolve $ref %r (qualified: %r)", ref, qualified_ref)
        raise UnresolvableReferenceError(ref, qualified_ref)
