from __future__ import annotations

from typing import Optional


class SchemaInspectorError(Exception):
    """Base class for errors raised while inspecting JSON schemas."""


class UnresolvableReferenceError(SchemaInspectorError, ValueError):
    """A `$ref` could not be found in any reachable reference scope."""

    def __init__(self, ref: str, qualified_ref: Optional[str] = None):
        self.ref = ref
        self.qualified_ref = qualified_ref
        if qualified_ref is None:
            message = f'Cannot resolve $ref: "{ref}"'
        else:
            message = f'Cannot resolve $ref: "{ref}"/"{qualified_ref}"'
        super().__init__(message)
