from __future__ import annotations

import json
import os
from typing import Any, Dict, List

from .errors import SchemaInspectorError


def read_json_content(file_obj):
    """Read JSON content from an uploaded file or file path."""
    if file_obj is None:
        raise ValueError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
        if isinstance(content, bytes):
            content = content.decode('utf-8')
        return json.loads(content)

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def read_json_schema(file_obj) -> Any:
    """Read a single schema document; only objects and booleans are valid schemas."""
    schema = read_json_content(file_obj)
    if not isinstance(schema, (dict, bool)):
        raise SchemaInspectorError(f"Expected a JSON object as schema, got {type(schema).__name__}")
    return schema


def _schema_name(file_obj, schema: Any) -> str:
    if isinstance(schema, dict) and isinstance(schema.get('title'), str) and schema['title']:
        return schema['title']
    path = getattr(file_obj, 'name', file_obj)
    if isinstance(path, str):
        return os.path.splitext(os.path.basename(path))[0]
    return 'Schema'


def load_schema_files(file_objs: List[Any]) -> Dict[str, Any]:
    """Read several schema documents, naming each by its title (or file name).

    Duplicate names get a numeric suffix, e.g. 'Person (2)'.
    """
    schemas: Dict[str, Any] = {}
    for file_obj in file_objs or []:
        schema = read_json_schema(file_obj)
        base_name = _schema_name(file_obj, schema)
        name = base_name
        counter = 2
        while name in schemas:
            name = f"{base_name} ({counter})"
            counter += 1
        schemas[name] = schema
    return schemas


def load_reference_files(file_objs: List[Any]) -> List[Any]:
    return [read_json_schema(file_obj) for file_obj in file_objs or []]
