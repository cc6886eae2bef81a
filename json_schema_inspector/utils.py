from __future__ import annotations

import functools
from typing import Any, Callable, Dict, List, Optional


def is_defined(target: Any) -> bool:
    return target is not None


def is_non_empty_object(target: Any) -> bool:
    """Whether the target is a mapping with at least one key."""
    return isinstance(target, dict) and len(target) > 0


def map_object_values(original: Dict[str, Any], mapping_function: Callable[[Any], Any]) -> Dict[str, Any]:
    """Shallow-copy a dict while mapping its values, dropping keys mapped to None."""
    mapped: Dict[str, Any] = {}
    for key, value in original.items():
        mapped_value = mapping_function(value)
        if mapped_value is not None:
            mapped[key] = mapped_value
    return mapped


def _null_aware_reduce(merge_defined_values: Callable[[Any, Any], Any]) -> Callable[[Any, Any], Any]:
    def reduce_values(combined: Any, next_value: Any = None) -> Any:
        if next_value is None:
            return combined
        if combined is None:
            return next_value
        return merge_defined_values(combined, next_value)

    return reduce_values


def _lower(a, b):
    return a if a < b else b


def _higher(a, b):
    return a if a > b else b


def _list(combined, next_value):
    if isinstance(combined, list):
        if isinstance(next_value, list):
            return combined + next_value
        return combined + [next_value]
    if isinstance(next_value, list):
        return [combined] + next_value
    if combined == next_value:
        return combined
    return [combined, next_value]


def _common(combined, next_value):
    if isinstance(combined, list):
        if isinstance(next_value, list):
            overlap = [value for value in combined if value in next_value]
            # a single common value is returned as-is
            return overlap[0] if len(overlap) == 1 else overlap
        return next_value if next_value in combined else []
    if isinstance(next_value, list):
        return combined if combined in next_value else []
    if combined == next_value:
        return combined
    # empty list means "no common value", as opposed to None meaning "no value at all"
    return []


minimum_value = _null_aware_reduce(_lower)
minimum_value.__doc__ = 'Keep the lowest encountered value, ignoring None.'

maximum_value = _null_aware_reduce(_higher)
maximum_value.__doc__ = 'Keep the highest encountered value, ignoring None.'

list_values = _null_aware_reduce(_list)
list_values.__doc__ = 'Collect all encountered values, ignoring None.'

common_values = _null_aware_reduce(_common)
common_values.__doc__ = 'Keep only values encountered in every non-None input.'


def memoize_one(func: Callable) -> Callable:
    """Remember the result of the most recent call only.

    Arguments are compared by equality (not identity), so structurally equal
    dicts and lists hit the cache.
    """
    last_call: List[Optional[tuple]] = [None]

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        previous = last_call[0]
        if previous is not None and previous[0] == args and previous[1] == kwargs:
            return previous[2]
        result = func(*args, **kwargs)
        last_call[0] = (args, kwargs, result)
        return result

    def cache_clear():
        last_call[0] = None

    wrapper.cache_clear = cache_clear
    return wrapper
