from __future__ import annotations

from typing import Any, List, Optional, Sequence


def is_absolute_uri(uri: str) -> bool:
    """Whether the given reference carries its own scheme and authority (e.g. 'https://...')."""
    return isinstance(uri, str) and '://' in uri


def derive_base_uri(uri: str) -> str:
    """Strip the last path segment (plus any query/fragment) from an absolute URI.

    - 'https://base.org/schemas/main.json' -> 'https://base.org/schemas/'
    - 'https://base.org' -> 'https://base.org/'
    """
    clean_uri = uri.split('?')[0].split('#')[0]
    last_slash = clean_uri.rfind('/')
    if last_slash > clean_uri.find('://') + 2:
        return clean_uri[:last_slash + 1]
    return f"{clean_uri}/"


class OptionCounter:
    """Mutable index into one level of nested options.

    Traversal decrements the counter for every alternative it passes, so the
    entry at which the counter reads zero is the selected one.
    """

    __slots__ = ('index',)

    def __init__(self, index: int):
        self.index = index

    def __repr__(self):
        return f"OptionCounter({self.index})"


def create_option_target(option_indexes: Optional[Sequence[Any]]) -> Optional[List[OptionCounter]]:
    """Convert an option path (list of ints) into fresh mutable counters.

    Already converted targets are passed through as-is; None stays None.
    """
    if option_indexes is None:
        return None
    return [index if isinstance(index, OptionCounter) else OptionCounter(index) for index in option_indexes]


def get_index_permutations_for_options(options: Any) -> List[List[int]]:
    """List every option path leading to a single (leaf) option."""
    nested = getattr(options, 'options', None)
    if nested is None:
        return []
    permutations: List[List[int]] = []
    for index, entry in enumerate(nested):
        if entry.is_empty():
            permutations.append([index])
        else:
            permutations.extend([index] + tail for tail in get_index_permutations_for_options(entry))
    return permutations


def is_option_path_valid(option_indexes: Sequence[int], options: Any) -> bool:
    """Whether the option path exists in the options hierarchy and ends at a leaf."""
    part = options
    for index in option_indexes:
        nested = getattr(part, 'options', None) if part is not None else None
        if nested is not None and 0 <= index < len(nested):
            part = nested[index]
        else:
            part = None
    return part is not None and part.options is None


def is_option_path(selection: Any) -> bool:
    return isinstance(selection, (list, tuple))
