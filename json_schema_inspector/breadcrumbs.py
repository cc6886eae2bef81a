from __future__ import annotations

from typing import Any, Callable, List, Optional

from .columns import RenderColumn, RenderOptionsColumn
from .config import BreadcrumbsOptions, as_breadcrumbs_options


def create_breadcrumb_builder(breadcrumbs_options: Any = None) -> Callable[[RenderColumn, int], Optional[str]]:
    """Create a function deriving the breadcrumb text for a single column (and its index).

    Options columns never produce a breadcrumb. If `mutate_name` returns something
    falsy, the breadcrumb is skipped as well.
    """
    options = as_breadcrumbs_options(breadcrumbs_options) or BreadcrumbsOptions()

    def build_breadcrumb(column: RenderColumn, index: int) -> Optional[str]:
        if isinstance(column, RenderOptionsColumn):
            return None
        name = column.selected_item
        if options.mutate_name is not None:
            name = options.mutate_name(name, column, index)
        if not name:
            return None
        if index == 0:
            return f"{options.prefix}{name}"
        if options.skip_separator is not None and options.skip_separator(name, column, index):
            return name
        return f"{options.separator}{name}"

    return build_breadcrumb


def build_breadcrumbs(column_data: List[RenderColumn], breadcrumbs_options: Any = None) -> List[str]:
    """Breadcrumb texts for all columns with a selection, in column order."""
    build_breadcrumb = create_breadcrumb_builder(breadcrumbs_options)
    breadcrumbs = [build_breadcrumb(column, index) for index, column in enumerate(column_data)]
    return [breadcrumb for breadcrumb in breadcrumbs if breadcrumb]


def breadcrumbs_text(column_data: List[RenderColumn], breadcrumbs_options: Any = None) -> str:
    return ''.join(build_breadcrumbs(column_data, breadcrumbs_options))
