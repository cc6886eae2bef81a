from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from .breadcrumbs import build_breadcrumbs
from .columns import BuildArrayPropertiesFunction, RenderColumn, Selection, create_render_data_builder
from .config import as_breadcrumbs_options, as_parser_config, as_search_options
from .details import collect_form_fields, get_trailing_selection
from .search import create_filter_function_for_column, filtering_by_fields, filtering_by_property_name
from .utils import memoize_one

logger = logging.getLogger(__name__)

# (selected_items, render_data, breadcrumbs) -> None
SelectionListener = Callable[[List[Selection], Dict[str, List[RenderColumn]], Optional[List[str]]], None]


def _is_clearing(selected_item: Any) -> bool:
    return selected_item is None or selected_item == ''


def _create_filtered_items_setter(search_options, search_filter: Optional[str]) -> Callable[[RenderColumn], None]:
    if search_options is not None and search_options.is_enabled() and search_filter:
        # "filter_by" takes precedence over "fields"
        if search_options.filter_by is not None:
            flat_search_filter = search_options.filter_by(search_filter)
        else:
            flat_search_filter = filtering_by_fields(search_options.fields, search_filter)
        property_name_filter = filtering_by_property_name(search_filter) if search_options.by_property_name else None
        if flat_search_filter is not None or property_name_filter is not None:
            if property_name_filter is None:
                get_filtered_items = create_filter_function_for_column(flat_search_filter)
            else:
                get_filtered_items = create_filter_function_for_column(flat_search_filter, property_name_filter)

            def set_filtered_items(column: RenderColumn) -> None:
                column.filtered_items = get_filtered_items(column)

            return set_filtered_items

    # search is inactive: no left-over results
    def clear_filtered_items(column: RenderColumn) -> None:
        column.filtered_items = None

    return clear_filtered_items


class InspectorSession:
    """Current state of browsing a set of schemas: selection, search and derived columns.

    Render data and search results are remembered for the most recent inputs only;
    a session must not be shared between different sets of schemas.
    """

    def __init__(
        self,
        schemas: Dict[str, Any],
        reference_schemas: Optional[List[Any]] = None,
        parser_config: Any = None,
        build_array_properties: Optional[BuildArrayPropertiesFunction] = None,
        search_options: Any = None,
        breadcrumbs_options: Any = None,
        default_selected_items: Optional[List[Selection]] = None,
        on_select: Optional[SelectionListener] = None,
    ):
        self.schemas = schemas
        self.reference_schemas = reference_schemas or []
        self.parser_config = as_parser_config(parser_config)
        self.build_array_properties = build_array_properties
        self.search_options = as_search_options(search_options)
        self.breadcrumbs_options = as_breadcrumbs_options(breadcrumbs_options)
        self.selected_items: List[Selection] = list(default_selected_items or [])
        self.search_filter: Optional[str] = None
        self.on_select = on_select
        self._get_render_data_for_selection = memoize_one(create_render_data_builder(self.on_select_in_column))
        self._get_filtered_items_setter = memoize_one(_create_filtered_items_setter)

    def _render_data_for(self, selected_items: List[Selection]) -> Dict[str, List[RenderColumn]]:
        return self._get_render_data_for_selection(
            self.schemas,
            self.reference_schemas,
            list(selected_items),
            self.parser_config,
            self.build_array_properties,
        )

    def get_render_data(self) -> Dict[str, List[RenderColumn]]:
        """Columns for the current selection, with `filtered_items` according to the current search."""
        render_data = self._render_data_for(self.selected_items)
        set_filtered_items = self._get_filtered_items_setter(self.search_options, self.search_filter)
        for column in render_data['column_data']:
            set_filtered_items(column)
        return render_data

    def on_select_in_column(self, column_index: int):
        """Create the selection callback `on_select(event, selected_item)` for one column."""

        def on_select(_event: Any, selected_item: Optional[Selection]) -> None:
            self.select(column_index, selected_item)

        return on_select

    def select(self, column_index: int, selected_item: Optional[Selection]) -> bool:
        """Select an item (or clear the selection) in the given column. Returns whether anything changed."""
        if len(self.selected_items) == column_index and _is_clearing(selected_item):
            # nothing was selected in that column yet
            return False
        if len(self.selected_items) == column_index + 1 and self.selected_items[column_index] == selected_item:
            # re-selecting the current selection
            return False
        new_selection = self.selected_items[:column_index]
        if not _is_clearing(selected_item):
            new_selection.append(selected_item)
        self.selected_items = new_selection
        logger.debug("Selection changed to %r", new_selection)
        if self.on_select is not None:
            render_data = self.get_render_data()
            self.on_select(list(new_selection), render_data, self.get_breadcrumbs(render_data))
        return True

    def set_search_filter(self, search_filter: Optional[str]) -> Dict[str, List[RenderColumn]]:
        self.search_filter = search_filter or None
        return self.get_render_data()

    def get_breadcrumbs(self, render_data: Optional[Dict[str, List[RenderColumn]]] = None) -> Optional[List[str]]:
        """Breadcrumb texts of the current selection; None if breadcrumbs are not configured."""
        if self.breadcrumbs_options is None:
            return None
        if render_data is None:
            render_data = self._render_data_for(self.selected_items)
        return build_breadcrumbs(render_data['column_data'], self.breadcrumbs_options)

    def get_details(self) -> List[Dict[str, Any]]:
        """Labelled details of the trailing selection (empty if nothing is selected)."""
        column_data = self._render_data_for(self.selected_items)['column_data']
        item_schema_group, column_index = get_trailing_selection(column_data)
        if item_schema_group is None:
            return []
        return collect_form_fields(item_schema_group, column_data, column_index)
