import logging
import os
from functools import partial

import gradio as gr

from json_schema_inspector.config import SearchOptions
from json_schema_inspector.handlers import (
    build_column_views,
    load_schemas_handler,
    select_in_column_handler,
    selection_changed_handler,
)

logging.basicConfig(
    level=os.environ.get("LOGGER_LEVEL", "INFO").upper(),
    format="%(asctime)s %(name)s %(levelname)s: %(message)s",
)

SEARCH_FIELD_CHOICES = ["title", "description"]
SEARCH_OPTIONS = SearchOptions(fields=SEARCH_FIELD_CHOICES, by_property_name=True)

# --- UI Definition ---
with gr.Blocks(title="JSON Schema Inspector") as demo:
    gr.Markdown("# JSON Schema Inspector")
    gr.Markdown("Upload JSON schemas and browse their properties column by column.")

    # State
    schemas_state = gr.State()
    reference_schemas_state = gr.State(value=[])
    selection_state = gr.State(value=[])

    with gr.Row():
        with gr.Column(scale=1):
            gr.Markdown("### 1. Import")
            schema_files = gr.File(label="Schemas", file_types=[".json"], file_count="multiple")
            reference_files = gr.File(label="Reference Schemas (optional)", file_types=[".json"], file_count="multiple")
            load_btn = gr.Button("Load Schemas", variant="primary")
            status_msg = gr.Textbox(label="Status", interactive=False)

        with gr.Column(scale=1):
            gr.Markdown("### 2. Search")
            search_box = gr.Textbox(label="Search", placeholder=SEARCH_OPTIONS.input_placeholder)
            search_fields = gr.CheckboxGroup(choices=SEARCH_FIELD_CHOICES, value=SEARCH_OPTIONS.fields, label="Search in Fields")
            by_property_name = gr.Checkbox(label="Match Property Names", value=SEARCH_OPTIONS.by_property_name)

    gr.Markdown("### 3. Browse")
    breadcrumbs = gr.Textbox(label="Selection", interactive=False)

    @gr.render(
        inputs=[schemas_state, reference_schemas_state, selection_state, search_box, search_fields, by_property_name],
        triggers=[schemas_state.change, selection_state.change, search_box.submit, search_fields.change, by_property_name.change],
    )
    def render_columns(schemas, references, selected_items, search_filter, fields, match_property_names):
        if not schemas:
            gr.Markdown("No schemas loaded.")
            return

        column_views, error_message = build_column_views(
            schemas, references, selected_items, search_filter, fields, match_property_names
        )
        if error_message:
            gr.Markdown(error_message)
            return

        with gr.Row():
            for view in column_views:
                label = view["title"] or ("Schemas" if view["index"] == 0 else "Properties")
                radio = gr.Radio(
                    choices=view["choices"],
                    value=view["selected"],
                    label=f"{label} *" if view["trailing"] else label,
                    interactive=True,
                    key=f"column-{view['index']}",
                )
                radio.input(
                    fn=partial(select_in_column_handler, view["index"], view["kind"]),
                    inputs=[schemas_state, reference_schemas_state, selection_state, radio],
                    outputs=[selection_state],
                )

    details_table = gr.Dataframe(
        headers=["Field", "Value"],
        datatype=["str", "str"],
        col_count=(2, "fixed"),
        interactive=False,
        label="Details",
    )

    load_btn.click(
        fn=load_schemas_handler,
        inputs=[schema_files, reference_files],
        outputs=[schemas_state, reference_schemas_state, selection_state, status_msg],
    )

    selection_state.change(
        fn=selection_changed_handler,
        inputs=[schemas_state, reference_schemas_state, selection_state],
        outputs=[breadcrumbs, details_table],
    )

if __name__ == "__main__":
    demo.launch()
