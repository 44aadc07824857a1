import gradio as gr

from catalog_merger.config import get_settings
from catalog_merger.extraction import CHUNK_SIZE, LARGE_TEXT_COLUMN, TRANSLATABLE_COLUMNS
from catalog_merger.handlers_export import export_data_handler
from catalog_merger.handlers_merge import (
    clear_datasets_handler,
    handle_primary_dataset_upload,
    handle_secondary_dataset_upload,
    merge_datasets_handler,
    restore_saved_state,
)
from catalog_merger.handlers_translate import apply_translations_handler, extract_batches_handler
from catalog_merger.io_utils import SUPPORTED_EXTENSIONS
from catalog_merger.logging_config import configure_logging

settings = get_settings()
configure_logging(settings.log_level, json_logs=settings.is_production)

UPLOAD_TYPES = [f".{ext}" for ext in SUPPORTED_EXTENSIONS]

# --- UI Definition ---
with gr.Blocks(title="Catalog Merger") as demo:
    gr.Markdown("# Catalog Merger")
    gr.Markdown("Merge the primary listing with the product information file by SKU, then translate selected columns.")

    # State
    primary_state = gr.State()
    secondary_state = gr.State()
    unified_state = gr.State()
    final_state = gr.State()

    with gr.Tab("Merge"):
        gr.Markdown("### 1. Upload both datasets")
        with gr.Row():
            with gr.Column():
                primary_file = gr.File(label="Primary Dataset (listing)", file_types=UPLOAD_TYPES)
                primary_status = gr.Textbox(label="Primary Status", interactive=False)
            with gr.Column():
                secondary_file = gr.File(label="Secondary Dataset (product information)", file_types=UPLOAD_TYPES)
                secondary_status = gr.Textbox(label="Secondary Status", interactive=False)

        gr.Markdown("### 2. Merge")
        with gr.Row():
            merge_btn = gr.Button("Merge Files", variant="primary")
            clear_btn = gr.Button("Clear Saved Files")
        merge_status = gr.Textbox(label="Merge Status", interactive=False)
        merge_preview = gr.JSON(label="Preview")

        gr.Markdown("### 3. Export")
        with gr.Row():
            merge_format = gr.Radio(choices=["CSV", "XLSX"], value="CSV", label="Output Format")
            merge_filename = gr.Textbox(label="Output Filename (optional)", placeholder="merged")
        merge_export_btn = gr.Button("Export Merged Data")
        merge_download = gr.File(label="Merged Result")
        merge_export_status = gr.Textbox(label="Export Status", interactive=False)

    with gr.Tab("Translate"):
        gr.Markdown("### 1. Extract batches")
        gr.Markdown(
            f"Columns: {', '.join(TRANSLATABLE_COLUMNS)}. "
            f"`{LARGE_TEXT_COLUMN}` is split into files of {CHUNK_SIZE} rows."
        )
        extract_btn = gr.Button("Extract Batches", variant="primary")
        batches_download = gr.File(label="Translation Batches")
        extract_status = gr.Textbox(label="Extraction Status", interactive=False)

        gr.Markdown("### 2. Upload translated files")
        with gr.Row():
            translation_inputs = [
                gr.File(label=f"Translated {column}", file_types=UPLOAD_TYPES, file_count="multiple")
                for column in TRANSLATABLE_COLUMNS
            ]
        apply_btn = gr.Button("Apply Translations", variant="primary")
        apply_status = gr.Textbox(label="Translation Status", interactive=False, lines=5)
        final_preview = gr.JSON(label="Preview")

        gr.Markdown("### 3. Export")
        with gr.Row():
            final_format = gr.Radio(choices=["CSV", "XLSX"], value="XLSX", label="Output Format")
            final_filename = gr.Textbox(label="Output Filename (optional)", placeholder="translated")
        final_export_btn = gr.Button("Export Translated Data")
        final_download = gr.File(label="Translated Result")
        final_export_status = gr.Textbox(label="Export Status", interactive=False)

    primary_file.upload(
        fn=handle_primary_dataset_upload,
        inputs=[primary_file],
        outputs=[primary_state, primary_status],
    )

    secondary_file.upload(
        fn=handle_secondary_dataset_upload,
        inputs=[secondary_file],
        outputs=[secondary_state, secondary_status],
    )

    merge_btn.click(
        fn=merge_datasets_handler,
        inputs=[primary_state, secondary_state],
        outputs=[unified_state, merge_status, merge_preview],
    )

    clear_btn.click(
        fn=clear_datasets_handler,
        inputs=[],
        outputs=[primary_state, secondary_state, unified_state, primary_status, secondary_status, merge_status, merge_preview],
    )

    merge_export_btn.click(
        fn=export_data_handler,
        inputs=[unified_state, merge_format, merge_filename],
        outputs=[merge_download, merge_export_status],
    )

    extract_btn.click(
        fn=extract_batches_handler,
        inputs=[unified_state],
        outputs=[batches_download, extract_status],
    )

    apply_btn.click(
        fn=apply_translations_handler,
        inputs=[unified_state, *translation_inputs],
        outputs=[final_state, apply_status, final_preview],
    )

    final_export_btn.click(
        fn=export_data_handler,
        inputs=[final_state, final_format, final_filename],
        outputs=[final_download, final_export_status],
    )

    demo.load(
        fn=restore_saved_state,
        inputs=[],
        outputs=[
            primary_state,
            secondary_state,
            unified_state,
            primary_status,
            secondary_status,
            merge_status,
            merge_preview,
        ],
    )

if __name__ == "__main__":
    demo.launch(server_name=settings.server_name, server_port=settings.server_port)
