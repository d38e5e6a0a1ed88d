import logging

import gradio as gr

from json_value_toolkit.handlers import (
    PRETTY_INDENT,
    combine_json_handler,
    compare_json_handler,
    dedupe_records_handler,
    flatten_json_handler,
    format_json_handler,
    load_json_upload,
    navigate_json_handler,
    validate_json_handler,
)

# --- UI Definition ---
with gr.Blocks(title="JSON Value Toolkit") as demo:
    gr.Markdown("# JSON Value Toolkit")
    gr.Markdown("Paste or upload JSON to format, compare, combine, navigate and deduplicate it.")

    with gr.Tab("Codec"):
        with gr.Row():
            with gr.Column(scale=1):
                file_input = gr.File(label="Upload JSON File", file_types=[".json"])
                codec_input = gr.Code(label="JSON Input", language="json")
                indent_input = gr.Number(label="Indent (0 for compact)", value=PRETTY_INDENT, precision=0)
                with gr.Row():
                    validate_btn = gr.Button("Validate")
                    format_btn = gr.Button("Format", variant="primary")
            with gr.Column(scale=1):
                codec_status = gr.Textbox(label="Status", interactive=False)
                codec_output = gr.Code(label="Formatted Output", language="json", interactive=False)

        file_input.upload(
            fn=load_json_upload,
            inputs=[file_input],
            outputs=[codec_input, codec_status],
        )
        validate_btn.click(fn=validate_json_handler, inputs=[codec_input], outputs=[codec_status])
        format_btn.click(
            fn=format_json_handler,
            inputs=[codec_input, indent_input],
            outputs=[codec_output, codec_status],
        )

    with gr.Tab("Compare"):
        with gr.Row():
            left_input = gr.Code(label="Left", language="json")
            right_input = gr.Code(label="Right", language="json")
        compare_btn = gr.Button("Compare", variant="primary")
        compare_status = gr.Textbox(label="Result", interactive=False)

        compare_btn.click(
            fn=compare_json_handler,
            inputs=[left_input, right_input],
            outputs=[compare_status],
        )

    with gr.Tab("Combine"):
        with gr.Row():
            target_input = gr.Code(label="Target", language="json")
            source_input = gr.Code(label="Source / Updates", language="json")
        combine_mode = gr.Radio(choices=["Recursive", "Shallow"], value="Recursive", label="Combine Mode")
        combine_btn = gr.Button("Combine", variant="primary")
        combine_status = gr.Textbox(label="Status", interactive=False)
        combine_output = gr.JSON(label="Combined")

        combine_btn.click(
            fn=combine_json_handler,
            inputs=[target_input, source_input, combine_mode],
            outputs=[combine_output, combine_status],
        )

    with gr.Tab("Navigate"):
        with gr.Row():
            with gr.Column(scale=1):
                navigate_input = gr.Code(label="Document", language="json")
                path_input = gr.Textbox(label="Key Path", placeholder="a.b.c")
                key_input = gr.Textbox(label="Find First Key (overrides path)", placeholder="id")
                with gr.Row():
                    navigate_btn = gr.Button("Look Up", variant="primary")
                    flatten_btn = gr.Button("Flatten")
                drop_empty_input = gr.Checkbox(label="Drop null and empty values when flattening", value=False)
            with gr.Column(scale=1):
                navigate_status = gr.Textbox(label="Status", interactive=False)
                navigate_output = gr.JSON(label="Result")

        navigate_btn.click(
            fn=navigate_json_handler,
            inputs=[navigate_input, path_input, key_input],
            outputs=[navigate_output, navigate_status],
        )
        flatten_btn.click(
            fn=flatten_json_handler,
            inputs=[navigate_input, drop_empty_input],
            outputs=[navigate_output, navigate_status],
        )

    with gr.Tab("Normalize"):
        gr.Markdown("Records may be a JSON array of objects or an array of such arrays.")
        records_input = gr.Code(label="Records", language="json")
        dedupe_key_input = gr.Textbox(label="Unique Key", placeholder="id")
        dedupe_btn = gr.Button("Deduplicate", variant="primary")
        dedupe_status = gr.Textbox(label="Status", interactive=False)
        with gr.Row():
            dedupe_output = gr.JSON(label="Unique Records")
            distinct_output = gr.JSON(label="Distinct Key Values")

        dedupe_btn.click(
            fn=dedupe_records_handler,
            inputs=[records_input, dedupe_key_input],
            outputs=[dedupe_output, distinct_output, dedupe_status],
        )

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    demo.launch()
