"""Gradio UI for CleanseAI."""

import logging

import gradio as gr
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from cleanseai.core.config import config

from .handlers import handle_reset, handle_submit, handle_upload
from .models import (
    APP_TAGLINE,
    APP_TITLE,
    DOWNLOAD_LABEL,
    FOOTER_TEXT,
    PROMPT_LABEL,
    PROMPT_PLACEHOLDER,
    RESET_LABEL,
    RESULT_PLACEHOLDER,
    SUBMIT_LABEL,
    SessionState,
)

logger = logging.getLogger(__name__)

UI_PATH = "/ui"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the application."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def create_ui() -> gr.Blocks:
    """Create the Gradio UI.

    Returns:
        Gradio Blocks app
    """
    app = gr.Blocks(title=APP_TITLE, analytics_enabled=False)

    with app:
        # Session state - one instance per user
        session_state = gr.State(SessionState())

        gr.Markdown(f"# {APP_TITLE}\n{APP_TAGLINE}")

        upload_input = gr.File(
            label="Upload Image",
            file_types=["image"],
            type="filepath",
        )

        with gr.Row():
            original_view = gr.Image(label="Original Image", type="pil", interactive=False)
            result_view = gr.Image(label="Result", type="pil", interactive=False)

        status_output = gr.Markdown(value=f"*{RESULT_PLACEHOLDER}*")

        prompt_input = gr.Textbox(
            label=PROMPT_LABEL,
            placeholder=PROMPT_PLACEHOLDER,
            lines=1,
        )

        error_output = gr.Markdown(visible=False)

        with gr.Row():
            submit_btn = gr.Button(SUBMIT_LABEL, variant="primary", interactive=False)
            download_btn = gr.DownloadButton(DOWNLOAD_LABEL, variant="secondary", interactive=False)
            reset_btn = gr.Button(RESET_LABEL, variant="stop")

        gr.Markdown(f"<center><small>{FOOTER_TEXT}</small></center>")

        view_outputs = [
            original_view,
            result_view,
            status_output,
            error_output,
            prompt_input,
            submit_btn,
            download_btn,
        ]

        upload_input.upload(
            fn=handle_upload,
            inputs=[upload_input, session_state],
            outputs=[*view_outputs, session_state],
        )

        submit_btn.click(
            fn=handle_submit,
            inputs=[prompt_input, session_state],
            outputs=[*view_outputs, session_state],
        )
        prompt_input.submit(
            fn=handle_submit,
            inputs=[prompt_input, session_state],
            outputs=[*view_outputs, session_state],
        )

        reset_btn.click(
            fn=handle_reset,
            inputs=[session_state],
            outputs=[upload_input, *view_outputs, session_state],
        )

    return app


def mount_ui(app: FastAPI, path: str = UI_PATH) -> FastAPI:
    """Mount the Gradio UI on the API app and redirect ``/`` to it.

    Args:
        app: The FastAPI application
        path: Mount point for the UI

    Returns:
        The same FastAPI application
    """

    async def index() -> RedirectResponse:
        return RedirectResponse(url=f"{path}/")

    app.add_api_route("/", index, methods=["GET"], include_in_schema=False)
    logger.info(f"Mounting Gradio UI at {path}")
    return gr.mount_gradio_app(app, create_ui(), path=path)


def main():
    """Launch the UI on its own, talking to a separately running API."""
    configure_logging(config.log_level)
    logger.info("Starting CleanseAI UI...")
    logger.info(f"Removal endpoint: {config.resolved_proxy_url}")

    app = create_ui()
    app.launch(
        server_name=config.server_host,
        server_port=config.ui_server_port,
        show_error=True,
        inbrowser=False,
    )


if __name__ == "__main__":
    main()
