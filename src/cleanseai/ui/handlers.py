"""Gradio event handlers for the CleanseAI UI.

Each handler runs one session transition from :mod:`cleanseai.ui.state` and
translates the resulting :class:`SessionState` into component updates.  The
tuple returned by :func:`render_session` is ordered like
:data:`VIEW_OUTPUTS`; handlers append the updated state as the last element.
"""

import base64
import io
import logging
import shutil
import tempfile
from pathlib import Path

import gradio as gr
from PIL import Image

from cleanseai.core.config import config

from .models import (
    RESULT_PLACEHOLDER,
    SUBMIT_BUSY_LABEL,
    SUBMIT_LABEL,
    DownloadPayload,
    SessionState,
)
from .proxy_client import ProxyClient
from .state import (
    begin_submission,
    complete_submission,
    load_upload,
    prepare_download,
    reset_session,
)

logger = logging.getLogger(__name__)

# Order of the component updates produced by render_session().
VIEW_OUTPUTS = (
    "original_view",
    "result_view",
    "status",
    "error",
    "prompt",
    "submit",
    "download",
)


def get_proxy_client() -> ProxyClient:
    """Build the client used to reach the removal endpoint."""
    return ProxyClient(config.resolved_proxy_url, timeout=config.request_timeout)


def data_uri_to_image(data_uri: str | None) -> Image.Image | None:
    """Decode a ``data:`` URI into a PIL image for display.

    Args:
        data_uri: ``data:<mime>;base64,<payload>`` or None

    Returns:
        Loaded image, or None if there is nothing to show or it does not decode
    """
    if not data_uri or "," not in data_uri:
        return None
    try:
        image = Image.open(io.BytesIO(base64.b64decode(data_uri.split(",", 1)[1])))
        image.load()
    except Exception as e:
        logger.warning(f"Could not decode image for display: {e}")
        return None
    return image


def write_download(payload: DownloadPayload, state: SessionState) -> str:
    """Write a download payload where Gradio can serve it.

    Each session owns one temporary directory, created on first use and
    reused afterwards.  Earlier downloads in it are removed, so a session
    never holds more than one file.

    Args:
        payload: Result image and filename
        state: Session state (records the directory)

    Returns:
        Path of the written file
    """
    if state.download_dir is None or not Path(state.download_dir).is_dir():
        state.download_dir = tempfile.mkdtemp(prefix="cleanseai_")

    directory = Path(state.download_dir)
    for stale in directory.iterdir():
        if stale.name != payload.filename:
            stale.unlink(missing_ok=True)

    target = directory / payload.filename
    target.write_bytes(payload.data)
    return str(target)


def discard_download(state: SessionState) -> None:
    """Delete the session's download directory, if it has one."""
    if state.download_dir is not None:
        shutil.rmtree(state.download_dir, ignore_errors=True)
        state.download_dir = None


def render_session(state: SessionState, prompt_value: str | None = None) -> tuple:
    """Translate session state into component updates.

    Args:
        state: Session state
        prompt_value: New prompt box text, or None to leave it untouched

    Returns:
        Tuple of updates in :data:`VIEW_OUTPUTS` order
    """
    processing = state.is_processing
    result_image = data_uri_to_image(state.processed_image)

    if processing:
        status = f"⏳ *{SUBMIT_BUSY_LABEL}*"
    elif result_image is None:
        status = f"*{RESULT_PLACEHOLDER}*"
    else:
        status = "✅ **Done!**"

    if state.error:
        error_update = gr.update(value=f"❌ **An error occurred:**\n\n{state.error}", visible=True)
    else:
        error_update = gr.update(value="", visible=False)

    if prompt_value is None:
        prompt_update = gr.update(interactive=not processing)
    else:
        prompt_update = gr.update(value=prompt_value, interactive=not processing)

    payload = prepare_download(state, config.download_suffix)
    if payload is not None:
        download_update = gr.update(value=write_download(payload, state), interactive=True)
    else:
        download_update = gr.update(value=None, interactive=False)

    return (
        data_uri_to_image(state.file_info.data_uri) if state.file_info else None,
        result_image,
        status,
        error_update,
        prompt_update,
        gr.update(
            value=SUBMIT_BUSY_LABEL if processing else SUBMIT_LABEL,
            interactive=not processing and state.file_info is not None,
        ),
        download_update,
    )


async def handle_upload(file_path: str | None, state: SessionState) -> tuple:
    """Load a newly uploaded file.

    Args:
        file_path: Path of the uploaded file (None when the upload is cleared)
        state: Session state

    Returns:
        View updates followed by the updated state
    """
    if state is None:
        state = SessionState()
    if not file_path:
        return (*render_session(state), state)

    state = await load_upload(state, file_path)
    if state.error:
        return (*render_session(state), state)
    discard_download(state)
    return (*render_session(state, prompt_value=""), state)


async def handle_submit(prompt: str, state: SessionState):
    """Run a removal request, showing the processing view while it runs.

    This is an async generator: the first yield disables the controls, the
    second shows the outcome.

    Args:
        prompt: Text from the prompt box
        state: Session state

    Yields:
        View updates followed by the updated state
    """
    if state is None:
        state = SessionState()

    state = begin_submission(state, prompt)
    yield (*render_session(state), state)

    if not state.is_processing:
        return

    logger.info(f"Submitting removal request: {state!r}")
    state = await complete_submission(state, get_proxy_client())
    yield (*render_session(state), state)


def handle_reset(state: SessionState) -> tuple:
    """Start over: clear the session and the upload component.

    Args:
        state: Session state

    Returns:
        Upload-component update, view updates, then the updated state
    """
    if state is None:
        state = SessionState()
    discard_download(state)
    state = reset_session(state)
    return (gr.update(value=None), *render_session(state, prompt_value=""), state)
