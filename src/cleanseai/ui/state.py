"""Session state transitions for the CleanseAI UI.

Every operation takes the session's :class:`SessionState`, updates it in
place and returns it, so Gradio handlers can pass it straight back into
``gr.State``.  Failures never raise out of these functions; they move the
session to ERROR with a message meant for the user.

Transitions
-----------
- :func:`load_upload` — IDLE (file loaded) or ERROR
- :func:`begin_submission` — PROCESSING, or ERROR when the guard fails
- :func:`complete_submission` — SUCCESS or ERROR
- :func:`reset_session` — IDLE with everything cleared, from any state
"""

import asyncio
import base64
import io
import logging
import mimetypes
from pathlib import Path

import httpx
from PIL import Image

from cleanseai.core.errors import FileReadError, ValidationError

from .models import AppState, DownloadPayload, FileInfo, SessionState
from .proxy_client import ProxyClient
from .validation import derive_download_name, sanitize_filename_input, validate_submission

logger = logging.getLogger(__name__)

FILE_READ_MESSAGE = "Failed to read the selected file."
REQUEST_FAILED_MESSAGE = "An error occurred while processing the image."
NO_IMAGE_MESSAGE = "The AI could not process the image. Please try another one."

# Pillow formats whose MIME entry the provider does not accept.
FORMAT_MIME_OVERRIDES = {"MPO": "image/jpeg"}


def read_image_file(path: Path, name: str) -> FileInfo:
    """Read an image from disk into a :class:`FileInfo`.

    The bytes must decode as an image.  The mime type comes from the decoded
    format, falling back to the filename.  Multi-picture JPEGs (MPO, common
    from phone cameras) are reported as ``image/jpeg``.

    Args:
        path: File to read
        name: Filename to record (as the user knows it)

    Returns:
        FileInfo holding a ``data:`` URI

    Raises:
        FileReadError: If the file cannot be read or is not an image
    """
    try:
        data = path.read_bytes()
        with Image.open(io.BytesIO(data)) as image:
            image_format = image.format
            image.verify()
    except Exception as e:
        logger.error(f"Could not read upload {name}: {e}")
        raise FileReadError(FILE_READ_MESSAGE) from e

    mime_type = (
        FORMAT_MIME_OVERRIDES.get(image_format or "")
        or Image.MIME.get(image_format or "")
        or mimetypes.guess_type(name)[0]
        or "application/octet-stream"
    )
    encoded = base64.b64encode(data).decode("ascii")
    return FileInfo(name=name, mime_type=mime_type, data_uri=f"data:{mime_type};base64,{encoded}")


async def load_upload(
    state: SessionState, path: str | Path, name: str | None = None
) -> SessionState:
    """Load an uploaded file into the session.

    On success any previous result, prompt and error are cleared and the
    session returns to IDLE.  On failure the session moves to ERROR and the
    previously loaded file, if any, is kept.

    Args:
        state: Session state
        path: Location of the uploaded file
        name: Original filename (defaults to the file's own name)

    Returns:
        Updated state
    """
    path = Path(path)
    display_name = sanitize_filename_input(name or path.name)

    try:
        file_info = await asyncio.to_thread(read_image_file, path, display_name)
    except FileReadError as e:
        return state.fail(str(e))

    state.file_info = file_info
    state.processed_image = None
    state.prompt = ""
    state.error = None
    state.app_state = AppState.IDLE
    logger.info(f"Loaded {file_info.name} ({file_info.mime_type})")
    return state


def begin_submission(state: SessionState, prompt: str | None) -> SessionState:
    """Validate a submission and enter PROCESSING.

    No network call happens here.  When the guard fails the session moves
    straight to ERROR.

    Args:
        state: Session state
        prompt: Text from the prompt box

    Returns:
        Updated state (PROCESSING or ERROR)
    """
    try:
        validate_submission(state, prompt)
    except ValidationError as e:
        return state.fail(str(e))

    state.prompt = prompt
    state.error = None
    state.processed_image = None
    state.app_state = AppState.PROCESSING
    return state


async def complete_submission(state: SessionState, proxy: ProxyClient) -> SessionState:
    """Send the pending request and record the outcome.

    Does nothing unless the session is PROCESSING.

    Args:
        state: Session state (after :func:`begin_submission`)
        proxy: Client for the removal endpoint

    Returns:
        Updated state (SUCCESS or ERROR)
    """
    if not state.is_processing or state.file_info is None:
        return state

    file_info = state.file_info
    try:
        response = await proxy.remove_object(
            file_info.base64_data, file_info.mime_type, state.prompt
        )
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Removal request failed: {e}", exc_info=True)
        return state.fail(f"Error: {e}")

    if not response.ok:
        return state.fail(f"Error: {response.text or REQUEST_FAILED_MESSAGE}")

    if response.image:
        state.processed_image = f"data:{file_info.mime_type};base64,{response.image}"
        state.app_state = AppState.SUCCESS
        logger.info(f"Removal succeeded for {file_info.name}")
        return state

    return state.fail(response.text or NO_IMAGE_MESSAGE)


async def submit_removal(
    state: SessionState, prompt: str | None, proxy: ProxyClient
) -> SessionState:
    """Validate, send and record one removal request.

    Args:
        state: Session state
        prompt: Text from the prompt box
        proxy: Client for the removal endpoint

    Returns:
        Updated state (SUCCESS or ERROR)
    """
    state = begin_submission(state, prompt)
    if state.is_processing:
        state = await complete_submission(state, proxy)
    return state


def prepare_download(state: SessionState, suffix: str = "_cleansed") -> DownloadPayload | None:
    """Package the result image for saving.

    Args:
        state: Session state
        suffix: Inserted before the extension of the original filename

    Returns:
        The payload, or None unless the session holds a successful result
    """
    if state.app_state is not AppState.SUCCESS or not state.processed_image or not state.file_info:
        return None

    header, _, payload = state.processed_image.partition(",")
    mime_type = header.removeprefix("data:").split(";", 1)[0] or state.file_info.mime_type
    return DownloadPayload(
        filename=derive_download_name(state.file_info.name, suffix),
        mime_type=mime_type,
        data=base64.b64decode(payload),
    )


def reset_session(state: SessionState) -> SessionState:
    """Return to IDLE and drop the file, result, prompt and error.

    Safe from any state and idempotent.

    Args:
        state: Session state

    Returns:
        Updated state
    """
    state.app_state = AppState.IDLE
    state.file_info = None
    state.processed_image = None
    state.prompt = ""
    state.error = None
    return state
