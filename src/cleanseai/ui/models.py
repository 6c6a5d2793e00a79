"""Data models for CleanseAI UI session state."""

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class AppState(str, Enum):
    """Lifecycle of one session.

    IDLE -> (upload) -> IDLE -> (submit) -> PROCESSING -> SUCCESS | ERROR.
    SUCCESS and ERROR both allow a new submit or a reset.
    """

    IDLE = "IDLE"
    PROCESSING = "PROCESSING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


@dataclass(frozen=True)
class FileInfo:
    """An uploaded image, held as a data URI.

    Replaced wholesale by the next upload; never mutated.
    """

    name: str
    mime_type: str
    data_uri: str

    @property
    def base64_data(self) -> str:
        """The base64 payload without the ``data:<mime>;base64,`` prefix."""
        return self.data_uri.split(",", 1)[1] if "," in self.data_uri else ""


@dataclass(frozen=True)
class DownloadPayload:
    """A result image ready to be saved by the browser."""

    filename: str
    mime_type: str
    data: bytes


@dataclass
class SessionState:
    """Session state for the Gradio UI.

    Each browser session gets its own instance through ``gr.State``.

    Attributes
    ----------
    app_state : AppState
        Where the session is in the upload/process lifecycle
    file_info : FileInfo | None
        The uploaded image, if any
    processed_image : str | None
        Result image as a data URI (only set in SUCCESS)
    prompt : str
        Description submitted with the last request
    error : str | None
        Message shown to the user in ERROR
    download_dir : str | None
        Temporary directory holding this session's download file
    """

    app_state: AppState = AppState.IDLE
    file_info: FileInfo | None = None
    processed_image: str | None = None
    prompt: str = ""
    error: str | None = None
    download_dir: str | None = None

    @property
    def is_processing(self) -> bool:
        return self.app_state is AppState.PROCESSING

    def fail(self, message: str) -> "SessionState":
        """Move to ERROR with a user-facing message."""
        logger.warning(f"Session error: {message}")
        self.error = message
        self.app_state = AppState.ERROR
        return self

    def __repr__(self) -> str:
        """String representation for debugging (no image data)."""
        return (
            f"SessionState(state={self.app_state.value}, "
            f"file={self.file_info.name if self.file_info else None}, "
            f"result={'yes' if self.processed_image else 'no'}, "
            f"error={self.error!r})"
        )


# UI text
APP_TITLE = "CleanseAI"
APP_TAGLINE = (
    "Upload an image, describe what to remove, and let our AI cleanse it "
    "while preserving every detail."
)
PROMPT_LABEL = 'What should be cleansed? (e.g., "the person in the red shirt")'
PROMPT_PLACEHOLDER = "Describe the object or imperfection to remove..."
RESULT_PLACEHOLDER = "Your cleansed image will appear here"
SUBMIT_LABEL = "Cleanse Image"
SUBMIT_BUSY_LABEL = "Cleansing..."
DOWNLOAD_LABEL = "Download Image"
RESET_LABEL = "Start Over"
FOOTER_TEXT = "Powered by Google Gemini."
