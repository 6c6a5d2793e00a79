"""Validation utilities for CleanseAI UI inputs."""

import logging

from cleanseai.core.errors import ValidationError

from .models import SessionState

logger = logging.getLogger(__name__)

NO_FILE_MESSAGE = "Please upload an image first."
NO_PROMPT_MESSAGE = "Please describe what you want to remove."


def validate_submission(state: SessionState, prompt: str | None) -> None:
    """Check that a removal request can be sent.

    Args:
        state: Current session state
        prompt: Text from the prompt box

    Raises:
        ValidationError: If no image is loaded or the prompt is blank
    """
    if state.file_info is None:
        raise ValidationError(NO_FILE_MESSAGE)

    if not prompt or not prompt.strip():
        raise ValidationError(NO_PROMPT_MESSAGE)


def derive_download_name(original_name: str, suffix: str = "_cleansed") -> str:
    """Build the filename for a downloaded result.

    The suffix goes before the last extension; a name without an extension
    simply gets the suffix appended.

    Args:
        original_name: Filename of the uploaded image
        suffix: Text to insert

    Returns:
        e.g. ``"photo.png"`` -> ``"photo_cleansed.png"``
    """
    stem, dot, extension = original_name.rpartition(".")
    if not dot or not stem:
        return f"{original_name}{suffix}"
    return f"{stem}{suffix}.{extension}"


def sanitize_filename_input(text: str, max_length: int = 100) -> str:
    """Sanitize a client-supplied filename.

    Long names are shortened in the stem so the extension survives.

    Args:
        text: Filename as reported by the browser
        max_length: Longest name returned

    Returns:
        Filename safe to use on disk
    """
    invalid_chars = '<>:"/\\|?*'
    for char in invalid_chars:
        text = text.replace(char, "_")

    if len(text) <= max_length:
        return text

    stem, dot, extension = text.rpartition(".")
    if not dot or not stem or len(extension) + 1 >= max_length:
        return text[:max_length]
    return f"{stem[: max_length - len(extension) - 1]}.{extension}"
