"""Error taxonomy for CleanseAI.

Every exception carries a message that is safe to show to the user. Only
:class:`StartupError` is fatal; the others put a session into the error
state and wait for the user to resubmit or start over.
"""


class CleanseError(Exception):
    """Base class for all CleanseAI errors."""

    pass


class ValidationError(CleanseError):
    """User input is incomplete (no upload, blank prompt, missing fields)."""

    pass


class FileReadError(CleanseError):
    """An uploaded file could not be read or decoded as an image."""

    pass


class EmptyResponse(CleanseError):
    """The provider answered but returned neither an image nor text."""

    def __init__(self, message: str = "The API returned an empty response."):
        super().__init__(message)


class TransportError(CleanseError):
    """The call to the provider failed.

    The underlying exception is chained and also kept on ``cause`` so callers
    can inspect it without walking ``__cause__``.
    """

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class StartupError(CleanseError):
    """Configuration required to serve requests is missing."""

    pass
