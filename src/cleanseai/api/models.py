"""Pydantic request and response models for the removal API.

Models
------
RemoveRequest
    Payload for ``POST /api/generate``.  Field names on the wire are
    camelCase (``base64ImageData``, ``mimeType``, ``userPrompt``).
RemovalResult
    Response body for every outcome of ``POST /api/generate``.  Re-exported
    from :mod:`cleanseai.core.generation_client`.
HealthResponse
    Response body for ``GET /api/health``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from cleanseai.core.generation_client import RemovalResult


class RemoveRequest(BaseModel):
    """Request body for the ``POST /api/generate`` endpoint.

    Every field is declared optional so that an incomplete body reaches the
    handler, which answers with the API's own 400 message instead of a
    framework validation error.  :meth:`is_complete` is the real check.

    Attributes:
        base64_image_data: Base64 image payload without the data URI prefix.
        mime_type: Mime type of the uploaded image.
        user_prompt: Description of the element to remove.
    """

    model_config = ConfigDict(populate_by_name=True)

    base64_image_data: str | None = Field(
        default=None,
        alias="base64ImageData",
        description="Base64 image data (no 'data:' prefix).",
    )
    mime_type: str | None = Field(
        default=None,
        alias="mimeType",
        description="Image mime type, e.g. 'image/png'.",
    )
    user_prompt: str | None = Field(
        default=None,
        alias="userPrompt",
        description="What should be removed from the image.",
    )

    def is_complete(self) -> bool:
        """True when all three fields are present and non-empty."""
        return bool(self.base64_image_data and self.mime_type and self.user_prompt)


class HealthResponse(BaseModel):
    """Response body for ``GET /api/health``."""

    status: str = "ok"
    version: str
    model: str


__all__ = ["HealthResponse", "RemovalResult", "RemoveRequest"]
