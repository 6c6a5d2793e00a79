"""Gemini generation client for object removal.

This module provides :class:`GenerationClient`, the single point of contact
with the external generation provider.  One call to :meth:`generate` sends
one request and normalises the provider's heterogeneous reply into a
:class:`RemovalResult`.

Key Responsibilities
--------------------
- **Request construction** — the request carries two parts, the inline image
  bytes with their declared mime type followed by the instruction text built
  by :func:`~cleanseai.core.prompt_builder.build_removal_prompt`.  Both the
  IMAGE and TEXT response modalities are requested.
- **Response normalisation** — the parts of the first candidate are scanned
  in provider order.  Inline data populates ``image`` (re-encoded as base64
  text), text populates ``text``.  A later part of the same kind replaces an
  earlier one.
- **Failure semantics** — a reply with nothing usable raises
  :class:`~cleanseai.core.errors.EmptyResponse`; any failure of the call
  itself raises :class:`~cleanseai.core.errors.TransportError`.  There are no
  retries: one attempt per invocation.

Usage
-----
::

    from cleanseai.core.config import config
    from cleanseai.core.generation_client import create_generation_client

    client = create_generation_client(config)
    result = await client.generate(image_b64, "image/png", "the red car")

See Also
--------
- :mod:`cleanseai.api.main` — the proxy endpoint that owns the client.
"""

from __future__ import annotations

import base64
import logging
from typing import Any

from google import genai
from google.genai import types
from pydantic import BaseModel, Field

from .config import CleanseConfig
from .errors import EmptyResponse, TransportError
from .prompt_builder import build_removal_prompt

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash-image-preview"


class RemovalResult(BaseModel):
    """Normalised output of one generation call.

    On a successful call at least one field is set.  The same shape is used
    as the proxy endpoint's response body, where error responses carry the
    message in ``text`` and ``image`` is null.

    Attributes:
        image: Base64-encoded image bytes (no data URI prefix), or ``None``.
        text: Text returned by the model, or ``None``.
    """

    image: str | None = Field(default=None, description="Base64 image data, if any.")
    text: str | None = Field(default=None, description="Text returned by the model, if any.")

    def is_empty(self) -> bool:
        """True when neither an image nor text is present."""
        return not self.image and not self.text


class GenerationClient:
    """Wraps a ``google-genai`` client for single-shot object removal.

    The client is stateless between calls and safe to share across
    concurrent requests.

    Attributes:
        model (str): Gemini model identifier used for every request.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        client: genai.Client | None = None,
    ) -> None:
        """Initialise the client.

        Args:
            api_key: Provider credential.  Held only by the underlying
                ``genai.Client``; never logged.
            model: Gemini model identifier.
            client: Pre-built ``genai.Client`` (tests inject a mock here).
        """
        self.model = model
        self._client = client if client is not None else genai.Client(api_key=api_key)

    # -- Public interface ---------------------------------------------------

    async def generate(self, image_base64: str, mime_type: str, user_prompt: str) -> RemovalResult:
        """Ask the model to remove the described element from the image.

        Args:
            image_base64: Base64 image payload (without ``data:`` prefix).
            mime_type: Declared mime type of the image, e.g. ``image/png``.
            user_prompt: The user's description of what to remove.

        Returns:
            A :class:`RemovalResult` with at least one field set.

        Raises:
            EmptyResponse: The provider returned no image and no text.
            TransportError: The request could not be built or the provider
                call failed.
        """
        try:
            image_part = types.Part.from_bytes(
                data=base64.b64decode(image_base64, validate=True),
                mime_type=mime_type,
            )
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=[
                    image_part,
                    types.Part.from_text(text=build_removal_prompt(user_prompt)),
                ],
                config=types.GenerateContentConfig(
                    response_modalities=[types.Modality.IMAGE, types.Modality.TEXT],
                ),
            )
        except Exception as e:
            logger.error(f"Error calling Gemini API: {e}", exc_info=True)
            raise TransportError(f"Failed to process image: {e}", cause=e) from e

        result = parse_response(response)
        if result.is_empty():
            logger.warning(f"Model {self.model} returned an empty response")
            raise EmptyResponse()

        logger.info(
            f"Removal complete (image={'yes' if result.image else 'no'}, "
            f"text={'yes' if result.text else 'no'})"
        )
        return result


def parse_response(response: Any) -> RemovalResult:
    """Extract image and text from a ``generate_content`` response.

    Only the first candidate is inspected.  Missing candidates, content or
    parts yield an empty result rather than an exception; the caller decides
    whether empty is an error.

    Args:
        response: A ``GenerateContentResponse`` (or anything shaped like one).

    Returns:
        The normalised result, possibly with both fields ``None``.
    """
    result = RemovalResult()

    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return result

    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []

    # Last-write-wins per kind, in provider order.
    for part in parts:
        inline_data = getattr(part, "inline_data", None)
        if inline_data is not None and inline_data.data:
            data = inline_data.data
            if isinstance(data, bytes):
                data = base64.b64encode(data).decode("ascii")
            result.image = data
        elif getattr(part, "text", None):
            result.text = part.text

    return result


def create_generation_client(config: CleanseConfig) -> GenerationClient:
    """Build a :class:`GenerationClient` from application configuration.

    Args:
        config: Application configuration.

    Returns:
        A ready-to-use client.

    Raises:
        StartupError: If no API key is configured.
    """
    api_key = config.require_api_key()
    logger.info(f"Generation client configured for model {config.model_name}")
    return GenerationClient(api_key=api_key, model=config.model_name)
