"""HTTP client the UI uses to reach the removal endpoint.

The UI never talks to the generation provider directly; it posts the image
and prompt to ``/api/generate`` and lets the API hold the credential.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProxyResponse:
    """Status and decoded JSON body of one removal call."""

    status_code: int
    body: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def image(self) -> str | None:
        return self.body.get("image") or None

    @property
    def text(self) -> str | None:
        return self.body.get("text") or None


class ProxyClient:
    """Posts removal requests to the API.

    Attributes:
        url (str): Full URL of the removal endpoint.
        timeout (float | None): Seconds to wait; ``None`` waits indefinitely.
    """

    def __init__(
        self,
        url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def remove_object(
        self, image_base64: str, mime_type: str, user_prompt: str
    ) -> ProxyResponse:
        """Send one removal request.

        Args:
            image_base64: Base64 image payload (no data URI prefix).
            mime_type: Mime type of the image.
            user_prompt: What to remove.

        Returns:
            The response status and JSON body.

        Raises:
            httpx.HTTPError: The request could not be completed.
            ValueError: The response body is not JSON.
        """
        payload = {
            "base64ImageData": image_base64,
            "mimeType": mime_type,
            "userPrompt": user_prompt,
        }
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(self.url, json=payload)

        body = response.json()
        if not isinstance(body, dict):
            raise ValueError(f"Unexpected response from {self.url}")

        logger.debug(f"Removal endpoint answered {response.status_code}")
        return ProxyResponse(status_code=response.status_code, body=body)
