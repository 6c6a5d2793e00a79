"""CleanseAI — FastAPI Application.

This module defines the FastAPI ``app`` instance that proxies object-removal
requests to the generation provider, and the ``main()`` CLI function that
launches the uvicorn server with the Gradio UI mounted alongside it.

Architecture
------------
The proxy is stateless:

- **Credential handling** — the API key is read once from
  :data:`~cleanseai.core.config.config` during startup and handed to a
  :class:`~cleanseai.core.generation_client.GenerationClient` kept on
  ``app.state``.  A missing key aborts startup.  The key never appears in a
  log line or a response.
- **Error mapping** — domain errors raised by the handler are translated to
  HTTP responses by exception handlers, always with the
  ``{"text": ..., "image": null}`` body shape the UI expects.

Endpoints
---------
========  ====================  ======================================
Method    Path                  Purpose
========  ====================  ======================================
POST      ``/api/generate``     Remove an object from an image
GET       ``/api/health``       Liveness and configured model
========  ====================  ======================================

Status codes for ``/api/generate``:

- 200 — ``{"image": ..., "text": ...}``
- 400 — missing parameter (``"Missing required parameters"``)
- 405 — any method but POST (``Allow: POST``)
- 500 — empty provider response or provider failure

Usage
-----
CLI (installed entry point)::

    cleanseai

Direct invocation::

    python -m cleanseai.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import (
    http_exception_handler,
    request_validation_exception_handler,
)
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cleanseai import __version__
from cleanseai.api.models import HealthResponse, RemovalResult, RemoveRequest
from cleanseai.core.config import config
from cleanseai.core.errors import CleanseError, ValidationError
from cleanseai.core.generation_client import GenerationClient, create_generation_client

logger = logging.getLogger(__name__)

GENERATE_PATH = "/api/generate"
MISSING_PARAMETERS = "Missing required parameters"

# ---------------------------------------------------------------------------
# Application lifecycle: generation client setup.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the generation client on startup.

    Raises:
        StartupError: If no API key is configured.  The server does not
            start serving requests in that case.
    """
    app.state.generation_client = create_generation_client(config)
    logger.info(f"CleanseAI API {__version__} ready (model: {config.model_name}).")

    yield

    app.state.generation_client = None
    logger.info("CleanseAI API shut down.")


# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="CleanseAI",
    description="Remove objects and imperfections from images with Gemini.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _result_response(status_code: int, text: str, headers: dict | None = None) -> JSONResponse:
    """Build an error response in the ``{"text", "image"}`` shape."""
    body = RemovalResult(text=text, image=None).model_dump()
    return JSONResponse(status_code=status_code, content=body, headers=headers)


# ---------------------------------------------------------------------------
# Exception handlers.
# ---------------------------------------------------------------------------


@app.exception_handler(CleanseError)
async def cleanse_error_handler(request: Request, exc: CleanseError) -> JSONResponse:
    """Map domain errors to HTTP responses.

    ``ValidationError`` is the caller's fault (400); everything else raised
    while serving a request is a server-side failure (500).
    """
    status_code = 400 if isinstance(exc, ValidationError) else 500
    return _result_response(status_code, str(exc))


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    """Answer 405 in the API's body shape; defer everything else to FastAPI."""
    if exc.status_code == 405:
        headers = dict(exc.headers or {})
        headers.setdefault("Allow", "POST")
        return _result_response(405, f"Method {request.method} Not Allowed", headers=headers)
    return await http_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report unparseable removal requests as missing parameters."""
    if request.url.path == GENERATE_PATH:
        logger.warning(f"Rejected malformed removal request: {exc.errors()}")
        return _result_response(400, MISSING_PARAMETERS)
    return await request_validation_exception_handler(request, exc)


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.post(GENERATE_PATH, response_model=RemovalResult)
async def generate(req: RemoveRequest, request: Request) -> RemovalResult:
    """Remove the described element from the uploaded image.

    This endpoint:

    1. Checks that the image data, mime type and prompt are all present.
    2. Forwards them to the generation client (one attempt, no retries).
    3. Returns the normalised result.

    Args:
        req: The removal request.
        request: The incoming request (for ``app.state``).

    Returns:
        The :class:`RemovalResult` with at least one field set.

    Raises:
        ValidationError: A required field is missing or empty (400).
        EmptyResponse: The provider returned nothing usable (500).
        TransportError: The provider call failed (500).
    """
    if not req.is_complete():
        logger.warning("Rejected removal request with missing parameters")
        raise ValidationError(MISSING_PARAMETERS)

    client: GenerationClient = request.app.state.generation_client
    logger.info(f"Removal requested ({req.mime_type}, {len(req.base64_image_data)} base64 chars)")

    return await client.generate(req.base64_image_data, req.mime_type, req.user_prompt)


@app.get("/api/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Return liveness information and the configured model."""
    return HealthResponse(version=__version__, model=config.model_name)


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server with the Gradio UI mounted.

    Reads host and port from :data:`~cleanseai.core.config.config`
    (``CLEANSE_SERVER_HOST`` / ``CLEANSE_SERVER_PORT``).  Defaults to
    ``0.0.0.0:7860``.  The UI is served under ``/ui`` and ``/`` redirects
    there.

    This function is registered as the ``cleanseai`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    from cleanseai.ui.app import configure_logging, mount_ui

    configure_logging(config.log_level)
    mount_ui(app)

    uvicorn.run(
        app,
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
