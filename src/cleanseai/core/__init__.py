"""Core functionality for object removal.

This package holds everything that runs server-side and talks to the
generation provider:

- **CleanseConfig / config**: Configuration via Pydantic Settings
  (``CLEANSE_*`` environment variables and ``.env``)
- **build_removal_prompt**: The fixed removal instruction template
- **GenerationClient**: Single-shot Gemini call with response normalisation
- **errors**: The error taxonomy shared by the API and the UI

Architecture Overview
---------------------
1. **Configuration Layer** (config.py): loaded once at import; the API key
   is only validated when the API starts.
2. **Prompt Layer** (prompt_builder.py): pure string templating.
3. **Provider Layer** (generation_client.py): one request, one response,
   no retries.

Usage Example
-------------
    from cleanseai.core import config, create_generation_client

    client = create_generation_client(config)
    result = await client.generate(image_b64, "image/png", "the lamp post")
"""

from cleanseai.core.config import CleanseConfig, config
from cleanseai.core.errors import (
    CleanseError,
    EmptyResponse,
    FileReadError,
    StartupError,
    TransportError,
    ValidationError,
)
from cleanseai.core.generation_client import (
    GenerationClient,
    RemovalResult,
    create_generation_client,
)
from cleanseai.core.prompt_builder import build_removal_prompt

__all__ = [
    "CleanseConfig",
    "config",
    "CleanseError",
    "EmptyResponse",
    "FileReadError",
    "StartupError",
    "TransportError",
    "ValidationError",
    "GenerationClient",
    "RemovalResult",
    "create_generation_client",
    "build_removal_prompt",
]
