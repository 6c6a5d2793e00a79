"""CleanseAI - Remove objects and imperfections from images with Gemini."""

__version__ = "0.1.0"

from cleanseai.core.config import CleanseConfig, config
from cleanseai.core.generation_client import GenerationClient, RemovalResult

__all__ = [
    "CleanseConfig",
    "config",
    "GenerationClient",
    "RemovalResult",
]
