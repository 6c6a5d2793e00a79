"""Shared pytest fixtures for CleanseAI tests."""

import io
import shutil
import tempfile
from pathlib import Path
from typing import Generator
from unittest.mock import AsyncMock, Mock, patch

import pytest
from PIL import Image

from cleanseai.core.config import CleanseConfig
from cleanseai.core.generation_client import GenerationClient, RemovalResult
from cleanseai.ui.models import AppState, FileInfo, SessionState
from cleanseai.ui.proxy_client import ProxyResponse

# Environment variables that would leak a real configuration into tests.
_CONFIG_ENV_VARS = (
    "CLEANSE_API_KEY",
    "GEMINI_API_KEY",
    "API_KEY",
    "CLEANSE_MODEL_NAME",
    "CLEANSE_SERVER_PORT",
    "CLEANSE_PROXY_URL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove configuration variables from the environment for every test."""
    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config() -> CleanseConfig:
    """Create a test configuration that ignores any .env file.

    Returns:
        CleanseConfig instance for testing
    """
    return CleanseConfig(
        _env_file=None,
        api_key="test-api-key",
        model_name="test-image-model",
        server_port=8123,
    )


def make_image_bytes(image_format: str = "PNG", size: tuple[int, int] = (4, 4)) -> bytes:
    """Encode a small solid-colour image."""
    buffer = io.BytesIO()
    Image.new("RGB", size, color=(200, 30, 30)).save(buffer, format=image_format)
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    """Bytes of a tiny PNG image."""
    return make_image_bytes("PNG")


@pytest.fixture
def png_file(temp_dir: Path, png_bytes: bytes) -> Path:
    """A tiny PNG written to disk as ``photo.png``."""
    path = temp_dir / "photo.png"
    path.write_bytes(png_bytes)
    return path


@pytest.fixture
def file_info() -> FileInfo:
    """FileInfo for a PNG called ``photo.png``."""
    return FileInfo(
        name="photo.png",
        mime_type="image/png",
        data_uri="data:image/png;base64,b3JpZ2luYWw=",
    )


@pytest.fixture
def loaded_state(file_info: FileInfo) -> SessionState:
    """Session with an image loaded and nothing submitted yet."""
    return SessionState(app_state=AppState.IDLE, file_info=file_info)


class FakeProxy:
    """Stand-in for ProxyClient that records calls.

    Attributes:
        calls: Arguments of every remove_object call
        response: What to return (ignored when ``error`` is set)
        error: Exception to raise instead of returning
    """

    def __init__(self, response: ProxyResponse | None = None, error: Exception | None = None):
        self.calls: list[tuple[str, str, str]] = []
        self.response = response or ProxyResponse(200, {"image": "cmVzdWx0", "text": None})
        self.error = error

    async def remove_object(self, image_base64: str, mime_type: str, user_prompt: str):
        self.calls.append((image_base64, mime_type, user_prompt))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_proxy() -> FakeProxy:
    """Proxy that answers with an image."""
    return FakeProxy()


@pytest.fixture
def mock_generation_client() -> Mock:
    """GenerationClient mock that returns an image."""
    client = Mock(spec=GenerationClient)
    client.model = "test-image-model"
    client.generate = AsyncMock(return_value=RemovalResult(image="aW1hZ2U=", text=None))
    return client


@pytest.fixture
def test_client(mock_generation_client):
    """FastAPI TestClient with the generation client mocked out."""
    from fastapi.testclient import TestClient

    from cleanseai.api.main import app

    with patch(
        "cleanseai.api.main.create_generation_client",
        return_value=mock_generation_client,
    ):
        with TestClient(app) as client:
            yield client
