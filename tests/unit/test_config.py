"""Tests for cleanseai.core.config — configuration management.

Tests cover:
- Default values for all configuration fields.
- Environment variable overrides via the CLEANSE_ prefix.
- API key aliases and the startup check on the key.
- Pydantic validation constraints (port range, timeout).
"""

from __future__ import annotations

import pytest

from cleanseai.core.config import CleanseConfig
from cleanseai.core.errors import StartupError


class TestConfigDefaults:
    """Verify that CleanseConfig provides sensible defaults."""

    def test_default_model(self):
        """Default model should be the Gemini image preview model."""
        cfg = CleanseConfig(_env_file=None)
        assert cfg.model_name == "gemini-2.5-flash-image-preview"

    def test_default_server(self):
        """Default server should bind 0.0.0.0:7860."""
        cfg = CleanseConfig(_env_file=None)
        assert cfg.server_host == "0.0.0.0"
        assert cfg.server_port == 7860

    def test_default_api_key_is_none(self):
        """No API key is configured unless provided."""
        cfg = CleanseConfig(_env_file=None)
        assert cfg.api_key is None

    def test_default_timeout_is_none(self):
        """The UI waits for the proxy indefinitely by default."""
        cfg = CleanseConfig(_env_file=None)
        assert cfg.request_timeout is None

    def test_default_download_suffix(self):
        cfg = CleanseConfig(_env_file=None)
        assert cfg.download_suffix == "_cleansed"


class TestConfigEnvironment:
    """Verify environment variable loading."""

    def test_prefixed_env_override(self, monkeypatch):
        """CLEANSE_MODEL_NAME should override the default model."""
        monkeypatch.setenv("CLEANSE_MODEL_NAME", "other-model")
        cfg = CleanseConfig(_env_file=None)
        assert cfg.model_name == "other-model"

    @pytest.mark.parametrize("env_name", ["CLEANSE_API_KEY", "GEMINI_API_KEY", "API_KEY"])
    def test_api_key_aliases(self, monkeypatch, env_name):
        """The API key is accepted under each supported variable name."""
        monkeypatch.setenv(env_name, "secret-from-env")
        cfg = CleanseConfig(_env_file=None)
        assert cfg.require_api_key() == "secret-from-env"

    def test_env_file_is_read(self, temp_dir):
        """Values in a .env file should be loaded."""
        env_file = temp_dir / ".env"
        env_file.write_text("CLEANSE_API_KEY=from-dotenv\nCLEANSE_SERVER_PORT=9000\n")
        cfg = CleanseConfig(_env_file=str(env_file))
        assert cfg.require_api_key() == "from-dotenv"
        assert cfg.server_port == 9000


class TestApiKey:
    """Verify the credential check and that the key stays hidden."""

    def test_require_api_key_missing_raises(self):
        """A missing key is a startup error."""
        cfg = CleanseConfig(_env_file=None)
        with pytest.raises(StartupError, match="API key is not set"):
            cfg.require_api_key()

    def test_require_api_key_blank_raises(self):
        """A whitespace-only key counts as missing."""
        cfg = CleanseConfig(_env_file=None, api_key="   ")
        with pytest.raises(StartupError):
            cfg.require_api_key()

    def test_require_api_key_returns_value(self, test_config: CleanseConfig):
        assert test_config.require_api_key() == "test-api-key"

    def test_key_not_in_repr_or_dump(self, test_config: CleanseConfig):
        """The key must not appear when the config is printed or logged."""
        assert "test-api-key" not in repr(test_config)
        assert "test-api-key" not in str(test_config.model_dump())


class TestProxyUrl:
    """Verify resolution of the UI -> API URL."""

    def test_defaults_to_local_server(self, test_config: CleanseConfig):
        assert test_config.resolved_proxy_url == "http://127.0.0.1:8123/api/generate"

    def test_explicit_url_wins(self):
        cfg = CleanseConfig(_env_file=None, proxy_url="http://api.internal/api/generate")
        assert cfg.resolved_proxy_url == "http://api.internal/api/generate"


class TestConfigValidation:
    """Verify Pydantic validation constraints on config fields."""

    def test_invalid_port_too_low(self):
        """Server port below 1024 should raise a validation error."""
        with pytest.raises(Exception):
            CleanseConfig(_env_file=None, server_port=80)

    def test_invalid_port_too_high(self):
        """Server port above 65535 should raise a validation error."""
        with pytest.raises(Exception):
            CleanseConfig(_env_file=None, server_port=70000)

    def test_invalid_timeout(self):
        """A non-positive timeout should raise a validation error."""
        with pytest.raises(Exception):
            CleanseConfig(_env_file=None, request_timeout=0)

    def test_valid_timeout(self):
        cfg = CleanseConfig(_env_file=None, request_timeout=30)
        assert cfg.request_timeout == 30.0
