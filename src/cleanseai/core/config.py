"""Configuration management for CleanseAI.

This module provides centralized configuration management using Pydantic Settings.
Configuration is loaded from environment variables with the CLEANSE_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (CLEANSE_* prefix)
2. .env file in the project root
3. Default values defined in CleanseConfig

The provider credential is the one exception to the prefix rule: it is also
accepted as ``GEMINI_API_KEY`` or plain ``API_KEY`` so existing deployments
keep working.

Example .env file:
    CLEANSE_API_KEY=your-gemini-key
    CLEANSE_MODEL_NAME=gemini-2.5-flash-image-preview
    CLEANSE_SERVER_PORT=7860

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
The credential is *not* validated at import; it is checked once when the API
starts (see :func:`cleanseai.core.generation_client.create_generation_client`),
and a missing key aborts startup.

Usage Example
-------------
    from cleanseai.core.config import config

    print(config.model_name)
    print(config.resolved_proxy_url)

See Also
--------
- .env.example: Template with all available configuration options
"""

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import StartupError


class CleanseConfig(BaseSettings):
    """Main configuration for CleanseAI.

    Attributes
    ----------
    Provider Settings:
        api_key : SecretStr | None
            Gemini API key. Never logged, never sent to the browser.
        model_name : str
            Gemini model used for object removal

    Server Settings:
        server_host : str
            Bind address for uvicorn
        server_port : int
            Port for uvicorn (1024-65535)

    UI Settings:
        ui_server_port : int
            Port used when the UI runs on its own (cleanseai-ui)
        proxy_url : str | None
            URL the UI posts removal requests to. Defaults to the local
            ``/api/generate`` endpoint of this server.
        request_timeout : float | None
            Timeout in seconds for the UI -> proxy call (None waits forever)
        download_suffix : str
            Suffix inserted before the extension of downloaded results

    Logging:
        log_level : str
            Root logging level
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CLEANSE_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # Provider settings
    api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("CLEANSE_API_KEY", "GEMINI_API_KEY", "API_KEY", "api_key"),
        description="Gemini API key (kept server-side only)",
    )
    model_name: str = Field(
        default="gemini-2.5-flash-image-preview",
        description="Gemini model used for object removal",
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )

    # UI settings
    ui_server_port: int = Field(
        default=7861,
        description="Port for the standalone UI (cleanseai-ui)",
        ge=1024,
        le=65535,
    )
    proxy_url: str | None = Field(
        default=None,
        description="Removal endpoint used by the UI (defaults to this server)",
    )
    request_timeout: float | None = Field(
        default=None,
        description="Seconds to wait for the removal endpoint (None = no timeout)",
        gt=0,
    )
    download_suffix: str = Field(
        default="_cleansed",
        description="Suffix inserted before the extension of downloaded images",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Root logging level",
    )

    @property
    def resolved_proxy_url(self) -> str:
        """URL of the removal endpoint as seen from the UI process."""
        if self.proxy_url:
            return self.proxy_url
        return f"http://127.0.0.1:{self.server_port}/api/generate"

    def require_api_key(self) -> str:
        """Return the plain API key.

        Raises:
            StartupError: If no key is configured
        """
        if self.api_key is None or not self.api_key.get_secret_value().strip():
            raise StartupError(
                "API key is not set. Set CLEANSE_API_KEY (or GEMINI_API_KEY) "
                "in the environment or .env file."
            )
        return self.api_key.get_secret_value()


# Global configuration instance
# Loads values from environment variables (CLEANSE_* prefix) and .env file.
config = CleanseConfig()
