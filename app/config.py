"""Configuration management - loads environment variables into typed settings."""

from functools import lru_cache
from urllib.parse import urlparse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gemini_proxy.core.config import (
    DEFAULT_BASE_URL,
    DEFAULT_TEXT_MODEL,
    DEFAULT_TTS_MODEL,
    DEFAULT_TTS_VOICE,
    ProxyConfig,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Upstream credential
    gemini_api_key: str | None = Field(
        default=None,
        description="API key for the Generative Language API (required per request, not at startup)",
    )

    # Upstream API
    gemini_base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Generative Language API root",
    )
    text_model: str = Field(default=DEFAULT_TEXT_MODEL, description="Model for /generate-text")
    tts_model: str = Field(default=DEFAULT_TTS_MODEL, description="Model for /generate-audio")
    tts_voice: str = Field(default=DEFAULT_TTS_VOICE, description="Prebuilt voice for speech generation")

    # Timeouts (milliseconds)
    text_timeout_ms: int = Field(default=30000, description="Upstream timeout for text generation")
    audio_timeout_ms: int = Field(
        default=45000,
        description="Upstream timeout for speech generation (synthesis takes longer)",
    )

    # Input limits
    max_prompt_length: int = Field(default=5000, description="Max length of prompt and systemInstruction")
    max_tts_text_length: int = Field(default=3000, description="Max length of text to synthesize")

    # Dev server
    gateway_host: str = Field(default="127.0.0.1", description="Host for the dev server to listen on")
    gateway_port: int = Field(default=8888, description="Port for the dev server to listen on")
    allow_origins: str = Field(
        default="",
        description="CORS allowed origins (comma-separated list, empty = no CORS)",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )

    @field_validator("gateway_port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port is in valid range."""
        if not (1 <= v <= 65535):
            raise ValueError(f"gateway_port must be between 1 and 65535, got {v}")
        return v

    @field_validator("text_timeout_ms", "audio_timeout_ms", "max_prompt_length", "max_tts_text_length")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate timeouts and limits are positive."""
        if v <= 0:
            raise ValueError(f"Value must be positive, got {v}")
        return v

    @field_validator("gemini_base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"URL must use http or https scheme, got {v}")
        if not parsed.netloc:
            raise ValueError(f"URL must have a valid host, got {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}, got {v}")
        return v.upper()

    @property
    def allow_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        if not self.allow_origins:
            return []
        return [origin.strip() for origin in self.allow_origins.split(",") if origin.strip()]

    def to_proxy_config(self) -> ProxyConfig:
        """Build the configuration object the handlers take."""
        return ProxyConfig(
            api_key=self.gemini_api_key,
            base_url=self.gemini_base_url,
            text_model=self.text_model,
            tts_model=self.tts_model,
            tts_voice=self.tts_voice,
            text_timeout_ms=self.text_timeout_ms,
            audio_timeout_ms=self.audio_timeout_ms,
            max_prompt_length=self.max_prompt_length,
            max_tts_text_length=self.max_tts_text_length,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Settings are loaded from environment variables and .env file on first call.
    Subsequent calls return the cached instance.

    Raises:
        ValueError: If settings are invalid.

    Returns:
        Settings: The validated settings instance.
    """
    try:
        return Settings()
    except Exception as e:
        raise ValueError(
            f"Failed to load configuration: {e}\n"
            "Please check your .env file and ensure all settings are valid."
        ) from e
