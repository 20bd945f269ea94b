"""Tests for configuration management."""

import tempfile
from pathlib import Path

import pytest

from app.config import Settings, get_settings
from gemini_proxy import ProxyConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Make sure the host environment does not leak into settings."""
    for name in (
        "GEMINI_API_KEY",
        "GEMINI_BASE_URL",
        "TEXT_MODEL",
        "TTS_MODEL",
        "TTS_VOICE",
        "TEXT_TIMEOUT_MS",
        "AUDIO_TIMEOUT_MS",
        "MAX_PROMPT_LENGTH",
        "MAX_TTS_TEXT_LENGTH",
        "GATEWAY_PORT",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_settings_defaults():
    """Test default values match the deployed functions."""
    settings = Settings(_env_file=None)
    assert settings.gemini_api_key is None
    assert settings.gemini_base_url == "https://generativelanguage.googleapis.com/v1beta"
    assert settings.text_model == "gemini-2.5-flash-preview-09-2025"
    assert settings.tts_model == "gemini-2.5-flash-preview-tts"
    assert settings.tts_voice == "Kore"
    assert settings.text_timeout_ms == 30000
    assert settings.audio_timeout_ms == 45000
    assert settings.max_prompt_length == 5000
    assert settings.max_tts_text_length == 3000
    assert settings.log_level == "INFO"


def test_settings_loads_from_env_file():
    """Test that settings can be loaded from a .env file."""
    with tempfile.NamedTemporaryFile(mode="w", suffix=".env", delete=False) as f:
        f.write("""GEMINI_API_KEY=file-key
TTS_VOICE=Puck
AUDIO_TIMEOUT_MS=60000
LOG_LEVEL=debug
""")
        env_file = f.name

    try:
        settings = Settings(_env_file=env_file)
        assert settings.gemini_api_key == "file-key"
        assert settings.tts_voice == "Puck"
        assert settings.audio_timeout_ms == 60000
        assert settings.log_level == "DEBUG"
    finally:
        Path(env_file).unlink()


def test_settings_loads_from_environment(monkeypatch):
    """Test that environment variables are read case-insensitively."""
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    monkeypatch.setenv("TEXT_MODEL", "gemini-2.0-flash")

    settings = Settings(_env_file=None)
    assert settings.gemini_api_key == "env-key"
    assert settings.text_model == "gemini-2.0-flash"


@pytest.mark.parametrize(
    "field", ["text_timeout_ms", "audio_timeout_ms", "max_prompt_length", "max_tts_text_length"]
)
def test_settings_rejects_non_positive_values(field):
    """Test that timeouts and limits must be positive."""
    with pytest.raises(ValueError, match="must be positive"):
        Settings(_env_file=None, **{field: 0})


@pytest.mark.parametrize("port", [0, 65536])
def test_settings_rejects_invalid_port(port):
    """Test that the dev server port must be valid."""
    with pytest.raises(ValueError, match="gateway_port must be between"):
        Settings(_env_file=None, gateway_port=port)


@pytest.mark.parametrize("url", ["ftp://example.com", "not-a-url", "https://"])
def test_settings_rejects_invalid_base_url(url):
    """Test that the API root must be an http(s) URL with a host."""
    with pytest.raises(ValueError, match="URL must"):
        Settings(_env_file=None, gemini_base_url=url)


def test_settings_rejects_invalid_log_level():
    """Test that unknown log levels are rejected."""
    with pytest.raises(ValueError, match="log_level must be one of"):
        Settings(_env_file=None, log_level="VERBOSE")


def test_allow_origins_list():
    """Test parsing of comma-separated CORS origins."""
    settings = Settings(_env_file=None, allow_origins="http://localhost:3000, https://app.example.com,")
    assert settings.allow_origins_list == ["http://localhost:3000", "https://app.example.com"]
    assert Settings(_env_file=None).allow_origins_list == []


def test_to_proxy_config():
    """Test conversion into the library configuration."""
    settings = Settings(
        _env_file=None,
        gemini_api_key="k",
        tts_voice="Puck",
        text_timeout_ms=1000,
        max_tts_text_length=200,
    )
    config = settings.to_proxy_config()

    assert isinstance(config, ProxyConfig)
    assert config.api_key == "k"
    assert config.tts_voice == "Puck"
    assert config.text_timeout_ms == 1000
    assert config.max_tts_text_length == 200
    assert config.base_url == settings.gemini_base_url


def test_get_settings_is_cached(monkeypatch):
    """Test that settings are loaded once and reused."""
    monkeypatch.setenv("GEMINI_API_KEY", "first")
    first = get_settings()
    monkeypatch.setenv("GEMINI_API_KEY", "second")
    assert get_settings() is first
    assert get_settings().gemini_api_key == "first"


def test_get_settings_wraps_validation_errors(monkeypatch):
    """Test that invalid settings raise a ValueError with a hint."""
    monkeypatch.setenv("TEXT_TIMEOUT_MS", "-5")
    with pytest.raises(ValueError, match="Failed to load configuration"):
        get_settings()
