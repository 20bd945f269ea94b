"""Configuration passed explicitly into the proxy handlers."""

from dataclasses import dataclass

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_TEXT_MODEL = "gemini-2.5-flash-preview-09-2025"
DEFAULT_TTS_MODEL = "gemini-2.5-flash-preview-tts"
DEFAULT_TTS_VOICE = "Kore"


@dataclass(frozen=True)
class ProxyConfig:
    """Configuration for the text and audio proxy handlers.

    The library never reads environment variables itself; the hosting layer
    (or a caller using the library directly) builds one of these and passes
    it to each handler.

    Args:
        api_key: Credential for the Generative Language API. ``None`` or an
            empty string is reported as a configuration error per request.
        base_url: API root, without trailing ``/models/...`` path
        text_model: Model used by the generate-text handler
        tts_model: Model used by the generate-audio handler
        tts_voice: Prebuilt voice name for speech generation
        text_timeout_ms: Upstream timeout for text generation (milliseconds)
        audio_timeout_ms: Upstream timeout for speech generation (milliseconds)
        max_prompt_length: Maximum length of ``prompt`` and ``systemInstruction``
        max_tts_text_length: Maximum length of the text to synthesize
    """

    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    text_model: str = DEFAULT_TEXT_MODEL
    tts_model: str = DEFAULT_TTS_MODEL
    tts_voice: str = DEFAULT_TTS_VOICE
    text_timeout_ms: int = 30000
    audio_timeout_ms: int = 45000
    max_prompt_length: int = 5000
    max_tts_text_length: int = 3000
