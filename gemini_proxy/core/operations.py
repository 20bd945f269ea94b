"""Text and speech generation handlers built on the shared helpers."""

import logging
from typing import Any

from gemini_proxy.core.client import build_model_url, call_upstream
from gemini_proxy.core.config import ProxyConfig
from gemini_proxy.core.logging import log_error
from gemini_proxy.core.responses import build_error, build_success
from gemini_proxy.core.results import Fail
from gemini_proxy.core.validation import check_credential, check_text_length, parse_body

logger = logging.getLogger(__name__)


def _field(payload: Any, name: str) -> Any:
    """Read a field from the request payload; non-object payloads have no fields."""
    if isinstance(payload, dict):
        return payload.get(name)
    return None


def _body_preview(event: dict[str, Any]) -> str:
    body = event.get("body") if isinstance(event, dict) else None
    if not body:
        return "null"
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    return body[:100]


def _inline_audio(data: Any) -> Any:
    """Return ``candidates[0].content.parts[0].inlineData`` or None."""
    try:
        return data["candidates"][0]["content"]["parts"][0]["inlineData"]
    except (KeyError, IndexError, TypeError):
        return None


async def generate_text(event: dict[str, Any], config: ProxyConfig) -> dict[str, Any]:
    """
    Generate text from a prompt and an optional system instruction.

    Expects a JSON body ``{"prompt": str, "systemInstruction"?: str}`` and
    returns the upstream response unchanged on success.

    Args:
        event: Platform request event; only ``body`` is read
        config: Proxy configuration

    Returns:
        Response envelope dict (``statusCode``, optional ``headers``, ``body``)
    """
    try:
        credential = check_credential(config)
        if isinstance(credential, Fail):
            return credential.error.to_envelope()

        parsed = parse_body(event.get("body"))
        if isinstance(parsed, Fail):
            return parsed.error.to_envelope()

        prompt = check_text_length(_field(parsed.value, "prompt"), config.max_prompt_length, "prompt")
        if isinstance(prompt, Fail):
            return prompt.error.to_envelope()

        payload: dict[str, Any] = {
            "contents": [{"parts": [{"text": prompt.value}]}],
        }

        system_instruction = _field(parsed.value, "systemInstruction")
        if system_instruction not in (None, ""):
            instruction = check_text_length(
                system_instruction, config.max_prompt_length, "systemInstruction"
            )
            if isinstance(instruction, Fail):
                return instruction.error.to_envelope()
            payload["systemInstruction"] = {"parts": [{"text": instruction.value}]}

        url = build_model_url(config.base_url, config.text_model, credential.value)
        result = await call_upstream(url, payload, config.text_timeout_ms)
        if isinstance(result, Fail):
            log_error(
                "generate-text",
                "Text API call failed",
                status_code=result.error.status_code,
                prompt_length=len(prompt.value),
            )
            return result.error.to_envelope()

        return build_success(result.value)

    except Exception as e:
        log_error("generate-text", e, event_body=_body_preview(event))
        return build_error(500, f"Server error: {e}").to_envelope()


async def generate_audio(event: dict[str, Any], config: ProxyConfig) -> dict[str, Any]:
    """
    Synthesize speech for a piece of text.

    Expects a JSON body ``{"text": str}``. The upstream response is returned
    unchanged once it is confirmed to carry inline audio data.

    Args:
        event: Platform request event; only ``body`` is read
        config: Proxy configuration

    Returns:
        Response envelope dict (``statusCode``, optional ``headers``, ``body``)
    """
    try:
        credential = check_credential(config)
        if isinstance(credential, Fail):
            return credential.error.to_envelope()

        parsed = parse_body(event.get("body"))
        if isinstance(parsed, Fail):
            return parsed.error.to_envelope()

        text = check_text_length(_field(parsed.value, "text"), config.max_tts_text_length, "text")
        if isinstance(text, Fail):
            return text.error.to_envelope()

        payload: dict[str, Any] = {
            "contents": [{"parts": [{"text": text.value}]}],
            "generationConfig": {
                "responseModalities": ["AUDIO"],
                "speechConfig": {
                    "voiceConfig": {
                        "prebuiltVoiceConfig": {"voiceName": config.tts_voice},
                    },
                },
            },
            "model": config.tts_model,
        }

        url = build_model_url(config.base_url, config.tts_model, credential.value)
        result = await call_upstream(url, payload, config.audio_timeout_ms)
        if isinstance(result, Fail):
            log_error(
                "generate-audio",
                "TTS API call failed",
                status_code=result.error.status_code,
                text_length=len(text.value),
                voice_name=config.tts_voice,
            )
            return result.error.to_envelope()

        audio = _inline_audio(result.value)
        if not isinstance(audio, dict) or not audio.get("data"):
            log_error(
                "generate-audio",
                "Upstream response has no audio data",
                has_data=bool(result.value),
                has_candidates=isinstance(result.value, dict) and bool(result.value.get("candidates")),
            )
            return build_error(
                500, "Audio generation failed: upstream did not return valid audio data."
            ).to_envelope()

        logger.debug("Generated %s audio for %d characters", audio.get("mimeType", "unknown"), len(text.value))
        return build_success(result.value)

    except Exception as e:
        log_error("generate-audio", e, event_body=_body_preview(event))
        return build_error(500, f"Server error: {e}").to_envelope()
