"""Serverless entry points: ``handler(event, context)`` wrappers around the async handlers."""

import asyncio
import logging
from typing import Any, Awaitable, Callable

from app.config import get_settings
from gemini_proxy.core.config import ProxyConfig
from gemini_proxy.core.logging import generate_request_id, log_error, request_id_var, setup_logging
from gemini_proxy.core.operations import generate_audio, generate_text
from gemini_proxy.core.responses import build_error

logger = logging.getLogger(__name__)

Handler = Callable[[dict[str, Any], ProxyConfig], Awaitable[dict[str, Any]]]

_logging_configured = False


def _request_id(context: Any) -> str:
    """Use the platform's request ID when the context carries one."""
    if context is None:
        return generate_request_id()
    if isinstance(context, dict):
        rid = context.get("awsRequestId") or context.get("aws_request_id")
    else:
        rid = getattr(context, "aws_request_id", None)
    return rid or generate_request_id()


def _invoke(name: str, handler: Handler, event: dict[str, Any], context: Any) -> dict[str, Any]:
    global _logging_configured

    token = request_id_var.set(_request_id(context))
    try:
        try:
            settings = get_settings()
        except ValueError as e:
            log_error(name, e)
            return build_error(500, f"Server error: {e}").to_envelope()

        if not _logging_configured:
            setup_logging(settings.log_level)
            _logging_configured = True

        response = asyncio.run(handler(event, settings.to_proxy_config()))
        logger.info("%s -> %s", name, response["statusCode"])
        return response
    finally:
        request_id_var.reset(token)


def generate_text_handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    """Entry point for the generate-text function."""
    return _invoke("generate-text", generate_text, event, context)


def generate_audio_handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    """Entry point for the generate-audio function."""
    return _invoke("generate-audio", generate_audio, event, context)
