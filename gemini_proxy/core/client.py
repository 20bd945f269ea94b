"""Timeout-bounded POST requests to the Generative Language API."""

import asyncio
import logging
from typing import Any

import httpx

from gemini_proxy.core.responses import build_error
from gemini_proxy.core.results import Fail, Ok, Result

logger = logging.getLogger(__name__)


def build_model_url(base_url: str, model: str, api_key: str) -> str:
    """
    Build the ``generateContent`` URL for a model, with the API key as query parameter.

    Args:
        base_url: API root (e.g. https://generativelanguage.googleapis.com/v1beta)
        model: Model identifier
        api_key: Credential passed as the ``key`` query parameter

    Returns:
        Full request URL
    """
    url = httpx.URL(f"{base_url.rstrip('/')}/models/{model}:generateContent")
    return str(url.copy_add_param("key", api_key))


async def _post_json(url: str, payload: Any, timeout_s: float) -> httpx.Response:
    async with httpx.AsyncClient(timeout=httpx.Timeout(timeout_s)) as client:
        return await client.post(
            url,
            json=payload,
            headers={"Content-Type": "application/json"},
        )


async def call_upstream(
    url: str,
    payload: Any,
    timeout_ms: int = 30000,
) -> Result[Any]:
    """
    POST a JSON payload upstream and return the parsed JSON response.

    The whole exchange is bounded by ``timeout_ms``. When the deadline passes
    the in-flight request is cancelled and no retry is attempted.

    Args:
        url: Full request URL (credential included as query parameter)
        payload: JSON-serializable request body
        timeout_ms: Deadline for the call in milliseconds

    Returns:
        Ok with the upstream JSON unchanged, or Fail with:
        504 on timeout, the upstream status on a non-2xx response,
        500 on an unparseable response body or a network failure
    """
    timeout_s = timeout_ms / 1000
    # Never log the API key.
    target = httpx.URL(url).copy_remove_param("key")

    try:
        logger.debug("Calling upstream %s (timeout %dms)", target, timeout_ms)
        response = await asyncio.wait_for(_post_json(url, payload, timeout_s), timeout=timeout_s)
    except (asyncio.TimeoutError, httpx.TimeoutException):
        logger.error("Upstream %s timed out after %dms", target, timeout_ms)
        return Fail(build_error(504, f"Request timed out ({timeout_ms}ms). Please try again later."))
    except httpx.RequestError as e:
        logger.error("Network error calling upstream %s: %s", target, e)
        return Fail(build_error(500, f"Network error: {e}"))

    if not response.is_success:
        error_text = response.text
        logger.error("Upstream %s returned %d", target, response.status_code)
        return Fail(
            build_error(
                response.status_code,
                f"Upstream API error ({response.status_code}): {error_text}",
            )
        )

    try:
        data = response.json()
    except ValueError as e:
        logger.error("Upstream %s returned a non-JSON body: %s", target, e)
        return Fail(build_error(500, f"Failed to parse upstream API response: {e}"))

    return Ok(data)
