"""Request validation helpers: credential, JSON body and text field checks."""

import json
from typing import Any

from gemini_proxy.core.config import ProxyConfig
from gemini_proxy.core.responses import build_error
from gemini_proxy.core.results import Fail, Ok, Result


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def check_credential(config: ProxyConfig) -> Result[str]:
    """
    Check that the upstream API key is configured.

    A missing key is an operator problem, so it is reported as a 500 rather
    than a client error.

    Args:
        config: Proxy configuration carrying the API key

    Returns:
        Ok with the API key, or Fail with a 500 error
    """
    if not config.api_key:
        return Fail(
            build_error(
                500,
                "API key is not configured. Please set GEMINI_API_KEY in the environment.",
            )
        )
    return Ok(config.api_key)


def parse_body(raw: str | bytes | None) -> Result[Any]:
    """
    Parse a raw request body as strict JSON.

    Args:
        raw: Request body as received from the platform (may be None)

    Returns:
        Ok with the parsed value, unchanged, or Fail with a 400 error
    """
    if not raw:
        return Fail(build_error(400, "Request body must not be empty."))

    try:
        data = json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        return Fail(build_error(400, f"Failed to parse JSON body: {e}"))

    return Ok(data)


def check_text_length(
    value: Any,
    max_length: int = 5000,
    field_name: str = "text",
) -> Result[str]:
    """
    Check that a field is a non-empty string of at most ``max_length`` characters.

    Args:
        value: The field value read from the request payload
        max_length: Maximum allowed length (inclusive)
        field_name: Name used in the error message

    Returns:
        Ok with the value unchanged, or Fail with a 400 error
    """
    if not value or not isinstance(value, str):
        return Fail(build_error(400, f"{field_name} must be non-empty and a string."))

    if len(value) > max_length:
        return Fail(
            build_error(
                400,
                f"{field_name} exceeds maximum length {max_length} (current: {len(value)}).",
            )
        )

    return Ok(value)
