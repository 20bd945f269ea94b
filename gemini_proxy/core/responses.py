"""Standardized success and error response shaping."""

import json
from typing import Any

from gemini_proxy.core.results import ErrorResponse

JSON_HEADERS: dict[str, str] = {
    "Content-Type": "application/json",
    "Cache-Control": "no-cache, no-store, must-revalidate",
}


def build_success(data: Any) -> dict[str, Any]:
    """
    Wrap upstream data into a success envelope.

    The body is the plain JSON serialization of ``data``; nothing is added or
    removed, so ``json.loads(body) == data``.

    Args:
        data: Any JSON-serializable value

    Returns:
        Envelope dict with ``statusCode``, ``headers`` and ``body``
    """
    return {
        "statusCode": 200,
        "headers": dict(JSON_HEADERS),
        "body": json.dumps(data),
    }


def build_error(status_code: int, message: str) -> ErrorResponse:
    """Create an error response with the standard ``{"error": {"message": ...}}`` body."""
    return ErrorResponse(status_code=status_code, message=message)
