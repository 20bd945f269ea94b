"""Logging setup with per-invocation request IDs."""

import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any

# Request ID of the invocation currently being handled
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")

logger = logging.getLogger("gemini_proxy")


class RequestIDFilter(logging.Filter):
    """Inject request_id from contextvars into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("-")  # type: ignore[attr-defined]
        return True


def generate_request_id() -> str:
    """Generate a short unique request ID."""
    return uuid.uuid4().hex[:12]


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for a function invocation or the dev server.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    fmt = "%(asctime)s %(levelname)-8s [%(request_id)s] %(name)s - %(message)s"

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    handler.addFilter(RequestIDFilter())

    root = logging.getLogger()
    root.setLevel(numeric_level)
    # Remove existing handlers to avoid duplicates on reload
    root.handlers.clear()
    root.addHandler(handler)

    logging.getLogger("httpx").setLevel(max(numeric_level, logging.WARNING))
    logging.getLogger("httpcore").setLevel(max(numeric_level, logging.WARNING))


def log_error(function_name: str, error: BaseException | str, **context: Any) -> None:
    """Log a failed handler step with structured context.

    Args:
        function_name: Name of the handler reporting the error
        error: The exception, or a short description of what failed
        **context: Extra fields (lengths, flags) to attach; never the API key
    """
    is_exception = isinstance(error, BaseException)
    error_type = type(error).__name__ if is_exception else "HandlerError"
    details = ", ".join(f"{key}={value!r}" for key, value in context.items())
    logger.error(
        "[%s] %s: %s (%s)",
        function_name,
        error_type,
        error,
        details,
        exc_info=error if is_exception else None,
    )
