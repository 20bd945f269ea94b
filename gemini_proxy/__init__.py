"""Gemini Proxy - serverless handlers for text and speech generation.

Validates incoming requests, forwards them to the Google Generative Language
API with the server-side API key, and returns the upstream response wrapped
in a function response envelope.

Usage:
    >>> from gemini_proxy import ProxyConfig, generate_text
    >>>
    >>> config = ProxyConfig(api_key="...")
    >>> event = {"body": '{"prompt": "Write a haiku about autumn"}'}
    >>> response = await generate_text(event, config)
    >>> print(response["statusCode"], response["body"])
"""

__version__ = "1.2.0"

from gemini_proxy.core.client import build_model_url, call_upstream
from gemini_proxy.core.config import ProxyConfig
from gemini_proxy.core.operations import generate_audio, generate_text
from gemini_proxy.core.responses import JSON_HEADERS, build_error, build_success
from gemini_proxy.core.results import ErrorResponse, Fail, Ok, Result
from gemini_proxy.core.validation import check_credential, check_text_length, parse_body

__all__ = [
    "__version__",
    # Configuration
    "ProxyConfig",
    # Handlers
    "generate_text",
    "generate_audio",
    # Helpers
    "check_credential",
    "parse_body",
    "check_text_length",
    "call_upstream",
    "build_model_url",
    "build_success",
    "build_error",
    "JSON_HEADERS",
    # Results
    "ErrorResponse",
    "Ok",
    "Fail",
    "Result",
]
