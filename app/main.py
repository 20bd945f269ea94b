"""FastAPI development server hosting the generate-text and generate-audio functions."""

import logging
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from app import __version__
from app.config import Settings, get_settings
from app.middleware import RequestIDMiddleware
from gemini_proxy.core.logging import log_error, setup_logging
from gemini_proxy.core.operations import generate_audio, generate_text
from gemini_proxy.core.responses import build_error

logger = logging.getLogger(__name__)


def _load_settings_safe() -> Settings | None:
    """Load settings, returning None when config is unavailable (e.g. tests)."""
    try:
        return get_settings()
    except ValueError:
        return None


async def _event_from_request(request: Request) -> dict[str, Any]:
    """Wrap an HTTP request into the event shape the function handlers take."""
    body = await request.body()
    return {
        "httpMethod": request.method,
        "path": request.url.path,
        "headers": dict(request.headers),
        "body": body or None,
    }


def _to_response(envelope: dict[str, Any]) -> Response:
    headers = envelope.get("headers") or {}
    return Response(
        content=envelope["body"],
        status_code=envelope["statusCode"],
        headers={key: value for key, value in headers.items() if key.lower() != "content-type"},
        media_type=headers.get("Content-Type", "application/json"),
    )


async def _run_function(name: str, handler, request: Request) -> Response:  # noqa: ANN001
    try:
        settings = get_settings()
    except ValueError as e:
        log_error(name, e)
        return _to_response(build_error(500, f"Server error: {e}").to_envelope())

    envelope = await handler(await _event_from_request(request), settings.to_proxy_config())
    return _to_response(envelope)


def create_app() -> FastAPI:
    """Build and return the FastAPI application with all middleware configured."""
    settings = _load_settings_safe()

    if settings is not None:
        setup_logging(settings.log_level)

    application = FastAPI(
        title="Gemini Proxy",
        description="Local server for the generate-text and generate-audio functions",
        version=__version__,
    )

    application.add_middleware(RequestIDMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins_list if settings else [],
        allow_credentials=False,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["*"],
    )

    return application


app = create_app()


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"ok": True, "version": __version__}


@app.post("/api/generate-text")
async def generate_text_endpoint(request: Request) -> Response:
    """Run the generate-text function on the raw request body."""
    return await _run_function("generate-text", generate_text, request)


@app.post("/api/generate-audio")
async def generate_audio_endpoint(request: Request) -> Response:
    """Run the generate-audio function on the raw request body."""
    return await _run_function("generate-audio", generate_audio, request)
