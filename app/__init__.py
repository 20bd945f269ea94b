"""Hosting layer: serverless entry points and a local development server."""

from gemini_proxy import __version__

__all__ = ["__version__"]
