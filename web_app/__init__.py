"""FastAPI web app for the short identifier registry."""

from .app_factory import create_app

__all__ = ["create_app"]
