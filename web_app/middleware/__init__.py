"""Middleware for the web app."""

from .headers import ForwardedHeadersMiddleware
from .logging import LoggingMiddleware

__all__ = ["ForwardedHeadersMiddleware", "LoggingMiddleware"]
