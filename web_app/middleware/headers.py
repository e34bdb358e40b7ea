"""Forwarded headers middleware."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable

from shortlinks.common.headers import parse_forwarded


class ForwardedHeadersMiddleware(BaseHTTPMiddleware):
    """Parses proxy headers once into ``request.state.forwarded``."""

    async def dispatch(self, request: Request, call_next: Callable):
        request.state.forwarded = parse_forwarded(request.headers)
        return await call_next(request)
