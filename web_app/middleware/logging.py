"""Request logging middleware."""

import logging
import time
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from shortlinks.common.logging_config import get_logger


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    # Unknown identifiers are routine traffic
    if status_code >= 400 and status_code != 404:
        return logging.WARNING
    return logging.INFO


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request with the client, status and duration."""

    def __init__(self, app, logger: Optional[logging.Logger] = None):
        super().__init__(app)
        self.logger = logger or get_logger("web")

    async def dispatch(self, request: Request, call_next: Callable):
        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        forwarded = getattr(request.state, "forwarded", None)
        client = forwarded.client if forwarded and forwarded.client else None
        if client is None:
            client = request.client.host if request.client else "unknown"

        self.logger.log(
            _level_for(response.status_code),
            f"{request.method} {request.url.path} from {client} - "
            f"{response.status_code} in {duration_ms:.2f}ms",
        )

        return response
