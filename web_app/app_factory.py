"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import api_router
from .web import web_router
from .errors import register_error_handlers
from .middleware.headers import ForwardedHeadersMiddleware
from .middleware.logging import LoggingMiddleware


def create_app(
    store_instance,
    cache_instance,
    service_instance,
    config,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        store_instance: Resource store instance
        cache_instance: Kind-hint cache instance
        service_instance: Service instance
        config: Configuration instance

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Short Links",
        description="Short identifiers for links and uploaded files",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    # Store instances in app state for access in routes
    app.state.store = store_instance
    app.state.cache = cache_instance
    app.state.service = service_instance
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(ForwardedHeadersMiddleware)
    app.add_middleware(LoggingMiddleware)

    register_error_handlers(app)

    # API first so /api/* is never taken for an identifier
    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Web"])

    return app
