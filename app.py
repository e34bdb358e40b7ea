#!/usr/bin/env python3
"""
Main entry point for the short links service.

Concurrency: the server handles many connections at once via async I/O
(FastAPI + asyncpg connection pool + redis.asyncio). Set WORKERS > 1 for
multi-process scaling across CPU cores (each worker has its own DB pool).
Identifier allocation, alias reservation and counter increments stay safe
across workers because they are enforced by the database, not the process.

Usage:
    python app.py

Environment variables:
    DATABASE_URL - PostgreSQL connection URL
    STORE_BACKEND - 'postgres' (default) or 'memory'
    CREATE_TABLES - Set to '1' to create the schema at startup
    REDIS_URL - Redis connection URL (optional)
    BASE_URL - Base URL for short links
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from shortlinks.factory import build_service
from shortlinks.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting short links service...")

    service = await build_service(config, logger)

    app.state.store = service.store
    app.state.cache = service.cache
    app.state.service = service

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down short links service...")
    await service.close()
    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("Short Links Service")
    logger.info(f"Configuration: {config.model_dump(exclude={'database_url', 'redis_url'})}")

    # Instances are attached in lifespan
    app = create_app(
        store_instance=None,
        cache_instance=None,
        service_instance=None,
        config=config,
    )

    app.state.logger = logger
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
