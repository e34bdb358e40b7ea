"""Wiring of store, cache and service from configuration."""

import logging

from .aliases import AliasRegistry
from .allocator import IdentifierAllocator
from .database.base import ResourceStore
from .database.cache import KindHintCache
from .database.memory import InMemoryResourceStore
from .database.postgres import PostgresResourceStore
from .service import ShortLinkService


def build_store(config, logger: logging.Logger) -> ResourceStore:
    """Create the configured resource store (not yet connected)."""
    if config.store_backend == "memory":
        logger.info("Using in-memory resource store")
        return InMemoryResourceStore(logger=logger)

    logger.info(f"Using PostgreSQL store at {config.database_url}")
    return PostgresResourceStore(
        db_config=config.database_url,
        pool_max_size=config.pool_max_size,
        connection_timeout_seconds=config.connection_timeout_seconds,
        create_tables=config.should_create_tables,
        logger=logger,
    )


async def build_service(config, logger: logging.Logger) -> ShortLinkService:
    """Connect store and cache, reconcile the allocator and return the service."""
    store = build_store(config, logger)
    await store.connect()

    cache = None
    if config.redis_url:
        cache = KindHintCache(
            redis_url=config.redis_url,
            ttl_seconds=config.cache_ttl_seconds,
            logger=logger,
        )
        await cache.connect()
    else:
        logger.info("Redis caching disabled")

    allocator = IdentifierAllocator(store, logger=logger)
    await allocator.reconcile()

    return ShortLinkService(
        store=store,
        cache=cache,
        alias_registry=AliasRegistry(
            enabled=config.enable_custom_aliases,
            max_length=config.alias_max_length,
            reserved=config.reserved_aliases,
            file_prefix=config.file_alias_prefix,
            logger=logger,
        ),
        allocator=allocator,
        logger=logger,
        max_file_size_bytes=config.max_file_size_bytes,
    )
