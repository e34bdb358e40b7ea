"""Pytest configuration and fixtures."""

import pytest
from httpx import AsyncClient, ASGITransport
from typing import AsyncGenerator

from config import Config
from shortlinks.database.memory import InMemoryResourceStore
from shortlinks.service import ShortLinkService
from shortlinks.common.logging_config import setup_logging
from web_app import create_app


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
async def store(logger) -> AsyncGenerator[InMemoryResourceStore, None]:
    """Create test store instance."""
    store = InMemoryResourceStore(logger=logger)

    yield store

    await store.close()


@pytest.fixture
async def service(store, logger) -> ShortLinkService:
    """Create service instance."""
    return ShortLinkService(
        store=store,
        cache=None,  # No cache for tests
        logger=logger,
    )


@pytest.fixture
def config():
    """Configuration pointing at the in-memory store."""
    return Config(
        store_backend="memory",
        base_url="http://testserver",
    )


@pytest.fixture
async def app(store, service, config):
    """Create test FastAPI app."""
    return create_app(
        store_instance=store,
        cache_instance=None,
        service_instance=service,
        config=config,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]


@pytest.fixture
def sample_file():
    """Metadata of an already uploaded file."""
    return {
        "blob_location": "https://blobs.example.com/uploads/1700000000_report.pdf",
        "file_name": "report.pdf",
        "size_bytes": 183042,
        "mime_type": "application/pdf",
    }
