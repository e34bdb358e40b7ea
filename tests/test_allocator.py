"""Tests for identifier allocation."""

import asyncio
import pytest

from shortlinks.allocator import IdentifierAllocator
from shortlinks.database.base import GLOBAL_CHECKPOINT
from shortlinks.database.models import Link, FileAsset, ResourceKind
from shortlinks.errors import AllocationError


@pytest.fixture
def allocator(store, logger):
    return IdentifierAllocator(store, logger=logger)


class TestAllocate:
    """Allocation from the shared checkpoint."""

    async def test_sequential(self, allocator):
        assert await allocator.allocate() == 1
        assert await allocator.allocate() == 2
        assert await allocator.allocate() == 3

    async def test_concurrent_allocations_are_distinct(self, allocator):
        ids = await asyncio.gather(*[allocator.allocate() for _ in range(200)])
        assert len(set(ids)) == 200
        assert sorted(ids) == list(range(1, 201))

    async def test_store_failure(self, allocator, store):
        await store.close()
        with pytest.raises(AllocationError):
            await allocator.allocate()

    async def test_separate_checkpoints(self, store, logger):
        first = IdentifierAllocator(store, checkpoint="a", logger=logger)
        second = IdentifierAllocator(store, checkpoint="b", logger=logger)
        assert await first.allocate() == 1
        assert await second.allocate() == 1


class TestReconcile:
    """Moving the checkpoint past stored rows."""

    async def test_moves_past_existing_rows(self, allocator, store):
        await store.create(ResourceKind.LINK, Link(id=10, target_url="https://example.com"))
        await store.create(
            ResourceKind.FILE_ASSET,
            FileAsset(id=25, blob_location="b", file_name="a.txt", size_bytes=1, mime_type="text/plain"),
        )

        checkpoint = await allocator.reconcile()

        assert checkpoint.name == GLOBAL_CHECKPOINT
        assert checkpoint.next_id == 26
        assert await allocator.allocate() == 26

    async def test_never_moves_backwards(self, allocator, store):
        await store.raise_checkpoint(GLOBAL_CHECKPOINT, 500)

        checkpoint = await allocator.reconcile()

        assert checkpoint.next_id == 500

    async def test_empty_store(self, allocator):
        checkpoint = await allocator.reconcile()
        assert checkpoint.next_id == 1

    async def test_store_failure(self, allocator, store):
        await store.close()
        with pytest.raises(AllocationError):
            await allocator.reconcile()
