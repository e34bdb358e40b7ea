"""Identifier allocation shared by links and file assets."""

import logging
from typing import Optional

from .database.base import ResourceStore, GLOBAL_CHECKPOINT
from .database.models import AllocationCheckpoint, ResourceKind
from .errors import AllocationError, ShortLinkError


class IdentifierAllocator:
    """Hands out identifiers from one atomic checkpoint for both resource kinds.

    Every allocation is a single store round trip that reads and bumps the
    checkpoint together, so concurrent callers never see the same value.
    """

    def __init__(
        self,
        store: ResourceStore,
        checkpoint: str = GLOBAL_CHECKPOINT,
        logger: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.checkpoint = checkpoint
        self.logger = logger or logging.getLogger(__name__)

    async def allocate(self) -> int:
        """Allocate the next identifier.

        Returns:
            An identifier greater than any in use, unique among concurrent calls

        Raises:
            AllocationError: If the store cannot be reached
        """
        try:
            identifier = await self.store.advance_checkpoint(self.checkpoint)
        except (ShortLinkError, OSError) as e:
            self.logger.error(f"Identifier allocation failed: {e}")
            raise AllocationError("Unable to allocate identifier") from e

        self.logger.debug(f"Allocated identifier {identifier}")
        return identifier

    async def reconcile(self) -> AllocationCheckpoint:
        """Move the checkpoint past every identifier already stored.

        Needed once at startup when rows were written outside the allocator
        (imports, restores). Never moves the checkpoint backwards.
        """
        try:
            highest = max(
                await self.store.max_identifier(ResourceKind.LINK),
                await self.store.max_identifier(ResourceKind.FILE_ASSET),
            )
            next_id = await self.store.raise_checkpoint(self.checkpoint, highest + 1)
        except (ShortLinkError, OSError) as e:
            self.logger.error(f"Checkpoint reconciliation failed: {e}")
            raise AllocationError("Unable to reconcile allocation checkpoint") from e

        self.logger.info(f"Allocation checkpoint '{self.checkpoint}' at {next_id}")
        return AllocationCheckpoint(name=self.checkpoint, next_id=next_id)
