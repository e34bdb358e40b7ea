"""Resolution of identifiers to links and file assets."""

import logging
from typing import Optional, Tuple

from .database.base import ResourceStore
from .database.cache import KindHintCache
from .database.models import ResourceKind, Resource, ResolveResult, NotFound
from .identifiers import classify, is_addressable, IdentifierKey

LOOKUP_ORDER: Tuple[ResourceKind, ...] = (ResourceKind.LINK, ResourceKind.FILE_ASSET)


class ResolutionService:
    """Turns identifier strings into records, bumping the usage counter."""

    def __init__(
        self,
        store: ResourceStore,
        cache: Optional[KindHintCache] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.cache = cache
        self.logger = logger or logging.getLogger(__name__)

    async def resolve(self, identifier: str) -> ResolveResult:
        """Resolve an identifier and count the access.

        Links are searched before file assets. The matching record's counter
        is incremented in the same store statement that returns it; a miss
        mutates nothing.

        Args:
            identifier: Raw identifier from the request path

        Returns:
            Link, FileAsset or NotFound

        Raises:
            StorageError: If the store fails
        """
        key = classify(identifier)
        if not is_addressable(key):
            self.logger.warning(f"Identifier not found: {identifier}")
            return NotFound

        record = await self._lookup(key)
        if record is None:
            self.logger.warning(f"Identifier not found: {identifier}")
            return NotFound

        self.logger.debug(f"Resolved {identifier} -> {record.kind.value} {record.id}")
        return record

    async def _lookup(self, key: IdentifierKey) -> Optional[Resource]:
        hinted = await self.cache.get_kind(key) if self.cache else None
        if hinted is not None:
            self.logger.debug(f"Cache hint for {key}: {hinted.value}")
            record = await self.store.find_and_increment(hinted, key)
            if record is not None:
                return record

        for kind in LOOKUP_ORDER:
            if kind is hinted:
                continue
            record = await self.store.find_and_increment(kind, key)
            if record is not None:
                if self.cache:
                    await self.cache.set_kind(key, kind)
                return record

        return None
