"""In-process implementation of the resource store."""

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any, Tuple

from .base import ResourceStore, StoreTransaction, GLOBAL_CHECKPOINT
from .models import ResourceKind, Resource, COUNTER_FIELDS
from ..errors import AliasTaken, ConflictError, StorageError
from ..identifiers import IdentifierKey, NumericId


class _MemoryTransaction(StoreTransaction):
    """Stages writes while the store lock is held; applied on commit."""

    def __init__(self, store: "InMemoryResourceStore"):
        self._store = store
        self._aliases: Dict[str, Tuple[ResourceKind, int]] = {}
        self._records: List[Tuple[ResourceKind, Resource]] = []

    def _alias_owner(self, alias: str) -> Optional[Tuple[ResourceKind, int]]:
        return self._aliases.get(alias) or self._store._aliases.get(alias)

    def _id_taken(self, resource_id: int) -> bool:
        if any(resource_id in table for table in self._store._tables.values()):
            return True
        return any(record.id == resource_id for _, record in self._records)

    async def reserve_alias(self, alias: str, kind: ResourceKind, resource_id: int) -> None:
        if self._alias_owner(alias) is not None:
            raise AliasTaken(alias)
        self._aliases[alias] = (kind, resource_id)

    async def insert(self, kind: ResourceKind, record: Resource) -> int:
        if self._id_taken(record.id):
            raise ConflictError(f"Identifier {record.id} is already taken")

        if record.alias is not None:
            owner = self._alias_owner(record.alias)
            if owner is None:
                self._aliases[record.alias] = (kind, record.id)
            elif owner != (kind, record.id):
                raise AliasTaken(record.alias)

        stored = replace(record)
        if stored.created_at is None:
            stored.created_at = datetime.now(timezone.utc)
        self._records.append((kind, stored))
        return stored.id

    def _commit(self) -> None:
        self._store._aliases.update(self._aliases)
        for kind, record in self._records:
            self._store._tables[kind][record.id] = record


class InMemoryResourceStore(ResourceStore):
    """Resource store kept in process memory.

    Every mutation runs under one asyncio lock, which gives the same
    atomicity the PostgreSQL store gets from row locks and constraints.
    Nothing survives a restart.
    """

    def __init__(
        self,
        db_config: str = "memory://",
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(db_config)
        self.logger = logger or logging.getLogger(__name__)
        self._lock = asyncio.Lock()
        self._tables: Dict[ResourceKind, Dict[int, Resource]] = {
            ResourceKind.LINK: {},
            ResourceKind.FILE_ASSET: {},
        }
        self._aliases: Dict[str, Tuple[ResourceKind, int]] = {}
        self._checkpoints: Dict[str, int] = {GLOBAL_CHECKPOINT: 1}
        self._closed = False

    def _ensure_open(self) -> None:
        if self._closed:
            raise StorageError("Store is closed")

    def _locate(self, kind: ResourceKind, key: IdentifierKey) -> Optional[Resource]:
        table = self._tables[kind]
        if isinstance(key, NumericId):
            return table.get(key.value)
        owner = self._aliases.get(key.value)
        if owner is None or owner[0] != kind:
            return None
        return table.get(owner[1])

    @asynccontextmanager
    async def transaction(self):
        self._ensure_open()
        async with self._lock:
            tx = _MemoryTransaction(self)
            yield tx
            tx._commit()

    async def find_and_increment(
        self, kind: ResourceKind, key: IdentifierKey
    ) -> Optional[Resource]:
        self._ensure_open()
        async with self._lock:
            record = self._locate(kind, key)
            if record is None:
                return None
            counter = COUNTER_FIELDS[kind]
            setattr(record, counter, getattr(record, counter) + 1)
            return replace(record)

    async def get_resource(
        self, kind: ResourceKind, key: IdentifierKey
    ) -> Optional[Resource]:
        self._ensure_open()
        record = self._locate(kind, key)
        return replace(record) if record is not None else None

    async def list_resources(self, kind: ResourceKind, limit: int = 100) -> List[Resource]:
        self._ensure_open()
        records = sorted(
            self._tables[kind].values(),
            key=lambda r: (r.created_at, r.id),
            reverse=True,
        )
        return [replace(r) for r in records[:limit]]

    async def max_identifier(self, kind: ResourceKind) -> int:
        self._ensure_open()
        return max(self._tables[kind], default=0)

    async def advance_checkpoint(self, name: str = GLOBAL_CHECKPOINT) -> int:
        self._ensure_open()
        async with self._lock:
            next_id = self._checkpoints.get(name, 1)
            self._checkpoints[name] = next_id + 1
            return next_id

    async def raise_checkpoint(self, name: str, floor: int) -> int:
        self._ensure_open()
        async with self._lock:
            next_id = max(self._checkpoints.get(name, 1), floor)
            self._checkpoints[name] = next_id
            return next_id

    async def get_statistics(self) -> Dict[str, Any]:
        links = self._tables[ResourceKind.LINK].values()
        files = self._tables[ResourceKind.FILE_ASSET].values()
        return {
            "total_links": len(links),
            "total_files": len(files),
            "total_visits": sum(r.visit_count for r in links),
            "total_downloads": sum(r.download_count for r in files),
            "database": "memory",
            "status": "closed" if self._closed else "healthy",
        }

    async def health_check(self) -> bool:
        return not self._closed

    async def close(self) -> None:
        self._closed = True
        self.logger.debug("In-memory store closed")
