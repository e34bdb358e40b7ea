"""Abstract base classes for resource store implementations."""

from abc import ABC, abstractmethod
from typing import AsyncContextManager, Optional, List, Dict, Any

from .models import ResourceKind, Resource
from ..identifiers import IdentifierKey

GLOBAL_CHECKPOINT = "global"


class StoreTransaction(ABC):
    """Writes staged inside a single store transaction."""

    @abstractmethod
    async def reserve_alias(self, alias: str, kind: ResourceKind, resource_id: int) -> None:
        """Claim an alias in the cross-kind alias registry.

        Args:
            alias: Validated alias
            kind: Kind of the resource that will own the alias
            resource_id: Identifier of that resource

        Raises:
            AliasTaken: If any link or file asset already holds the alias
        """
        pass

    @abstractmethod
    async def insert(self, kind: ResourceKind, record: Resource) -> int:
        """Insert a new record under its pre-allocated identifier.

        Args:
            kind: Resource kind
            record: Link or FileAsset to persist

        Returns:
            The record identifier

        Raises:
            ConflictError: If the identifier or alias is already taken
        """
        pass


class ResourceStore(ABC):
    """Abstract durable storage for links, file assets and the allocation checkpoint."""

    def __init__(self, db_config: str):
        """Initialize store.

        Args:
            db_config: Store connection string
        """
        self.db_config = db_config

    @abstractmethod
    def transaction(self) -> AsyncContextManager[StoreTransaction]:
        """Open a transaction; commits on normal exit, rolls back on exception."""
        pass

    async def create(self, kind: ResourceKind, record: Resource) -> int:
        """Persist a new record, reserving its alias in the same transaction.

        Args:
            kind: Resource kind
            record: Record carrying its allocated identifier

        Returns:
            The record identifier

        Raises:
            AliasTaken: If the alias is already taken
            ConflictError: If the identifier is already taken
        """
        async with self.transaction() as tx:
            if record.alias is not None:
                await tx.reserve_alias(record.alias, kind, record.id)
            return await tx.insert(kind, record)

    @abstractmethod
    async def find_and_increment(
        self, kind: ResourceKind, key: IdentifierKey
    ) -> Optional[Resource]:
        """Atomically find a record and bump its usage counter.

        Args:
            kind: Resource kind to search
            key: Classified identifier

        Returns:
            The record with its counter already incremented, or None
        """
        pass

    @abstractmethod
    async def get_resource(
        self, kind: ResourceKind, key: IdentifierKey
    ) -> Optional[Resource]:
        """Read a record without touching its counter."""
        pass

    @abstractmethod
    async def list_resources(self, kind: ResourceKind, limit: int = 100) -> List[Resource]:
        """List records of one kind, newest first.

        Args:
            kind: Resource kind
            limit: Maximum number of records to return
        """
        pass

    @abstractmethod
    async def max_identifier(self, kind: ResourceKind) -> int:
        """Largest identifier in use by a kind, 0 when there is none."""
        pass

    @abstractmethod
    async def advance_checkpoint(self, name: str = GLOBAL_CHECKPOINT) -> int:
        """Atomically take the checkpoint's next identifier and bump it.

        Args:
            name: Checkpoint name

        Returns:
            The identifier handed out
        """
        pass

    @abstractmethod
    async def raise_checkpoint(self, name: str, floor: int) -> int:
        """Move the checkpoint up to at least ``floor``, never down.

        Returns:
            The checkpoint's next identifier after the update
        """
        pass

    @abstractmethod
    async def get_statistics(self) -> Dict[str, Any]:
        """Get store statistics.

        Returns:
            Dictionary with total_links, total_files, total_visits, total_downloads
        """
        pass

    async def connect(self) -> None:
        """Prepare connections; a no-op for stores without any."""

    @abstractmethod
    async def close(self) -> None:
        """Close store connections."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable."""
        pass
