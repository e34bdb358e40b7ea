"""Business logic service for the short identifier registry."""

import logging
from typing import Optional, Dict, Any, List
from datetime import datetime, timezone

from .aliases import AliasRegistry
from .allocator import IdentifierAllocator
from .resolution import ResolutionService, LOOKUP_ORDER
from .database.base import ResourceStore
from .database.cache import KindHintCache
from .database.models import ResourceKind, Resource, ResolveResult, Link, FileAsset
from .common.validators import is_valid_url
from .errors import ValidationError, ValidationRule
from .identifiers import classify, is_addressable

DEFAULT_MIME_TYPE = "application/octet-stream"
DEFAULT_MAX_FILE_SIZE = 50 * 1024 * 1024


class ShortLinkService:
    """Creation and resolution of links and file assets."""

    def __init__(
        self,
        store: ResourceStore,
        cache: Optional[KindHintCache] = None,
        alias_registry: Optional[AliasRegistry] = None,
        allocator: Optional[IdentifierAllocator] = None,
        logger: Optional[logging.Logger] = None,
        max_file_size_bytes: int = DEFAULT_MAX_FILE_SIZE,
    ):
        """Initialize service.

        Args:
            store: Resource store
            cache: Optional kind-hint cache
            alias_registry: Optional alias registry (default rules if omitted)
            allocator: Optional identifier allocator
            logger: Optional logger
            max_file_size_bytes: Largest accepted file asset
        """
        self.store = store
        self.cache = cache
        self.logger = logger or logging.getLogger(__name__)
        self.aliases = alias_registry or AliasRegistry(logger=self.logger)
        self.allocator = allocator or IdentifierAllocator(store, logger=self.logger)
        self.resolver = ResolutionService(store, cache=cache, logger=self.logger)
        self.max_file_size_bytes = max_file_size_bytes

    async def create_link(
        self,
        target_url: str,
        alias: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create a new link.

        Args:
            target_url: Redirect target
            alias: Optional custom alias

        Returns:
            Dictionary with id, alias, kind, created_at

        Raises:
            ValidationError: If the URL or alias is rejected
            AliasTaken: If the alias is already in use
            AllocationError: If no identifier could be allocated
        """
        is_valid, error = is_valid_url(target_url)
        if not is_valid:
            raise ValidationError(ValidationRule.TARGET_URL, f"Invalid URL: {error}")

        alias = self._validate_alias(alias)
        record = Link(
            id=await self.allocator.allocate(),
            target_url=target_url,
            alias=alias,
            created_at=datetime.now(timezone.utc),
        )
        await self._persist(ResourceKind.LINK, record)

        self.logger.info(f"Created link {record.id} ({alias or '-'}) -> {target_url}")
        return self._creation_result(record)

    async def create_file_asset(
        self,
        blob_location: str,
        file_name: str,
        size_bytes: int,
        mime_type: Optional[str] = None,
        alias: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Register an uploaded file.

        The bytes are already stored externally; only the descriptor is
        recorded here.

        Args:
            blob_location: Where the blob store keeps the file
            file_name: Original file name
            size_bytes: File size
            mime_type: Content type (defaults to application/octet-stream)
            alias: Optional custom alias

        Returns:
            Dictionary with id, alias, kind, created_at
        """
        if not blob_location or not file_name:
            raise ValidationError(
                ValidationRule.FILE_METADATA, "blob_location and file_name are required"
            )
        if size_bytes < 0 or size_bytes > self.max_file_size_bytes:
            raise ValidationError(
                ValidationRule.FILE_SIZE,
                f"File size must be between 0 and {self.max_file_size_bytes} bytes",
            )

        alias = self._validate_alias(alias)
        record = FileAsset(
            id=await self.allocator.allocate(),
            blob_location=blob_location,
            file_name=file_name,
            size_bytes=size_bytes,
            mime_type=mime_type or DEFAULT_MIME_TYPE,
            alias=alias,
            created_at=datetime.now(timezone.utc),
        )
        await self._persist(ResourceKind.FILE_ASSET, record)

        self.logger.info(f"Created file asset {record.id} ({alias or '-'}): {file_name}")
        return self._creation_result(record)

    async def resolve(self, identifier: str) -> ResolveResult:
        """Resolve an identifier, counting the visit or download."""
        return await self.resolver.resolve(identifier)

    async def get_resource_info(self, identifier: str) -> Optional[Resource]:
        """Look up a resource without counting it as a visit.

        Args:
            identifier: Numeric id or alias

        Returns:
            Link, FileAsset or None
        """
        key = classify(identifier)
        if not is_addressable(key):
            return None
        for kind in LOOKUP_ORDER:
            record = await self.store.get_resource(kind, key)
            if record is not None:
                return record
        return None

    async def list_links(self, limit: int = 100) -> List[Link]:
        """List links, newest first."""
        return await self.store.list_resources(ResourceKind.LINK, limit)

    async def list_file_assets(self, limit: int = 100) -> List[FileAsset]:
        """List file assets, newest first."""
        return await self.store.list_resources(ResourceKind.FILE_ASSET, limit)

    async def get_statistics(self) -> Dict[str, Any]:
        """Get service statistics.

        Returns:
            Dictionary with statistics
        """
        db_stats = await self.store.get_statistics()

        return {
            **db_stats,
            "cache_enabled": self.cache is not None and self.cache.enabled,
            "custom_aliases_enabled": self.aliases.enabled,
        }

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        db_healthy = await self.store.health_check()
        cache_healthy = await self.cache.ping() if self.cache else True

        return {
            "database": db_healthy,
            "cache": cache_healthy,
            "overall": db_healthy and cache_healthy,
        }

    async def close(self) -> None:
        """Close service connections."""
        await self.store.close()
        if self.cache:
            await self.cache.close()

    def _validate_alias(self, alias: Optional[str]) -> Optional[str]:
        # Empty means "no alias"
        if alias is None or alias == "":
            return None
        return self.aliases.validate(alias)

    async def _persist(self, kind: ResourceKind, record: Resource) -> None:
        async with self.store.transaction() as tx:
            if record.alias is not None:
                await self.aliases.reserve(tx, record.alias, kind, record.id)
            await tx.insert(kind, record)

    @staticmethod
    def _creation_result(record: Resource) -> Dict[str, Any]:
        return {
            "id": record.id,
            "alias": record.alias,
            "kind": record.kind,
            "created_at": record.created_at,
        }
