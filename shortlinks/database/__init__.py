"""Storage layer for the short identifier registry."""

from .base import ResourceStore, StoreTransaction, GLOBAL_CHECKPOINT
from .memory import InMemoryResourceStore
from .postgres import PostgresResourceStore
from .cache import KindHintCache
from .models import (
    AllocationCheckpoint,
    FileAsset,
    Link,
    NotFound,
    Resource,
    ResourceKind,
)

__all__ = [
    "ResourceStore",
    "StoreTransaction",
    "GLOBAL_CHECKPOINT",
    "InMemoryResourceStore",
    "PostgresResourceStore",
    "KindHintCache",
    "AllocationCheckpoint",
    "FileAsset",
    "Link",
    "NotFound",
    "Resource",
    "ResourceKind",
]
