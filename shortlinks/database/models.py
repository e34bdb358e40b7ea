"""Data models for the short identifier registry."""

from dataclasses import dataclass, asdict
from datetime import datetime
from enum import Enum
from typing import Optional, Union


class ResourceKind(str, Enum):
    """Resource kinds sharing the identifier namespace."""

    LINK = "link"
    FILE_ASSET = "file_asset"


def _parse_timestamp(value) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


@dataclass
class Link:
    """A redirect target addressed by id or alias."""

    id: int
    target_url: str
    alias: Optional[str] = None
    created_at: Optional[datetime] = None
    visit_count: int = 0

    kind = ResourceKind.LINK

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        data = asdict(self)
        data["kind"] = self.kind.value
        data["created_at"] = self.created_at.isoformat() if self.created_at else None
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Link":
        """Create from dictionary (or an asyncpg record)."""
        return cls(
            id=data["id"],
            target_url=data["target_url"],
            alias=data.get("alias"),
            created_at=_parse_timestamp(data.get("created_at")),
            visit_count=data.get("visit_count") or 0,
        )


@dataclass
class FileAsset:
    """Descriptor of an uploaded file; the bytes live in external blob storage."""

    id: int
    blob_location: str
    file_name: str
    size_bytes: int
    mime_type: str
    alias: Optional[str] = None
    created_at: Optional[datetime] = None
    download_count: int = 0

    kind = ResourceKind.FILE_ASSET

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        data = asdict(self)
        data["kind"] = self.kind.value
        data["created_at"] = self.created_at.isoformat() if self.created_at else None
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "FileAsset":
        """Create from dictionary (or an asyncpg record)."""
        return cls(
            id=data["id"],
            blob_location=data["blob_location"],
            file_name=data["file_name"],
            size_bytes=data["size_bytes"],
            mime_type=data["mime_type"],
            alias=data.get("alias"),
            created_at=_parse_timestamp(data.get("created_at")),
            download_count=data.get("download_count") or 0,
        )


@dataclass
class AllocationCheckpoint:
    """Next identifier to hand out; the single source of truth for allocation."""

    name: str
    next_id: int


class _NotFound:
    """Resolution outcome when no record matches."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NotFound"


NotFound = _NotFound()

Resource = Union[Link, FileAsset]

ResolveResult = Union[Link, FileAsset, _NotFound]

RECORD_TYPES = {
    ResourceKind.LINK: Link,
    ResourceKind.FILE_ASSET: FileAsset,
}

COUNTER_FIELDS = {
    ResourceKind.LINK: "visit_count",
    ResourceKind.FILE_ASSET: "download_count",
}
