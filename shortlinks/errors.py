"""Error taxonomy for the short identifier registry."""

from enum import Enum
from typing import Optional


class ValidationRule(str, Enum):
    """Rule violated by a rejected creation request."""

    LENGTH = "length"
    CHARSET = "charset"
    ALL_DIGITS = "all_digits"
    RESERVED = "reserved"
    FILE_PREFIX = "file_prefix"
    DISABLED = "disabled"
    TARGET_URL = "target_url"
    FILE_SIZE = "file_size"
    FILE_METADATA = "file_metadata"


class ShortLinkError(Exception):
    """Base class for all registry errors."""


class ValidationError(ShortLinkError):
    """Input rejected before any store mutation was attempted."""

    def __init__(self, rule: ValidationRule, message: str):
        super().__init__(message)
        self.rule = rule
        self.message = message


class ConflictError(ShortLinkError):
    """Identifier or alias already in use."""


class AliasTaken(ConflictError):
    """Alias already reserved by a link or a file asset."""

    def __init__(self, alias: str, message: Optional[str] = None):
        super().__init__(message or f"Alias '{alias}' is already taken")
        self.alias = alias


class AllocationError(ShortLinkError):
    """Backing store failed while allocating an identifier."""


class StorageError(ShortLinkError):
    """Generic backing store failure."""
