"""Core business logic for the short identifier registry."""

from .aliases import AliasRegistry
from .allocator import IdentifierAllocator
from .resolution import ResolutionService
from .service import ShortLinkService

__all__ = ["AliasRegistry", "IdentifierAllocator", "ResolutionService", "ShortLinkService"]
