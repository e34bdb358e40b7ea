"""Alias validation and cross-kind reservation."""

import logging
from typing import Iterable, Optional

from .common.validators import (
    find_alias_violation,
    RESERVED_ALIASES,
    DEFAULT_ALIAS_MAX_LENGTH,
    DEFAULT_FILE_ALIAS_PREFIX,
)
from .database.base import StoreTransaction
from .database.models import ResourceKind
from .errors import AliasTaken, ValidationError, ValidationRule


class AliasRegistry:
    """Validates aliases and reserves them against links and file assets alike."""

    def __init__(
        self,
        enabled: bool = True,
        max_length: int = DEFAULT_ALIAS_MAX_LENGTH,
        reserved: Iterable[str] = RESERVED_ALIASES,
        file_prefix: str = DEFAULT_FILE_ALIAS_PREFIX,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize alias registry.

        Args:
            enabled: Whether custom aliases are accepted at all
            max_length: Maximum alias length
            reserved: Words that cannot be used as aliases
            file_prefix: Leading letter kept for file identifiers
            logger: Optional logger
        """
        self.enabled = enabled
        self.max_length = max_length
        self.reserved = frozenset(word.lower() for word in reserved)
        self.file_prefix = file_prefix
        self.logger = logger or logging.getLogger(__name__)

    def validate(self, candidate: str) -> str:
        """Validate a candidate alias.

        Args:
            candidate: Alias supplied by the caller

        Returns:
            The normalized alias (aliases are case-sensitive, so unchanged)

        Raises:
            ValidationError: With the first violated rule
        """
        if not self.enabled:
            raise ValidationError(ValidationRule.DISABLED, "Custom aliases are not enabled")

        violation = find_alias_violation(
            candidate,
            max_length=self.max_length,
            reserved=self.reserved,
            file_prefix=self.file_prefix,
        )
        if violation is not None:
            rule, message = violation
            self.logger.debug(f"Rejected alias {candidate!r}: {rule.value}")
            raise ValidationError(rule, message)

        return candidate

    async def reserve(
        self,
        tx: StoreTransaction,
        alias: str,
        kind: ResourceKind,
        resource_id: int,
    ) -> None:
        """Reserve a validated alias inside the creation transaction.

        The store's alias registry key makes the reservation exclusive: of two
        concurrent reservations for the same alias only one can commit.

        Raises:
            AliasTaken: If a link or file asset already holds the alias
        """
        try:
            await tx.reserve_alias(alias, kind, resource_id)
        except AliasTaken:
            self.logger.warning(f"Alias already taken: {alias}")
            raise
        self.logger.debug(f"Reserved alias {alias} for {kind.value} {resource_id}")
