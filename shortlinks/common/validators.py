"""Validation utilities for the short identifier registry."""

import re
from urllib.parse import urlparse
from typing import Iterable, Optional, Tuple

from ..errors import ValidationRule

ALIAS_PATTERN = re.compile(r"[A-Za-z0-9_-]+")
DIGITS_PATTERN = re.compile(r"[0-9]+")

RESERVED_ALIASES = frozenset({
    "api", "about", "database", "admin", "login",
    "register", "settings", "file", "files",
})

DEFAULT_ALIAS_MAX_LENGTH = 30
DEFAULT_FILE_ALIAS_PREFIX = "f"


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a redirect target URL.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if len(url) > 2048:
        return False, "URL is too long (max 2048 characters)"

    try:
        result = urlparse(url)
    except ValueError as e:
        return False, f"Invalid URL format: {str(e)}"

    if result.scheme not in ["http", "https"]:
        return False, "URL must use http or https protocol"

    if not result.netloc:
        return False, "URL must have a valid domain"

    return True, ""


def find_alias_violation(
    alias: str,
    max_length: int = DEFAULT_ALIAS_MAX_LENGTH,
    reserved: Iterable[str] = RESERVED_ALIASES,
    file_prefix: str = DEFAULT_FILE_ALIAS_PREFIX,
) -> Optional[Tuple[ValidationRule, str]]:
    """Check an alias against the syntax and policy rules.

    Rules are checked in order and the first failure wins.

    Args:
        alias: Candidate alias
        max_length: Maximum alias length
        reserved: Words that cannot be used as aliases (case-insensitive)
        file_prefix: Leading letter kept for file identifiers (case-insensitive)

    Returns:
        (rule, message) for the first violated rule, or None if the alias is valid
    """
    if not 1 <= len(alias) <= max_length:
        return ValidationRule.LENGTH, f"Alias must be 1-{max_length} characters"

    if not ALIAS_PATTERN.fullmatch(alias):
        return (
            ValidationRule.CHARSET,
            "Alias can only contain letters, numbers, hyphens, and underscores",
        )

    if DIGITS_PATTERN.fullmatch(alias):
        return ValidationRule.ALL_DIGITS, "Alias cannot consist only of digits"

    lowered = alias.lower()
    if lowered in {word.lower() for word in reserved}:
        return ValidationRule.RESERVED, f"'{alias}' is a reserved word and cannot be used"

    if file_prefix and lowered.startswith(file_prefix.lower()):
        return ValidationRule.FILE_PREFIX, f"Alias cannot start with '{file_prefix}'"

    return None
