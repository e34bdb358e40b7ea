"""Classification of incoming identifier strings."""

import re
from dataclasses import dataclass
from typing import Union

from .common.validators import ALIAS_PATTERN

NUMERIC_PATTERN = re.compile(r"[0-9]+")

# Identifiers are stored as BIGINT
MAX_IDENTIFIER = 2 ** 63 - 1


@dataclass(frozen=True)
class NumericId:
    """Identifier addressed by its auto-assigned integer."""

    value: int

    @property
    def in_range(self) -> bool:
        return 0 < self.value <= MAX_IDENTIFIER


@dataclass(frozen=True)
class AliasKey:
    """Identifier addressed by a user-chosen alias."""

    value: str


IdentifierKey = Union[NumericId, AliasKey]


def classify(raw: str) -> IdentifierKey:
    """Classify a raw identifier string.

    Purely syntactic: ASCII digits only means a numeric id, anything else
    is looked up as an alias.

    Args:
        raw: Identifier as received from the caller

    Returns:
        NumericId or AliasKey
    """
    if NUMERIC_PATTERN.fullmatch(raw):
        return NumericId(int(raw))
    return AliasKey(raw)


def is_addressable(key: IdentifierKey) -> bool:
    """Whether any stored record could carry this key.

    Out-of-range ids and aliases outside the alias charset can never match,
    so callers answer "not found" without asking the store.
    """
    if isinstance(key, NumericId):
        return key.in_range
    return ALIAS_PATTERN.fullmatch(key.value) is not None
