"""Common utilities for the short identifier registry."""

from .validators import is_valid_url, find_alias_violation, RESERVED_ALIASES
from .headers import ForwardedInfo, parse_forwarded, public_base_url
from .url_builder import build_short_url
from .logging_config import setup_logging, get_logger

__all__ = [
    "is_valid_url",
    "find_alias_violation",
    "RESERVED_ALIASES",
    "ForwardedInfo",
    "parse_forwarded",
    "public_base_url",
    "build_short_url",
    "setup_logging",
    "get_logger",
]
