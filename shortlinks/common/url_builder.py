"""Short URL building."""

from typing import Optional


def build_short_url(
    resource_id: int,
    base_url: str,
    alias: Optional[str] = None,
    path_prefix: str = "",
) -> str:
    """Build the public short URL of a resource.

    The alias is preferred over the numeric id when present.

    Args:
        resource_id: Numeric identifier
        base_url: Base URL (e.g., https://example.com)
        alias: Optional alias
        path_prefix: Optional path prefix (e.g., /s)

    Returns:
        Complete short URL
    """
    base = base_url.rstrip("/")
    prefix = path_prefix.strip("/")
    identifier = alias or str(resource_id)

    if prefix:
        return f"{base}/{prefix}/{identifier}"
    return f"{base}/{identifier}"
