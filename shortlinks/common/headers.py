"""Reverse-proxy header parsing."""

from dataclasses import dataclass
from typing import Dict, Mapping, Optional


@dataclass(frozen=True)
class ForwardedInfo:
    """What a reverse proxy reported about the original request."""

    proto: Optional[str] = None
    host: Optional[str] = None
    client: Optional[str] = None
    prefix: str = ""


def _first_hop(value: Optional[str]) -> Optional[str]:
    # Each proxy appends; the first entry is nearest the client
    if not value:
        return None
    first = value.split(",")[0].strip()
    return first or None


def _normalize_prefix(value: Optional[str]) -> str:
    if not value:
        return ""
    stripped = value.strip().strip("/")
    return "/" + stripped if stripped else ""


def _parse_rfc7239(value: Optional[str]) -> Dict[str, str]:
    """Parameters of the first hop of a ``Forwarded`` header."""
    hop = _first_hop(value)
    if not hop:
        return {}

    params = {}
    for pair in hop.split(";"):
        name, sep, param = pair.partition("=")
        if sep:
            params[name.strip().lower()] = param.strip().strip('"')
    return params


def parse_forwarded(headers: Mapping[str, str]) -> ForwardedInfo:
    """Read the X-Forwarded-* headers, falling back to RFC 7239 ``Forwarded``.

    Header names are matched case-insensitively. Behind several proxies only
    the client-most hop is used.

    Args:
        headers: Request headers

    Returns:
        ForwardedInfo; fields the proxy did not send are None (prefix is '')
    """
    lowered = {k.lower(): v for k, v in headers.items()}
    rfc = _parse_rfc7239(lowered.get("forwarded"))

    return ForwardedInfo(
        proto=_first_hop(lowered.get("x-forwarded-proto")) or rfc.get("proto"),
        host=_first_hop(lowered.get("x-forwarded-host")) or rfc.get("host"),
        client=_first_hop(lowered.get("x-forwarded-for")) or rfc.get("for"),
        prefix=_normalize_prefix(lowered.get("x-forwarded-prefix")),
    )


def public_base_url(
    forwarded: ForwardedInfo,
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Base URL clients used to reach the service.

    Priority:
    1. Forwarded proto + host
    2. Request scheme + host
    3. Configured base URL

    Returns:
        Base URL without trailing slash (e.g., https://example.com)
    """
    if forwarded.proto and forwarded.host:
        return f"{forwarded.proto}://{forwarded.host}"

    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"

    return fallback_base_url.rstrip("/")
