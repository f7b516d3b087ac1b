"""
Rendering of the outgoing ``Cookie`` request header.
"""

from __future__ import annotations

__all__ = ["render_cookie_header", "is_secure_scheme"]

from datetime import UTC, datetime
from urllib.parse import urlsplit

from .jar import CookieJar
from .merge import merge

SECURE_SCHEMES = frozenset({"https", "wss"})


def is_secure_scheme(url: str) -> bool:
    """Whether ``url`` travels over an encrypted transport."""
    return urlsplit(url).scheme.lower() in SECURE_SCHEMES


def render_cookie_header(
    jar: CookieJar,
    is_https: bool = False,
    now: datetime | None = None,
) -> str:
    """Build the ``name=value; name=value`` line for a request.

    The jar is self-merged first, then records with an empty value, secure
    records on a plain connection, and records that expired before ``now``
    are left out. Domain and path are not matched against any request target.

    Args:
        jar: Source jar; not modified.
        is_https: Whether the request uses an encrypted transport.
        now: Reference time, defaults to the current UTC time.

    Returns:
        The header value, or an empty string if no cookie qualifies.
    """
    now = now or datetime.now(UTC)
    return "; ".join(
        f"{r.name}={r.value}"
        for r in merge(jar, jar)
        if r.value and (is_https or not r.secure) and not r.is_expired(now)
    )
