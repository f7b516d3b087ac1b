from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class CookieRecord:
    """A single cookie as held by a :class:`~cookiekit.libs.cookies.CookieJar`.

    Attributes:
        name: Cookie name. Never empty for a stored record.
        value: Cookie value, possibly empty.
        domain: Domain the cookie belongs to; empty matches any domain.
        path: Path the cookie belongs to; empty matches any path.
        expires: Aware UTC expiry time, or None for a session cookie.
        secure: Only sent over an encrypted transport.
        httponly: Stored only; has no effect on header rendering.
    """

    name: str
    value: str = ""
    domain: str = ""
    path: str = ""
    expires: datetime | None = None
    secure: bool = False
    httponly: bool = False

    @property
    def key(self) -> tuple[str, str, str]:
        """The ``(name, domain, path)`` slot identifying this cookie."""
        return (self.name, self.domain, self.path)

    def is_expired(self, now: datetime) -> bool:
        return self.expires is not None and self.expires < now

    def replace(self, **changes: Any) -> CookieRecord:
        return replace(self, **changes)
