from __future__ import annotations

__all__ = ["CookieJar"]

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from cookiekit.schemas import CookieRecord

from .parser import parse_set_cookie

logger = logging.getLogger(__name__)


class CookieJar:
    """Ordered collection of cookie records plus a default domain.

    Records keep their insertion order and inserting never deduplicates;
    duplicates are only reconciled by :func:`~cookiekit.libs.cookies.merge`
    (``jar + other``). Not thread-safe: share a jar between tasks only under
    external serialization.

    Args:
        records: Optional initial records, appended in order.
        default_domain: Domain assigned by :meth:`update` to parsed cookies
            that carry none.
    """

    __slots__ = ("_records", "default_domain")

    def __init__(
        self,
        records: Iterable[CookieRecord] = (),
        *,
        default_domain: str = "",
    ) -> None:
        self._records: list[CookieRecord] = []
        self.default_domain = default_domain
        self.extend(records)

    # ------------------------------------------------------------------
    # mutation
    # ------------------------------------------------------------------

    def insert(self, record: CookieRecord) -> None:
        if not record.name:
            raise ValueError("Cookie name must not be empty")
        self._records.append(record)

    def extend(self, records: Iterable[CookieRecord]) -> None:
        for record in records:
            self.insert(record)

    def set(self, name: str, value: str) -> CookieJar:
        """Append a bare ``name=value`` cookie and return the jar for chaining."""
        self.insert(CookieRecord(name=name, value=value))
        return self

    def update(self, raw: str) -> list[CookieRecord]:
        """Parse a ``Set-Cookie`` value and append every resulting record.

        Args:
            raw: The header value as received from a server.

        Returns:
            The records that were appended.

        Raises:
            ParseError: If ``raw`` is malformed; the jar is left untouched.
        """
        records = parse_set_cookie(raw, self.default_domain)
        self._records.extend(records)
        logger.debug("Stored %d cookie(s) from %r", len(records), raw)
        return records

    def remove_all(self, name: str) -> int:
        """Remove every record named ``name``.

        Returns:
            The number of records removed.
        """
        before = len(self._records)
        self._records = [r for r in self._records if r.name != name]
        return before - len(self._records)

    def discard(self, name: str, domain: str = "", path: str = "") -> int:
        """Remove every record occupying the ``(name, domain, path)`` slot."""
        key = (name, domain, path)
        before = len(self._records)
        self._records = [r for r in self._records if r.key != key]
        return before - len(self._records)

    def clear(self) -> None:
        self._records.clear()

    def reserve(self, n: int) -> None:
        """Capacity hint; Python lists grow on demand so this is a no-op."""

    # ------------------------------------------------------------------
    # lookup
    # ------------------------------------------------------------------

    def find_by_name(self, name: str) -> CookieRecord | None:
        for record in self._records:
            if record.name == name:
                return record
        return None

    def find_by_full_key(
        self, name: str, domain: str = "", path: str = ""
    ) -> CookieRecord | None:
        key = (name, domain, path)
        for record in self._records:
            if record.key == key:
                return record
        return None

    def value_of(self, name: str) -> str:
        """Value of the first record named ``name`` with a non-empty value.

        Returns:
            The value, or an empty string when no such record exists.
        """
        for record in self._records:
            if record.name == name and record.value:
                return record.value
        return ""

    def size(self) -> int:
        return len(self._records)

    # ------------------------------------------------------------------
    # persistence and rendering
    # ------------------------------------------------------------------

    def header_line(self, is_https: bool = False) -> str:
        """Render the value of the outgoing ``Cookie`` request header."""
        from .header import render_cookie_header

        return render_cookie_header(self, is_https)

    def save(
        self,
        path: str | Path,
        *,
        default_domain: str = "",
        overwrite: bool = False,
    ) -> None:
        from .netscape import save_netscape

        save_netscape(self, path, default_domain=default_domain, overwrite=overwrite)

    def load(self, path: str | Path) -> int:
        from .netscape import load_netscape

        return load_netscape(self, path)

    def copy(self) -> CookieJar:
        return CookieJar(self._records, default_domain=self.default_domain)

    # ------------------------------------------------------------------
    # dunder
    # ------------------------------------------------------------------

    def __add__(self, other: object) -> CookieJar:
        if not isinstance(other, CookieJar):
            return NotImplemented
        from .merge import merge

        return merge(self, other)

    def __iter__(self) -> Iterator[CookieRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, name: str) -> str:
        return self.value_of(name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find_by_name(name) is not None

    def __repr__(self) -> str:
        return (
            f"<CookieJar size={len(self._records)} "
            f"default_domain={self.default_domain!r}>"
        )
