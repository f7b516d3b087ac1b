"""
Reconciliation of two cookie collections.
"""

from __future__ import annotations

__all__ = ["merge", "expiry_sort_key"]

import logging

from cookiekit.schemas import CookieRecord

from .jar import CookieJar

logger = logging.getLogger(__name__)


def expiry_sort_key(record: CookieRecord) -> tuple[bool, float]:
    """Sort key ordering session cookies above every dated cookie."""
    if record.expires is None:
        return (True, 0.0)
    return (False, record.expires.timestamp())


def _is_newer(candidate: CookieRecord, existing: CookieRecord) -> bool:
    return expiry_sort_key(candidate) > expiry_sort_key(existing)


def _admissible(candidate: CookieRecord, result: CookieJar) -> bool:
    if result.find_by_full_key(*candidate.key) is None:
        return True
    if not candidate.value:
        return False
    # NOTE: the comparison target is looked up by name alone, so with several
    # domain/path variants of one name it may be an unrelated slot.
    existing = result.find_by_name(candidate.name)
    return existing is None or not existing.value or _is_newer(candidate, existing)


def merge(a: CookieJar, b: CookieJar) -> CookieJar:
    """Combine two jars into a new, deduplicated jar.

    Records of ``a`` then ``b`` are stably sorted by expiry, latest first
    (session cookies first of all), and admitted one by one. A record whose
    ``(name, domain, path)`` slot is still free is always admitted. A record
    for an occupied slot is admitted only if its value is non-empty and the
    first admitted record with the same *name* is either empty or expires
    strictly earlier.

    ``merge(jar, jar)`` is the self-merge used to deduplicate before
    rendering a header.

    Args:
        a: First jar; its ``default_domain`` is carried to the result.
        b: Second jar.

    Returns:
        A new jar in admission order. Neither input is modified.
    """
    scratch = [*a, *b]
    scratch.sort(key=expiry_sort_key, reverse=True)

    result = CookieJar(default_domain=a.default_domain)
    for candidate in scratch:
        if _admissible(candidate, result):
            result.insert(candidate)
        else:
            logger.debug("Merge rejected cookie %r (%s)", candidate.name, candidate.key)
    return result
