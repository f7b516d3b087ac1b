"""
Conversion between ``Expires`` attribute strings and aware datetimes.
"""

from datetime import UTC, datetime
from email.utils import format_datetime, parsedate_to_datetime

from .errors import DateParseError


def parse_expires(raw: str) -> datetime:
    """Parse an HTTP cookie date into an aware UTC datetime.

    Accepts the RFC 1123 form (``Sun, 06 Nov 1994 08:49:37 GMT``) as well as
    the dashed RFC 850 variant servers still send
    (``Sunday, 06-Nov-94 08:49:37 GMT``).

    Args:
        raw: The attribute value as received.

    Returns:
        The expiry instant in UTC.

    Raises:
        DateParseError: If ``raw`` is not a recognizable date.
    """
    try:
        dt = parsedate_to_datetime(raw.strip())
    except (TypeError, ValueError, IndexError) as e:
        raise DateParseError(raw) from e
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def format_expires(dt: datetime) -> str:
    return format_datetime(dt.astimezone(UTC), usegmt=True)


def to_epoch(dt: datetime | None) -> int:
    """Whole seconds since the epoch; ``0`` stands for no expiry."""
    if dt is None:
        return 0
    return int(dt.timestamp())


def from_epoch(seconds: int) -> datetime | None:
    if seconds == 0:
        return None
    return datetime.fromtimestamp(seconds, tz=UTC)
