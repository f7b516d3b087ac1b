class CookieError(Exception):
    """Base class for cookie jar failures."""


class ParseError(CookieError):
    """A ``Set-Cookie`` string could not be tokenized."""


class DateParseError(ParseError):
    """An ``Expires`` attribute holds an unparseable date."""

    def __init__(self, raw: str) -> None:
        super().__init__(f"Invalid cookie expiry date: {raw!r}")
        self.raw = raw


class DecodeError(CookieError):
    """A Netscape cookie file holds a malformed line or undecodable bytes."""

    def __init__(self, lineno: int, line: str, message: str | None = None) -> None:
        super().__init__(message or f"Malformed cookie line {lineno}: {line!r}")
        self.lineno = lineno
        self.line = line


class EncodeError(CookieError, ValueError):
    """A record cannot be written as a single Netscape cookie-file line."""


class FileOpenError(CookieError, OSError):
    """A cookie file could not be opened for reading or writing."""
