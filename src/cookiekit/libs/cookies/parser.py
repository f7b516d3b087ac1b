"""
Tokenizer for ``Set-Cookie`` style attribute strings.

A single string may carry several ``name=value`` pairs next to the shared
``domain``, ``path``, ``expires``, ``secure`` and ``httponly`` attributes::

    gsid=none; gsid2=none; expires=Sun, 22-Sep-2013 14:27:43 GMT; path=/

Every non-reserved pair becomes one :class:`CookieRecord` carrying a copy of
the shared attributes.
"""

from __future__ import annotations

__all__ = ["parse_set_cookie", "parse_cookies"]

import enum
from collections.abc import Mapping
from datetime import datetime

from cookiekit.schemas import CookieRecord

from .dates import parse_expires
from .errors import ParseError

# RFC 2616 section 2.2
SEPARATORS = frozenset('()<>@,;:\\"/[]?={} \t')
QUOTES = frozenset("\"'")
FLAG_ATTRIBUTES = frozenset({"secure", "httponly"})


class _State(enum.Enum):
    NAME_START = enum.auto()
    NAME = enum.auto()
    VALUE_START = enum.auto()
    VALUE = enum.auto()
    BAD = enum.auto()


def is_token_char(c: str) -> bool:
    return 32 < ord(c) < 127 and c not in SEPARATORS or c == "_"


def is_value_char(c: str) -> bool:
    return 32 <= ord(c) < 127


class _Tokenizer:
    """Character-level state machine collecting ``name -> value`` pairs."""

    def __init__(self) -> None:
        self.state = _State.NAME_START
        self.name: list[str] = []
        self.value: list[str] = []
        self.pairs: dict[str, str] = {}
        self.secure = False
        self.httponly = False

    def feed(self, raw: str) -> None:
        for c in raw:
            self._step(c)
            if self.state is _State.BAD:
                raise ParseError(f"Malformed cookie string: {raw!r}")
        self._finish()
        if self.state is _State.BAD:
            raise ParseError(f"Malformed cookie string: {raw!r}")

    def _step(self, c: str) -> None:
        match self.state:
            case _State.NAME_START:
                if c == " " or c == ";":
                    return
                if is_token_char(c):
                    self.name.append(c)
                    self.state = _State.NAME
                else:
                    self.state = _State.BAD
            case _State.NAME:
                if c == ";":
                    self._flush_flag()
                elif c == "=":
                    self.value.clear()
                    self.state = _State.VALUE_START
                elif c in SEPARATORS:
                    # malformed fragment, drop it and resync on the next name
                    self.name.clear()
                    self.state = _State.NAME_START
                elif is_token_char(c):
                    self.name.append(c)
                else:
                    self.state = _State.BAD
            case _State.VALUE_START:
                if c == ";":
                    self._flush_pair()
                elif c in QUOTES:
                    return
                elif is_value_char(c):
                    self.value.append(c)
                    self.state = _State.VALUE
                else:
                    self.state = _State.BAD
            case _State.VALUE:
                if c == ";" or c in QUOTES:
                    self._flush_pair()
                elif is_value_char(c):
                    self.value.append(c)
                else:
                    self.state = _State.BAD

    def _finish(self) -> None:
        if self.state is _State.NAME:
            self._flush_flag()
        elif self.state in (_State.VALUE_START, _State.VALUE):
            self._flush_pair()

    def _flush_flag(self) -> None:
        name = "".join(self.name).lower()
        self.name.clear()
        if name not in FLAG_ATTRIBUTES:
            self.state = _State.BAD
            return
        if name == "secure":
            self.secure = True
        else:
            self.httponly = True
        self.state = _State.NAME_START

    def _flush_pair(self) -> None:
        self.pairs["".join(self.name)] = "".join(self.value)
        self.name.clear()
        self.value.clear()
        self.state = _State.NAME_START


def parse_set_cookie(raw: str, default_domain: str = "") -> list[CookieRecord]:
    """Parse a ``Set-Cookie`` header value into cookie records.

    Args:
        raw: The header value, without the ``Set-Cookie:`` prefix.
        default_domain: Domain used when the string has no (or an empty)
            ``domain`` attribute.

    Returns:
        One record per non-reserved ``name=value`` pair, in the order the
        names first appeared. Empty input yields an empty list.

    Raises:
        ParseError: If the string is malformed. No records are produced.
        DateParseError: If the ``expires`` attribute is not a valid date.
    """
    tok = _Tokenizer()
    tok.feed(raw)

    domain = ""
    path = ""
    expires: datetime | None = None
    pairs: dict[str, str] = {}
    for name, value in tok.pairs.items():
        match name.lower():
            case "expires":
                expires = parse_expires(value)
            case "domain":
                domain = value
            case "path":
                path = value
            case _:
                pairs[name] = value

    return [
        CookieRecord(
            name=name,
            value=value,
            domain=domain or default_domain,
            path=path,
            expires=expires,
            secure=tok.secure,
            httponly=tok.httponly,
        )
        for name, value in pairs.items()
    ]


def parse_cookies(cookies: str | Mapping[str, str]) -> dict[str, str]:
    """Parse cookies from a string or mapping into a normalized dictionary.

    Supports input such as:

    - ``"key1=value1; key2=value2"``
    - ``{"key1": "value1", "key2": "value2"}``

    Unlike :func:`parse_set_cookie` this is lenient: fragments without ``=``
    and empty names are skipped.

    Args:
        cookies: A cookie string or a dict-like object containing cookie
            key/value pairs.

    Returns:
        A normalized cookie dictionary mapping keys to values.

    Raises:
        TypeError: If ``cookies`` is neither a string nor a mapping.
    """
    if isinstance(cookies, str):
        result: dict[str, str] = {}
        for part in cookies.split(";"):
            if "=" not in part:
                continue
            key, value = part.split("=", 1)
            key, value = key.strip(), value.strip()
            if not key:
                continue
            result[key] = value
        return result
    elif isinstance(cookies, Mapping):
        return {str(k).strip(): str(v).strip() for k, v in cookies.items()}
    raise TypeError("Unsupported cookie format: must be str or dict-like")
