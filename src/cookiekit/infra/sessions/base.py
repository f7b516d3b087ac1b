from __future__ import annotations

import abc
import logging
import types
from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any, ClassVar, Self, TypedDict, Unpack

from cookiekit.infra.http_defaults import DEFAULT_USER_HEADERS
from cookiekit.libs.cookies import (
    CookieError,
    CookieJar,
    is_secure_scheme,
    load_netscape,
    parse_set_cookie,
    save_netscape,
)
from cookiekit.libs.cookies.dates import format_expires
from cookiekit.schemas import CookieRecord, SessionConfig

from .response import BaseResponse

logger = logging.getLogger(__name__)

# response attributes that carry no cookie and are not kept by the jar
IGNORED_ATTRIBUTES = frozenset(
    {"samesite", "priority", "partitioned", "version", "comment", "commenturl"}
)
MAX_AGE_LIMIT = 400 * 24 * 3600


def normalize_set_cookie(raw: str, now: datetime | None = None) -> str:
    """Rewrite a response ``Set-Cookie`` value into the jar's attribute set.

    Attributes in :data:`IGNORED_ATTRIBUTES` are dropped. ``Max-Age`` is
    turned into an ``expires`` attribute relative to ``now`` and takes
    precedence over any ``Expires`` already present; it is clamped to 400
    days, and a non-positive value yields an instant already in the past.
    The leading ``name=value`` pair is never touched.

    Args:
        raw: Header value as received.
        now: Reference time, defaults to the current UTC time.
    """
    first, *attrs = raw.split(";")
    kept: list[str] = []
    max_age: int | None = None
    for attr in attrs:
        key, _, value = attr.partition("=")
        key = key.strip().lower()
        value = value.strip()
        if key in IGNORED_ATTRIBUTES:
            continue
        if key == "max-age":
            if value.lstrip("-").isdigit():
                max_age = int(value)
            continue
        kept.append(attr)

    if max_age is not None:
        seconds = max(-1, min(max_age, MAX_AGE_LIMIT))
        expires = (now or datetime.now(UTC)) + timedelta(seconds=seconds)
        kept = [a for a in kept if a.partition("=")[0].strip().lower() != "expires"]
        kept.append(f" expires={format_expires(expires)}")
    return ";".join([first, *kept])


class BaseRequestKwargs(TypedDict, total=False):
    headers: Mapping[str, str] | Sequence[tuple[str, str]]
    cookies: dict[str, str] | list[tuple[str, str]]


class GetRequestKwargs(BaseRequestKwargs, total=False):
    params: dict[str, Any] | list[tuple[str, Any]] | None


class PostRequestKwargs(BaseRequestKwargs, total=False):
    params: dict[str, Any] | list[tuple[str, Any]] | None
    data: Any
    json: Any


class BaseSession(abc.ABC):
    """HTTP session whose cookies live in a :class:`CookieJar`.

    Backends switch off their own cookie handling. Before each request the
    ``Cookie`` header is rendered from the jar, secure cookies included only
    for ``https``/``wss`` URLs; after each response every ``Set-Cookie``
    header is parsed back into the jar, replacing the record in the same
    ``(name, domain, path)`` slot.

    ``Set-Cookie`` values go through :func:`normalize_set_cookie` first, so
    attributes such as ``SameSite`` never turn into cookies and ``Max-Age``
    becomes an expiry.
    """

    cookie_filename: ClassVar[str] = "session.cookies"

    def __init__(
        self,
        cfg: SessionConfig | None = None,
        jar: CookieJar | None = None,
        **kwargs: Any,
    ) -> None:
        """Initializes the session using the provided configuration.

        Args:
            cfg: Optional configuration object defining session behavior.
            jar: Cookie jar to use; a new empty jar when omitted.
            **kwargs: Additional parameters reserved for backend-specific
                initialization.
        """
        cfg = cfg or SessionConfig()

        self._timeout = cfg.timeout
        self._max_connections = cfg.max_connections
        self._verify_ssl = cfg.verify_ssl
        self._http2 = cfg.http2
        self._proxy = cfg.proxy
        self._proxy_user = cfg.proxy_user
        self._proxy_pass = cfg.proxy_pass
        self._trust_env = cfg.trust_env
        self._session: Any = None

        self._jar = jar if jar is not None else CookieJar()
        if cfg.cookies:
            self.update_cookies(cfg.cookies)

        self._headers = (
            cfg.headers.copy()
            if cfg.headers is not None
            else DEFAULT_USER_HEADERS.copy()
        )
        if cfg.user_agent:
            self._headers["User-Agent"] = cfg.user_agent

    @abc.abstractmethod
    async def init(
        self,
        **kwargs: Any,
    ) -> None:
        """Initializes backend-specific resources.

        Args:
            **kwargs: Additional parameters required by backend implementations.
        """
        ...

    @abc.abstractmethod
    async def close(self) -> None:
        """Releases and cleans up any allocated resources."""
        ...

    @abc.abstractmethod
    async def get(
        self,
        url: str,
        *,
        allow_redirects: bool | None = None,
        verify: bool | None = None,
        encoding: str = "utf-8",
        **kwargs: Unpack[GetRequestKwargs],
    ) -> BaseResponse:
        """Performs an HTTP GET request.

        Args:
            url: Target URL.
            allow_redirects: Whether redirects should be allowed.
            verify: Whether SSL verification should be performed.
            encoding: Response text encoding.
            **kwargs: Additional request parameters forwarded to the backend.
                ``cookies`` are sent with this request only.

        Returns:
            BaseResponse: A response wrapper for the GET request.

        Raises:
            RuntimeError: If the session has not been initialized.
        """
        ...

    @abc.abstractmethod
    async def post(
        self,
        url: str,
        *,
        allow_redirects: bool | None = None,
        verify: bool | None = None,
        encoding: str = "utf-8",
        **kwargs: Unpack[PostRequestKwargs],
    ) -> BaseResponse:
        """Performs an HTTP POST request.

        Args:
            url: Target URL.
            allow_redirects: Whether redirects should be allowed.
            verify: Whether SSL verification should be performed.
            encoding: Response text encoding.
            **kwargs: Additional request parameters forwarded to the backend.
                ``cookies`` are sent with this request only.

        Returns:
            BaseResponse: A response wrapper for the POST request.

        Raises:
            RuntimeError: If the session has not been initialized.
        """
        ...

    # ------------------------------------------------------------------
    # cookies
    # ------------------------------------------------------------------

    @property
    def jar(self) -> CookieJar:
        """The live cookie jar backing this session."""
        return self._jar

    def load_cookies(self, cookies_dir: Path, filename: str | None = None) -> bool:
        """Loads cookies from a Netscape cookie file.

        Loaded records replace the ones occupying the same slot.

        Args:
            cookies_dir: Directory where cookie files are stored.
            filename: Optional specific filename; defaults to
                ``cookie_filename``.

        Returns:
            bool: True if cookies were loaded successfully, otherwise False.
        """
        path = cookies_dir / (filename or self.cookie_filename)
        if not path.is_file():
            return False

        loaded = CookieJar()
        try:
            load_netscape(loaded, path)
        except CookieError as e:
            logger.warning("Failed to load cookies from %s: %s", path, e)
            return False

        self._replace(loaded)
        return True

    def save_cookies(self, cookies_dir: Path, filename: str | None = None) -> bool:
        """Saves cookies to a Netscape cookie file, replacing its content.

        Args:
            cookies_dir: Directory where cookie files will be written.
            filename: Optional target filename; defaults to
                ``cookie_filename``.

        Returns:
            bool: True if cookies were saved successfully, otherwise False.
        """
        path = cookies_dir / (filename or self.cookie_filename)
        try:
            save_netscape(self._jar, path, overwrite=True)
        except CookieError as e:
            logger.warning("Failed to save cookies to %s: %s", path, e)
            return False
        return True

    def update_cookies(self, cookies: Mapping[str, str]) -> None:
        """Updates or adds cookie entries.

        Every existing record with one of the given names is dropped first.

        Args:
            cookies: A mapping of cookie names to values.
        """
        for name, value in cookies.items():
            self._jar.remove_all(name)
            self._jar.set(name, value)

    def get_cookie(self, key: str) -> str | None:
        """Retrieves a cookie value by name.

        Args:
            key: Cookie name.

        Returns:
            str | None: The cookie value if found, otherwise None.
        """
        return self._jar.value_of(key) or None

    def clear_cookie(self, name: str) -> None:
        """Removes every cookie with the given name.

        Args:
            name: Name of the cookie to remove.
        """
        self._jar.remove_all(name)

    def clear_cookies(self) -> None:
        """Removes all stored cookies."""
        self._jar.clear()

    def cookie_header(
        self,
        url: str,
        extra: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
    ) -> str:
        """Render the ``Cookie`` header value for a request to ``url``.

        Args:
            url: Request URL; only its scheme is considered.
            extra: Cookies added for this request only, overriding jar
                cookies of the same name.
        """
        jar = self._jar
        if extra:
            jar = jar.copy()
            pairs = extra.items() if isinstance(extra, Mapping) else extra
            for name, value in pairs:
                jar.remove_all(name)
                jar.set(name, value)
        return jar.header_line(is_secure_scheme(url))

    def _request_headers(self, url: str, kwargs: dict[str, Any]) -> dict[str, str]:
        """Pop per-request ``headers``/``cookies`` and build the final headers."""
        headers = dict(kwargs.pop("headers", None) or {})
        line = self.cookie_header(url, kwargs.pop("cookies", None))
        if line and not any(k.lower() == "cookie" for k in headers):
            headers["Cookie"] = line
        return headers

    def _store_set_cookies(self, values: Iterable[str]) -> None:
        for raw in values:
            try:
                records = parse_set_cookie(
                    normalize_set_cookie(raw), self._jar.default_domain
                )
            except CookieError as e:
                logger.warning("Ignoring Set-Cookie %r: %s", raw, e)
                continue
            self._replace(records)

    def _replace(self, records: Iterable[CookieRecord]) -> None:
        for record in records:
            self._jar.discard(*record.key)
            self._jar.insert(record)

    @property
    def headers(self) -> dict[str, str]:
        """Returns a copy of the current session headers.

        Returns:
            dict[str, str]: Header names mapped to their values.
        """
        return self._headers.copy()

    async def __aenter__(self) -> Self:
        await self.init()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        await self.close()
