from typing import Any, Unpack

import aiohttp

from .base import (
    BaseSession,
    GetRequestKwargs,
    PostRequestKwargs,
)
from .response import BaseResponse


class AiohttpSession(BaseSession):
    """Session backend implemented with aiohttp for asynchronous HTTP requests."""

    cookie_filename = "aiohttp.cookies"

    _session: aiohttp.ClientSession | None

    async def init(
        self,
        **kwargs: Any,
    ) -> None:
        if self._session and not self._session.closed:
            return

        proxy_auth: aiohttp.BasicAuth | None = None
        if self._proxy_user and self._proxy_pass:
            proxy_auth = aiohttp.BasicAuth(self._proxy_user, self._proxy_pass)

        timeout = aiohttp.ClientTimeout(total=self._timeout)
        connector = aiohttp.TCPConnector(
            ssl=self._verify_ssl,
            limit_per_host=self._max_connections,
        )

        # cookies are handled by our own jar
        self._session = aiohttp.ClientSession(
            connector=connector,
            timeout=timeout,
            headers=self._headers,
            cookie_jar=aiohttp.DummyCookieJar(),
            trust_env=self._trust_env,
            proxy=self._proxy,
            proxy_auth=proxy_auth,
        )

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def get(
        self,
        url: str,
        *,
        allow_redirects: bool | None = None,
        verify: bool | None = None,
        encoding: str = "utf-8",
        **kwargs: Unpack[GetRequestKwargs],
    ) -> BaseResponse:
        return await self._request(
            "GET", url, allow_redirects, verify, encoding, dict(kwargs)
        )

    async def post(
        self,
        url: str,
        *,
        allow_redirects: bool | None = None,
        verify: bool | None = None,
        encoding: str = "utf-8",
        **kwargs: Unpack[PostRequestKwargs],
    ) -> BaseResponse:
        return await self._request(
            "POST", url, allow_redirects, verify, encoding, dict(kwargs)
        )

    async def _request(
        self,
        method: str,
        url: str,
        allow_redirects: bool | None,
        verify: bool | None,
        encoding: str,
        kwargs: dict[str, Any],
    ) -> BaseResponse:
        session = self.session
        if verify is not None:
            kwargs.setdefault("ssl", verify)
        if allow_redirects is not None:
            kwargs.setdefault("allow_redirects", allow_redirects)
        kwargs["headers"] = self._request_headers(url, kwargs)

        async with session.request(method, url, **kwargs) as r:
            content = await r.read()
            for hop in (*r.history, r):
                self._store_set_cookies(hop.headers.getall("Set-Cookie", []))
            return BaseResponse(
                content=content,
                headers=list(r.headers.items()),
                status=r.status,
                encoding=r.charset or encoding,
                url=str(r.url),
            )

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            raise RuntimeError("Session is not initialized or has been shut down.")
        return self._session
