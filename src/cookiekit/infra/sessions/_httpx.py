from typing import Any, Unpack

import httpx

from .base import (
    BaseSession,
    GetRequestKwargs,
    PostRequestKwargs,
)
from .response import BaseResponse


class HttpxSession(BaseSession):
    """Session backend based on httpx providing async HTTP/1.1 and HTTP/2 support."""

    cookie_filename = "httpx.cookies"

    _session: httpx.AsyncClient | None

    async def init(
        self,
        **kwargs: Any,
    ) -> None:
        if self._session and not self._session.is_closed:
            return
        limits = httpx.Limits(
            max_keepalive_connections=self._max_connections,
            max_connections=self._max_connections,
        )
        proxy = self._build_proxy_config(
            self._proxy,
            self._proxy_user,
            self._proxy_pass,
        )

        self._session = httpx.AsyncClient(
            http2=self._http2,
            timeout=self._timeout,
            verify=self._verify_ssl,
            headers=self._headers,
            limits=limits,
            proxy=proxy,
            trust_env=self._trust_env,
        )

    async def close(self) -> None:
        """
        Shutdown and clean up any resources.
        """
        if self._session is None:
            return
        if not self._session.is_closed:
            await self._session.aclose()
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
        return await self._request("GET", url, allow_redirects, encoding, dict(kwargs))

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
            "POST", url, allow_redirects, encoding, dict(kwargs)
        )

    async def _request(
        self,
        method: str,
        url: str,
        allow_redirects: bool | None,
        encoding: str,
        kwargs: dict[str, Any],
    ) -> BaseResponse:
        session = self.session
        if allow_redirects is not None:
            kwargs.setdefault("follow_redirects", allow_redirects)
        kwargs["headers"] = self._request_headers(url, kwargs)

        try:
            r = await session.request(method, url, **kwargs)
        finally:
            # the client jar would otherwise resend cookies behind our back
            session.cookies.clear()
        for hop in (*r.history, r):
            self._store_set_cookies(hop.headers.get_list("set-cookie"))
        return BaseResponse(
            content=r.content,
            headers=r.headers.multi_items(),
            status=r.status_code,
            encoding=r.encoding or encoding,
            url=str(r.url),
        )

    @property
    def session(self) -> httpx.AsyncClient:
        if self._session is None:
            raise RuntimeError("Session is not initialized or has been shut down.")
        return self._session

    @staticmethod
    def _build_proxy_config(
        proxy: str | None = None,
        proxy_user: str | None = None,
        proxy_pass: str | None = None,
    ) -> str | httpx.Proxy | None:
        """Builds proxy configuration."""
        if not proxy:
            return None

        if "@" in proxy:
            return proxy

        if proxy_user and proxy_pass:
            return httpx.Proxy(proxy, auth=(proxy_user, proxy_pass))

        return proxy
