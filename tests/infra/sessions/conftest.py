from __future__ import annotations

import base64

import aiohttp
import aiohttp.web
import pytest_asyncio


@pytest_asyncio.fixture
async def test_server(aiohttp_server):
    async def handler_ok(request):
        return aiohttp.web.Response(text="hello", status=200)

    async def handler_post(request):
        data = await request.json()
        return aiohttp.web.json_response({"received": data})

    async def handler_set_cookie(request):
        resp = aiohttp.web.Response(text="cookie!")
        resp.set_cookie("token", "abc123")
        return resp

    async def handler_set_many(request):
        resp = aiohttp.web.Response(text="cookies!")
        resp.set_cookie("a", "1")
        resp.set_cookie("b", "2")
        resp.set_cookie("private", "s3cret", secure=True)
        return resp

    async def handler_set_cookie_redirect(request):
        resp = aiohttp.web.Response(status=302, headers={"Location": "/echo-cookies"})
        resp.set_cookie("hop", "yes")
        return resp

    async def handler_redirect(request):
        raise aiohttp.web.HTTPFound("/ok")

    async def handler_echo_headers(request):
        return aiohttp.web.json_response({"headers": dict(request.headers)})

    async def handler_echo_cookies(request):
        return aiohttp.web.json_response({"cookies": dict(request.cookies)})

    async def handler_set_attrs(request):
        resp = aiohttp.web.Response(text="attrs")
        resp.set_cookie("pref", "1", max_age=3600, samesite="Lax")
        resp.set_cookie("gone", "x", max_age=0)
        return resp

    app = aiohttp.web.Application()
    app.router.add_get("/ok", handler_ok)
    app.router.add_post("/post", handler_post)
    app.router.add_get("/set-cookie", handler_set_cookie)
    app.router.add_get("/set-many", handler_set_many)
    app.router.add_get("/set-cookie-redirect", handler_set_cookie_redirect)
    app.router.add_get("/redirect", handler_redirect)
    app.router.add_get("/echo-headers", handler_echo_headers)
    app.router.add_get("/echo-cookies", handler_echo_cookies)
    app.router.add_get("/set-attrs", handler_set_attrs)

    server = await aiohttp_server(app)
    return server


def _make_proxy_app(seen: dict, required_auth: str | None = None):
    """Forward-proxy stand-in recording the ``Cookie`` header it receives.

    Every answer sets ``via=proxy`` so tests can check that cookies coming
    back through a proxy reach the jar.
    """

    async def handler(request):
        auth = request.headers.get("Proxy-Authorization")
        if auth:
            seen["auth_headers"].append(auth)
        if required_auth is not None and auth != required_auth:
            return aiohttp.web.Response(
                text="proxy auth required",
                status=407,
                headers={"Proxy-Authenticate": "Basic"},
            )

        seen["cookies"].append(request.headers.get("Cookie"))
        resp = aiohttp.web.Response(text="proxied", status=200)
        resp.set_cookie("via", "proxy")
        return resp

    app = aiohttp.web.Application()
    app.router.add_route("*", "/{tail:.*}", handler)
    return app


@pytest_asyncio.fixture
async def proxy_server(aiohttp_server):
    seen: dict = {"cookies": [], "auth_headers": []}
    server = await aiohttp_server(_make_proxy_app(seen))
    server.seen = seen
    return server


@pytest_asyncio.fixture
async def proxy_auth_server(aiohttp_server):
    user, password = "user1", "pass1"
    token = base64.b64encode(f"{user}:{password}".encode()).decode()

    seen: dict = {"cookies": [], "auth_headers": []}
    server = await aiohttp_server(_make_proxy_app(seen, f"Basic {token}"))
    server.required_user = user
    server.required_pass = password
    server.required_header = f"Basic {token}"
    server.seen = seen
    return server
