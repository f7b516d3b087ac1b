import json

import pytest

from cookiekit.schemas import SessionConfig

from .utils import SUPPORTED_BACKENDS, safe_create


@pytest.mark.parametrize("backend", sorted(SUPPORTED_BACKENDS))
@pytest.mark.asyncio
async def test_requests_raise_before_init(backend):
    s = safe_create(backend, SessionConfig())
    s.update_cookies({"a": "1"})

    with pytest.raises(RuntimeError):
        await s.get("http://example.com/")
    with pytest.raises(RuntimeError):
        await s.post("http://example.com/", json={"x": 1})

    assert s.get_cookie("a") == "1"


@pytest.mark.parametrize("backend", sorted(SUPPORTED_BACKENDS))
@pytest.mark.asyncio
async def test_repeated_init_and_close_keep_the_jar(backend):
    s = safe_create(backend, SessionConfig())
    s.update_cookies({"a": "1"})

    await s.init()
    await s.init()
    await s.close()
    await s.close()

    assert s.get_cookie("a") == "1"


@pytest.mark.parametrize("backend", sorted(SUPPORTED_BACKENDS))
@pytest.mark.asyncio
async def test_cookies_survive_reopening(backend, test_server):
    base = str(test_server.make_url("/"))
    s = safe_create(backend, SessionConfig())

    async with s:
        await s.get(base + "set-cookie")

    with pytest.raises(RuntimeError):
        await s.get(base + "echo-cookies")

    async with s:
        r = await s.get(base + "echo-cookies")

    assert json.loads(r.content.decode())["cookies"] == {"token": "abc123"}
