from __future__ import annotations

from typing import Any

import pytest

from cookiekit.infra.sessions import create_session
from cookiekit.infra.sessions.base import BaseSession
from cookiekit.libs.cookies import CookieJar
from cookiekit.schemas import SessionConfig

SUPPORTED_BACKENDS: set[str] = {"aiohttp", "httpx"}


def safe_create(
    backend: str, cfg: SessionConfig, jar: CookieJar | None = None, **kw: Any
) -> BaseSession:
    """
    Create backend instance, skipping test if backend dependency is missing.
    """
    try:
        return create_session(backend, cfg, jar=jar, **kw)
    except ImportError as e:
        pytest.skip(f"backend {backend!r} not installed: {e}")
