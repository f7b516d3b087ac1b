"""
Session management utilities for cookiekit's infrastructure layer.

This module provides a unified interface for creating HTTP session
backends whose cookies are kept in a :class:`~cookiekit.libs.cookies.CookieJar`.
"""

__all__ = ["create_session", "BaseSession"]

from typing import Any

from cookiekit.libs.cookies import CookieJar
from cookiekit.schemas import SessionConfig

from .base import BaseSession


def create_session(
    backend: str,
    cfg: SessionConfig | None = None,
    jar: CookieJar | None = None,
    **kwargs: Any,
) -> BaseSession:
    """Creates and returns a session backend instance.

    Supported backends:
        * "aiohttp"
        * "httpx"

    Args:
        backend: Name of the backend to use.
        cfg: Optional session configuration to pass to the backend.
        jar: Optional cookie jar shared with the caller.
        **kwargs: Additional keyword arguments forwarded directly to the
            backend constructor.

    Returns:
        BaseSession: An initialized session instance for the selected backend.

    Raises:
        ValueError: If the specified backend name is not supported.
    """
    match backend:
        case "aiohttp":
            from ._aiohttp import AiohttpSession

            return AiohttpSession(cfg, jar, **kwargs)
        case "httpx":
            from ._httpx import HttpxSession

            return HttpxSession(cfg, jar, **kwargs)
        case _:
            raise ValueError(f"Unsupported backend: {backend!r}")
