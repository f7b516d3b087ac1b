"""
Defines structured configuration models using dataclasses.
"""

from dataclasses import dataclass, field


@dataclass
class JarConfig:
    """Configuration for a cookie jar and its on-disk persistence.

    Attributes:
        default_domain: Domain applied to parsed cookies that carry none.
        cookie_file: Netscape cookie file to load from and save to.
        cookies_dir: Directory scanned by the multi-file cookie store.
        filenames: Cookie file names looked up inside ``cookies_dir``.
        persist: Whether sessions save their jar back to ``cookie_file``.
    """

    default_domain: str = ""
    cookie_file: str | None = None
    cookies_dir: str = "./cookies"
    filenames: list[str] = field(
        default_factory=lambda: ["aiohttp.cookies", "httpx.cookies"]
    )
    persist: bool = False


@dataclass
class SessionConfig:
    """Configuration for HTTP session behavior.

    Attributes:
        timeout: Request timeout in seconds.
        max_connections: Maximum number of concurrent connections.
        user_agent: Custom User-Agent string.
        headers: Additional headers to attach to requests.
        cookies: Default cookies for the session.
        verify_ssl: Whether to verify SSL certificates.
        http2: Whether HTTP/2 should be used. (`httpx`)
        trust_env: Whether environment variables are used for proxies.
        proxy: Proxy server URL.
        proxy_user: Proxy authentication username.
        proxy_pass: Proxy authentication password.
    """

    timeout: float = 10.0
    max_connections: int = 10
    user_agent: str | None = None
    headers: dict[str, str] | None = None
    cookies: dict[str, str] | None = None
    verify_ssl: bool = True
    http2: bool = True
    trust_env: bool = False
    proxy: str | None = None
    proxy_user: str | None = None
    proxy_pass: str | None = None
