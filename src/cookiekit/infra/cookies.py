"""
Jar lifecycle helpers: a read-through cache over a directory of Netscape
cookie files, and loading or persisting the single file named by a
:class:`JarConfig`.
"""

from __future__ import annotations

__all__ = ["CookieStore", "open_jar", "persist_jar"]

import logging
from pathlib import Path

from cookiekit.libs.cookies import (
    CookieError,
    CookieJar,
    load_netscape,
    merge,
    save_netscape,
)
from cookiekit.schemas import JarConfig

logger = logging.getLogger(__name__)


class CookieStore:
    """Cookie loader and in-memory cache for the files written by sessions.

    Supported cookie files (by default):

    - ``aiohttp.cookies``
    - ``httpx.cookies``

    Each file is loaded into its own jar and reloaded only when its mtime
    changes. Lookups go through the merge of all jars, so the freshest
    non-empty value wins when several files hold the same cookie.
    """

    DEFAULT_FILENAMES = ["aiohttp.cookies", "httpx.cookies"]

    def __init__(
        self,
        cookies_dir: Path,
        filenames: list[str] | None = None,
        default_domain: str = "",
    ) -> None:
        """Initialize a CookieStore instance.

        Args:
            cookies_dir: Path to the directory containing cookie files.
            filenames: Optional list of filenames to load. If omitted, defaults
                to ``DEFAULT_FILENAMES``.
            default_domain: Default domain given to the merged jar.
        """
        self.cookies_dir = cookies_dir
        self.filenames = filenames or self.DEFAULT_FILENAMES
        self.default_domain = default_domain
        self.jars: dict[str, CookieJar] = {}
        self.mtimes: dict[str, float] = {}

    @classmethod
    def from_config(cls, cfg: JarConfig) -> CookieStore:
        return cls(
            Path(cfg.cookies_dir).expanduser(),
            filenames=cfg.filenames,
            default_domain=cfg.default_domain,
        )

    @property
    def jar(self) -> CookieJar:
        """A fresh jar merging every loaded cookie file."""
        self._load_all()
        merged = CookieJar(default_domain=self.default_domain)
        for jar in self.jars.values():
            merged = merge(merged, jar)
        return merged

    def get(self, key: str) -> str:
        """Retrieve a cookie value by name.

        Args:
            key: The cookie name.

        Returns:
            str: The cookie value if present, otherwise an empty string.
        """
        return self.jar.value_of(key)

    def header_line(self, is_https: bool = False) -> str:
        return self.jar.header_line(is_https)

    def _load_all(self) -> None:
        """Load or refresh cookies from all configured cookie files.

        For each cookie file, this method:

        - Forgets files that disappeared.
        - Compares its modification time (mtime) with the last cached mtime.
        - If changed, decodes the file into a new jar replacing the old one.
        - Logs and skips files that cannot be read or decoded; they are
          retried once their mtime changes.
        """
        for filename in self.filenames:
            state_file = self.cookies_dir / filename
            try:
                mtime = state_file.stat().st_mtime
            except OSError:
                self.jars.pop(filename, None)
                self.mtimes.pop(filename, None)
                continue
            if self.mtimes.get(filename) == mtime:
                continue
            self.mtimes[filename] = mtime

            jar = CookieJar(default_domain=self.default_domain)
            try:
                load_netscape(jar, state_file)
            except CookieError as e:
                logger.warning("Skipping cookie file %s: %s", state_file, e)
                self.jars.pop(filename, None)
                continue
            self.jars[filename] = jar


def open_jar(cfg: JarConfig) -> CookieJar:
    """Create the jar described by ``cfg``.

    The jar gets ``cfg.default_domain`` and, when ``cfg.cookie_file`` exists,
    the records stored in it. A file that cannot be decoded is logged and
    ignored, leaving the jar empty.
    """
    jar = CookieJar(default_domain=cfg.default_domain)
    if not cfg.cookie_file:
        return jar

    path = Path(cfg.cookie_file).expanduser()
    if not path.is_file():
        return jar
    try:
        load_netscape(jar, path)
    except CookieError as e:
        logger.warning("Ignoring cookie file %s: %s", path, e)
    return jar


def persist_jar(jar: CookieJar, cfg: JarConfig) -> bool:
    """Write ``jar`` back to ``cfg.cookie_file`` when ``cfg.persist`` is set.

    Returns:
        bool: True if the file was written.

    Raises:
        FileOpenError: If the file cannot be written.
    """
    if not (cfg.persist and cfg.cookie_file):
        return False
    save_netscape(jar, cfg.cookie_file, overwrite=True)
    return True
