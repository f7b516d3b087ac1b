from __future__ import annotations

from pathlib import Path
from typing import Any

from cookiekit.libs.cookies import parse_cookies
from cookiekit.schemas import JarConfig, SessionConfig

from .file_io import load_config


class ConfigAdapter:
    """High-level accessor for general and site-specific configuration.

    All configuration resolution follows the order:

    **general -> site-specific -> built-in defaults**

    Sites are keyed by host name, e.g. ``sites."example.com"``.

    Args:
        config (dict[str, Any]): Fully loaded configuration mapping containing
            a ``general`` block and optionally a ``sites`` block.

    Attributes:
        _config (dict[str, Any]): Internal stored configuration mapping.
    """

    def __init__(self, config: dict[str, Any]) -> None:
        self._config: dict[str, Any] = dict(config)

    @classmethod
    def from_file(cls, config_path: str | Path | None = None) -> ConfigAdapter:
        """Load the configuration found by :func:`load_config` and wrap it.

        Raises:
            FileNotFoundError: If no configuration file is found.
            ValueError: If the file cannot be parsed.
        """
        return cls(load_config(config_path))

    def get_config(self) -> dict[str, Any]:
        """Return the full raw configuration mapping.

        Returns:
            dict[str, Any]: The stored configuration.
        """
        return self._config

    def get_jar_config(self, site: str | None = None) -> JarConfig:
        """Build a JarConfig from the ``jar`` tables.

        Args:
            site (str | None): Optional site key whose ``jar`` table overrides
                the general one.

        Returns:
            JarConfig: Resolved jar configuration.
        """
        general_jar = self._gen_cfg().get("jar") or {}
        site_jar = (self._site_cfg(site).get("jar") or {}) if site else {}
        cfg: dict[str, Any] = {**general_jar, **site_jar}

        defaults = JarConfig()
        return JarConfig(
            default_domain=str(cfg.get("default_domain", "")),
            cookie_file=cfg.get("cookie_file"),
            cookies_dir=str(cfg.get("cookies_dir", defaults.cookies_dir)),
            filenames=list(cfg.get("filenames") or defaults.filenames),
            persist=bool(cfg.get("persist", False)),
        )

    def get_session_config(self, site: str) -> SessionConfig:
        """Build a SessionConfig by merging general and site overrides.

        Args:
            site (str): Target site key.

        Returns:
            SessionConfig: Resolved session configuration.
        """
        site_cfg, general_cfg = self._site_cfg(site), self._gen_cfg()
        return self._dict_to_session_cfg({**general_cfg, **site_cfg})

    def get_global_session_config(self) -> SessionConfig:
        """Return a SessionConfig based solely on general settings.

        Returns:
            SessionConfig: Session configuration without site overrides.
        """
        return self._dict_to_session_cfg(self._gen_cfg())

    def get_global_backend(self) -> str:
        """Return the backend string from general configuration.

        Returns:
            str: Backend name or ``"aiohttp"`` if unspecified.
        """
        general_cfg = self._gen_cfg()
        backend = general_cfg.get("backend")
        return backend if isinstance(backend, str) else "aiohttp"

    def get_log_level(self) -> str:
        """Return the configured logging level.

        Returns:
            str: Logging level or ``"INFO"`` if missing.
        """
        debug_cfg = self._gen_cfg().get("debug", {})
        return debug_cfg.get("log_level") or "INFO"

    def get_cookies_dir(self) -> Path:
        """Return the directory scanned for cookie files.

        Returns:
            Path: Absolute cookie directory path.
        """
        return Path(self.get_jar_config().cookies_dir).expanduser().resolve()

    def _gen_cfg(self) -> dict[str, Any]:
        """Return general configuration mapping.

        Returns:
            dict[str, Any]: ``general`` config or empty dict.
        """
        general = self._config.get("general")
        return general if isinstance(general, dict) else {}

    def _site_cfg(self, site: str) -> dict[str, Any]:
        """Return configuration block for the given site.

        Args:
            site (str): Site name.

        Returns:
            dict[str, Any]: Site configuration or empty dict.
        """
        sites_cfg = self._config.get("sites") or {}
        value = sites_cfg.get(site)
        return value if isinstance(value, dict) else {}

    @staticmethod
    def _dict_to_session_cfg(cfg: dict[str, Any]) -> SessionConfig:
        raw_cookies = cfg.get("cookies")
        return SessionConfig(
            timeout=cfg.get("timeout", 10.0),
            max_connections=cfg.get("max_connections", 10),
            user_agent=cfg.get("user_agent"),
            headers=cfg.get("headers"),
            cookies=parse_cookies(raw_cookies) if raw_cookies else None,
            verify_ssl=cfg.get("verify_ssl", True),
            http2=cfg.get("http2", True),
            trust_env=cfg.get("trust_env", False),
            proxy=cfg.get("proxy"),
            proxy_user=cfg.get("proxy_user"),
            proxy_pass=cfg.get("proxy_pass"),
        )
