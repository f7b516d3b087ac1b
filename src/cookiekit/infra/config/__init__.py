"""
Configuration for cookiekit: TOML/JSON settings files resolved into
:class:`~cookiekit.schemas.JarConfig` and :class:`~cookiekit.schemas.SessionConfig`.

Typical use::

    adapter = ConfigAdapter.from_file()
    jar = open_jar(adapter.get_jar_config("example.com"))
"""

__all__ = [
    "ConfigAdapter",
    "copy_default_config",
    "load_config",
    "save_config",
    "save_config_file",
]

from .adapter import ConfigAdapter
from .file_io import copy_default_config, load_config, save_config, save_config_file
