"""
Filesystem locations used by cookiekit.

Settings written by :func:`~cookiekit.infra.config.save_config_file` live in
the platform config directory; the sample configuration ships inside the
package.
"""

from importlib.resources import files

from platformdirs import user_config_path

APP_NAME = "cookiekit"

# e.g. ~/.config/cookiekit/ on Linux
USER_CONFIG_DIR = user_config_path(APP_NAME, appauthor=False)
SETTING_PATH = USER_CONFIG_DIR / "settings.json"

# looked up in the working directory, first match wins
LOCAL_CONFIG_FILENAMES = ("settings.toml", "settings.json")

SAMPLE_CONFIG_FILE = files("cookiekit.resources").joinpath(
    "config", "settings.sample.toml"
)
