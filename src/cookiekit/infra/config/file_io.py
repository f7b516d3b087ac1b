from __future__ import annotations

import json
import logging
import tomllib
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, BinaryIO

from cookiekit.infra.paths import (
    LOCAL_CONFIG_FILENAMES,
    SAMPLE_CONFIG_FILE,
    SETTING_PATH,
)

logger = logging.getLogger(__name__)

_LOADERS: dict[str, Callable[[BinaryIO], Any]] = {
    ".json": json.load,
    ".toml": tomllib.load,
}


def _resolve_file_path(
    user_path: str | Path | None,
    local_filename: Iterable[str],
    fallback_path: Path,
) -> Path | None:
    """
    Pick the configuration file to read.

    Lookup order:
        1. ``user_path``, when given and pointing at an existing file
        2. The first of ``local_filename`` present in the working directory
        3. ``fallback_path`` in the user config directory

    Args:
        user_path: Optional explicit file path.
        local_filename: File names looked up in the current working directory.
        fallback_path: Last-resort location.

    Returns:
        The resolved path, or None if nothing exists.
    """
    if user_path:
        path = Path(user_path).expanduser().resolve()
        if path.is_file():
            return path
        logger.warning("Specified file not found: %s", path)

    for name in local_filename:
        local_path = (Path.cwd() / name).resolve()
        if local_path.is_file():
            logger.debug("Using local file: %s", local_path)
            return local_path

    if fallback_path.is_file():
        return fallback_path.resolve()

    return None


def _load_by_extension(path: Path) -> dict[str, Any]:
    """
    Parse a ``.toml`` or ``.json`` configuration file.

    Args:
        path: File to parse.

    Returns:
        The top-level table.

    Raises:
        ValueError: If the extension is unsupported, the content does not
            parse, or the top level is not a table.
    """
    ext = path.suffix.lower()
    loader = _LOADERS.get(ext)
    if loader is None:
        raise ValueError(f"Unsupported config file extension: {ext}")

    try:
        with path.open("rb") as f:
            data = loader(f)
    except (OSError, ValueError) as e:
        kind = ext.lstrip(".").upper()
        raise ValueError(f"Invalid {kind} in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a dict, got {type(data)} in {path}")

    return data


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """
    Load the cookiekit configuration.

    Resolution order:
        - Explicit ``config_path`` (if provided)
        - ``settings.toml`` or ``settings.json`` in the working directory
        - ``SETTING_PATH`` in the user config directory

    Args:
        config_path: Optional explicit configuration file path.

    Returns:
        Parsed configuration as a dictionary.

    Raises:
        FileNotFoundError: If no configuration file is found.
        ValueError: If the file cannot be parsed.
    """
    path = _resolve_file_path(
        user_path=config_path,
        local_filename=LOCAL_CONFIG_FILENAMES,
        fallback_path=SETTING_PATH,
    )

    if not path:
        raise FileNotFoundError("No valid config file found.")

    logger.debug("Loading configuration from: %s", path)
    return _load_by_extension(path)


def copy_default_config(target: Path | None = None) -> Path:
    """
    Write the bundled sample configuration to ``target``.

    Args:
        target: Destination file; defaults to ``settings.toml`` in the
            working directory.

    Returns:
        The path written.
    """
    target = target or Path.cwd() / LOCAL_CONFIG_FILENAMES[0]
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(SAMPLE_CONFIG_FILE.read_bytes())
    return target


def save_config(
    config: dict[str, Any],
    output_path: str | Path = SETTING_PATH,
) -> None:
    """
    Persist configuration data as JSON.

    Args:
        config: Configuration mapping.
        output_path: Destination JSON file.

    Raises:
        OSError: If writing fails.
    """
    output = Path(output_path).expanduser().resolve()
    output.parent.mkdir(parents=True, exist_ok=True)

    try:
        with output.open("w", encoding="utf-8") as f:
            json.dump(config, f, indent=2, ensure_ascii=False)
    except OSError as e:
        logger.error("Failed to write config JSON '%s': %s", output, e)
        raise

    logger.info("Configuration saved to JSON: %s", output)


def save_config_file(
    source_path: str | Path, output_path: str | Path = SETTING_PATH
) -> None:
    """
    Convert a TOML/JSON configuration file into the JSON settings file.

    Args:
        source_path: Path to the source TOML/JSON file.
        output_path: Path to the output JSON file.

    Raises:
        FileNotFoundError: If the source file does not exist.
        ValueError: If the source file cannot be parsed.
    """
    source = Path(source_path).expanduser().resolve()
    if not source.is_file():
        raise FileNotFoundError(f"Source file not found: {source}")

    save_config(_load_by_extension(source), output_path)
