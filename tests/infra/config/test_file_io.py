import json
from pathlib import Path

import pytest

from cookiekit.infra.config.file_io import (
    _load_by_extension,
    copy_default_config,
    load_config,
    save_config,
    save_config_file,
)

# ================================================================
# load_config() and _resolve_file_path behavior tests
# ================================================================


def test_load_config_user_path_exists(tmp_path, monkeypatch):
    """User passed config_path and the file exists -> load it directly."""
    cfgfile = tmp_path / "custom.toml"
    cfgfile.write_text("[general]\nbackend = 'httpx'", encoding="utf-8")

    monkeypatch.chdir(tmp_path)

    cfg = load_config(config_path=cfgfile)
    assert cfg == {"general": {"backend": "httpx"}}


def test_load_config_user_path_not_exists(tmp_path, monkeypatch):
    """User provided config path but nothing else exists -> FileNotFoundError."""
    monkeypatch.setattr(
        "cookiekit.infra.config.file_io.SETTING_PATH",
        tmp_path / "nofile.json",
    )
    monkeypatch.chdir(tmp_path)

    with pytest.raises(FileNotFoundError):
        load_config(config_path=tmp_path / "not_exists.toml")


def test_load_config_local_settings_toml(tmp_path, monkeypatch):
    """No config_path, local settings.toml exists in cwd -> load that file."""
    (tmp_path / "settings.toml").write_text("a = 1\nb = '2'", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert load_config() == {"a": 1, "b": "2"}


def test_load_config_local_settings_json(tmp_path, monkeypatch):
    """No config_path, local settings.json exists -> load it."""
    settings = tmp_path / "settings.json"
    settings.write_text(json.dumps({"a": 1, "b": "2"}), encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert load_config() == {"a": 1, "b": "2"}


def test_load_config_fallback_setting_file(tmp_path, monkeypatch):
    """No config_path, no local file, but SETTING_PATH exists -> load fallback."""
    fallback = tmp_path / "fallback.toml"
    fallback.write_text("a = 1", encoding="utf-8")

    monkeypatch.setattr("cookiekit.infra.config.file_io.SETTING_PATH", fallback)
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    assert load_config() == {"a": 1}


def test_load_config_none_found(tmp_path, monkeypatch):
    """No user path, no local settings, no fallback file -> FileNotFoundError."""
    monkeypatch.setattr(
        "cookiekit.infra.config.file_io.SETTING_PATH",
        tmp_path / "nofile.toml",
    )
    monkeypatch.chdir(tmp_path)

    with pytest.raises(FileNotFoundError):
        load_config()


# ================================================================
# _load_by_extension JSON/TOML errors
# ================================================================


def test_load_by_extension_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{ invalid json", encoding="utf-8")

    with pytest.raises(ValueError) as exc:
        _load_by_extension(path)

    assert "Invalid JSON in" in str(exc.value)


def test_load_by_extension_invalid_toml(tmp_path):
    path = tmp_path / "broken.toml"
    path.write_text("a = [1,2,,3]", encoding="utf-8")

    with pytest.raises(ValueError) as exc:
        _load_by_extension(path)

    assert "Invalid TOML in" in str(exc.value)


def test_load_by_extension_unsupported_ext(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("hello: 1")

    with pytest.raises(ValueError) as exc:
        _load_by_extension(path)

    assert "Unsupported config file extension" in str(exc.value)


def test_load_by_extension_root_not_dict(tmp_path):
    path = tmp_path / "not_dict.json"
    path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")

    with pytest.raises(ValueError) as exc:
        _load_by_extension(path)

    assert "Config root must be a dict" in str(exc.value)


# ================================================================
# copy_default_config
# ================================================================


def test_copy_default_config_uses_bundled_sample(tmp_path):
    target = tmp_path / "out" / "settings.toml"
    assert copy_default_config(target) == target

    cfg = _load_by_extension(target)
    assert cfg["general"]["backend"] == "aiohttp"
    assert cfg["general"]["jar"]["filenames"] == ["aiohttp.cookies", "httpx.cookies"]


def test_copy_default_config_defaults_to_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert copy_default_config() == tmp_path / "settings.toml"
    assert (tmp_path / "settings.toml").is_file()


# ================================================================
# save_config / save_config_file
# ================================================================


def test_save_config_creates_parent_and_saves(tmp_path):
    outfile = tmp_path / "nested" / "config.json"

    save_config({"a": 1}, outfile)
    assert json.loads(outfile.read_text(encoding="utf-8")) == {"a": 1}


def test_save_config_failure_propagates(tmp_path, monkeypatch):
    def fake_open(*args, **kwargs):
        raise OSError("write fail")

    monkeypatch.setattr(Path, "open", fake_open)

    with pytest.raises(OSError):
        save_config({"a": 1}, tmp_path / "cannot_write.json")


def test_save_config_file_converts_toml(tmp_path):
    source = tmp_path / "settings.toml"
    source.write_text("[general.jar]\ndefault_domain = 'x.org'", encoding="utf-8")
    output = tmp_path / "settings.json"

    save_config_file(source, output)

    data = json.loads(output.read_text(encoding="utf-8"))
    assert data == {"general": {"jar": {"default_domain": "x.org"}}}


def test_save_config_file_missing_source(tmp_path):
    with pytest.raises(FileNotFoundError):
        save_config_file(tmp_path / "missing.toml", tmp_path / "out.json")
