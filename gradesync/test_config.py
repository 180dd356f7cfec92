# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 The gradesync developers

from pytest import raises

from gradesync import Default_API_URL
from gradesync.config import (
    SERVER_ENV_VAR,
    default_config,
    read_config,
    save_config,
    timeout_from_config,
)


def test_defaults_when_no_file(tmp_path) -> None:
    cfg = read_config(tmp_path / "missing.toml", environ={})
    assert cfg == default_config()
    assert cfg["server"] == Default_API_URL


def test_env_overrides_file(tmp_path) -> None:
    f = tmp_path / "cfg.toml"
    f.write_text('server = "http://from-file:5000"\nread_timeout = 5\n')
    cfg = read_config(f, environ={})
    assert cfg["server"] == "http://from-file:5000"
    assert timeout_from_config(cfg) == (10.0, 5.0)
    cfg = read_config(f, environ={SERVER_ENV_VAR: "https://from-env"})
    assert cfg["server"] == "https://from-env"


def test_blank_env_is_ignored(tmp_path) -> None:
    cfg = read_config(tmp_path / "missing.toml", environ={SERVER_ENV_VAR: "  "})
    assert cfg["server"] == Default_API_URL


def test_save_then_read(tmp_path) -> None:
    f = tmp_path / "sub" / "cfg.toml"
    cfg = default_config()
    cfg["server"] = "http://elsewhere:8000"
    cfg["LogToFile"] = True
    assert save_config(cfg, f) == f
    again = read_config(f, environ={})
    assert again["server"] == "http://elsewhere:8000"
    assert again["LogToFile"] is True


def test_bad_toml(tmp_path) -> None:
    f = tmp_path / "cfg.toml"
    f.write_text("server = [unclosed\n")
    with raises(ValueError):
        read_config(f, environ={})
