# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 The gradesync developers

"""Settings: which server, how patient to be, and where to log.

Settings come from, in increasing order of precedence, built-in
defaults, the config file, and the environment.  Command-line options
override all of these (see :mod:`gradesync.cli`).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
import sys
from typing import Any

import arrow
import platformdirs

if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib
import tomlkit

from gradesync import Default_API_URL

log = logging.getLogger("config")

logdir = platformdirs.user_log_path("gradesync", "gradesync")
cfgdir = platformdirs.user_config_path("gradesync", "gradesync")
cfgfile = cfgdir / "gradesyncConfig.toml"

# environment variable naming the server
SERVER_ENV_VAR = "GRADESYNC_API_URL"


def default_config() -> dict[str, Any]:
    return {
        "server": Default_API_URL,
        "connect_timeout": 10.0,
        "read_timeout": 60.0,
        "LogLevel": "warning",
        "LogToFile": False,
    }


def read_config(
    path: Path | None = None, *, environ: dict[str, str] | None = None
) -> dict[str, Any]:
    """Read the settings: defaults, updated from the config file then the environment.

    Args:
        path: config file to read, default is the per-user one.  A
            missing file is not an error.

    Keyword Args:
        environ: mapping to take environment variables from, default
            ``os.environ``.

    Raises:
        ValueError: the config file is not valid TOML.
    """
    if path is None:
        path = cfgfile
    if environ is None:
        environ = dict(os.environ)
    cfg = default_config()
    if path.exists():
        with open(path, "rb") as f:
            try:
                cfg.update(tomllib.load(f))
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Cannot parse config file {path}: {e}") from None
    server = environ.get(SERVER_ENV_VAR, "").strip()
    if server:
        cfg["server"] = server
    return cfg


def save_config(cfg: dict[str, Any], path: Path | None = None) -> Path:
    """Write the settings to the config file, creating its directory if needed.

    Returns:
        Where the settings went.
    """
    if path is None:
        path = cfgfile
    log.info("Saving config file %s", path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as fh:
        tomlkit.dump(cfg, fh)
    return path


def timeout_from_config(cfg: dict[str, Any]) -> tuple[float, float]:
    return (float(cfg["connect_timeout"]), float(cfg["read_timeout"]))


def configure_logging(cfg: dict[str, Any], *, level: str | None = None) -> Path | None:
    """Set up the root logger once per process.

    Keyword Args:
        level: overrides the ``LogLevel`` setting, e.g., ``"debug"``.

    Returns:
        The log file, or None if logging to stderr.
    """
    kwargs: dict[str, Any] = {}
    logfile = None
    if cfg.get("LogToFile"):
        # filename must not have ":" (forbidden on win32)
        now = arrow.now().format("YYYY-MM-DD_HH-mm-ss_ZZZ")
        logfile = Path(f"gradesync-{now}.log")
        try:
            logdir.mkdir(parents=True, exist_ok=True)
            logfile = logdir / logfile
        except PermissionError:
            pass
        kwargs = {"filename": logfile}
    logging.basicConfig(
        format="%(asctime)s %(levelname)5s:%(name)s\t%(message)s",
        datefmt="%b%d %H:%M:%S %Z",
        **kwargs,
    )
    logging.getLogger().setLevel((level or cfg.get("LogLevel", "warning")).upper())
    return logfile
