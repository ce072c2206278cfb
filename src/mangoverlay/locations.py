"""
MangoHud config file discovery.

Lookup order, first existing file wins:
    1. $MANGOHUD_CONFIGFILE
    2. $XDG_CONFIG_HOME/MangoHud/<app>.conf   (when an app name is given)
    3. $XDG_CONFIG_HOME/MangoHud/MangoHud.conf

XDG_CONFIG_HOME defaults to ~/.config.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

logger = logging.getLogger(__name__)

CONFIGFILE_ENV = "MANGOHUD_CONFIGFILE"
CONFIG_ENV = "MANGOHUD_CONFIG"
DEFAULT_FILENAME = "MangoHud.conf"


def config_dir(environ: Mapping[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ
    config_home = env.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(config_home) / "MangoHud"


def candidate_paths(app_name: str | None = None, environ: Mapping[str, str] | None = None) -> list[Path]:
    """All places MangoHud looks for a config file, in lookup order."""
    env = os.environ if environ is None else environ
    paths = []
    if env.get(CONFIGFILE_ENV):
        paths.append(Path(env[CONFIGFILE_ENV]).expanduser())
    base = config_dir(env)
    if app_name:
        paths.append(base / f"{app_name}.conf")
    paths.append(base / DEFAULT_FILENAME)
    return paths


def find_config(app_name: str | None = None, environ: Mapping[str, str] | None = None) -> Path | None:
    """First existing config file MangoHud would read, or None."""
    for path in candidate_paths(app_name, environ):
        if path.is_file():
            logger.debug("Found config at %s", path)
            return path
    return None


def default_config_path(app_name: str | None = None, environ: Mapping[str, str] | None = None) -> Path:
    """
    Where a config should be written when none exists yet.

    $MANGOHUD_CONFIGFILE wins when set; otherwise the per-app file if an
    app name is given, else MangoHud.conf.
    """
    return candidate_paths(app_name, environ)[0]
