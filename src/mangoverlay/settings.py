"""Application settings for MangOverlay."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Mapping

import yaml


logger = logging.getLogger(__name__)

SETTINGS_ENV = "MANGOVERLAY_SETTINGS"


class SettingsError(Exception):
    """Raised when the settings file cannot be used."""


@dataclass
class Settings:
    """Editor settings (not MangoHud parameters)."""
    log_level: str = "WARNING"
    log_file: str | None = None
    backup: bool = True  # keep <file>.bak when overwriting a config
    include_defaults: bool = False  # write every parameter, not just changes
    app_name: str | None = None  # edit <app>.conf instead of MangoHud.conf

    @classmethod
    def from_dict(cls, data: dict) -> Settings:
        """Create settings from dictionary."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise SettingsError(f"Unknown settings: {', '.join(unknown)}")
        for name in ("backup", "include_defaults"):
            if name in data and not isinstance(data[name], bool):
                raise SettingsError(f"Setting {name} must be true or false, got {data[name]!r}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: str) -> Settings:
        """Load settings from YAML file."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise SettingsError(f"Invalid settings file {path}: {e}") from e
        if data is not None and not isinstance(data, dict):
            raise SettingsError(f"Settings file {path} must contain a mapping")
        return cls.from_dict(data or {})


def settings_path(environ: Mapping[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ
    if env.get(SETTINGS_ENV):
        return Path(env[SETTINGS_ENV]).expanduser()
    config_home = env.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(config_home) / "mangoverlay" / "settings.yaml"


def load_settings(path: str | None = None, environ: Mapping[str, str] | None = None) -> Settings:
    """
    Load settings from path, or from the default location.

    A missing file gives the defaults.
    """
    target = Path(path) if path else settings_path(environ)
    if not target.is_file():
        logger.debug("No settings file at %s, using defaults", target)
        return Settings()
    logger.debug("Loading settings from %s", target)
    return Settings.from_yaml(str(target))
