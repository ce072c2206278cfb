"""
Edit session over one MangoHud config file.

A session loads a file (or starts from the defaults when it does not
exist), applies changes given as text, reports what changed and
writes the result back. Parsing and writing go through mangohudlib.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import List, Optional, Tuple

from mangohudlib.backends import generate_conf
from mangohudlib.model import Config, HudPreset
from mangohudlib.params import decode_value, encode_value, get_param
from mangohudlib.parser import ConfigParseError, parse_config_file
from mangohudlib.presets import apply_preset

from .settings import Settings


logger = logging.getLogger(__name__)

HEADER = "Written by MangOverlay"


class SessionError(Exception):
    """Raised for session misuse (unknown keys, saving before loading)."""


def _describe(config: Config, key: str) -> Optional[str]:
    param = get_param(key)
    if param is not None:
        value = config.get(key)
        return None if value is None else encode_value(param, value)
    return config.extra.get(key)


class EditSession:
    """
    Editing state for one config file.

    Usage:
        session = EditSession(path, settings)
        session.load()
        session.set("fps_limit", "60,144")
        session.save()
    """

    def __init__(self, path, settings: Optional[Settings] = None):
        self.path = Path(path)
        self.settings = settings or Settings()
        self.config: Optional[Config] = None
        self._original: Optional[Config] = None
        self.exists = False

    def load(self, strict: bool = False) -> Config:
        """Load the file, or the defaults if it does not exist yet."""
        if self.path.is_file():
            self.config = parse_config_file(self.path, strict=strict)
            self.exists = True
            logger.info("Loaded %s", self.path)
        else:
            self.config = Config()
            self.exists = False
            logger.info("%s does not exist, starting from defaults", self.path)
        self._original = self.config.copy()
        return self.config

    def _require_config(self) -> Config:
        if self.config is None:
            raise SessionError("Session has no config loaded")
        return self.config

    def set(self, key: str, text: str) -> None:
        """
        Set a parameter from its on-disk text form.

        Unknown keys are stored verbatim with the other unknown keys.

        Raises:
            ConfigParseError: If the text is not a valid value
            SessionError: If the key is empty
        """
        config = self._require_config()
        if not key.strip():
            raise SessionError(f"Missing key in {key}={text}")
        param = get_param(key)
        if param is None:
            logger.warning("%s is not a known parameter, storing as-is", key)
            config.extra[key] = text
            return
        try:
            value = decode_value(param, text)
        except ValueError as e:
            raise ConfigParseError(str(e), key=key) from e
        config.set(key, value)
        if key not in config.key_order:
            config.key_order.append(key)
        logger.debug("Set %s=%s", key, text)

    def get(self, key: str) -> Optional[str]:
        """Current on-disk text for a key; None when unset."""
        config = self._require_config()
        if get_param(key) is None and key not in config.extra:
            raise SessionError(f"Unknown parameter: {key}")
        return _describe(config, key)

    def reset(self, key: str) -> None:
        """Put a parameter back to its default and drop it from the file."""
        config = self._require_config()
        if key in config.extra:
            del config.extra[key]
            return
        if get_param(key) is None:
            raise SessionError(f"Unknown parameter: {key}")
        config.reset(key)
        if key in config.key_order:
            config.key_order.remove(key)

    def apply_preset(self, preset: HudPreset) -> None:
        apply_preset(self._require_config(), preset)

    @property
    def dirty(self) -> bool:
        return bool(self.diff())

    def diff(self) -> List[Tuple[str, Optional[str], Optional[str]]]:
        """
        Changes since load, as (key, old_text, new_text).

        A text of None means the key is unset on that side.
        """
        config = self._require_config()
        original = self._original or Config()
        changes = []
        for key in Config.parameter_names():
            old, new = _describe(original, key), _describe(config, key)
            if old != new:
                changes.append((key, old, new))
        for key in list(original.extra) + [k for k in config.extra if k not in original.extra]:
            old, new = original.extra.get(key), config.extra.get(key)
            if old != new:
                changes.append((key, old, new))
        return changes

    def render(self) -> str:
        """The text save() would write."""
        return generate_conf(
            self._require_config(),
            include_defaults=self.settings.include_defaults,
            header=HEADER,
        )

    def save(self) -> Path:
        """
        Write the config to disk.

        Creates parent directories; copies the previous file to
        <file>.bak first when backups are on.
        """
        text = self.render()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if self.settings.backup and self.path.is_file():
            backup = self.path.with_name(self.path.name + ".bak")
            shutil.copy2(self.path, backup)
            logger.info("Backed up %s to %s", self.path, backup)
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(text)
        logger.info("Saved %s", self.path)
        self.exists = True
        self._original = self.config.copy()
        return self.path
