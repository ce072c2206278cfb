"""
Config Parser (Raw Input → Config model).

Reads MangoHud configuration text in either of its two forms.

File form (MangoHud.conf):
    # comment
    fps_limit=60,144
    gpu_temp
    position=top-right

Environment form (MANGOHUD_CONFIG):
    fps_limit=60,gpu_temp,position=top-right

Syntax Notes (as MangoHud reads them):
    - Everything from the first '#' on a line is a comment
    - A key without '=' is the same as key=1
    - The value is everything after the first '='
    - A later entry for the same key wins
    - In the environment form entries are separated by ',';
      a comma inside a value is written '\\,'
"""

import logging
import warnings
from dataclasses import dataclass
from typing import List, Optional

from .model import Config
from .params import get_param, decode_value


logger = logging.getLogger(__name__)


class ConfigParseError(Exception):
    """Raised in strict mode when config text cannot be read."""

    def __init__(self, message: str, line: Optional[int] = None, key: Optional[str] = None):
        self.line = line
        self.key = key
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


@dataclass
class ConfigEntry:
    """One key/value pair as it appeared in the input."""
    key: str
    value: str
    line: Optional[int] = None


def _warn(msg: str) -> None:
    logger.warning(msg)
    warnings.warn(msg, UserWarning)


def _parse_entry(text: str, line: Optional[int] = None, strict: bool = False) -> Optional[ConfigEntry]:
    """Split one entry into key and value. Returns None for entries to skip."""
    text = text.strip()
    if not text:
        return None

    key, sep, value = text.partition("=")
    key = key.strip()
    if not sep:
        value = "1"

    if not key:
        if strict:
            raise ConfigParseError(f"Missing key in entry {text!r}", line=line)
        where = f" (line {line})" if line is not None else ""
        _warn(f"Missing key in entry {text!r}{where}; skipping")
        return None

    return ConfigEntry(key=key, value=value.strip(), line=line)


def _parse_lines(content: str, strict: bool = False) -> List[ConfigEntry]:
    """Parse file-form content into entries."""
    entries = []
    for line_num, raw in enumerate(content.splitlines(), start=1):
        text = raw.split("#", 1)[0]
        entry = _parse_entry(text, line=line_num, strict=strict)
        if entry is not None:
            entries.append(entry)
    return entries


def split_env_entries(content: str) -> List[str]:
    """
    Split an environment-form string on unescaped commas.

    '\\,' yields a literal comma and '\\\\' a literal backslash.
    """
    parts = []
    current = []
    chars = iter(content)
    for ch in chars:
        if ch == "\\":
            nxt = next(chars, None)
            if nxt is None:
                current.append(ch)
            elif nxt in ",\\":
                current.append(nxt)
            else:
                current.append(ch)
                current.append(nxt)
        elif ch == ",":
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
    parts.append("".join(current))
    return parts


def _build_config(entries: List[ConfigEntry], strict: bool) -> Config:
    config = Config()
    seen = set()

    for entry in entries:
        if entry.key in seen:
            logger.debug("%s given more than once, last value wins", entry.key)
        seen.add(entry.key)

        param = get_param(entry.key)
        if param is None:
            logger.debug("Keeping unknown key %s=%r", entry.key, entry.value)
            config.extra[entry.key] = entry.value
            continue

        try:
            value = decode_value(param, entry.value)
        except ValueError as e:
            if strict:
                raise ConfigParseError(str(e), line=entry.line, key=entry.key) from e
            where = f" (line {entry.line})" if entry.line is not None else ""
            _warn(f"Invalid value for {entry.key}{where}: {e}; keeping default")
            continue

        config.set(entry.key, value)
        if entry.key not in config.key_order:
            config.key_order.append(entry.key)

    return config


def parse_config_string(content: str, strict: bool = False) -> Config:
    """
    Parse file-form config text into a Config object.

    Args:
        content: MangoHud.conf text
        strict: Raise on invalid values instead of warning

    Returns:
        Config with every given parameter applied over the defaults

    Raises:
        ConfigParseError: In strict mode, on an entry without a key or an invalid value
    """
    return _build_config(_parse_lines(content, strict), strict)


def parse_env_string(content: str, strict: bool = False) -> Config:
    """
    Parse an environment-form string (MANGOHUD_CONFIG) into a Config object.

    Args:
        content: Comma-separated entries
        strict: Raise on invalid values instead of warning

    Raises:
        ConfigParseError: In strict mode, on an entry without a key or an invalid value
    """
    entries = []
    for part in split_env_entries(content):
        entry = _parse_entry(part, strict=strict)
        if entry is not None:
            entries.append(entry)
    return _build_config(entries, strict)


def parse_config_file(filepath, strict: bool = False) -> Config:
    """
    Parse a MangoHud.conf file into a Config object.

    Raises:
        FileNotFoundError: If file doesn't exist
        ConfigParseError: If parsing fails
    """
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"Config file not found: {filepath}")

    logger.debug("Parsing %s", filepath)
    return parse_config_string(content, strict=strict)


__all__ = [
    "parse_config_string",
    "parse_config_file",
    "parse_env_string",
    "split_env_entries",
    "ConfigEntry",
    "ConfigParseError",
]
