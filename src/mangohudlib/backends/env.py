"""
MANGOHUD_CONFIG writer.

Produces the single-line, comma-separated form read from the
environment. Enabled booleans are written as a bare key.
"""

from mangohudlib.model import Config
from mangohudlib.params import ParamKind

from .conf import iter_entries


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace(",", "\\,")


def generate_env(config: Config, include_defaults: bool = False) -> str:
    """
    Generate a MANGOHUD_CONFIG value for a config.

    Raises:
        ValueError: If a value contains a newline
    """
    parts = []
    for entry in iter_entries(config, include_defaults=include_defaults):
        if "\n" in entry.text or "\r" in entry.text:
            raise ValueError(f"{entry.key}: value cannot contain a newline")
        if entry.param is not None and entry.param.kind is ParamKind.BOOL and entry.text == "1":
            parts.append(entry.key)
        else:
            parts.append(f"{entry.key}={_escape(entry.text)}")
    return ",".join(parts)


__all__ = ["generate_env"]
