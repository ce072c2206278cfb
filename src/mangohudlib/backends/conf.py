"""
MangoHud.conf writer.

Output layout:
    - Optional header comment
    - Keys from Config.key_order, in that order (MangoHud draws
      entries in file order when legacy_layout is off)
    - Remaining parameters in catalogue order, one '### Section'
      comment per section
    - Unknown keys from Config.extra under '### Other'

Parameters still at their default are skipped unless include_defaults
is set. Keys listed in key_order are always written. Unset optional
parameters (None) are never written.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from mangohudlib.model import Config
from mangohudlib.params import PARAMS, Param, get_param, encode_value


logger = logging.getLogger(__name__)


@dataclass
class ConfEntry:
    """One entry to write. param is None for keys from Config.extra."""
    key: str
    text: str
    section: Optional[str]
    param: Optional[Param] = None


def iter_entries(config: Config, include_defaults: bool = False) -> Iterator[ConfEntry]:
    """Yield the entries a writer should emit, in output order."""
    changed = set(config.changed_keys())
    written = set()

    for key in config.key_order:
        param = get_param(key)
        if param is None or key in written:
            continue
        written.add(key)
        value = config.get(key)
        if value is None:
            continue
        yield ConfEntry(key=key, text=encode_value(param, value), section=None, param=param)

    for param in PARAMS:
        if param.name in written:
            continue
        value = config.get(param.name)
        if value is None:
            continue
        if not include_defaults and param.name not in changed:
            continue
        yield ConfEntry(key=param.name, text=encode_value(param, value), section=param.section, param=param)

    for key, text in config.extra.items():
        yield ConfEntry(key=key, text=text, section="Other")


def generate_conf(config: Config, include_defaults: bool = False, header: Optional[str] = None) -> str:
    """
    Generate MangoHud.conf text for a config.

    Args:
        config: Config to write
        include_defaults: Also write parameters left at their default
        header: Optional comment placed at the top (one '# ' per line)

    Returns:
        Config file text, ending in a newline

    Raises:
        ValueError: If a value contains a newline
    """
    lines = []

    if header:
        lines.extend(f"# {line}".rstrip() for line in header.splitlines())
        lines.append("")

    current_section = None
    for entry in iter_entries(config, include_defaults=include_defaults):
        if "\n" in entry.text or "\r" in entry.text:
            raise ValueError(f"{entry.key}: value cannot contain a newline")
        if "#" in entry.text:
            logger.warning("%s contains '#'; MangoHud reads the rest of the line as a comment", entry.key)

        if entry.section is not None and entry.section != current_section:
            if lines and lines[-1] != "":
                lines.append("")
            lines.append(f"### {entry.section}")
            current_section = entry.section

        lines.append(f"{entry.key}={entry.text}")

    return "\n".join(lines) + "\n" if lines else ""


def save_conf_file(config: Config, filename, include_defaults: bool = False, header: Optional[str] = None) -> None:
    """
    Generate MangoHud.conf text and save it to a file.

    Args:
        config: Config to write
        filename: Output file path
        include_defaults: Also write parameters left at their default
        header: Optional comment placed at the top
    """
    text = generate_conf(config, include_defaults=include_defaults, header=header)
    with open(Path(filename), "w", encoding="utf-8") as f:
        f.write(text)
    logger.info("Wrote %s", filename)


__all__ = ["ConfEntry", "iter_entries", "generate_conf", "save_conf_file"]
