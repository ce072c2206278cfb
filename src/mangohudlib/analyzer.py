"""
Config Analyzer: diagnostics for MangoHud configurations.

Flags settings that parse fine but will not do what the user expects:
    - Dependencies between parameters (e.g. gpu_mem_clock needs vram)
    - Threshold lists that are not ascending
    - Options that only apply when another option is on
    - Paths that do not exist
    - Keys MangoHud may not know

IMPORTANT: This does NOT modify the config. It only produces a report.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from mangohudlib.model import Config, HudPreset


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class Issue:
    severity: Severity
    key: Optional[str]
    message: str

    def __str__(self) -> str:
        where = f"{self.key}: " if self.key else ""
        return f"[{self.severity.value}] {where}{self.message}"


@dataclass
class ConfigReport:
    """Analysis report for one config."""

    issues: List[Issue] = field(default_factory=list)
    changed_keys: List[str] = field(default_factory=list)
    unknown_keys: List[str] = field(default_factory=list)

    def add(self, severity: Severity, key: Optional[str], message: str) -> None:
        issue = Issue(severity, key, message)
        if issue not in self.issues:
            self.issues.append(issue)

    @property
    def errors(self) -> List[Issue]:
        return [i for i in self.issues if i.severity is Severity.ERROR]

    @property
    def warnings(self) -> List[Issue]:
        return [i for i in self.issues if i.severity is Severity.WARNING]

    @property
    def ok(self) -> bool:
        return not self.errors

    def keys_with_issues(self) -> List[str]:
        return [i.key for i in self.issues if i.key]


_STAT_FOR_COLOR_CHANGE = {
    "gpu_load_change": "gpu_stats",
    "cpu_load_change": "cpu_stats",
    "core_load_change": "core_load",
    "fps_color_change": "fps",
}


def analyze_config(config: Config) -> ConfigReport:
    """
    Check a Config for settings that conflict or will be ignored.

    Returns a ConfigReport; report.ok is False when there is at least
    one ERROR.
    """
    report = ConfigReport(changed_keys=config.changed_keys())
    defaults = Config()

    # VRAM details are drawn on the VRAM row
    for key in ("gpu_mem_clock", "gpu_mem_temp"):
        if config.get(key) and not config.vram:
            report.add(Severity.WARNING, key, "has no effect unless vram is enabled")

    if config.horizontal_stretch != defaults.horizontal_stretch and not config.horizontal:
        report.add(Severity.INFO, "horizontal_stretch", "only applies when horizontal is enabled")

    # Threshold pairs must be ascending
    for key in ("fps_value", "gpu_load_value", "cpu_load_value"):
        values = config.get(key)
        if any(a >= b for a, b in zip(values, values[1:])):
            report.add(Severity.ERROR, key, f"thresholds must be ascending, got {values}")

    for key, stat in _STAT_FOR_COLOR_CHANGE.items():
        if config.get(key) and not config.get(stat):
            report.add(Severity.INFO, key, f"has no effect while {stat} is hidden")

    limits = config.fps_limit
    if len(limits) > 1 and limits[0] != 0 and 0 in limits[1:]:
        report.add(
            Severity.INFO,
            "fps_limit",
            f"starts limited to {limits[0]}; unlimited (0) is only reached with toggle_fps_limit",
        )
    if len(set(limits)) != len(limits):
        report.add(Severity.WARNING, "fps_limit", f"contains duplicate values: {limits}")

    if config.media_player_name and not config.media_player:
        report.add(Severity.INFO, "media_player_name", "is ignored while media_player is off")

    for key in ("font_file", "font_file_text"):
        path = config.get(key)
        if path is not None and not Path(path).expanduser().is_file():
            report.add(Severity.WARNING, key, f"file not found: {path}")

    if config.output_folder is not None and not Path(config.output_folder).expanduser().is_dir():
        report.add(Severity.WARNING, "output_folder", f"directory not found: {config.output_folder}")

    if config.permit_upload and not config.autostart_log and config.output_folder is None:
        report.add(Severity.INFO, "permit_upload", "nothing to upload until logging is started")

    if config.no_display and config.preset is HudPreset.OFF:
        report.add(Severity.INFO, "no_display", "is redundant with preset=0")

    for key in config.extra:
        report.unknown_keys.append(key)
        report.add(Severity.WARNING, key, "unknown parameter, kept as written")

    return report
