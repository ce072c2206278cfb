"""
Parameter catalogue and value codecs.

Every Config parameter has one Param entry here saying how its value is
spelled on disk. The parser, the writers and any editing front-end all
go through this table, so a parameter is described exactly once.

On-disk spellings follow MangoHud:
    - booleans: 1 / 0
    - colours: RRGGBB
    - lists: comma separated (fps_limit also accepts '+')
    - keybinds: Mod+Key
    - fps_sampling_period, log_interval: milliseconds
    - log_duration: seconds
"""

import re
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Type

from .color import Color
from .model import (
    Config,
    FcatOverlayEdge,
    FpsLimitMethod,
    HudPosition,
    HudPreset,
    Keybind,
    VSync,
)


class ParamKind(Enum):
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STR = "str"
    PATH = "path"
    COLOR = "color"
    COLOR_LIST = "color_list"
    INT_LIST = "int_list"
    STR_LIST = "str_list"
    ENUM = "enum"
    KEYBIND = "keybind"
    DURATION_MS = "duration_ms"
    DURATION_S = "duration_s"


@dataclass(frozen=True)
class Param:
    """
    Describes one MangoHud parameter.

    Properties:
        name: Key as written in the config file (and Config attribute)
        section: Display group, e.g. "GPU"
        kind: Value codec to use
        label: Short human-readable description
        enum: Enum type for ENUM parameters
        range: Inclusive (min, max); either end may be None
        length: Exact item count for fixed-size lists
        separators: Accepted list separators; the first is used for writing
        optional: Whether the value may be None (not set)
    """

    name: str
    section: str
    kind: ParamKind
    label: str
    enum: Optional[Type[Enum]] = None
    range: Optional[Tuple[Optional[float], Optional[float]]] = None
    length: Optional[int] = None
    separators: str = ","
    optional: bool = False


_TRUE_WORDS = {"true", "yes", "on"}
_FALSE_WORDS = {"false", "no", "off"}

# Plain decimal integers only: no "5.0", no "1_000"
_INT_RE = re.compile(r"^[+-]?[0-9]+$")

_SECTIONS: List[Tuple[str, List[Tuple]]] = [
    ("Performance", [
        ("fps_limit", ParamKind.INT_LIST, "FPS limits, toggled in order", dict(range=(0, None), separators=",+")),
        ("fps_limit_method", ParamKind.ENUM, "Where the frame limiter waits", dict(enum=FpsLimitMethod)),
        ("vsync", ParamKind.ENUM, "Vulkan present mode", dict(enum=VSync, optional=True)),
        ("gl_vsync", ParamKind.INT, "OpenGL swap interval", dict(range=(-1, None), optional=True)),
        ("picmip", ParamKind.INT, "Mip-map LoD bias", dict(range=(-16, 16), optional=True)),
        ("af", ParamKind.INT, "Anisotropic filtering level", dict(range=(0, 16), optional=True)),
        ("bicubic", ParamKind.BOOL, "Force bicubic filtering", {}),
        ("trilinear", ParamKind.BOOL, "Force trilinear filtering", {}),
        ("retro", ParamKind.BOOL, "Disable linear texture filtering", {}),
    ]),
    ("Core Visual", [
        ("legacy_layout", ParamKind.BOOL, "Use the fixed legacy layout", {}),
        ("preset", ParamKind.ENUM, "HUD preset", dict(enum=HudPreset)),
        ("histogram", ParamKind.BOOL, "Frame time histogram instead of a line graph", {}),
        ("custom_text_center", ParamKind.STR, "Centered custom text", {}),
        ("time", ParamKind.BOOL, "Show system time", {}),
        ("time_format", ParamKind.STR, "strftime format for the time", {}),
        ("version", ParamKind.BOOL, "Show MangoHud version", {}),
    ]),
    ("GPU", [
        ("gpu_stats", ParamKind.BOOL, "GPU load", {}),
        ("gpu_temp", ParamKind.BOOL, "GPU temperature", {}),
        ("gpu_junction_temp", ParamKind.BOOL, "GPU junction temperature", {}),
        ("gpu_core_clock", ParamKind.BOOL, "GPU core clock", {}),
        ("gpu_mem_temp", ParamKind.BOOL, "VRAM temperature (needs vram)", {}),
        ("gpu_mem_clock", ParamKind.BOOL, "VRAM clock (needs vram)", {}),
        ("gpu_power", ParamKind.BOOL, "GPU power draw", {}),
        ("gpu_text", ParamKind.STR, "GPU row label", {}),
        ("gpu_load_change", ParamKind.BOOL, "Color GPU load by value", {}),
        ("gpu_load_value", ParamKind.INT_LIST, "Medium and high GPU load", dict(range=(0, 100), length=2)),
        ("gpu_load_color", ParamKind.COLOR_LIST, "Low, medium and high GPU load colors", dict(length=3)),
    ]),
    ("CPU", [
        ("cpu_stats", ParamKind.BOOL, "CPU load", {}),
        ("cpu_temp", ParamKind.BOOL, "CPU temperature", {}),
        ("cpu_power", ParamKind.BOOL, "CPU power draw", {}),
        ("cpu_text", ParamKind.STR, "CPU row label", {}),
        ("cpu_mhz", ParamKind.BOOL, "CPU clock", {}),
        ("cpu_load_change", ParamKind.BOOL, "Color CPU load by value", {}),
        ("cpu_load_value", ParamKind.INT_LIST, "Medium and high CPU load", dict(range=(0, 100), length=2)),
        ("cpu_load_color", ParamKind.COLOR_LIST, "Low, medium and high CPU load colors", dict(length=3)),
        ("core_load", ParamKind.BOOL, "Per-core load", {}),
        ("core_load_change", ParamKind.BOOL, "Color per-core load by value", {}),
    ]),
    ("IO", [
        ("io_read", ParamKind.BOOL, "Application disk reads", {}),
        ("io_write", ParamKind.BOOL, "Application disk writes", {}),
    ]),
    ("Memory", [
        ("vram", ParamKind.BOOL, "VRAM usage", {}),
        ("ram", ParamKind.BOOL, "RAM usage", {}),
        ("swap", ParamKind.BOOL, "Swap usage", {}),
    ]),
    ("Process Memory", [
        ("procmem", ParamKind.BOOL, "Process resident memory", {}),
        ("procmem_shared", ParamKind.BOOL, "Process shared memory", {}),
        ("procmem_virt", ParamKind.BOOL, "Process virtual memory", {}),
    ]),
    ("Battery", [
        ("battery", ParamKind.BOOL, "Battery charge", {}),
        ("battery_icon", ParamKind.BOOL, "Battery icon", {}),
        ("gamepad_battery", ParamKind.BOOL, "Gamepad battery charge", {}),
        ("gamepad_battery_icon", ParamKind.BOOL, "Gamepad battery icon", {}),
    ]),
    ("FPS", [
        ("fps", ParamKind.BOOL, "Frames per second", {}),
        ("fps_sampling_period", ParamKind.DURATION_MS, "FPS sampling period (ms)", dict(range=(1, None))),
        ("fps_color_change", ParamKind.BOOL, "Color FPS by value", {}),
        ("fps_value", ParamKind.INT_LIST, "Medium and high FPS", dict(range=(0, None), length=2)),
        ("fps_color", ParamKind.COLOR_LIST, "Low, medium and high FPS colors", dict(length=3)),
        ("frametime", ParamKind.BOOL, "Frame time", {}),
        ("frame_timing", ParamKind.BOOL, "Frame time graph", {}),
        ("frame_count", ParamKind.BOOL, "Frame counter", {}),
        ("show_fps_limit", ParamKind.BOOL, "Current FPS limit", {}),
        ("fps_only", ParamKind.BOOL, "Show only the FPS number", {}),
    ]),
    ("Misc", [
        ("throttling_status", ParamKind.BOOL, "GPU throttling status", {}),
        ("engine_version", ParamKind.BOOL, "Graphics API version", {}),
        ("gpu_name", ParamKind.BOOL, "GPU name", {}),
        ("vulkan_driver", ParamKind.BOOL, "Vulkan driver", {}),
        ("wine", ParamKind.BOOL, "Wine/Proton version", {}),
        ("exec_name", ParamKind.BOOL, "Executable name", {}),
        ("arch", ParamKind.BOOL, "Application architecture", {}),
        ("gamemode", ParamKind.BOOL, "GameMode status", {}),
        ("vkbasalt", ParamKind.BOOL, "vkBasalt status", {}),
        ("resolution", ParamKind.BOOL, "Render resolution", {}),
        ("custom_text", ParamKind.STR, "Custom text", {}),
        ("exec", ParamKind.STR, "Shell command whose output is shown", {}),
    ]),
    ("Media", [
        ("media_player", ParamKind.BOOL, "Media player metadata", {}),
        ("media_player_name", ParamKind.STR, "MPRIS player name", {}),
        ("media_player_format", ParamKind.STR, "Metadata format", {}),
    ]),
    ("Font", [
        ("font_size", ParamKind.FLOAT, "Font size", dict(range=(0, None))),
        ("font_scale", ParamKind.FLOAT, "Font scale", dict(range=(0, None))),
        ("font_size_text", ParamKind.FLOAT, "Text font size", dict(range=(0, None))),
        ("font_scale_media_player", ParamKind.FLOAT, "Media player font scale", dict(range=(0, None))),
        ("no_small_font", ParamKind.BOOL, "Use primary font size everywhere", {}),
        ("font_file", ParamKind.PATH, "TTF font file", dict(optional=True)),
        ("font_file_text", ParamKind.PATH, "TTF font file for text", dict(optional=True)),
        ("font_glyph_ranges", ParamKind.STR_LIST, "Extra glyph ranges", {}),
        ("text_outline", ParamKind.BOOL, "Outline text", {}),
        ("text_outline_thickness", ParamKind.FLOAT, "Text outline thickness", dict(range=(0, None))),
    ]),
    ("Appearance", [
        ("position", ParamKind.ENUM, "HUD position", dict(enum=HudPosition)),
        ("round_corners", ParamKind.FLOAT, "Corner radius", dict(range=(0, None))),
        ("hud_no_margin", ParamKind.BOOL, "Remove margins", {}),
        ("hud_compact", ParamKind.BOOL, "Compact HUD", {}),
        ("horizontal", ParamKind.BOOL, "Horizontal HUD", {}),
        ("horizontal_stretch", ParamKind.BOOL, "Stretch background to screen width", {}),
        ("no_display", ParamKind.BOOL, "Start hidden", {}),
        ("offset_x", ParamKind.FLOAT, "Horizontal offset", {}),
        ("offset_y", ParamKind.FLOAT, "Vertical offset", {}),
        ("width", ParamKind.FLOAT, "Width (0 = automatic)", dict(range=(0, None))),
        ("height", ParamKind.FLOAT, "Height", dict(range=(0, None))),
        ("table_columns", ParamKind.INT, "Table columns", dict(range=(1, None))),
        ("cellpadding_y", ParamKind.FLOAT, "Vertical cell padding", {}),
        ("background_alpha", ParamKind.FLOAT, "Background opacity", dict(range=(0, 1))),
        ("alpha", ParamKind.FLOAT, "HUD opacity", dict(range=(0, 1))),
    ]),
    ("FCAT", [
        ("fcat", ParamKind.BOOL, "FCAT overlay", {}),
        ("fcat_overlay_width", ParamKind.INT, "FCAT overlay width", dict(range=(0, None))),
        ("fcat_screen_edge", ParamKind.ENUM, "FCAT overlay screen edge", dict(enum=FcatOverlayEdge)),
    ]),
    ("Colors", [
        ("text_color", ParamKind.COLOR, "Text", {}),
        ("gpu_color", ParamKind.COLOR, "GPU label", {}),
        ("cpu_color", ParamKind.COLOR, "CPU label", {}),
        ("vram_color", ParamKind.COLOR, "VRAM label", {}),
        ("ram_color", ParamKind.COLOR, "RAM label", {}),
        ("engine_color", ParamKind.COLOR, "Engine label", {}),
        ("io_color", ParamKind.COLOR, "IO label", {}),
        ("frametime_color", ParamKind.COLOR, "Frame time graph", {}),
        ("background_color", ParamKind.COLOR, "Background", {}),
        ("media_player_color", ParamKind.COLOR, "Media player text", {}),
        ("wine_color", ParamKind.COLOR, "Wine label", {}),
        ("battery_color", ParamKind.COLOR, "Battery label", {}),
        ("text_outline_color", ParamKind.COLOR, "Text outline", {}),
    ]),
    ("Device", [
        ("pci_dev", ParamKind.STR, "PCI address of the GPU to monitor", {}),
        ("blacklist", ParamKind.STR_LIST, "Programs to never show the HUD for", {}),
        ("control", ParamKind.STR, "Control socket name", {}),
    ]),
    ("OpenGL", [
        ("gl_bind_framebuffer", ParamKind.INT, "Framebuffer to bind before drawing", dict(range=(0, None), optional=True)),
    ]),
    ("Keybinds", [
        ("toggle_hud", ParamKind.KEYBIND, "Toggle HUD", {}),
        ("toggle_hud_position", ParamKind.KEYBIND, "Cycle HUD position", {}),
        ("toggle_fps_limit", ParamKind.KEYBIND, "Cycle FPS limit", {}),
        ("toggle_logging", ParamKind.KEYBIND, "Toggle logging", {}),
        ("reload_cfg", ParamKind.KEYBIND, "Reload config", {}),
        ("upload_log", ParamKind.KEYBIND, "Upload log", {}),
    ]),
    ("Logging", [
        ("autostart_log", ParamKind.BOOL, "Start logging immediately", {}),
        ("log_duration", ParamKind.DURATION_S, "Log duration (s, 0 = until stopped)", dict(range=(0, None))),
        ("log_interval", ParamKind.DURATION_MS, "Log interval (ms)", dict(range=(0, None))),
        ("output_folder", ParamKind.PATH, "Log output folder", dict(optional=True)),
        ("permit_upload", ParamKind.BOOL, "Allow log upload", {}),
        ("benchmark_percentiles", ParamKind.STR, "Benchmark percentiles", {}),
    ]),
]

PARAMS: List[Param] = [
    Param(name=name, section=section, kind=kind, label=label, **options)
    for section, entries in _SECTIONS
    for name, kind, label, options in entries
]

_BY_NAME: Dict[str, Param] = {p.name: p for p in PARAMS}

if [p.name for p in PARAMS] != Config.parameter_names():
    raise RuntimeError("Parameter catalogue is out of sync with Config")


def get_param(name: str) -> Optional[Param]:
    return _BY_NAME.get(name)


def params_by_section() -> Dict[str, List[Param]]:
    """Parameters grouped by section, both in catalogue order."""
    grouped: Dict[str, List[Param]] = {}
    for param in PARAMS:
        grouped.setdefault(param.section, []).append(param)
    return grouped


def _check_range(param: Param, number: float) -> None:
    if param.range is None:
        return
    low, high = param.range
    if low is not None and number < low:
        raise ValueError(f"{param.name}: {number} is below the minimum {low}")
    if high is not None and number > high:
        raise ValueError(f"{param.name}: {number} is above the maximum {high}")


def _split(param: Param, text: str) -> List[str]:
    for sep in param.separators[1:]:
        text = text.replace(sep, param.separators[0])
    items = [item.strip() for item in text.split(param.separators[0])]
    return [item for item in items if item]


def _check_length(param: Param, items: List[Any]) -> None:
    if param.length is not None and len(items) != param.length:
        raise ValueError(f"{param.name}: expected {param.length} values, got {len(items)}")


def _decode_bool(text: str) -> bool:
    lowered = text.lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False
    try:
        return _to_int(text) != 0
    except ValueError:
        raise ValueError(f"Invalid boolean: {text!r}")


def _decode_enum(param: Param, text: str) -> Enum:
    enum_type = param.enum
    for member in enum_type:
        if isinstance(member.value, int):
            try:
                if _to_int(text) == member.value:
                    return member
            except ValueError:
                pass
        elif text.lower() == member.value:
            return member
    name = text.upper().replace("-", "_")
    if name in enum_type.__members__:
        return enum_type[name]
    choices = ", ".join(str(m.value) for m in enum_type)
    raise ValueError(f"{param.name}: {text!r} is not one of {choices}")


def _to_int(text: str) -> int:
    if not _INT_RE.match(text):
        raise ValueError(f"Invalid integer: {text!r}")
    return int(text)


def _decode_int(param: Param, text: str) -> int:
    number = _to_int(text)
    _check_range(param, number)
    return number


def decode_value(param: Param, text: str) -> Any:
    """
    Convert on-disk text to a typed value for the given parameter.

    Raises:
        ValueError: If the text is not a valid value for the parameter
    """
    text = text.strip()
    kind = param.kind

    if text == "" and param.optional:
        return None

    if kind is ParamKind.BOOL:
        return _decode_bool(text)
    if kind is ParamKind.INT:
        return _decode_int(param, text)
    if kind is ParamKind.FLOAT:
        number = float(text)
        if number != number or number in (float("inf"), float("-inf")):
            raise ValueError(f"{param.name}: {text!r} is not a finite number")
        _check_range(param, number)
        return number
    if kind is ParamKind.STR:
        return text
    if kind is ParamKind.PATH:
        return Path(text)
    if kind is ParamKind.COLOR:
        return Color.from_hex(text)
    if kind is ParamKind.COLOR_LIST:
        colors = [Color.from_hex(item) for item in _split(param, text)]
        _check_length(param, colors)
        return colors
    if kind is ParamKind.INT_LIST:
        numbers = [_decode_int(param, item) for item in _split(param, text)]
        if not numbers:
            raise ValueError(f"{param.name}: no values given")
        _check_length(param, numbers)
        return numbers
    if kind is ParamKind.STR_LIST:
        return _split(param, text)
    if kind is ParamKind.ENUM:
        return _decode_enum(param, text)
    if kind is ParamKind.KEYBIND:
        return Keybind.parse(text)
    if kind is ParamKind.DURATION_MS:
        return timedelta(milliseconds=_decode_int(param, text))
    if kind is ParamKind.DURATION_S:
        return timedelta(seconds=_decode_int(param, text))

    raise TypeError(f"Unsupported parameter kind: {kind}")


def _format_float(number: float) -> str:
    text = repr(float(number))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def encode_value(param: Param, value: Any) -> str:
    """Convert a typed value to its on-disk text. None encodes as ''."""
    if value is None:
        return ""

    kind = param.kind
    sep = param.separators[0]

    if kind is ParamKind.BOOL:
        return "1" if value else "0"
    if kind is ParamKind.INT:
        return str(int(value))
    if kind is ParamKind.FLOAT:
        return _format_float(value)
    if kind in (ParamKind.STR, ParamKind.PATH):
        return str(value)
    if kind is ParamKind.COLOR:
        return value.to_hex()
    if kind is ParamKind.COLOR_LIST:
        return sep.join(c.to_hex() for c in value)
    if kind is ParamKind.INT_LIST:
        return sep.join(str(int(n)) for n in value)
    if kind is ParamKind.STR_LIST:
        return sep.join(value)
    if kind is ParamKind.ENUM:
        return str(value.value)
    if kind is ParamKind.KEYBIND:
        return str(value)
    if kind is ParamKind.DURATION_MS:
        return str(value // timedelta(milliseconds=1))
    if kind is ParamKind.DURATION_S:
        return str(value // timedelta(seconds=1))

    raise TypeError(f"Unsupported parameter kind: {kind}")


__all__ = [
    "ParamKind",
    "Param",
    "PARAMS",
    "get_param",
    "params_by_section",
    "decode_value",
    "encode_value",
]
