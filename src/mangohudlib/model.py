"""
Core Config Model Objects

Defines the data structures for one MangoHud configuration:
    - Enumerations for the parameters with a fixed set of values
    - Keybind (a key combination such as Shift_R+F12)
    - Config (root container, one attribute per parameter)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about file syntax (see params/parser/backends)
        - Hold typed values, never raw strings (except Config.extra)
        - Keep MangoHud's defaults as their defaults
"""

import copy
from dataclasses import dataclass, field, fields
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .color import (
    Color,
    WHITE,
    BLACK,
    ALMOST_BLACK,
    DARK_LIME_GREEN,
    BLUE,
    LIGHT_MAGENTA,
    LIGHT_PINK,
    SOFT_RED,
    LIGHT_VIOLET,
    LIME_GREEN,
    LIGHT_RED,
    DARK_RED,
    VIVID_YELLOW,
    GREEN,
)


class FpsLimitMethod(Enum):
    EARLY = "early"
    LATE = "late"


class VSync(Enum):
    ADAPTIVE = 0
    OFF = 1
    MAILBOX = 2
    ON = 3


class HudPreset(Enum):
    DEFAULT = -1
    OFF = 0
    FPS_ONLY = 1
    HORIZONTAL = 2
    EXTENDED = 3
    DETAILED = 4


class HudPosition(Enum):
    TOP_LEFT = "top-left"
    TOP_CENTER = "top-center"
    TOP_RIGHT = "top-right"
    MIDDLE_LEFT = "middle-left"
    MIDDLE_RIGHT = "middle-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"


class FcatOverlayEdge(Enum):
    LEFT = 0
    BOTTOM = 1
    RIGHT = 2
    TOP = 3


@dataclass(frozen=True)
class Keybind:
    """
    A key combination, written ``Mod+Mod+Key`` on disk.

    Key names are X11 keysym names. Left and right modifiers are
    different keys (Shift_L is not Shift_R).

    Examples:
        Keybind.parse("Shift_R+F12") -> Keybind(keys=("Shift_R", "F12"))
    """

    keys: Tuple[str, ...]

    def __post_init__(self):
        if not self.keys:
            raise ValueError("Keybind needs at least one key")
        for key in self.keys:
            if not key or key.strip() != key or "+" in key:
                raise ValueError(f"Invalid key name in keybind: {key!r}")

    @classmethod
    def parse(cls, text: str) -> "Keybind":
        return cls(tuple(part.strip() for part in text.strip().split("+")))

    @property
    def modifiers(self) -> Tuple[str, ...]:
        return self.keys[:-1]

    @property
    def key(self) -> str:
        return self.keys[-1]

    def __str__(self) -> str:
        return "+".join(self.keys)


# Attributes of Config that are bookkeeping, not MangoHud parameters
BOOKKEEPING_FIELDS = ("extra", "key_order")


@dataclass
class Config:
    """
    Root container for one MangoHud configuration.

    Every attribute except ``extra`` and ``key_order`` is a MangoHud
    parameter of the same name. Attribute order is the order parameters
    are written in, grouped by section.

    ``None`` on an optional parameter means "not set": the parameter is
    not written and MangoHud applies its own behaviour.

    Bookkeeping:
        extra:
            Keys MangoHud may understand but this model does not,
            mapped to their raw text value. Kept so a load/save cycle
            does not drop them.

        key_order:
            Parameter keys in the order they were read. With
            ``legacy_layout`` off MangoHud draws entries in file order,
            so writers emit these first.
    """

    # Performance
    fps_limit: List[int] = field(default_factory=lambda: [0])
    fps_limit_method: FpsLimitMethod = FpsLimitMethod.LATE
    vsync: Optional[VSync] = None
    gl_vsync: Optional[int] = None
    picmip: Optional[int] = None  # mip-map LoD bias, -16..16
    af: Optional[int] = None  # anisotropic filtering, 0..16
    bicubic: bool = False
    trilinear: bool = False
    retro: bool = False

    # Core Visual
    legacy_layout: bool = True
    preset: HudPreset = HudPreset.DEFAULT
    histogram: bool = False
    custom_text_center: str = ""
    time: bool = False
    time_format: str = "%T"
    version: bool = False

    # GPU
    gpu_stats: bool = True
    gpu_temp: bool = False
    gpu_junction_temp: bool = False
    gpu_core_clock: bool = False
    gpu_mem_temp: bool = False
    gpu_mem_clock: bool = False
    gpu_power: bool = False
    gpu_text: str = ""
    gpu_load_change: bool = False
    gpu_load_value: List[int] = field(default_factory=lambda: [60, 90])
    gpu_load_color: List[Color] = field(default_factory=lambda: [GREEN, VIVID_YELLOW, DARK_RED])

    # CPU
    cpu_stats: bool = True
    cpu_temp: bool = False
    cpu_power: bool = False
    cpu_text: str = ""
    cpu_mhz: bool = False
    cpu_load_change: bool = False
    cpu_load_value: List[int] = field(default_factory=lambda: [60, 90])
    cpu_load_color: List[Color] = field(default_factory=lambda: [GREEN, VIVID_YELLOW, DARK_RED])
    core_load: bool = False
    core_load_change: bool = False

    # IO
    io_read: bool = False
    io_write: bool = False

    # Memory
    vram: bool = False
    ram: bool = False
    swap: bool = False

    # Process Memory
    procmem: bool = False
    procmem_shared: bool = False
    procmem_virt: bool = False

    # Battery
    battery: bool = False
    battery_icon: bool = False
    gamepad_battery: bool = False
    gamepad_battery_icon: bool = False

    # FPS
    fps: bool = True
    fps_sampling_period: timedelta = timedelta(milliseconds=500)
    fps_color_change: bool = False
    fps_value: List[int] = field(default_factory=lambda: [30, 60])
    fps_color: List[Color] = field(default_factory=lambda: [DARK_RED, VIVID_YELLOW, GREEN])
    frametime: bool = True
    frame_timing: bool = True
    frame_count: bool = False
    show_fps_limit: bool = False
    fps_only: bool = False

    # Misc
    throttling_status: bool = False
    engine_version: bool = False
    gpu_name: bool = False
    vulkan_driver: bool = False
    wine: bool = False
    exec_name: bool = False
    arch: bool = False
    gamemode: bool = False
    vkbasalt: bool = False
    resolution: bool = False
    custom_text: str = ""
    exec: str = ""  # shell command, output shown on the HUD

    # Media
    media_player: bool = False
    media_player_name: str = ""
    media_player_format: str = "{title};{artist};{album}"

    # Font
    font_size: float = 24.0
    font_scale: float = 1.0
    font_size_text: float = 24.0
    font_scale_media_player: float = 0.55
    no_small_font: bool = False
    font_file: Optional[Path] = None
    font_file_text: Optional[Path] = None
    font_glyph_ranges: List[str] = field(default_factory=list)
    text_outline: bool = True
    text_outline_thickness: float = 1.5

    # Appearance
    position: HudPosition = HudPosition.TOP_LEFT
    round_corners: float = 0.0
    hud_no_margin: bool = False
    hud_compact: bool = False
    horizontal: bool = False
    horizontal_stretch: bool = True  # only applies with horizontal
    no_display: bool = False
    offset_x: float = 0.0
    offset_y: float = 0.0
    width: float = 0.0
    height: float = 140.0
    table_columns: int = 3
    cellpadding_y: float = -0.085
    background_alpha: float = 0.5
    alpha: float = 1.0

    # FCAT
    fcat: bool = False
    fcat_overlay_width: int = 24
    fcat_screen_edge: FcatOverlayEdge = FcatOverlayEdge.LEFT

    # Colors
    text_color: Color = WHITE
    gpu_color: Color = DARK_LIME_GREEN
    cpu_color: Color = BLUE
    vram_color: Color = LIGHT_MAGENTA
    ram_color: Color = LIGHT_PINK
    engine_color: Color = SOFT_RED
    io_color: Color = LIGHT_VIOLET
    frametime_color: Color = LIME_GREEN
    background_color: Color = ALMOST_BLACK
    media_player_color: Color = WHITE
    wine_color: Color = SOFT_RED
    battery_color: Color = LIGHT_RED
    text_outline_color: Color = BLACK

    # Device
    pci_dev: str = ""
    blacklist: List[str] = field(default_factory=list)
    control: str = ""  # control socket name

    # OpenGL
    gl_bind_framebuffer: Optional[int] = None

    # Keybinds
    toggle_hud: Keybind = Keybind(("Shift_R", "F12"))
    toggle_hud_position: Keybind = Keybind(("Shift_R", "F11"))
    toggle_fps_limit: Keybind = Keybind(("Shift_L", "F1"))
    toggle_logging: Keybind = Keybind(("Shift_L", "F2"))
    reload_cfg: Keybind = Keybind(("Shift_L", "F4"))
    upload_log: Keybind = Keybind(("Shift_L", "F3"))

    # Logging
    autostart_log: bool = False
    log_duration: timedelta = timedelta(0)
    log_interval: timedelta = timedelta(0)
    output_folder: Optional[Path] = None
    permit_upload: bool = False
    benchmark_percentiles: str = "97+AVG"

    extra: Dict[str, str] = field(default_factory=dict)
    key_order: List[str] = field(default_factory=list)

    @classmethod
    def parameter_names(cls) -> List[str]:
        """All parameter names, in declaration order."""
        return [f.name for f in fields(cls) if f.name not in BOOKKEEPING_FIELDS]

    def has_parameter(self, key: str) -> bool:
        return key in self.parameter_names()

    def get(self, key: str) -> Any:
        """
        Retrieve a parameter value by name.

        Raises:
            KeyError: If key is not a known parameter
        """
        if not self.has_parameter(key):
            raise KeyError(key)
        return getattr(self, key)

    def set(self, key: str, value: Any) -> None:
        """
        Set a parameter value by name. The value must already be typed.

        Raises:
            KeyError: If key is not a known parameter
        """
        if not self.has_parameter(key):
            raise KeyError(key)
        setattr(self, key, value)

    def reset(self, key: str) -> None:
        """Put a parameter back to its default."""
        self.set(key, getattr(Config(), key))

    def changed_keys(self) -> List[str]:
        """Parameters whose value differs from the default."""
        defaults = Config()
        return [name for name in self.parameter_names() if getattr(self, name) != getattr(defaults, name)]

    def copy(self) -> "Config":
        return copy.deepcopy(self)
