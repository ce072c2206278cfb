"""
Built-in HUD presets.

Mirrors the parameter sets MangoHud ships in presets.conf. Each preset
is a plain Config so it can be edited, written, or overlaid onto an
existing config.
"""
from typing import Dict

from mangohudlib.model import Config, HudPreset


_FPS_ONLY = {
    "legacy_layout": False,
    "fps_only": True,
    "cpu_stats": False,
    "gpu_stats": False,
    "fps": True,
    "frametime": False,
    "frame_timing": False,
}

_HORIZONTAL = {
    "legacy_layout": False,
    "horizontal": True,
    "hud_no_margin": True,
    "table_columns": 14,
    "gpu_stats": True,
    "gpu_power": True,
    "cpu_stats": True,
    "cpu_power": True,
    "ram": True,
    "battery": True,
    "fps": True,
    "frametime": False,
    "frame_timing": True,
}

_EXTENDED = {
    "legacy_layout": False,
    "gpu_stats": True,
    "gpu_temp": True,
    "gpu_core_clock": True,
    "gpu_mem_clock": True,
    "gpu_power": True,
    "cpu_stats": True,
    "cpu_temp": True,
    "cpu_power": True,
    "cpu_mhz": True,
    "vram": True,
    "ram": True,
    "battery": True,
    "fps": True,
    "frametime": True,
    "frame_timing": True,
    "engine_version": True,
    "gpu_name": True,
    "wine": True,
    "arch": True,
}

_DETAILED = dict(
    _EXTENDED,
    gpu_junction_temp=True,
    gpu_mem_temp=True,
    core_load=True,
    swap=True,
    procmem=True,
    io_read=True,
    io_write=True,
    throttling_status=True,
    vulkan_driver=True,
    resolution=True,
    show_fps_limit=True,
    frame_count=True,
    gamemode=True,
    vkbasalt=True,
    time=True,
)

_PRESET_VALUES: Dict[HudPreset, Dict[str, object]] = {
    HudPreset.DEFAULT: {},
    HudPreset.OFF: {"no_display": True},
    HudPreset.FPS_ONLY: _FPS_ONLY,
    HudPreset.HORIZONTAL: _HORIZONTAL,
    HudPreset.EXTENDED: _EXTENDED,
    HudPreset.DETAILED: _DETAILED,
}

# Switches that select a whole layout; every preset sets them, on or off
_LAYOUT_SWITCHES = ("no_display", "fps_only")


def build_preset(preset: HudPreset) -> Config:
    """Return a new Config holding the given preset's values."""
    config = Config()
    for key, value in _PRESET_VALUES[preset].items():
        config.set(key, value)
    if preset is not HudPreset.DEFAULT:
        config.preset = preset
    return config


def apply_preset(config: Config, preset: HudPreset) -> Config:
    """
    Overlay a preset onto an existing config, in place.

    Only the keys the preset changes from the defaults are written,
    plus the layout switches, which every preset sets on or off.
    Everything else the user configured is kept. Returns the same
    config for chaining.
    """
    values = build_preset(preset)
    for key in values.changed_keys():
        config.set(key, values.get(key))
    for key in _LAYOUT_SWITCHES:
        config.set(key, values.get(key))
    config.preset = preset
    return config
