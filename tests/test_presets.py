"""Test the built-in HUD presets."""

import pytest

from mangohudlib.analyzer import analyze_config
from mangohudlib.backends import generate_conf
from mangohudlib.model import Config, HudPreset
from mangohudlib.presets import apply_preset, build_preset


def test_default_preset_is_defaults():
    assert build_preset(HudPreset.DEFAULT) == Config()


def test_off_preset_hides_hud():
    config = build_preset(HudPreset.OFF)
    assert config.no_display is True
    assert config.preset is HudPreset.OFF


def test_fps_only():
    config = build_preset(HudPreset.FPS_ONLY)
    assert config.legacy_layout is False
    assert config.fps is True
    assert not config.gpu_stats and not config.cpu_stats
    assert config.fps_only is True
    assert config.extra == {}


def test_detailed_extends_extended():
    extended = build_preset(HudPreset.EXTENDED)
    detailed = build_preset(HudPreset.DETAILED)
    assert set(extended.changed_keys()) - {"preset"} <= set(detailed.changed_keys())
    assert detailed.core_load and not extended.core_load


def test_horizontal():
    config = build_preset(HudPreset.HORIZONTAL)
    assert config.horizontal is True
    assert config.table_columns == 14


def test_apply_preset_keeps_user_settings():
    config = Config(font_size=18.0, gpu_temp=True)
    apply_preset(config, HudPreset.FPS_ONLY)
    assert config.font_size == 18.0
    assert config.gpu_temp is True
    assert config.gpu_stats is False
    assert config.preset is HudPreset.FPS_ONLY


def test_build_preset_returns_fresh_configs():
    a = build_preset(HudPreset.EXTENDED)
    a.fps_limit.append(30)
    assert build_preset(HudPreset.EXTENDED).fps_limit == [0]


def test_apply_preset_keeps_user_choice_on_default_keys():
    config = Config(fps=False, gpu_temp=True)
    apply_preset(config, HudPreset.EXTENDED)
    assert config.fps is False
    assert config.cpu_temp is True


@pytest.mark.parametrize("first", [HudPreset.FPS_ONLY, HudPreset.OFF])
def test_later_preset_replaces_layout_switches(first):
    config = Config()
    apply_preset(config, first)
    apply_preset(config, HudPreset.EXTENDED)
    assert config.fps_only is False
    assert config.no_display is False
    assert config.preset is HudPreset.EXTENDED
    text = generate_conf(config)
    assert "fps_only" not in text
    assert "no_display" not in text


@pytest.mark.parametrize("preset", list(HudPreset))
def test_presets_analyze_without_warnings(preset):
    report = analyze_config(build_preset(preset))
    assert report.ok
    assert report.warnings == []
