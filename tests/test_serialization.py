"""
Tests for serialization and deserialization of Config objects.

These tests ensure lossless JSON/YAML round-trip using the explicit
serialization functions in `mangohudlib.serialization`.
"""

import pytest

from mangohudlib.color import Color
from mangohudlib.model import Config, HudPosition, VSync
from mangohudlib.serialization import (
    config_from_dict,
    config_from_json,
    config_from_yaml,
    config_to_dict,
    config_to_json,
    config_to_yaml,
)


def build_sample_config() -> Config:
    config = Config()
    config.legacy_layout = False
    config.fps_limit = [60, 144]
    config.vsync = VSync.MAILBOX
    config.position = HudPosition.BOTTOM_RIGHT
    config.text_color = Color(0x12, 0x34, 0x56)
    config.custom_text = "Benchmark run"
    config.blacklist = ["steam", "lutris"]
    config.extra = {"future_toggle": "1"}
    config.key_order = ["legacy_layout", "fps_limit"]
    return config


def test_json_roundtrip():
    config = build_sample_config()
    restored = config_from_json(config_to_json(config))
    assert restored == config


def test_yaml_roundtrip():
    config = build_sample_config()
    restored = config_from_yaml(config_to_yaml(config))
    assert restored == config


def test_values_use_file_spelling():
    d = config_to_dict(build_sample_config())
    assert d["parameters"]["legacy_layout"] == "0"
    assert d["parameters"]["fps_limit"] == "60,144"
    assert d["parameters"]["text_color"] == "123456"
    assert d["parameters"]["gl_vsync"] is None


def test_changed_only():
    d = config_to_dict(build_sample_config(), changed_only=True)
    assert set(d["parameters"]) == {
        "legacy_layout", "fps_limit", "vsync", "position", "text_color", "custom_text", "blacklist",
    }
    assert config_from_dict(d) == build_sample_config()


def test_hand_written_yaml():
    """Plain YAML scalars are accepted, not just quoted strings."""
    config = config_from_yaml("parameters:\n  gpu_temp: true\n  fps_limit: 60\n  font_size: 18.5\n")
    assert config.gpu_temp is True
    assert config.fps_limit == [60]
    assert config.font_size == 18.5


def test_empty_yaml_is_defaults():
    assert config_from_yaml("") == Config()


def test_unknown_parameter_rejected():
    with pytest.raises(ValueError, match="Unknown parameter"):
        config_from_dict({"parameters": {"bogus": "1"}})


def test_none_only_for_optional():
    with pytest.raises(ValueError):
        config_from_dict({"parameters": {"font_size": None}})
