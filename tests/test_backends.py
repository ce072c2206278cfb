"""
Tests for the MangoHud.conf and MANGOHUD_CONFIG writers.
"""

import logging

import pytest

from mangohudlib.backends import generate_conf, generate_env, iter_entries, save_conf_file
from mangohudlib.model import Config, HudPosition
from mangohudlib.params import PARAMS
from mangohudlib.parser import parse_config_file, parse_config_string, parse_env_string


def test_defaults_write_nothing():
    assert generate_conf(Config()) == ""
    assert generate_env(Config()) == ""


def test_changed_values_grouped_by_section():
    config = Config()
    config.gpu_temp = True
    config.ram = True
    config.position = HudPosition.TOP_RIGHT

    text = generate_conf(config)

    assert text == (
        "### GPU\n"
        "gpu_temp=1\n"
        "\n"
        "### Memory\n"
        "ram=1\n"
        "\n"
        "### Appearance\n"
        "position=top-right\n"
    )


def test_key_order_comes_first_and_is_always_written():
    config = parse_config_string("fps\ngpu_temp\nlegacy_layout=0")
    lines = generate_conf(config).splitlines()
    # fps is at its default but the user listed it, so it stays
    assert lines[:3] == ["fps=1", "gpu_temp=1", "legacy_layout=0"]


def test_include_defaults_writes_everything():
    text = generate_conf(Config(), include_defaults=True)
    keys = [line.split("=", 1)[0] for line in text.splitlines() if "=" in line]
    expected = [p.name for p in PARAMS if Config().get(p.name) is not None]
    assert keys == expected


def test_unset_optional_never_written():
    config = Config()
    config.key_order = ["vsync"]
    assert "vsync" not in generate_conf(config, include_defaults=True)


def test_extra_keys_last():
    config = parse_config_string("future_toggle\ngpu_temp")
    text = generate_conf(config)
    assert text.endswith("### Other\nfuture_toggle=1\n")


def test_header():
    text = generate_conf(Config(gpu_temp=True), header="line one\nline two")
    assert text.startswith("# line one\n# line two\n\n")


def test_newline_in_value_rejected():
    config = Config(custom_text="a\nb")
    with pytest.raises(ValueError):
        generate_conf(config)


def test_hash_in_value_logs_warning(caplog):
    config = Config(custom_text="#1")
    with caplog.at_level(logging.WARNING, logger="mangohudlib.backends.conf"):
        generate_conf(config)
    assert "custom_text" in caplog.text


def test_conf_reads_back():
    config = Config(gpu_temp=True, fps_limit=[30, 60], font_size=18.0, legacy_layout=False)
    restored = parse_config_string(generate_conf(config))
    for key in ("gpu_temp", "fps_limit", "font_size", "legacy_layout"):
        assert restored.get(key) == config.get(key)


def test_save_conf_file(tmp_path):
    path = tmp_path / "MangoHud.conf"
    save_conf_file(Config(vram=True), path)
    assert parse_config_file(path).vram is True


def test_iter_entries_skips_duplicate_order_keys():
    config = Config(gpu_temp=True, key_order=["gpu_temp", "gpu_temp"])
    assert [e.key for e in iter_entries(config)] == ["gpu_temp"]


class TestEnv:

    def test_bools_are_bare_keys(self):
        config = Config(gpu_temp=True, legacy_layout=False)
        assert generate_env(config) == "legacy_layout=0,gpu_temp"

    def test_commas_escaped(self):
        config = Config(fps_limit=[60, 120])
        assert generate_env(config) == r"fps_limit=60\,120"

    def test_env_reads_back(self):
        config = Config(fps_limit=[60, 120], custom_text=r"a,b\c", gpu_temp=True)
        restored = parse_env_string(generate_env(config))
        assert restored.fps_limit == [60, 120]
        assert restored.custom_text == r"a,b\c"
        assert restored.gpu_temp is True
