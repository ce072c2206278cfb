"""
Tests for the config parser (Raw Input → Config).

Covers both input forms:
    - MangoHud.conf files (one entry per line, '#' comments)
    - MANGOHUD_CONFIG strings (comma separated, '\\,' escapes)
"""

import pytest

from mangohudlib.color import Color
from mangohudlib.model import HudPosition, Config
from mangohudlib.parser import (
    ConfigParseError,
    parse_config_file,
    parse_config_string,
    parse_env_string,
    split_env_entries,
)


SAMPLE = """\
### MangoHud configuration
legacy_layout=false

gpu_stats
gpu_temp
cpu_stats
cpu_temp=1
fps_limit=60,144   # cap for this game
position=top-right
font_size = 20
gpu_load_color=39F900,FDFD09,B22222
toggle_hud=Shift_L+F12
"""


class TestFileForm:

    def test_sample(self):
        config = parse_config_string(SAMPLE)
        assert config.legacy_layout is False
        assert config.gpu_temp is True
        assert config.cpu_temp is True
        assert config.fps_limit == [60, 144]
        assert config.position is HudPosition.TOP_RIGHT
        assert config.font_size == 20.0
        assert str(config.toggle_hud) == "Shift_L+F12"

    def test_empty_input_gives_defaults(self):
        assert parse_config_string("") == Config()
        assert parse_config_string("# only a comment\n\n   \n") == Config()

    def test_bare_key_means_enabled(self):
        assert parse_config_string("vram").vram is True

    def test_inline_comment_is_stripped(self):
        config = parse_config_string("custom_text=Hello # world")
        assert config.custom_text == "Hello"

    def test_value_keeps_later_equals_signs(self):
        config = parse_config_string("exec=echo a=b")
        assert config.exec == "echo a=b"

    def test_last_entry_wins(self):
        config = parse_config_string("fps_limit=30\nfps_limit=90")
        assert config.fps_limit == [90]
        assert config.key_order == ["fps_limit"]

    def test_key_order_is_recorded(self):
        config = parse_config_string(SAMPLE)
        assert config.key_order[:3] == ["legacy_layout", "gpu_stats", "gpu_temp"]

    def test_unknown_keys_are_kept(self):
        config = parse_config_string("future_toggle\nfuture_option=abc")
        assert config.extra == {"future_toggle": "1", "future_option": "abc"}
        assert "future_toggle" not in config.key_order

    def test_missing_key_is_skipped(self):
        with pytest.warns(UserWarning, match="line 2"):
            config = parse_config_string("gpu_temp\n=1\nvram")
        assert config.gpu_temp is True
        assert config.vram is True
        assert config.extra == {}

    def test_missing_key_is_an_error_when_strict(self):
        with pytest.raises(ConfigParseError) as exc:
            parse_config_string("gpu_temp\n=1", strict=True)
        assert exc.value.line == 2


class TestInvalidValues:

    def test_lenient_mode_warns_and_keeps_default(self):
        with pytest.warns(UserWarning, match="font_size"):
            config = parse_config_string("font_size=big\ngpu_temp")
        assert config.font_size == 24.0
        assert config.gpu_temp is True
        assert "font_size" not in config.key_order

    def test_strict_mode_raises(self):
        with pytest.raises(ConfigParseError) as exc:
            parse_config_string("gpu_temp\nposition=middle", strict=True)
        assert exc.value.line == 2
        assert exc.value.key == "position"
        assert "line 2" in str(exc.value)

    def test_out_of_range_color_list(self):
        with pytest.warns(UserWarning):
            config = parse_config_string("fps_color=ff0000")
        assert config.fps_color == Config().fps_color


class TestEnvForm:

    def test_split_plain(self):
        assert split_env_entries("a=1,b,c=2") == ["a=1", "b", "c=2"]

    def test_split_escapes(self):
        assert split_env_entries(r"a=1\,2,b=x\\y") == ["a=1,2", "b=x\\y"]

    def test_split_keeps_other_backslashes(self):
        assert split_env_entries(r"a=\n") == [r"a=\n"]

    def test_parse_env(self):
        config = parse_env_string(r"gpu_temp,fps_limit=60\,120,position=bottom-left,,")
        assert config.gpu_temp is True
        assert config.fps_limit == [60, 120]
        assert config.position is HudPosition.BOTTOM_LEFT

    def test_plus_separated_fps_limit_needs_no_escape(self):
        assert parse_env_string("fps_limit=30+60").fps_limit == [30, 60]

    def test_env_does_not_strip_hash(self):
        config = parse_env_string("text_color=#ff0000")
        assert config.text_color == Color(255, 0, 0)

    def test_env_strict(self):
        with pytest.raises(ConfigParseError):
            parse_env_string("af=99", strict=True)


class TestFile:

    def test_parse_file(self, tmp_path):
        path = tmp_path / "MangoHud.conf"
        path.write_text(SAMPLE, encoding="utf-8")
        config = parse_config_file(path)
        assert config.gpu_temp is True

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_config_file(tmp_path / "missing.conf")
