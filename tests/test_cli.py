"""
Tests for the mangoverlay command line.

Every test runs against an empty XDG config home (see conftest).
"""

import json
import shlex

import pytest
import yaml

from mangohudlib.parser import parse_config_file
from mangoverlay.cli import build_parser, main


@pytest.fixture
def conf_path(mangohud_home):
    return mangohud_home / "MangoHud" / "MangoHud.conf"


def run(capsys, *argv):
    code = main(list(argv))
    out, err = capsys.readouterr()
    return code, out, err


class TestPath:

    def test_no_config(self, capsys, conf_path):
        code, out, _ = run(capsys, "path")
        assert code == 0
        assert "missing" in out
        assert f"new files go to {conf_path}" in out

    def test_active_config_marked(self, capsys, conf_path):
        conf_path.parent.mkdir(parents=True)
        conf_path.write_text("gpu_temp\n")
        code, out, _ = run(capsys, "path")
        assert f"* {conf_path} (exists)" in out


class TestEditing:

    def test_set_creates_file(self, capsys, conf_path):
        code, out, _ = run(capsys, "set", "fps_limit=60,144", "gpu_temp")
        assert code == 0
        assert "fps_limit: 0 -> 60,144" in out
        config = parse_config_file(conf_path)
        assert config.fps_limit == [60, 144]
        assert config.gpu_temp is True

    def test_dry_run(self, capsys, conf_path):
        code, out, _ = run(capsys, "set", "ram=1", "--dry-run")
        assert code == 0
        assert "Dry run" in out
        assert not conf_path.exists()

    def test_no_changes(self, capsys, conf_path):
        code, out, _ = run(capsys, "set", "fps=1")
        assert "No changes." in out
        assert not conf_path.exists()

    def test_invalid_value(self, capsys, conf_path):
        code, _, err = run(capsys, "set", "af=40")
        assert code == 1
        assert err.startswith("error: ")

    def test_empty_key_is_rejected(self, capsys, conf_path):
        code, _, err = run(capsys, "set", "=5")
        assert code == 1
        assert "Missing key" in err
        assert not conf_path.exists()

    def test_unset(self, capsys, conf_path):
        run(capsys, "set", "gpu_temp", "ram")
        code, out, _ = run(capsys, "unset", "ram")
        assert code == 0
        config = parse_config_file(conf_path)
        assert config.ram is False
        assert config.gpu_temp is True

    def test_get(self, capsys, conf_path):
        run(capsys, "set", "position=bottom-right")
        code, out, _ = run(capsys, "get", "position", "vsync")
        assert out.splitlines() == ["position=bottom-right", "vsync="]

    def test_explicit_file(self, capsys, tmp_path, mangohud_home):
        target = tmp_path / "other.conf"
        run(capsys, "-f", str(target), "set", "vram")
        assert parse_config_file(target).vram is True

    def test_app_file(self, capsys, mangohud_home):
        run(capsys, "--app", "vkcube", "set", "vram")
        assert (mangohud_home / "MangoHud" / "vkcube.conf").is_file()

    def test_preset(self, capsys, conf_path):
        code, out, _ = run(capsys, "preset", "fps-only")
        assert code == 0
        config = parse_config_file(conf_path)
        assert config.gpu_stats is False
        assert config.fps_only is True
        assert config.extra == {}

    def test_unknown_preset(self, capsys, conf_path):
        code, _, err = run(capsys, "preset", "ultra")
        assert code == 1
        assert "Unknown preset" in err


class TestShow:

    def test_show_conf(self, capsys, conf_path):
        run(capsys, "set", "gpu_temp")
        code, out, _ = run(capsys, "show")
        assert "gpu_temp=1" in out

    def test_show_json(self, capsys, conf_path):
        run(capsys, "set", "gpu_temp")
        code, out, _ = run(capsys, "show", "--format", "json")
        assert json.loads(out)["parameters"] == {"gpu_temp": "1"}

    def test_env(self, capsys, conf_path):
        run(capsys, "set", "gpu_temp", "fps_limit=30,60")
        code, out, _ = run(capsys, "env", "--export")
        assert out.strip() == r"export MANGOHUD_CONFIG='gpu_temp,fps_limit=30\,60'"

    def test_env_export_quotes_apostrophes(self, capsys, conf_path):
        run(capsys, "set", "custom_text=It's")
        code, out, _ = run(capsys, "env", "--export")
        assert shlex.split(out.strip()) == ["export", "MANGOHUD_CONFIG=custom_text=It's"]

    def test_params(self, capsys, mangohud_home):
        code, out, _ = run(capsys, "params", "--section", "FCAT")
        assert out.splitlines()[0] == "[FCAT]"
        assert "fcat_screen_edge" in out
        assert "gpu_temp" not in out

    def test_params_unknown_section(self, capsys, mangohud_home):
        code, _, err = run(capsys, "params", "--section", "Nope")
        assert code == 1


class TestCheck:

    def test_clean(self, capsys, conf_path):
        run(capsys, "set", "gpu_temp")
        code, out, _ = run(capsys, "check")
        assert code == 0
        assert out.strip().endswith("OK")

    def test_errors_fail(self, capsys, conf_path):
        conf_path.parent.mkdir(parents=True)
        conf_path.write_text("fps_value=60,30\n")
        code, out, _ = run(capsys, "check")
        assert code == 1
        assert "[error] fps_value" in out

    def test_strict(self, capsys, conf_path):
        conf_path.parent.mkdir(parents=True)
        conf_path.write_text("font_size=big\n")
        code, _, err = run(capsys, "check", "--strict")
        assert code == 1
        assert "line 1" in err

    def test_env(self, capsys, monkeypatch, mangohud_home):
        monkeypatch.setenv("MANGOHUD_CONFIG", "gpu_mem_clock")
        code, out, _ = run(capsys, "check", "--env")
        assert code == 0
        assert "[warning] gpu_mem_clock" in out


class TestExportImport:

    def test_round_trip(self, capsys, conf_path, tmp_path):
        run(capsys, "set", "gpu_temp", "position=top-center")
        export = tmp_path / "preset.yaml"
        code, _, _ = run(capsys, "export", str(export))
        assert code == 0
        assert yaml.safe_load(export.read_text())["parameters"]["position"] == "top-center"

        run(capsys, "unset", "gpu_temp", "position")
        code, out, _ = run(capsys, "import", str(export))
        assert code == 0
        config = parse_config_file(conf_path)
        assert config.gpu_temp is True

    def test_import_json(self, capsys, conf_path, tmp_path):
        source = tmp_path / "in.json"
        source.write_text(json.dumps({"parameters": {"vram": "1"}}))
        code, _, _ = run(capsys, "import", str(source))
        assert code == 0
        assert parse_config_file(conf_path).vram is True

    def test_import_missing_file(self, capsys, conf_path, tmp_path):
        code, _, err = run(capsys, "import", str(tmp_path / "missing.yaml"))
        assert code == 1


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
