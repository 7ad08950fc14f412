"""
Tests for the calc3d command line.
"""
import os
import sys

import pytest
import yaml

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from calc_core import __version__, cli
from calc_core.cli import build_parser, main, resolve_output_mode
from calc_core.console_output import OutputMode
from calc_core.utils.paths import GLOBAL_DIR_ENV_VAR


@pytest.fixture(autouse=True)
def isolated_home(monkeypatch, tmp_path):
    """Keep the global config out of the real home directory."""
    home = tmp_path / "calc3d-home"
    monkeypatch.setenv(GLOBAL_DIR_ENV_VAR, str(home))
    return home


class TestPress:

    @pytest.mark.parametrize("values, expected", [
        (["5+3="], "8"),
        (["5", "+", "3", "="], "8"),
        (["9/0="], "Error"),
        (["12", "DEL", "+"], "1+"),
        (["2+3*4="], "20"),
        (["1/3="], "0.3333333333333333"),
    ])
    def test_prints_final_display(self, capsys, values, expected):
        assert main(["press"] + values) == 0
        assert capsys.readouterr().out.strip() == expected

    def test_ignored_values_go_to_stderr(self, capsys):
        assert main(["press", "5x+y1="]) == 0
        captured = capsys.readouterr()
        assert captured.out.strip() == "6"
        assert "Ignored: x y" in captured.err

    def test_trace_reports_events(self, capsys):
        assert main(["--plain", "press", "--trace", "2*4="]) == 0
        out = capsys.readouterr().out
        assert "[INPUT] 2 (cli)" in out
        assert "[CALC] 2*4 = 8" in out
        assert out.strip().endswith("8")

    def test_uses_explicit_config(self, capsys, tmp_path):
        path = tmp_path / "narrow.yaml"
        path.write_text(yaml.dump({"buttons": {"layout": [["1", "+", "="]]}}))
        assert main(["--config", str(path), "press", "1+1="]) == 0
        assert capsys.readouterr().out.strip() == "2"


class TestConfigCommand:

    def test_missing_config_file(self, capsys, tmp_path):
        assert main(["--config", str(tmp_path / "missing.yaml"), "press", "1"]) == 1
        assert "Config file not found" in capsys.readouterr().err

    def test_bad_layout_is_reported(self, capsys, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump({"buttons": {"layout": [["1", "%"]]}}))
        assert main(["--config", str(path), "press", "1"]) == 1
        assert "Unsupported button value" in capsys.readouterr().err

    def test_bad_color_is_reported(self, capsys, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump({"body": {"color": "#nothex"}}))
        assert main(["--config", str(path), "press", "1"]) == 1
        assert "Invalid color" in capsys.readouterr().err

    def test_unrelated_errors_are_not_swallowed(self, monkeypatch):
        def broken(args, cm, config):
            raise ValueError("bug in a command")

        monkeypatch.setattr(cli, "cmd_press", broken)
        with pytest.raises(ValueError, match="bug in a command"):
            main(["press", "1"])

    def test_path(self, capsys, isolated_home):
        assert main(["config", "path"]) == 0
        assert capsys.readouterr().out.strip() == str(isolated_home / "config.yaml")

    def test_show(self, capsys):
        assert main(["config"]) == 0
        shown = yaml.safe_load(capsys.readouterr().out)
        assert shown["camera"]["fov"] == 40
        assert shown["buttons"]["layout"][3] == ["0", "DEL", "=", "/"]

    def test_init_writes_defaults(self, capsys, tmp_path):
        dest = tmp_path / "written.yaml"
        assert main(["config", "init", "--output", str(dest)]) == 0
        assert dest.exists()
        assert str(dest) in capsys.readouterr().out


class TestParser:

    def test_version(self, capsys):
        with pytest.raises(SystemExit):
            main(["--version"])
        assert __version__ in capsys.readouterr().out

    def test_press_needs_values(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["press"])

    @pytest.mark.parametrize("argv, config, expected", [
        (["--quiet", "press", "1"], {}, OutputMode.QUIET),
        (["--plain", "press", "1"], {}, OutputMode.PLAIN),
        (["press", "1"], {"console": {"mode": "plain"}}, OutputMode.PLAIN),
        (["press", "1"], {"console": {"mode": "fancy"}}, OutputMode.RICH),
        (["press", "1"], {}, OutputMode.RICH),
    ])
    def test_output_mode(self, argv, config, expected):
        args = build_parser().parse_args(argv)
        assert resolve_output_mode(args, config) == expected
