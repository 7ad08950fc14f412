"""
Tests for the YAML configuration manager.
"""
import os
import sys

import pytest
import yaml

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from calc_core.config import DEFAULT_CONFIG, ConfigError, ConfigManager, parse_color
from calc_core.utils.paths import GLOBAL_DIR_ENV_VAR, get_global_config_dir


class TestConfigManager:

    @pytest.fixture
    def manager(self, tmp_path):
        return ConfigManager(global_dir=str(tmp_path / "home"))

    def test_creates_default_config(self, manager):
        config = manager.load_global_config()
        assert config == DEFAULT_CONFIG
        assert manager.get_global_config_path().exists()
        with open(manager.get_global_config_path()) as f:
            assert yaml.safe_load(f)["buttons"]["padding"] == 5

    def test_file_values_override_defaults(self, manager):
        path = manager.get_global_config_path()
        path.parent.mkdir(parents=True)
        path.write_text("window:\n  width: 640\nbody:\n  color: '#ff0000'\n")

        config = manager.load_global_config()
        assert config["window"]["width"] == 640
        assert config["window"]["height"] == DEFAULT_CONFIG["window"]["height"]
        assert config["body"]["color"] == "#ff0000"
        assert config["body"]["width"] == 120

    def test_defaults_are_not_mutated(self, manager):
        config = manager.load_global_config()
        config["window"]["width"] = 1
        assert DEFAULT_CONFIG["window"]["width"] == 1024

    def test_broken_global_config_falls_back_to_defaults(self, manager, capsys):
        path = manager.get_global_config_path()
        path.parent.mkdir(parents=True)
        path.write_text("window: [unclosed\n")

        config = manager.load_global_config()
        assert config == DEFAULT_CONFIG
        assert "using defaults" in capsys.readouterr().err

    def test_explicit_config_path(self, manager, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("animation:\n  press_duration: 250\n")
        config = manager.load_config(str(path))
        assert config["animation"]["press_duration"] == 250
        assert config["animation"]["press_scale"] == 0.85
        assert manager.config_path == path

    def test_explicit_config_path_must_exist(self, manager, tmp_path):
        with pytest.raises(ConfigError):
            manager.load_config(str(tmp_path / "missing.yaml"))

    def test_explicit_config_must_be_a_mapping(self, manager, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigError):
            manager.load_config(str(path))

    def test_get_and_set_dot_paths(self, manager):
        manager.load_global_config()
        assert manager.get("camera.fov") == 40
        assert manager.get("camera.missing", "fallback") == "fallback"
        manager.set("controls.click_tolerance", 8)
        manager.set("new.section.value", True)
        assert manager.get("controls.click_tolerance") == 8
        assert manager.get("new.section.value") is True

    def test_update_and_save(self, manager, tmp_path):
        manager.load_global_config()
        manager.update_config({"window": {"title": "Test"}})
        dest = tmp_path / "out" / "saved.yaml"
        manager.save_config(str(dest))
        with open(dest) as f:
            saved = yaml.safe_load(f)
        assert saved["window"]["title"] == "Test"
        assert saved["window"]["width"] == 1024

    def test_copy_default_config(self, manager, tmp_path):
        dest = tmp_path / "defaults.yaml"
        manager.copy_default_config(str(dest))
        with open(dest) as f:
            assert yaml.safe_load(f) == DEFAULT_CONFIG


class TestPaths:

    def test_manager_creates_nested_global_dir(self, tmp_path):
        home = tmp_path / "a" / "b"
        manager = ConfigManager(global_dir=str(home))
        manager.load_global_config()
        assert home.is_dir()
        assert manager.get_global_config_path() == home / "config.yaml"

    def test_env_var_overrides_home(self, monkeypatch, tmp_path):
        monkeypatch.setenv(GLOBAL_DIR_ENV_VAR, str(tmp_path))
        assert get_global_config_dir() == tmp_path

    def test_custom_dir_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv(GLOBAL_DIR_ENV_VAR, str(tmp_path / "env"))
        assert get_global_config_dir(str(tmp_path / "custom")) == tmp_path / "custom"


class TestParseColor:

    @pytest.mark.parametrize("value, expected", [
        ("#222222", (0x22, 0x22, 0x22)),
        ("0x333333", (0x33, 0x33, 0x33)),
        ("FFFFFF", (255, 255, 255)),
        (0x444444, (0x44, 0x44, 0x44)),
        ([1, 2, 300], (1, 2, 255)),
    ])
    def test_valid(self, value, expected):
        assert parse_color(value) == expected

    @pytest.mark.parametrize("value", [
        "#zzzzzz", "", 0x1000000, -1, None, True, [1, 2], ["a", 0, 0], [None, 0, 0],
    ])
    def test_invalid(self, value):
        with pytest.raises(ConfigError):
            parse_color(value)
