"""
Configuration Manager for loading and saving the calculator's YAML config.
"""
import copy
import sys
import yaml
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .utils.paths import (
    ensure_global_dir_exists,
    get_global_config_dir,
    get_global_config_path,
)


# Default configuration. Lengths are scene units, times are milliseconds.
DEFAULT_CONFIG = {
    "window": {
        "title": "3D Calculator",
        "width": 1024,
        "height": 768,
        "fps": 60,
        "background": "#ffffff",
    },
    "camera": {
        "fov": 40,
        "near": 1,
        "far": 5000,
        "position": [0, 150, 400],
        "target": [0, 0, 0],
    },
    "controls": {
        "rotate_speed": 1.0,
        "zoom_speed": 1.0,
        "min_distance": 50,
        "max_distance": 2000,
        "click_tolerance": 4,
    },
    "lights": {
        "ambient": 0.5,
        "directional": 1.0,
        "direction": [0, 20, 10],
    },
    "body": {
        "width": 120,
        "height": 160,
        "depth": 10,
        "color": "#222222",
    },
    "screen": {
        "width_ratio": 0.8,
        "height": 20,
        "margin": 10,
        "color": "#444444",
        "text_color": "#ffffff",
        "canvas": [300, 80],
        "font_size": 40,
    },
    "buttons": {
        "width": 18,
        "height": 18,
        "depth": 2,
        "padding": 5,
        "z": 6,
        "color": "#333333",
        "face_color": "#000000",
        "text_color": "#ffffff",
        "canvas": [70, 70],
        "font_size": 20,
        "layout": [
            ["7", "8", "9", "+"],
            ["4", "5", "6", "-"],
            ["1", "2", "3", "*"],
            ["0", "DEL", "=", "/"],
        ],
    },
    "font": {
        "name": "arial",
    },
    "animation": {
        "press_duration": 100,
        "press_scale": 0.85,
        "press_depth": 1,
    },
    "console": {
        "mode": "rich",
    },
}


class ConfigError(Exception):
    """Raised when an explicitly requested config cannot be used."""


def parse_color(value: Any) -> Tuple[int, int, int]:
    """
    Convert a config color to an RGB tuple.

    Accepts "#rrggbb", "0xrrggbb", a plain integer, or a 3-item sequence.
    """
    if isinstance(value, (list, tuple)) and len(value) == 3:
        try:
            return tuple(max(0, min(255, int(c))) for c in value)
        except (TypeError, ValueError):
            raise ConfigError(f"Invalid color: {value!r}")
    if isinstance(value, int) and not isinstance(value, bool):
        number = value
    elif isinstance(value, str):
        text = value.strip().lower()
        if text.startswith("#"):
            text = text[1:]
        elif text.startswith("0x"):
            text = text[2:]
        try:
            number = int(text, 16)
        except ValueError:
            raise ConfigError(f"Invalid color: {value!r}")
    else:
        raise ConfigError(f"Invalid color: {value!r}")
    if not 0 <= number <= 0xFFFFFF:
        raise ConfigError(f"Color out of range: {value!r}")
    return ((number >> 16) & 0xFF, (number >> 8) & 0xFF, number & 0xFF)


class ConfigManager:
    """
    Manages the global configuration file.
    File values take priority; defaults fill in any missing keys.
    """

    def __init__(self, global_dir: Optional[str] = None):
        """
        Initialize the ConfigManager.

        Args:
            global_dir: Optional custom global directory (for testing)
        """
        self.global_dir = Path(global_dir) if global_dir else get_global_config_dir()
        self._config: Dict[str, Any] = {}
        self._config_path: Optional[Path] = None

    @property
    def config_path(self) -> Optional[Path]:
        return self._config_path

    def _ensure_global_dir(self):
        """Ensure the global config directory exists."""
        ensure_global_dir_exists(str(self.global_dir))

    def get_global_config_path(self) -> Path:
        """Get the path to the global config file."""
        return get_global_config_path(str(self.global_dir))

    def load_global_config(self) -> Dict[str, Any]:
        """
        Load the global configuration.
        Creates default config if it doesn't exist.

        Returns:
            Configuration dictionary
        """
        self._ensure_global_dir()
        config_path = self.get_global_config_path()

        if config_path.exists():
            try:
                with open(config_path, 'r') as f:
                    file_config = yaml.safe_load(f) or {}
                if not isinstance(file_config, dict):
                    raise yaml.YAMLError("top level must be a mapping")
                self._config = self._merge_with_defaults(file_config)
            except (yaml.YAMLError, IOError) as e:
                print(f"[ConfigManager] Error loading config: {e}, using defaults", file=sys.stderr)
                self._config = copy.deepcopy(DEFAULT_CONFIG)
        else:
            print(f"[ConfigManager] No config file found, creating default at: {config_path}", file=sys.stderr)
            self._config = copy.deepcopy(DEFAULT_CONFIG)
            self.save_global_config()

        self._config_path = config_path
        return self._config

    def _merge_with_defaults(self, file_config: Dict) -> Dict:
        """
        Merge file config with defaults. File content takes PRIORITY.

        Args:
            file_config: Configuration loaded from file

        Returns:
            Merged configuration dictionary
        """
        merged = copy.deepcopy(DEFAULT_CONFIG)
        self._deep_merge_priority(merged, file_config)
        return merged

    def _deep_merge_priority(self, base: Dict, override: Dict):
        """
        Deep merge override into base. Override values take priority.

        Args:
            base: Base dictionary (modified in place)
            override: Override dictionary (values take priority)
        """
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge_priority(base[key], value)
            else:
                base[key] = value

    def save_global_config(self):
        """Save the current configuration to the global config file."""
        self._ensure_global_dir()
        with open(self.get_global_config_path(), 'w') as f:
            yaml.dump(self._config, f, default_flow_style=False, allow_unicode=True)

    def load_config(self, config_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Load configuration from a specific path or the global config.

        Args:
            config_path: Optional path to config file

        Returns:
            Configuration dictionary

        Raises:
            ConfigError: If config_path is given but missing or unreadable
        """
        if not config_path:
            return self.load_global_config()

        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        try:
            with open(path, 'r') as f:
                file_config = yaml.safe_load(f) or {}
        except (yaml.YAMLError, IOError) as e:
            raise ConfigError(f"Could not read config {path}: {e}")
        if not isinstance(file_config, dict):
            raise ConfigError(f"Config {path} must contain a mapping at the top level")

        self._config = self._merge_with_defaults(file_config)
        self._config_path = path
        return self._config

    def update_config(self, updates: Dict[str, Any]):
        """
        Update the configuration with new values.

        Args:
            updates: Dictionary of updates to apply
        """
        self._deep_merge_priority(self._config, updates)

    def save_config(self, config_path: Optional[str] = None):
        """
        Save configuration to a specific path or the loaded path.

        Args:
            config_path: Optional path to save to
        """
        path = Path(config_path) if config_path else self._config_path
        if not path:
            path = self.get_global_config_path()

        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            yaml.dump(self._config, f, default_flow_style=False, allow_unicode=True)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Dot-separated key path (e.g., "buttons.padding")
            default: Default value if key not found

        Returns:
            Configuration value
        """
        if not self._config:
            self.load_global_config()

        value = self._config
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set(self, key: str, value: Any):
        """
        Set a configuration value.

        Args:
            key: Dot-separated key path
            value: Value to set
        """
        if not self._config:
            self.load_global_config()

        keys = key.split(".")
        config = self._config
        for k in keys[:-1]:
            if k not in config or not isinstance(config[k], dict):
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value

    def copy_default_config(self, dest_path: str):
        """
        Copy the default configuration to a destination.

        Args:
            dest_path: Destination path
        """
        dest = Path(dest_path)
        dest.parent.mkdir(parents=True, exist_ok=True)
        with open(dest, 'w') as f:
            yaml.dump(DEFAULT_CONFIG, f, default_flow_style=False, allow_unicode=True)
