"""
Path utilities for the user-level configuration directory.
"""
import os
from pathlib import Path
from typing import Optional


# Global configuration directory (user-level)
DEFAULT_GLOBAL_DIR_NAME = ".calc3d"

# Overrides the global directory when set
GLOBAL_DIR_ENV_VAR = "CALC3D_HOME"

CONFIG_FILE_NAME = "config.yaml"


def get_home_dir() -> Path:
    """Get the user's home directory."""
    return Path.home()


def get_global_config_dir(custom_dir: Optional[str] = None) -> Path:
    """
    Get the global configuration directory.

    Args:
        custom_dir: Optional custom directory (for testing)

    Returns:
        Path to global config directory ($CALC3D_HOME or ~/.calc3d)
    """
    if custom_dir:
        return Path(custom_dir)
    env_dir = os.environ.get(GLOBAL_DIR_ENV_VAR)
    if env_dir:
        return Path(env_dir)
    return get_home_dir() / DEFAULT_GLOBAL_DIR_NAME


def get_global_config_path(custom_dir: Optional[str] = None) -> Path:
    """
    Get the path to the global config.yaml file.

    Args:
        custom_dir: Optional custom directory (for testing)

    Returns:
        Path to config.yaml
    """
    return get_global_config_dir(custom_dir) / CONFIG_FILE_NAME


def ensure_global_dir_exists(custom_dir: Optional[str] = None) -> Path:
    """
    Ensure the global config directory exists.

    Args:
        custom_dir: Optional custom directory (for testing)

    Returns:
        Path to the global config directory
    """
    global_dir = get_global_config_dir(custom_dir)
    global_dir.mkdir(parents=True, exist_ok=True)
    return global_dir
