# calc_core - Utils Module
from .paths import (
    get_global_config_dir,
    get_global_config_path,
    ensure_global_dir_exists,
)

__all__ = [
    'get_global_config_dir',
    'get_global_config_path',
    'ensure_global_dir_exists',
]
