"""Core infrastructure: configuration and logging."""

from .config import Config, load_config, get_config_dir, get_data_dir
from .output import setup_loguru, get_log_file_path

__all__ = [
    "Config",
    "load_config",
    "get_config_dir",
    "get_data_dir",
    "setup_loguru",
    "get_log_file_path",
]
