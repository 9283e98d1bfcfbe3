# superfs/utils/__init__.py

"""
superfs utilities
Configuration, logging and path helpers
"""
from .config import Config, load_config, get_config, reload_config, set_config
from .logger import setup_logging, log_exception
from .paths import resolve_path, create_path_array, caller_directory

__all__ = [
    'Config', 'load_config', 'get_config', 'reload_config', 'set_config',
    'setup_logging', 'log_exception',
    'resolve_path', 'create_path_array', 'caller_directory',
]
