# superfs/utils/config.py

"""
Configuration management for superfs
"""
import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SUPERFS_CONFIG"


@dataclass
class ReadConfig:
    """Traversal defaults"""
    encoding: str = "utf-8"


@dataclass
class CopyConfig:
    """Copy policy defaults"""
    overwrite: bool = False
    dir_mode: Optional[int] = None   # None: keep source permissions
    file_mode: Optional[int] = None


@dataclass
class WatchConfig:
    """Directory watch configuration"""
    quiet_period: float = 0.5  # seconds
    use_polling: bool = False
    poll_interval: float = 1.0  # seconds
    ignore_patterns: List[str] = field(default_factory=list)


@dataclass
class Config:
    """Main configuration class"""
    read: ReadConfig = field(default_factory=ReadConfig)
    copy: CopyConfig = field(default_factory=CopyConfig)
    watch: WatchConfig = field(default_factory=WatchConfig)

    log_level: str = "INFO"
    log_format: str = "text"  # text, json, or color
    log_file: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary"""
        return asdict(self)

    def save(self, path: Union[str, Path]):
        """Save config to file (YAML or JSON by suffix)"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            if path.suffix.lower() in ['.yaml', '.yml']:
                yaml.safe_dump(self.to_dict(), f, default_flow_style=False)
            else:
                json.dump(self.to_dict(), f, indent=2, default=str)

        logger.info(f"Configuration saved to {path}")

    def update_from_dict(self, data: Dict[str, Any]):
        """
        Update config from dictionary

        Nested sections are merged key by key; unknown keys are logged and
        skipped.
        """
        sections = ('read', 'copy', 'watch')

        for key, value in (data or {}).items():
            if key in sections and isinstance(value, dict):
                section = getattr(self, key)
                for sub_key, sub_value in value.items():
                    if hasattr(section, sub_key):
                        setattr(section, sub_key, sub_value)
                    else:
                        logger.warning(f"Unknown config key: {key}.{sub_key}")
            elif hasattr(self, key) and key not in sections:
                setattr(self, key, value)
            else:
                logger.warning(f"Unknown config key: {key}")


def get_default_config_paths() -> List[Path]:
    """Config file locations searched when no explicit path is given"""
    return [
        Path("superfs.yaml"),
        Path("superfs.json"),
        Path.home() / ".config" / "superfs" / "config.yaml",
    ]


def load_config(path: Union[str, Path, None] = None) -> Config:
    """
    Load configuration from file or create default

    Args:
        path: Explicit config file; falls back to $SUPERFS_CONFIG and then
            the default locations

    Raises:
        FileNotFoundError: If an explicit path does not exist
    """
    if path is None and os.environ.get(CONFIG_ENV_VAR):
        path = os.environ[CONFIG_ENV_VAR]

    if path is not None:
        config_paths = [Path(path)]
        if not config_paths[0].exists():
            raise FileNotFoundError(f"Config file not found: {path}")
    else:
        config_paths = get_default_config_paths()

    for config_path in config_paths:
        if not config_path.exists():
            continue

        logger.info(f"Loading configuration from {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            if config_path.suffix.lower() in ['.yaml', '.yml']:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)

        config = Config()
        config.update_from_dict(data)
        return config

    logger.debug("No configuration file found, using defaults")
    return Config()


# Global config instance
_config_instance = None


def get_config() -> Config:
    """Get global configuration instance"""
    global _config_instance
    if _config_instance is None:
        _config_instance = load_config()
    return _config_instance


def reload_config(path: Union[str, Path, None] = None) -> Config:
    """Reload configuration from file"""
    global _config_instance
    _config_instance = load_config(path)
    return _config_instance


def set_config(config: Optional[Config]):
    """Replace the global configuration instance (None resets it)"""
    global _config_instance
    _config_instance = config
