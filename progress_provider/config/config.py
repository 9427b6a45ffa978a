import copy
import os
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

from progress_provider.infrastructure.logging import get_logger
from . import defaults

logger = get_logger(__name__)


class Config:
    """Configuration manager with YAML override support."""

    def __init__(self, config_file: Optional[Path] = None):
        self.settings = self.load_defaults()

        if config_file is None:
            config_file = self._find_config_file()

        if config_file is not None:
            config_file = Path(config_file)
            if config_file.exists():
                try:
                    self._load_yaml_config(config_file)
                    logger.info(f"Loaded configuration from {config_file}")
                except (OSError, yaml.YAMLError) as e:
                    logger.warning(f"Config file loading failed: {e} - using defaults")
            else:
                logger.warning(f"Config file not found: {config_file} - using defaults")
        else:
            logger.debug("No configuration file found - using defaults only")

    def _find_config_file(self) -> Optional[Path]:
        """Find the configuration file in the usual locations."""
        env_path = os.environ.get(defaults.CONFIG_ENV_VAR)
        if env_path:
            return Path(env_path)

        potential_locations = [
            Path.cwd() / defaults.CONFIG_FILE_NAME,
            defaults.USER_CONFIG_FILE,
        ]

        for location in potential_locations:
            if location.exists() and location.is_file():
                return location

        return None

    def load_defaults(self) -> Dict[str, Any]:
        """Load default configuration settings."""
        return {
            'progress': copy.deepcopy(defaults.PROGRESS),
            'logging': copy.deepcopy(defaults.LOGGING),
        }

    def _load_yaml_config(self, config_file: Path):
        """Load and merge configuration from a YAML file."""
        with open(config_file, 'r') as file:
            yaml_config = yaml.safe_load(file)
            if yaml_config:
                if not isinstance(yaml_config, dict):
                    raise yaml.YAMLError(f"Top level of {config_file} must be a mapping")
                self._deep_merge(self.settings, yaml_config)

    def _deep_merge(self, base: dict, override: dict):
        """Deep merge override into base dictionary."""
        for key, value in override.items():
            if isinstance(value, dict) and key in base and isinstance(base[key], dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation."""
        keys = key.split(".")
        value = self.settings

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def update(self, overrides: Dict[str, Any]):
        """Merge a nested dict of overrides into the current settings."""
        self._deep_merge(self.settings, overrides)

    @property
    def progress(self) -> Dict[str, Any]:
        return self.settings['progress']

    @property
    def logging(self) -> Dict[str, Any]:
        return self.settings['logging']


# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Drop the global configuration so the next access reloads it."""
    global _config
    _config = None
