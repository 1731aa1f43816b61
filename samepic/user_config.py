"""
User configuration management for samepic.

Supports configuration from multiple sources (in order of priority):
1. Command-line arguments (highest priority)
2. Environment variables
3. User config file (~/.samepic/config.json)
4. Default values from config.py (lowest priority)

Configuration file location: ~/.samepic/config.json

Example config.json:
{
    "default_samer": "avghash",
    "default_threshold": 0,
    "rate_count": 100,
    "batch_queue_size": 1,
    "max_image_pixels": 500000000
}
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from .config import (
    BATCH_QUEUE_SIZE,
    DEFAULT_RATE_COUNT,
    DEFAULT_SAMER,
    MAX_IMAGE_PIXELS,
)

logger = logging.getLogger(__name__)


class UserConfig:
    """
    Manages user configuration from file and environment variables.

    The config file is read lazily on first access and cached.
    """

    _instance: Optional['UserConfig'] = None
    _config_data: Optional[dict] = None

    def __new__(cls):
        """Singleton pattern to ensure one config instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def config_dir(self) -> Path:
        """Get the configuration directory path."""
        env_dir = os.getenv('SAMEPIC_CONFIG_DIR')
        if env_dir:
            return Path(env_dir)
        return Path.home() / '.samepic'

    @property
    def config_file_path(self) -> Path:
        """Get the configuration file path."""
        return self.config_dir / 'config.json'

    def _load_config_file(self) -> dict:
        """Load configuration from JSON file."""
        if not self.config_file_path.exists():
            return {}

        try:
            with open(self.config_file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load config file {self.config_file_path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring config file {self.config_file_path}: not a JSON object")
            return {}
        logger.debug(f"Loaded configuration from {self.config_file_path}")
        return data

    def _get_config_data(self) -> dict:
        """Get cached config data (lazy loading)."""
        if self._config_data is None:
            self._config_data = self._load_config_file()
        return self._config_data

    def reload(self):
        """Reload configuration from file."""
        self._config_data = None

    def get(self, key: str, default: Any = None, env_var: Optional[str] = None) -> Any:
        """
        Get a configuration value with priority:
        1. Environment variable (if env_var specified)
        2. Config file
        3. Default value

        Args:
            key: Configuration key
            default: Default value if not found
            env_var: Optional environment variable name to check

        Returns:
            Configuration value
        """
        if env_var:
            env_value = os.getenv(env_var)
            if env_value is not None:
                # Try to parse as JSON for numbers and booleans
                try:
                    return json.loads(env_value)
                except (json.JSONDecodeError, TypeError):
                    return env_value

        config_data = self._get_config_data()
        if key in config_data:
            return config_data[key]

        return default

    @property
    def default_samer(self) -> str:
        """Strategy used when --samer is not given."""
        return str(self.get('default_samer', default=DEFAULT_SAMER, env_var='SAMEPIC_SAMER'))

    @property
    def default_threshold(self) -> float:
        """Match threshold used when --threshold is not given (0 = strategy default)."""
        return float(self.get('default_threshold', default=0.0, env_var='SAMEPIC_THRESHOLD'))

    @property
    def rate_count(self) -> int:
        """Number of trials for the rate command."""
        return int(self.get('rate_count', default=DEFAULT_RATE_COUNT, env_var='SAMEPIC_RATE_COUNT'))

    @property
    def batch_queue_size(self) -> int:
        """Capacity of the batch matching output channel."""
        return int(self.get('batch_queue_size', default=BATCH_QUEUE_SIZE, env_var='SAMEPIC_QUEUE_SIZE'))

    @property
    def max_image_pixels(self) -> int:
        """Maximum image size in pixels (decompression bomb limit)."""
        return int(self.get('max_image_pixels', default=MAX_IMAGE_PIXELS, env_var='SAMEPIC_MAX_PIXELS'))

    def create_example_config(self) -> bool:
        """Create an example configuration file."""
        example_config = {
            "_comment": "samepic user configuration",
            "default_samer": DEFAULT_SAMER,
            "default_threshold": 0,
            "rate_count": DEFAULT_RATE_COUNT,
            "batch_queue_size": BATCH_QUEUE_SIZE,
            "max_image_pixels": MAX_IMAGE_PIXELS,
        }

        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, 'w', encoding='utf-8') as f:
                json.dump(example_config, f, indent=2)
        except OSError as e:
            logger.error(f"Failed to create example config: {e}")
            return False
        logger.info(f"Created example config file at {self.config_file_path}")
        return True


# Global instance
_user_config = UserConfig()


def get_user_config() -> UserConfig:
    """Get the global UserConfig instance."""
    return _user_config


__all__ = ['UserConfig', 'get_user_config']
