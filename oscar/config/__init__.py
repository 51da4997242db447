"""Simple YAML configuration loader for OSCAR."""

import copy
import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
import logging

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "formatter": {
        "endpoint": "https://api.deepseek.com/v1/chat/completions",
        "model": "deepseek-chat",
        "timeout_seconds": 30.0,
        "temperature": 0.3,
    },
    "storage": {
        "data_directory": "data",
    },
    "logging": {
        "level": "INFO",
        "file_path": "data/logs/oscar.log",
        "console_output": True,
    },
}

API_KEY_ENV_VARS = ("OSCAR_API_KEY", "DEEPSEEK_API_KEY")


class FormatterSettings(BaseModel):
    """Connection options for the remote chat-completion endpoint."""
    endpoint: str = DEFAULT_CONFIG["formatter"]["endpoint"]
    api_key: Optional[str] = None
    model: str = DEFAULT_CONFIG["formatter"]["model"]
    timeout_seconds: float = Field(default=30.0, gt=0)
    temperature: float = Field(default=0.3, ge=0.0, le=2.0)


class OscarConfig:
    """OSCAR configuration loader."""

    def __init__(self, config_path: Optional[str] = None, config: Optional[Dict[str, Any]] = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to YAML config file. If None, the built-in
                        defaults (optionally overridden by ``config``) are used.
            config: In-memory configuration dictionary, used when no path is given
        """
        if config_path is None:
            self.config_file = None
            self.config = copy.deepcopy(DEFAULT_CONFIG)
            if config:
                self._merge(self.config, config)
            logger.info("Using in-memory configuration")
            return

        self.config_file = Path(config_path)

        if not self.config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

        logger.info(f"Loading configuration from: {self.config_file}")
        self.config = self._load_config()

    @classmethod
    def default(cls) -> "OscarConfig":
        """Build a configuration from the built-in defaults."""
        return cls()

    def _load_config(self) -> Dict[str, Any]:
        """Load and parse YAML configuration file."""
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")

        if not loaded:
            raise ValueError("Configuration file is empty")
        if not isinstance(loaded, dict):
            raise ValueError("Configuration file must contain a mapping")

        config = copy.deepcopy(DEFAULT_CONFIG)
        self._merge(config, loaded)

        # Resolve relative paths
        self._resolve_paths(config)

        logger.info("Configuration loaded successfully")
        return config

    @staticmethod
    def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> None:
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                OscarConfig._merge(base[key], value)
            else:
                base[key] = value

    def _resolve_paths(self, config: Dict[str, Any]) -> None:
        """Resolve relative paths in configuration relative to config file location."""
        config_dir = self.config_file.parent

        # Resolve data directory
        if 'storage' in config and 'data_directory' in config['storage']:
            data_dir = config['storage']['data_directory']
            if not os.path.isabs(data_dir):
                config['storage']['data_directory'] = str(config_dir / data_dir)

        # Resolve log file path
        if 'logging' in config and 'file_path' in config['logging']:
            log_path = config['logging']['file_path']
            if not os.path.isabs(log_path):
                config['logging']['file_path'] = str(config_dir / log_path)

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation (e.g., 'formatter.model').

        Args:
            key_path: Dot-separated key path (e.g., 'formatter.endpoint')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self.config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def set(self, key_path: str, value: Any) -> None:
        """Set configuration value using dot notation.

        Args:
            key_path: Dot-separated path to config value (e.g., 'formatter.model')
            value: Value to set
        """
        keys = key_path.split('.')
        config_dict = self.config

        # Navigate to the parent dictionary
        for key in keys[:-1]:
            if key not in config_dict:
                config_dict[key] = {}
            config_dict = config_dict[key]

        # Set the final value
        config_dict[keys[-1]] = value
        logger.debug(f"Configuration key '{key_path}' set to: {value if 'key' not in key_path else '***'}")

    def get_formatter_settings(self) -> FormatterSettings:
        """Get validated remote formatter settings.

        The credential falls back to the OSCAR_API_KEY or DEEPSEEK_API_KEY
        environment variables when the config file does not carry one.

        Raises:
            ValueError: If the formatter section is invalid
        """
        section = dict(self.get('formatter', {}) or {})
        if not section.get('api_key'):
            for env_var in API_KEY_ENV_VARS:
                if os.environ.get(env_var):
                    section['api_key'] = os.environ[env_var]
                    break

        try:
            return FormatterSettings(**section)
        except ValidationError as e:
            raise ValueError(f"Invalid formatter configuration: {e}")

    def get_data_directory(self) -> str:
        """Get data directory path."""
        data_dir = self.get('storage.data_directory', 'data')
        return str(Path(data_dir).absolute())
