"""
Configuration handling for the time calculator console.
"""
import copy
import os
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError


class Config:
    """Application settings: defaults < YAML file < command-line arguments"""

    DEFAULT_CONFIG = {
        'use_seconds': True,
        'log_level': 'WARNING',
        'prompt': 'timecalc> ',
    }

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize the configuration

        Args:
            config_file: Path to a YAML configuration file (optional)
        """
        # Deep copy so the class defaults are never modified
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)
        self.config_file = config_file

        if config_file and os.path.exists(config_file):
            self.load_from_file(config_file)

    def load_from_file(self, config_file: str) -> None:
        """
        Load settings from a YAML file over the current values

        Args:
            config_file: Path to the configuration file
        """
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                file_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Error loading configuration file: {e}")

        if file_config is None:
            return
        if not isinstance(file_config, dict):
            raise ConfigError(f"Error loading configuration file: expected a mapping in {config_file}")
        if 'use_seconds' in file_config and not isinstance(file_config['use_seconds'], bool):
            raise ConfigError(
                f"Error loading configuration file: 'use_seconds' must be true or false, "
                f"got {file_config['use_seconds']!r}"
            )
        for key, value in file_config.items():
            self.config[key] = value

    def update_from_args(self, args: Dict[str, Any]) -> None:
        """
        Update settings from command-line arguments.
        CLI arguments take precedence over the configuration file; ``None``
        values are ignored.

        Args:
            args: Dictionary of command-line arguments
        """
        for key, value in args.items():
            if value is not None:
                self.config[key] = value

    def save_to_file(self, config_file: Optional[str] = None) -> str:
        """
        Write the current settings to a YAML file

        Args:
            config_file: Destination path, defaults to the file the
                configuration was loaded from

        Returns:
            The path written
        """
        path = config_file or self.config_file
        if not path:
            raise ConfigError("No configuration file to save to")
        try:
            with open(path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(self.config, f, allow_unicode=True, sort_keys=True)
        except OSError as e:
            raise ConfigError(f"Error saving configuration file: {e}")
        self.config_file = path
        return path

    def persist_value(self, key: str, value: Any, config_file: Optional[str] = None) -> str:
        """
        Set one setting and write only that key into the YAML file.
        Other keys already in the file are kept as they are; values that
        came from the command line are not written.

        Args:
            key: Configuration key
            value: New value
            config_file: Destination path, defaults to the file the
                configuration was loaded from

        Returns:
            The path written
        """
        path = config_file or self.config_file
        if not path:
            raise ConfigError("No configuration file to save to")
        self.config[key] = value

        file_config: Dict[str, Any] = {}
        if os.path.exists(path):
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    file_config = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                raise ConfigError(f"Error loading configuration file: {e}")
            if not isinstance(file_config, dict):
                raise ConfigError(f"Error loading configuration file: expected a mapping in {path}")
        file_config[key] = value

        try:
            with open(path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(file_config, f, allow_unicode=True, sort_keys=True)
        except OSError as e:
            raise ConfigError(f"Error saving configuration file: {e}")
        self.config_file = path
        return path

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value

        Args:
            key: Configuration key
            default: Value returned when the key does not exist

        Returns:
            The configuration value
        """
        return self.config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.config[key] = value

    def get_all(self) -> Dict[str, Any]:
        """
        Get the whole configuration

        Returns:
            A copy of the configuration dictionary
        """
        return self.config.copy()
