"""
Configuration management for miro-export.

This module provides a singleton `ConfigurationManager` class to load and access
configuration settings from YAML files. It supports environment-specific
configurations (e.g., development, production) and allows easy access to
nested configuration values.

Key Features:
- Loads settings from YAML files based on the MIRO_EXPORT_ENV environment variable.
- Defaults to 'development' environment if MIRO_EXPORT_ENV is not set.
- Provides `get_config_manager()`, which loads the shared instance on first use.
- Supports dot notation for accessing nested keys (e.g., "components.miro_board.board_load_timeout_ms").
"""
import os
import yaml
from typing import Any, Dict, Optional

from miro_export.core.exceptions import ConfigurationError

# Environment variable selecting which YAML file to load.
ENV_VAR = "MIRO_EXPORT_ENV"

# DEFAULT_ENV: The default environment to use if MIRO_EXPORT_ENV is not set.
DEFAULT_ENV = "development"


class ConfigError(ConfigurationError):
    """Base class for all configuration-loading errors."""
    pass


class ConfigFileNotFoundError(ConfigError):
    """Raised when a specific configuration file (e.g., development.yaml) cannot be found."""
    pass


class InvalidYamlError(ConfigError):
    """Raised when a configuration file contains invalid YAML syntax or is not a dictionary."""
    pass


class ConfigurationManager:
    """
    Manages loading and accessing configuration settings from YAML files.

    This class is implemented as a singleton. The first time an instance is created,
    it loads the configuration. Subsequent instantiations return the existing instance.
    """
    # Directory containing the environment YAML files, shipped inside the package.
    CONFIG_DIR: str = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "config")

    _instance: Optional['ConfigurationManager'] = None
    _config: Dict[str, Any] = {}
    _current_env: str = ""

    def __new__(cls, env: Optional[str] = None) -> 'ConfigurationManager':
        """
        Ensures that only one instance of ConfigurationManager is created.
        Loads configuration (for `env`, if given) upon first instantiation.
        """
        if cls._instance is None:
            instance = super(ConfigurationManager, cls).__new__(cls)
            instance.load_config(env)
            # Only a successfully loaded instance becomes the singleton.
            cls._instance = instance
        return cls._instance

    def load_config(self, env: Optional[str] = None) -> None:
        """
        Loads configuration from a YAML file corresponding to the specified environment.

        The environment is determined in the following order of precedence:
        1. The `env` parameter passed to this method.
        2. The `MIRO_EXPORT_ENV` environment variable.
        3. `DEFAULT_ENV`.

        Args:
            env (Optional[str]): The specific environment name (e.g., "production") to load.

        Raises:
            ConfigFileNotFoundError: If the YAML file for the target environment is not found.
            InvalidYamlError: If the YAML file is malformed or not a dictionary.
        """
        target_env = env or os.getenv(ENV_VAR, DEFAULT_ENV)
        config_file_path = os.path.join(self.CONFIG_DIR, f"{target_env}.yaml")

        try:
            with open(config_file_path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except FileNotFoundError:
            raise ConfigFileNotFoundError(
                f"Configuration file not found for environment '{target_env}' at '{config_file_path}'. "
                f"Ensure '{target_env}.yaml' exists in the '{self.CONFIG_DIR}' directory."
            )
        except yaml.YAMLError as e:
            raise InvalidYamlError(
                f"Error parsing YAML in configuration file '{config_file_path}': {e}"
            )
        if not isinstance(loaded, dict):
            raise InvalidYamlError(
                f"Configuration file '{config_file_path}' does not contain a valid YAML dictionary."
            )
        self._config = loaded
        self._current_env = target_env

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        """
        Retrieves a configuration value for the given key.

        Supports accessing nested values using dot notation (e.g., "logging.level").
        If the key is not found, returns the provided default value.
        """
        value: Any = self._config
        for k_part in key.split("."):
            if not isinstance(value, dict) or k_part not in value:
                return default
            value = value[k_part]
        return value

    @property
    def current_environment(self) -> str:
        """Returns the name of the currently loaded configuration environment."""
        return self._current_env


def get_config_manager(env: Optional[str] = None) -> ConfigurationManager:
    """
    Returns the shared `ConfigurationManager`, loading it on first use.

    `env` takes precedence over `MIRO_EXPORT_ENV`; an already loaded manager is
    switched to it.

    Nothing is read at import time, so an unknown `MIRO_EXPORT_ENV` surfaces as
    a `ConfigError` where the caller can handle it.

    Raises:
        ConfigError: If the configuration for the selected environment cannot be loaded.
    """
    manager = ConfigurationManager(env)
    if env and manager.current_environment != env:
        manager.load_config(env)
    return manager
