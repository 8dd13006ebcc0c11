from .config import get_config_manager, ConfigurationManager, ConfigError, ConfigFileNotFoundError, InvalidYamlError
from .exceptions import (
    MiroExportError,
    ConfigurationError,
    ComponentError,
    RendererError,
    BoardError,
    BoardAuthenticationError,
    BoardLoadTimeoutError,
    StorageError,
    ExportError,
    FrameCountMismatchError,
    OutputTemplateError,
)
from .logger import setup_logging, get_logger

__all__ = [
    # Config
    "get_config_manager",
    "ConfigurationManager",
    "ConfigError",
    "ConfigFileNotFoundError",
    "InvalidYamlError",
    # Logger
    "setup_logging",
    "get_logger",
    # Exceptions
    "MiroExportError",
    "ConfigurationError",
    "ComponentError",
    "RendererError",
    "BoardError",
    "BoardAuthenticationError",
    "BoardLoadTimeoutError",
    "StorageError",
    "ExportError",
    "FrameCountMismatchError",
    "OutputTemplateError",
]
