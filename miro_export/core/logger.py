"""
Centralized logging setup for miro-export.

This module provides functions to configure and obtain logger instances
throughout the application. It reads the `logging` section of the
`ConfigurationManager` and supports console and rotating file handlers.

Key Functions:
- `setup_logging()`: Initializes the logging system from configuration.
                     Called once by the command line entry point.
- `get_logger(name)`: Returns a logger instance for the specified module name.

Console output always goes to stderr: stdout carries the exported SVG or JSON.
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional, Dict, Any

from miro_export.core.config import ConfigurationManager, get_config_manager

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_logging_initialized = False


def setup_logging(config: Optional['ConfigurationManager'] = None,
                  level: Optional[str] = None,
                  force: bool = False) -> None:
    """
    Sets up logging using settings from the provided `ConfigurationManager`.

    Configures the root logger with handlers (console, rotating file) and
    formatting as specified in the 'logging' section of the configuration,
    falling back to a stderr handler at INFO when the section is missing.

    Args:
        config (Optional[ConfigurationManager]): Configuration to read. If None,
            the shared manager from `get_config_manager()` is used.
        level (Optional[str]): Overrides the configured level (e.g. "DEBUG").
        force (bool): Reconfigure even if logging was already initialized.
    """
    global _logging_initialized
    if _logging_initialized and not force:
        logging.getLogger(__name__).debug("setup_logging: already initialized.")
        return

    if config is None:
        config = get_config_manager()

    log_settings: Dict[str, Any] = config.get("logging") or {}

    log_level_str = (level or log_settings.get("level", "INFO")).upper()
    log_level = getattr(logging, log_level_str, logging.INFO)
    log_format = log_settings.get("format", DEFAULT_FORMAT)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(log_level)
    formatter = logging.Formatter(log_format)

    handler_settings = log_settings.get("handlers", {})
    console_settings = handler_settings.get("console", {"enabled": True})
    if console_settings.get("enabled", True):
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    file_settings = handler_settings.get("file", {})
    if file_settings.get("enabled", False):
        log_file_path = os.path.abspath(file_settings.get("path", "logs/miro_export.log"))
        max_bytes = int(file_settings.get("max_bytes", 10 * 1024 * 1024))
        backup_count = int(file_settings.get("backup_count", 5))
        try:
            os.makedirs(os.path.dirname(log_file_path), exist_ok=True)
            file_handler = RotatingFileHandler(
                filename=log_file_path,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            logging.error(f"Logging setup: failed to configure file logging at '{log_file_path}': {e}. File logging disabled.")

    _logging_initialized = True
    logging.getLogger(__name__).debug(f"Logging initialized. Level: {log_level_str}.")


def get_logger(name: str) -> logging.Logger:
    """
    Retrieves a logger instance with the specified name.

    Args:
        name (str): The name for the logger, typically `__name__` of the calling module.

    Returns:
        logging.Logger: An instance of `logging.Logger`.
    """
    return logging.getLogger(name)
