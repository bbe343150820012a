"""Core module initialization."""

from .config_manager import ConfigManager, SignzureConfig
from .logging_config import configure_logging, get_logger, log_with_context, setup_logging

__all__ = [
    "ConfigManager",
    "SignzureConfig",
    "configure_logging",
    "get_logger",
    "log_with_context",
    "setup_logging",
]
