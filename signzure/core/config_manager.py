"""
Configuration management for signzure.

Handles loading, validation, and access to configuration settings.
"""

import os
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional
from enum import Enum

import yaml
from pydantic import BaseModel, Field, ValidationError, ConfigDict

from signzure.crypto.digest import DigestEngine, get_digest_engine

logger = logging.getLogger(__name__)


class LogLevel(str, Enum):
    """Valid log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""
    TEXT = "text"
    JSON = "json"


class DigestBackend(str, Enum):
    """Digest engine implementations."""
    HASHLIB = "hashlib"
    CRYPTOGRAPHY = "cryptography"


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: LogLevel = LogLevel.WARNING
    format: LogFormat = LogFormat.TEXT
    file: Optional[str] = None
    rotation_size: str = "10MB"
    rotation_count: int = Field(default=5, ge=0)
    module_levels: Optional[Dict[str, str]] = Field(
        default=None,
        description="Per-module log levels, e.g., {'signzure.tokens': 'DEBUG'}"
    )


class DigestConfig(BaseModel):
    """Digest engine selection."""
    backend: DigestBackend = DigestBackend.HASHLIB


class TokenConfig(BaseModel):
    """Token builder defaults."""
    sas_default_ttl_seconds: int = Field(
        default=3600,
        gt=0,
        description="Lifetime used for SAS tokens when no expiry is given"
    )
    cosmos_strict_resource_fields: bool = Field(
        default=False,
        description="Reject empty resource type/link when building Cosmos tokens"
    )


class SignzureConfig(BaseModel):
    """Main signzure configuration schema."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    digest: DigestConfig = Field(default_factory=DigestConfig)

    tokens: TokenConfig = Field(default_factory=TokenConfig)

    model_config = ConfigDict(use_enum_values=True)

    def create_engine(self) -> DigestEngine:
        """Create the configured digest engine."""
        return get_digest_engine(self.digest.backend)


class ConfigManager:
    """
    Manages signzure configuration loading and validation.

    Configuration precedence (highest to lowest):
    1. CLI arguments
    2. Environment variables (SIGNZURE_*)
    3. Configuration file (YAML/JSON)
    4. Defaults
    """

    def __init__(self):
        self._config: Optional[SignzureConfig] = None
        self._config_file: Optional[Path] = None

    def load(
        self,
        config_file: Optional[str] = None,
        cli_overrides: Optional[Dict[str, Any]] = None
    ) -> SignzureConfig:
        """
        Load and validate configuration from multiple sources.

        Args:
            config_file: Path to configuration file (YAML or JSON)
            cli_overrides: Dictionary of CLI argument overrides

        Returns:
            Validated SignzureConfig instance

        Raises:
            ValidationError: If configuration is invalid
            FileNotFoundError: If specified config file doesn't exist
        """
        config_dict: Dict[str, Any] = {}

        if config_file:
            config_dict = self._load_from_file(config_file)
            self._config_file = Path(config_file)
            logger.debug(f"Loaded configuration from file: {config_file}")

        env_config = self._load_from_env()
        config_dict = self._merge_configs(config_dict, env_config)
        if env_config:
            logger.debug(f"Applied {len(env_config)} environment variable overrides")

        if cli_overrides:
            config_dict = self._merge_configs(config_dict, cli_overrides)
            logger.debug(f"Applied {len(cli_overrides)} CLI argument overrides")

        try:
            self._config = SignzureConfig(**config_dict)
        except ValidationError as e:
            logger.error(f"Configuration validation failed: {e}")
            raise

        logger.debug(f"Active configuration: {json.dumps(self._config.model_dump(mode='json'))}")
        return self._config

    def _load_from_file(self, file_path: str) -> Dict[str, Any]:
        """Load configuration from YAML or JSON file."""
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        with open(path, 'r') as f:
            if path.suffix in ['.yaml', '.yml']:
                return yaml.safe_load(f) or {}
            elif path.suffix == '.json':
                return json.load(f)
            else:
                raise ValueError(f"Unsupported config file format: {path.suffix}")

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config: Dict[str, Any] = {}

        if log_level := os.getenv("SIGNZURE_LOG_LEVEL"):
            config.setdefault("logging", {})["level"] = log_level.upper()
        if log_format := os.getenv("SIGNZURE_LOG_FORMAT"):
            config.setdefault("logging", {})["format"] = log_format.lower()
        if log_file := os.getenv("SIGNZURE_LOG_FILE"):
            config.setdefault("logging", {})["file"] = log_file

        if backend := os.getenv("SIGNZURE_DIGEST_BACKEND"):
            config.setdefault("digest", {})["backend"] = backend.lower()

        if ttl := os.getenv("SIGNZURE_SAS_TTL"):
            config.setdefault("tokens", {})["sas_default_ttl_seconds"] = int(ttl)
        if strict := os.getenv("SIGNZURE_COSMOS_STRICT"):
            config.setdefault("tokens", {})["cosmos_strict_resource_fields"] = (
                strict.lower() in ['true', '1', 'yes']
            )

        return config

    def _merge_configs(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two configuration dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def get_config(self) -> SignzureConfig:
        """
        Get the loaded configuration.

        Raises:
            RuntimeError: If configuration hasn't been loaded
        """
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call load() first.")
        return self._config

    def reload(self) -> SignzureConfig:
        """Reload configuration from the same sources."""
        config_file = str(self._config_file) if self._config_file else None
        return self.load(config_file=config_file)
