"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag
from .errors import ConfigurationError, MissingConfigurationError
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config
from .writer import WriterConfig, get_writer_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "StorageConfig",
    "WriterConfig",
    "configure_logging",
    "env_flag",
    "get_database_config",
    "get_storage_config",
    "get_writer_config",
]
