"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .logging import configure_logging
from .schema import DEFAULT_PK_FIELD, SchemaConfig, get_schema_config, load_schema_file
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config
from .sync import SyncConfig, get_sync_config

__all__ = [
    "DEFAULT_PK_FIELD",
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "SchemaConfig",
    "StorageConfig",
    "SyncConfig",
    "configure_logging",
    "get_database_config",
    "get_schema_config",
    "get_storage_config",
    "get_sync_config",
    "load_schema_file",
    "optional_env_var",
    "require_env_vars",
]
