"""High-level configuration management for lexifeed."""
from __future__ import annotations

from .constants import (
    CONF_DIR,
    DEFAULT_CONFIG_PATH,
    DEFAULT_FORMS_INDEX_ASSET,
    DEFAULT_LOCAL_CONFIG_PATH,
    DEFAULT_PREFETCH_BATCH,
    DEFAULT_RESOLVE_LIMIT,
    FORMS_INDEX_CHUNK_SIZE,
    FORMS_INDEX_FILENAME,
    FORMS_INDEX_VERSION,
    SCRIPT_DIR,
)
from .loader import (
    get_settings,
    load_configuration,
    reset_settings,
    resolve_data_dir,
)
from .settings import EnvironmentOverrides, LexifeedSettings, secret_value

__all__ = [
    "CONF_DIR",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_FORMS_INDEX_ASSET",
    "DEFAULT_LOCAL_CONFIG_PATH",
    "DEFAULT_PREFETCH_BATCH",
    "DEFAULT_RESOLVE_LIMIT",
    "EnvironmentOverrides",
    "FORMS_INDEX_CHUNK_SIZE",
    "FORMS_INDEX_FILENAME",
    "FORMS_INDEX_VERSION",
    "LexifeedSettings",
    "SCRIPT_DIR",
    "get_settings",
    "load_configuration",
    "reset_settings",
    "resolve_data_dir",
    "secret_value",
]
