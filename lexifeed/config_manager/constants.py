"""Shared constants for the configuration manager package."""
from __future__ import annotations

from pathlib import Path

MODULE_DIR = Path(__file__).resolve().parent
SCRIPT_DIR = MODULE_DIR.parent.parent.resolve()
CONF_DIR = SCRIPT_DIR / "conf"
ASSETS_DIR = SCRIPT_DIR / "assets"
DEFAULT_CONFIG_PATH = CONF_DIR / "config.json"
DEFAULT_LOCAL_CONFIG_PATH = CONF_DIR / "config.local.json"

DEFAULT_DATA_RELATIVE = Path("data")
FORMS_INDEX_FILENAME = "forms_index.db"
DEFAULT_FORMS_INDEX_ASSET = ASSETS_DIR / FORMS_INDEX_FILENAME
# Increment when the bundled forms_index.db changes.
FORMS_INDEX_VERSION = 2
FORMS_INDEX_CHUNK_SIZE = 300
DEFAULT_RESOLVE_LIMIT = 10000

YANDEX_TRANSLATE_URL = "https://translate.api.cloud.yandex.net/translate/v2/translate"
MYMEMORY_API_URL = "https://api.mymemory.translated.net/get"
YANDEX_DICTIONARY_URL = "https://dictionary.yandex.net/api/v1/dicservice.json/lookup"
PHONETICS_API_URL = "https://api.dictionaryapi.dev/api/v2/entries/en"

DEFAULT_TRANSLATION_CACHE_SIZE = 2000
DEFAULT_TRANSLATION_TIMEOUT_SECONDS = 5.0
DEFAULT_VARIANT_MIN_CONFIDENCE = 0.7
DEFAULT_MAX_VARIANTS = 5
DEFAULT_PREFETCH_BATCH = 3
DEFAULT_API_HOST = "0.0.0.0"
DEFAULT_API_PORT = 8000


__all__ = [
    "ASSETS_DIR",
    "CONF_DIR",
    "DEFAULT_API_HOST",
    "DEFAULT_API_PORT",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_DATA_RELATIVE",
    "DEFAULT_FORMS_INDEX_ASSET",
    "DEFAULT_LOCAL_CONFIG_PATH",
    "DEFAULT_MAX_VARIANTS",
    "DEFAULT_PREFETCH_BATCH",
    "DEFAULT_RESOLVE_LIMIT",
    "DEFAULT_TRANSLATION_CACHE_SIZE",
    "DEFAULT_TRANSLATION_TIMEOUT_SECONDS",
    "DEFAULT_VARIANT_MIN_CONFIDENCE",
    "FORMS_INDEX_CHUNK_SIZE",
    "FORMS_INDEX_FILENAME",
    "FORMS_INDEX_VERSION",
    "MODULE_DIR",
    "MYMEMORY_API_URL",
    "PHONETICS_API_URL",
    "SCRIPT_DIR",
    "YANDEX_DICTIONARY_URL",
    "YANDEX_TRANSLATE_URL",
]
