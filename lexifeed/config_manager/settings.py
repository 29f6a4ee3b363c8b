"""Pydantic models and helper utilities for configuration values."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    ValidationError,
    field_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from lexifeed import logging_manager

from .constants import (
    DEFAULT_API_HOST,
    DEFAULT_API_PORT,
    DEFAULT_DATA_RELATIVE,
    DEFAULT_FORMS_INDEX_ASSET,
    DEFAULT_MAX_VARIANTS,
    DEFAULT_PREFETCH_BATCH,
    DEFAULT_RESOLVE_LIMIT,
    DEFAULT_TRANSLATION_CACHE_SIZE,
    DEFAULT_TRANSLATION_TIMEOUT_SECONDS,
    DEFAULT_VARIANT_MIN_CONFIDENCE,
    FORMS_INDEX_CHUNK_SIZE,
    FORMS_INDEX_VERSION,
    MYMEMORY_API_URL,
    PHONETICS_API_URL,
    YANDEX_DICTIONARY_URL,
    YANDEX_TRANSLATE_URL,
)

logger = logging_manager.get_logger().getChild("config")


class LexifeedSettings(BaseModel):
    """Typed representation of the application configuration."""

    model_config = ConfigDict(extra="allow")

    data_dir: str = str(DEFAULT_DATA_RELATIVE)
    forms_index_asset: str = str(DEFAULT_FORMS_INDEX_ASSET)
    forms_index_version: int = FORMS_INDEX_VERSION
    forms_index_chunk_size: int = FORMS_INDEX_CHUNK_SIZE
    resolve_limit: int = DEFAULT_RESOLVE_LIMIT

    yandex_translate_url: str = YANDEX_TRANSLATE_URL
    yandex_translate_api_key: Optional[SecretStr] = None
    yandex_folder_id: Optional[str] = None
    mymemory_url: str = MYMEMORY_API_URL
    mymemory_contact_identities: List[str] = Field(default_factory=list)
    translation_cache_size: int = DEFAULT_TRANSLATION_CACHE_SIZE
    translation_timeout_seconds: float = DEFAULT_TRANSLATION_TIMEOUT_SECONDS
    variant_min_confidence: float = DEFAULT_VARIANT_MIN_CONFIDENCE
    max_variants: int = DEFAULT_MAX_VARIANTS

    yandex_dictionary_url: str = YANDEX_DICTIONARY_URL
    yandex_dictionary_key: Optional[SecretStr] = None
    phonetics_url: str = PHONETICS_API_URL

    prefetch_batch_size: int = DEFAULT_PREFETCH_BATCH
    api_host: str = DEFAULT_API_HOST
    api_port: int = DEFAULT_API_PORT
    debug: bool = False

    @field_validator(
        "forms_index_version",
        "forms_index_chunk_size",
        "resolve_limit",
        "translation_cache_size",
        "max_variants",
        "prefetch_batch_size",
        "api_port",
    )
    @classmethod
    def _require_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be greater than zero")
        return value

    @field_validator("translation_timeout_seconds")
    @classmethod
    def _require_positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be greater than zero")
        return value


def _split_identities(value: Any) -> Any:
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return value


class EnvironmentOverrides(BaseSettings):
    """Configuration overrides sourced from environment variables."""

    model_config = SettingsConfigDict(env_prefix="", env_nested_delimiter="__", extra="ignore")

    data_dir: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("LEXIFEED_DATA_DIR")
    )
    forms_index_asset: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("LEXIFEED_FORMS_INDEX_ASSET")
    )
    forms_index_version: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("LEXIFEED_FORMS_INDEX_VERSION")
    )
    yandex_translate_api_key: Optional[SecretStr] = Field(
        default=None,
        validation_alias=AliasChoices(
            "YANDEX_TRANSLATE_API_KEY", "LEXIFEED_YANDEX_TRANSLATE_API_KEY"
        ),
    )
    yandex_folder_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("YANDEX_FOLDER_ID", "LEXIFEED_YANDEX_FOLDER_ID"),
    )
    mymemory_contact_identities: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "MYMEMORY_CONTACT_EMAILS", "LEXIFEED_MYMEMORY_CONTACT_EMAILS"
        ),
    )
    translation_cache_size: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("LEXIFEED_TRANSLATION_CACHE_SIZE")
    )
    translation_timeout_seconds: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("LEXIFEED_TRANSLATION_TIMEOUT")
    )
    yandex_dictionary_key: Optional[SecretStr] = Field(
        default=None,
        validation_alias=AliasChoices("YANDEX_DICT_KEY", "LEXIFEED_YANDEX_DICT_KEY"),
    )
    api_host: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("LEXIFEED_API_HOST")
    )
    api_port: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("LEXIFEED_API_PORT")
    )
    debug: Optional[bool] = Field(
        default=None, validation_alias=AliasChoices("LEXIFEED_DEBUG")
    )


def load_environment_overrides() -> Dict[str, Any]:
    """Return configuration overrides sourced from environment variables."""

    try:
        overrides = EnvironmentOverrides()
    except ValidationError as exc:
        logger.warning(
            "Invalid environment configuration detected; using defaults.",
            extra={"event": "config.env.validation_error", "error": str(exc)},
        )
        return {}
    payload = overrides.model_dump(exclude_none=True)
    if "mymemory_contact_identities" in payload:
        payload["mymemory_contact_identities"] = _split_identities(
            payload["mymemory_contact_identities"]
        )
    return payload


def apply_settings_updates(
    settings: LexifeedSettings, updates: Dict[str, Any]
) -> LexifeedSettings:
    """Return ``settings`` merged with ``updates``, re-validating the result.

    Update keys that fail validation are dropped with a warning and the
    value from ``settings`` is kept; the remaining updates still apply.
    """

    if not updates:
        return settings
    base = settings.model_dump()
    try:
        return LexifeedSettings.model_validate({**base, **updates})
    except ValidationError as exc:
        rejected = {str(error["loc"][0]) for error in exc.errors() if error.get("loc")}
        logger.warning(
            "Ignoring invalid configuration overrides: %s",
            ", ".join(sorted(rejected)),
            extra={"event": "config.override.rejected", "error": str(exc)},
        )
        accepted = {key: value for key, value in updates.items() if key not in rejected}
    return LexifeedSettings.model_validate({**base, **accepted})


def secret_value(secret: Optional[SecretStr]) -> Optional[str]:
    """Unwrap ``secret`` into a stripped string, or ``None`` when blank."""

    if secret is None:
        return None
    value = secret.get_secret_value().strip()
    return value or None


__all__ = [
    "EnvironmentOverrides",
    "LexifeedSettings",
    "apply_settings_updates",
    "load_environment_overrides",
    "secret_value",
]
