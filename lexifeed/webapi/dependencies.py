"""Dependency providers for the FastAPI routers.

Each provider builds its service once per process from the loaded settings.
Tests replace them through ``app.dependency_overrides``.
"""

from __future__ import annotations

from functools import lru_cache

from lexifeed import config_manager as cfg
from lexifeed.translation import TranslationGateway, WordLookupService
from lexifeed.vocabulary import FormIndexStore, VocabularyResolver


@lru_cache
def get_settings() -> cfg.LexifeedSettings:
    return cfg.get_settings()


@lru_cache
def get_form_index_store() -> FormIndexStore:
    return FormIndexStore.from_settings(get_settings())


@lru_cache
def get_vocabulary_resolver() -> VocabularyResolver:
    settings = get_settings()
    return VocabularyResolver(get_form_index_store(), default_limit=settings.resolve_limit)


@lru_cache
def get_translation_gateway() -> TranslationGateway:
    return TranslationGateway.from_settings(get_settings())


@lru_cache
def get_word_lookup_service() -> WordLookupService:
    return WordLookupService.from_settings(get_settings())


def reset_dependencies() -> None:
    """Drop cached services, closing their HTTP sessions."""

    if get_translation_gateway.cache_info().currsize:
        get_translation_gateway().close()
    if get_word_lookup_service.cache_info().currsize:
        get_word_lookup_service().close()
    for provider in (
        get_word_lookup_service,
        get_translation_gateway,
        get_vocabulary_resolver,
        get_form_index_store,
        get_settings,
    ):
        provider.cache_clear()


__all__ = [
    "get_form_index_store",
    "get_settings",
    "get_translation_gateway",
    "get_vocabulary_resolver",
    "get_word_lookup_service",
    "reset_dependencies",
]
