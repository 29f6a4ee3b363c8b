"""HTTP clients for the translation provider tiers."""
from __future__ import annotations

from .base import BaseTranslationProvider
from .mymemory import MyMemoryResponse, MyMemoryTranslator, ProviderIdentityCursor, TranslationMatch
from .yandex_cloud import ProviderTranslation, YandexCloudTranslator

__all__ = [
    "BaseTranslationProvider",
    "MyMemoryResponse",
    "MyMemoryTranslator",
    "ProviderIdentityCursor",
    "ProviderTranslation",
    "TranslationMatch",
    "YandexCloudTranslator",
]
