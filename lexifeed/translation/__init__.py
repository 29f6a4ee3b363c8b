"""Translation gateway, word lookups and language detection."""
from __future__ import annotations

from .cache import FifoTranslationCache, make_cache_key
from .dictionary import DictionaryEntry, LookupData, UserDictionaryStore, WordLookupService
from .gateway import TranslationGateway
from .language_detection import detect_language, has_cyrillic, language_pair_for
from .providers import MyMemoryTranslator, ProviderIdentityCursor, YandexCloudTranslator

__all__ = [
    "DictionaryEntry",
    "FifoTranslationCache",
    "LookupData",
    "MyMemoryTranslator",
    "ProviderIdentityCursor",
    "TranslationGateway",
    "UserDictionaryStore",
    "WordLookupService",
    "YandexCloudTranslator",
    "detect_language",
    "has_cyrillic",
    "language_pair_for",
    "make_cache_key",
]
