"""Translation gateway with a FIFO cache and a two-tier provider chain.

Lookups go cache → primary provider (Yandex Cloud) → fallback provider
(MyMemory, with identity rotation). Callers only ever see the terminal
:class:`~lexifeed.errors.TranslationUnavailableError`; intermediate
provider failures and quota rotations are logged and absorbed here.

Concurrent misses for the same key are not coalesced: two simultaneous
lookups of an uncached text may both reach the network.
"""

from __future__ import annotations

import asyncio
import time
from typing import Dict, List, Optional

import requests

from lexifeed import config_manager as cfg
from lexifeed import logging_manager as log_mgr
from lexifeed.config_manager.constants import DEFAULT_MAX_VARIANTS, DEFAULT_VARIANT_MIN_CONFIDENCE
from lexifeed.errors import NetworkError, TranslationUnavailableError

from .cache import FifoTranslationCache, make_cache_key
from .providers.base import BaseTranslationProvider
from .providers.mymemory import MyMemoryTranslator
from .providers.yandex_cloud import YandexCloudTranslator

logger = log_mgr.get_logger().getChild("translation.gateway")


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class TranslationGateway:
    """Resolve translations through the cache and the provider chain."""

    def __init__(
        self,
        primary: BaseTranslationProvider,
        fallback: MyMemoryTranslator,
        *,
        cache: Optional[FifoTranslationCache] = None,
        min_variant_confidence: float = DEFAULT_VARIANT_MIN_CONFIDENCE,
    ) -> None:
        self._primary = primary
        self._fallback = fallback
        self._cache = cache or FifoTranslationCache()
        self.min_variant_confidence = min_variant_confidence

    @classmethod
    def from_settings(
        cls,
        settings: Optional[cfg.LexifeedSettings] = None,
        *,
        session: Optional[requests.Session] = None,
    ) -> "TranslationGateway":
        active = settings or cfg.get_settings()
        return cls(
            YandexCloudTranslator.from_settings(active, session=session),
            MyMemoryTranslator.from_settings(active, session=session),
            cache=FifoTranslationCache(active.translation_cache_size),
            min_variant_confidence=active.variant_min_confidence,
        )

    @property
    def cache(self) -> FifoTranslationCache:
        return self._cache

    @property
    def fallback(self) -> MyMemoryTranslator:
        return self._fallback

    async def translate(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
        *,
        timeout: Optional[float] = None,
    ) -> str:
        """Translate ``text``; blank input yields an empty string.

        ``timeout`` bounds the whole lookup including fallback retries; it is
        not applied to the individual provider calls.
        """

        if not text or not text.strip():
            return ""
        if timeout is None:
            return await self._translate(text.strip(), source_lang, target_lang)
        return await asyncio.wait_for(
            self._translate(text.strip(), source_lang, target_lang), timeout
        )

    async def _translate(self, text: str, source_lang: str, target_lang: str) -> str:
        key = make_cache_key(text, source_lang, target_lang)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Translation cache hit", extra={"event": "translation.cache.hit"})
            return cached

        started = time.perf_counter()
        try:
            translated = await asyncio.to_thread(
                self._primary.translate, text, source_lang, target_lang
            )
            provider = self._primary.name
        except NetworkError as primary_error:
            logger.warning(
                "Primary translation failed, falling back to %s: %s",
                self._fallback.name,
                primary_error,
                extra={"event": "translation.primary.failed", "provider": self._primary.name},
            )
            try:
                translated = await asyncio.to_thread(
                    self._fallback.translate, text, source_lang, target_lang
                )
            except NetworkError as fallback_error:
                logger.error(
                    "Both translation providers failed: %s",
                    fallback_error,
                    extra={"event": "translation.unavailable", "provider": self._fallback.name},
                )
                raise TranslationUnavailableError() from fallback_error
            provider = self._fallback.name

        self._cache.set(key, translated)
        logger.info(
            "Translated %d characters",
            len(text),
            extra={
                "event": "translation.completed",
                "provider": provider,
                "duration_ms": _elapsed_ms(started),
            },
        )
        return translated

    async def get_variants(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
        max_variants: int = DEFAULT_MAX_VARIANTS,
    ) -> List[str]:
        """Return up to ``max_variants`` distinct translations of ``text``.

        The first entry is the provider's main translation; further entries
        are alternate matches at or above the confidence threshold. Any
        failure of the variant request degrades to ``[translate(text)]``.
        """

        if not text or not text.strip() or max_variants <= 0:
            return []
        if max_variants == 1:
            return [await self.translate(text, source_lang, target_lang)]

        trimmed = text.strip()
        try:
            response = await asyncio.to_thread(
                self._fallback.lookup_variants, trimmed, source_lang, target_lang
            )
        except NetworkError as exc:
            logger.warning(
                "Failed to get translation variants, using single translation: %s",
                exc,
                extra={"event": "translation.variants.failed", "provider": self._fallback.name},
            )
            return [await self.translate(text, source_lang, target_lang)]

        variants: List[str] = [response.translated_text]
        confident = [
            match for match in response.matches if match.confidence >= self.min_variant_confidence
        ]
        for match in confident[: max_variants - 1]:
            candidate = match.text.strip()
            if candidate and candidate not in variants:
                variants.append(candidate)
        return variants[:max_variants]

    async def translate_en_to_ru(self, text: str) -> str:
        return await self.translate(text, "en", "ru")

    async def translate_ru_to_en(self, text: str) -> str:
        return await self.translate(text, "ru", "en")

    def reset(self) -> None:
        """Clear the cache and rewind the fallback identity cursor."""

        self._cache.clear()
        self._fallback.cursor.reset()
        logger.info("Translation cache cleared", extra={"event": "translation.reset"})

    def cache_stats(self) -> Dict[str, int]:
        stats = self._cache.stats()
        stats["identity_index"] = self._fallback.cursor.index
        stats["identity_count"] = len(self._fallback.cursor)
        return stats

    def close(self) -> None:
        self._primary.close()
        self._fallback.close()


__all__ = ["TranslationGateway"]
