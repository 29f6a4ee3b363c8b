import asyncio
import logging
from unittest.mock import Mock

import pytest
import requests

from lexifeed.errors import NetworkError, QuotaExceededError, TranslationUnavailableError
from lexifeed.translation.cache import FifoTranslationCache, make_cache_key
from lexifeed.translation.gateway import TranslationGateway
from lexifeed.translation.providers.mymemory import (
    MyMemoryResponse,
    MyMemoryTranslator,
    ProviderIdentityCursor,
    TranslationMatch,
)
from lexifeed.translation.providers.yandex_cloud import YandexCloudTranslator

pytestmark = pytest.mark.translation


def _primary(result="привет", error=None):
    primary = Mock(spec=YandexCloudTranslator)
    primary.name = "yandex_cloud"
    if error is not None:
        primary.translate.side_effect = error
    else:
        primary.translate.return_value = result
    return primary


def _fallback(result="привет (mm)", error=None, identities=("a@x", "b@x")):
    fallback = Mock(spec=MyMemoryTranslator)
    fallback.name = "mymemory"
    fallback.cursor = ProviderIdentityCursor(identities)
    if error is not None:
        fallback.translate.side_effect = error
    else:
        fallback.translate.return_value = result
    return fallback


class TestTranslate:
    def test_blank_text_returns_empty_without_calls(self):
        primary, fallback = _primary(), _fallback()
        gateway = TranslationGateway(primary, fallback)

        assert asyncio.run(gateway.translate("   ", "en", "ru")) == ""
        assert asyncio.run(gateway.translate("", "en", "ru")) == ""
        primary.translate.assert_not_called()
        fallback.translate.assert_not_called()

    def test_primary_result_is_cached(self):
        primary, fallback = _primary(), _fallback()
        gateway = TranslationGateway(primary, fallback)

        first = asyncio.run(gateway.translate("Hello", "en", "ru"))
        second = asyncio.run(gateway.translate("  hello ", "en", "ru"))

        assert first == second == "привет"
        primary.translate.assert_called_once_with("Hello", "en", "ru")
        assert make_cache_key("hello", "en", "ru") in gateway.cache

    def test_falls_back_when_primary_fails(self, caplog, monkeypatch):
        monkeypatch.setattr(logging.getLogger("lexifeed"), "propagate", True)
        primary = _primary(error=NetworkError("yandex_cloud", "down", status_code=500))
        fallback = _fallback()
        gateway = TranslationGateway(primary, fallback)

        with caplog.at_level(logging.WARNING, logger="lexifeed"):
            assert asyncio.run(gateway.translate("hello", "en", "ru")) == "привет (mm)"
        fallback.translate.assert_called_once_with("hello", "en", "ru")
        assert any(
            getattr(record, "event", None) == "translation.primary.failed"
            for record in caplog.records
        )

    def test_both_failing_raises_unavailable(self):
        primary = _primary(error=NetworkError("yandex_cloud", "down"))
        fallback = _fallback(error=QuotaExceededError("mymemory", "b@x"))
        gateway = TranslationGateway(primary, fallback)

        with pytest.raises(TranslationUnavailableError) as excinfo:
            asyncio.run(gateway.translate("hello", "en", "ru"))
        assert isinstance(excinfo.value.__cause__, QuotaExceededError)
        assert len(gateway.cache) == 0

    def test_directional_helpers(self):
        primary = _primary()
        gateway = TranslationGateway(primary, _fallback())

        asyncio.run(gateway.translate_en_to_ru("cat"))
        asyncio.run(gateway.translate_ru_to_en("кот"))

        assert [call.args for call in primary.translate.call_args_list] == [
            ("cat", "en", "ru"),
            ("кот", "ru", "en"),
        ]

    def test_cache_capacity_is_respected(self):
        primary = _primary()
        primary.translate.side_effect = lambda text, src, dst: text.upper()
        gateway = TranslationGateway(primary, _fallback(), cache=FifoTranslationCache(2))

        for word in ("one", "two", "three"):
            asyncio.run(gateway.translate(word, "en", "ru"))

        assert len(gateway.cache) == 2
        assert make_cache_key("one", "en", "ru") not in gateway.cache

    def test_timeout_bounds_the_whole_lookup(self):
        import time

        primary = _primary()
        primary.translate.side_effect = lambda *_: time.sleep(0.5) or "late"
        gateway = TranslationGateway(primary, _fallback())

        with pytest.raises(asyncio.TimeoutError):
            asyncio.run(gateway.translate("hello", "en", "ru", timeout=0.05))


class TestVariants:
    def _variants_fallback(self, translated, matches):
        fallback = _fallback()
        fallback.lookup_variants.return_value = MyMemoryResponse(
            translated_text=translated,
            confidence=1.0,
            matches=[TranslationMatch(text, confidence) for text, confidence in matches],
        )
        return fallback

    def test_filters_by_confidence_and_deduplicates(self):
        fallback = self._variants_fallback(
            "привет",
            [("привет", 1.0), (" здравствуйте ", 0.9), ("алло", 0.4), ("хай", 0.7)],
        )
        gateway = TranslationGateway(_primary(), fallback)

        variants = asyncio.run(gateway.get_variants("hello", "en", "ru", max_variants=5))

        assert variants == ["привет", "здравствуйте", "хай"]

    def test_never_exceeds_max_variants(self):
        fallback = self._variants_fallback(
            "a", [("b", 0.9), ("c", 0.9), ("d", 0.9), ("e", 0.9)]
        )
        gateway = TranslationGateway(_primary(), fallback)

        assert asyncio.run(gateway.get_variants("x", "en", "ru", max_variants=3)) == ["a", "b"]

    def test_single_variant_uses_translate(self):
        primary, fallback = _primary(), _fallback()
        gateway = TranslationGateway(primary, fallback)

        assert asyncio.run(gateway.get_variants("hello", "en", "ru", max_variants=1)) == ["привет"]
        fallback.lookup_variants.assert_not_called()

    def test_failure_falls_back_to_single_translation(self):
        fallback = _fallback()
        fallback.lookup_variants.side_effect = QuotaExceededError("mymemory", "a@x")
        gateway = TranslationGateway(_primary(), fallback)

        assert asyncio.run(gateway.get_variants("hello", "en", "ru")) == ["привет"]

    @pytest.mark.parametrize("text, max_variants", [("", 5), ("  ", 5), ("hello", 0)])
    def test_trivial_inputs(self, text, max_variants):
        fallback = _fallback()
        gateway = TranslationGateway(_primary(), fallback)
        assert asyncio.run(gateway.get_variants(text, "en", "ru", max_variants)) == []
        fallback.lookup_variants.assert_not_called()


def test_reset_clears_cache_and_rewinds_identities():
    fallback = _fallback()
    fallback.cursor.advance()
    gateway = TranslationGateway(_primary(), fallback)
    asyncio.run(gateway.translate("hello", "en", "ru"))

    stats = gateway.cache_stats()
    assert stats["size"] == 1
    assert stats["identity_index"] == 1
    assert stats["identity_count"] == 2

    gateway.reset()
    assert len(gateway.cache) == 0
    assert fallback.cursor.index == 0


def test_from_settings_builds_configured_chain():
    from lexifeed import config_manager as cfg

    settings = cfg.LexifeedSettings(
        mymemory_contact_identities=["one@x", "two@x"],
        translation_cache_size=10,
        variant_min_confidence=0.8,
    )
    gateway = TranslationGateway.from_settings(settings, session=Mock())

    assert gateway.cache.max_size == 10
    assert gateway.min_variant_confidence == 0.8
    assert gateway.fallback.cursor.identities == ("one@x", "two@x")


def _quota_finished_response():
    response = Mock()
    response.ok = True
    response.status_code = 200
    response.json.return_value = {
        "responseData": {"translatedText": "", "match": 0},
        "quotaFinished": True,
        "responseStatus": 200,
        "matches": [],
    }
    return response


def test_every_exhausted_identity_is_tried_before_giving_up():
    session = Mock(spec=requests.Session)
    session.get.return_value = _quota_finished_response()
    fallback = MyMemoryTranslator(identities=["a@x", "b@x", "c@x"], session=session)
    gateway = TranslationGateway(
        _primary(error=NetworkError("yandex_cloud", "unavailable", status_code=503)),
        fallback,
    )

    with pytest.raises(TranslationUnavailableError) as excinfo:
        asyncio.run(gateway.translate("hello", "en", "ru"))

    identities = [call.kwargs["params"]["de"] for call in session.get.call_args_list]
    assert identities == ["a@x", "b@x", "c@x"]
    assert isinstance(excinfo.value.__cause__, QuotaExceededError)
    assert fallback.cursor.index == 2
    assert gateway.cache.stats()["size"] == 0
