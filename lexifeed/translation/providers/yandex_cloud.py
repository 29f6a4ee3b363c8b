"""Yandex Cloud Translate client used as the primary translation tier."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import requests

from lexifeed.config_manager import LexifeedSettings, secret_value
from lexifeed.config_manager.constants import (
    DEFAULT_TRANSLATION_TIMEOUT_SECONDS,
    YANDEX_TRANSLATE_URL,
)
from lexifeed.errors import NetworkError

from .base import BaseTranslationProvider


@dataclass(slots=True)
class ProviderTranslation:
    """A single translated text as returned by the primary provider."""

    text: str
    detected_language: Optional[str] = None


class YandexCloudTranslator(BaseTranslationProvider):
    """Client for the Yandex Cloud ``translate/v2/translate`` endpoint."""

    name = "yandex_cloud"

    def __init__(
        self,
        *,
        api_key: Optional[str],
        folder_id: Optional[str],
        url: str = YANDEX_TRANSLATE_URL,
        session: Optional[requests.Session] = None,
        timeout_seconds: float = DEFAULT_TRANSLATION_TIMEOUT_SECONDS,
    ) -> None:
        super().__init__(session=session, timeout_seconds=timeout_seconds)
        self._api_key = api_key
        self._folder_id = folder_id
        self._url = url

    @classmethod
    def from_settings(
        cls, settings: LexifeedSettings, *, session: Optional[requests.Session] = None
    ) -> "YandexCloudTranslator":
        return cls(
            api_key=secret_value(settings.yandex_translate_api_key),
            folder_id=(settings.yandex_folder_id or "").strip() or None,
            url=settings.yandex_translate_url,
            session=session,
            timeout_seconds=settings.translation_timeout_seconds,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key and self._folder_id)

    def translate_batch(
        self, texts: Sequence[str], source_lang: str, target_lang: str
    ) -> List[ProviderTranslation]:
        """Translate ``texts`` in one request, preserving input order."""

        if not self.is_configured:
            raise NetworkError(self.name, "API key or folder ID is not configured")

        payload = {
            "folderId": self._folder_id,
            "texts": list(texts),
            "sourceLanguageCode": source_lang,
            "targetLanguageCode": target_lang,
            "format": "PLAIN_TEXT",
        }
        data = self._post(
            self._url,
            json_body=payload,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Api-Key {self._api_key}",
            },
        )
        translations = data.get("translations")
        if not isinstance(translations, list) or not translations:
            raise NetworkError(self.name, "empty translation response")

        results: List[ProviderTranslation] = []
        for item in translations:
            if not isinstance(item, dict) or not isinstance(item.get("text"), str):
                raise NetworkError(self.name, "malformed translation entry")
            detected = item.get("detectedLanguageCode")
            results.append(
                ProviderTranslation(
                    text=item["text"],
                    detected_language=detected if isinstance(detected, str) else None,
                )
            )
        return results

    def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        return self.translate_batch([text], source_lang, target_lang)[0].text


__all__ = ["ProviderTranslation", "YandexCloudTranslator"]
