"""Word popover lookups: bilingual dictionary entry plus phonetics.

The dictionary lookup is best-effort. A missing key or a rejected request
degrades to echoing the word back, and phonetics failures only drop the
audio URL and transcription.
"""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Protocol
from urllib.parse import quote

import requests

from lexifeed import config_manager as cfg
from lexifeed import logging_manager as log_mgr
from lexifeed.config_manager.constants import (
    DEFAULT_TRANSLATION_TIMEOUT_SECONDS,
    PHONETICS_API_URL,
    YANDEX_DICTIONARY_URL,
)

from .language_detection import language_pair_for

logger = log_mgr.get_logger().getChild("translation.dictionary")

MAX_POPOVER_TRANSLATIONS = 4
_ENGLISH_SPELLING = re.compile(r"^[A-Za-z][A-Za-z\-']*$")


@dataclass(slots=True)
class LookupData:
    """Data rendered in the word popover."""

    word: str
    translation: str
    translations: List[str] = field(default_factory=list)
    audio_url: Optional[str] = None
    transcription: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "word": self.word,
            "translation": self.translation,
            "translations": list(self.translations),
            "audio_url": self.audio_url,
            "transcription": self.transcription,
        }


@dataclass(slots=True)
class DictionaryEntry:
    """Entry persisted into the external user dictionary."""

    word: str
    translation: str
    transcription: Optional[str] = None
    audio_url: Optional[str] = None
    source_lang: str = "en"
    target_lang: str = "ru"


class UserDictionaryStore(Protocol):
    """External store holding the user's saved words."""

    async def list_words(self) -> Iterable[str]: ...

    async def add_entry(self, entry: DictionaryEntry) -> None: ...


class WordLookupService:
    """Fetch dictionary translations and pronunciation data for single words."""

    def __init__(
        self,
        *,
        dictionary_key: Optional[str] = None,
        dictionary_url: str = YANDEX_DICTIONARY_URL,
        phonetics_url: str = PHONETICS_API_URL,
        session: Optional[requests.Session] = None,
        timeout_seconds: float = DEFAULT_TRANSLATION_TIMEOUT_SECONDS,
    ) -> None:
        self._dictionary_key = dictionary_key
        self._dictionary_url = dictionary_url
        self._phonetics_url = phonetics_url.rstrip("/")
        self._session = session or requests.Session()
        self._owns_session = session is None
        self._timeout = timeout_seconds

    @classmethod
    def from_settings(
        cls,
        settings: Optional[cfg.LexifeedSettings] = None,
        *,
        session: Optional[requests.Session] = None,
    ) -> "WordLookupService":
        active = settings or cfg.get_settings()
        return cls(
            dictionary_key=cfg.secret_value(active.yandex_dictionary_key),
            dictionary_url=active.yandex_dictionary_url,
            phonetics_url=active.phonetics_url,
            session=session,
            timeout_seconds=active.translation_timeout_seconds,
        )

    async def lookup(self, word: str) -> LookupData:
        return await asyncio.to_thread(self._lookup_sync, word.strip())

    def _lookup_sync(self, word: str) -> LookupData:
        if not word:
            return LookupData(word=word, translation=word)
        lang = language_pair_for(word)
        if not self._dictionary_key:
            return LookupData(word=word, translation=word)

        definition = self._fetch_definition(word, lang)
        if definition is None:
            return LookupData(word=word, translation=word)

        translations = [
            item["text"]
            for item in definition.get("tr") or []
            if isinstance(item, Mapping) and isinstance(item.get("text"), str) and item["text"]
        ][:MAX_POPOVER_TRANSLATIONS]
        first_translation = translations[0] if translations else word
        transcription = definition.get("ts") if isinstance(definition.get("ts"), str) else None

        english = (word if lang == "en-ru" else first_translation) or word
        audio_url: Optional[str] = None
        if _ENGLISH_SPELLING.match(english):
            audio_url, phonetic_text = self._fetch_phonetics(english)
            transcription = transcription or phonetic_text

        return LookupData(
            word=word,
            translation=first_translation,
            translations=translations,
            audio_url=audio_url,
            transcription=transcription,
        )

    def _fetch_definition(self, word: str, lang: str) -> Optional[Mapping[str, Any]]:
        params = {"key": self._dictionary_key, "lang": lang, "text": word}
        try:
            response = self._session.get(self._dictionary_url, params=params, timeout=self._timeout)
        except requests.RequestException as exc:
            logger.warning("Dictionary lookup failed: %s", exc, extra={"event": "dictionary.failed"})
            return None
        if not response.ok:
            logger.warning(
                "Dictionary lookup rejected",
                extra={"event": "dictionary.rejected", "status": response.status_code},
            )
            return None
        try:
            payload = response.json()
        except ValueError:
            logger.warning("Dictionary returned malformed JSON", extra={"event": "dictionary.malformed"})
            return None
        definitions = payload.get("def") if isinstance(payload, Mapping) else None
        if not isinstance(definitions, list) or not definitions:
            return {}
        first = definitions[0]
        return first if isinstance(first, Mapping) else {}

    def _fetch_phonetics(self, english: str) -> tuple[Optional[str], Optional[str]]:
        url = f"{self._phonetics_url}/{quote(english)}"
        try:
            response = self._session.get(url, timeout=self._timeout)
            if not response.ok:
                return None, None
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.debug("Phonetics lookup failed: %s", exc, extra={"event": "phonetics.failed"})
            return None, None
        if not isinstance(payload, list):
            return None, None

        phonetics = [
            item
            for entry in payload
            if isinstance(entry, Mapping)
            for item in entry.get("phonetics") or []
            if isinstance(item, Mapping)
        ]
        if not phonetics:
            return None, None
        chosen = next((item for item in phonetics if item.get("audio")), phonetics[0])
        audio = chosen.get("audio") or None
        text = chosen.get("text") or None
        return audio, text

    async def save(self, data: LookupData, store: UserDictionaryStore) -> bool:
        """Persist ``data`` into ``store`` unless the word is already saved."""

        existing = {word.lower() for word in await store.list_words()}
        if data.word.lower() in existing:
            return False
        joined = "; ".join(data.translations) if data.translations else data.translation
        entry = DictionaryEntry(
            word=data.word,
            translation=joined,
            transcription=data.transcription,
            audio_url=data.audio_url,
        )
        await store.add_entry(entry)
        logger.info("Saved word to user dictionary", extra={"event": "dictionary.saved"})
        return True

    def close(self) -> None:
        if self._owns_session:
            self._session.close()


__all__ = [
    "DictionaryEntry",
    "LookupData",
    "MAX_POPOVER_TRANSLATIONS",
    "UserDictionaryStore",
    "WordLookupService",
]
