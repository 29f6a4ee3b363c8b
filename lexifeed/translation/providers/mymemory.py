"""MyMemory client used as the fallback translation tier.

MyMemory rate-limits per contact identity (the ``de`` query parameter). The
client carries an ordered pool of identities and rotates forward through it
whenever the service reports the current identity's quota as finished.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Tuple

import requests

from lexifeed import logging_manager as log_mgr
from lexifeed.config_manager import LexifeedSettings
from lexifeed.config_manager.constants import (
    DEFAULT_TRANSLATION_TIMEOUT_SECONDS,
    MYMEMORY_API_URL,
)
from lexifeed.errors import NetworkError, QuotaExceededError

from .base import BaseTranslationProvider

logger = log_mgr.get_logger().getChild("translation.mymemory")


class ProviderIdentityCursor:
    """Ordered pool of contact identities with a forward-only index."""

    def __init__(self, identities: Sequence[str]) -> None:
        self.identities: Tuple[str, ...] = tuple(
            identity.strip() for identity in identities if identity and identity.strip()
        )
        self._index = 0
        self._lock = threading.Lock()

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> Optional[str]:
        if not self.identities:
            return None
        return self.identities[self._index]

    @property
    def has_next(self) -> bool:
        return self._index < len(self.identities) - 1

    def advance(self, from_index: Optional[int] = None) -> bool:
        """Move to the next identity; return False when the pool is exhausted.

        When ``from_index`` is given and another caller already moved past it,
        the cursor stays put and the caller simply retries with the newer
        identity.
        """

        with self._lock:
            if from_index is not None and self._index > from_index:
                return True
            if self._index >= len(self.identities) - 1:
                return False
            self._index += 1
            return True

    def reset(self) -> None:
        with self._lock:
            self._index = 0

    def __len__(self) -> int:
        return len(self.identities)


@dataclass(slots=True)
class TranslationMatch:
    """Alternate translation returned alongside the primary MyMemory result."""

    text: str
    confidence: float


@dataclass(slots=True)
class MyMemoryResponse:
    """Decoded MyMemory payload."""

    translated_text: str
    confidence: float = 0.0
    matches: List[TranslationMatch] = field(default_factory=list)


def _coerce_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


class MyMemoryTranslator(BaseTranslationProvider):
    """Client for the MyMemory ``/get`` endpoint with identity rotation."""

    name = "mymemory"

    def __init__(
        self,
        *,
        identities: Sequence[str] = (),
        url: str = MYMEMORY_API_URL,
        session: Optional[requests.Session] = None,
        timeout_seconds: float = DEFAULT_TRANSLATION_TIMEOUT_SECONDS,
    ) -> None:
        super().__init__(session=session, timeout_seconds=timeout_seconds)
        self._url = url
        self.cursor = ProviderIdentityCursor(identities)

    @classmethod
    def from_settings(
        cls, settings: LexifeedSettings, *, session: Optional[requests.Session] = None
    ) -> "MyMemoryTranslator":
        return cls(
            identities=settings.mymemory_contact_identities,
            url=settings.mymemory_url,
            session=session,
            timeout_seconds=settings.translation_timeout_seconds,
        )

    def _request(self, text: str, source_lang: str, target_lang: str) -> MyMemoryResponse:
        identity = self.cursor.current
        params = {"q": text, "langpair": f"{source_lang}|{target_lang}"}
        if identity:
            params["de"] = identity

        data = self._get(self._url, params=params)
        if data.get("quotaFinished"):
            raise QuotaExceededError(self.name, identity)

        status = data.get("responseStatus")
        if str(status) != "200":
            details = data.get("responseDetails") or "translation failed"
            raise NetworkError(self.name, str(details), status_code=_status_code(status))

        return _parse_response(self.name, data)

    def lookup(self, text: str, source_lang: str, target_lang: str) -> MyMemoryResponse:
        """Request ``text`` rotating identities on quota exhaustion.

        Every identity is tried at most once per pool; once the last identity
        reports exhaustion the quota error propagates.
        """

        while True:
            attempt_index = self.cursor.index
            try:
                return self._request(text, source_lang, target_lang)
            except QuotaExceededError:
                if not self.cursor.advance(attempt_index):
                    logger.warning(
                        "MyMemory quota exhausted for all %d identities",
                        len(self.cursor),
                        extra={"event": "translation.quota.exhausted", "provider": self.name},
                    )
                    raise
                logger.info(
                    "MyMemory quota exceeded, switching identity %d/%d",
                    self.cursor.index + 1,
                    len(self.cursor),
                    extra={"event": "translation.quota.rotated", "provider": self.name},
                )

    def lookup_variants(self, text: str, source_lang: str, target_lang: str) -> MyMemoryResponse:
        """Single request with the current identity, used for variant listings."""

        return self._request(text, source_lang, target_lang)

    def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        return self.lookup(text, source_lang, target_lang).translated_text


def _status_code(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _parse_response(provider: str, data: Mapping[str, Any]) -> MyMemoryResponse:
    response_data = data.get("responseData")
    if not isinstance(response_data, Mapping):
        raise NetworkError(provider, "missing responseData")
    translated = response_data.get("translatedText")
    if not isinstance(translated, str) or not translated.strip():
        raise NetworkError(provider, "empty translation response")

    matches: List[TranslationMatch] = []
    raw_matches = data.get("matches")
    if isinstance(raw_matches, list):
        for item in raw_matches:
            if not isinstance(item, Mapping):
                continue
            candidate = item.get("translation")
            if not isinstance(candidate, str):
                continue
            matches.append(
                TranslationMatch(text=candidate, confidence=_coerce_float(item.get("match")))
            )

    return MyMemoryResponse(
        translated_text=translated,
        confidence=_coerce_float(response_data.get("match")),
        matches=matches,
    )


__all__ = [
    "MyMemoryResponse",
    "MyMemoryTranslator",
    "ProviderIdentityCursor",
    "TranslationMatch",
]
