"""Base class for HTTP translation provider clients."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

import requests

from lexifeed.config_manager.constants import DEFAULT_TRANSLATION_TIMEOUT_SECONDS
from lexifeed.errors import NetworkError


class BaseTranslationProvider(ABC):
    """Abstract base class for translation provider clients.

    Subclasses wrap every transport, status and decoding failure into
    :class:`~lexifeed.errors.NetworkError` so the gateway can fall back
    without knowing provider specifics.
    """

    name: str = "provider"

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        timeout_seconds: float = DEFAULT_TRANSLATION_TIMEOUT_SECONDS,
    ) -> None:
        self._session = session or requests.Session()
        self._timeout = timeout_seconds
        self._owns_session = session is None

    @abstractmethod
    def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        """Translate ``text`` and return the translated string."""
        ...

    def close(self) -> None:
        """Release resources."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "BaseTranslationProvider":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _decode_json(self, response: requests.Response) -> Mapping[str, Any]:
        try:
            payload = response.json()
        except ValueError as exc:
            raise NetworkError(self.name, "malformed JSON response") from exc
        if not isinstance(payload, Mapping):
            raise NetworkError(self.name, "unexpected response payload")
        return payload

    def _get(self, url: str, *, params: Optional[Mapping[str, Any]] = None) -> Mapping[str, Any]:
        try:
            response = self._session.get(url, params=params, timeout=self._timeout)
        except requests.RequestException as exc:
            raise NetworkError(self.name, f"request failed: {exc}") from exc
        if not response.ok:
            raise NetworkError(self.name, "request rejected", status_code=response.status_code)
        return self._decode_json(response)

    def _post(
        self,
        url: str,
        *,
        json_body: Mapping[str, Any],
        headers: Optional[Mapping[str, str]] = None,
    ) -> Mapping[str, Any]:
        try:
            response = self._session.post(
                url, json=dict(json_body), headers=dict(headers or {}), timeout=self._timeout
            )
        except requests.RequestException as exc:
            raise NetworkError(self.name, f"request failed: {exc}") from exc
        if not response.ok:
            body = (response.text or "").strip()[:200]
            raise NetworkError(
                self.name,
                f"request rejected: {body or response.reason or 'no details'}",
                status_code=response.status_code,
            )
        return self._decode_json(response)


__all__ = ["BaseTranslationProvider"]
