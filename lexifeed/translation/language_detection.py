"""Simple script-based language detection for English/Russian text."""

from __future__ import annotations

from typing import Literal

import regex

DetectedLanguage = Literal["en", "ru", "unknown"]

_CYRILLIC_PATTERN = regex.compile(r"\p{Script=Cyrillic}")
_LATIN_PATTERN = regex.compile(r"[A-Za-z]")


def has_cyrillic(text: str) -> bool:
    return bool(text) and _CYRILLIC_PATTERN.search(text) is not None


def detect_language(text: str) -> DetectedLanguage:
    """Return ``"ru"``, ``"en"`` or ``"unknown"`` for ``text``.

    Mixed text is attributed to whichever script has more characters, with
    ties going to English.
    """

    if not text or not text.strip():
        return "unknown"

    cyrillic_count = len(_CYRILLIC_PATTERN.findall(text))
    latin_count = len(_LATIN_PATTERN.findall(text))

    if cyrillic_count and not latin_count:
        return "ru"
    if latin_count and not cyrillic_count:
        return "en"
    if cyrillic_count and latin_count:
        return "ru" if cyrillic_count > latin_count else "en"
    return "unknown"


def language_pair_for(word: str) -> str:
    """Return the dictionary direction for ``word``: ``ru-en`` or ``en-ru``."""

    return "ru-en" if has_cyrillic(word) else "en-ru"


__all__ = ["DetectedLanguage", "detect_language", "has_cyrillic", "language_pair_for"]
