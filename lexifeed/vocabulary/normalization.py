"""Caption tokenization and word-form normalization.

Word forms stored in the index are lowercase ASCII letters plus apostrophes
and dashes, 2 to 25 characters long. Everything that reaches the index goes
through :func:`normalize_form` first.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Mapping, Optional, Sequence, Union

from lexifeed.errors import ValidationError

MIN_FORM_LENGTH = 2
MAX_FORM_LENGTH = 25

_APOSTROPHE_VARIANTS = re.compile(r"[’‘`‵]")
_DASH_VARIANTS = re.compile(r"[–—]")
_DISALLOWED_CHARS = re.compile(r"[^a-z'\-]")
# Typographic apostrophes and dashes stay inside a token so they can be
# unified during normalization.
_WORD_SPLIT = re.compile(r"[^A-Za-z'\-’‘`‵–—]+")

CaptionChunk = Union[str, Mapping[str, object], object]


def normalize_form(raw: str) -> Optional[str]:
    """Return the canonical index form of ``raw`` or ``None`` when invalid."""

    if not raw:
        return None
    lowered = raw.strip().lower()
    lowered = _APOSTROPHE_VARIANTS.sub("'", lowered)
    lowered = _DASH_VARIANTS.sub("-", lowered)
    cleaned = _DISALLOWED_CHARS.sub("", lowered)
    if len(cleaned) < MIN_FORM_LENGTH or len(cleaned) > MAX_FORM_LENGTH:
        return None
    return cleaned


def is_valid_form(value: str) -> bool:
    """Return True when ``value`` is already a canonical index form."""

    return bool(value) and normalize_form(value) == value


def require_form(raw: str) -> str:
    """Strict variant of :func:`normalize_form` that raises on invalid input."""

    form = normalize_form(raw)
    if form is None:
        raise ValidationError(f"Invalid word form: {raw!r}")
    return form


def split_words(text: str) -> List[str]:
    """Split ``text`` into candidate word tokens, dropping empty pieces."""

    if not text:
        return []
    return [token for token in _WORD_SPLIT.split(text) if token]


def normalize_forms(tokens: Iterable[str]) -> List[str]:
    """Normalize ``tokens`` and deduplicate them, keeping first-seen order."""

    seen: dict[str, None] = {}
    for token in tokens:
        form = normalize_form(token)
        if form is not None and form not in seen:
            seen[form] = None
    return list(seen)


def caption_text(chunk: CaptionChunk) -> str:
    """Extract the text payload from a caption string, mapping or chunk object."""

    if isinstance(chunk, str):
        return chunk
    if isinstance(chunk, Mapping):
        value = chunk.get("text")
    else:
        value = getattr(chunk, "text", None)
    return value if isinstance(value, str) else ""


def extract_caption_forms(captions: Sequence[CaptionChunk]) -> List[str]:
    """Return the unique normalized forms found across ``captions``."""

    tokens: List[str] = []
    for chunk in captions:
        text = caption_text(chunk)
        if text:
            tokens.extend(split_words(text))
    return normalize_forms(tokens)


__all__ = [
    "MAX_FORM_LENGTH",
    "MIN_FORM_LENGTH",
    "caption_text",
    "extract_caption_forms",
    "is_valid_form",
    "normalize_form",
    "normalize_forms",
    "require_form",
    "split_words",
]
