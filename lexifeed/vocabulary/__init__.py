"""Caption-to-vocabulary resolution backed by the local word-form index.

Key Components:
    - FormIndexStore: versioned SQLite index of word form -> word id
    - VocabularyResolver: captions -> bounded set of word ids
    - normalize_form / split_words: tokenization and form validation

Usage Example:
    from lexifeed.vocabulary import FormIndexStore, VocabularyResolver

    store = FormIndexStore.from_settings()
    resolver = VocabularyResolver(store)
    word_ids = await resolver.resolve(["Running late", {"text": "ran home"}], limit=100)
"""

from .forms_index import FormIndexStore, chunked
from .normalization import (
    MAX_FORM_LENGTH,
    MIN_FORM_LENGTH,
    caption_text,
    extract_caption_forms,
    is_valid_form,
    normalize_form,
    normalize_forms,
    require_form,
    split_words,
)
from .resolver import VocabularyResolver

__all__ = [
    "FormIndexStore",
    "MAX_FORM_LENGTH",
    "MIN_FORM_LENGTH",
    "VocabularyResolver",
    "caption_text",
    "chunked",
    "extract_caption_forms",
    "is_valid_form",
    "normalize_form",
    "normalize_forms",
    "require_form",
    "split_words",
]
