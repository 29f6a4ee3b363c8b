"""Resolve caption text into a bounded set of known word ids."""

from __future__ import annotations

from typing import Optional, Sequence, Set

from lexifeed import config_manager as cfg
from lexifeed import logging_manager as log_mgr

from .forms_index import FormIndexStore
from .normalization import CaptionChunk, extract_caption_forms

logger = log_mgr.get_logger().getChild("vocabulary.resolver")


class VocabularyResolver:
    """Turn arbitrary captions into word ids via the local forms index."""

    def __init__(self, store: FormIndexStore, *, default_limit: int = cfg.DEFAULT_RESOLVE_LIMIT) -> None:
        self._store = store
        self.default_limit = default_limit

    @property
    def store(self) -> FormIndexStore:
        return self._store

    async def resolve(
        self,
        captions: Sequence[CaptionChunk],
        *,
        limit: Optional[int] = None,
    ) -> Set[int]:
        """Return the unique word ids found in ``captions``, at most ``limit`` of them.

        Captions may be plain strings, mappings with a ``text`` key, or objects
        with a ``text`` attribute. Invalid tokens are dropped silently; input
        without a single valid form never touches the index.
        """

        effective_limit = self.default_limit if limit is None else limit
        if not captions or effective_limit <= 0:
            return set()

        forms = extract_caption_forms(captions)
        if not forms:
            logger.debug(
                "No valid word forms in %d caption chunk(s)",
                len(captions),
                extra={"event": "vocabulary.resolve.empty"},
            )
            return set()

        await self._store.ensure_ready()
        word_ids = await self._store.lookup(forms, effective_limit)
        return set(word_ids)

    async def resolve_text(self, text: str, *, limit: Optional[int] = None) -> Set[int]:
        """Convenience wrapper resolving a single block of text."""

        if not text:
            return set()
        return await self.resolve([text], limit=limit)


__all__ = ["VocabularyResolver"]
