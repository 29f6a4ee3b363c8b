"""Vocabulary resolution routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from lexifeed.vocabulary import VocabularyResolver
from lexifeed.webapi.dependencies import get_vocabulary_resolver
from lexifeed.webapi.schemas import ResolveVocabularyRequest, ResolveVocabularyResponse

router = APIRouter(prefix="/api/vocabulary", tags=["vocabulary"])


@router.post("/resolve", response_model=ResolveVocabularyResponse)
async def resolve_vocabulary(
    payload: ResolveVocabularyRequest,
    resolver: VocabularyResolver = Depends(get_vocabulary_resolver),
) -> ResolveVocabularyResponse:
    """Return the dictionary word ids whose forms occur in the captions."""

    captions = [
        caption if isinstance(caption, str) else caption.text for caption in payload.captions
    ]
    word_ids = await resolver.resolve(captions, limit=payload.limit)
    ordered = sorted(word_ids)
    return ResolveVocabularyResponse(word_ids=ordered, count=len(ordered))


__all__ = ["router"]
