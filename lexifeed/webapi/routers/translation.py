"""Translation and word lookup routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from lexifeed import config_manager as cfg
from lexifeed.translation import TranslationGateway, WordLookupService
from lexifeed.webapi.dependencies import (
    get_settings,
    get_translation_gateway,
    get_word_lookup_service,
)
from lexifeed.webapi.schemas import (
    TranslateRequest,
    TranslateResponse,
    VariantsRequest,
    VariantsResponse,
    WordLookupResponse,
)

router = APIRouter(prefix="/api/translation", tags=["translation"])


@router.post("/translate", response_model=TranslateResponse)
async def translate(
    payload: TranslateRequest,
    gateway: TranslationGateway = Depends(get_translation_gateway),
) -> TranslateResponse:
    translation = await gateway.translate(payload.text, payload.source_lang, payload.target_lang)
    return TranslateResponse(
        translation=translation,
        source_lang=payload.source_lang,
        target_lang=payload.target_lang,
    )


@router.post("/variants", response_model=VariantsResponse)
async def translation_variants(
    payload: VariantsRequest,
    gateway: TranslationGateway = Depends(get_translation_gateway),
    settings: cfg.LexifeedSettings = Depends(get_settings),
) -> VariantsResponse:
    max_variants = payload.max_variants
    if max_variants is None:
        max_variants = settings.max_variants
    variants = await gateway.get_variants(
        payload.text,
        payload.source_lang,
        payload.target_lang,
        max_variants=max_variants,
    )
    return VariantsResponse(variants=variants)


@router.get("/lookup", response_model=WordLookupResponse)
async def lookup_word(
    word: str = Query(..., min_length=1),
    service: WordLookupService = Depends(get_word_lookup_service),
) -> WordLookupResponse:
    """Dictionary entry and pronunciation for a single tapped word."""

    data = await service.lookup(word)
    return WordLookupResponse(**data.to_dict())


__all__ = ["router"]
