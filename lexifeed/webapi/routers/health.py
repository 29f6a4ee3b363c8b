"""Health check route."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from lexifeed.translation import TranslationGateway
from lexifeed.vocabulary import FormIndexStore
from lexifeed.webapi.dependencies import get_form_index_store, get_translation_gateway
from lexifeed.webapi.schemas import HealthResponse

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthResponse)
def healthcheck(
    store: FormIndexStore = Depends(get_form_index_store),
    gateway: TranslationGateway = Depends(get_translation_gateway),
) -> HealthResponse:
    return HealthResponse(
        status="ok",
        forms_index_ready=store.is_ready,
        translation_cache=gateway.cache_stats(),
    )


__all__ = ["router"]
