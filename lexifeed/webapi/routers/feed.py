"""Feed filter routes."""

from __future__ import annotations

from fastapi import APIRouter

from lexifeed.feed import FilterSettings, relax_filters
from lexifeed.webapi.schemas import RelaxFiltersRequest, RelaxFiltersResponse

router = APIRouter(prefix="/api/feed", tags=["feed"])


@router.post("/relax", response_model=RelaxFiltersResponse)
def relax(payload: RelaxFiltersRequest) -> RelaxFiltersResponse:
    """Return the next looser filters, or ``relaxed=false`` when fully open."""

    current = FilterSettings.of(payload.difficulty_level, payload.speech_speed)
    relaxed = relax_filters(current, payload.attempt_number)
    if relaxed is None:
        return RelaxFiltersResponse(relaxed=False)
    return RelaxFiltersResponse(
        relaxed=relaxed.was_relaxed,
        difficulty_level=relaxed.difficulty_level.value,
        speech_speed=relaxed.speech_speed.value,
        message=relaxed.message,
    )


__all__ = ["router"]
