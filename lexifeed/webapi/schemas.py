"""Pydantic schemas for the lexifeed HTTP API."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CaptionChunkPayload(BaseModel):
    """Caption chunk as delivered by the transcription pipeline."""

    model_config = ConfigDict(extra="ignore")

    text: str
    timestamp: Optional[List[float]] = None


class ResolveVocabularyRequest(BaseModel):
    captions: List[Union[str, CaptionChunkPayload]] = Field(default_factory=list)
    limit: Optional[int] = None


class ResolveVocabularyResponse(BaseModel):
    word_ids: List[int]
    count: int


class TranslateRequest(BaseModel):
    text: str
    source_lang: str = "en"
    target_lang: str = "ru"

    @field_validator("source_lang", "target_lang")
    @classmethod
    def _normalise_lang(cls, value: str) -> str:
        cleaned = value.strip().lower()
        if not cleaned:
            raise ValueError("language code must not be empty")
        return cleaned


class TranslateResponse(BaseModel):
    translation: str
    source_lang: str
    target_lang: str


class VariantsRequest(TranslateRequest):
    max_variants: Optional[int] = None


class VariantsResponse(BaseModel):
    variants: List[str]


class WordLookupResponse(BaseModel):
    word: str
    translation: str
    translations: List[str] = Field(default_factory=list)
    audio_url: Optional[str] = None
    transcription: Optional[str] = None


DifficultyValue = Literal["all", "easy", "medium", "hard"]
SpeedValue = Literal["all", "slow", "normal", "fast"]


class RelaxFiltersRequest(BaseModel):
    difficulty_level: DifficultyValue = "all"
    speech_speed: SpeedValue = "all"
    attempt_number: int = Field(default=0, ge=0)


class RelaxFiltersResponse(BaseModel):
    relaxed: bool
    difficulty_level: Optional[DifficultyValue] = None
    speech_speed: Optional[SpeedValue] = None
    message: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    forms_index_ready: bool
    translation_cache: Dict[str, int] = Field(default_factory=dict)


__all__ = [
    "CaptionChunkPayload",
    "HealthResponse",
    "RelaxFiltersRequest",
    "RelaxFiltersResponse",
    "ResolveVocabularyRequest",
    "ResolveVocabularyResponse",
    "TranslateRequest",
    "TranslateResponse",
    "VariantsRequest",
    "VariantsResponse",
    "WordLookupResponse",
]
