"""Content feed: filter relaxation, paging and background prefetch."""
from __future__ import annotations

from .models import (
    ContentStatus,
    DifficultyLevel,
    FeedEntry,
    FeedItem,
    FeedResponse,
    FilterSettings,
    FocusRequest,
    LoadStatus,
    ProgressResult,
    RelaxedFilters,
    SpeechSpeed,
)
from .prefetch import PREFETCH_BATCH, FeedPrefetchController
from .relaxation import relax_filters
from .session import NO_CONTENT_MESSAGE, ContentClient, FeedPage, FeedSession

__all__ = [
    "ContentClient",
    "ContentStatus",
    "DifficultyLevel",
    "FeedEntry",
    "FeedItem",
    "FeedPage",
    "FeedPrefetchController",
    "FeedResponse",
    "FeedSession",
    "FilterSettings",
    "FocusRequest",
    "LoadStatus",
    "NO_CONTENT_MESSAGE",
    "PREFETCH_BATCH",
    "ProgressResult",
    "RelaxedFilters",
    "SpeechSpeed",
    "relax_filters",
]
