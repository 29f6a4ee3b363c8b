"""Value types shared by the feed relaxer, session and prefetch controller."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional, Sequence


class DifficultyLevel(str, Enum):
    ALL = "all"
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class SpeechSpeed(str, Enum):
    ALL = "all"
    SLOW = "slow"
    NORMAL = "normal"
    FAST = "fast"


class LoadStatus(str, Enum):
    """Client-side load state of a feed item."""

    UNREQUESTED = "unrequested"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class ContentStatus(str, Enum):
    """Learning state of a feed item as reported by the content API."""

    NEW = "new"
    WATCHED = "watched"
    COMPLETED = "completed"

    @classmethod
    def from_wire(cls, value: Optional[str]) -> "ContentStatus":
        return _WIRE_STATUS.get((value or "").upper(), cls.NEW)


_WIRE_STATUS = {
    "NOT_STARTED": ContentStatus.NEW,
    "WATCHED": ContentStatus.WATCHED,
    "COMPLETED": ContentStatus.COMPLETED,
}


@dataclass(frozen=True, slots=True)
class FilterSettings:
    """Difficulty and speech-speed filters applied to the content feed."""

    difficulty_level: DifficultyLevel = DifficultyLevel.ALL
    speech_speed: SpeechSpeed = SpeechSpeed.ALL

    @classmethod
    def of(cls, difficulty_level: str, speech_speed: str) -> "FilterSettings":
        return cls(DifficultyLevel(difficulty_level), SpeechSpeed(speech_speed))

    @property
    def is_unfiltered(self) -> bool:
        return (
            self.difficulty_level is DifficultyLevel.ALL
            and self.speech_speed is SpeechSpeed.ALL
        )


@dataclass(frozen=True, slots=True)
class RelaxedFilters:
    """Looser filter settings plus the banner message explaining the change."""

    difficulty_level: DifficultyLevel
    speech_speed: SpeechSpeed
    message: str
    was_relaxed: bool = True

    @property
    def settings(self) -> FilterSettings:
        return FilterSettings(self.difficulty_level, self.speech_speed)


@dataclass(slots=True)
class FeedEntry:
    """One item of a content feed page."""

    id: str
    content_status: ContentStatus = ContentStatus.NEW
    payload: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> "FeedEntry":
        return cls(
            id=str(data["id"]),
            content_status=ContentStatus.from_wire(data.get("status")),
            payload=dict(data),
        )


@dataclass(slots=True)
class FeedResponse:
    """A page returned by the content API."""

    items: List[FeedEntry] = field(default_factory=list)
    next_cursor: Optional[str] = None
    has_more: bool = False

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> "FeedResponse":
        raw_items: Sequence[Mapping[str, Any]] = data.get("items") or []
        return cls(
            items=[FeedEntry.from_wire(item) for item in raw_items],
            next_cursor=data.get("nextCursor"),
            has_more=bool(data.get("hasMore")),
        )


@dataclass(slots=True)
class FeedItem:
    """Feed entry tracked by the prefetch controller."""

    id: str
    load_status: LoadStatus = LoadStatus.UNREQUESTED
    content_status: ContentStatus = ContentStatus.NEW
    content: Optional[Any] = None
    error: Optional[str] = None


@dataclass(frozen=True, slots=True)
class FocusRequest:
    """Pin ``target_id`` to the front of the visible list for ``token``."""

    target_id: str
    token: str


@dataclass(slots=True)
class ProgressResult:
    """Outcome of submitting exercise answers for a content item."""

    total: int = 0
    correct: int = 0
    completed: bool = False
    next_content_id: Optional[str] = None

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> "ProgressResult":
        result = data.get("result") or {}
        return cls(
            total=int(result.get("total") or 0),
            correct=int(result.get("correct") or 0),
            completed=bool(result.get("completed")),
            next_content_id=data.get("nextContentId"),
        )


__all__ = [
    "ContentStatus",
    "DifficultyLevel",
    "FeedEntry",
    "FeedItem",
    "FeedResponse",
    "FilterSettings",
    "FocusRequest",
    "LoadStatus",
    "ProgressResult",
    "RelaxedFilters",
    "SpeechSpeed",
]
