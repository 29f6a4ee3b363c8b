"""Convert generated vocabulary exercises into display exercises."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from lexifeed.vocabulary.normalization import caption_text

Timestamp = Tuple[float, float]

_PUNCTUATION = re.compile(r"[.,!?;:'\"]")


@dataclass(slots=True)
class GeneratedExercise:
    """Exercise as produced by the exercise generator service."""

    word_id: int
    word: str
    direction: str
    prompt: str
    options: List[str]
    correct_answer: str

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> "GeneratedExercise":
        return cls(
            word_id=int(data["wordId"]),
            word=str(data.get("word") or ""),
            direction=str(data.get("direction") or ""),
            prompt=str(data.get("prompt") or ""),
            options=[str(option) for option in data.get("options") or []],
            correct_answer=str(data.get("correctAnswer") or ""),
        )


@dataclass(slots=True)
class DisplayExercise:
    id: str
    question: str
    options: List[str]
    correct_answer: int
    word_id: int
    type: str = "vocabulary"
    timestamp: Optional[Timestamp] = None


def _chunk_timestamp(chunk: Any) -> Optional[Timestamp]:
    raw = chunk.get("timestamp") if isinstance(chunk, Mapping) else getattr(chunk, "timestamp", None)
    if not raw or len(raw) != 2:
        return None
    return (float(raw[0]), float(raw[1]))


def find_word_timestamp(word: str, word_chunks: Sequence[Any]) -> Optional[Timestamp]:
    """Return the timestamp of the first caption chunk starting with ``word``.

    Multi-word entries match on their first word.
    """

    words = word.lower().strip().split(" ")
    first_word = words[0]
    for chunk in word_chunks:
        normalized = _PUNCTUATION.sub("", (caption_text(chunk) or "").lower().strip())
        if normalized.startswith(first_word):
            return _chunk_timestamp(chunk)
    return None


def adapt_exercises(
    items: Sequence[GeneratedExercise],
    word_chunks: Optional[Sequence[Any]] = None,
) -> List[DisplayExercise]:
    """Map generated exercises to display exercises.

    The correct option index falls back to ``0`` when the correct answer is
    not among the options. Only ``en-ru`` exercises get a caption timestamp.
    """

    adapted: List[DisplayExercise] = []
    for index, item in enumerate(items):
        try:
            correct_index = item.options.index(item.correct_answer)
        except ValueError:
            correct_index = 0
        timestamp = None
        if item.direction == "en-ru" and word_chunks:
            timestamp = find_word_timestamp(item.word, word_chunks)
        adapted.append(
            DisplayExercise(
                id=f"dyn-{item.word_id}-{item.direction}-{index}",
                question=item.prompt,
                options=list(item.options),
                correct_answer=correct_index,
                word_id=item.word_id,
                timestamp=timestamp,
            )
        )
    return adapted


__all__ = [
    "DisplayExercise",
    "GeneratedExercise",
    "Timestamp",
    "adapt_exercises",
    "find_word_timestamp",
]
