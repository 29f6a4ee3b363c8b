"""Progressive loosening of feed filters when a query returns nothing.

Speech speed is relaxed first (slow → normal → fast → all), then difficulty
(easy → medium → hard → all). Each step produces a banner message in the
product's Russian UI copy naming the exhausted settings and their
replacement. ``None`` signals that the filters are already fully open.
"""

from __future__ import annotations

from typing import Optional

from .models import DifficultyLevel, FilterSettings, RelaxedFilters, SpeechSpeed

DIFFICULTY_LABELS = {
    DifficultyLevel.ALL: "все уровни",
    DifficultyLevel.EASY: "легкий уровень (A1)",
    DifficultyLevel.MEDIUM: "средний уровень (A2-B1)",
    DifficultyLevel.HARD: "сложный уровень (B2-C1)",
}

SPEECH_SPEED_LABELS = {
    SpeechSpeed.ALL: "любую скорость",
    SpeechSpeed.SLOW: "медленную речь",
    SpeechSpeed.NORMAL: "среднюю скорость речи",
    SpeechSpeed.FAST: "быструю речь",
}

FULLY_RELAXED_MESSAGE = (
    "Видео с вашими настройками закончились. Показываем видео всех уровней и скоростей"
)

_NEXT_SPEED_ON_FIRST_ATTEMPT = {
    SpeechSpeed.NORMAL: SpeechSpeed.FAST,
    SpeechSpeed.FAST: SpeechSpeed.ALL,
}

_NEXT_DIFFICULTY = {
    DifficultyLevel.EASY: DifficultyLevel.MEDIUM,
    DifficultyLevel.MEDIUM: DifficultyLevel.HARD,
    DifficultyLevel.HARD: DifficultyLevel.ALL,
}


def describe_change(
    current: FilterSettings, difficulty: DifficultyLevel, speed: SpeechSpeed
) -> str:
    return (
        f'Видео с настройками "{DIFFICULTY_LABELS[current.difficulty_level]}, '
        f'{SPEECH_SPEED_LABELS[current.speech_speed]}" закончились. '
        f"Показываем: {DIFFICULTY_LABELS[difficulty]}, {SPEECH_SPEED_LABELS[speed]}"
    )


def _relaxed(current: FilterSettings, difficulty: DifficultyLevel, speed: SpeechSpeed) -> RelaxedFilters:
    return RelaxedFilters(
        difficulty_level=difficulty,
        speech_speed=speed,
        message=describe_change(current, difficulty, speed),
    )


def relax_filters(current: FilterSettings, attempt_number: int = 0) -> Optional[RelaxedFilters]:
    """Return the next looser filter settings, or ``None`` when none remain.

    ``slow`` speech always steps up to ``normal``. The ``normal`` and
    ``fast`` speed steps only apply on the first attempt; later attempts
    move difficulty up one level and open speed to ``all`` at the same time.
    """

    difficulty = current.difficulty_level
    speed = current.speech_speed

    if speed is SpeechSpeed.SLOW:
        return _relaxed(current, difficulty, SpeechSpeed.NORMAL)

    if attempt_number == 0 and speed in _NEXT_SPEED_ON_FIRST_ATTEMPT:
        return _relaxed(current, difficulty, _NEXT_SPEED_ON_FIRST_ATTEMPT[speed])

    next_difficulty = _NEXT_DIFFICULTY.get(difficulty)
    if next_difficulty is not None:
        next_speed = SpeechSpeed.ALL if attempt_number > 0 else speed
        return _relaxed(current, next_difficulty, next_speed)

    if current.is_unfiltered:
        return None

    return RelaxedFilters(
        difficulty_level=DifficultyLevel.ALL,
        speech_speed=SpeechSpeed.ALL,
        message=FULLY_RELAXED_MESSAGE,
    )


__all__ = [
    "DIFFICULTY_LABELS",
    "FULLY_RELAXED_MESSAGE",
    "SPEECH_SPEED_LABELS",
    "describe_change",
    "relax_filters",
]
