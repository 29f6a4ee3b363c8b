import pytest

from lexifeed.feed.models import DifficultyLevel, FilterSettings, SpeechSpeed
from lexifeed.feed.relaxation import FULLY_RELAXED_MESSAGE, relax_filters

pytestmark = pytest.mark.feed

DIFFICULTIES = ["all", "easy", "medium", "hard"]
SPEEDS = ["all", "slow", "normal", "fast"]
_LOOSENESS_D = {"easy": 0, "medium": 1, "hard": 2, "all": 3}
_LOOSENESS_S = {"slow": 0, "normal": 1, "fast": 2, "all": 3}


def _relax(difficulty, speed, attempt=0):
    return relax_filters(FilterSettings.of(difficulty, speed), attempt)


def test_slow_steps_to_normal_on_any_attempt():
    for attempt in (0, 1, 5):
        relaxed = _relax("easy", "slow", attempt)
        assert relaxed.settings == FilterSettings.of("easy", "normal")
        assert relaxed.was_relaxed


def test_first_attempt_relaxes_speed_only():
    assert _relax("medium", "normal").settings == FilterSettings.of("medium", "fast")
    assert _relax("medium", "fast").settings == FilterSettings.of("medium", "all")


def test_later_attempts_move_difficulty_and_open_speed():
    assert _relax("easy", "normal", 1).settings == FilterSettings.of("medium", "all")
    assert _relax("medium", "fast", 2).settings == FilterSettings.of("hard", "all")
    assert _relax("hard", "fast", 1).settings == FilterSettings.of("all", "all")


def test_difficulty_step_keeps_speed_on_first_attempt():
    assert _relax("easy", "all").settings == FilterSettings.of("medium", "all")
    assert _relax("hard", "all").settings == FilterSettings.of("all", "all")


def test_fully_open_filters_return_none():
    assert _relax("all", "all") is None
    assert _relax("all", "all", 3) is None


def test_generic_fallback_for_open_difficulty():
    relaxed = _relax("all", "fast", 1)
    assert relaxed.settings == FilterSettings.of("all", "all")
    assert relaxed.message == FULLY_RELAXED_MESSAGE


def test_message_names_old_and_new_settings():
    relaxed = _relax("easy", "slow")
    assert relaxed.message == (
        'Видео с настройками "легкий уровень (A1), медленную речь" закончились. '
        "Показываем: легкий уровень (A1), среднюю скорость речи"
    )
    relaxed = _relax("medium", "normal", 1)
    assert relaxed.message == (
        'Видео с настройками "средний уровень (A2-B1), среднюю скорость речи" закончились. '
        "Показываем: сложный уровень (B2-C1), любую скорость"
    )


@pytest.mark.parametrize("difficulty", DIFFICULTIES)
@pytest.mark.parametrize("speed", SPEEDS)
def test_relaxation_terminates_and_never_tightens(difficulty, speed):
    current = FilterSettings.of(difficulty, speed)
    for attempt in range(20):
        relaxed = relax_filters(current, attempt)
        if relaxed is None:
            assert current == FilterSettings(DifficultyLevel.ALL, SpeechSpeed.ALL)
            return
        nxt = relaxed.settings
        assert _LOOSENESS_D[nxt.difficulty_level.value] >= _LOOSENESS_D[current.difficulty_level.value]
        assert _LOOSENESS_S[nxt.speech_speed.value] >= _LOOSENESS_S[current.speech_speed.value]
        assert nxt != current
        current = nxt
    pytest.fail("relaxation did not reach the terminal state")
