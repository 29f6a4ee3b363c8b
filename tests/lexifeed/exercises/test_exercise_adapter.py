import pytest

from lexifeed.exercises.adapter import (
    GeneratedExercise,
    adapt_exercises,
    find_word_timestamp,
)

pytestmark = pytest.mark.exercises

CHUNKS = [
    {"text": "Hello,", "timestamp": [0.0, 0.4]},
    {"text": "stopping", "timestamp": [0.4, 0.9]},
    {"text": "Run!", "timestamp": [1.0, 1.3]},
]


def _exercise(**overrides):
    values = dict(
        word_id=5,
        word="run",
        direction="en-ru",
        prompt="Translate: run",
        options=["бежать", "есть", "спать"],
        correct_answer="бежать",
    )
    values.update(overrides)
    return GeneratedExercise(**values)


def test_maps_correct_answer_index_and_id():
    adapted = adapt_exercises([_exercise(correct_answer="спать")], CHUNKS)

    assert adapted[0].correct_answer == 2
    assert adapted[0].id == "dyn-5-en-ru-0"
    assert adapted[0].question == "Translate: run"
    assert adapted[0].type == "vocabulary"


def test_missing_correct_answer_falls_back_to_first_option():
    adapted = adapt_exercises([_exercise(correct_answer="летать")])
    assert adapted[0].correct_answer == 0


def test_timestamp_only_for_english_prompts():
    adapted = adapt_exercises(
        [_exercise(), _exercise(direction="ru-en", word="бежать")], CHUNKS
    )
    assert adapted[0].timestamp == (1.0, 1.3)
    assert adapted[1].timestamp is None


def test_multi_word_entries_match_first_word():
    assert find_word_timestamp("stop talking", CHUNKS) == (0.4, 0.9)
    assert find_word_timestamp("absent", CHUNKS) is None


def test_from_wire():
    exercise = GeneratedExercise.from_wire(
        {
            "wordId": "12",
            "word": "cat",
            "direction": "en-ru",
            "prompt": "cat?",
            "options": ["кот", "собака"],
            "correctAnswer": "кот",
        }
    )
    assert exercise.word_id == 12
    assert adapt_exercises([exercise])[0].correct_answer == 0
