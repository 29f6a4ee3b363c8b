import pytest

from lexifeed.translation.language_detection import (
    detect_language,
    has_cyrillic,
    language_pair_for,
)

pytestmark = pytest.mark.translation


@pytest.mark.parametrize(
    "text, expected",
    [
        ("hello world", "en"),
        ("привет мир", "ru"),
        ("", "unknown"),
        ("   ", "unknown"),
        ("12345 !?", "unknown"),
        ("привет hi", "ru"),
        ("hello мир", "en"),
        ("ab вг", "en"),
    ],
)
def test_detect_language(text, expected):
    assert detect_language(text) == expected


def test_mixed_script_is_decided_by_character_count():
    # Majority by character count; a presence-only check would call every
    # mixed string English.
    assert detect_language("a ёжик") == "ru"
    assert detect_language("ok, договорились") == "ru"
    assert detect_language("я dog") == "en"


def test_direction_helpers():
    assert has_cyrillic("кот")
    assert not has_cyrillic("cat")
    assert language_pair_for("кот") == "ru-en"
    assert language_pair_for("cat") == "en-ru"
