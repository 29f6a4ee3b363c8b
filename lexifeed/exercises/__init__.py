"""Exercise option decoding and display adaptation."""
from __future__ import annotations

from .adapter import DisplayExercise, GeneratedExercise, adapt_exercises, find_word_timestamp
from .options import OptionsDecodeResult, decode_options

__all__ = [
    "DisplayExercise",
    "GeneratedExercise",
    "OptionsDecodeResult",
    "adapt_exercises",
    "decode_options",
    "find_word_timestamp",
]
