"""Vocabulary, translation and feed orchestration services for lexifeed."""

from .environment import load_environment

# Load .env-style files on import.
load_environment()

__all__ = ["load_environment"]
