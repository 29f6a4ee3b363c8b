"""Exception hierarchy shared by the vocabulary, translation and feed services."""

from __future__ import annotations


class LexifeedError(RuntimeError):
    """Base exception raised by lexifeed services."""


class InitializationError(LexifeedError):
    """Raised when the word-form index is missing, corrupt or not yet ready."""


class ValidationError(LexifeedError, ValueError):
    """Raised by strict helpers when a word form or text payload is malformed.

    Resolver entry points drop invalid input silently and never let this
    escape to callers.
    """


class NetworkError(LexifeedError):
    """Raised internally when a provider request fails in transport or status."""

    def __init__(self, provider: str, message: str, *, status_code: int | None = None) -> None:
        self.provider = provider
        self.status_code = status_code
        detail = f" (status {status_code})" if status_code is not None else ""
        super().__init__(f"{provider}: {message}{detail}")


class QuotaExceededError(NetworkError):
    """Raised internally when a provider reports quota exhaustion for an identity."""

    def __init__(self, provider: str, identity: str | None) -> None:
        self.identity = identity
        super().__init__(provider, f"quota exhausted for identity {identity or '<anonymous>'}")


class TranslationUnavailableError(LexifeedError):
    """Terminal failure after every translation provider and identity was tried."""

    def __init__(self, message: str = "Translation failed: both services unavailable") -> None:
        super().__init__(message)


__all__ = [
    "InitializationError",
    "LexifeedError",
    "NetworkError",
    "QuotaExceededError",
    "TranslationUnavailableError",
    "ValidationError",
]
