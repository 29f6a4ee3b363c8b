"""Typed decoding of exercise option lists stored as JSON text."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass(frozen=True, slots=True)
class OptionsDecodeResult:
    """Either a decoded option list (``ok``) or the reason decoding failed."""

    options: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def malformed(self) -> bool:
        return self.error is not None

    @classmethod
    def success(cls, options: List[str]) -> "OptionsDecodeResult":
        return cls(options=options)

    @classmethod
    def failure(cls, reason: str) -> "OptionsDecodeResult":
        return cls(error=reason)


def decode_options(raw: Any) -> OptionsDecodeResult:
    """Decode ``raw`` (a JSON string or an already parsed list) into options."""

    value = raw
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            value = json.loads(raw)
        except ValueError as exc:
            return OptionsDecodeResult.failure(f"invalid JSON: {exc.args[0] if exc.args else exc}")

    if not isinstance(value, list):
        return OptionsDecodeResult.failure(f"expected a list, got {type(value).__name__}")

    for index, option in enumerate(value):
        if not isinstance(option, str):
            return OptionsDecodeResult.failure(
                f"option {index} is {type(option).__name__}, expected str"
            )
    return OptionsDecodeResult.success(list(value))


__all__ = ["OptionsDecodeResult", "decode_options"]
