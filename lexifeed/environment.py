"""Dotenv loading for API keys and per-deployment overrides.

Files are read in this order, and a variable already present in the
process environment (or set by an earlier file) is never replaced:

1. every path in ``LEXIFEED_ENV_FILE`` (``os.pathsep`` separated);
2. ``.env`` at the project root;
3. ``.env.<LEXIFEED_ENV>`` when ``LEXIFEED_ENV`` names a deployment;
4. ``.env.local``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Mapping, Optional, Tuple

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[1]

_loaded: Optional[Tuple[Path, ...]] = None


def dotenv_candidates(
    environ: Optional[Mapping[str, str]] = None, root: Path = PROJECT_ROOT
) -> List[Path]:
    """Return the de-duplicated dotenv paths to try, highest precedence first."""

    env = os.environ if environ is None else environ
    explicit = [
        Path(part).expanduser()
        for part in env.get("LEXIFEED_ENV_FILE", "").split(os.pathsep)
        if part.strip()
    ]
    deployment = env.get("LEXIFEED_ENV", "").strip()
    names = [".env", f".env.{deployment}" if deployment else None, ".env.local"]
    project = [root / name for name in names if name]
    return list(dict.fromkeys(path.resolve() for path in explicit + project))


def load_environment(*, force: bool = False) -> Tuple[Path, ...]:
    """Load the dotenv files once per process and return those that were read."""

    global _loaded
    if _loaded is None or force:
        _loaded = tuple(
            path
            for path in dotenv_candidates()
            if path.is_file() and load_dotenv(path, override=False)
        )
    return _loaded


__all__ = ["dotenv_candidates", "load_environment"]
