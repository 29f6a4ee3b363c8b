"""Local word-form index backed by a bundled SQLite asset.

The index maps normalized word forms to dictionary word ids. It ships as a
read-only asset; on first use the asset is copied into the writable data
directory next to a version marker and re-copied whenever the configured
version changes.
"""

from __future__ import annotations

import asyncio
import os
import shutil
import sqlite3
import time
from contextlib import closing
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from lexifeed import config_manager as cfg
from lexifeed import logging_manager as log_mgr
from lexifeed.errors import InitializationError

from .normalization import is_valid_form

logger = log_mgr.get_logger().getChild("vocabulary.forms_index")

VERSION_SUFFIX = ".version"


def chunked(items: Sequence[str], size: int) -> List[List[str]]:
    """Split ``items`` into consecutive lists of at most ``size`` elements."""

    if size <= 0:
        raise ValueError("chunk size must be greater than zero")
    return [list(items[index : index + size]) for index in range(0, len(items), size)]


class FormIndexStore:
    """Owns the local forms index and answers batched form → word id lookups.

    ``ensure_ready`` is guarded by a once-only lock so concurrent first
    callers await a single initialization instead of racing duplicate asset
    copies. ``lookup`` refuses to run before initialization succeeded.
    """

    def __init__(
        self,
        *,
        data_dir: Path,
        asset_path: Path,
        version: int = cfg.FORMS_INDEX_VERSION,
        chunk_size: int = cfg.FORMS_INDEX_CHUNK_SIZE,
        filename: str = cfg.FORMS_INDEX_FILENAME,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be greater than zero")
        self.data_dir = Path(data_dir)
        self.asset_path = Path(asset_path)
        self.version = int(version)
        self.chunk_size = int(chunk_size)
        self.database_path = self.data_dir / filename
        self.version_path = self.data_dir / f"{filename}{VERSION_SUFFIX}"
        self._init_lock = asyncio.Lock()
        self._ready = False

    @classmethod
    def from_settings(cls, settings: Optional[cfg.LexifeedSettings] = None) -> "FormIndexStore":
        active = settings or cfg.get_settings()
        asset = Path(active.forms_index_asset).expanduser()
        if not asset.is_absolute():
            asset = cfg.SCRIPT_DIR / asset
        return cls(
            data_dir=cfg.resolve_data_dir(active),
            asset_path=asset,
            version=active.forms_index_version,
            chunk_size=active.forms_index_chunk_size,
        )

    @property
    def is_ready(self) -> bool:
        return self._ready

    async def ensure_ready(self) -> None:
        """Install or refresh the local index copy if needed, exactly once."""

        if self._ready:
            return
        async with self._init_lock:
            if self._ready:
                return
            await asyncio.to_thread(self._prepare)
            self._ready = True

    def reset(self) -> None:
        """Forget the initialized state; the next ``ensure_ready`` re-checks the marker."""

        self._ready = False

    def _prepare(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        if self._needs_update():
            self._install_asset()
        try:
            self._validate_database()
        except InitializationError:
            # Force a fresh copy on the next attempt.
            self.version_path.unlink(missing_ok=True)
            raise

    def _stored_version(self) -> Optional[int]:
        try:
            raw = self.version_path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.warning("Unable to read forms index version marker: %s", exc)
            return None
        try:
            return int(raw)
        except ValueError:
            return None

    def _needs_update(self) -> bool:
        if not self.database_path.is_file():
            return True
        return self._stored_version() != self.version

    def _install_asset(self) -> None:
        if not self.asset_path.is_file():
            raise InitializationError(f"Forms index asset not found at {self.asset_path}")

        started = time.perf_counter()
        staging_path = self.database_path.with_name(f"{self.database_path.name}.tmp")
        try:
            shutil.copyfile(self.asset_path, staging_path)
            os.replace(staging_path, self.database_path)
            self.version_path.write_text(str(self.version), encoding="utf-8")
        except OSError as exc:
            staging_path.unlink(missing_ok=True)
            raise InitializationError(f"Failed to install forms index: {exc}") from exc

        logger.info(
            "Installed forms index version %s",
            self.version,
            extra={
                "event": "forms_index.installed",
                "path": str(self.database_path),
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )

    def _connect(self) -> sqlite3.Connection:
        uri = f"{self.database_path.resolve().as_uri()}?mode=ro"
        return sqlite3.connect(uri, uri=True, check_same_thread=False)

    def _validate_database(self) -> None:
        try:
            with closing(self._connect()) as connection:
                connection.execute("SELECT form, word_id FROM forms LIMIT 1").fetchall()
        except sqlite3.Error as exc:
            raise InitializationError(f"Forms index at {self.database_path} is unusable: {exc}") from exc

    def _query_chunk(self, chunk: Sequence[str], limit: int) -> List[int]:
        placeholders = ",".join("?" for _ in chunk)
        sql = f"SELECT word_id FROM forms WHERE form IN ({placeholders}) LIMIT ?"
        try:
            with closing(self._connect()) as connection:
                rows = connection.execute(sql, [*chunk, limit]).fetchall()
        except sqlite3.Error as exc:
            raise InitializationError(f"Forms index query failed: {exc}") from exc
        return [row[0] for row in rows if isinstance(row[0], int)]

    async def lookup(self, forms: Iterable[str], limit: int = cfg.DEFAULT_RESOLVE_LIMIT) -> List[int]:
        """Return up to ``limit`` unique word ids matching ``forms``.

        Chunk queries run concurrently; once ``limit`` ids are collected the
        merge stops adding, although every chunk query still completes.
        """

        if not self._ready:
            raise InitializationError("Forms index is not initialized; call ensure_ready() first")
        if limit <= 0:
            return []

        validated = list(dict.fromkeys(form for form in forms if is_valid_form(form)))
        if not validated:
            return []

        chunks = chunked(validated, self.chunk_size)
        results = await asyncio.gather(
            *(asyncio.to_thread(self._query_chunk, chunk, limit) for chunk in chunks)
        )

        ids: dict[int, None] = {}
        for rows in results:
            for word_id in rows:
                ids[word_id] = None
                if len(ids) >= limit:
                    break
            if len(ids) >= limit:
                break

        logger.debug(
            "Resolved %d word ids from %d forms",
            len(ids),
            len(validated),
            extra={"event": "forms_index.lookup", "chunks": len(chunks)},
        )
        return list(ids)


__all__ = ["FormIndexStore", "chunked"]
