import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Iterable, Tuple

import pytest

from lexifeed import config_manager as cfg

DEFAULT_FORMS = (
    ("run", 1),
    ("running", 1),
    ("ran", 1),
    ("late", 21),
    ("home", 22),
    ("don't", 41),
    ("well-known", 47),
)


def write_forms_db(path: Path, rows: Iterable[Tuple[str, int]]) -> Path:
    """Create a forms index SQLite file at ``path`` holding ``rows``."""

    path.parent.mkdir(parents=True, exist_ok=True)
    with closing(sqlite3.connect(path)) as connection:
        connection.execute("CREATE TABLE forms (form TEXT NOT NULL, word_id INTEGER NOT NULL)")
        connection.executemany("INSERT INTO forms (form, word_id) VALUES (?, ?)", list(rows))
        connection.execute("CREATE INDEX idx_forms_form ON forms(form)")
        connection.commit()
    return path


@pytest.fixture
def forms_asset(tmp_path: Path) -> Path:
    return write_forms_db(tmp_path / "asset" / "forms_index.db", DEFAULT_FORMS)


@pytest.fixture
def forms_data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path: Path):
    for name in (
        "YANDEX_TRANSLATE_API_KEY",
        "YANDEX_FOLDER_ID",
        "MYMEMORY_CONTACT_EMAILS",
        "YANDEX_DICT_KEY",
        "LEXIFEED_DATA_DIR",
        "LEXIFEED_FORMS_INDEX_ASSET",
        "LEXIFEED_FORMS_INDEX_VERSION",
        "LEXIFEED_TRANSLATION_CACHE_SIZE",
        "LEXIFEED_TRANSLATION_TIMEOUT",
        "LEXIFEED_API_HOST",
        "LEXIFEED_API_PORT",
        "LEXIFEED_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(
        "lexifeed.config_manager.loader.DEFAULT_LOCAL_CONFIG_PATH", tmp_path / "missing.local.json"
    )
    cfg.reset_settings()
    yield
    cfg.reset_settings()
