#!/usr/bin/env python3
"""Build the bundled word-form index from a tab-separated word list.

Each input line holds ``form<TAB>word_id``. Forms are normalized the same
way captions are tokenized; lines whose form fails validation are skipped.

Usage:
    python scripts/build_forms_index.py forms.tsv
    python scripts/build_forms_index.py forms.tsv --output assets/forms_index.db

Remember to bump ``FORMS_INDEX_VERSION`` after replacing the bundled asset so
installed copies are refreshed.
"""

from __future__ import annotations

import argparse
import sqlite3
import sys
from pathlib import Path
from typing import Iterator, Tuple

# Ensure the project root is on sys.path so lexifeed can be imported.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_PROJECT_ROOT))

from lexifeed.config_manager import DEFAULT_FORMS_INDEX_ASSET  # noqa: E402
from lexifeed.vocabulary.normalization import normalize_form  # noqa: E402


def _read_pairs(source: Path) -> Iterator[Tuple[str, int]]:
    with source.open(encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            parts = line.split("\t")
            if len(parts) != 2:
                print(f"  line {line_number}: expected 2 columns, skipping", file=sys.stderr)
                continue
            form = normalize_form(parts[0])
            if form is None:
                continue
            try:
                word_id = int(parts[1])
            except ValueError:
                print(f"  line {line_number}: invalid word id {parts[1]!r}", file=sys.stderr)
                continue
            yield form, word_id


def build_index(source: Path, output: Path) -> int:
    """Write ``output`` from ``source`` and return the number of rows."""

    output.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = output.with_suffix(output.suffix + ".tmp")
    tmp_path.unlink(missing_ok=True)
    connection = sqlite3.connect(tmp_path)
    try:
        connection.execute("CREATE TABLE forms (form TEXT NOT NULL, word_id INTEGER NOT NULL)")
        rows = sorted(set(_read_pairs(source)))
        connection.executemany("INSERT INTO forms (form, word_id) VALUES (?, ?)", rows)
        connection.execute("CREATE INDEX idx_forms_form ON forms(form)")
        connection.commit()
    finally:
        connection.close()
    tmp_path.replace(output)
    return len(rows)


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("source", type=Path, help="Tab-separated form/word_id list")
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_FORMS_INDEX_ASSET,
        help="Destination SQLite file (default: %(default)s)",
    )
    args = parser.parse_args()

    if not args.source.is_file():
        print(f"ERROR: {args.source} does not exist", file=sys.stderr)
        return 1
    count = build_index(args.source, args.output)
    print(f"Wrote {count} forms to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
