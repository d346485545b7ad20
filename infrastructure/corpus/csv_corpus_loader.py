"""Corpus loader for CSV partition files."""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, Mapping

from infrastructure.corpus.base import REQUIRED_FIELDS, FileCorpusLoader


class CsvCorpusLoader(FileCorpusLoader):
    """Reads ``id,title,keywords,body[,extra...]`` CSV files with a header row."""

    suffix = ".csv"

    def read_records(self, path: Path) -> list[Mapping[str, Any]]:
        with path.open("r", encoding="utf-8", newline="") as handle:
            reader = csv.DictReader(handle)
            records: list[Mapping[str, Any]] = []
            try:
                header = reader.fieldnames or []
                missing = [name for name in REQUIRED_FIELDS if name not in header]
                if missing:
                    raise ValueError(f"header lacks required column(s) {', '.join(missing)}")
                for row in reader:
                    if None in row:
                        raise ValueError(f"line {reader.line_num} has more fields than the header")
                    if not any((value or "").strip() for value in row.values()):
                        continue
                    records.append(row)
            except csv.Error as exc:
                raise ValueError(f"line {reader.line_num}: {exc}") from exc
        return records


__all__ = ["CsvCorpusLoader"]
