"""Corpus loader for JSON partition files."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from infrastructure.corpus.base import FileCorpusLoader


class JsonCorpusLoader(FileCorpusLoader):
    """Reads a JSON array of entry objects per partition."""

    suffix = ".json"

    def read_records(self, path: Path) -> list[Mapping[str, Any]]:
        payload = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
            raise ValueError("expected a JSON array of objects")
        return payload


__all__ = ["JsonCorpusLoader"]
