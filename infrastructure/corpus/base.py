"""Shared validation for file-backed corpus loaders."""
from __future__ import annotations

import logging
import re
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from domain.entities import PARTITION_NAMES, Corpus, Entry, PartitionFamily
from domain.errors import CorpusUnavailable
from domain.interfaces import CorpusLoader

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("id", "title", "keywords", "body")
FAMILY_DIRECTORIES: Mapping[PartitionFamily, str] = MappingProxyType(
    {
        PartitionFamily.DOMAIN: "domains",
        PartitionFamily.STACK: "stacks",
    }
)
DEFAULT_DATA_ROOT = Path(__file__).resolve().parent / "data"

_KEYWORD_SPLIT_RE = re.compile(r"[;,]")
_SCALAR_TYPES = (str, int, float)


def _is_scalar(value: Any) -> bool:
    return isinstance(value, _SCALAR_TYPES) and not isinstance(value, bool)


def split_keywords(raw: str | Iterable[str] | None) -> tuple[str, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str):
        items = _KEYWORD_SPLIT_RE.split(raw)
    elif isinstance(raw, (list, tuple)) and all(_is_scalar(item) for item in raw):
        items = [str(item) for item in raw]
    else:
        raise ValueError(f"keywords must be a string or a list of strings, got {type(raw).__name__}")
    return tuple(item.strip() for item in items if item.strip())


def _field_type_problem(record: Mapping[str, Any]) -> str | None:
    for name in ("id", "title", "body"):
        if not _is_scalar(record[name]):
            return f"field '{name}' must be a string, got {type(record[name]).__name__}"
    keywords = record["keywords"]
    if isinstance(keywords, str):
        return None
    if not isinstance(keywords, (list, tuple)) or not all(_is_scalar(item) for item in keywords):
        return f"field 'keywords' must be a string or a list of strings, got {type(keywords).__name__}"
    return None


class FileCorpusLoader(CorpusLoader):
    """Loads one file per partition from ``<data_root>/<family dir>/<partition>.<suffix>``."""

    suffix: str = ""

    def __init__(self, data_root: str | Path = DEFAULT_DATA_ROOT) -> None:
        self._data_root = Path(data_root)

    @property
    def data_root(self) -> Path:
        return self._data_root

    def partition_path(self, family: PartitionFamily, partition: str) -> Path:
        return self._data_root / FAMILY_DIRECTORIES[family] / f"{partition}{self.suffix}"

    def load(self, family: PartitionFamily) -> Corpus:
        family_dir = self._data_root / FAMILY_DIRECTORIES[family]
        if not family_dir.is_dir():
            raise CorpusUnavailable(f"{family.value} corpus directory not found: {family_dir}")

        partitions: dict[str, tuple[Entry, ...]] = {}
        for partition in PARTITION_NAMES[family].values():
            path = self.partition_path(family, partition)
            if not path.is_file():
                raise CorpusUnavailable(f"missing corpus file for {family.value} '{partition}': {path}")
            try:
                records = self.read_records(path)
            except (OSError, UnicodeDecodeError, ValueError) as exc:
                raise CorpusUnavailable(f"cannot read corpus file {path}: {exc}") from exc
            partitions[partition] = self._build_entries(partition, records, path)
            logger.debug("Loaded %d entries for %s '%s' from %s", len(partitions[partition]), family.value, partition, path)

        corpus = Corpus(family=family, partition_map=partitions)
        logger.info("Loaded %s corpus: %d partitions, %d entries", family.value, len(partitions), len(corpus))
        return corpus

    def read_records(self, path: Path) -> list[Mapping[str, Any]]:
        """Return raw records of a partition file; raise ValueError when unparsable."""
        raise NotImplementedError

    @staticmethod
    def _build_entries(partition: str, records: list[Mapping[str, Any]], path: Path) -> tuple[Entry, ...]:
        if not records:
            raise CorpusUnavailable(f"corpus file has no entries: {path}")

        entries: list[Entry] = []
        seen_ids: set[str] = set()
        for position, record in enumerate(records):
            missing = [name for name in REQUIRED_FIELDS if record.get(name) is None]
            if missing:
                raise CorpusUnavailable(f"{path}: entry {position + 1} is missing field(s) {', '.join(missing)}")
            problem = _field_type_problem(record)
            if problem:
                raise CorpusUnavailable(f"{path}: entry {position + 1} {problem}")
            entry_id = str(record["id"]).strip()
            if not entry_id:
                raise CorpusUnavailable(f"{path}: entry {position + 1} has a blank id")
            if entry_id in seen_ids:
                raise CorpusUnavailable(f"{path}: duplicate entry id '{entry_id}'")
            seen_ids.add(entry_id)

            metadata = {
                str(key): str(value).strip()
                for key, value in record.items()
                if key not in REQUIRED_FIELDS and value is not None and str(value).strip()
            }
            entries.append(
                Entry(
                    id=entry_id,
                    partition_key=partition,
                    title=str(record["title"]).strip(),
                    keywords=split_keywords(record["keywords"]),
                    body=str(record["body"]).strip(),
                    position=position,
                    metadata=MappingProxyType(metadata),
                )
            )
        return tuple(entries)


__all__ = ["DEFAULT_DATA_ROOT", "FAMILY_DIRECTORIES", "FileCorpusLoader", "REQUIRED_FIELDS", "split_keywords"]
