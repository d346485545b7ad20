"""Corpus loader backed by Python mappings."""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Sequence

from domain.entities import Corpus, Entry, PartitionFamily
from domain.errors import CorpusUnavailable
from domain.interfaces import CorpusLoader
from infrastructure.corpus.base import split_keywords


class InMemoryCorpusLoader(CorpusLoader):
    """Builds corpora from ``{family: {partition: [record, ...]}}`` without touching disk."""

    def __init__(self, families: Mapping[PartitionFamily, Mapping[str, Sequence[Mapping[str, Any]]]]) -> None:
        self._corpora: dict[PartitionFamily, Corpus] = {}
        for family, partitions in families.items():
            built = {
                partition: tuple(self._to_entry(partition, position, record) for position, record in enumerate(records))
                for partition, records in partitions.items()
            }
            self._corpora[family] = Corpus(family=family, partition_map=built)

    def load(self, family: PartitionFamily) -> Corpus:
        try:
            return self._corpora[family]
        except KeyError as exc:
            raise CorpusUnavailable(f"no {family.value} corpus configured") from exc

    @staticmethod
    def _to_entry(partition: str, position: int, record: Mapping[str, Any]) -> Entry:
        return Entry(
            id=str(record["id"]),
            partition_key=partition,
            title=str(record.get("title", record["id"])),
            keywords=split_keywords(record.get("keywords")),
            body=str(record.get("body", "")),
            position=position,
            metadata=MappingProxyType(dict(record.get("metadata", {}))),
        )


__all__ = ["InMemoryCorpusLoader"]
