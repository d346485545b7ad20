"""BM25 index cached per partition so repeated queries reuse it."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from rank_bm25 import BM25Okapi

from domain.entities import Entry


@dataclass(slots=True)
class _State:
    index: BM25Okapi | None
    entry_ids: list[str]
    fingerprint: str


class BM25Index:
    """Caches a BM25 index, rebuilding it only when the candidate entries change."""

    def __init__(self) -> None:
        self._state = _State(index=None, entry_ids=[], fingerprint="")

    def update_entries(self, entries: Sequence[Entry], documents: Sequence[Sequence[str]]) -> None:
        """Index ``documents[i]`` (pre-tokenized) as the text of ``entries[i]``."""
        fingerprint = self._fingerprint(entries)
        if fingerprint == self._state.fingerprint:
            return
        corpus = [list(tokens) for tokens in documents]
        if not entries or not any(corpus):
            self._state = _State(index=None, entry_ids=[], fingerprint=fingerprint)
            return
        self._state = _State(
            index=BM25Okapi(corpus),
            entry_ids=[entry.id for entry in entries],
            fingerprint=fingerprint,
        )

    def scores(self, query_tokens: Sequence[str]) -> dict[str, float]:
        if self._state.index is None or not query_tokens:
            return {}
        values = self._state.index.get_scores(list(query_tokens))
        return {entry_id: float(score) for entry_id, score in zip(self._state.entry_ids, values)}

    @staticmethod
    def _fingerprint(entries: Sequence[Entry]) -> str:
        parts = [f"{entry.partition_key}/{entry.id}:{len(entry.body)}:{len(entry.keywords)}" for entry in entries]
        return "|".join(sorted(parts))


__all__ = ["BM25Index"]
