"""Reranker that sorts by score with a deterministic tie-break."""
from __future__ import annotations

from typing import Iterable

from domain.entities import ScoredEntry
from domain.interfaces import Reranker


class StableReranker(Reranker):
    """Drop zero scores, then order by score desc, declared position, id."""

    def rerank(self, results: Iterable[ScoredEntry]) -> list[ScoredEntry]:
        relevant = [result for result in results if result.score > 0]
        return sorted(relevant, key=lambda result: (-result.score, result.entry.position, result.entry.id))


__all__ = ["StableReranker"]
