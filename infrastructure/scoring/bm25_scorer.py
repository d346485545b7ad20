"""Scorer combining keyword-field hits with Okapi BM25 over the whole entry."""
from __future__ import annotations

import logging
import math
from typing import Sequence

from application.services.bm25_index import BM25Index
from domain.entities import Entry, ScoredEntry
from domain.interfaces import Scorer, Tokenizer, TokenizedText
from infrastructure.scoring.field_tokens import EntryTokenCache
from infrastructure.scoring.weighted_overlap_scorer import body_overlap, keyword_overlap

logger = logging.getLogger(__name__)


class Bm25Scorer(Scorer):
    """keyword_weight * keyword hits + max(BM25, 0); entries without any overlap score 0."""

    def __init__(self, tokenizer: Tokenizer, *, keyword_weight: float = 3.0) -> None:
        if not math.isfinite(keyword_weight) or keyword_weight < 0:
            raise ValueError("Scoring weights must be finite and non-negative")
        self._tokens = EntryTokenCache(tokenizer)
        self._index = BM25Index()
        self._keyword_weight = keyword_weight

    @property
    def name(self) -> str:
        return "bm25"

    def score(self, query: TokenizedText, entries: Sequence[Entry]) -> list[ScoredEntry]:
        entry_tokens = [self._tokens.get(entry) for entry in entries]
        self._index.update_entries(entries, [tokens.all_tokens for tokens in entry_tokens])
        bm25_scores = self._index.scores(query.tokens)

        scored: list[ScoredEntry] = []
        for entry, tokens in zip(entries, entry_tokens):
            keyword_score = keyword_overlap(query.counts, tokens)
            overlap = keyword_score + body_overlap(query.counts, tokens, tf_cap=1)
            bm25_score = max(bm25_scores.get(entry.id, 0.0), 0.0) if overlap else 0.0
            scored.append(
                ScoredEntry(
                    entry=entry,
                    score=self._keyword_weight * keyword_score + bm25_score,
                    breakdown={"keyword_score": keyword_score, "bm25_score": bm25_score},
                )
            )
        logger.debug("BM25 scored %d entries", len(scored))
        return scored


__all__ = ["Bm25Scorer"]
