"""Scorer that weights keyword-field overlap above body overlap."""
from __future__ import annotations

import math
from collections import Counter
from typing import Sequence

from domain.entities import Entry, ScoredEntry
from domain.interfaces import Scorer, Tokenizer, TokenizedText
from infrastructure.scoring.field_tokens import EntryTokenCache, EntryTokens


def keyword_overlap(query_counts: Counter[str], tokens: EntryTokens) -> float:
    return float(sum(count * tokens.keyword_counts[token] for token, count in query_counts.items()))


def body_overlap(query_counts: Counter[str], tokens: EntryTokens, tf_cap: int) -> float:
    return float(sum(count * min(tokens.body_counts[token], tf_cap) for token, count in query_counts.items()))


class WeightedOverlapScorer(Scorer):
    """score = keyword_weight * keyword hits + body_weight * capped body hits."""

    def __init__(
        self,
        tokenizer: Tokenizer,
        *,
        keyword_weight: float = 3.0,
        body_weight: float = 1.0,
        body_tf_cap: int = 3,
    ) -> None:
        if not all(math.isfinite(weight) and weight >= 0 for weight in (keyword_weight, body_weight)):
            raise ValueError("Scoring weights must be finite and non-negative")
        if keyword_weight == 0 and body_weight == 0:
            raise ValueError("At least one scoring weight must be positive")
        if body_tf_cap < 1:
            raise ValueError("body_tf_cap must be at least 1")
        self._tokens = EntryTokenCache(tokenizer)
        self._keyword_weight = keyword_weight
        self._body_weight = body_weight
        self._body_tf_cap = body_tf_cap

    @property
    def name(self) -> str:
        return "weighted"

    def score(self, query: TokenizedText, entries: Sequence[Entry]) -> list[ScoredEntry]:
        scored: list[ScoredEntry] = []
        for entry in entries:
            tokens = self._tokens.get(entry)
            keyword_score = keyword_overlap(query.counts, tokens)
            body_score = body_overlap(query.counts, tokens, self._body_tf_cap)
            total = self._keyword_weight * keyword_score + self._body_weight * body_score
            scored.append(
                ScoredEntry(
                    entry=entry,
                    score=total,
                    breakdown={"keyword_score": keyword_score, "body_score": body_score},
                )
            )
        return scored


__all__ = ["WeightedOverlapScorer", "body_overlap", "keyword_overlap"]
