"""Rank-quality metrics over the ids a search returned.

Binary metrics take the set of relevant ids; nDCG takes graded relevance
(``id -> grade``, grade 0 meaning not relevant). Every metric looks at the
first ``k`` ranked ids only and returns 0.0 when ``k`` is not positive.
"""
from __future__ import annotations

import math
from typing import Iterable, Mapping


def _relevance_flags(ranked_ids: list[str], relevant_ids: set[str], k: int) -> list[bool]:
    return [entry_id in relevant_ids for entry_id in ranked_ids[: max(k, 0)]]


def precision_at_k(ranked_ids: list[str], relevant_ids: set[str], k: int) -> float:
    flags = _relevance_flags(ranked_ids, relevant_ids, k)
    return sum(flags) / len(flags) if flags else 0.0


def recall_at_k(ranked_ids: list[str], relevant_ids: set[str], k: int) -> float:
    if not relevant_ids:
        return 0.0
    return sum(_relevance_flags(ranked_ids, relevant_ids, k)) / len(relevant_ids)


def hit_at_k(ranked_ids: list[str], relevant_ids: set[str], k: int) -> float:
    return float(any(_relevance_flags(ranked_ids, relevant_ids, k)))


def mrr_at_k(ranked_ids: list[str], relevant_ids: set[str], k: int) -> float:
    flags = _relevance_flags(ranked_ids, relevant_ids, k)
    return 1.0 / (flags.index(True) + 1) if True in flags else 0.0


def average_precision_at_k(ranked_ids: list[str], relevant_ids: set[str], k: int) -> float:
    """Mean of precision at each relevant rank, normalised by min(|relevant|, k)."""
    flags = _relevance_flags(ranked_ids, relevant_ids, k)
    denominator = min(len(relevant_ids), k)
    if denominator <= 0:
        return 0.0
    found = 0
    total = 0.0
    for rank, relevant in enumerate(flags, start=1):
        if relevant:
            found += 1
            total += found / rank
    return total / denominator


def _discounted_gain(grades: Iterable[int]) -> float:
    # Exponential gain, log2 rank discount.
    return sum((2**grade - 1) / math.log2(rank + 1) for rank, grade in enumerate(grades, start=1) if grade > 0)


def ndcg_at_k(ranked_ids: list[str], gains: Mapping[str, int], k: int) -> float:
    if k <= 0:
        return 0.0
    ideal = _discounted_gain(sorted(gains.values(), reverse=True)[:k])
    if not ideal:
        return 0.0
    actual = _discounted_gain(gains.get(entry_id, 0) for entry_id in ranked_ids[:k])
    return actual / ideal


def aggregate_mean(metrics: list[dict[str, float]]) -> dict[str, float]:
    """Average each metric over the runs that report it; keys come back sorted."""
    totals: dict[str, list[float]] = {}
    for run_metrics in metrics:
        for name, value in run_metrics.items():
            totals.setdefault(name, []).append(value)
    return {name: sum(values) / len(values) for name, values in sorted(totals.items())}


__all__ = [
    "aggregate_mean",
    "average_precision_at_k",
    "hit_at_k",
    "mrr_at_k",
    "ndcg_at_k",
    "precision_at_k",
    "recall_at_k",
]
