from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable
from uuid import uuid4

from application.evaluation.metrics import (
    aggregate_mean,
    average_precision_at_k,
    hit_at_k,
    mrr_at_k,
    ndcg_at_k,
    precision_at_k,
    recall_at_k,
)
from application.evaluation.models import CaseRunResult, EvaluationRun, TestSuite
from domain.entities import ScoredEntry, Selector
from domain.errors import EmptyQuery


SearchCallable = Callable[[str, Selector, int], list[ScoredEntry]]


def run_evaluation_suite(
    suite: TestSuite,
    search_fn: SearchCallable,
    *,
    top_k: int = 5,
    scorer: str = "weighted",
) -> EvaluationRun:
    case_results: list[CaseRunResult] = []

    for case in suite.test_cases:
        try:
            ranked = search_fn(case.query_text, case.selector, top_k)
        except EmptyQuery:
            ranked = []
        ranked_ids = [item.entry.id for item in ranked]

        relevant = {label.entry_id for label in case.relevance_labels if label.grade > 0}
        gains = {label.entry_id: int(label.grade) for label in case.relevance_labels}

        case_results.append(
            CaseRunResult(
                test_case_id=case.id,
                ranked_entry_ids=ranked_ids,
                scores=[item.score for item in ranked],
                metrics={
                    f"precision@{top_k}": precision_at_k(ranked_ids, relevant, top_k),
                    f"recall@{top_k}": recall_at_k(ranked_ids, relevant, top_k),
                    f"hit@{top_k}": hit_at_k(ranked_ids, relevant, top_k),
                    f"mrr@{top_k}": mrr_at_k(ranked_ids, relevant, top_k),
                    f"map@{top_k}": average_precision_at_k(ranked_ids, relevant, top_k),
                    f"ndcg@{top_k}": ndcg_at_k(ranked_ids, gains, top_k),
                },
            )
        )

    return EvaluationRun(
        id=str(uuid4()),
        test_suite_id=suite.id,
        scorer=scorer,
        top_k=top_k,
        created_at=datetime.now(timezone.utc),
        case_results=case_results,
        aggregate_metrics=aggregate_mean([result.metrics for result in case_results]),
    )
