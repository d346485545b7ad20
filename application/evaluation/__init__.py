from application.evaluation.metrics import (
    aggregate_mean,
    average_precision_at_k,
    hit_at_k,
    mrr_at_k,
    ndcg_at_k,
    precision_at_k,
    recall_at_k,
)
from application.evaluation.models import (
    CaseRunResult,
    EvaluationRun,
    RelevanceLabel,
    TestCase,
    TestSuite,
)
from application.evaluation.runner import run_evaluation_suite

__all__ = [
    "RelevanceLabel",
    "TestCase",
    "TestSuite",
    "CaseRunResult",
    "EvaluationRun",
    "precision_at_k",
    "recall_at_k",
    "hit_at_k",
    "mrr_at_k",
    "average_precision_at_k",
    "ndcg_at_k",
    "aggregate_mean",
    "run_evaluation_suite",
]
