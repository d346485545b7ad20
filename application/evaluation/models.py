from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from domain.entities import Selector


@dataclass(slots=True)
class RelevanceLabel:
    entry_id: str
    grade: int = 1


@dataclass(slots=True)
class TestCase:
    id: str
    query_text: str
    selector: Selector
    relevance_labels: list[RelevanceLabel] = field(default_factory=list)


@dataclass(slots=True)
class TestSuite:
    id: str
    name: str
    description: str = ""
    test_cases: list[TestCase] = field(default_factory=list)


@dataclass(slots=True)
class CaseRunResult:
    test_case_id: str
    ranked_entry_ids: list[str]
    scores: list[float] = field(default_factory=list)
    metrics: dict[str, float] = field(default_factory=dict)


@dataclass(slots=True)
class EvaluationRun:
    id: str
    test_suite_id: str
    scorer: str
    top_k: int
    created_at: datetime
    case_results: list[CaseRunResult] = field(default_factory=list)
    aggregate_metrics: dict[str, float] = field(default_factory=dict)
