"""Build evaluation suites and run them against a wired container."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping
from uuid import uuid4

from application.evaluation.models import EvaluationRun, RelevanceLabel, TestCase, TestSuite
from application.evaluation.runner import run_evaluation_suite
from application.services.partition_selector import resolve_selector
from application.use_cases.search import search
from domain.entities import ScoredEntry, Selector
from domain.errors import DesignKBError
from infrastructure.config import Container


def create_test_suite(name: str, description: str = "") -> TestSuite:
    return TestSuite(id=str(uuid4()), name=name, description=description)


def create_test_case(
    query_text: str,
    selector: Selector,
    relevant_entry_ids: list[str],
    *,
    graded_relevance: dict[str, int] | None = None,
) -> TestCase:
    labels = [
        RelevanceLabel(entry_id=entry_id, grade=(graded_relevance or {}).get(entry_id, 1))
        for entry_id in relevant_entry_ids
    ]
    return TestCase(id=str(uuid4()), query_text=query_text, selector=selector, relevance_labels=labels)


def load_test_suite(path: str | Path) -> TestSuite:
    """Read a suite from JSON.

    Expected shape::

        {"name": "...", "cases": [
            {"query": "dark glass", "domain": "style", "relevant": ["glassmorphism"]},
            {"query": "forms", "stack": "react", "relevant": {"react-forms": 2}}
        ]}
    """

    suite_path = Path(path)
    try:
        payload = json.loads(suite_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError(f"Cannot read test suite {suite_path}: {exc}") from exc
    if not isinstance(payload, dict) or not isinstance(payload.get("cases"), list):
        raise ValueError(f"Test suite {suite_path} must be an object with a 'cases' list")

    suite = create_test_suite(str(payload.get("name", suite_path.stem)), str(payload.get("description", "")))
    for number, raw_case in enumerate(payload["cases"], start=1):
        suite.test_cases.append(_parse_case(raw_case, number))
    return suite


def _parse_case(raw_case: Any, number: int) -> TestCase:
    if not isinstance(raw_case, Mapping) or "query" not in raw_case:
        raise ValueError(f"Case {number} must be an object with a 'query' field")
    try:
        selector = resolve_selector(domain=raw_case.get("domain"), stack=raw_case.get("stack"))
    except DesignKBError as exc:
        raise ValueError(f"Case {number}: {exc}") from exc

    relevant = raw_case.get("relevant", [])
    if isinstance(relevant, Mapping):
        try:
            grades = {str(entry_id): int(grade) for entry_id, grade in relevant.items()}
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Case {number}: relevance grades must be integers") from exc
        return create_test_case(str(raw_case["query"]), selector, list(grades), graded_relevance=grades)
    if isinstance(relevant, list):
        return create_test_case(str(raw_case["query"]), selector, [str(entry_id) for entry_id in relevant])
    raise ValueError(f"Case {number}: 'relevant' must be a list or an object of grades")


def run_suite(suite: TestSuite, container: Container, *, top_k: int = 5) -> EvaluationRun:
    def _search_fn(query_text: str, selector: Selector, limit: int) -> list[ScoredEntry]:
        response = search(
            query_text,
            selector=selector,
            corpus_loader=container.corpus_loader,
            tokenizer=container.tokenizer,
            scorer=container.scorer,
            reranker=container.reranker,
            top_n=limit,
        )
        return response.results

    return run_evaluation_suite(suite, _search_fn, top_k=top_k, scorer=container.scorer.name)


__all__ = [
    "create_test_suite",
    "create_test_case",
    "load_test_suite",
    "run_suite",
]
