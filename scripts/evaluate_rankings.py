"""Measure ranking quality of the knowledge base against a labelled query suite."""
from __future__ import annotations

import argparse
import sys

from application.evaluation.service import load_test_suite, run_suite
from domain.errors import DesignKBError
from infrastructure.config import ContainerConfig, build_default_container
from ui.logging_utils import setup_logging


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--suite", required=True, help="JSON file with labelled queries.")
    parser.add_argument("-k", "--top-k", type=int, default=5, help="Cut-off for the metrics (default: 5).")
    parser.add_argument("--scorer", choices=("weighted", "bm25"), help="Scoring strategy to evaluate.")
    parser.add_argument("--data-dir", help="Corpus directory (default: bundled data).")
    parser.add_argument("--per-case", action="store_true", help="Also print metrics for each query.")
    return parser.parse_args()


def main() -> int:
    setup_logging()
    args = parse_args()
    if args.top_k < 1:
        print("error: --top-k must be a positive integer", file=sys.stderr)
        return 1

    try:
        suite = load_test_suite(args.suite)
        config = ContainerConfig.from_env().with_overrides(scorer=args.scorer, data_root=args.data_dir)
        container = build_default_container(config)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    try:
        run = run_suite(suite, container, top_k=args.top_k)
    except DesignKBError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return exc.exit_code

    print(f"Suite: {suite.name} ({len(suite.test_cases)} cases), scorer={run.scorer}")
    if args.per_case:
        for case, result in zip(suite.test_cases, run.case_results):
            summary = ", ".join(f"{name}={value:.3f}" for name, value in result.metrics.items())
            print(f"  {case.query_text!r} [{case.selector.describe()}]: {summary}")
    for name, value in run.aggregate_metrics.items():
        print(f"{name}: {value:.3f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
