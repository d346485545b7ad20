"""Command-line front-end: search the design knowledge base by domain or stack."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn, Sequence

from application.services.partition_selector import resolve_selector
from application.use_cases.search import search
from domain.entities import Domain, Stack
from domain.errors import EXIT_OK, DesignKBError, UsageError
from infrastructure.config import ContainerConfig, build_default_container
from ui.formatting import render_json, render_text
from ui.logging_utils import setup_logging

logger = logging.getLogger(__name__)


class _RaisingArgumentParser(argparse.ArgumentParser):
    """Report usage problems as UsageError so they share the tool's exit codes."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got '{value}'") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got '{value}'")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = _RaisingArgumentParser(
        prog="designkb-search",
        description="Search curated UI/UX guidance by design domain or technology stack.",
        epilog=f"domains: {', '.join(Domain.values())}\nstacks: {', '.join(Stack.values())}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("query", nargs="+", help="Free-text query; several words are joined with spaces.")
    parser.add_argument("--domain", metavar="NAME", help="Design domain to search.")
    parser.add_argument("--stack", metavar="NAME", help="Technology stack to search.")
    parser.add_argument(
        "-n",
        "--max-results",
        dest="top_n",
        type=_positive_int,
        metavar="COUNT",
        help="Maximum number of results (default: 5, or DESIGNKB_TOP_N).",
    )
    parser.add_argument("--json", action="store_true", help="Print results as JSON.")
    parser.add_argument("--data-dir", metavar="PATH", help="Directory holding the domains/ and stacks/ corpus files.")
    parser.add_argument("--format", dest="corpus_format", choices=("csv", "json"), help="Corpus file format.")
    parser.add_argument("--scorer", choices=("weighted", "bm25"), help="Relevance scoring strategy.")
    return parser


def run(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    selector = resolve_selector(domain=args.domain, stack=args.stack)

    try:
        config = ContainerConfig.from_env().with_overrides(
            data_root=args.data_dir,
            corpus_format=args.corpus_format,
            scorer=args.scorer,
        )
        container = build_default_container(config)
    except ValueError as exc:
        raise UsageError(str(exc)) from exc

    response = search(
        " ".join(args.query),
        selector=selector,
        corpus_loader=container.corpus_loader,
        tokenizer=container.tokenizer,
        scorer=container.scorer,
        reranker=container.reranker,
        top_n=args.top_n or container.default_top_n,
    )
    print(render_json(response) if args.json else render_text(response))
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    setup_logging()
    try:
        return run(argv)
    except DesignKBError as exc:
        logger.debug("Search failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return exc.exit_code


if __name__ == "__main__":
    sys.exit(main())
