"""Use case that ranks knowledge-base entries of one partition against a query."""
from __future__ import annotations

import logging

from application.services.partition_selector import select_partition
from domain.entities import Query, SearchResponse, Selector
from domain.errors import EmptyQuery, UsageError
from domain.interfaces import CorpusLoader, Reranker, Scorer, Tokenizer

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 5


def search(
    query_text: str,
    *,
    selector: Selector,
    corpus_loader: CorpusLoader,
    tokenizer: Tokenizer,
    scorer: Scorer,
    reranker: Reranker,
    top_n: int = DEFAULT_TOP_N,
) -> SearchResponse:
    """Return at most ``top_n`` entries of the selected partition, best first."""

    if isinstance(top_n, bool) or not isinstance(top_n, int) or top_n < 1:
        raise UsageError(f"result count must be a positive integer, got {top_n!r}")

    query = Query(text=query_text, selector=selector, top_n=top_n)
    query_tokens = tokenizer.tokenize(query_text)
    if not query_tokens:
        raise EmptyQuery()

    corpus = corpus_loader.load(selector.family)
    candidates = select_partition(corpus, selector)

    ranked = reranker.rerank(scorer.score(query_tokens, candidates))
    results = ranked[:top_n]
    logger.info(
        "Query %r on %s: %d candidates, %d matches, %d returned (scorer=%s)",
        query_text,
        selector.describe(),
        len(candidates),
        len(ranked),
        len(results),
        scorer.name,
    )
    return SearchResponse(query=query, results=results, candidates=len(candidates))


__all__ = ["DEFAULT_TOP_N", "search"]
