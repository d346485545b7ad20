"""Render search responses as plain text or JSON."""
from __future__ import annotations

import json
import textwrap

from domain.entities import ScoredEntry, SearchResponse

BODY_WIDTH = 88


def render_text(response: SearchResponse) -> str:
    query = response.query
    where = query.selector.describe()
    if not response.results:
        return f'No matches for "{query.text}" in {where} ({response.candidates} entries searched).'

    lines = [f'Found {len(response.results)} result(s) for "{query.text}" in {where}:']
    for rank, result in enumerate(response.results, start=1):
        lines.append("")
        lines.extend(_render_result(rank, result))
    return "\n".join(lines)


def _render_result(rank: int, result: ScoredEntry) -> list[str]:
    entry = result.entry
    block = [f"[{rank}] {entry.title} ({entry.id})  score={result.score:.2f}"]
    if entry.keywords:
        block.append(f"    Keywords: {', '.join(entry.keywords)}")
    block.extend(
        textwrap.wrap(entry.body, width=BODY_WIDTH, initial_indent="    ", subsequent_indent="    ")
    )
    for key, value in entry.metadata.items():
        block.append(f"    {key.replace('_', ' ').capitalize()}: {value}")
    return block


def render_json(response: SearchResponse) -> str:
    query = response.query
    payload = {
        "query": query.text,
        "family": query.selector.family.value,
        "partition": query.selector.partition,
        "top_n": query.top_n,
        "count": len(response.results),
        "results": [
            {
                "id": result.entry.id,
                "title": result.entry.title,
                "keywords": list(result.entry.keywords),
                "body": result.entry.body,
                "metadata": dict(result.entry.metadata),
                "score": round(result.score, 6),
                "breakdown": {key: round(value, 6) for key, value in result.breakdown.items()},
            }
            for result in response.results
        ],
    }
    return json.dumps(payload, ensure_ascii=False, indent=2)


__all__ = ["render_json", "render_text"]
