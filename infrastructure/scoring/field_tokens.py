"""Per-entry token counts, computed once per entry and reused across queries."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from domain.entities import Entry
from domain.interfaces import Tokenizer


@dataclass(frozen=True, slots=True)
class EntryTokens:
    keyword_counts: Counter[str]
    body_counts: Counter[str]
    all_tokens: tuple[str, ...]


class EntryTokenCache:
    """Tokenizes the keyword field (title plus keywords) and the body of each entry."""

    def __init__(self, tokenizer: Tokenizer) -> None:
        self._tokenizer = tokenizer
        self._cache: dict[tuple[str, str], EntryTokens] = {}

    def get(self, entry: Entry) -> EntryTokens:
        key = (entry.partition_key, entry.id)
        cached = self._cache.get(key)
        if cached is None:
            keyword_text = " ".join((entry.title, *entry.keywords))
            keyword_tokens = self._tokenizer.tokenize(keyword_text)
            body_tokens = self._tokenizer.tokenize(entry.body)
            cached = EntryTokens(
                keyword_counts=keyword_tokens.counts,
                body_counts=body_tokens.counts,
                all_tokens=keyword_tokens.tokens + body_tokens.tokens,
            )
            self._cache[key] = cached
        return cached


__all__ = ["EntryTokenCache", "EntryTokens"]
