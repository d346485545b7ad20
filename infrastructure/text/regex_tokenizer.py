"""Tokenizer that case-folds text and splits it on non-alphanumeric characters."""
from __future__ import annotations

import re
from collections import Counter
from typing import Iterable

from domain.interfaces import Tokenizer, TokenizedText

_TOKEN_RE = re.compile(r"[^\W_]+")

ENGLISH_STOPWORDS: frozenset[str] = frozenset(
    {
        "a", "an", "and", "are", "as", "at", "be", "but", "by", "for", "from",
        "if", "in", "into", "is", "it", "its", "of", "on", "or", "so", "that",
        "the", "their", "then", "there", "these", "this", "to", "was", "were",
        "will", "with",
    }
)


class RegexTokenizer(Tokenizer):
    """Lower-cases text and keeps runs of letters and digits."""

    def __init__(self, stopwords: Iterable[str] | None = ENGLISH_STOPWORDS) -> None:
        self._stopwords = frozenset(stopwords or ())

    @property
    def stopwords(self) -> frozenset[str]:
        return self._stopwords

    def tokenize(self, text: str) -> TokenizedText:
        """Drop stopwords unless the text contains nothing else."""
        raw = tuple(_TOKEN_RE.findall(text.casefold()))
        tokens = tuple(token for token in raw if token not in self._stopwords) or raw
        return TokenizedText(tokens=tokens, counts=Counter(tokens))


__all__ = ["ENGLISH_STOPWORDS", "RegexTokenizer"]
