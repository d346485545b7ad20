"""Abstract interfaces for the DesignKB search pipeline."""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from domain.entities import Corpus, Entry, PartitionFamily, ScoredEntry


@dataclass(frozen=True, slots=True)
class TokenizedText:
    """Normalized tokens in original order plus their counts."""

    tokens: tuple[str, ...]
    counts: Counter[str] = field(default_factory=Counter, compare=False, hash=False)

    def __bool__(self) -> bool:
        return bool(self.tokens)


class CorpusLoader(ABC):
    """Materializes every partition of a family from static storage."""

    @abstractmethod
    def load(self, family: PartitionFamily) -> Corpus:
        """Return the full corpus for the family or raise CorpusUnavailable."""


class Tokenizer(ABC):
    """Turns raw text into comparable tokens."""

    @abstractmethod
    def tokenize(self, text: str) -> TokenizedText:
        """Return normalized tokens for the text."""


class Scorer(ABC):
    """Computes relevance of entries against a tokenized query."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the stable identifier of this scoring strategy."""

    @abstractmethod
    def score(self, query: TokenizedText, entries: Sequence[Entry]) -> list[ScoredEntry]:
        """Score every candidate entry, zero scores included."""


class Reranker(ABC):
    """Orders scored entries into the final ranking."""

    @abstractmethod
    def rerank(self, results: Iterable[ScoredEntry]) -> list[ScoredEntry]:
        """Return the ranked list of relevant entries."""


__all__ = [
    "TokenizedText",
    "CorpusLoader",
    "Tokenizer",
    "Scorer",
    "Reranker",
]
