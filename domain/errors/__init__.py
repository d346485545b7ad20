"""Error taxonomy for the DesignKB search tool."""
from __future__ import annotations

from typing import Sequence

EXIT_OK = 0
EXIT_INVALID_INVOCATION = 1
EXIT_CORPUS_UNAVAILABLE = 2


class DesignKBError(Exception):
    """Base class for every failure reported to the caller."""

    exit_code: int = EXIT_INVALID_INVOCATION


class UsageError(DesignKBError):
    """The command line or configuration is malformed."""


class InvalidSelector(DesignKBError):
    """Zero or both of the partition selectors were supplied."""


class UnknownPartition(DesignKBError):
    """The requested domain or stack name is not part of the enumerated set."""

    def __init__(self, family: str, name: str, valid_options: Sequence[str]) -> None:
        self.family = family
        self.name = name
        self.valid_options = list(valid_options)
        super().__init__(
            f"unknown {family} '{name}'; valid {family} values: {', '.join(self.valid_options)}"
        )


class EmptyQuery(DesignKBError):
    """The query normalizes to no searchable tokens."""

    def __init__(self, message: str = "query is empty after normalization") -> None:
        super().__init__(message)


class CorpusUnavailable(DesignKBError):
    """Static corpus data is missing, unreadable or malformed."""

    exit_code = EXIT_CORPUS_UNAVAILABLE


__all__ = [
    "EXIT_OK",
    "EXIT_INVALID_INVOCATION",
    "EXIT_CORPUS_UNAVAILABLE",
    "DesignKBError",
    "UsageError",
    "InvalidSelector",
    "UnknownPartition",
    "EmptyQuery",
    "CorpusUnavailable",
]
