"""Resolve the requested domain or stack into a validated partition selector."""
from __future__ import annotations

from domain.entities import PARTITION_NAMES, Corpus, Entry, PartitionFamily, Selector
from domain.errors import CorpusUnavailable, InvalidSelector, UnknownPartition


def resolve_selector(domain: str | None = None, stack: str | None = None) -> Selector:
    """Return the selector for exactly one of ``domain`` or ``stack``."""

    if domain is not None and stack is not None:
        raise InvalidSelector("--domain and --stack are mutually exclusive; supply exactly one")
    if domain is None and stack is None:
        raise InvalidSelector("one of --domain or --stack is required")

    family, name = (PartitionFamily.DOMAIN, domain) if domain is not None else (PartitionFamily.STACK, stack)
    assert name is not None
    valid = PARTITION_NAMES[family].values()
    if name not in valid:
        raise UnknownPartition(family.value, name, valid)
    return Selector(family=family, partition=name)


def select_partition(corpus: Corpus, selector: Selector) -> tuple[Entry, ...]:
    """Narrow ``corpus`` to the entries of the selected partition."""

    if corpus.family is not selector.family:
        raise UnknownPartition(selector.family.value, selector.partition, corpus.partitions())
    if selector.partition not in corpus:
        raise CorpusUnavailable(f"{selector.describe()} is missing from the loaded corpus")
    return corpus.entries(selector.partition)


__all__ = ["resolve_selector", "select_partition"]
