"""Domain entities for the DesignKB search tool."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class PartitionFamily(str, Enum):
    """The two disjoint corpus families a query can target."""

    DOMAIN = "domain"
    STACK = "stack"


class _PartitionName(str, Enum):
    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


class Domain(_PartitionName):
    """Design knowledge categories."""

    STYLE = "style"
    TYPOGRAPHY = "typography"
    COLOR = "color"
    PRODUCT = "product"
    LANDING = "landing"
    CHART = "chart"
    UX = "ux"
    PROMPT = "prompt"


class Stack(_PartitionName):
    """Target technology stacks."""

    HTML_TAILWIND = "html-tailwind"
    REACT = "react"
    NEXTJS = "nextjs"
    VUE = "vue"
    NUXTJS = "nuxtjs"
    NUXT_UI = "nuxt-ui"
    SVELTE = "svelte"
    SWIFTUI = "swiftui"
    REACT_NATIVE = "react-native"
    FLUTTER = "flutter"


PARTITION_NAMES: Mapping[PartitionFamily, type[_PartitionName]] = MappingProxyType(
    {
        PartitionFamily.DOMAIN: Domain,
        PartitionFamily.STACK: Stack,
    }
)


@dataclass(frozen=True, slots=True)
class Entry:
    """One discrete piece of advisory knowledge."""

    id: str
    partition_key: str
    title: str
    keywords: tuple[str, ...]
    body: str
    position: int = 0
    metadata: Mapping[str, str] = field(default_factory=dict, compare=False, hash=False)


@dataclass(frozen=True, slots=True)
class Corpus:
    """Read-only collection of entries for one partition family."""

    family: PartitionFamily
    partition_map: Mapping[str, tuple[Entry, ...]]

    def __post_init__(self) -> None:
        frozen = {name: tuple(entries) for name, entries in self.partition_map.items()}
        object.__setattr__(self, "partition_map", MappingProxyType(frozen))

    def partitions(self) -> list[str]:
        return list(self.partition_map)

    def entries(self, partition: str) -> tuple[Entry, ...]:
        return self.partition_map[partition]

    def __contains__(self, partition: object) -> bool:
        return partition in self.partition_map

    def __len__(self) -> int:
        return sum(len(entries) for entries in self.partition_map.values())


@dataclass(frozen=True, slots=True)
class Selector:
    """A validated (family, partition) pair."""

    family: PartitionFamily
    partition: str

    def describe(self) -> str:
        return f"{self.family.value} '{self.partition}'"


@dataclass(frozen=True, slots=True)
class Query:
    """A user query issued against a single partition."""

    text: str
    selector: Selector
    top_n: int = 5


@dataclass(slots=True)
class ScoredEntry:
    """An entry paired with its relevance score."""

    entry: Entry
    score: float
    breakdown: dict[str, float] = field(default_factory=dict)


@dataclass(slots=True)
class SearchResponse:
    """Ranked results for a query."""

    query: Query
    results: list[ScoredEntry] = field(default_factory=list)
    candidates: int = 0


__all__ = [
    "PartitionFamily",
    "Domain",
    "Stack",
    "PARTITION_NAMES",
    "Entry",
    "Corpus",
    "Selector",
    "Query",
    "ScoredEntry",
    "SearchResponse",
]
