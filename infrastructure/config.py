"""Dependency wiring for the DesignKB search tool."""
from __future__ import annotations

import math
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable, Literal, Mapping, get_args

from domain.interfaces import CorpusLoader, Reranker, Scorer, Tokenizer
from infrastructure.corpus.base import DEFAULT_DATA_ROOT
from infrastructure.corpus.csv_corpus_loader import CsvCorpusLoader
from infrastructure.corpus.json_corpus_loader import JsonCorpusLoader
from infrastructure.ranking.stable_reranker import StableReranker
from infrastructure.scoring.bm25_scorer import Bm25Scorer
from infrastructure.scoring.weighted_overlap_scorer import WeightedOverlapScorer
from infrastructure.text.regex_tokenizer import ENGLISH_STOPWORDS, RegexTokenizer


CorpusFormat = Literal["csv", "json"]
ScorerName = Literal["weighted", "bm25"]

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(slots=True)
class Container:
    """Simple container bundling concrete infrastructure implementations."""

    corpus_loader: CorpusLoader
    tokenizer: Tokenizer
    scorer: Scorer
    reranker: Reranker
    default_top_n: int


@dataclass(slots=True)
class ContainerConfig:
    """Configuration for selecting the corpus source and scoring strategy."""

    data_root: str | Path = DEFAULT_DATA_ROOT
    corpus_format: CorpusFormat = "csv"
    scorer: ScorerName = "weighted"
    keyword_weight: float = 3.0
    body_weight: float = 1.0
    body_tf_cap: int = 3
    use_stopwords: bool = True
    default_top_n: int = 5

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ContainerConfig":
        """Build a config from ``DESIGNKB_*`` environment variables."""

        env = os.environ if environ is None else environ
        cfg = cls()
        if env.get("DESIGNKB_DATA_DIR"):
            cfg.data_root = Path(env["DESIGNKB_DATA_DIR"]).expanduser()
        if env.get("DESIGNKB_CORPUS_FORMAT"):
            cfg.corpus_format = _choice(env["DESIGNKB_CORPUS_FORMAT"], CorpusFormat, "DESIGNKB_CORPUS_FORMAT")
        if env.get("DESIGNKB_SCORER"):
            cfg.scorer = _choice(env["DESIGNKB_SCORER"], ScorerName, "DESIGNKB_SCORER")
        if env.get("DESIGNKB_KEYWORD_WEIGHT"):
            cfg.keyword_weight = _weight(env["DESIGNKB_KEYWORD_WEIGHT"], "DESIGNKB_KEYWORD_WEIGHT")
        if env.get("DESIGNKB_BODY_WEIGHT"):
            cfg.body_weight = _weight(env["DESIGNKB_BODY_WEIGHT"], "DESIGNKB_BODY_WEIGHT")
        if env.get("DESIGNKB_STOPWORDS"):
            cfg.use_stopwords = _flag(env["DESIGNKB_STOPWORDS"], "DESIGNKB_STOPWORDS")
        if env.get("DESIGNKB_TOP_N"):
            cfg.default_top_n = _number(env["DESIGNKB_TOP_N"], int, "DESIGNKB_TOP_N")
            if cfg.default_top_n < 1:
                raise ValueError("DESIGNKB_TOP_N must be a positive integer")
        return cfg

    def with_overrides(self, **changes: object) -> "ContainerConfig":
        return replace(self, **{key: value for key, value in changes.items() if value is not None})


_LOADER_FACTORIES: dict[CorpusFormat, Callable[[Path], CorpusLoader]] = {
    "csv": CsvCorpusLoader,
    "json": JsonCorpusLoader,
}


def _build_weighted(tokenizer: Tokenizer, cfg: ContainerConfig) -> Scorer:
    return WeightedOverlapScorer(
        tokenizer,
        keyword_weight=cfg.keyword_weight,
        body_weight=cfg.body_weight,
        body_tf_cap=cfg.body_tf_cap,
    )


def _build_bm25(tokenizer: Tokenizer, cfg: ContainerConfig) -> Scorer:
    return Bm25Scorer(tokenizer, keyword_weight=cfg.keyword_weight)


_SCORER_FACTORIES: dict[ScorerName, Callable[[Tokenizer, ContainerConfig], Scorer]] = {
    "weighted": _build_weighted,
    "bm25": _build_bm25,
}


def build_default_container(config: ContainerConfig | None = None) -> Container:
    """Instantiate the default infrastructure stack."""

    cfg = config or ContainerConfig()
    try:
        corpus_loader = _LOADER_FACTORIES[cfg.corpus_format](Path(cfg.data_root))
    except KeyError as exc:
        raise ValueError(f"Unknown corpus format '{cfg.corpus_format}'") from exc
    tokenizer = RegexTokenizer(ENGLISH_STOPWORDS if cfg.use_stopwords else None)
    try:
        scorer = _SCORER_FACTORIES[cfg.scorer](tokenizer, cfg)
    except KeyError as exc:
        raise ValueError(f"Unknown scorer '{cfg.scorer}'") from exc

    return Container(
        corpus_loader=corpus_loader,
        tokenizer=tokenizer,
        scorer=scorer,
        reranker=StableReranker(),
        default_top_n=cfg.default_top_n,
    )


def _choice(value: str, options: object, variable: str) -> str:
    allowed = get_args(options)
    normalized = value.strip().lower()
    if normalized not in allowed:
        raise ValueError(f"{variable} must be one of {', '.join(allowed)}, got '{value}'")
    return normalized


def _number(value: str, kind: type, variable: str):
    try:
        return kind(value)
    except ValueError as exc:
        raise ValueError(f"{variable} must be a {kind.__name__}, got '{value}'") from exc


def _weight(value: str, variable: str) -> float:
    weight = _number(value, float, variable)
    if not math.isfinite(weight) or weight < 0:
        raise ValueError(f"{variable} must be a finite, non-negative number, got '{value}'")
    return weight


def _flag(value: str, variable: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"{variable} must be a boolean flag, got '{value}'")


__all__ = ["Container", "ContainerConfig", "CorpusFormat", "ScorerName", "build_default_container"]
