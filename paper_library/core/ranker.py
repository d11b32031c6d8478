"""Similarity ranking over a snapshot of indexed documents."""

from __future__ import annotations

import logging
import math
from typing import Iterable, Sequence

from .documents import IndexedDocument, RankedDocument
from .similarity import (
    SimilarityMetric,
    SimilarityMetricInput,
    is_finite_vector,
    normalize_metric,
    similarity,
)

logger = logging.getLogger(__name__)


def scorable_candidates(
    query: Sequence[float],
    candidates: Iterable[IndexedDocument],
) -> list[tuple[int, IndexedDocument]]:
    """Return `(input_position, document)` pairs that can be scored against `query`.

    A candidate is scorable when it has a vector of the query's length whose
    components are all finite.
    """

    dimension = len(query)
    kept: list[tuple[int, IndexedDocument]] = []
    for position, document in enumerate(candidates):
        vector = document.vector
        if vector is None or len(vector) != dimension:
            continue
        if not is_finite_vector(vector):
            continue
        kept.append((position, document))
    return kept


def order_scored(
    scored: Iterable[tuple[int, IndexedDocument, float]],
    top_k: int,
) -> list[RankedDocument]:
    """Sort by descending score, ties by input position, then truncate."""

    ordered = sorted(scored, key=lambda item: (-item[2], item[0]))
    return [
        RankedDocument(document=document, score=score)
        for _, document, score in ordered[:top_k]
    ]


def prepare_query(query: Sequence[float] | None) -> tuple[float, ...] | None:
    """Coerce the query to a float tuple, or None when it carries no signal."""

    if query is None:
        return None
    try:
        values = tuple(float(v) for v in query)
    except (TypeError, ValueError):
        return None
    if not values or not is_finite_vector(values):
        return None
    return values


def rank(
    query: Sequence[float],
    candidates: Iterable[IndexedDocument],
    top_k: int,
    *,
    metric: SimilarityMetricInput = SimilarityMetric.COSINE,
) -> list[RankedDocument]:
    """Rank `candidates` by similarity to `query` and keep the best `top_k`.

    Never raises for input shape issues: an empty query, a non-positive
    `top_k` or an empty candidate list give `[]`; candidates without a vector
    or with a different dimension are skipped.
    """

    normalized_metric = normalize_metric(metric)
    query_vector = prepare_query(query)
    if query_vector is None or top_k <= 0:
        return []

    candidates = tuple(candidates)
    kept = scorable_candidates(query_vector, candidates)
    scored: list[tuple[int, IndexedDocument, float]] = []
    for position, document in kept:
        score = similarity(normalized_metric, query_vector, document.vector)
        # overflowing components can still produce nan
        if math.isnan(score):
            continue
        scored.append((position, document, score))
    results = order_scored(scored, top_k)
    logger.debug(
        "Ranked %d of %d candidates (top_k=%d, metric=%s)",
        len(kept),
        len(candidates),
        top_k,
        normalized_metric.value,
    )
    return results


class SimilarityRanker:
    """Pure-Python ranker bound to one similarity metric."""

    def __init__(self, metric: SimilarityMetricInput = SimilarityMetric.COSINE) -> None:
        self.metric = normalize_metric(metric)

    def rank(
        self,
        query: Sequence[float],
        candidates: Iterable[IndexedDocument],
        top_k: int,
    ) -> list[RankedDocument]:
        return rank(query, candidates, top_k, metric=self.metric)
