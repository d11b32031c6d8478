"""Numpy-backed similarity ranker.

This adapter is optional and requires the `numpy` package installed. Scores
match `SimilarityRanker` within floating-point tolerance; ordering and
filtering rules are shared with it.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence

from ...core.documents import IndexedDocument, RankedDocument
from ...core.ranker import order_scored, prepare_query, scorable_candidates
from ...core.similarity import SimilarityMetric, SimilarityMetricInput, normalize_metric

logger = logging.getLogger(__name__)


class NumpySimilarityRanker:
    """Vectorised ranker for larger libraries."""

    def __init__(self, metric: SimilarityMetricInput = SimilarityMetric.COSINE) -> None:
        try:
            import numpy as np  # type: ignore[import-not-found]
        except ImportError as exc:  # pragma: no cover - env dependent
            raise ImportError(
                "numpy is required for NumpySimilarityRanker. "
                "Install with `pip install numpy`."
            ) from exc

        self._np = np
        self.metric = normalize_metric(metric)

    def rank(
        self,
        query: Sequence[float],
        candidates: Iterable[IndexedDocument],
        top_k: int,
    ) -> list[RankedDocument]:
        query_vector = prepare_query(query)
        if query_vector is None or top_k <= 0:
            return []

        candidates = tuple(candidates)
        kept = scorable_candidates(query_vector, candidates)
        if not kept:
            return []

        matrix = self._np.array([document.vector for _, document in kept], dtype=self._np.float64)
        q = self._np.array(query_vector, dtype=self._np.float64)
        with self._np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            scores = self._scores(matrix, q)

        scored = [
            (position, document, float(score))
            for (position, document), score in zip(kept, scores)
            if not self._np.isnan(score)
        ]
        logger.debug("Ranked %d of %d candidates with numpy", len(scored), len(candidates))
        return order_scored(scored, top_k)

    def _scores(self, matrix: Any, query: Any) -> Any:
        np = self._np
        # row-wise sums keep identical rows bit-identical, unlike a BLAS matmul
        if self.metric == SimilarityMetric.DOT:
            return (matrix * query).sum(axis=1)
        if self.metric == SimilarityMetric.L2:
            return -np.sqrt(((matrix - query) ** 2).sum(axis=1))

        dots = (matrix * query).sum(axis=1)
        row_norms = np.sqrt((matrix * matrix).sum(axis=1))
        query_norm = np.sqrt((query * query).sum())
        denominators = row_norms * query_norm
        safe = np.where(denominators == 0.0, 1.0, denominators)
        return np.where(denominators == 0.0, 0.0, dots / safe)
