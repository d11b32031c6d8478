"""Similarity metric definitions and scoring helpers."""

from __future__ import annotations

import math
from enum import Enum
from typing import Iterable, Sequence


class SimilarityMetric(str, Enum):
    """Supported similarity metric values."""

    COSINE = "cosine"
    DOT = "dot"
    L2 = "l2"


SimilarityMetricInput = str | SimilarityMetric

_DEFAULT_ALIASES = {
    "cos": SimilarityMetric.COSINE,
    "inner_product": SimilarityMetric.DOT,
    "ip": SimilarityMetric.DOT,
    "euclidean": SimilarityMetric.L2,
}


def normalize_metric(
    metric: SimilarityMetricInput,
    *,
    supported: Iterable[SimilarityMetric] | None = None,
) -> SimilarityMetric:
    """Normalize user metric input into a `SimilarityMetric` value."""

    alias_map = {key.lower(): value for key, value in _DEFAULT_ALIASES.items()}

    if isinstance(metric, SimilarityMetric):
        normalized = metric
    elif isinstance(metric, str):
        key = metric.strip().lower()
        if key in SimilarityMetric._value2member_map_:
            normalized = SimilarityMetric(key)
        elif key in alias_map:
            normalized = alias_map[key]
        else:
            allowed = sorted(
                set(SimilarityMetric._value2member_map_.keys()) | set(alias_map.keys())
            )
            raise ValueError(f"Unsupported metric: {metric}. Supported: {allowed}")
    else:
        raise ValueError(f"Unsupported metric type: {type(metric).__name__}")

    if supported is not None:
        supported_set = set(supported)
        if normalized not in supported_set:
            allowed = sorted(item.value for item in supported_set)
            raise ValueError(
                f"Unsupported metric: {normalized.value}. Supported: {allowed}"
            )

    return normalized


def cosine_similarity(left: Sequence[float], right: Sequence[float]) -> float:
    """Cosine of the angle between two vectors.

    Vectors of different length, empty vectors and zero vectors all score 0.0.
    """

    if len(left) != len(right) or not left:
        return 0.0
    dot = 0.0
    norm_left = 0.0
    norm_right = 0.0
    for a, b in zip(left, right):
        dot += a * b
        norm_left += a * a
        norm_right += b * b
    denominator = math.sqrt(norm_left) * math.sqrt(norm_right)
    if denominator == 0.0:
        return 0.0
    return dot / denominator


def dot_similarity(left: Sequence[float], right: Sequence[float]) -> float:
    if len(left) != len(right):
        return 0.0
    return sum(a * b for a, b in zip(left, right))


def l2_similarity(left: Sequence[float], right: Sequence[float]) -> float:
    """Negative euclidean distance, so that larger is closer."""

    if len(left) != len(right):
        return 0.0
    return -math.sqrt(sum((a - b) ** 2 for a, b in zip(left, right)))


def similarity(
    metric: SimilarityMetric,
    left: Sequence[float],
    right: Sequence[float],
) -> float:
    if metric == SimilarityMetric.DOT:
        return dot_similarity(left, right)
    if metric == SimilarityMetric.L2:
        return l2_similarity(left, right)
    return cosine_similarity(left, right)


def is_finite_vector(vector: Sequence[float]) -> bool:
    return all(math.isfinite(value) for value in vector)
