"""Ranker adapter exports."""

from ...core.ranker import SimilarityRanker
from .numpy_ranker import NumpySimilarityRanker

__all__ = ["SimilarityRanker", "NumpySimilarityRanker"]
