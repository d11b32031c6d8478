"""Public core API for ranking, the paper library and search flows."""

from .codecs import PaperCodec, PaperCodecPort
from .contracts import (
    AsyncEmbeddingProvider,
    AsyncSnapshotSource,
    EmbeddingProvider,
    LibraryStoragePort,
    RankerPort,
    SnapshotSource,
)
from .documents import EmbeddingVector, IndexedDocument, RankedDocument
from .errors import (
    EmbeddingError,
    LibraryStorageError,
    PaperLibraryError,
    SearchUnavailableError,
)
from .library import ALL_CATEGORIES, SORT_OPTIONS, PaperLibrary
from .papers import UNCATEGORIZED, LibraryPaper, normalize_category
from .ranker import SimilarityRanker, rank
from .search import AsyncSemanticSearch, SemanticSearch
from .settings import LibrarySettings, configure_logging
from .similarity import (
    SimilarityMetric,
    SimilarityMetricInput,
    cosine_similarity,
    normalize_metric,
    similarity,
)
from .validated_model import ValidatedModel, ValidationError

__all__ = [
    "EmbeddingVector",
    "IndexedDocument",
    "RankedDocument",
    "SimilarityMetric",
    "SimilarityMetricInput",
    "SimilarityRanker",
    "rank",
    "cosine_similarity",
    "similarity",
    "normalize_metric",
    "LibraryPaper",
    "PaperLibrary",
    "PaperCodec",
    "PaperCodecPort",
    "ALL_CATEGORIES",
    "SORT_OPTIONS",
    "UNCATEGORIZED",
    "normalize_category",
    "SemanticSearch",
    "AsyncSemanticSearch",
    "SnapshotSource",
    "AsyncSnapshotSource",
    "RankerPort",
    "EmbeddingProvider",
    "AsyncEmbeddingProvider",
    "LibraryStoragePort",
    "PaperLibraryError",
    "LibraryStorageError",
    "EmbeddingError",
    "SearchUnavailableError",
    "ValidatedModel",
    "ValidationError",
    "LibrarySettings",
    "configure_logging",
]
