"""Public port exports for concrete adapter implementations."""

from .embeddings import (
    AsyncGatewayEmbeddingProvider,
    AsyncStaticEmbeddingProvider,
    GatewayEmbeddingProvider,
    StaticEmbeddingProvider,
    clamp_text,
)
from .rankers import NumpySimilarityRanker
from .storage import InMemoryLibraryStorage, JsonFileLibraryStorage

__all__ = [
    "InMemoryLibraryStorage",
    "JsonFileLibraryStorage",
    "GatewayEmbeddingProvider",
    "AsyncGatewayEmbeddingProvider",
    "StaticEmbeddingProvider",
    "AsyncStaticEmbeddingProvider",
    "NumpySimilarityRanker",
    "clamp_text",
]
