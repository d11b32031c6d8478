"""Embedding provider adapter exports."""

from .base import clamp_text
from .gateway import AsyncGatewayEmbeddingProvider, GatewayEmbeddingProvider
from .static import AsyncStaticEmbeddingProvider, StaticEmbeddingProvider

__all__ = [
    "clamp_text",
    "GatewayEmbeddingProvider",
    "AsyncGatewayEmbeddingProvider",
    "StaticEmbeddingProvider",
    "AsyncStaticEmbeddingProvider",
]
