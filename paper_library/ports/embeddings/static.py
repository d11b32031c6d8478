"""Static embedding provider for tests and offline development."""

from __future__ import annotations

from typing import Callable, List, Mapping, Optional, Sequence

from ...core.errors import EmbeddingError
from .base import coerce_embedding


class StaticEmbeddingProvider:
    """Serve embeddings from a lookup table, with an optional fallback function."""

    def __init__(
        self,
        vectors: Optional[Mapping[str, Sequence[float]]] = None,
        *,
        fallback: Optional[Callable[[str], Sequence[float]]] = None,
    ) -> None:
        self._vectors = {key: tuple(value) for key, value in (vectors or {}).items()}
        self._fallback = fallback
        self.calls: list[str] = []

    def embed(self, text: str) -> List[float]:
        self.calls.append(text)
        if text in self._vectors:
            return list(self._vectors[text])
        if self._fallback is None:
            raise EmbeddingError(f"No embedding registered for text: {text!r}")
        return coerce_embedding(self._fallback(text), source=type(self).__name__)


class AsyncStaticEmbeddingProvider(StaticEmbeddingProvider):
    """Awaitable flavour of `StaticEmbeddingProvider`."""

    async def embed(self, text: str) -> List[float]:  # type: ignore[override]
        return StaticEmbeddingProvider.embed(self, text)
