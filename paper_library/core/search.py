"""Semantic search and related-paper flows built on the similarity ranker."""

from __future__ import annotations

import inspect
import logging
from typing import Any, Optional, Sequence

from .contracts import (
    AsyncEmbeddingProvider,
    AsyncSnapshotSource,
    EmbeddingProvider,
    RankerPort,
    SnapshotSource,
)
from .documents import IndexedDocument, RankedDocument
from .errors import SearchUnavailableError
from .ranker import SimilarityRanker

logger = logging.getLogger(__name__)


async def _maybe_await(value: Any) -> Any:
    """Await awaitables and return non-awaitable values unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


def split_related_candidates(
    snapshot: Sequence[IndexedDocument],
    document_id: str,
) -> tuple[IndexedDocument, tuple[IndexedDocument, ...]]:
    """Return the anchor document and every other document, in snapshot order."""

    anchor: IndexedDocument | None = None
    others: list[IndexedDocument] = []
    for document in snapshot:
        if document.id == document_id:
            anchor = document
        else:
            others.append(document)
    if anchor is None:
        raise KeyError(f"Document does not exist: {document_id}")
    return anchor, tuple(others)


class _SearchBase:
    def __init__(
        self,
        source: Any,
        embedder: Any,
        ranker: RankerPort | None,
        default_top_k: int,
    ) -> None:
        if default_top_k <= 0:
            raise ValueError("default_top_k must be > 0")
        self.source = source
        self.embedder = embedder
        self.ranker = ranker or SimilarityRanker()
        self.default_top_k = default_top_k

    def _resolve_top_k(self, top_k: Optional[int]) -> int:
        return self.default_top_k if top_k is None else top_k

    def _rank_related(
        self,
        snapshot: Sequence[IndexedDocument],
        document_id: str,
        top_k: Optional[int],
    ) -> list[RankedDocument]:
        anchor, others = split_related_candidates(snapshot, document_id)
        if anchor.vector is None:
            return []
        return self.ranker.rank(anchor.vector, others, self._resolve_top_k(top_k))


class SemanticSearch(_SearchBase):
    """Search a snapshot source by meaning instead of keywords."""

    def __init__(
        self,
        source: SnapshotSource,
        embedder: EmbeddingProvider,
        ranker: RankerPort | None = None,
        *,
        default_top_k: int = 10,
    ) -> None:
        """Create a search flow.

        Args:
            source: Provides the document snapshot (usually a `PaperLibrary`).
            embedder: Turns query text into a vector.
            ranker: Ranking backend; defaults to the pure-Python ranker.
            default_top_k: Result bound used when a call passes no `top_k`.
        """

        super().__init__(source, embedder, ranker, default_top_k)

    def search(self, text: str, top_k: Optional[int] = None) -> list[RankedDocument]:
        """Rank stored documents against the embedding of `text`.

        Blank text gives `[]` without calling the embedder. Raises
        `SearchUnavailableError` when the embedding or the snapshot fails.
        """

        query_text = text.strip()
        if not query_text:
            return []

        try:
            query_vector = self.embedder.embed(query_text)
        except Exception as exc:
            logger.warning("Embedding request failed: %s", exc)
            raise SearchUnavailableError("Semantic search failed. Please try again.") from exc

        snapshot = self._snapshot()
        return self.ranker.rank(query_vector, snapshot, self._resolve_top_k(top_k))

    def related(self, document_id: str, top_k: Optional[int] = None) -> list[RankedDocument]:
        """Documents most similar to the stored document `document_id`.

        Raises `KeyError` when the document is not in the snapshot.
        """

        return self._rank_related(self._snapshot(), document_id, top_k)

    def _snapshot(self) -> Sequence[IndexedDocument]:
        try:
            return tuple(self.source.snapshot())
        except Exception as exc:
            logger.warning("Library snapshot failed: %s", exc)
            raise SearchUnavailableError("Library is not readable.") from exc


class AsyncSemanticSearch(_SearchBase):
    """Async search flow that accepts sync or async embedders and sources."""

    def __init__(
        self,
        source: SnapshotSource | AsyncSnapshotSource,
        embedder: EmbeddingProvider | AsyncEmbeddingProvider,
        ranker: RankerPort | None = None,
        *,
        default_top_k: int = 10,
    ) -> None:
        super().__init__(source, embedder, ranker, default_top_k)

    async def search(self, text: str, top_k: Optional[int] = None) -> list[RankedDocument]:
        query_text = text.strip()
        if not query_text:
            return []

        try:
            query_vector = await _maybe_await(self.embedder.embed(query_text))
        except Exception as exc:
            logger.warning("Embedding request failed: %s", exc)
            raise SearchUnavailableError("Semantic search failed. Please try again.") from exc

        snapshot = await self._snapshot()
        return self.ranker.rank(query_vector, snapshot, self._resolve_top_k(top_k))

    async def related(
        self, document_id: str, top_k: Optional[int] = None
    ) -> list[RankedDocument]:
        return self._rank_related(await self._snapshot(), document_id, top_k)

    async def _snapshot(self) -> Sequence[IndexedDocument]:
        try:
            return tuple(await _maybe_await(self.source.snapshot()))
        except Exception as exc:
            logger.warning("Library snapshot failed: %s", exc)
            raise SearchUnavailableError("Library is not readable.") from exc
