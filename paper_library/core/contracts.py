"""Core port contracts used by adapters, the library and search flows."""

from __future__ import annotations

from typing import List, Protocol, Sequence

from .documents import IndexedDocument, RankedDocument
from .papers import LibraryPaper


class SnapshotSource(Protocol):
    """Anything that can hand out a point-in-time view of indexed documents."""

    def snapshot(self) -> Sequence[IndexedDocument]: ...


class AsyncSnapshotSource(Protocol):
    """Async variant of `SnapshotSource` (for remote persistence collaborators)."""

    async def snapshot(self) -> Sequence[IndexedDocument]: ...


class RankerPort(Protocol):
    """Ranking behavior required by the search flows."""

    def rank(
        self,
        query: Sequence[float],
        candidates: Sequence[IndexedDocument],
        top_k: int,
    ) -> List[RankedDocument]: ...


class EmbeddingProvider(Protocol):
    """Turns text into an embedding vector of fixed dimensionality."""

    def embed(self, text: str) -> List[float]: ...


class AsyncEmbeddingProvider(Protocol):
    async def embed(self, text: str) -> List[float]: ...


class LibraryStoragePort(Protocol):
    """Persistence behavior required by `PaperLibrary`."""

    def load(self) -> List[LibraryPaper]: ...

    def save(self, papers: Sequence[LibraryPaper]) -> None: ...
