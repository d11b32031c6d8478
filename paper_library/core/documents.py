"""Document entities shared by the ranker, the library and storage ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

EmbeddingVector = Sequence[float]


@dataclass(frozen=True)
class IndexedDocument:
    """One rankable document: a stable id plus an optional embedding."""

    id: str
    vector: Optional[tuple[float, ...]] = None
    metadata: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        if self.vector is not None:
            object.__setattr__(self, "vector", tuple(float(v) for v in self.vector))

    @property
    def has_vector(self) -> bool:
        return self.vector is not None


@dataclass(frozen=True)
class RankedDocument:
    """Represents one scored hit returned by the similarity ranker."""

    document: IndexedDocument
    score: float

    @property
    def id(self) -> str:
        return self.document.id
