"""In-memory library storage for testing and local development."""

from __future__ import annotations

from typing import Any, Sequence

from ...core.codecs import PaperCodec, PaperCodecPort
from ...core.papers import LibraryPaper


class InMemoryLibraryStorage:
    """Keeps encoded copies of the papers, as a real storage backend would."""

    def __init__(self, codec: PaperCodecPort | None = None) -> None:
        self.codec = codec or PaperCodec()
        self._rows: list[dict[str, Any]] = []
        self.save_count = 0

    def load(self) -> list[LibraryPaper]:
        return [self.codec.decode(row) for row in self._rows]

    def save(self, papers: Sequence[LibraryPaper]) -> None:
        self._rows = [self.codec.encode(paper) for paper in papers]
        self.save_count += 1

    def rows(self) -> list[dict[str, Any]]:
        """Encoded rows as they would be persisted."""

        return [dict(row) for row in self._rows]
