"""Paper library: the owned collection of papers and its keyword listing."""

from __future__ import annotations

import logging
from dataclasses import MISSING, fields, replace
from datetime import datetime
from typing import Any, Callable, Iterator, Optional, Sequence

from .contracts import LibraryStoragePort
from .documents import IndexedDocument
from .papers import LibraryPaper, utcnow

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "All"
SORT_OPTIONS = ("recent", "title", "category")

# identity fields survive a merge with a re-added paper
_MERGE_PROTECTED = {"id", "created_at"}


class PaperLibrary:
    """Ordered collection of `LibraryPaper` records, newest first.

    The library is the only writer of its papers. Every mutation builds the
    next list, persists it through the optional storage port and only then
    swaps it in, so a failed save leaves the library unchanged.
    """

    def __init__(
        self,
        storage: LibraryStoragePort | None = None,
        *,
        papers: Optional[Sequence[LibraryPaper]] = None,
    ) -> None:
        """Create a library.

        Args:
            storage: Optional persistence port; papers are loaded from it unless
                `papers` is given.
            papers: Initial papers (newest first). When given together with
                `storage`, nothing is loaded and the storage is only written.
        """

        self.storage = storage
        if papers is not None:
            self._papers: list[LibraryPaper] = list(papers)
        elif storage is not None:
            self._papers = list(storage.load())
            logger.info("Loaded %d papers from storage", len(self._papers))
        else:
            self._papers = []

    def __len__(self) -> int:
        return len(self._papers)

    def __iter__(self) -> Iterator[LibraryPaper]:
        return iter(tuple(self._papers))

    def __contains__(self, paper_id: object) -> bool:
        return any(paper.id == paper_id for paper in self._papers)

    def reload(self) -> None:
        """Replace in-memory papers with the storage contents."""

        if self.storage is None:
            return
        self._papers = list(self.storage.load())

    def papers(self) -> list[LibraryPaper]:
        return list(self._papers)

    def get(self, paper_id: str) -> LibraryPaper:
        return self._papers[self._index_of(paper_id)]

    def snapshot(self) -> tuple[IndexedDocument, ...]:
        """Point-in-time view of the papers for ranking."""

        return tuple(paper.to_indexed_document() for paper in self._papers)

    def add_paper(self, paper: LibraryPaper | None = None, **values: Any) -> str:
        """Add a paper, or merge it into an existing one, and return its id.

        An existing paper matches when it has the same id or the same non-empty
        `source_id`. The match keeps its id and creation time; every field the
        new paper sets explicitly overwrites the old value.
        """

        if paper is None:
            paper = LibraryPaper(**values)
        elif values:
            paper = replace(paper, **values)

        index = self._find_match(paper)
        updated = list(self._papers)
        if index is None:
            updated.insert(0, paper)
            stored = paper
            logger.info("Added paper %s (%r)", paper.id, paper.title)
        else:
            existing = updated[index]
            changes = {
                name: value
                for name, value in _explicit_values(paper).items()
                if name not in _MERGE_PROTECTED
            }
            stored = replace(existing, **changes)
            updated[index] = stored
            logger.info("Merged paper %s into existing %s", paper.id, existing.id)

        self._commit(updated)
        return stored.id

    def update_paper(self, paper_id: str, **changes: Any) -> LibraryPaper:
        """Apply field changes to one paper and return the updated record."""

        if "id" in changes:
            raise ValueError("Paper id cannot be changed.")
        return self._replace_at(paper_id, lambda paper: replace(paper, **changes))

    def set_embedding(self, paper_id: str, vector: Sequence[float] | None) -> LibraryPaper:
        """Attach (or clear) the embedding once it has been computed."""

        return self.update_paper(paper_id, embedding=vector)

    def remove_paper(self, paper_id: str) -> bool:
        updated = [paper for paper in self._papers if paper.id != paper_id]
        if len(updated) == len(self._papers):
            return False
        self._commit(updated)
        logger.info("Removed paper %s", paper_id)
        return True

    def touch_paper(self, paper_id: str, *, now: datetime | None = None) -> LibraryPaper:
        stamp = now or utcnow()
        return self._replace_at(paper_id, lambda paper: replace(paper, last_opened_at=stamp))

    def toggle_favorite(self, paper_id: str) -> LibraryPaper:
        return self._replace_at(
            paper_id, lambda paper: replace(paper, favorite=not paper.favorite)
        )

    def categories(self) -> list[str]:
        return sorted({paper.normalized_category for paper in self._papers})

    def list_papers(
        self,
        query: str = "",
        *,
        category: str = ALL_CATEGORIES,
        sort_by: str = "recent",
    ) -> list[LibraryPaper]:
        """Keyword listing: filter by category and text, sort, favorites first.

        The query matches case-insensitively as a substring of the title, the
        authors or the full text. `sort_by` is one of `recent` (last opened,
        else created, newest first), `title` or `category`.
        """

        if sort_by not in SORT_OPTIONS:
            raise ValueError(f"Unsupported sort: {sort_by}. Supported: {list(SORT_OPTIONS)}")

        result = list(self._papers)
        if category != ALL_CATEGORIES:
            result = [paper for paper in result if paper.normalized_category == category]

        needle = query.strip().lower()
        if needle:
            result = [paper for paper in result if _matches_keyword(paper, needle)]

        if sort_by == "title":
            result.sort(key=lambda paper: paper.title.casefold())
        elif sort_by == "category":
            result.sort(key=lambda paper: paper.normalized_category.casefold())
        else:
            result.sort(key=lambda paper: paper.last_activity, reverse=True)

        result.sort(key=lambda paper: not paper.favorite)
        return result

    def _find_match(self, paper: LibraryPaper) -> int | None:
        for index, existing in enumerate(self._papers):
            if existing.id == paper.id:
                return index
            if paper.source_id and existing.source_id == paper.source_id:
                return index
        return None

    def _index_of(self, paper_id: str) -> int:
        for index, paper in enumerate(self._papers):
            if paper.id == paper_id:
                return index
        raise KeyError(f"Paper does not exist: {paper_id}")

    def _replace_at(
        self,
        paper_id: str,
        change: Callable[[LibraryPaper], LibraryPaper],
    ) -> LibraryPaper:
        index = self._index_of(paper_id)
        updated = list(self._papers)
        updated[index] = change(updated[index])
        self._commit(updated)
        return updated[index]

    def _commit(self, updated: list[LibraryPaper]) -> None:
        if self.storage is not None:
            self.storage.save(tuple(updated))
        self._papers = updated


def _explicit_values(paper: LibraryPaper) -> dict[str, Any]:
    """Fields whose value differs from the dataclass default."""

    values: dict[str, Any] = {}
    for field in fields(paper):
        value = getattr(paper, field.name)
        if value is None:
            continue
        if field.default is not MISSING and value == field.default:
            continue
        values[field.name] = value
    return values


def _matches_keyword(paper: LibraryPaper, needle: str) -> bool:
    if needle in paper.title.lower():
        return True
    if needle in paper.author_text.lower():
        return True
    return needle in (paper.full_text or "").lower()


__all__ = ["ALL_CATEGORIES", "SORT_OPTIONS", "PaperLibrary"]
