"""Paper records stored in the library."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal, Mapping, Optional
from uuid import uuid4

from .documents import IndexedDocument
from .validated_model import ValidatedModel, ValidationError

UNCATEGORIZED = "Uncategorized"

SourceType = Literal["upload", "url", "arxiv", "other"]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_paper_id() -> str:
    return str(uuid4())


def normalize_category(category: Optional[str]) -> str:
    if category is None:
        return UNCATEGORIZED
    return category.strip() or UNCATEGORIZED


@dataclass(frozen=True)
class LibraryPaper(ValidatedModel):
    """One document saved in the user's library.

    `summary` is the structured output of the summarization collaborator and is
    kept opaque. `embedding` stays None until a vector has been computed.
    """

    title: str = field(metadata={"non_empty": True})
    id: str = field(default_factory=new_paper_id, metadata={"non_empty": True})
    authors: tuple[str, ...] | str = ()
    category: Optional[str] = None
    read_time: Optional[str] = None
    summary: Optional[Mapping[str, Any]] = None
    source_type: SourceType = "upload"
    source_id: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)
    last_opened_at: Optional[datetime] = None
    favorite: bool = False
    full_text: Optional[str] = None
    embedding: Optional[tuple[float, ...]] = None

    def __post_init__(self) -> None:
        if self.embedding is not None and not isinstance(self.embedding, tuple):
            try:
                vector = tuple(float(v) for v in self.embedding)
            except (TypeError, ValueError) as exc:
                raise ValidationError(
                    f"Field 'embedding' must contain numbers: {exc}"
                ) from exc
            object.__setattr__(self, "embedding", vector)
        # an empty vector means "not embedded yet"
        if self.embedding is not None and not self.embedding:
            object.__setattr__(self, "embedding", None)
        if isinstance(self.authors, list):
            object.__setattr__(self, "authors", tuple(self.authors))
        super().__post_init__()

    def model_validate(self) -> None:
        for stamp_name in ("created_at", "last_opened_at"):
            stamp = getattr(self, stamp_name)
            if stamp is not None and stamp.tzinfo is None:
                raise ValidationError(f"Field '{stamp_name}' must be timezone-aware.")

    @property
    def author_text(self) -> str:
        if isinstance(self.authors, str):
            return self.authors
        return ", ".join(self.authors)

    @property
    def normalized_category(self) -> str:
        return normalize_category(self.category)

    @property
    def last_activity(self) -> datetime:
        return self.last_opened_at or self.created_at

    def to_indexed_document(self) -> IndexedDocument:
        return IndexedDocument(
            id=self.id,
            vector=self.embedding,
            metadata={
                "title": self.title,
                "category": self.normalized_category,
                "favorite": self.favorite,
            },
        )
