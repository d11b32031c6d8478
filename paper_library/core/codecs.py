"""Codec helpers converting library papers to and from JSON-friendly mappings."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Protocol

from .papers import LibraryPaper
from .validated_model import ValidationError

# attribute name -> persisted key, matching the layout written by earlier releases
_FIELD_KEYS = {
    "id": "id",
    "title": "title",
    "authors": "authors",
    "category": "category",
    "read_time": "readTime",
    "summary": "aiSummary",
    "source_type": "sourceType",
    "source_id": "sourceId",
    "created_at": "createdAt",
    "last_opened_at": "lastOpenedAt",
    "favorite": "favorite",
    "full_text": "fullText",
    "embedding": "embedding",
}

_DATETIME_FIELDS = {"created_at", "last_opened_at"}


class PaperCodecPort(Protocol):
    """Codec interface used by storage ports."""

    def encode(self, paper: LibraryPaper) -> dict[str, Any]: ...

    def decode(self, data: Mapping[str, Any]) -> LibraryPaper: ...


@dataclass(frozen=True)
class PaperCodec:
    """Encode papers as camelCase JSON objects and decode them back.

    `None` values are omitted on encode. Datetimes are ISO-8601 strings; naive
    timestamps found on decode are assumed to be UTC.
    """

    include_full_text: bool = True

    def encode(self, paper: LibraryPaper) -> dict[str, Any]:
        encoded: dict[str, Any] = {}
        for attribute, key in _FIELD_KEYS.items():
            value = getattr(paper, attribute)
            if value is None:
                continue
            if attribute == "full_text" and not self.include_full_text:
                continue
            if attribute in _DATETIME_FIELDS:
                value = value.isoformat()
            elif attribute == "embedding":
                value = list(value)
            elif attribute == "summary":
                value = dict(value)
            elif attribute == "authors" and not isinstance(value, str):
                value = list(value)
            encoded[key] = value
        return encoded

    def decode(self, data: Mapping[str, Any]) -> LibraryPaper:
        if not isinstance(data, Mapping):
            raise ValidationError(
                f"Paper entry must be an object, got {type(data).__name__}."
            )

        kwargs: dict[str, Any] = {}
        for attribute, key in _FIELD_KEYS.items():
            if key not in data or data[key] is None:
                continue
            value = data[key]
            if attribute in _DATETIME_FIELDS:
                value = _parse_datetime(attribute, value)
            elif attribute == "favorite":
                value = bool(value)
            kwargs[attribute] = value

        if "title" not in kwargs:
            raise ValidationError("Field 'title' is required.")
        return LibraryPaper(**kwargs)


def _parse_datetime(name: str, value: Any) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        # fromisoformat() only accepts a trailing "Z" from Python 3.11 on
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ValidationError(f"Field '{name}' is not an ISO-8601 timestamp.") from exc
    else:
        raise ValidationError(
            f"Field '{name}' expects an ISO-8601 string, got {type(value).__name__}."
        )
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
