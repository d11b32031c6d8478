"""Shared helpers for embedding provider adapters."""

from __future__ import annotations

from typing import Any, List, Sequence

from ...core.errors import EmbeddingError


def clamp_text(text: str, max_chars: int) -> str:
    """Cut `text` to at most `max_chars` characters.

    Truncation is by character count, before any tokenization.
    """

    if max_chars <= 0:
        raise ValueError("max_chars must be > 0")
    if not text:
        return ""
    return text[:max_chars] if len(text) > max_chars else text


def coerce_embedding(values: Sequence[Any] | None, *, source: str) -> List[float]:
    """Validate a provider response vector and return it as floats."""

    if not values:
        raise EmbeddingError(f"Empty embedding response from {source}.")
    try:
        return [float(value) for value in values]
    except (TypeError, ValueError) as exc:
        raise EmbeddingError(f"Non-numeric embedding response from {source}.") from exc
