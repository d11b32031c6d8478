"""Exception types raised by library, search and port operations."""

from __future__ import annotations


class PaperLibraryError(Exception):
    """Base class for package errors."""


class LibraryStorageError(PaperLibraryError):
    """Raised when persisted library contents cannot be read or written."""


class EmbeddingError(PaperLibraryError):
    """Raised when an embedding provider returns no usable vector."""


class SearchUnavailableError(PaperLibraryError):
    """Raised by search flows when a query vector or snapshot cannot be obtained.

    The ranker is never invoked when this is raised, so callers never see a
    partial ranking.
    """
