"""JSON file adapter for library persistence.

The file holds a single JSON array of paper objects, the same layout the
browser build keeps under its `research-paper-ai:library:v1` storage key.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Sequence

from ...core.codecs import PaperCodec, PaperCodecPort
from ...core.errors import LibraryStorageError
from ...core.papers import LibraryPaper
from ...core.validated_model import ValidationError

logger = logging.getLogger(__name__)


class JsonFileLibraryStorage:
    """Load and save the library as a JSON document on disk."""

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        codec: PaperCodecPort | None = None,
        indent: int | None = None,
    ) -> None:
        self.path = Path(path)
        self.codec = codec or PaperCodec()
        self.indent = indent

    def load(self) -> list[LibraryPaper]:
        """Read papers; a missing or empty file is an empty library."""

        if not self.path.exists():
            return []
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise LibraryStorageError(f"Cannot read library file {self.path}: {exc}") from exc
        if not raw.strip():
            return []

        try:
            rows = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise LibraryStorageError(f"Library file {self.path} is not valid JSON.") from exc
        if not isinstance(rows, list):
            raise LibraryStorageError(
                f"Library file {self.path} must contain a JSON array, "
                f"got {type(rows).__name__}."
            )

        papers: list[LibraryPaper] = []
        for index, row in enumerate(rows):
            try:
                papers.append(self.codec.decode(row))
            except (ValidationError, TypeError) as exc:
                raise LibraryStorageError(
                    f"Invalid paper at index {index} in {self.path}: {exc}"
                ) from exc
        logger.debug("Read %d papers from %s", len(papers), self.path)
        return papers

    def save(self, papers: Sequence[LibraryPaper]) -> None:
        """Write papers atomically (temporary file, then rename)."""

        rows = [self.codec.encode(paper) for paper in papers]
        payload = json.dumps(rows, ensure_ascii=False, indent=self.indent)

        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise LibraryStorageError(f"Cannot write library file {self.path}: {exc}") from exc
        logger.debug("Wrote %d papers to %s", len(rows), self.path)
