"""Rank a handful of documents with the pure-Python ranker."""

from __future__ import annotations

import sys
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "paper_library").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from paper_library import IndexedDocument, rank


def main() -> None:
    candidates = [
        IndexedDocument("a", [1.0, 0.0]),
        IndexedDocument("b", [0.0, 1.0]),
        IndexedDocument("c", [0.7, 0.7]),
        # No embedding yet: never ranked.
        IndexedDocument("pending"),
        # Different dimensionality: skipped, not an error.
        IndexedDocument("other-model", [1.0, 0.0, 0.0]),
    ]

    for hit in rank([1.0, 0.0], candidates, top_k=3):
        print(f"{hit.id}: {hit.score:.3f}")

    print("Empty query:", rank([], candidates, top_k=3))


if __name__ == "__main__":
    main()
