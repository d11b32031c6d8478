"""Keyword listing and semantic search over an in-memory library."""

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

from paper_library import (
    InMemoryLibraryStorage,
    PaperLibrary,
    SemanticSearch,
    StaticEmbeddingProvider,
)


def main() -> None:
    library = PaperLibrary(InMemoryLibraryStorage())
    library.add_paper(title="Denoising Diffusion", category="AI", embedding=[0.9, 0.1, 0.0])
    library.add_paper(title="Protein Folding", category="Biology", embedding=[0.0, 0.2, 0.9])
    favorite = library.add_paper(title="Score Matching", category="AI", embedding=[0.8, 0.3, 0.1])
    library.toggle_favorite(favorite)

    # Keyword mode: substring match, favorites first.
    print("Keyword 'ing':", [paper.title for paper in library.list_papers("ing")])
    print("Categories:", library.categories())

    # Semantic mode: the static provider stands in for the embedding gateway.
    embedder = StaticEmbeddingProvider({"generative models": [1.0, 0.0, 0.0]})
    search = SemanticSearch(library, embedder, default_top_k=2)
    for hit in search.search("generative models"):
        print(f"{hit.document.metadata['title']}: {hit.score:.3f}")


if __name__ == "__main__":
    main()
