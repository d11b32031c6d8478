"""Persist the library to a JSON file and list related papers."""

from __future__ import annotations

import sys
import tempfile
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "paper_library").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from paper_library import (
    JsonFileLibraryStorage,
    PaperLibrary,
    SemanticSearch,
    StaticEmbeddingProvider,
    configure_logging,
)


def main() -> None:
    configure_logging("INFO")

    with tempfile.TemporaryDirectory() as tmp:
        storage = JsonFileLibraryStorage(Path(tmp) / "library.json", indent=2)
        library = PaperLibrary(storage)

        anchor = library.add_paper(title="Attention Is All You Need", source_id="attention.pdf")
        library.add_paper(title="BERT", embedding=[0.9, 0.4])
        library.add_paper(title="ResNet", embedding=[0.1, 1.0])

        # The embedding arrives after the paper was saved.
        library.set_embedding(anchor, [1.0, 0.3])

        reopened = PaperLibrary(JsonFileLibraryStorage(Path(tmp) / "library.json"))
        search = SemanticSearch(reopened, StaticEmbeddingProvider())
        for hit in search.related(anchor, top_k=2):
            print(f"related: {hit.document.metadata['title']} ({hit.score:.3f})")


if __name__ == "__main__":
    main()
