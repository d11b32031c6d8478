"""Async semantic search through the OpenAI-compatible embedding gateway.

Requires the `openai` package and AI_GATEWAY_API_KEY (read from .env).
"""

from __future__ import annotations

import asyncio
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
    AsyncGatewayEmbeddingProvider,
    AsyncSemanticSearch,
    JsonFileLibraryStorage,
    LibrarySettings,
    PaperLibrary,
    SearchUnavailableError,
    configure_logging,
)


async def main() -> None:
    settings = LibrarySettings.from_env()
    configure_logging(settings.log_level, settings.log_file)

    library = PaperLibrary(JsonFileLibraryStorage(settings.library_path))
    search = AsyncSemanticSearch(
        library,
        AsyncGatewayEmbeddingProvider.from_settings(settings),
        default_top_k=settings.default_top_k,
    )

    query = " ".join(sys.argv[1:]) or "neural diffusion stability"
    try:
        results = await search.search(query)
    except SearchUnavailableError as exc:
        print(f"Search unavailable: {exc}")
        return

    for hit in results:
        print(f"{hit.score:.3f}  {hit.document.metadata['title']}")


if __name__ == "__main__":
    asyncio.run(main())
