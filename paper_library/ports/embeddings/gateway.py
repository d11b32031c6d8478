"""OpenAI-compatible embedding gateway adapter.

This adapter is optional and requires the `openai` package installed.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from ...core.errors import EmbeddingError
from ...core.settings import (
    DEFAULT_EMBED_MODEL,
    DEFAULT_GATEWAY_BASE_URL,
    DEFAULT_MAX_EMBED_CHARS,
    LibrarySettings,
)
from .base import clamp_text, coerce_embedding

logger = logging.getLogger(__name__)

GATEWAY_TITLE = "StudyDoc"


def _import_openai() -> Any:
    try:
        import openai  # type: ignore[import-not-found]
    except ImportError as exc:  # pragma: no cover - env dependent
        raise ImportError(
            "openai is required for the gateway embedding providers. "
            "Install with `pip install openai`."
        ) from exc
    return openai


class _GatewayConfig:
    def __init__(
        self,
        *,
        api_key: Optional[str],
        base_url: str,
        model: str,
        max_chars: int,
    ) -> None:
        if max_chars <= 0:
            raise ValueError("max_chars must be > 0")
        self.api_key = api_key
        self.base_url = base_url
        self.model = model
        self.max_chars = max_chars

    def request_input(self, text: str) -> str:
        if not text or not text.strip():
            raise ValueError("Missing text")
        return clamp_text(text, self.max_chars)

    def parse(self, response: Any) -> List[float]:
        data = getattr(response, "data", None)
        if not data:
            raise EmbeddingError("Empty embedding response")
        return coerce_embedding(getattr(data[0], "embedding", None), source=self.base_url)


class GatewayEmbeddingProvider(_GatewayConfig):
    """Embeds text through an OpenAI-compatible `/embeddings` endpoint."""

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        base_url: str = DEFAULT_GATEWAY_BASE_URL,
        model: str = DEFAULT_EMBED_MODEL,
        max_chars: int = DEFAULT_MAX_EMBED_CHARS,
        client: Any = None,
    ) -> None:
        """Create a gateway provider.

        Args:
            api_key: Gateway API key; the `openai` client falls back to
                `OPENAI_API_KEY` when omitted.
            base_url: OpenAI-compatible API root.
            model: Embedding model name.
            max_chars: Input is clamped to this many characters.
            client: Pre-built client (skips importing `openai`).
        """

        super().__init__(api_key=api_key, base_url=base_url, model=model, max_chars=max_chars)
        if client is None:
            openai = _import_openai()
            client = openai.OpenAI(
                api_key=api_key,
                base_url=base_url,
                default_headers={"x-title": GATEWAY_TITLE},
            )
        self.client = client

    @classmethod
    def from_settings(cls, settings: LibrarySettings, **kwargs: Any) -> "GatewayEmbeddingProvider":
        return cls(
            api_key=settings.gateway_api_key,
            base_url=settings.gateway_base_url,
            model=settings.embed_model,
            max_chars=settings.max_embed_chars,
            **kwargs,
        )

    def embed(self, text: str) -> List[float]:
        request_input = self.request_input(text)
        try:
            response = self.client.embeddings.create(model=self.model, input=request_input)
        except Exception as exc:
            logger.error("Embedding gateway error: %s", exc)
            raise EmbeddingError(f"Embedding gateway error: {exc}") from exc
        vector = self.parse(response)
        logger.debug("Embedded %d chars into %d dimensions", len(request_input), len(vector))
        return vector


class AsyncGatewayEmbeddingProvider(_GatewayConfig):
    """Async variant backed by `openai.AsyncOpenAI`."""

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        base_url: str = DEFAULT_GATEWAY_BASE_URL,
        model: str = DEFAULT_EMBED_MODEL,
        max_chars: int = DEFAULT_MAX_EMBED_CHARS,
        client: Any = None,
    ) -> None:
        super().__init__(api_key=api_key, base_url=base_url, model=model, max_chars=max_chars)
        if client is None:
            openai = _import_openai()
            client = openai.AsyncOpenAI(
                api_key=api_key,
                base_url=base_url,
                default_headers={"x-title": GATEWAY_TITLE},
            )
        self.client = client

    @classmethod
    def from_settings(
        cls, settings: LibrarySettings, **kwargs: Any
    ) -> "AsyncGatewayEmbeddingProvider":
        return cls(
            api_key=settings.gateway_api_key,
            base_url=settings.gateway_base_url,
            model=settings.embed_model,
            max_chars=settings.max_embed_chars,
            **kwargs,
        )

    async def embed(self, text: str) -> List[float]:
        request_input = self.request_input(text)
        try:
            response = await self.client.embeddings.create(model=self.model, input=request_input)
        except Exception as exc:
            logger.error("Embedding gateway error: %s", exc)
            raise EmbeddingError(f"Embedding gateway error: {exc}") from exc
        return self.parse(response)
