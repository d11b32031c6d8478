from __future__ import annotations

import types
import unittest
from unittest.mock import AsyncMock, MagicMock, patch

from paper_library import (
    AsyncGatewayEmbeddingProvider,
    EmbeddingError,
    GatewayEmbeddingProvider,
    LibrarySettings,
    SearchUnavailableError,
    SemanticSearch,
    PaperLibrary,
    LibraryPaper,
    StaticEmbeddingProvider,
    clamp_text,
)


def _response(vector):  # noqa: ANN001,ANN202
    item = types.SimpleNamespace(embedding=vector)
    return types.SimpleNamespace(data=[item] if vector is not None else [])


class ClampTextTests(unittest.TestCase):
    def test_clamps_by_characters(self) -> None:
        self.assertEqual(clamp_text("abcdef", 4), "abcd")
        self.assertEqual(clamp_text("abc", 4), "abc")
        self.assertEqual(clamp_text("", 4), "")
        with self.assertRaises(ValueError):
            clamp_text("abc", 0)


class GatewayEmbeddingProviderTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = MagicMock()
        self.client.embeddings.create.return_value = _response([0.1, 0.2, 0.3])
        self.provider = GatewayEmbeddingProvider(client=self.client, model="m", max_chars=5)

    def test_embed_clamps_input_and_parses_vector(self) -> None:
        vector = self.provider.embed("0123456789")

        self.assertEqual(vector, [0.1, 0.2, 0.3])
        self.client.embeddings.create.assert_called_once_with(model="m", input="01234")

    def test_blank_text_is_rejected(self) -> None:
        with self.assertRaisesRegex(ValueError, "Missing text"):
            self.provider.embed("   ")
        self.client.embeddings.create.assert_not_called()

    def test_empty_or_bad_response_raises_embedding_error(self) -> None:
        for response in (_response(None), _response([]), _response(["a"]), object()):
            with self.subTest(response=response):
                self.client.embeddings.create.return_value = response
                with self.assertRaises(EmbeddingError):
                    self.provider.embed("text")

    def test_transport_errors_are_wrapped(self) -> None:
        self.client.embeddings.create.side_effect = RuntimeError("503 Service Unavailable")
        with self.assertRaisesRegex(EmbeddingError, "503"):
            self.provider.embed("text")

    def test_search_reports_gateway_outage_as_unavailable(self) -> None:
        self.client.embeddings.create.side_effect = RuntimeError("down")
        library = PaperLibrary(papers=[LibraryPaper(title="T", embedding=[1, 0])])
        search = SemanticSearch(library, self.provider)

        with self.assertRaises(SearchUnavailableError):
            search.search("query")

    def test_builds_openai_client_from_settings(self) -> None:
        fake_openai = types.ModuleType("openai")
        fake_openai.OpenAI = MagicMock(name="OpenAI")
        fake_openai.AsyncOpenAI = MagicMock(name="AsyncOpenAI")
        settings = LibrarySettings(
            gateway_base_url="https://gateway.example/v1",
            gateway_api_key="secret",
            embed_model="text-embed",
            max_embed_chars=100,
        )

        with patch.dict("sys.modules", {"openai": fake_openai}):
            provider = GatewayEmbeddingProvider.from_settings(settings)
            async_provider = AsyncGatewayEmbeddingProvider.from_settings(settings)

        fake_openai.OpenAI.assert_called_once_with(
            api_key="secret",
            base_url="https://gateway.example/v1",
            default_headers={"x-title": "StudyDoc"},
        )
        fake_openai.AsyncOpenAI.assert_called_once()
        self.assertIs(provider.client, fake_openai.OpenAI.return_value)
        self.assertEqual(provider.model, "text-embed")
        self.assertEqual(async_provider.max_chars, 100)

    def test_missing_openai_package(self) -> None:
        with patch.dict("sys.modules", {"openai": None}):
            with self.assertRaisesRegex(ImportError, "openai is required"):
                GatewayEmbeddingProvider()


class AsyncGatewayEmbeddingProviderTests(unittest.IsolatedAsyncioTestCase):
    async def test_async_embed(self) -> None:
        client = MagicMock()
        client.embeddings.create = AsyncMock(return_value=_response([1, 2]))
        provider = AsyncGatewayEmbeddingProvider(client=client, max_chars=3)

        self.assertEqual(await provider.embed("abcdef"), [1.0, 2.0])
        client.embeddings.create.assert_awaited_once_with(
            model="openai/text-embedding-3-small", input="abc"
        )

    async def test_async_errors_are_wrapped(self) -> None:
        client = MagicMock()
        client.embeddings.create = AsyncMock(side_effect=TimeoutError("slow"))
        provider = AsyncGatewayEmbeddingProvider(client=client)

        with self.assertRaises(EmbeddingError):
            await provider.embed("abc")


class StaticEmbeddingProviderTests(unittest.TestCase):
    def test_lookup_and_fallback(self) -> None:
        provider = StaticEmbeddingProvider({"a": [1, 0]}, fallback=lambda text: [len(text), 1])

        self.assertEqual(provider.embed("a"), [1, 0])
        self.assertEqual(provider.embed("abc"), [3.0, 1.0])
        self.assertEqual(provider.calls, ["a", "abc"])

    def test_fallback_must_return_vector(self) -> None:
        provider = StaticEmbeddingProvider(fallback=lambda text: [])
        with self.assertRaises(EmbeddingError):
            provider.embed("x")


if __name__ == "__main__":
    unittest.main()
