"""Tests - Nomic embeddings provider."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from showcase_matcher.core.exceptions import EmbeddingError, HttpError
from showcase_matcher.providers.embeddings.nomic import (
    NomicEmbeddingsConfig,
    NomicEmbeddingsProvider,
    extract_error_message,
)
from showcase_matcher.providers.http.base import HttpResponse


def make_provider(post=None, **config):
    http_client = MagicMock()
    http_client.post = post or AsyncMock()
    http_client.close = AsyncMock()
    config.setdefault("api_key", "test-key")
    return NomicEmbeddingsProvider(http_client, NomicEmbeddingsConfig(**config)), http_client


class TestConstruction:
    def test_missing_api_key_fails_early(self):
        with pytest.raises(EmbeddingError) as exc_info:
            NomicEmbeddingsProvider(MagicMock(), NomicEmbeddingsConfig())
        assert exc_info.value.code == "MISSING_API_KEY"

    def test_api_key_from_env(self, monkeypatch):
        monkeypatch.setenv("NOMIC_API_KEY", "env-key")
        provider = NomicEmbeddingsProvider(MagicMock())
        assert provider.api_key == "env-key"
        assert provider.model == "nomic-embed-text-v1"


class TestCreateEmbedding:
    @pytest.mark.asyncio
    async def test_posts_model_and_texts_with_bearer(self):
        post = AsyncMock(return_value=HttpResponse(data={"embeddings": [[0.5, 0.6]]}, status=200))
        provider, _ = make_provider(post, timeout_s=3.0)

        assert await provider.create_embedding("idea") == [0.5, 0.6]

        args, kwargs = post.call_args
        assert args[0] == "https://api-atlas.nomic.ai/v1/embedding/text"
        assert args[1] == {"model": "nomic-embed-text-v1", "texts": ["idea"]}
        assert kwargs["headers"]["Authorization"] == "Bearer test-key"
        assert kwargs["timeout"] == 3.0

    @pytest.mark.asyncio
    async def test_custom_base_url(self):
        post = AsyncMock(return_value=HttpResponse(data={"embeddings": [[1.0]]}, status=200))
        provider, _ = make_provider(post, base_url="https://nomic.internal/")

        await provider.create_embedding("idea")
        assert post.call_args[0][0] == "https://nomic.internal/v1/embedding/text"

    @pytest.mark.asyncio
    async def test_empty_embeddings_raise(self):
        provider, _ = make_provider(AsyncMock(return_value=HttpResponse(data={"embeddings": []}, status=200)))

        with pytest.raises(EmbeddingError, match="No embeddings returned from Nomic API"):
            await provider.create_embedding("idea")

    @pytest.mark.parametrize(
        "status, code",
        [
            (401, "AUTH_FAILED"),
            (403, "AUTH_FAILED"),
            (429, "RATE_LIMIT"),
            (400, "INVALID_REQUEST"),
            (500, "SERVER_ERROR"),
            (503, "SERVER_ERROR"),
            (418, "HTTP_ERROR"),
        ],
    )
    @pytest.mark.asyncio
    async def test_status_mapping(self, status, code):
        error = HttpError(f"status {status}", status=status, response={"error": "bad texts"})
        provider, _ = make_provider(AsyncMock(side_effect=error))

        with pytest.raises(EmbeddingError) as exc_info:
            await provider.create_embedding("idea")

        assert exc_info.value.code == code
        assert exc_info.value.cause is error

    @pytest.mark.asyncio
    async def test_invalid_request_uses_body_message(self):
        error = HttpError("bad", status=400, response={"message": "texts must not be empty"})
        provider, _ = make_provider(AsyncMock(side_effect=error))

        with pytest.raises(EmbeddingError) as exc_info:
            await provider.create_embedding("")
        assert exc_info.value.message == "Invalid request: texts must not be empty"

    @pytest.mark.asyncio
    async def test_network_failure_is_embedding_error(self):
        provider, _ = make_provider(AsyncMock(side_effect=HttpError("timed out")))

        with pytest.raises(EmbeddingError) as exc_info:
            await provider.create_embedding("idea")
        assert exc_info.value.code == "EMBEDDING_ERROR"

    @pytest.mark.asyncio
    async def test_shutdown_closes_transport(self):
        provider, http_client = make_provider()
        await provider.shutdown()
        http_client.close.assert_awaited_once()


class TestExtractErrorMessage:
    def test_prefers_error_then_message(self):
        assert extract_error_message({"error": "e", "message": "m"}) == "e"
        assert extract_error_message({"message": "m"}) == "m"

    def test_raw_string_and_fallback(self):
        assert extract_error_message("plain text") == "plain text"
        assert extract_error_message(None) == "Unknown error"
        assert extract_error_message({}) == "Unknown error"
