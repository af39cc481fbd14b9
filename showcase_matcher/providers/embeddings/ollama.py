"""
FILE: showcase_matcher/providers/embeddings/ollama.py

Ollama embeddings provider (local model server).

Model resolution: explicit config -> OLLAMA_EMBED_MODEL -> OLLAMA_MODEL
-> "nomic-embed-text". Host resolution: explicit config -> OLLAMA_URL
-> http://localhost:11434. Both are resolved once, at construction; the host
is handed to the SDK client instead of being written to the process env.

Expected env vars:
- OLLAMA_EMBED_MODEL=nomic-embed-text
- OLLAMA_URL=http://localhost:11434
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, List, Optional

import httpx
from ollama import AsyncClient, ResponseError

from showcase_matcher.config.constants import DEFAULT_OLLAMA_MODEL, DEFAULT_OLLAMA_URL
from showcase_matcher.core.exceptions import EmbeddingError, EmbeddingErrorCode
from .base import EmbeddingProviderType, IEmbeddingsProvider

logger = logging.getLogger(__name__)

_CONNECTION_MARKERS = ("connection refused", "econnrefused", "failed to connect")
_MODEL_MISSING_MARKERS = ("model not found", "pull model", "no such model")


@dataclass(frozen=True)
class OllamaEmbeddingsConfig:
    model: Optional[str] = None
    base_url: Optional[str] = None
    timeout_s: Optional[float] = None


class OllamaEmbeddingsProvider(IEmbeddingsProvider):
    name = EmbeddingProviderType.OLLAMA.value

    def __init__(
        self,
        config: Optional[OllamaEmbeddingsConfig] = None,
        client: Optional[Any] = None,
    ):
        config = config or OllamaEmbeddingsConfig()
        self.model = (
            config.model
            or os.getenv("OLLAMA_EMBED_MODEL")
            or os.getenv("OLLAMA_MODEL")
            or DEFAULT_OLLAMA_MODEL
        )
        self.base_url = config.base_url or os.getenv("OLLAMA_URL") or DEFAULT_OLLAMA_URL
        self.timeout_s = config.timeout_s
        self._client = client or AsyncClient(host=self.base_url, timeout=self.timeout_s)
        logger.info("OllamaEmbeddingsProvider created: model=%s host=%s", self.model, self.base_url)

    async def create_embedding(self, text: str) -> List[float]:
        try:
            response = await self._client.embed(model=self.model, input=text)
        except Exception as e:
            raise self._classify(e) from e

        if isinstance(response, dict):
            embeddings = response.get("embeddings")
        else:
            embeddings = getattr(response, "embeddings", None)
        return self._first_embedding(embeddings, "Ollama")

    def _classify(self, error: Exception) -> EmbeddingError:
        if self._is_connection_error(error):
            return EmbeddingError(
                f"Ollama is not running at {self.base_url}. "
                f"Please start Ollama with: 'ollama serve' and pull the model with: "
                f"'ollama pull {self.model}'",
                code=EmbeddingErrorCode.CONNECTION_REFUSED,
                cause=error,
            )

        if self._is_model_not_found_error(error):
            return EmbeddingError(
                f"Model '{self.model}' not found. "
                f"Please pull the model with: 'ollama pull {self.model}'",
                code=EmbeddingErrorCode.MODEL_NOT_FOUND,
                cause=error,
            )

        message = str(error) or "Unknown Ollama error"
        return EmbeddingError(
            f"Ollama embedding failed: {message}",
            code=EmbeddingErrorCode.OLLAMA_ERROR,
            cause=error,
        )

    @staticmethod
    def _is_connection_error(error: Exception) -> bool:
        if isinstance(error, (ConnectionError, httpx.ConnectError)):
            return True
        message = str(error).lower()
        return any(marker in message for marker in _CONNECTION_MARKERS)

    @staticmethod
    def _is_model_not_found_error(error: Exception) -> bool:
        if isinstance(error, ResponseError) and error.status_code == 404:
            return True
        message = str(error).lower()
        if any(marker in message for marker in _MODEL_MISSING_MARKERS):
            return True
        # e.g. 'model "nomic-embed-text" not found, try pulling it first'
        return "model" in message and "not found" in message


__all__ = ["OllamaEmbeddingsConfig", "OllamaEmbeddingsProvider"]
