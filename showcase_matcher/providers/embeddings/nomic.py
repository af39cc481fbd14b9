"""
FILE: showcase_matcher/providers/embeddings/nomic.py

Nomic Atlas embeddings provider (hosted API).

POST {base_url}/v1/embedding/text with bearer auth,
body {"model": ..., "texts": [text]}, response {"embeddings": [[...]]}.

The API key is required at construction time (explicit config -> NOMIC_API_KEY);
a missing key fails before any request is made.

Expected env vars:
- NOMIC_API_KEY=...
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, List, Optional

from showcase_matcher.config.constants import (
    DEFAULT_NOMIC_BASE_URL,
    DEFAULT_NOMIC_MODEL,
    NOMIC_EMBEDDING_PATH,
)
from showcase_matcher.core.exceptions import EmbeddingError, EmbeddingErrorCode, HttpError
from showcase_matcher.providers.http.base import IHttpClient
from showcase_matcher.providers.http.httpx_client import HttpxClient, HttpxClientConfig
from .base import EmbeddingProviderType, IEmbeddingsProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NomicEmbeddingsConfig:
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model: Optional[str] = None
    timeout_s: Optional[float] = None


class NomicEmbeddingsProvider(IEmbeddingsProvider):
    name = EmbeddingProviderType.NOMIC.value

    def __init__(
        self,
        http_client: Optional[IHttpClient] = None,
        config: Optional[NomicEmbeddingsConfig] = None,
    ):
        """
        Args:
            http_client: transport; an HttpxClient is created when None
            config: explicit settings; unset fields fall back to env / defaults

        Raises:
            EmbeddingError(MISSING_API_KEY): before any transport is created
        """
        config = config or NomicEmbeddingsConfig()
        self.api_key = config.api_key or os.getenv("NOMIC_API_KEY") or ""
        self.base_url = (config.base_url or DEFAULT_NOMIC_BASE_URL).rstrip("/")
        self.model = config.model or DEFAULT_NOMIC_MODEL
        self.timeout_s = config.timeout_s

        if not self.api_key:
            raise EmbeddingError(
                "NOMIC_API_KEY is required",
                code=EmbeddingErrorCode.MISSING_API_KEY,
            )

        self.http_client = http_client or HttpxClient(HttpxClientConfig(timeout_s=self.timeout_s))

        logger.info("NomicEmbeddingsProvider created: model=%s", self.model)

    async def create_embedding(self, text: str) -> List[float]:
        url = f"{self.base_url}{NOMIC_EMBEDDING_PATH}"

        try:
            response = await self.http_client.post(
                url,
                {"model": self.model, "texts": [text]},
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                timeout=self.timeout_s,
            )
        except HttpError as e:
            raise self._classify_http_error(e) from e
        except Exception as e:
            message = str(e) or "Unknown error"
            raise EmbeddingError(
                f"Failed to create embedding: {message}",
                code=EmbeddingErrorCode.EMBEDDING_ERROR,
                cause=e,
            ) from e

        data = response.data if isinstance(response.data, dict) else {}
        return self._first_embedding(data.get("embeddings"), "Nomic API")

    def _classify_http_error(self, error: HttpError) -> EmbeddingError:
        if error.status is None:
            # network failure: no response reached us
            return EmbeddingError(
                f"Failed to create embedding: {error.message}",
                code=EmbeddingErrorCode.EMBEDDING_ERROR,
                cause=error,
            )

        if error.has_status(401) or error.has_status(403):
            return EmbeddingError(
                "Authentication failed. Please check your NOMIC_API_KEY",
                code=EmbeddingErrorCode.AUTH_FAILED,
                cause=error,
            )

        if error.has_status(429):
            return EmbeddingError(
                "Rate limit exceeded. Please try again later",
                code=EmbeddingErrorCode.RATE_LIMIT,
                cause=error,
            )

        if error.has_status(400):
            return EmbeddingError(
                f"Invalid request: {extract_error_message(error.response)}",
                code=EmbeddingErrorCode.INVALID_REQUEST,
                cause=error,
            )

        if error.is_server_error():
            return EmbeddingError(
                "Nomic API server error. Please try again later",
                code=EmbeddingErrorCode.SERVER_ERROR,
                cause=error,
            )

        return EmbeddingError(
            f"Nomic API request failed: {error.status} {error.status_text or ''}".rstrip(),
            code=EmbeddingErrorCode.HTTP_ERROR,
            cause=error,
        )

    async def shutdown(self) -> None:
        await self.http_client.close()
        logger.info("NomicEmbeddingsProvider shutdown complete")


def extract_error_message(body: Any) -> str:
    """Pull a message out of an error response body: `error`, `message`, raw string."""
    if isinstance(body, dict):
        if body.get("error"):
            return str(body["error"])
        if body.get("message"):
            return str(body["message"])
    if isinstance(body, str) and body:
        return body
    return "Unknown error"


__all__ = ["NomicEmbeddingsConfig", "NomicEmbeddingsProvider", "extract_error_message"]
