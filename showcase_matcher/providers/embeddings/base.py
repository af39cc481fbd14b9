"""
FILE: showcase_matcher/providers/embeddings/base.py

Embeddings provider interface (contract).
All embeddings implementations must implement this.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, List, Optional

from showcase_matcher.core.exceptions import EmbeddingError


class EmbeddingProviderType(str, Enum):
    """Closed set of supported embedding backends."""

    OLLAMA = "ollama"
    NOMIC = "nomic"


class IEmbeddingsProvider(ABC):
    """Abstract base class for embeddings providers."""

    name: str = ""

    @abstractmethod
    async def create_embedding(self, text: str) -> List[float]:
        """
        Create an embedding vector for `text`.

        Returns:
            Fixed-dimension list[float]; dimension depends on the model.

        Raises:
            EmbeddingError: classified by code; never returns an empty vector.
        """
        raise NotImplementedError

    async def shutdown(self) -> None:
        """Cleanup resources."""
        return None

    @staticmethod
    def _first_embedding(embeddings: Optional[List[Any]], backend: str) -> List[float]:
        if not embeddings:
            raise EmbeddingError(f"No embeddings returned from {backend}")
        return list(embeddings[0])
