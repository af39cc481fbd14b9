"""
FILE: showcase_matcher/providers/embeddings/__init__.py

Embeddings providers package.

This file re-exports:
- IEmbeddingsProvider interface and the EmbeddingProviderType enum
- the Ollama (local) and Nomic (hosted) providers

Construct providers through showcase_matcher.container.factories.EmbeddingFactory.
"""

from .base import EmbeddingProviderType, IEmbeddingsProvider
from .nomic import NomicEmbeddingsConfig, NomicEmbeddingsProvider
from .ollama import OllamaEmbeddingsConfig, OllamaEmbeddingsProvider

__all__ = [
    "EmbeddingProviderType",
    "IEmbeddingsProvider",
    "NomicEmbeddingsConfig",
    "NomicEmbeddingsProvider",
    "OllamaEmbeddingsConfig",
    "OllamaEmbeddingsProvider",
]
