"""
================================================================================
FILE: showcase_matcher/container/factories.py
================================================================================

PURPOSE:
    Build providers and the search handler from a provider tag + config.

PROVIDER SELECTION (EmbeddingFactory.create):
    explicit argument -> EMBEDDING_PROVIDER env var -> "nomic"

    tag       provider                   transport
    --------  -------------------------  -------------------------------
    ollama    OllamaEmbeddingsProvider   ollama.AsyncClient
    nomic     NomicEmbeddingsProvider    HttpxClient (or injected client)
    <custom>  registered builder         whatever the builder returns

KEY FACTS:
    - Unknown tags fail at construction time with ConfigurationError
    - Nomic without an API key fails at construction time (MISSING_API_KEY)
    - Construction never performs network I/O
"""

import logging
import os
from dataclasses import fields, is_dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Type, Union

from showcase_matcher.core.exceptions import ConfigurationError
from showcase_matcher.core.search_handler import ProjectSearchHandler
from showcase_matcher.providers.embeddings.base import EmbeddingProviderType, IEmbeddingsProvider
from showcase_matcher.providers.embeddings.nomic import NomicEmbeddingsConfig, NomicEmbeddingsProvider
from showcase_matcher.providers.embeddings.ollama import OllamaEmbeddingsConfig, OllamaEmbeddingsProvider
from showcase_matcher.providers.http.base import IHttpClient
from showcase_matcher.providers.vectordb.base import IVectorDBProvider
from showcase_matcher.providers.vectordb.qdrant import QdrantConfig, QdrantProvider

logger = logging.getLogger(__name__)

ProviderBuilder = Callable[[Optional[Mapping[str, Any]], Optional[IHttpClient]], IEmbeddingsProvider]
ConfigLike = Union[Mapping[str, Any], Any, None]


def _coerce_config(config: ConfigLike, config_cls: Type) -> Any:
    """Accept a ready config dataclass or a dict of its fields (unknown keys dropped)."""
    if config is None:
        return config_cls()
    if is_dataclass(config) and not isinstance(config, type):
        return config
    allowed = {f.name for f in fields(config_cls)}
    return config_cls(**{k: v for k, v in dict(config).items() if k in allowed})


class EmbeddingFactory:
    """Creates embedding providers by tag."""

    _custom: Dict[str, ProviderBuilder] = {}

    @classmethod
    def register(cls, tag: str, builder: ProviderBuilder) -> None:
        """Register a builder for a tag outside the built-in set."""
        key = tag.strip().lower()
        if key in {t.value for t in EmbeddingProviderType}:
            raise ConfigurationError(f"Cannot override built-in embedding provider: {key}")
        cls._custom[key] = builder
        logger.info(f"Registered custom embedding provider: {key}")

    @classmethod
    def unregister(cls, tag: str) -> None:
        cls._custom.pop(tag.strip().lower(), None)

    @classmethod
    def create(
        cls,
        provider: Optional[str] = None,
        config: ConfigLike = None,
        http_client: Optional[IHttpClient] = None,
    ) -> IEmbeddingsProvider:
        tag = (provider or os.getenv("EMBEDDING_PROVIDER") or EmbeddingProviderType.NOMIC.value).strip().lower()

        if tag in cls._custom:
            logger.info(f"✓ Embedding provider selected: {tag} (custom)")
            return cls._custom[tag](config, http_client)

        try:
            provider_type = EmbeddingProviderType(tag)
        except ValueError:
            raise ConfigurationError(f"Unsupported embedding provider: {tag}") from None

        if provider_type is EmbeddingProviderType.OLLAMA:
            instance: IEmbeddingsProvider = OllamaEmbeddingsProvider(
                _coerce_config(config, OllamaEmbeddingsConfig)
            )
        else:
            instance = NomicEmbeddingsProvider(http_client, _coerce_config(config, NomicEmbeddingsConfig))

        logger.info(f"✓ Embedding provider selected: {provider_type.value}")
        return instance


class SearchHandlerFactory:
    """Creates ProjectSearchHandler instances."""

    @staticmethod
    def create(
        embedding_provider: Optional[IEmbeddingsProvider] = None,
        vector_db: Optional[IVectorDBProvider] = None,
        provider: Optional[str] = None,
        embedding_config: ConfigLike = None,
        vector_db_config: Optional[QdrantConfig] = None,
        production: Optional[bool] = None,
    ) -> ProjectSearchHandler:
        """
        Args:
            embedding_provider: ready provider; built by EmbeddingFactory when None
            vector_db: ready vector DB client; QdrantProvider when None
            provider / embedding_config: forwarded to EmbeddingFactory.create()
            vector_db_config: QdrantConfig for the default client
            production: redact errors; defaults to NODE_ENV == "production"
        """
        if production is None:
            production = os.getenv("NODE_ENV") == "production"

        embedding_provider = embedding_provider or EmbeddingFactory.create(provider, embedding_config)
        vector_db = vector_db or QdrantProvider(vector_db_config)

        model_names = [getattr(embedding_provider, "model", None)]
        return ProjectSearchHandler(
            embedding_provider,
            vector_db,
            production=production,
            model_names=[m for m in model_names if m],
        )

    @classmethod
    def create_default(cls) -> ProjectSearchHandler:
        """Handler wired entirely from the environment."""
        return cls.create()


__all__ = ["EmbeddingFactory", "SearchHandlerFactory"]
