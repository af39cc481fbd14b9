"""
================================================================================
FILE: showcase_matcher/core/search_handler.py
================================================================================

PURPOSE:
    Orchestrate "embed an idea, find similar showcase projects". Owns the
    translation from raw backend failures into client-safe messages.

WORKFLOW:
    1. create_embedding(text)
         - delegate to the injected IEmbeddingsProvider
         - on failure: log full details server side, raise ProjectSearchError
           carrying the formatted, sanitized message
    2. search_similar_projects(embedding, limit=10)
         - search the fixed collection "eth_global_showcase"
         - map each payload to Project, keep backend (descending score) order
         - on failure: log and re-raise unchanged

INPUTS:
    - embedding_provider: IEmbeddingsProvider (from EmbeddingFactory)
    - vector_db: IVectorDBProvider (QdrantProvider in production)
    - production: enables message redaction

OUTPUTS:
    - List[float] embeddings, List[Project] matches

KEY FACTS:
    - No retries, no caching: every call hits the backends
    - ProjectSearchError passes through create_embedding untouched, so a
      message is never formatted twice
    - Search failures are NOT sanitized here; the API layer does that
"""

import logging
from typing import Iterable, List, Optional

from showcase_matcher.config.constants import COLLECTION_NAME, SEARCH_DEFAULT_LIMIT
from showcase_matcher.core.error_formatter import ErrorFormatter
from showcase_matcher.core.exceptions import ProjectSearchError
from showcase_matcher.core.models import Project
from showcase_matcher.providers.embeddings.base import EmbeddingProviderType, IEmbeddingsProvider
from showcase_matcher.providers.vectordb.base import IVectorDBProvider, VectorSearchQuery

logger = logging.getLogger(__name__)


class ProjectSearchHandler:
    """
    Similarity search over the showcase collection.
    All operations are async (non-blocking).
    """

    COLLECTION_NAME = COLLECTION_NAME

    def __init__(
        self,
        embedding_provider: IEmbeddingsProvider,
        vector_db: IVectorDBProvider,
        production: bool = False,
        model_names: Optional[Iterable[str]] = None,
        error_formatter: Optional[ErrorFormatter] = None,
    ):
        """
        Args:
            embedding_provider: Pre-built provider (created by EmbeddingFactory)
            vector_db: Pre-built vector DB provider
            production: Redact backend details from error messages
            model_names: Extra model names to redact besides nomic-embed-text
            error_formatter: Override the formatter (tests)
        """
        self.embedding_provider = embedding_provider
        self.vector_db = vector_db
        self.formatter = error_formatter or ErrorFormatter(production=production, model_names=model_names)
        logger.info(
            f"ProjectSearchHandler initialized (provider={getattr(embedding_provider, 'name', '?')}, "
            f"production={self.formatter.production})"
        )

    @property
    def error_context(self) -> str:
        if getattr(self.embedding_provider, "name", None) == EmbeddingProviderType.OLLAMA.value:
            return "Ollama"
        return "Embedding"

    def format_error(self, error: object, context: Optional[str] = None) -> str:
        """Client-safe message for `error` (used by the API layer too)."""
        return self.formatter.format_error(error, context or self.error_context)

    def sanitize(self, message: str) -> str:
        return self.formatter.sanitize(message)

    async def create_embedding(self, text: str) -> List[float]:
        try:
            return await self.embedding_provider.create_embedding(text)
        except ProjectSearchError:
            raise
        except Exception as e:
            logger.error(
                f"Embedding creation failed: {type(e).__name__}: {e}",
                exc_info=True,
                extra={
                    "error_code": getattr(e, "error_code", None),
                    "provider": getattr(self.embedding_provider, "name", None),
                },
            )
            raise ProjectSearchError(
                self.format_error(e),
                error_code=getattr(e, "error_code", None) or "EMBEDDING_ERROR",
                cause=e,
            ) from e

    async def search_similar_projects(
        self,
        embedding: List[float],
        limit: int = SEARCH_DEFAULT_LIMIT,
    ) -> List[Project]:
        try:
            results = await self.vector_db.search(
                self.COLLECTION_NAME,
                VectorSearchQuery(vector=embedding, limit=limit),
            )
        except Exception as e:
            logger.error(f"Failed to search for similar projects: {e}", exc_info=True)
            raise

        projects = [Project.from_payload(r.payload) for r in results if r.payload is not None]
        projects = projects[:limit]

        logger.debug(f"Similarity search returned {len(projects)} projects (limit={limit})")
        return projects

    async def search_projects(self, text: str, limit: int = SEARCH_DEFAULT_LIMIT) -> List[Project]:
        """Embed `text` and return the most similar projects."""
        embedding = await self.create_embedding(text)
        return await self.search_similar_projects(embedding, limit=limit)


__all__ = ["ProjectSearchHandler"]
