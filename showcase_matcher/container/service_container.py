"""
================================================================================
SERVICE CONTAINER - PROVIDER WIRING & LIFECYCLE
================================================================================

Main dependency injection container.

Settings decide WHICH provider is built; the provider module owns its
defaults (model names, URLs). The container only wires them together.

USAGE (search: API, showcase-search):

  container = ServiceContainer(settings)
  await container.initialize()
  handler = container.get_search_handler()
  projects = await handler.search_projects("zk voting app")
  await container.shutdown()

USAGE (maintenance: showcase-dedupe):

  container = ServiceContainer(settings)
  resolver = container.create_duplicate_resolver(batch_size=50)
  report = await resolver.run()
  await container.shutdown()

  Only the vector DB is built; no embedding provider (or NOMIC_API_KEY)
  is needed to deduplicate.

FLOW:

  .env: EMBEDDING_PROVIDER=ollama
    ↓
  settings.embedding_provider = "ollama"
    ↓
  EmbeddingFactory.create("ollama", settings.get_embeddings_config())
    ↓
  QdrantProvider(settings.get_vector_db_config())
    ↓
  ProjectSearchHandler
"""

import logging
from typing import Optional

from showcase_matcher.config.settings import Settings
from showcase_matcher.container.factories import EmbeddingFactory
from showcase_matcher.core.duplicate_resolver import DuplicateResolver
from showcase_matcher.core.exceptions import ServiceInitializationError, ShowcaseMatcherError
from showcase_matcher.core.search_handler import ProjectSearchHandler
from showcase_matcher.providers.embeddings.base import IEmbeddingsProvider
from showcase_matcher.providers.vectordb.base import IVectorDBProvider
from showcase_matcher.providers.vectordb.qdrant import QdrantConfig, QdrantProvider

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Dependency injection container for providers and core services.
    """

    def __init__(
        self,
        settings: Settings,
        embedding_provider: Optional[IEmbeddingsProvider] = None,
        vector_db: Optional[IVectorDBProvider] = None,
    ) -> None:
        """
        Initialize container with settings.

        Args:
            settings: Configuration object (from .env)
            embedding_provider: Optional pre-built provider (tests, custom tags)
            vector_db: Optional pre-built vector DB provider
        """
        self.settings = settings

        self._embeddings: Optional[IEmbeddingsProvider] = embedding_provider
        self._vectordb: Optional[IVectorDBProvider] = vector_db
        self._search_handler: Optional[ProjectSearchHandler] = None

        logger.info("ServiceContainer instantiated")

    async def initialize(self) -> None:
        """
        Build the embedding provider, the vector DB and the search handler.

        Raises:
            ServiceInitializationError: wrapping the underlying failure
        """
        try:
            logger.info("=" * 80)
            logger.info("INITIALIZING SERVICE CONTAINER")
            logger.info("=" * 80)

            if self._embeddings is None:
                self._embeddings = EmbeddingFactory.create(
                    self.settings.embedding_provider,
                    self.settings.get_embeddings_config(),
                )
            logger.info(f"✓ EMBEDDINGS initialized: {getattr(self._embeddings, 'name', '?')}")

            vector_db = self.get_vector_db()

            self._search_handler = ProjectSearchHandler(
                self._embeddings,
                vector_db,
                production=self.settings.is_production,
                model_names=self._model_names(),
            )

            logger.info("=" * 80)
            logger.info("✓ ServiceContainer initialized successfully")
            logger.info("=" * 80)

        except ShowcaseMatcherError as e:
            logger.error(f"ServiceContainer initialization failed: {e}", exc_info=True)
            raise ServiceInitializationError(
                f"Failed to initialize container: {e.message}",
                context={"error_code": e.error_code},
            ) from e
        except Exception as e:
            logger.error(f"ServiceContainer initialization failed: {str(e)}", exc_info=True)
            raise ServiceInitializationError(f"Failed to initialize container: {str(e)}") from e

    def _model_names(self):
        names = [
            self.settings.nomic_model,
            self.settings.resolved_ollama_model,
            getattr(self._embeddings, "model", None),
        ]
        return [n for n in names if n]

    async def shutdown(self) -> None:
        """Shutdown all providers."""
        logger.info("Shutting down ServiceContainer...")

        providers = [
            ("Embeddings", self._embeddings),
            ("VectorDB", self._vectordb),
        ]

        for name, provider in providers:
            if provider:
                try:
                    await provider.shutdown()
                    logger.info(f"✓ {name} shutdown complete")
                except Exception as e:
                    logger.error(f"Error shutting down {name}: {str(e)}")

        logger.info("✓ ServiceContainer shutdown complete")

    # ========================================================================
    # ACCESSOR METHODS
    # ========================================================================

    def get_vector_db(self) -> IVectorDBProvider:
        """VectorDB provider; the Qdrant client is built from settings on first use."""
        if self._vectordb is None:
            self._vectordb = QdrantProvider(QdrantConfig(**self.settings.get_vector_db_config()))
            logger.info("✓ VECTORDB initialized: qdrant")
        return self._vectordb

    def get_search_handler(self) -> ProjectSearchHandler:
        if self._search_handler is None:
            raise RuntimeError("Search handler not initialized")
        return self._search_handler

    def create_duplicate_resolver(
        self,
        collection_name: Optional[str] = None,
        batch_size: Optional[int] = None,
    ) -> DuplicateResolver:
        """
        Resolver over the container's vector DB.

        Args:
            collection_name: overrides the showcase collection
            batch_size: overrides DEDUP_BATCH_SIZE
        """
        kwargs = {"collection_name": collection_name} if collection_name else {}
        return DuplicateResolver(
            self.get_vector_db(),
            batch_size=batch_size or self.settings.dedup_batch_size,
            page_size=self.settings.dedup_scroll_page_size,
            max_points=self.settings.dedup_max_points,
            **kwargs,
        )
