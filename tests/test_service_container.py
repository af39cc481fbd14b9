"""Tests - ServiceContainer wiring and lifecycle."""

import pytest

from showcase_matcher.config.settings import Settings
from showcase_matcher.container.factories import EmbeddingFactory
from showcase_matcher.container.service_container import ServiceContainer
from showcase_matcher.core.exceptions import ServiceInitializationError
from showcase_matcher.providers.vectordb.qdrant import QdrantProvider
from tests.conftest import FakeEmbeddingsProvider, FakeVectorDB


def make_settings(**kwargs) -> Settings:
    return Settings(_env_file=None, **kwargs)


class TestInitialize:
    @pytest.mark.asyncio
    async def test_builds_search_handler(self):
        embeddings, vector_db = FakeEmbeddingsProvider(), FakeVectorDB()
        container = ServiceContainer(make_settings(), embedding_provider=embeddings, vector_db=vector_db)

        await container.initialize()

        handler = container.get_search_handler()
        assert handler.embedding_provider is embeddings
        assert handler.vector_db is vector_db

    def test_handler_before_initialize(self):
        with pytest.raises(RuntimeError):
            ServiceContainer(make_settings()).get_search_handler()

    @pytest.mark.asyncio
    async def test_registered_provider_selected_from_settings(self, monkeypatch):
        monkeypatch.setenv("EMBEDDING_PROVIDER", "local-test")
        fake = FakeEmbeddingsProvider(name="local-test")
        EmbeddingFactory.register("local-test", lambda config, http_client: fake)
        try:
            container = ServiceContainer(make_settings(), vector_db=FakeVectorDB())
            await container.initialize()
        finally:
            EmbeddingFactory.unregister("local-test")

        assert container.get_search_handler().embedding_provider is fake

    @pytest.mark.asyncio
    async def test_unknown_provider_from_settings(self, monkeypatch):
        monkeypatch.setenv("EMBEDDING_PROVIDER", "openai")
        container = ServiceContainer(make_settings(), vector_db=FakeVectorDB())

        with pytest.raises(ServiceInitializationError, match="Unsupported embedding provider: openai"):
            await container.initialize()


class TestDuplicateResolver:
    def test_uses_settings_defaults(self, monkeypatch):
        monkeypatch.setenv("DEDUP_BATCH_SIZE", "25")
        vector_db = FakeVectorDB()
        container = ServiceContainer(make_settings(), vector_db=vector_db)

        resolver = container.create_duplicate_resolver()

        assert resolver.vector_db is vector_db
        assert resolver.collection_name == "eth_global_showcase"
        assert resolver.batch_size == 25
        assert resolver.max_points == 10000

    def test_overrides(self):
        container = ServiceContainer(make_settings(), vector_db=FakeVectorDB())

        resolver = container.create_duplicate_resolver(collection_name="staging", batch_size=7)

        assert resolver.collection_name == "staging"
        assert resolver.batch_size == 7

    def test_needs_no_embedding_provider(self):
        # default provider is nomic and NOMIC_API_KEY is unset
        container = ServiceContainer(make_settings(), vector_db=FakeVectorDB())

        resolver = container.create_duplicate_resolver()

        assert resolver.vector_db is container.get_vector_db()
        with pytest.raises(RuntimeError):
            container.get_search_handler()


class TestVectorDB:
    def test_built_lazily_from_settings(self, monkeypatch):
        monkeypatch.setenv("QD_URL", "http://qdrant:6333")
        container = ServiceContainer(make_settings())

        vector_db = container.get_vector_db()

        assert isinstance(vector_db, QdrantProvider)
        assert vector_db.config.url == "http://qdrant:6333"
        assert container.get_vector_db() is vector_db

    @pytest.mark.asyncio
    async def test_shutdown_closes_built_providers(self):
        embeddings, vector_db = FakeEmbeddingsProvider(), FakeVectorDB()
        container = ServiceContainer(make_settings(), embedding_provider=embeddings, vector_db=vector_db)

        await container.initialize()
        await container.shutdown()

        assert embeddings.shutdown_called
        assert vector_db.shutdown_called
