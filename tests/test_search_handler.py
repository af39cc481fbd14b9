"""Tests - ProjectSearchHandler."""

import pytest

from showcase_matcher.core.exceptions import (
    EmbeddingError,
    HttpError,
    ProjectSearchError,
    VectorDBError,
)
from showcase_matcher.core.models import Project
from showcase_matcher.core.search_handler import ProjectSearchHandler
from showcase_matcher.providers.vectordb.base import VectorSearchResult
from tests.conftest import FakeEmbeddingsProvider, FakeVectorDB


def hits(*payloads):
    return [
        VectorSearchResult(id=str(i), score=1.0 - i * 0.1, payload=p)
        for i, p in enumerate(payloads)
    ]


class TestSearchSimilarProjects:
    @pytest.mark.asyncio
    async def test_end_to_end_order_and_mapping(self):
        embeddings = FakeEmbeddingsProvider(vector=[0.1, 0.2, 0.3])
        vector_db = FakeVectorDB()
        vector_db.search_results = [
            VectorSearchResult(id="1", score=0.95, payload={"title": "A"}),
            VectorSearchResult(id="2", score=0.87, payload={"title": "B"}),
        ]
        handler = ProjectSearchHandler(embeddings, vector_db)

        embedding = await handler.create_embedding("an idea")
        projects = await handler.search_similar_projects(embedding)

        assert projects == [Project(title="A", description=""), Project(title="B", description="")]
        collection, query = vector_db.search_calls[0]
        assert collection == "eth_global_showcase"
        assert query.vector == [0.1, 0.2, 0.3]
        assert query.limit == 10

    @pytest.mark.asyncio
    async def test_payload_fields_are_mapped(self):
        vector_db = FakeVectorDB()
        vector_db.search_results = hits(
            {
                "title": "ZK Vote",
                "projectDescription": "Private voting",
                "link": "https://ethglobal.com/showcase/zk-vote",
                "howItsMade": "Circom",
                "sourceCode": "https://github.com/x/zk-vote",
                "hackathon": "ETHGlobal Paris",
            }
        )
        handler = ProjectSearchHandler(FakeEmbeddingsProvider(), vector_db)

        [project] = await handler.search_similar_projects([0.1], limit=5)

        assert project.title == "ZK Vote"
        assert project.description == "Private voting"
        assert project.link == "https://ethglobal.com/showcase/zk-vote"
        assert project.how_its_made == "Circom"
        assert project.source_code == "https://github.com/x/zk-vote"
        assert project.to_dict()["howItsMade"] == "Circom"

    @pytest.mark.asyncio
    async def test_at_most_limit_entries(self):
        vector_db = FakeVectorDB()
        vector_db.search_results = hits(*({"title": str(i)} for i in range(5)))
        handler = ProjectSearchHandler(FakeEmbeddingsProvider(), vector_db)

        projects = await handler.search_similar_projects([0.1], limit=3)

        assert [p.title for p in projects] == ["0", "1", "2"]

    @pytest.mark.asyncio
    async def test_hits_without_payload_are_skipped(self):
        vector_db = FakeVectorDB()
        vector_db.search_results = [
            VectorSearchResult(id="1", score=0.9, payload=None),
            VectorSearchResult(id="2", score=0.8, payload={"title": "B"}),
        ]
        handler = ProjectSearchHandler(FakeEmbeddingsProvider(), vector_db)

        projects = await handler.search_similar_projects([0.1])
        assert [p.title for p in projects] == ["B"]

    @pytest.mark.asyncio
    async def test_search_failure_is_reraised_unchanged(self):
        vector_db = FakeVectorDB()
        error = VectorDBError("Search failed: Collection not found", code="NOT_FOUND")
        vector_db.search_error = error
        handler = ProjectSearchHandler(FakeEmbeddingsProvider(), vector_db, production=True)

        with pytest.raises(VectorDBError) as exc_info:
            await handler.search_similar_projects([0.1])
        assert exc_info.value is error


class TestCreateEmbedding:
    @pytest.mark.asyncio
    async def test_delegates_to_provider(self):
        embeddings = FakeEmbeddingsProvider(vector=[1.0, 2.0])
        handler = ProjectSearchHandler(embeddings, FakeVectorDB())

        assert await handler.create_embedding("text") == [1.0, 2.0]
        assert embeddings.calls == ["text"]

    @pytest.mark.asyncio
    async def test_ollama_connection_refused_production(self):
        error = EmbeddingError(
            "Ollama is not running at http://localhost:11434",
            code="CONNECTION_REFUSED",
        )
        handler = ProjectSearchHandler(
            FakeEmbeddingsProvider(error=error, name="ollama"),
            FakeVectorDB(),
            production=True,
        )

        with pytest.raises(ProjectSearchError) as exc_info:
            await handler.create_embedding("text")

        assert str(exc_info.value) == "Ollama failed: Service is not available. Please contact support."
        assert exc_info.value.error_code == "CONNECTION_REFUSED"
        assert exc_info.value.cause is error

    @pytest.mark.asyncio
    async def test_hosted_auth_failure_development(self):
        cause = HttpError("Forbidden", status=403, response={"error": "invalid token"})
        error = EmbeddingError("Authentication failed", code="AUTH_FAILED", cause=cause)
        handler = ProjectSearchHandler(FakeEmbeddingsProvider(error=error), FakeVectorDB())

        with pytest.raises(ProjectSearchError) as exc_info:
            await handler.create_embedding("text")

        assert exc_info.value.message == "Embedding failed: 403: authentication failed - invalid token"

    @pytest.mark.asyncio
    async def test_production_message_is_sanitized(self):
        error = EmbeddingError("Failed to create embedding: POST https://api-atlas.nomic.ai/v1 timed out")
        handler = ProjectSearchHandler(FakeEmbeddingsProvider(error=error), FakeVectorDB(), production=True)

        with pytest.raises(ProjectSearchError) as exc_info:
            await handler.create_embedding("text")

        assert "nomic.ai" not in exc_info.value.message
        assert "[URL_REDACTED]" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_already_formatted_error_passes_through(self):
        formatted = ProjectSearchError("Embedding failed: 429: rate limit exceeded - slow down")
        handler = ProjectSearchHandler(FakeEmbeddingsProvider(error=formatted), FakeVectorDB(), production=True)

        with pytest.raises(ProjectSearchError) as exc_info:
            await handler.create_embedding("text")
        assert exc_info.value is formatted


class TestSearchProjects:
    @pytest.mark.asyncio
    async def test_embeds_then_searches(self):
        embeddings = FakeEmbeddingsProvider(vector=[0.4])
        vector_db = FakeVectorDB()
        vector_db.search_results = hits({"title": "A"})
        handler = ProjectSearchHandler(embeddings, vector_db)

        projects = await handler.search_projects("idea", limit=2)

        assert [p.title for p in projects] == ["A"]
        assert vector_db.search_calls[0][1].vector == [0.4]
        assert vector_db.search_calls[0][1].limit == 2

    @pytest.mark.asyncio
    async def test_embedding_failure_skips_search(self):
        vector_db = FakeVectorDB()
        handler = ProjectSearchHandler(FakeEmbeddingsProvider(error=RuntimeError("down")), vector_db)

        with pytest.raises(ProjectSearchError):
            await handler.search_projects("idea")
        assert vector_db.search_calls == []
