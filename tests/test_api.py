"""Tests - HTTP API."""

import pytest
from fastapi.testclient import TestClient

from showcase_matcher.api.main import create_app
from showcase_matcher.config.settings import Settings
from showcase_matcher.container.service_container import ServiceContainer
from showcase_matcher.core.exceptions import EmbeddingError, VectorDBError
from showcase_matcher.providers.vectordb.base import VectorSearchResult
from tests.conftest import FakeEmbeddingsProvider, FakeVectorDB


def make_client(embeddings=None, vector_db=None, **settings_kwargs):
    settings = Settings(_env_file=None, **settings_kwargs)
    container = ServiceContainer(
        settings,
        embedding_provider=embeddings or FakeEmbeddingsProvider(),
        vector_db=vector_db or FakeVectorDB(),
    )
    return TestClient(create_app(container))


class TestSearchIdeas:
    def test_returns_projects(self):
        vector_db = FakeVectorDB()
        vector_db.search_results = [
            VectorSearchResult(id="1", score=0.95, payload={"title": "A", "howItsMade": "Solidity"}),
            VectorSearchResult(id="2", score=0.87, payload={"title": "B", "sourceCode": "gh"}),
        ]

        with make_client(vector_db=vector_db) as client:
            response = client.post("/api/v1/search-ideas", json={"idea": "voting", "limit": 2})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Search completed successfully"
        assert [p["title"] for p in body["projects"]] == ["A", "B"]
        assert body["projects"][0]["howItsMade"] == "Solidity"
        assert body["projects"][1]["sourceCode"] == "gh"
        assert vector_db.search_calls[0][1].limit == 2

    def test_default_limit_from_settings(self, monkeypatch):
        monkeypatch.setenv("SEARCH_DEFAULT_LIMIT", "4")
        vector_db = FakeVectorDB()

        with make_client(vector_db=vector_db) as client:
            client.post("/api/v1/search-ideas", json={"idea": "voting"})

        assert vector_db.search_calls[0][1].limit == 4

    @pytest.mark.parametrize("body", [{}, {"idea": ""}, {"idea": "   "}])
    def test_missing_idea(self, body):
        with make_client() as client:
            response = client.post("/api/v1/search-ideas", json=body)

        assert response.status_code == 400
        assert response.json() == {"message": "Idea is required"}

    def test_embedding_failure_is_sanitized_in_production(self, monkeypatch):
        monkeypatch.setenv("NODE_ENV", "production")
        error = EmbeddingError("Ollama is not running at http://localhost:11434", code="CONNECTION_REFUSED")

        with make_client(embeddings=FakeEmbeddingsProvider(error=error, name="ollama")) as client:
            response = client.post("/api/v1/search-ideas", json={"idea": "voting"})

        assert response.status_code == 500
        assert response.json() == {
            "message": "Search failed",
            "error": "Ollama failed: Service is not available. Please contact support.",
        }

    def test_search_failure_is_sanitized_in_production(self, monkeypatch):
        monkeypatch.setenv("NODE_ENV", "production")
        vector_db = FakeVectorDB()
        vector_db.search_error = VectorDBError("Search failed: Qdrant server is not available", code="CONNECTION_ERROR")

        with make_client(vector_db=vector_db) as client:
            response = client.post("/api/v1/search-ideas", json={"idea": "voting"})

        assert response.status_code == 500
        assert response.json()["error"] == "Search failed: [SERVICE] server is not available"


class TestHealthAndMiddleware:
    def test_health(self):
        with make_client() as client:
            response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "environment": "development",
            "embedding_provider": "nomic",
        }

    def test_request_id_header(self):
        with make_client() as client:
            generated = client.get("/health")
            echoed = client.get("/health", headers={"X-Request-ID": "abc123"})

        assert generated.headers["X-Request-ID"]
        assert echoed.headers["X-Request-ID"] == "abc123"

    def test_shutdown_closes_providers(self):
        embeddings, vector_db = FakeEmbeddingsProvider(), FakeVectorDB()

        with make_client(embeddings=embeddings, vector_db=vector_db):
            pass

        assert embeddings.shutdown_called
        assert vector_db.shutdown_called
