"""
Shared fixtures: in-memory doubles for the embedding provider and the
vector DB, plus an environment scrubbed of every variable the settings and
providers read.
"""

from typing import Any, Dict, List, Optional, Tuple

import pytest

from showcase_matcher.providers.embeddings.base import IEmbeddingsProvider
from showcase_matcher.providers.vectordb.base import (
    CollectionConfig,
    IVectorDBProvider,
    PointId,
    VectorPoint,
    VectorRecord,
    VectorSearchQuery,
    VectorSearchResult,
)

ENV_VARS = (
    "QD_URL",
    "QD_API_KEY",
    "EMBEDDING_PROVIDER",
    "NOMIC_API_KEY",
    "NOMIC_BASE_URL",
    "NOMIC_MODEL",
    "OLLAMA_EMBED_MODEL",
    "OLLAMA_MODEL",
    "OLLAMA_URL",
    "NODE_ENV",
    "ENVIRONMENT",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "SEARCH_DEFAULT_LIMIT",
    "DEDUP_BATCH_SIZE",
    "DEDUP_SCROLL_PAGE_SIZE",
    "DEDUP_MAX_POINTS",
    "EMBEDDINGS_TIMEOUT",
    "VECTOR_DB_TIMEOUT",
    "COLLECTION_VECTOR_SIZE",
)


class FakeEmbeddingsProvider(IEmbeddingsProvider):
    def __init__(self, vector: Optional[List[float]] = None, error: Optional[BaseException] = None,
                 name: str = "nomic", model: str = "nomic-embed-text-v1"):
        self.vector = vector if vector is not None else [0.1, 0.2, 0.3]
        self.error = error
        self.name = name
        self.model = model
        self.calls: List[str] = []
        self.shutdown_called = False

    async def create_embedding(self, text: str) -> List[float]:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return list(self.vector)

    async def shutdown(self) -> None:
        self.shutdown_called = True


def _matches(payload: Dict[str, Any], filter: Optional[Dict[str, Any]]) -> bool:
    if not filter:
        return True
    return all(payload.get(c["key"]) == c["match"]["value"] for c in filter.get("must", []))


class FakeVectorDB(IVectorDBProvider):
    """Dict-backed collection store; scroll offsets are list indexes."""

    def __init__(self, records: Optional[List[VectorRecord]] = None, exists: bool = True):
        self.points: Dict[PointId, VectorRecord] = {r.id: r for r in (records or [])}
        self.exists = exists
        self.search_results: List[VectorSearchResult] = []
        self.search_error: Optional[BaseException] = None
        self.create_error: Optional[BaseException] = None
        self.fail_delete_on_call: Optional[int] = None
        self.search_calls: List[Tuple[str, VectorSearchQuery]] = []
        self.upserts: List[Tuple[str, List[VectorPoint]]] = []
        self.created: List[Tuple[str, CollectionConfig]] = []
        self.delete_calls: List[List[PointId]] = []
        self.scroll_calls: List[Dict[str, Any]] = []
        self.shutdown_called = False

    async def search(self, collection_name, query):
        self.search_calls.append((collection_name, query))
        if self.search_error is not None:
            raise self.search_error
        return list(self.search_results)

    async def upsert(self, collection_name, points):
        self.upserts.append((collection_name, list(points)))
        for p in points:
            self.points[p.id] = VectorRecord(id=p.id, payload=dict(p.payload or {}), vector=p.vector)

    async def create_collection(self, collection_name, config=None):
        self.created.append((collection_name, config))
        if self.create_error is not None:
            raise self.create_error
        self.exists = True

    async def delete(self, collection_name, ids):
        self.delete_calls.append(list(ids))
        if self.fail_delete_on_call is not None and len(self.delete_calls) == self.fail_delete_on_call:
            raise RuntimeError("delete batch failed")
        for i in ids:
            self.points.pop(i, None)

    async def scroll(self, collection_name, limit, offset=None, filter=None, with_payload=True, with_vectors=False):
        self.scroll_calls.append({"limit": limit, "offset": offset, "filter": filter})
        matching = [r for r in self.points.values() if _matches(r.payload, filter)]
        start = offset or 0
        page = matching[start:start + limit]
        next_offset = start + limit if start + limit < len(matching) else None
        return page, next_offset

    async def collection_exists(self, collection_name):
        return self.exists

    async def shutdown(self) -> None:
        self.shutdown_called = True


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_embeddings():
    return FakeEmbeddingsProvider()


@pytest.fixture
def fake_vector_db():
    return FakeVectorDB()


def record(id: PointId, **payload: Any) -> VectorRecord:
    return VectorRecord(id=id, payload=payload)
