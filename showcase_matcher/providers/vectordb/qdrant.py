"""
FILE: showcase_matcher/providers/vectordb/qdrant.py

Qdrant provider.

Env vars (common):
- QD_URL=http://localhost:6333
- QD_API_KEY=... (optional outside production)

Every backend failure is re-raised as VectorDBError. The kind is assigned in
one place, classify_vector_db_error(), which prefers the HTTP status the SDK
exposes and falls back to message substrings where it does not.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import httpx
from qdrant_client import AsyncQdrantClient, models

from showcase_matcher.config.constants import COLLECTION_DISTANCE
from showcase_matcher.core.exceptions import VectorDBError, VectorDBErrorCode
from .base import (
    CollectionConfig,
    IVectorDBProvider,
    PointId,
    VectorPoint,
    VectorRecord,
    VectorSearchQuery,
    VectorSearchResult,
)

logger = logging.getLogger(__name__)

_DISTANCES: Dict[str, models.Distance] = {
    "Cosine": models.Distance.COSINE,
    "Euclidean": models.Distance.EUCLID,
    "Euclid": models.Distance.EUCLID,
    "Dot": models.Distance.DOT,
    "Manhattan": models.Distance.MANHATTAN,
}

_CONNECTION_MARKERS = (
    "ECONNREFUSED",
    "Connection refused",
    "All connection attempts failed",
    "Failed to obtain server version",
)
_AUTH_MARKERS = ("401", "403", "Unauthorized")


@dataclass(frozen=True)
class QdrantConfig:
    url: Optional[str] = None
    api_key: Optional[str] = None
    timeout_s: Optional[float] = None


def classify_vector_db_error(error: object, context: str) -> VectorDBError:
    """
    Map any failure raised by the Qdrant SDK to a typed VectorDBError.

    Args:
        error: the raised value
        context: operation label prefixed to the message ("Search failed", ...)
    """
    if not isinstance(error, Exception):
        return VectorDBError(
            f"{context}: Unknown error occurred",
            code=VectorDBErrorCode.UNKNOWN_ERROR,
        )

    message = str(error)
    status = getattr(error, "status_code", None)
    source = getattr(error, "source", None)

    if (
        isinstance(error, (ConnectionError, httpx.ConnectError))
        or isinstance(source, (ConnectionError, httpx.ConnectError))
        or any(marker in message for marker in _CONNECTION_MARKERS)
    ):
        return VectorDBError(
            f"{context}: Qdrant server is not available. Please ensure Qdrant is running",
            code=VectorDBErrorCode.CONNECTION_ERROR,
            cause=error,
        )

    if status in (401, 403) or any(marker in message for marker in _AUTH_MARKERS):
        return VectorDBError(
            f"{context}: Authentication failed. Please check your API key",
            code=VectorDBErrorCode.AUTH_ERROR,
            cause=error,
        )

    if status == 404 or "404" in message or ("Collection" in message and "not found" in message):
        return VectorDBError(
            f"{context}: Collection not found",
            code=VectorDBErrorCode.NOT_FOUND,
            cause=error,
        )

    return VectorDBError(
        f"{context}: {message}",
        code=VectorDBErrorCode.QDRANT_ERROR,
        cause=error,
    )


class QdrantProvider(IVectorDBProvider):
    def __init__(self, config: Optional[QdrantConfig] = None, client: Optional[Any] = None):
        config = config or QdrantConfig()
        self.config = QdrantConfig(
            url=config.url or os.getenv("QD_URL") or "http://localhost:6333",
            api_key=config.api_key or os.getenv("QD_API_KEY") or None,
            timeout_s=config.timeout_s,
        )
        self._client = client
        logger.info("QdrantProvider created: url=%s", self.config.url)

    def _require_client(self) -> Any:
        if self._client is None:
            timeout = int(self.config.timeout_s) if self.config.timeout_s else None
            self._client = AsyncQdrantClient(
                url=self.config.url,
                api_key=self.config.api_key,
                timeout=timeout,
            )
            logger.info("✓ Qdrant client initialized: %s", self.config.url)
        return self._client

    @staticmethod
    def _to_filter(filter: Optional[Any]) -> Optional[Any]:
        if isinstance(filter, dict):
            return models.Filter.model_validate(filter)
        return filter

    async def search(self, collection_name: str, query: VectorSearchQuery) -> List[VectorSearchResult]:
        kwargs: Dict[str, Any] = {
            "collection_name": collection_name,
            "query": query.vector,
            "query_filter": self._to_filter(query.filter),
            "score_threshold": query.score_threshold,
            "with_payload": True,
        }
        if query.limit is not None:
            kwargs["limit"] = int(query.limit)

        try:
            response = await self._require_client().query_points(**kwargs)
        except Exception as e:
            raise classify_vector_db_error(e, "Search failed") from e

        return [
            VectorSearchResult(id=p.id, score=float(p.score), payload=p.payload)
            for p in response.points
        ]

    async def upsert(self, collection_name: str, points: List[VectorPoint]) -> None:
        structs = [
            models.PointStruct(id=p.id, vector=p.vector, payload=p.payload or {})
            for p in points
        ]
        try:
            await self._require_client().upsert(
                collection_name=collection_name,
                points=structs,
                wait=True,
            )
        except Exception as e:
            raise classify_vector_db_error(e, "Upsert failed") from e

    async def create_collection(self, collection_name: str, config: Optional[CollectionConfig] = None) -> None:
        if config is None or not config.vector_size:
            raise VectorDBError(
                "Vector size is required for collection creation",
                code=VectorDBErrorCode.INVALID_CONFIG,
            )

        distance = _DISTANCES.get(config.distance or COLLECTION_DISTANCE)
        if distance is None:
            raise VectorDBError(
                f"Unsupported distance metric: {config.distance}",
                code=VectorDBErrorCode.INVALID_CONFIG,
            )

        try:
            await self._require_client().create_collection(
                collection_name=collection_name,
                vectors_config=models.VectorParams(size=config.vector_size, distance=distance),
            )
        except Exception as e:
            raise classify_vector_db_error(e, "Collection creation failed") from e

    async def delete(self, collection_name: str, ids: List[PointId]) -> None:
        try:
            await self._require_client().delete(
                collection_name=collection_name,
                points_selector=models.PointIdsList(points=list(ids)),
                wait=True,
            )
        except Exception as e:
            raise classify_vector_db_error(e, "Delete failed") from e

    async def scroll(
        self,
        collection_name: str,
        limit: int,
        offset: Optional[PointId] = None,
        filter: Optional[Any] = None,
        with_payload: bool = True,
        with_vectors: bool = False,
    ) -> Tuple[List[VectorRecord], Optional[PointId]]:
        try:
            records, next_offset = await self._require_client().scroll(
                collection_name=collection_name,
                scroll_filter=self._to_filter(filter),
                limit=int(limit),
                offset=offset,
                with_payload=with_payload,
                with_vectors=with_vectors,
            )
        except Exception as e:
            raise classify_vector_db_error(e, "Scroll failed") from e

        out = [
            VectorRecord(
                id=r.id,
                payload=r.payload or {},
                vector=r.vector if isinstance(r.vector, list) else None,
            )
            for r in records
        ]
        return out, next_offset

    async def collection_exists(self, collection_name: str) -> bool:
        try:
            return bool(await self._require_client().collection_exists(collection_name=collection_name))
        except Exception as e:
            raise classify_vector_db_error(e, "Collection lookup failed") from e

    async def shutdown(self) -> None:
        if self._client is not None:
            await self._client.close()
        self._client = None
        logger.info("QdrantProvider shutdown complete")


__all__ = ["QdrantConfig", "QdrantProvider", "classify_vector_db_error"]
