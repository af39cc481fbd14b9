"""
FILE: showcase_matcher/providers/vectordb/base.py

VectorDB provider interface (contract).
All vector database implementations must implement this.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

PointId = Union[str, int]
Distance = Literal["Cosine", "Euclidean", "Dot", "Manhattan"]


@dataclass
class VectorSearchQuery:
    vector: List[float]
    limit: Optional[int] = None  # None: backend default
    filter: Optional[Any] = None
    score_threshold: Optional[float] = None


@dataclass
class VectorSearchResult:
    id: PointId
    score: float
    payload: Optional[Dict[str, Any]] = None


@dataclass
class VectorPoint:
    id: PointId
    vector: List[float]
    payload: Optional[Dict[str, Any]] = None


@dataclass
class VectorRecord:
    """A stored point as returned by a bulk scan."""

    id: PointId
    payload: Dict[str, Any] = field(default_factory=dict)
    vector: Optional[List[float]] = None


@dataclass
class CollectionConfig:
    vector_size: Optional[int] = None
    distance: Optional[Distance] = None


class IVectorDBProvider(ABC):
    """Abstract base class for vector database providers."""

    @abstractmethod
    async def search(self, collection_name: str, query: VectorSearchQuery) -> List[VectorSearchResult]:
        """
        Similarity search.

        Returns results in backend order (descending score); never re-sorted.
        """
        raise NotImplementedError

    @abstractmethod
    async def upsert(self, collection_name: str, points: List[VectorPoint]) -> None:
        """Insert/update points; payload defaults to {}."""
        raise NotImplementedError

    @abstractmethod
    async def create_collection(self, collection_name: str, config: Optional[CollectionConfig] = None) -> None:
        """Create a collection. vector_size is mandatory; distance defaults to Cosine."""
        raise NotImplementedError

    @abstractmethod
    async def delete(self, collection_name: str, ids: List[PointId]) -> None:
        """Delete points by id, waiting for the backend to confirm."""
        raise NotImplementedError

    @abstractmethod
    async def scroll(
        self,
        collection_name: str,
        limit: int,
        offset: Optional[PointId] = None,
        filter: Optional[Any] = None,
        with_payload: bool = True,
        with_vectors: bool = False,
    ) -> Tuple[List[VectorRecord], Optional[PointId]]:
        """
        Bulk read one page of points.

        Returns:
            (records, next_offset); next_offset is None on the last page.
        """
        raise NotImplementedError

    @abstractmethod
    async def collection_exists(self, collection_name: str) -> bool:
        raise NotImplementedError

    async def shutdown(self) -> None:
        """Cleanup resources."""
        return None
