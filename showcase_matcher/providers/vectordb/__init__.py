"""
VectorDB Providers package.

Re-exports the provider interface, its value types and the Qdrant provider.
"""

from showcase_matcher.providers.vectordb.base import (
    CollectionConfig,
    IVectorDBProvider,
    PointId,
    VectorPoint,
    VectorRecord,
    VectorSearchQuery,
    VectorSearchResult,
)
from showcase_matcher.providers.vectordb.qdrant import (
    QdrantConfig,
    QdrantProvider,
    classify_vector_db_error,
)

__all__ = [
    "CollectionConfig",
    "IVectorDBProvider",
    "PointId",
    "VectorPoint",
    "VectorRecord",
    "VectorSearchQuery",
    "VectorSearchResult",
    "QdrantConfig",
    "QdrantProvider",
    "classify_vector_db_error",
]
