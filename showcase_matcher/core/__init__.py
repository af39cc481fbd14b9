"""
================================================================================
FILE: showcase_matcher/core/__init__.py
================================================================================

PURPOSE:
    Core layer: search orchestration, project repository, duplicate resolution
    and the error taxonomy shared by every adapter.

    Only the exception types are re-exported here; import handlers from their
    modules (showcase_matcher.core.search_handler, ...) so that the settings
    layer can depend on the exceptions without an import cycle.
"""

from showcase_matcher.core.exceptions import (
    ConfigurationError,
    DuplicateScanLimitError,
    EmbeddingError,
    EmbeddingErrorCode,
    FatalException,
    HttpError,
    ProjectSearchError,
    RecoverableException,
    ServiceInitializationError,
    ShowcaseMatcherError,
    ValidationError,
    VectorDBError,
    VectorDBErrorCode,
)

__all__ = [
    "ConfigurationError",
    "DuplicateScanLimitError",
    "EmbeddingError",
    "EmbeddingErrorCode",
    "FatalException",
    "HttpError",
    "ProjectSearchError",
    "RecoverableException",
    "ServiceInitializationError",
    "ShowcaseMatcherError",
    "ValidationError",
    "VectorDBError",
    "VectorDBErrorCode",
]
