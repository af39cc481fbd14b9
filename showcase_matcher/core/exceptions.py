# MERGED: 3 sections with separation comments
#│   │   ├── SECTION 1: Base exceptions
#│   │   ├── SECTION 2: Provider exceptions (embedding, vector DB, HTTP)
#│   │   └── SECTION 3: Configuration & maintenance exceptions
"""
================================================================================
FILE: showcase_matcher/core/exceptions.py
================================================================================

PURPOSE:
    Custom exception hierarchy for the showcase matcher. Adapters classify
    backend failures into these types at the point of occurrence; the search
    handler only re-formats and sanitizes them for display.

IMPORTS:
    - None (only Python builtins)

KEY FACTS:
    - NO imports from showcase_matcher modules (prevents circular dependencies)
    - All exceptions inherit from ShowcaseMatcherError
    - Each exception has error_code for categorization
    - Nothing in the core retries; RecoverableException only marks errors a
      calling layer MAY retry

EXCEPTION CATEGORIES:
    - RECOVERABLE (transient):
        * EmbeddingError: CONNECTION_REFUSED, RATE_LIMIT, SERVER_ERROR, ...
        * VectorDBError: CONNECTION_ERROR, QDRANT_ERROR, ...
        * HttpError: transport failures
    - FATAL (fail fast):
        * ConfigurationError: missing environment variable / invalid config
        * ValidationError: invalid input data
        * ServiceInitializationError: provider could not be constructed
        * DuplicateScanLimitError: collection larger than the scan cap
"""

# ================================================================================
# IMPORTS
# ================================================================================

from enum import Enum
from typing import Any, Dict, Optional

# ================================================================================
# ERROR CODES
# ================================================================================


class EmbeddingErrorCode(str, Enum):
    CONNECTION_REFUSED = "CONNECTION_REFUSED"
    MODEL_NOT_FOUND = "MODEL_NOT_FOUND"
    MISSING_API_KEY = "MISSING_API_KEY"
    AUTH_FAILED = "AUTH_FAILED"
    RATE_LIMIT = "RATE_LIMIT"
    INVALID_REQUEST = "INVALID_REQUEST"
    SERVER_ERROR = "SERVER_ERROR"
    HTTP_ERROR = "HTTP_ERROR"
    EMBEDDING_ERROR = "EMBEDDING_ERROR"
    OLLAMA_ERROR = "OLLAMA_ERROR"


class VectorDBErrorCode(str, Enum):
    CONNECTION_ERROR = "CONNECTION_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    NOT_FOUND = "NOT_FOUND"
    QDRANT_ERROR = "QDRANT_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    INVALID_CONFIG = "INVALID_CONFIG"


# ================================================================================
# SECTION 1: BASE EXCEPTIONS
# ================================================================================

class ShowcaseMatcherError(Exception):
    """
    Root exception for all showcase matcher errors.

    Attributes:
        message (str): Human-readable error message
        error_code (str): Machine-readable error code for categorization
        context (dict): Additional context (optional)
    """

    def __init__(
        self,
        message: str,
        error_code: str = "UNKNOWN_ERROR",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code.value if isinstance(error_code, Enum) else error_code
        self.context = context or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dict for JSON response"""
        return {
            "error": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
        }


class RecoverableException(ShowcaseMatcherError):
    """Transient failure; a calling layer may retry it."""
    pass


class FatalException(ShowcaseMatcherError):
    """Permanent failure; never retried."""
    pass

# ================================================================================
# SECTION 2: PROVIDER EXCEPTIONS
# ================================================================================

class EmbeddingError(RecoverableException):
    """Embedding generation failure, classified by `code`."""

    def __init__(
        self,
        message: str,
        code: str = EmbeddingErrorCode.EMBEDDING_ERROR,
        cause: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code=code, context=context)
        self.code = self.error_code
        self.cause = cause


class VectorDBError(RecoverableException):
    """Vector database operation failure, classified by `code`."""

    def __init__(
        self,
        message: str,
        code: str = VectorDBErrorCode.QDRANT_ERROR,
        cause: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code=code, context=context)
        self.code = self.error_code
        self.cause = cause


class HttpError(RecoverableException):
    """
    Uniform shape for every failure of the HTTP transport.

    Attributes:
        status: HTTP status code (None for network failures)
        status_text: reason phrase
        response: decoded response body (dict, str or None)
        cause: the original transport exception
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        status_text: Optional[str] = None,
        response: Any = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(
            message,
            error_code="HTTP_ERROR",
            context={"status": status} if status is not None else None,
        )
        self.status = status
        self.status_text = status_text
        self.response = response
        self.cause = cause

    def has_status(self, status: int) -> bool:
        return self.status == status

    def is_client_error(self) -> bool:
        return self.status is not None and 400 <= self.status < 500

    def is_server_error(self) -> bool:
        return self.status is not None and 500 <= self.status < 600


class ProjectSearchError(RecoverableException):
    """
    Error raised by ProjectSearchHandler after formatting and sanitization.

    The message is safe for client-visible channels. Re-raising it through the
    handler again leaves it untouched.
    """

    def __init__(
        self,
        message: str,
        error_code: str = EmbeddingErrorCode.EMBEDDING_ERROR,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, error_code=error_code)
        self.cause = cause

    def __str__(self) -> str:
        return self.message

# ================================================================================
# SECTION 3: CONFIGURATION & MAINTENANCE EXCEPTIONS
# ================================================================================

class ConfigurationError(FatalException):
    """Invalid or missing configuration (fatal)"""

    def __init__(self, message: str, context: Optional[Dict] = None):
        super().__init__(message, error_code="CONFIG_ERROR", context=context)


class ValidationError(FatalException):
    """Request validation failed (won't fix on retry)"""

    def __init__(self, message: str, context: Optional[Dict] = None):
        super().__init__(message, error_code="VALIDATION_ERROR", context=context)


class ServiceInitializationError(FatalException):
    """Raised when a service/provider fails to initialize (fatal)."""

    def __init__(self, message: str, context: Optional[Dict] = None):
        super().__init__(message, error_code="SERVICE_INIT_ERROR", context=context)


class DuplicateScanLimitError(FatalException):
    """Collection holds more points than the duplicate scan is allowed to read."""

    def __init__(self, message: str, context: Optional[Dict] = None):
        super().__init__(message, error_code="SCAN_LIMIT_EXCEEDED", context=context)
