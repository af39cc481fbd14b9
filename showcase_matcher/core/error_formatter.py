"""
================================================================================
FILE: showcase_matcher/core/error_formatter.py
================================================================================

PURPOSE:
    Turn any failure raised on the embedding path into a single-line message
    that is safe to show to clients.

WORKFLOW:
    1. format_error(error, context) picks a template by error shape:
         - HTTP failure with a status      -> "{ctx} failed: {status}: ..."
         - embedding backend not reachable -> remediation / generic message
         - missing configuration           -> config template
         - anything else                   -> "{ctx} failed: {message}"
    2. sanitize() redacts URLs, local services, model names, service names,
       file paths and long tokens, in that order.

KEY FACTS:
    - Redaction only happens when production=True; development output is
      returned verbatim so operators can debug
    - sanitize() is idempotent: its output never matches its own patterns
    - Callers log the raw error themselves; this module never logs

EXAMPLE (production):
    "Ollama failed: connect to http://localhost:11434 refused"
        -> "[SERVICE] failed: connect to [URL_REDACTED] refused"
"""

import re
from typing import Any, Iterable, List, Optional

from showcase_matcher.config.constants import (
    KNOWN_SERVICE_NAMES,
    REDACTED_LOCAL_SERVICE,
    REDACTED_MODEL,
    REDACTED_PATH,
    REDACTED_SERVICE,
    REDACTED_TOKEN,
    REDACTED_URL,
)
from showcase_matcher.core.exceptions import (
    ConfigurationError,
    EmbeddingError,
    EmbeddingErrorCode,
    HttpError,
)

_URL_RE = re.compile(r"https?://[^\s]+")
_LOCALHOST_RE = re.compile(r"localhost:\d+")
_DEFAULT_MODEL_PATTERN = r"nomic-embed-text(?:-v\d+(?:\.\d+)?)?"
_SERVICE_RE = re.compile("|".join(re.escape(s) for s in KNOWN_SERVICE_NAMES), re.IGNORECASE)
_PATH_RE = re.compile(r"/[\w/.-]+")
_TOKEN_RE = re.compile(r"[A-Za-z0-9_-]{20,}")

_HTTP_STATUS_LABELS = {
    403: "authentication failed",
    401: "unauthorized",
    429: "rate limit exceeded",
}


class ErrorFormatter:
    """Formats and sanitizes errors for client-visible channels."""

    def __init__(self, production: bool = False, model_names: Optional[Iterable[str]] = None):
        self.production = production

        extra: List[str] = sorted(
            {re.escape(m) for m in (model_names or []) if m and m.strip()},
            key=len,
            reverse=True,
        )
        self._model_re = re.compile("|".join(extra + [_DEFAULT_MODEL_PATTERN]))

    def sanitize(self, message: str) -> str:
        if not self.production:
            return message

        sanitized = _URL_RE.sub(REDACTED_URL, message)
        sanitized = _LOCALHOST_RE.sub(REDACTED_LOCAL_SERVICE, sanitized)
        sanitized = self._model_re.sub(REDACTED_MODEL, sanitized)
        sanitized = _SERVICE_RE.sub(REDACTED_SERVICE, sanitized)
        sanitized = _PATH_RE.sub(REDACTED_PATH, sanitized)
        sanitized = _TOKEN_RE.sub(REDACTED_TOKEN, sanitized)
        return sanitized

    def format_error(self, error: Any, context: str = "Embedding") -> str:
        if not isinstance(error, BaseException):
            fallback = "An error occurred" if self.production else "Unknown error"
            return f"{context} failed: {fallback}"

        http_error = _http_error_of(error)
        if http_error is not None:
            detail = _http_detail(http_error, error)
            line = f"{context} failed: {format_http_status(http_error.status, detail)}"
            return self.sanitize(line)

        if _is_connection_refused(error):
            if self.production:
                return f"{context} failed: Service is not available. Please contact support."
            return f"{context} failed: {_message_of(error)}"

        if _is_config_error(error):
            if self.production:
                return f"{context} failed: Configuration error. Please contact support."
            config_message = _TOKEN_RE.sub(REDACTED_TOKEN, _message_of(error))
            return f"{context} failed: Configuration error - {config_message}"

        return self.sanitize(f"{context} failed: {_message_of(error) or 'Unknown error'}")


def format_http_status(status: int, detail: str) -> str:
    label = _HTTP_STATUS_LABELS.get(status)
    if label:
        return f"{status}: {label} - {detail}"
    return f"{status}: {detail}"


def _message_of(error: BaseException) -> str:
    return getattr(error, "message", None) or str(error)


def _http_error_of(error: BaseException) -> Optional[HttpError]:
    if isinstance(error, HttpError) and error.status is not None:
        return error
    cause = getattr(error, "cause", None)
    if isinstance(cause, HttpError) and cause.status is not None:
        return cause
    return None


def _http_detail(http_error: HttpError, original: BaseException) -> str:
    body = http_error.response
    if isinstance(body, dict):
        for key in ("error", "message"):
            if body.get(key):
                return str(body[key])
    return _message_of(original) or "Unknown error"


def _is_connection_refused(error: BaseException) -> bool:
    if isinstance(error, EmbeddingError):
        return error.code == EmbeddingErrorCode.CONNECTION_REFUSED.value
    return "connection refused" in str(error).lower()


def _is_config_error(error: BaseException) -> bool:
    if isinstance(error, ConfigurationError):
        return True
    if isinstance(error, EmbeddingError) and error.code == EmbeddingErrorCode.MISSING_API_KEY.value:
        return True
    return "environment variable" in str(error)


__all__ = ["ErrorFormatter", "format_http_status"]
