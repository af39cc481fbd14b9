"""
================================================================================
FILE: showcase_matcher/config/settings.py
================================================================================

PURPOSE:
    Application settings loaded from environment variables.
    Uses Pydantic BaseSettings for validation and type hints.
    Single source of truth for search, embedding and maintenance configuration.

WORKFLOW:
    1. At startup, load from environment variables (.env file or system env)
    2. Validate all settings (type checking, range validation)
    3. validate_for_environment() fails fast on missing production secrets
    4. Access throughout app via: settings.qdrant_url, settings.embedding_provider

INPUTS:
    - Environment variables (from .env file or system env)
    - Examples:
        QD_URL=http://localhost:6333
        QD_API_KEY=...
        EMBEDDING_PROVIDER=nomic
        NOMIC_API_KEY=...
        OLLAMA_EMBED_MODEL=nomic-embed-text
        OLLAMA_URL=http://localhost:11434
        NODE_ENV=production

CONFIGURATION CATEGORIES:
    1. Vector DB (Qdrant URL, API key, timeout)
    2. Embeddings (provider selection, Nomic and Ollama options)
    3. Search / maintenance (limits, batch sizes)
    4. Logging / environment (NODE_ENV gates error sanitization)

DEFAULTS:
    - embedding_provider: nomic
    - environment: development
    - log_level: INFO

TESTING ENVIRONMENT:
    - Override settings in tests: Settings(NODE_ENV="production", _env_file=None)
"""

from __future__ import annotations

import os

from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from showcase_matcher.config.constants import (
    COLLECTION_VECTOR_SIZE,
    DEDUP_DELETE_BATCH_SIZE,
    DEDUP_MAX_POINTS,
    DEDUP_SCROLL_PAGE_SIZE,
    DEFAULT_NOMIC_BASE_URL,
    DEFAULT_NOMIC_MODEL,
    DEFAULT_OLLAMA_MODEL,
    DEFAULT_OLLAMA_URL,
    SEARCH_DEFAULT_LIMIT,
)
from showcase_matcher.core.exceptions import ConfigurationError

# Load .env into os.environ for adapters that fall back to os.getenv(...)
_CWD_ENV = Path(os.getcwd()) / ".env"
_REPO_ROOT_ENV = Path(__file__).resolve().parents[2] / ".env"
_ENV_PATH = _CWD_ENV if _CWD_ENV.exists() else _REPO_ROOT_ENV

load_dotenv(dotenv_path=_ENV_PATH, override=False)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables + .env.

    All fields have aliases matching the environment variable names.
    """

    model_config = SettingsConfigDict(
        env_file=str(_ENV_PATH),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ========================================================================
    # VECTOR DB
    # ========================================================================

    qdrant_url: str = Field(
        default="http://localhost:6333",
        alias="QD_URL",
        description="Qdrant URL",
    )

    qdrant_api_key: Optional[str] = Field(
        default=None,
        alias="QD_API_KEY",
        description="Qdrant API key (optional outside production)",
    )

    vector_db_timeout: float = Field(
        default=10.0,
        ge=0.5,
        le=120.0,
        alias="VECTOR_DB_TIMEOUT",
        description="Qdrant request timeout (seconds)",
    )

    collection_vector_size: int = Field(
        default=COLLECTION_VECTOR_SIZE,
        ge=1,
        alias="COLLECTION_VECTOR_SIZE",
        description="Vector size used when the showcase collection is created",
    )

    # ========================================================================
    # EMBEDDINGS
    # ========================================================================

    # Not a Literal: tags registered with EmbeddingFactory.register() are valid
    # too, and EmbeddingFactory.create() rejects unknown ones.
    embedding_provider: str = Field(
        default="nomic",
        alias="EMBEDDING_PROVIDER",
        description="Embedding provider: ollama | nomic | registered custom tag",
    )

    nomic_api_key: Optional[str] = Field(
        default=None,
        alias="NOMIC_API_KEY",
        description="Nomic Atlas API key (required when provider is nomic)",
    )

    nomic_base_url: str = Field(
        default=DEFAULT_NOMIC_BASE_URL,
        alias="NOMIC_BASE_URL",
        description="Nomic Atlas API base URL",
    )

    nomic_model: str = Field(
        default=DEFAULT_NOMIC_MODEL,
        alias="NOMIC_MODEL",
        description="Nomic embedding model",
    )

    ollama_embed_model: Optional[str] = Field(
        default=None,
        alias="OLLAMA_EMBED_MODEL",
        description="Ollama model used for embeddings",
    )

    ollama_model: Optional[str] = Field(
        default=None,
        alias="OLLAMA_MODEL",
        description="Fallback Ollama model name",
    )

    ollama_url: str = Field(
        default=DEFAULT_OLLAMA_URL,
        alias="OLLAMA_URL",
        description="Ollama server URL",
    )

    embeddings_timeout: float = Field(
        default=10.0,
        ge=1.0,
        le=120.0,
        alias="EMBEDDINGS_TIMEOUT",
        description="Embedding request timeout (seconds)",
    )

    # ========================================================================
    # SEARCH / MAINTENANCE
    # ========================================================================

    search_default_limit: int = Field(
        default=SEARCH_DEFAULT_LIMIT,
        ge=1,
        le=100,
        alias="SEARCH_DEFAULT_LIMIT",
        description="Default number of similar projects returned",
    )

    dedup_batch_size: int = Field(
        default=DEDUP_DELETE_BATCH_SIZE,
        ge=1,
        le=1000,
        alias="DEDUP_BATCH_SIZE",
        description="Point ids deleted per batch by the duplicate resolver",
    )

    dedup_scroll_page_size: int = Field(
        default=DEDUP_SCROLL_PAGE_SIZE,
        ge=1,
        le=10000,
        alias="DEDUP_SCROLL_PAGE_SIZE",
        description="Points fetched per scroll page during the duplicate scan",
    )

    dedup_max_points: int = Field(
        default=DEDUP_MAX_POINTS,
        ge=1,
        alias="DEDUP_MAX_POINTS",
        description="Upper bound on points scanned before the run is refused",
    )

    # ========================================================================
    # LOGGING / ENVIRONMENT
    # ========================================================================

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )

    log_format: Literal["json", "text"] = Field(
        default="text",
        alias="LOG_FORMAT",
        description="Logging format: json or text",
    )

    environment: Literal["development", "production", "test"] = Field(
        default="development",
        validation_alias=AliasChoices("NODE_ENV", "ENVIRONMENT", "environment"),
        description="Runtime environment; production enables error sanitization",
    )

    # ========================================================================
    # VALIDATORS
    # ========================================================================

    @field_validator("embedding_provider", mode="before")
    @classmethod
    def _normalize_provider(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("qdrant_api_key", "nomic_api_key", "ollama_embed_model", "ollama_model")
    @classmethod
    def _blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty strings from .env as unset."""
        if v is not None and not v.strip():
            return None
        return v

    # ========================================================================
    # HELPER METHODS
    # ========================================================================

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def resolved_ollama_model(self) -> str:
        """OLLAMA_EMBED_MODEL wins over OLLAMA_MODEL, then the default."""
        return self.ollama_embed_model or self.ollama_model or DEFAULT_OLLAMA_MODEL

    def validate_for_environment(self) -> None:
        """
        Fail fast on configuration that is only required in some environments.

        Raises:
            ConfigurationError: listing every missing variable
        """
        missing: List[str] = []

        if self.embedding_provider == "nomic" and not self.nomic_api_key:
            missing.append("NOMIC_API_KEY")

        if self.is_production and not self.qdrant_api_key:
            missing.append("QD_API_KEY")

        if missing:
            raise ConfigurationError(
                f"Required environment variable is not set: {', '.join(missing)}",
                context={"environment": self.environment, "missing": missing},
            )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert settings to dictionary with secrets redacted.
        """
        d = self.model_dump()
        for k in ("qdrant_api_key", "nomic_api_key"):
            if d.get(k):
                d[k] = "***REDACTED***"
        return d

    def get_vector_db_config(self) -> Dict[str, Any]:
        return {
            "url": self.qdrant_url,
            "api_key": self.qdrant_api_key,
            "timeout_s": self.vector_db_timeout,
        }

    def get_embeddings_config(self) -> Dict[str, Any]:
        """
        Get configuration for the active embedding provider.

        Returns:
            Dict of keyword arguments for the provider's config dataclass
        """
        if self.embedding_provider == "ollama":
            return {
                "model": self.resolved_ollama_model,
                "base_url": self.ollama_url,
                "timeout_s": self.embeddings_timeout,
            }
        if self.embedding_provider == "nomic":
            return {
                "api_key": self.nomic_api_key,
                "base_url": self.nomic_base_url,
                "model": self.nomic_model,
                "timeout_s": self.embeddings_timeout,
            }
        # custom tag: the registered builder reads anything else it needs
        return {"timeout_s": self.embeddings_timeout}
