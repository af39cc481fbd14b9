"""
================================================================================
FILE: showcase_matcher/config/constants.py
================================================================================

PURPOSE:
    Application-wide constants. Immutable values shared by the search path,
    the project repository and the duplicate resolver.

CONSTANT CATEGORIES:
    1. Collection
       - COLLECTION_NAME: fixed showcase collection searched by the handler
       - COLLECTION_VECTOR_SIZE: vector size used when the collection is created
    2. Embedding defaults
       - DEFAULT_OLLAMA_MODEL / DEFAULT_OLLAMA_URL
       - DEFAULT_NOMIC_MODEL / DEFAULT_NOMIC_BASE_URL
    3. Search / maintenance
       - SEARCH_DEFAULT_LIMIT
       - DEDUP_DELETE_BATCH_SIZE, DEDUP_SCROLL_PAGE_SIZE, DEDUP_MAX_POINTS
    4. Redaction markers used by the error sanitizer

KEY FACTS:
    - No imports from other showcase_matcher modules (prevents circular deps)
    - Never modified at runtime
"""

from typing import Any, Dict

# ================================================================================
# COLLECTION
# ================================================================================

COLLECTION_NAME = "eth_global_showcase"
COLLECTION_VECTOR_SIZE = 768
COLLECTION_DISTANCE = "Cosine"

# ================================================================================
# EMBEDDING DEFAULTS
# ================================================================================

DEFAULT_OLLAMA_MODEL = "nomic-embed-text"
DEFAULT_OLLAMA_URL = "http://localhost:11434"

DEFAULT_NOMIC_MODEL = "nomic-embed-text-v1"
DEFAULT_NOMIC_BASE_URL = "https://api-atlas.nomic.ai"
NOMIC_EMBEDDING_PATH = "/v1/embedding/text"

# ================================================================================
# SEARCH & MAINTENANCE
# ================================================================================

SEARCH_DEFAULT_LIMIT = 10

DEDUP_DELETE_BATCH_SIZE = 100
DEDUP_SCROLL_PAGE_SIZE = 1000
DEDUP_MAX_POINTS = 10000

ALL_PROJECTS_DEFAULT_LIMIT = 1000
PROJECTS_PER_HACKATHON_DEFAULT = 100

# ================================================================================
# REDACTION MARKERS
# ================================================================================

REDACTED_URL = "[URL_REDACTED]"
REDACTED_LOCAL_SERVICE = "[LOCAL_SERVICE]"
REDACTED_MODEL = "[MODEL]"
REDACTED_SERVICE = "[SERVICE]"
REDACTED_PATH = "[PATH]"
REDACTED_TOKEN = "[REDACTED]"

KNOWN_SERVICE_NAMES = ("Ollama", "Nomic", "Qdrant")

CONSTANTS: Dict[str, Any] = {
    "COLLECTION_NAME": COLLECTION_NAME,
    "COLLECTION_VECTOR_SIZE": COLLECTION_VECTOR_SIZE,
    "COLLECTION_DISTANCE": COLLECTION_DISTANCE,
    "DEFAULT_OLLAMA_MODEL": DEFAULT_OLLAMA_MODEL,
    "DEFAULT_OLLAMA_URL": DEFAULT_OLLAMA_URL,
    "DEFAULT_NOMIC_MODEL": DEFAULT_NOMIC_MODEL,
    "DEFAULT_NOMIC_BASE_URL": DEFAULT_NOMIC_BASE_URL,
    "SEARCH_DEFAULT_LIMIT": SEARCH_DEFAULT_LIMIT,
    "DEDUP_DELETE_BATCH_SIZE": DEDUP_DELETE_BATCH_SIZE,
    "DEDUP_SCROLL_PAGE_SIZE": DEDUP_SCROLL_PAGE_SIZE,
    "DEDUP_MAX_POINTS": DEDUP_MAX_POINTS,
}
