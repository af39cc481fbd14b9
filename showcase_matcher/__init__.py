# showcase_matcher/__init__.py

"""
Semantic project matching over the ETHGlobal showcase collection.

This package contains:
- api: FastAPI routes and dependencies (search-ideas endpoint)
- config: settings and constants
- container: provider factories and the service container
- core: search handler, project repository, duplicate resolver, errors
- providers: embeddings (Ollama, Nomic), vector DB (Qdrant), HTTP transport
- scripts: command-line entry points
"""

__all__ = ["__version__"]

__version__ = "1.0.0"
