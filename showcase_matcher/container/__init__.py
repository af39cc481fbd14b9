"""
Container package.

Exports:
    ServiceContainer: wires providers and core services from Settings.
    EmbeddingFactory / SearchHandlerFactory: tag-driven construction.
"""

from .factories import EmbeddingFactory, SearchHandlerFactory
from .service_container import ServiceContainer

__all__ = ["EmbeddingFactory", "SearchHandlerFactory", "ServiceContainer"]
