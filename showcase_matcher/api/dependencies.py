"""
================================================================================
FILE: showcase_matcher/api/dependencies.py
================================================================================

PURPOSE:
    FastAPI dependency injection functions. Route handlers receive the
    container's services via Depends(); tests swap them through
    app.dependency_overrides or by passing a ready container to create_app().

DEPENDENCY CHAIN:
    get_container(request)      -> app.state.container
    ├─ get_settings()           -> container.settings
    └─ get_search_handler()     -> container.get_search_handler()
"""

import logging

from fastapi import Depends, Request

from showcase_matcher.config.settings import Settings
from showcase_matcher.container.service_container import ServiceContainer
from showcase_matcher.core.search_handler import ProjectSearchHandler

logger = logging.getLogger(__name__)


def get_container(request: Request) -> ServiceContainer:
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise RuntimeError("ServiceContainer not initialized. Check application startup logs.")
    return container


def get_settings(container: ServiceContainer = Depends(get_container)) -> Settings:
    return container.settings


def get_search_handler(container: ServiceContainer = Depends(get_container)) -> ProjectSearchHandler:
    return container.get_search_handler()


def get_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")
