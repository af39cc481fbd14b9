# showcase_matcher/api/routes.py

import logging
import time

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from showcase_matcher.api.dependencies import get_request_id, get_search_handler, get_settings
from showcase_matcher.api.models import (
    ErrorResponse,
    HealthResponse,
    ProjectModel,
    SearchIdeasRequest,
    SearchIdeasResponse,
)
from showcase_matcher.config.settings import Settings
from showcase_matcher.core.exceptions import ProjectSearchError
from showcase_matcher.core.search_handler import ProjectSearchHandler
from showcase_matcher.utils.helpers import truncate_string

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["search"])
health_router = APIRouter(tags=["health"])


@router.post(
    "/search-ideas",
    response_model=SearchIdeasResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Find showcase projects similar to an idea",
)
async def search_ideas(
    request: SearchIdeasRequest,
    handler: ProjectSearchHandler = Depends(get_search_handler),
    settings: Settings = Depends(get_settings),
    request_id: str = Depends(get_request_id),
):
    """
    Embed the idea and return the most similar projects.

    Errors:
        400 {"message": "Idea is required"} for a missing or blank idea
        500 {"message": "Search failed", "error": <client-safe message>}
    """
    idea = (request.idea or "").strip()
    if not idea:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Idea is required"},
        )

    limit = request.limit or settings.search_default_limit
    start_time = time.time()
    logger.info(f"Search received [{request_id}]: {truncate_string(idea, 80)!r} (limit={limit})")

    try:
        projects = await handler.search_projects(idea, limit=limit)
    except ProjectSearchError as e:
        logger.warning(f"Search failed [{request_id}]: {e.message}")
        return _search_failed(e.message)
    except Exception as e:
        logger.error(f"Search failed [{request_id}]: {e}", exc_info=True)
        return _search_failed(handler.sanitize(getattr(e, "message", None) or str(e)))

    processing_time_ms = int((time.time() - start_time) * 1000)
    logger.info(f"Search completed [{request_id}]: {len(projects)} projects in {processing_time_ms}ms")

    return SearchIdeasResponse(projects=[ProjectModel.from_project(p) for p in projects])


def _search_failed(error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Search failed", "error": error},
    )


@health_router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        environment=settings.environment,
        embedding_provider=settings.embedding_provider,
    )
