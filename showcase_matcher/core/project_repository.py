"""
================================================================================
FILE: showcase_matcher/core/project_repository.py
================================================================================

PURPOSE:
    Write/read side of the showcase collection: keeps one point per project
    by reusing an existing point id when the same project is added again.

WORKFLOW (add_project):
    1. ensure_collection_exists() (once per instance)
    2. Look up an existing point:
         a. normalized link match, paging through the collection and
            stopping at the first hit (no point cap)
         b. exact title + hackathon payload match
    3. Reuse its id, else generate a UUID4
    4. Embed the project description
    5. Upsert {title, projectDescription, howItsMade, sourceCode, link,
       hackathon, lastUpdated=now UTC ISO-8601}

KEY FACTS:
    - Link matching here also drops a leading "www."; the duplicate resolver
      does not
    - Errors from lookup, embedding and upsert propagate to the caller
    - No caching: every read goes to the vector DB
"""

import logging
import re
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from showcase_matcher.config.constants import (
    ALL_PROJECTS_DEFAULT_LIMIT,
    COLLECTION_DISTANCE,
    COLLECTION_NAME,
    COLLECTION_VECTOR_SIZE,
    DEDUP_SCROLL_PAGE_SIZE,
    PROJECTS_PER_HACKATHON_DEFAULT,
)
from showcase_matcher.core.collection_scan import iter_pages
from showcase_matcher.core.models import HACKATHON, LAST_UPDATED, LINK, TITLE, Project, ProjectRecord
from showcase_matcher.providers.embeddings.base import IEmbeddingsProvider
from showcase_matcher.providers.vectordb.base import (
    CollectionConfig,
    IVectorDBProvider,
    PointId,
    VectorPoint,
    VectorRecord,
)

logger = logging.getLogger(__name__)

_PROTOCOL_RE = re.compile(r"^https?://")


def normalize_project_link(link: str) -> str:
    """Lowercase, drop protocol, one trailing slash and a leading www."""
    normalized = _PROTOCOL_RE.sub("", link.lower())
    if normalized.endswith("/"):
        normalized = normalized[:-1]
    if normalized.startswith("www."):
        normalized = normalized[len("www."):]
    return normalized


def _match_filter(**fields: str) -> Dict[str, Any]:
    return {"must": [{"key": k, "match": {"value": v}} for k, v in fields.items()]}


class ProjectRepository:
    """Adds and lists showcase projects."""

    def __init__(
        self,
        embedding_provider: IEmbeddingsProvider,
        vector_db: IVectorDBProvider,
        collection_name: str = COLLECTION_NAME,
        vector_size: int = COLLECTION_VECTOR_SIZE,
        scan_page_size: int = DEDUP_SCROLL_PAGE_SIZE,
    ):
        self.embedding_provider = embedding_provider
        self.vector_db = vector_db
        self.collection_name = collection_name
        self.vector_size = vector_size
        self.scan_page_size = scan_page_size
        self._collection_initialized = False
        logger.info(f"ProjectRepository initialized (collection={collection_name})")

    async def ensure_collection_exists(self) -> None:
        if self._collection_initialized:
            return

        try:
            exists = await self.vector_db.collection_exists(self.collection_name)
        except Exception as e:
            logger.info(f"Collection lookup failed ({e}); attempting to create it")
            exists = False

        if exists:
            logger.info(f"Collection '{self.collection_name}' exists.")
            self._collection_initialized = True
            return

        logger.info(f"Collection '{self.collection_name}' not found, creating a new one.")
        try:
            await self.vector_db.create_collection(
                self.collection_name,
                CollectionConfig(vector_size=self.vector_size, distance=COLLECTION_DISTANCE),
            )
            logger.info(f"✓ Collection '{self.collection_name}' created")
        except Exception as e:
            logger.warning(f"Failed to create collection '{self.collection_name}': {e}")
        # creation is attempted at most once per instance
        self._collection_initialized = True

    async def find_existing_project(
        self,
        link: Optional[str],
        title: str,
        hackathon: Optional[str],
    ) -> Optional[VectorRecord]:
        if link:
            wanted = normalize_project_link(link)
            async for page in iter_pages(self.vector_db, self.collection_name, self.scan_page_size):
                for record in page:
                    stored = record.payload.get(LINK)
                    if stored and normalize_project_link(stored) == wanted:
                        logger.info(f"Found existing project by normalized link: {link}")
                        return record

        if not title or not hackathon:
            return None

        matches, _ = await self.vector_db.scroll(
            self.collection_name,
            limit=1,
            filter=_match_filter(**{TITLE: title, HACKATHON: hackathon}),
        )
        if matches:
            logger.info(f"Found existing project by title+hackathon: {title} ({hackathon})")
            return matches[0]
        return None

    async def add_project(self, project: ProjectRecord) -> PointId:
        """
        Insert or update a project.

        Returns:
            The point id used (existing or newly generated)
        """
        await self.ensure_collection_exists()

        existing = await self.find_existing_project(project.link, project.title, project.hackathon)
        if existing is not None:
            point_id: PointId = existing.id
            logger.info(f"Updating project '{project.title}' ({project.hackathon}) id={point_id}")
        else:
            point_id = str(uuid.uuid4())
            logger.info(f"Creating project '{project.title}' ({project.hackathon}) id={point_id}")

        vector = await self.embedding_provider.create_embedding(project.project_description)

        payload = project.to_payload()
        payload[LAST_UPDATED] = datetime.now(timezone.utc).isoformat()

        await self.vector_db.upsert(
            self.collection_name,
            [VectorPoint(id=point_id, vector=vector, payload=payload)],
        )
        logger.info(f"✓ Project '{project.title}' upserted to '{self.collection_name}'")
        return point_id

    async def get_all_projects(
        self,
        limit: int = ALL_PROJECTS_DEFAULT_LIMIT,
        hackathon: Optional[str] = None,
    ) -> List[Project]:
        await self.ensure_collection_exists()

        records, _ = await self.vector_db.scroll(
            self.collection_name,
            limit=limit,
            filter=_match_filter(**{HACKATHON: hackathon}) if hackathon else None,
        )
        return [Project.from_payload(r.payload, with_hackathon=True) for r in records]

    async def get_projects_by_hackathons(
        self,
        hackathons: List[str],
        limit_per_hackathon: int = PROJECTS_PER_HACKATHON_DEFAULT,
    ) -> List[Project]:
        """Projects from several hackathons; the first project seen per title wins."""
        unique: Dict[str, Project] = {}
        for hackathon in hackathons:
            for project in await self.get_all_projects(limit_per_hackathon, hackathon):
                unique.setdefault(project.title, project)

        logger.debug(f"Collected {len(unique)} unique projects from {len(hackathons)} hackathon(s)")
        return list(unique.values())


__all__ = ["ProjectRepository", "normalize_project_link"]
