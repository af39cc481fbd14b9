"""
================================================================================
FILE: showcase_matcher/core/duplicate_resolver.py
================================================================================

PURPOSE:
    Find points in the showcase collection that describe the same project,
    keep one survivor per group and delete the rest.

WORKFLOW:
    1. Scan every point (paged scroll, capped by max_points)
    2. plan(points): pure, single-pass partition into disjoint groups
         - link key: lowercase, protocol stripped, trailing "/" stripped;
           used when at least two points share it
         - otherwise title key: lower(trim(title)) + "_" + lower(trim(hackathon)),
           only when both fields are present
    3. Sort each group; index 0 survives, the rest are scheduled for deletion
    4. run(): delete scheduled ids in sequential batches (default 100)

SURVIVOR ORDERING:
    - both points carry a parseable lastUpdated -> newer first
    - otherwise, link groups: ascending str(id)
    - otherwise, title groups: richness descending, where
        richness = len(projectDescription) + len(howItsMade)
                   + 100 if sourceCode + 50 if link

KEY FACTS:
    - Each point lands in at most one group, so it is kept or deleted at most
      once and a survivor is never deleted
    - Deletion is fail-stop: a failed batch aborts the run; batches already
      committed stay deleted (no rollback)
    - dry_run computes and logs the plan without deleting anything
"""

import logging
import re
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import cmp_to_key
from typing import Any, Dict, List, Optional

from dateutil import parser as date_parser

from showcase_matcher.config.constants import (
    COLLECTION_NAME,
    DEDUP_DELETE_BATCH_SIZE,
    DEDUP_MAX_POINTS,
    DEDUP_SCROLL_PAGE_SIZE,
)
from showcase_matcher.core.collection_scan import scroll_all
from showcase_matcher.core.models import (
    HACKATHON,
    HOW_ITS_MADE,
    LAST_UPDATED,
    LINK,
    PROJECT_DESCRIPTION,
    SOURCE_CODE,
    TITLE,
)
from showcase_matcher.providers.vectordb.base import IVectorDBProvider, PointId, VectorRecord
from showcase_matcher.utils.helpers import chunks, measure_time

logger = logging.getLogger(__name__)

KEY_LINK = "link"
KEY_TITLE_HACKATHON = "title_hackathon"

_PROTOCOL_RE = re.compile(r"^https?://")


# ================================================================================
# PLAN / REPORT
# ================================================================================

@dataclass
class DuplicateGroup:
    key_type: str
    key: str
    survivor: VectorRecord
    duplicates: List[VectorRecord] = field(default_factory=list)


@dataclass
class DeduplicationPlan:
    total_points: int
    groups: List[DuplicateGroup] = field(default_factory=list)

    @property
    def deletions(self) -> List[PointId]:
        return [d.id for g in self.groups for d in g.duplicates]

    @property
    def survivors(self) -> List[PointId]:
        return [g.survivor.id for g in self.groups]

    @property
    def kept_count(self) -> int:
        return self.total_points - len(self.deletions)


@dataclass
class DeduplicationReport:
    total_points: int
    groups: int
    deleted_ids: List[PointId] = field(default_factory=list)
    # ids scheduled for deletion; on a dry run nothing beyond this happens
    planned_ids: List[PointId] = field(default_factory=list)
    kept_count: int = 0
    batches_committed: int = 0
    dry_run: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_points": self.total_points,
            "groups": self.groups,
            "planned": len(self.planned_ids),
            "deleted": len(self.deleted_ids),
            "kept": self.kept_count,
            "batches_committed": self.batches_committed,
            "dry_run": self.dry_run,
        }


# ================================================================================
# KEYS & ORDERING
# ================================================================================

def normalize_link(link: str) -> str:
    normalized = link.lower()
    if normalized.endswith("/"):
        normalized = normalized[:-1]
    return _PROTOCOL_RE.sub("", normalized)


def link_key(payload: Dict[str, Any]) -> Optional[str]:
    link = payload.get(LINK)
    if not link or not isinstance(link, str):
        return None
    return normalize_link(link)


def title_key(payload: Dict[str, Any]) -> Optional[str]:
    title = payload.get(TITLE)
    hackathon = payload.get(HACKATHON)
    if not title or not hackathon:
        return None
    return f"{str(title).lower().strip()}_{str(hackathon).lower().strip()}"


def richness(payload: Dict[str, Any]) -> int:
    return (
        len(payload.get(PROJECT_DESCRIPTION) or "")
        + len(payload.get(HOW_ITS_MADE) or "")
        + (100 if payload.get(SOURCE_CODE) else 0)
        + (50 if payload.get(LINK) else 0)
    )


def parse_last_updated(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC. None if unparseable."""
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = date_parser.isoparse(value)
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _compare_last_updated(a: VectorRecord, b: VectorRecord) -> Optional[int]:
    a_ts = parse_last_updated(a.payload.get(LAST_UPDATED))
    b_ts = parse_last_updated(b.payload.get(LAST_UPDATED))
    if a_ts is None or b_ts is None:
        return None
    if a_ts == b_ts:
        return 0
    return -1 if a_ts > b_ts else 1


def _compare_link_group(a: VectorRecord, b: VectorRecord) -> int:
    by_time = _compare_last_updated(a, b)
    if by_time is not None:
        return by_time
    a_id, b_id = str(a.id), str(b.id)
    return (a_id > b_id) - (a_id < b_id)


def _compare_title_group(a: VectorRecord, b: VectorRecord) -> int:
    by_time = _compare_last_updated(a, b)
    if by_time is not None:
        return by_time
    return richness(b.payload) - richness(a.payload)


# ================================================================================
# RESOLVER
# ================================================================================

class DuplicateResolver:
    """Plans and executes duplicate removal for one collection."""

    def __init__(
        self,
        vector_db: IVectorDBProvider,
        collection_name: str = COLLECTION_NAME,
        batch_size: int = DEDUP_DELETE_BATCH_SIZE,
        page_size: int = DEDUP_SCROLL_PAGE_SIZE,
        max_points: int = DEDUP_MAX_POINTS,
    ):
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        self.vector_db = vector_db
        self.collection_name = collection_name
        self.batch_size = batch_size
        self.page_size = page_size
        self.max_points = max_points

    def plan(self, points: List[VectorRecord]) -> DeduplicationPlan:
        """Partition `points` into duplicate groups. Touches no backend."""
        link_counts = Counter(k for k in (link_key(p.payload) for p in points) if k)

        link_groups: Dict[str, List[VectorRecord]] = {}
        title_groups: Dict[str, List[VectorRecord]] = {}
        for point in points:
            lk = link_key(point.payload)
            if lk and link_counts[lk] > 1:
                link_groups.setdefault(lk, []).append(point)
                continue
            tk = title_key(point.payload)
            if tk:
                title_groups.setdefault(tk, []).append(point)

        plan = DeduplicationPlan(total_points=len(points))
        for key, members in link_groups.items():
            plan.groups.append(self._group(KEY_LINK, key, members, _compare_link_group))
        for key, members in title_groups.items():
            if len(members) > 1:
                plan.groups.append(self._group(KEY_TITLE_HACKATHON, key, members, _compare_title_group))
        return plan

    @staticmethod
    def _group(key_type: str, key: str, members: List[VectorRecord], compare) -> DuplicateGroup:
        ordered = sorted(members, key=cmp_to_key(compare))
        return DuplicateGroup(key_type=key_type, key=key, survivor=ordered[0], duplicates=ordered[1:])

    async def scan(self) -> List[VectorRecord]:
        return await scroll_all(
            self.vector_db,
            self.collection_name,
            page_size=self.page_size,
            max_points=self.max_points,
        )

    async def run(self, dry_run: bool = False) -> DeduplicationReport:
        logger.info(f"Starting duplicate detection on '{self.collection_name}'...")

        with measure_time("duplicate scan"):
            points = await self.scan()
        logger.info(f"Total points: {len(points)}")

        plan = self.plan(points)
        self._log_plan(plan)

        deletions = plan.deletions
        report = DeduplicationReport(
            total_points=plan.total_points,
            groups=len(plan.groups),
            planned_ids=list(deletions),
            kept_count=plan.kept_count,
            dry_run=dry_run,
        )

        if not deletions:
            logger.info("No duplicates found.")
            return report

        if dry_run:
            logger.info(f"Dry run: {len(deletions)} point(s) would be deleted")
            return report

        logger.info("Deleting duplicates...")
        done = 0
        for batch in chunks(deletions, self.batch_size):
            await self.vector_db.delete(self.collection_name, batch)
            done += len(batch)
            report.deleted_ids.extend(batch)
            report.batches_committed += 1
            logger.info(f"Deletion progress: {done}/{len(deletions)}")

        logger.info("✓ Duplicate removal complete")
        return report

    @staticmethod
    def _log_plan(plan: DeduplicationPlan) -> None:
        for group in plan.groups:
            keep = group.survivor
            logger.info(f"Duplicate group ({group.key_type}: {group.key}):")
            logger.info(f"  keep:   id={keep.id} title={keep.payload.get(TITLE)!r}")
            for dup in group.duplicates:
                logger.info(f"  delete: id={dup.id} title={dup.payload.get(TITLE)!r}")
        logger.info(f"Points to delete: {len(plan.deletions)}")
        logger.info(f"Points to keep: {plan.kept_count}")


__all__ = [
    "DeduplicationPlan",
    "DeduplicationReport",
    "DuplicateGroup",
    "DuplicateResolver",
    "normalize_link",
    "richness",
]
