"""
FILE: showcase_matcher/core/collection_scan.py

Read a collection through IVectorDBProvider.scroll(), page by page, until the
backend reports no next offset.

- iter_pages(): async generator over pages; callers may stop early
- scroll_all(): collects every page; a max_points cap turns an unexpectedly
  large collection into DuplicateScanLimitError instead of a silently
  truncated result
"""

import logging
from typing import Any, AsyncIterator, List, Optional

from showcase_matcher.core.exceptions import DuplicateScanLimitError
from showcase_matcher.providers.vectordb.base import IVectorDBProvider, VectorRecord

logger = logging.getLogger(__name__)


async def iter_pages(
    vector_db: IVectorDBProvider,
    collection_name: str,
    page_size: int,
    filter: Optional[Any] = None,
) -> AsyncIterator[List[VectorRecord]]:
    offset = None
    while True:
        page, next_offset = await vector_db.scroll(
            collection_name,
            limit=page_size,
            offset=offset,
            filter=filter,
            with_payload=True,
            with_vectors=False,
        )
        if page:
            yield page
        if next_offset is None or not page:
            return
        offset = next_offset


async def scroll_all(
    vector_db: IVectorDBProvider,
    collection_name: str,
    page_size: int,
    max_points: Optional[int] = None,
    filter: Optional[Any] = None,
) -> List[VectorRecord]:
    records: List[VectorRecord] = []
    pages = 0

    async for page in iter_pages(vector_db, collection_name, page_size, filter=filter):
        records.extend(page)
        pages += 1

        if max_points is not None and len(records) > max_points:
            raise DuplicateScanLimitError(
                f"Collection '{collection_name}' holds more than {max_points} points; "
                f"raise DEDUP_MAX_POINTS to scan it",
                context={"collection": collection_name, "max_points": max_points},
            )

    logger.debug(f"Scanned {len(records)} points from '{collection_name}' in {pages} page(s)")
    return records


__all__ = ["iter_pages", "scroll_all"]
