"""
================================================================================
HELPERS - Common Utility Functions
================================================================================

PURPOSE:
--------
Provide common helper utilities:
  - Time measurement
  - Batching
  - Request ids
  - String truncation for log lines

FUNCTIONS:
  - measure_time: Context manager for measuring execution time
  - chunks: Split a sequence into fixed-size batches
  - generate_request_id: Short random id for request correlation
  - truncate_string: Shorten long strings for logs

================================================================================
"""

import logging
import time
import uuid
from contextlib import contextmanager
from typing import Iterator, List, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@contextmanager
def measure_time(operation_name: str):
    """
    Context manager to measure execution time.

    Usage:
        with measure_time("duplicate scan"):
            # do something
            pass
        # Logs: "✅ duplicate scan completed in 125.5ms"

    Args:
        operation_name: Name of operation being measured
    """
    start_time = time.time()
    logger.debug(f"⏱️  Starting: {operation_name}")

    try:
        yield
    finally:
        duration_ms = (time.time() - start_time) * 1000
        logger.info(f"✅ {operation_name} completed in {duration_ms:.1f}ms")


def chunks(items: Sequence[T], size: int) -> Iterator[List[T]]:
    """
    Yield successive `size`-long batches from `items`; the last may be shorter.

    Examples:
        >>> list(chunks([1, 2, 3, 4, 5], 2))
        [[1, 2], [3, 4], [5]]
    """
    if size < 1:
        raise ValueError(f"Batch size must be >= 1, got {size}")
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


def generate_request_id() -> str:
    return uuid.uuid4().hex[:16]


def truncate_string(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """
    Truncate string to max length.

    Examples:
        >>> truncate_string("hello world", 8)
        'hello...'
    """
    if len(text) <= max_length:
        return text
    return text[: max(max_length - len(suffix), 0)] + suffix
