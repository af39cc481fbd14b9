"""Utility helpers: timing, batching, logging setup."""

from showcase_matcher.utils.helpers import chunks, generate_request_id, measure_time, truncate_string
from showcase_matcher.utils.logging_config import configure_logging

__all__ = [
    "chunks",
    "configure_logging",
    "generate_request_id",
    "measure_time",
    "truncate_string",
]
