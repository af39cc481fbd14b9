#!/usr/bin/env python3
"""
Remove duplicate projects from the showcase collection.

Scans every point, keeps one survivor per duplicate group (same normalized
link, else same title + hackathon) and deletes the rest in batches.

Examples:
    showcase-dedupe --dry-run
    showcase-dedupe --batch-size 50
    showcase-dedupe --collection eth_global_showcase_staging
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from showcase_matcher.config.constants import COLLECTION_NAME
from showcase_matcher.config.settings import Settings
from showcase_matcher.container.service_container import ServiceContainer
from showcase_matcher.core.duplicate_resolver import DeduplicationReport
from showcase_matcher.utils.logging_config import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Remove duplicate projects from the showcase collection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Plan and log deletions without deleting anything",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=None,
        help="Point ids deleted per request (default: DEDUP_BATCH_SIZE or 100)",
    )
    parser.add_argument(
        "--collection",
        default=COLLECTION_NAME,
        help=f"Collection to deduplicate (default: {COLLECTION_NAME})",
    )
    return parser


async def run(args: argparse.Namespace, settings: Settings) -> DeduplicationReport:
    container = ServiceContainer(settings)
    try:
        resolver = container.create_duplicate_resolver(
            collection_name=args.collection,
            batch_size=args.batch_size,
        )
        return await resolver.run(dry_run=args.dry_run)
    finally:
        await container.shutdown()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.batch_size is not None and args.batch_size < 1:
        print("--batch-size must be >= 1", file=sys.stderr)
        return 1

    settings = Settings()
    configure_logging(settings)

    try:
        report = asyncio.run(run(args, settings))
    except Exception as e:
        logger.error(f"Duplicate removal failed: {e}", exc_info=True)
        return 1

    logger.info(summary_line(report))
    return 0


def summary_line(report: DeduplicationReport) -> str:
    summary = report.to_dict()
    if report.dry_run:
        return (
            f"Dry run: {summary['planned']} would be deleted, {summary['kept']} would be kept, "
            f"{summary['groups']} group(s)"
        )
    return (
        f"Done: {summary['deleted']} deleted, {summary['kept']} kept, "
        f"{summary['groups']} group(s), {summary['batches_committed']} batch(es)"
    )


if __name__ == "__main__":
    sys.exit(main())
