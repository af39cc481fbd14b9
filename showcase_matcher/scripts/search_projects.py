#!/usr/bin/env python3
"""
Search the showcase collection from the command line.

Examples:
    showcase-search "decentralized voting with zk proofs"
    showcase-search "NFT ticketing" --limit 3
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from showcase_matcher.config.settings import Settings
from showcase_matcher.container.service_container import ServiceContainer
from showcase_matcher.core.models import Project
from showcase_matcher.utils.logging_config import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find showcase projects similar to an idea",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("query", help="Idea text to search for")
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Number of projects to show (default: SEARCH_DEFAULT_LIMIT or 10)",
    )
    return parser


def format_project(rank: int, project: Project) -> str:
    lines = [f"{rank}. {project.title or '(untitled)'}"]
    if project.link:
        lines.append(f"   link:   {project.link}")
    if project.source_code:
        lines.append(f"   source: {project.source_code}")
    if project.description:
        lines.append(f"   {project.description}")
    return "\n".join(lines)


async def run(query: str, limit: int, settings: Settings) -> List[Project]:
    container = ServiceContainer(settings)
    try:
        await container.initialize()
        return await container.get_search_handler().search_projects(query, limit=limit)
    finally:
        await container.shutdown()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    query = args.query.strip()
    if not query:
        print("Query must not be empty", file=sys.stderr)
        return 1

    settings = Settings()
    configure_logging(settings)
    limit = args.limit or settings.search_default_limit

    try:
        projects = asyncio.run(run(query, limit, settings))
    except Exception as e:
        logger.error(f"Search failed: {e}", exc_info=not settings.is_production)
        return 1

    if not projects:
        print("No similar projects found.")
        return 0

    for rank, project in enumerate(projects, start=1):
        print(format_project(rank, project))
    return 0


if __name__ == "__main__":
    sys.exit(main())
