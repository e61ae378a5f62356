import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from postpress.services.body_renderer import BodyRenderer
from postpress.services.post_index import PostIndex
from postpress.services.post_loader import discover_posts
from postpress.services.site_builder import SiteBuilder
from postpress.settings import settings
from postpress.utils import configure_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PARTIAL = 1
EXIT_UNREADABLE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="postpress", description="Publish date-stamped Markdown posts."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Render the static site")
    build.add_argument("--posts-dir", type=Path, default=settings.posts_path)
    build.add_argument("--output-dir", type=Path, default=settings.output_path)
    build.add_argument(
        "--base-url",
        default=settings.BASE_URL,
        help="Substituted for {{site.baseurl}} and prefixed to links",
    )
    build.add_argument("--site-title", default=settings.SITE_TITLE)
    build.add_argument("--per-page", type=int, default=settings.PAGE_SIZE)
    build.add_argument("--workers", type=int, default=settings.MAX_WORKERS)
    build.add_argument(
        "--highlight",
        action="store_true",
        default=settings.HIGHLIGHT_CODE,
        help="Syntax-highlight fenced code with Pygments",
    )
    return parser


def run_build(args: argparse.Namespace) -> int:
    try:
        load_report = discover_posts(args.posts_dir, max_workers=args.workers)
    except OSError as e:
        logger.error(f"Cannot read posts directory {args.posts_dir}: {e}")
        return EXIT_UNREADABLE

    builder = SiteBuilder(
        PostIndex(load_report.posts),
        BodyRenderer(base_url=args.base_url, highlight_code=args.highlight),
        args.output_dir,
        site_title=args.site_title,
        per_page=args.per_page,
        base_url=args.base_url,
        max_workers=args.workers,
    )
    build_report = builder.build()

    for skipped in load_report.skipped:
        logger.warning(f"Skipped {skipped.name}: {skipped.reason}")
    for failure in build_report.failed:
        logger.warning(f"Not published {failure.slug}: {failure.reason}")

    if load_report.skipped or build_report.failed:
        return EXIT_PARTIAL
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    configure_logging(settings.LOG_LEVEL)
    args = build_parser().parse_args(argv)
    if args.command == "build":
        return run_build(args)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
