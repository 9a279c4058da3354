"""CLI entry point for doccrawl."""

import argparse
import json
import logging
import sys
from typing import Optional

from doccrawl.container import Container
from doccrawl.domain.categorization import CATEGORIES
from doccrawl.domain.crawl_options import CrawlOptions
from doccrawl.domain.crawl_result import CrawlResult, CrawlStatus
from doccrawl.exceptions import ConfigError, RendererInitError
from doccrawl.utils.url_utils import is_valid_url


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="doccrawl",
        description="Download documentation sites as categorized markdown files",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    crawl = sub.add_parser("crawl", help="Crawl a documentation site")
    crawl.add_argument("url", help="Homepage of the documentation site")
    crawl.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum link depth from the homepage (default: configured value)",
    )
    crawl.add_argument(
        "--rate-limit",
        type=int,
        default=None,
        help="Maximum page fetches per second (default: configured value)",
    )
    crawl.add_argument(
        "--force-refresh",
        action="store_true",
        help="Re-download documentation that already exists",
    )
    crawl.add_argument(
        "--include",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Only crawl URLs matching this glob (repeatable)",
    )
    crawl.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Skip URLs matching this glob (repeatable)",
    )
    crawl.add_argument(
        "--output",
        choices=["json", "table"],
        default="table",
        help="Output format (default: table)",
    )

    listing = sub.add_parser("list", help="List downloaded documentation")
    listing.add_argument(
        "--category",
        choices=["all", *CATEGORIES],
        default="all",
        help="Category to list (default: all)",
    )
    listing.add_argument(
        "--stats",
        action="store_true",
        help="Show file counts and sizes",
    )
    return parser


def _print_progress(status: CrawlStatus) -> None:
    print(
        f"  [{status.processed} processed, {status.saved} saved, {status.errors} errors] {status.current_url}",
        file=sys.stderr,
    )


def _print_result(result: CrawlResult) -> None:
    print(f"\n{'='*60}")
    print(f"  Documentation: {result.category}/{result.name}")
    print(f"  Success:    {'yes' if result.success else 'no'}")
    print(f"  Discovered: {result.stats.discovered}")
    print(f"  Processed:  {result.stats.processed}")
    print(f"  Saved:      {result.stats.saved}")
    print(f"  Errors:     {result.stats.errors}")
    print(f"{'='*60}")
    for path in result.saved_files:
        print(f"  + {path}")
    for error in result.errors:
        print(f"  ! {error}")


def _run_crawl(args, container: Container) -> int:
    if not is_valid_url(args.url):
        print(f"error: not an absolute http(s) URL: {args.url}", file=sys.stderr)
        return 2

    options = CrawlOptions(
        url=args.url,
        max_depth=args.max_depth,
        force_refresh=args.force_refresh,
        rate_limit=args.rate_limit,
        include_patterns=args.include,
        exclude_patterns=args.exclude,
        on_progress=_print_progress if args.output == "table" else None,
    )
    try:
        result = container.crawler().crawl(options)
    except RendererInitError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.output == "json":
        print(json.dumps(result.to_dict(), indent=2))
    else:
        _print_result(result)
    return 0 if result.success else 1


def _run_list(args, container: Container) -> int:
    storage = container.storage()
    listing = storage.list_documentation(None if args.category == "all" else args.category)
    categories = CATEGORIES if args.category == "all" else (args.category,)

    for category in categories:
        names = listing[category]
        print(f"{category} ({len(names)})")
        for name in names:
            if not args.stats:
                print(f"  {name}")
                continue
            stats = storage.documentation_stats(category, name)
            modified = stats.last_modified.isoformat() if stats.last_modified else "N/A"
            print(f"  {name}: {stats.file_count} files, {stats.total_size} bytes, last modified {modified}")
    return 0


def main(argv: Optional[list[str]] = None, container: Optional[Container] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    container = container or Container()
    try:
        if args.command == "crawl":
            return _run_crawl(args, container)
        return _run_list(args, container)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
