"""Command-line interface for the scraper."""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

__all__ = ["main", "run", "parse_args"]

from pcpp_scrape.config import (
    API_KEY_ENV,
    OUTPUT_PATH,
    PAGE_ENV,
    REQUEST_TIMEOUT,
    ConfigError,
    get_api_key,
    get_default_page,
)
from pcpp_scrape.csv_utils import load_existing_names
from pcpp_scrape.fetcher import ZenRowsClient
from pcpp_scrape.html_utils import build_listing_url
from pcpp_scrape.logging_config import get_logger, setup_logging
from pcpp_scrape.models import CpuRecord
from pcpp_scrape.scraper import PageFetcher, scrape_page

logger = get_logger("cli")


async def run(client: PageFetcher, page_number: int, output_path: str = OUTPUT_PATH) -> List[CpuRecord]:
    """Load known names, scrape one page, report.

    Fetching only starts after the existing names are fully loaded.
    """
    existing_names = load_existing_names(output_path)
    logger.info("Existing CPU names loaded.")

    records = await scrape_page(client, page_number, existing_names, output_path)

    logger.info(f"Data has been written to CSV file ({output_path}).")
    return records


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="PCPartPicker CPU scraper: one listing page plus its detail pages, appended to CSV",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  # Scrape page 4 into the default CSV ({OUTPUT_PATH})
  python -m pcpp_scrape.cli --page 4

  # Custom output file, verbose console
  python -m pcpp_scrape.cli --page 2 --output data/cpus.csv --log-level DEBUG

  # See what would be scraped without calling the proxy
  python -m pcpp_scrape.cli --page 3 --dry-run

The API key is read from {API_KEY_ENV} (environment or .env file).
        """,
    )

    parser.add_argument(
        "--page",
        type=int,
        default=None,
        help=f"Listing page index to scrape (default: ${PAGE_ENV} or 1)",
    )
    parser.add_argument(
        "--output",
        default=OUTPUT_PATH,
        help=f"CSV file to append to (default: {OUTPUT_PATH})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=REQUEST_TIMEOUT,
        help=f"Per-request timeout in seconds (default: {REQUEST_TIMEOUT:g})",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Console log level (default: INFO)",
    )
    parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Don't write the JSONL log under logs/",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the target URL and known CPU count without fetching or writing anything",
    )

    args = parser.parse_args(argv)
    if args.page is not None and args.page < 1:
        parser.error("--page must be >= 1")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    load_dotenv(dotenv_path=Path.cwd() / ".env")
    args = parse_args(argv)

    setup_logging(
        level=getattr(logging, args.log_level),
        log_to_file=not args.no_log_file,
    )

    try:
        page_number = args.page if args.page is not None else get_default_page()
        if args.dry_run:
            existing = load_existing_names(args.output) if os.path.exists(args.output) else set()
            print(f"Would scrape {build_listing_url(page_number)}")
            print(f"Known CPUs in {args.output}: {len(existing)}")
            return 0
        client = ZenRowsClient(get_api_key(), timeout=args.timeout)
    except ConfigError as e:
        logger.error(str(e))
        return 2

    try:
        asyncio.run(run(client, page_number, args.output))
    finally:
        client.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
