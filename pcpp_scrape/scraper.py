"""Core scraping logic."""

import asyncio
from typing import Awaitable, Callable, List, Optional, Protocol, Set

from pcpp_scrape.config import (
    LISTING_WAIT_MS,
    MAX_ATTEMPTS,
    OUTPUT_PATH,
    RETRY_BACKOFF,
    RETRY_STATUS_CODES,
)
from pcpp_scrape.csv_utils import append_lines, record_to_csv_line
from pcpp_scrape.html_utils import (
    build_listing_url,
    extract_listing_rows,
    parse_cpu_specs,
    parse_html,
)
from pcpp_scrape.logging_config import get_logger, log_scrape_event
from pcpp_scrape.models import CpuDetails, CpuRecord
from pcpp_scrape.retry import attempt, is_retryable_status

__all__ = [
    "PageFetcher",
    "fetch_cpu_details",
    "scrape_page",
]

logger = get_logger("scraper")

Sleep = Callable[[float], Awaitable[None]]


class PageFetcher(Protocol):
    """Anything that can return rendered HTML for a URL (see ZenRowsClient)."""

    async def get(
        self,
        url: str,
        premium_proxy: bool = False,
        js_render: bool = False,
        wait: Optional[int] = None,
    ) -> str:
        ...


async def fetch_cpu_details(
    client: PageFetcher,
    url: str,
    max_attempts: int = MAX_ATTEMPTS,
    backoff: float = RETRY_BACKOFF,
    sleep: Sleep = asyncio.sleep,
) -> CpuDetails:
    """Fetch and parse one CPU detail page.

    Proxy 422 responses are retried with a fixed backoff, up to max_attempts
    in total. Any other failure, or running out of attempts, gives empty
    details instead of raising so one bad page never stops the run.
    """

    async def fetch_once() -> CpuDetails:
        html = await client.get(url, premium_proxy=True)
        return parse_cpu_specs(parse_html(html), url)

    def on_retry(error: BaseException, attempts_left: int) -> None:
        logger.info(f"Error fetching details for {url}: {error}")
        logger.info(f"Retrying {url}... ({attempts_left} retries left)")

    try:
        return await attempt(
            fetch_once,
            max_attempts=max_attempts,
            should_retry=lambda e: is_retryable_status(e, RETRY_STATUS_CODES),
            backoff=backoff,
            sleep=sleep,
            on_retry=on_retry,
        )
    except Exception as e:
        logger.error(f"Final fail for {url}: {e}")
        log_scrape_event("detail_error", {
            "url": url,
            "error": str(e),
            "status_code": getattr(e, "status_code", None),
        })
        return CpuDetails()


async def scrape_page(
    client: PageFetcher,
    page_number: int,
    existing_names: Set[str],
    output_path: str = OUTPUT_PATH,
    sleep: Sleep = asyncio.sleep,
) -> List[CpuRecord]:
    """Scrape one listing page and append its new CPUs to the CSV.

    Rows whose name is in existing_names are skipped without fetching. The
    set itself is not modified. Lines are written in a single append once
    the whole page is processed; if the listing fetch fails nothing is
    written.

    Args:
        client: Fetcher for listing and detail pages
        page_number: Listing page index
        existing_names: Names already stored (read-only)
        output_path: CSV file to append to
        sleep: Backoff sleep passed to the detail fetcher

    Returns:
        Records appended to the CSV
    """
    url = build_listing_url(page_number)
    logger.info(f"Scraping page {page_number}: {url}")
    log_scrape_event("page_start", {"page": page_number, "url": url})

    records: List[CpuRecord] = []
    lines: List[str] = []

    try:
        html = await client.get(url, js_render=True, wait=LISTING_WAIT_MS, premium_proxy=True)
        rows = extract_listing_rows(parse_html(html))
        logger.info(f"  Found {len(rows)} rows on page {page_number}")

        for i, row in enumerate(rows, start=1):
            if not row.name:
                logger.debug(f"    [{i}/{len(rows)}] SKIP (no name)")
                continue

            if row.name in existing_names:
                logger.info(f"Skipping {row.name} - already in CSV")
                log_scrape_event("row_skipped", {"page": page_number, "name": row.name})
                continue

            logger.info(f"Trying to fetch {row.name}")
            if row.product_url:
                details = await fetch_cpu_details(client, row.product_url, sleep=sleep)
            else:
                logger.warning(f"No product link for {row.name}, leaving specs blank")
                details = CpuDetails()

            record = CpuRecord(
                name=row.name,
                image_url=row.image_url,
                product_url=row.product_url,
                price=row.price,
                details=details,
            )
            records.append(record)
            lines.append(record_to_csv_line(record))

    except Exception as e:
        logger.error(f"Failed to scrape page {page_number}: {e}")
        log_scrape_event("page_error", {"page": page_number, "url": url, "error": str(e)})
        return []

    written = append_lines(output_path, lines)
    logger.info(f"Page {page_number} scraped successfully ({written} new CPUs).")
    log_scrape_event("page_complete", {"page": page_number, "new_records": written})
    return records
