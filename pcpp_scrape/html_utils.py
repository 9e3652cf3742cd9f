"""HTML parsing and extraction utilities."""

from dataclasses import dataclass
from typing import Dict, List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from pcpp_scrape.config import (
    BASE_URL,
    LISTING_ROW_SELECTOR,
    LISTING_URL,
    PRICE_CTA_TEXT,
    PRICE_PLACEHOLDER,
    ROW_IMAGE_SELECTOR,
    ROW_LINK_SELECTOR,
    ROW_NAME_SELECTOR,
    ROW_PRICE_SELECTOR,
    SPEC_GROUP_SELECTOR,
    SPEC_LABELS,
    SPECS_SELECTOR,
)
from pcpp_scrape.logging_config import get_logger
from pcpp_scrape.models import CpuDetails

__all__ = [
    "ListingRow",
    "build_listing_url",
    "parse_html",
    "extract_group_title",
    "extract_group_value",
    "extract_spec_map",
    "map_spec_labels",
    "parse_cpu_specs",
    "clean_price",
    "resolve_product_url",
    "extract_listing_rows",
]

logger = get_logger("html_utils")


@dataclass
class ListingRow:
    """Summary fields from one row of the listing table."""

    name: Optional[str]
    image_url: str = ""
    product_url: str = ""
    price: str = PRICE_PLACEHOLDER


def build_listing_url(page_number: int) -> str:
    """Listing URL for a page index (the site paginates via the fragment)."""
    return f"{LISTING_URL}#page={page_number}"


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


# =============================================================================
# Detail page
# =============================================================================

def extract_group_title(group: Tag) -> str:
    heading = group.select_one("h3")
    return heading.get_text().strip() if heading else ""


def extract_group_value(group: Tag) -> str:
    """Value of a spec group: the paragraph text, else the list items joined by ", "."""
    paragraph = group.select_one("div > p")
    if paragraph is not None:
        text = paragraph.get_text().strip()
        if text:
            return text
    items = [li.get_text().strip() for li in group.select("div > ul > li")]
    return ", ".join(items)


def extract_spec_map(groups: List[Tag]) -> Dict[str, str]:
    """Label -> value for every titled group. Later duplicates win."""
    specs: Dict[str, str] = {}
    for group in groups:
        title = extract_group_title(group)
        if title:
            specs[title] = extract_group_value(group)
    return specs


def map_spec_labels(specs: Dict[str, str], specs_num: int = 0) -> CpuDetails:
    """Normalize a label -> value map into CpuDetails.

    Labels missing from SPEC_LABELS are dropped; recognized labels that are
    absent stay "".
    """
    details = CpuDetails(specs_num=specs_num)
    for label, value in specs.items():
        field_name = SPEC_LABELS.get(label)
        if field_name is not None:
            setattr(details, field_name, value)
    return details


def parse_cpu_specs(soup: BeautifulSoup, url: str = "") -> CpuDetails:
    """Extract the spec block of a CPU detail page.

    A page without the spec container is not an error: it yields empty
    details (specs_num 0) and a warning.
    """
    container = soup.select_one(SPECS_SELECTOR)
    if container is None:
        logger.warning(f"Specs section not found for {url}")
        return CpuDetails()

    groups = container.select(SPEC_GROUP_SELECTOR)
    return map_spec_labels(extract_spec_map(groups), specs_num=len(groups))


# =============================================================================
# Listing page
# =============================================================================

def clean_price(price_el: Optional[Tag]) -> str:
    """Price text without the trailing "Add" button label.

    >>> clean_price(None)
    'N/A'
    """
    if price_el is None:
        return PRICE_PLACEHOLDER
    text = price_el.get_text().strip()
    return text.split(PRICE_CTA_TEXT)[0].strip()


def resolve_product_url(href: Optional[str], base_url: str = BASE_URL) -> str:
    if not href or not isinstance(href, str):
        return ""
    return urljoin(base_url, href.strip())


def _parse_row(row: Tag) -> ListingRow:
    name_el = row.select_one(ROW_NAME_SELECTOR)
    name = name_el.get_text().strip() if name_el else None

    image_url = ""
    img = row.select_one(ROW_IMAGE_SELECTOR)
    if img is not None:
        src = img.get("src")
        if src and isinstance(src, str):
            image_url = src.strip()

    link = row.select_one(ROW_LINK_SELECTOR)
    product_url = resolve_product_url(link.get("href") if link else None)

    return ListingRow(
        name=name or None,
        image_url=image_url,
        product_url=product_url,
        price=clean_price(row.select_one(ROW_PRICE_SELECTOR)),
    )


def extract_listing_rows(soup: BeautifulSoup) -> List[ListingRow]:
    """Summary fields of every product row, in document order."""
    return [_parse_row(row) for row in soup.select(LISTING_ROW_SELECTOR)]
