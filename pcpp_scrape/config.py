"""Configuration and constants for the scraper."""

import os
from typing import Dict, Optional

__all__ = [
    "BASE_URL",
    "LISTING_URL",
    "ZENROWS_API_URL",
    "API_KEY_ENV",
    "PAGE_ENV",
    "REQUEST_TIMEOUT",
    "MAX_ATTEMPTS",
    "RETRY_BACKOFF",
    "RETRY_STATUS_CODES",
    "LISTING_WAIT_MS",
    "DEFAULT_PAGE",
    "OUTPUT_PATH",
    "SPECS_SELECTOR",
    "SPEC_GROUP_SELECTOR",
    "LISTING_ROW_SELECTOR",
    "ROW_NAME_SELECTOR",
    "ROW_IMAGE_SELECTOR",
    "ROW_LINK_SELECTOR",
    "ROW_PRICE_SELECTOR",
    "PRICE_CTA_TEXT",
    "PRICE_PLACEHOLDER",
    "SPEC_LABELS",
    "ConfigError",
    "get_api_key",
    "get_default_page",
]

BASE_URL = "https://pcpartpicker.com"

# Listing page; the page index goes into the fragment (#page=N)
LISTING_URL = f"{BASE_URL}/products/cpu/"

# Rendering proxy
ZENROWS_API_URL = "https://api.zenrows.com/v1/"
API_KEY_ENV = "ZENROWS_API_KEY"
PAGE_ENV = "PCPP_PAGE"

# Per-request timeout (seconds). JS rendering through the proxy is slow.
REQUEST_TIMEOUT = float(os.getenv("PCPP_REQUEST_TIMEOUT", "120"))

# Detail page retry settings
MAX_ATTEMPTS = 3  # Total attempts per detail URL, not retries
RETRY_BACKOFF = 3.0  # Fixed delay between attempts (seconds)
RETRY_STATUS_CODES = {422}  # Proxy/render hiccup on this site

# Let client-side content settle before the proxy snapshots the listing
LISTING_WAIT_MS = 3000

DEFAULT_PAGE = 1

# Output path
OUTPUT_PATH = "cpus_detailed.csv"


# =============================================================================
# Selectors
# =============================================================================

SPECS_SELECTOR = (
    "#product-page > div.main-wrapper.xs-col-12 > div.wrapper.wrapper__pageContent"
    " > section > div"
    " > div.main-content.col.xs-col-12.md-col-8.lg-col-8.xl-col-9"
    " > div.block.xs-block.md-hide.specs"
)
SPEC_GROUP_SELECTOR = "div.group"

LISTING_ROW_SELECTOR = "#category_content > tr"
ROW_NAME_SELECTOR = "td.td__name > a > div.td__nameWrapper > p"
ROW_IMAGE_SELECTOR = "td.td__name > a > div.td__imageWrapper > div > img"
ROW_LINK_SELECTOR = "td.td__name > a"
ROW_PRICE_SELECTOR = "td.td__price"

# Price cells end with an "Add" button label
PRICE_CTA_TEXT = "Add"
PRICE_PLACEHOLDER = "N/A"


# =============================================================================
# Spec label -> CpuDetails field
# =============================================================================
# Exact heading text on the detail page. Anything not listed here is ignored.

SPEC_LABELS: Dict[str, str] = {
    "Manufacturer": "manufacturer",
    "Part #": "part_number",
    "Series": "series",
    "Microarchitecture": "microarchitecture",
    "Core Family": "core_family",
    "Socket": "socket",
    "Core Count": "core_count",
    "Performance Core Clock": "performance_core_clock",
    "Performance Core Boost Clock": "performance_core_boost_clock",
    "Efficiency Core Clock": "efficiency_core_clock",
    "Efficiency Core Boost Clock": "efficiency_core_boost_clock",
    "L2 Cache": "l2_cache",
    "L3 Cache": "l3_cache",
    "TDP": "tdp",
    "Integrated Graphics": "integrated_graphics",
    "Maximum Supported Memory": "maximum_supported_memory",
    "ECC Support": "ecc_support",
    "Includes Cooler": "includes_cooler",
    "Packaging": "packaging",
    "Lithography": "lithography",
    "Includes CPU Cooler": "includes_cpu_cooler",
    "Simultaneous Multithreading": "simultaneous_multithreading",
}


class ConfigError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def get_api_key(env_var: str = API_KEY_ENV) -> str:
    """Read the rendering proxy API key from the environment."""
    api_key = os.getenv(env_var, "").strip()
    if not api_key:
        raise ConfigError(f"{env_var} is not set (add it to your environment or .env file)")
    return api_key


def get_default_page(env_var: str = PAGE_ENV) -> int:
    """Page index from the environment, falling back to DEFAULT_PAGE."""
    raw: Optional[str] = os.getenv(env_var)
    if not raw:
        return DEFAULT_PAGE
    try:
        page = int(raw)
    except ValueError as e:
        raise ConfigError(f"{env_var} must be an integer, got {raw!r}") from e
    if page < 1:
        raise ConfigError(f"{env_var} must be >= 1, got {page}")
    return page
