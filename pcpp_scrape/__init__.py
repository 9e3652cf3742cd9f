"""PCPartPicker CPU scraper package."""

__version__ = "0.1.0"

# Re-export main components for convenient imports
from pcpp_scrape.config import BASE_URL, OUTPUT_PATH, SPEC_LABELS
from pcpp_scrape.csv_utils import load_existing_names, record_to_csv_line
from pcpp_scrape.fetcher import FetchError, ZenRowsClient
from pcpp_scrape.models import CSV_HEADERS, CpuDetails, CpuRecord
from pcpp_scrape.scraper import fetch_cpu_details, scrape_page

__all__ = [
    # Version
    "__version__",
    # Config
    "BASE_URL",
    "OUTPUT_PATH",
    "SPEC_LABELS",
    # Models
    "CSV_HEADERS",
    "CpuDetails",
    "CpuRecord",
    # Core functions
    "FetchError",
    "ZenRowsClient",
    "fetch_cpu_details",
    "scrape_page",
    "load_existing_names",
    "record_to_csv_line",
]
