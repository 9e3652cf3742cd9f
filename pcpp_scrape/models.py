"""Data models for CPU records."""

from dataclasses import dataclass, field, fields
from typing import List

__all__ = ["CpuDetails", "CpuRecord", "CSV_HEADERS", "DETAIL_FIELDS"]

# Column order of the output CSV. Must stay in sync with CpuRecord.to_row().
CSV_HEADERS: List[str] = [
    "Name",
    "Image URL",
    "Product URL",
    "Price",
    "Manufacturer",
    "Part #",
    "Series",
    "Microarchitecture",
    "Core Family",
    "Socket",
    "Core Count",
    "Performance Core Clock",
    "Performance Core Boost Clock",
    "Efficiency Core Clock",
    "Efficiency Core Boost Clock",
    "L2 Cache",
    "L3 Cache",
    "TDP",
    "Integrated Graphics",
    "Maximum Supported Memory",
    "ECC Support",
    "Includes Cooler",
    "Packaging",
    "Lithography",
    "Includes CPU Cooler",
    "Simultaneous Multithreading",
    "Specs Num",
]


@dataclass
class CpuDetails:
    """Spec attributes scraped from a CPU detail page.

    Every attribute is optional text and defaults to "" so a record is always
    complete. specs_num is the number of spec groups on the page, recognized
    or not.
    """

    manufacturer: str = ""
    part_number: str = ""
    series: str = ""
    microarchitecture: str = ""
    core_family: str = ""
    socket: str = ""
    core_count: str = ""
    performance_core_clock: str = ""
    performance_core_boost_clock: str = ""
    efficiency_core_clock: str = ""
    efficiency_core_boost_clock: str = ""
    l2_cache: str = ""
    l3_cache: str = ""
    tdp: str = ""
    integrated_graphics: str = ""
    maximum_supported_memory: str = ""
    ecc_support: str = ""
    includes_cooler: str = ""
    packaging: str = ""
    lithography: str = ""
    includes_cpu_cooler: str = ""
    simultaneous_multithreading: str = ""
    specs_num: int = 0

    def is_empty(self) -> bool:
        return self == CpuDetails()


# Detail attribute names in CSV order (everything except specs_num)
DETAIL_FIELDS: List[str] = [f.name for f in fields(CpuDetails) if f.name != "specs_num"]


@dataclass
class CpuRecord:
    """One CPU listing row merged with its detail page specs."""

    name: str
    image_url: str = ""
    product_url: str = ""
    price: str = ""
    details: CpuDetails = field(default_factory=CpuDetails)

    def to_row(self) -> List[object]:
        """Values in CSV_HEADERS order."""
        row: List[object] = [self.name, self.image_url, self.product_url, self.price]
        row.extend(getattr(self.details, name) for name in DETAIL_FIELDS)
        row.append(self.details.specs_num)
        return row
