"""CSV storage for scraped CPU records.

The output file is append-only: a header line when it is first created,
then one fully quoted line per new record.
"""

import csv
import io
import os
from typing import Iterable, List, Set

from pcpp_scrape.logging_config import get_logger
from pcpp_scrape.models import CSV_HEADERS, CpuRecord

__all__ = [
    "header_line",
    "format_csv_line",
    "record_to_csv_line",
    "ensure_output_file",
    "load_existing_names",
    "append_lines",
]

logger = get_logger("csv_utils")

NAME_COLUMN = CSV_HEADERS[0]


def header_line() -> str:
    return ",".join(CSV_HEADERS) + "\n"


def format_csv_line(values: Iterable[object]) -> str:
    """Serialize values as one CSV line with every field quoted.

    Falsy values (None, "", 0) become an empty quoted field.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow([str(v) if v else "" for v in values])
    return buf.getvalue()


def record_to_csv_line(record: CpuRecord) -> str:
    return format_csv_line(record.to_row())


def ensure_output_file(path: str) -> bool:
    """Create the CSV with its header row if missing. Returns True if created."""
    if os.path.exists(path):
        return False
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        f.write(header_line())
    return True


def load_existing_names(path: str) -> Set[str]:
    """Names already present in the output CSV.

    Creates the file (header only) when it does not exist yet. Rows without
    a Name contribute nothing.
    """
    if ensure_output_file(path):
        logger.info(f"CSV file not found, created {path} with headers")
        return set()

    names: Set[str] = set()
    with open(path, "r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for row in reader:
            name = row.get(NAME_COLUMN)
            if name:
                names.add(name)

    logger.info(f"Loaded {len(names)} existing CPU names from {path}")
    return names


def append_lines(path: str, lines: List[str]) -> int:
    """Append pre-serialized lines to the CSV. Returns the number written."""
    if not lines:
        return 0
    with open(path, "a", newline="", encoding="utf-8") as f:
        f.write("".join(lines))
    return len(lines)
