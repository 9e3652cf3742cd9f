"""Logging configuration for the scraper.

Console output for humans, plus a daily JSONL file under logs/ so a run can
be replayed afterwards (which rows were skipped, which detail pages failed).
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import IO, Any, Dict, Optional

__all__ = [
    "setup_logging",
    "get_logger",
    "log_scrape_event",
    "LOG_DIR",
    "ROOT_LOGGER",
]

ROOT_LOGGER = "pcpp_scrape"

LOG_DIR = Path(__file__).parent.parent / "logs"


class JSONLFileHandler(logging.Handler):
    """Writes one JSON object per record to logs/<prefix>_<YYYYMMDD>.jsonl."""

    def __init__(self, log_dir: Path, prefix: str = "pcpp"):
        super().__init__()
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.prefix = prefix
        self._current_date: Optional[str] = None
        self._stream: Optional[IO[str]] = None

    def _get_stream(self) -> IO[str]:
        """Open today's file, rotating when the date changes."""
        today = datetime.now().strftime("%Y%m%d")
        if today != self._current_date or self._stream is None:
            if self._stream is not None:
                self._stream.close()
            self._current_date = today
            path = self.log_dir / f"{self.prefix}_{today}.jsonl"
            self._stream = open(path, "a", encoding="utf-8")
        return self._stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry: Dict[str, Any] = {
                "timestamp": datetime.fromtimestamp(record.created).isoformat(),
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
            }
            if hasattr(record, "event_type"):
                entry["event_type"] = record.event_type
            if hasattr(record, "extra_data"):
                entry.update(record.extra_data)

            stream = self._get_stream()
            stream.write(json.dumps(entry, ensure_ascii=False) + "\n")
            stream.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None
        super().close()


class ColoredFormatter(logging.Formatter):
    """Colors the level name when writing to a terminal."""

    COLORS = {
        "DEBUG": "\033[36m",      # Cyan
        "INFO": "\033[32m",       # Green
        "WARNING": "\033[33m",    # Yellow
        "ERROR": "\033[31m",      # Red
        "CRITICAL": "\033[35m",   # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, fmt: str, datefmt: Optional[str] = None, use_color: bool = True):
        super().__init__(fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_color:
            return super().format(record)
        # Work on a copy so other handlers see the plain level name
        colored = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, "")
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


def setup_logging(
    level: int = logging.INFO,
    log_to_file: bool = True,
    log_to_console: bool = True,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """Set up logging for the scraper.

    Args:
        level: Console logging level (default: INFO)
        log_to_file: Whether to write the JSONL log
        log_to_console: Whether to log to stdout
        log_dir: Custom log directory (default: project logs/)

    Returns:
        The package root logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(logging.DEBUG if log_to_file else level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        use_color = hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
        console_handler.setFormatter(
            ColoredFormatter("%(asctime)s [%(levelname)s] %(message)s", datefmt="%H:%M:%S", use_color=use_color)
        )
        logger.addHandler(console_handler)

    if log_to_file:
        file_handler = JSONLFileHandler(log_dir or LOG_DIR)
        file_handler.setLevel(logging.DEBUG)  # Everything goes to the file
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Get a logger under the package namespace (e.g. 'scraper' -> 'pcpp_scrape.scraper')."""
    if name == ROOT_LOGGER:
        return logging.getLogger(ROOT_LOGGER)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def log_scrape_event(
    event_type: str,
    data: Dict[str, Any],
    level: int = logging.DEBUG,
    logger_name: str = ROOT_LOGGER,
) -> None:
    """Log a structured scrape event.

    The optional "message" key becomes the log message; everything else is
    merged into the JSONL entry.

    Args:
        event_type: e.g. 'page_start', 'row_skipped', 'detail_error'
        data: Event-specific data
        level: Log level (DEBUG keeps events out of the console at INFO)
        logger_name: Logger to use
    """
    logger = get_logger(logger_name)
    if not logger.isEnabledFor(level):
        return

    record = logger.makeRecord(
        logger.name,
        level,
        "(pcpp_scrape)",
        0,
        data.get("message", event_type),
        (),
        None,
    )
    record.event_type = event_type
    record.extra_data = {k: v for k, v in data.items() if k != "message"}

    logger.handle(record)
