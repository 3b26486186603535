"""Newsboard logging: console on stderr, a daily file, and per-source prefixes."""

import logging
import sys
from datetime import datetime

from .config import LOGS_DIR

_logger = None


class SourceLogger(logging.LoggerAdapter):
    """Prefixes every message with the source id, e.g. `[hackernews] 15 items`."""

    def process(self, msg, kwargs):
        return f"[{self.extra['source']}] {msg}", kwargs


def get_logger() -> logging.Logger:
    """Get or create the newsboard logger with file + console handlers."""
    global _logger
    if _logger is not None:
        return _logger

    _logger = logging.getLogger("newsboard")
    _logger.setLevel(logging.DEBUG)

    if _logger.handlers:
        return _logger

    # Console keeps stdout free for CLI output
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter("  %(message)s"))
    _logger.addHandler(console)

    # One file per day; fetch workers are told apart by thread name
    LOGS_DIR.mkdir(parents=True, exist_ok=True)
    log_file = LOGS_DIR / f"newsboard_{datetime.now():%Y%m%d}.log"
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)-8s [%(threadName)s] %(message)s", datefmt="%H:%M:%S"
        )
    )
    _logger.addHandler(file_handler)

    return _logger


def source_logger(source_id: str) -> SourceLogger:
    """Logger for messages about one upstream source."""
    return SourceLogger(get_logger(), {"source": source_id})


def set_verbose(verbose: bool = True):
    """Show DEBUG messages (per-source counts, cache hits) on the console."""
    for handler in get_logger().handlers:
        if not isinstance(handler, logging.FileHandler):
            handler.setLevel(logging.DEBUG if verbose else logging.INFO)


def log(msg: str):
    get_logger().info(msg)
