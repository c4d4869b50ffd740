"""
Logging setup for the DevLog API.

setup_logging() is called once from main.py before the app is built. Modules
log through named loggers obtained with get_logger().
"""

import logging
from typing import Iterable, Optional

# Loggers whose per-request lines repeat what RequestLogger already records
ACCESS_LOGGERS = ("uvicorn.access", "RequestLogger")


class HealthCheckFilter(logging.Filter):
    """Drop access lines for the health probe."""

    def filter(self, record: logging.LogRecord) -> bool:
        return "/health" not in record.getMessage()


def setup_logging(
    debug_mode: bool = True,
    log_level: Optional[int] = None,
    quiet_loggers: Iterable[str] = ACCESS_LOGGERS,
) -> None:
    """
    Configure the root logger and attach the health check filter.

    Args:
        debug_mode: Log at DEBUG instead of INFO (ignored when log_level is given)
        log_level: Explicit level for the root logger
        quiet_loggers: Loggers that should not report health probes
    """
    if log_level is None:
        log_level = logging.DEBUG if debug_mode else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    for name in quiet_loggers:
        logging.getLogger(name).addFilter(HealthCheckFilter())

    logging.getLogger("Logging").info(f"Logging configured with level: {logging.getLevelName(log_level)}")


def get_logger(name: str) -> logging.Logger:
    """Return the logger registered under a descriptive name (e.g. "EntryStore")."""
    return logging.getLogger(name)
