"""
structlog configuration for the explore service.

Events are rendered as one JSON object per line on stdout. The threshold comes
from LOG_LEVEL and unknown level names fall back to INFO.
"""
import logging
import os
import sys
from typing import Optional

import structlog


def parse_log_level(name: Optional[str]) -> int:
    """Map a level name such as "debug" or "WARN" to its logging constant."""
    level = logging.getLevelName((name or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


LOG_LEVEL = parse_log_level(os.getenv("LOG_LEVEL"))
configure_logging(LOG_LEVEL)

logger = structlog.get_logger(service=os.getenv("SERVICE_NAME", "explore-service"))
