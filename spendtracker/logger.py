"""
Structured Logging

DESIGN DECISION: Every layer above the pure calculator logs through
structlog with key/value context. The calculator itself never logs so it
stays side-effect free.

Logs are rendered as JSON lines on top of the stdlib logging machinery,
so the level is controlled by the usual stdlib configuration.
"""

import logging
import sys
from typing import Optional

import structlog


PACKAGE_LOGGER = "spendtracker"


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """
    Route stdlib logging to stderr at the given level.

    Called once by create_app_components(). The level is set on the
    package logger so host applications keep their own root level.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stderr)
    logging.getLogger(PACKAGE_LOGGER).setLevel(numeric_level)


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger, usually with name=__name__."""
    return structlog.get_logger(name)
