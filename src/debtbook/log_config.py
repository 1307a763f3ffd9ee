"""Structured logging setup.

All modules log through ``structlog.get_logger(__name__)``; this module wires
structlog into the standard library so that output goes to stderr and never
mixes with command output on stdout.
"""

import logging
import sys

import structlog

from debtbook import config

_configured = False


def configure_logging(level: str | int | None = None) -> None:
    """Configure structlog and the stdlib root handler.

    Only the first call installs handlers; later calls just change the level.

    Args:
        level: Log level name or number. Defaults to ``config.LOG_LEVEL``.
    """
    if level is None:
        level = config.LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    global _configured
    if _configured:
        logging.getLogger().setLevel(level)
        return
    _configured = True

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)

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
            structlog.processors.KeyValueRenderer(key_order=["timestamp", "level", "event"]),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
