"""
Loguru setup for applications that submit reports.

The client logs through ``loguru.logger`` only. Applications call
``configure_logging`` once to get readable console output while developing
or one JSON object per line elsewhere, each line tagged with the protocol
call's correlation ID.
"""

import sys
from typing import TYPE_CHECKING

from loguru import logger

from cybertipline.core.correlation import get_correlation_id

if TYPE_CHECKING:
    from loguru import Record


LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[correlation_id]}</cyan> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def correlation_filter(record: "Record") -> bool:
    """Tag a record with the current correlation ID, or "-" outside a call."""
    record["extra"]["correlation_id"] = get_correlation_id() or "-"
    return True


def configure_logging(
    environment: str = "development", log_file: str | None = None
) -> None:
    """
    Configure Loguru for applications using the client.

    The library itself only emits through ``loguru.logger``; calling this is
    optional.

    Args:
        environment: "development" for console, anything else for JSON.
        log_file: Optional path of a rotating log file.
    """
    # Remove default handler
    logger.remove()

    development = environment == "development"

    if development:
        logger.add(
            sys.stderr,
            format=LOG_FORMAT,
            level="DEBUG",
            filter=correlation_filter,
            colorize=True,
        )
    else:
        # JSON format for production (machine-parseable)
        logger.add(
            sys.stderr,
            format="{message}",
            level="INFO",
            filter=correlation_filter,
            serialize=True,
        )

    if log_file:
        logger.add(
            log_file,
            format=LOG_FORMAT if development else "{message}",
            level="INFO",
            filter=correlation_filter,
            rotation="10 MB",
            retention="7 days",
            serialize=not development,
        )
