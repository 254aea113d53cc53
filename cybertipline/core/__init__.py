"""Core infrastructure modules for logging, correlation and Sentry monitoring."""

from cybertipline.core.correlation import (
    correlation_id_var,
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from cybertipline.core.logging_config import configure_logging
from cybertipline.core.sentry_config import init_sentry

__all__ = [
    "init_sentry",
    "configure_logging",
    "correlation_scope",
    "generate_correlation_id",
    "get_correlation_id",
    "set_correlation_id",
    "correlation_id_var",
]
