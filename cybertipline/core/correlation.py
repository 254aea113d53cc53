"""
Correlation IDs for protocol calls.

Each call to the CyberTipline service runs under a short correlation ID so
that log lines, exceptions and Sentry events for one call can be matched up.
"""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

# Context variable for call-scoped correlation ID
correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    """
    Generate a short, unique correlation ID.

    Returns:
        8-character hexadecimal string.
    """
    return uuid.uuid4().hex[:8]


def get_correlation_id() -> str:
    """Return the current correlation ID, or empty string if not set."""
    return correlation_id_var.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID for the current context."""
    correlation_id_var.set(correlation_id)


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """
    Run a block under a correlation ID.

    An explicit ``correlation_id`` always applies. Without one, the caller's
    correlation ID is reused when set, so a whole submission (submit,
    uploads, finish) can share a single ID; otherwise a new one is
    generated. The previous value is restored when the block exits.

    Yields:
        The correlation ID in effect inside the block.
    """
    current = correlation_id_var.get()
    if not correlation_id and current:
        yield current
        return

    token = correlation_id_var.set(correlation_id or generate_correlation_id())
    try:
        yield correlation_id_var.get()
    finally:
        correlation_id_var.reset(token)
