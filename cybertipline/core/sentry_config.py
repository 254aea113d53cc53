"""
Sentry SDK configuration for applications submitting CyberTipline reports.

Implements:
- Environment-based initialization
- Scrubbing of credentials and report contents before events leave the host
- Loguru and httpx integrations
"""

from typing import Any

import sentry_sdk
from sentry_sdk.integrations.httpx import HttpxIntegration
from sentry_sdk.integrations.loguru import LoguruIntegration
from sentry_sdk.types import Event, Hint

from cybertipline.core.correlation import get_correlation_id
from cybertipline.models.config import Settings, get_settings

# Request fields that can carry report PII or evidence bytes
_SENSITIVE_REQUEST_KEYS = ("data", "cookies", "query_string")


def _before_send(event: Event, hint: Hint) -> Event | None:
    """
    Scrub credentials and report contents before sending to Sentry.

    Reports describe victims and suspects, so request bodies never leave the
    process. Basic-auth credentials are filtered from headers.

    Args:
        event: Sentry event.
        hint: Additional context about the event.

    Returns:
        Modified event with sensitive data removed.
    """
    request = event.get("request")
    if request and isinstance(request, dict):
        for key in _SENSITIVE_REQUEST_KEYS:
            request.pop(key, None)
        headers = request.get("headers")
        if isinstance(headers, dict):
            for name in list(headers):
                if name.lower() == "authorization":
                    headers[name] = "[Filtered]"

    user = event.get("user")
    if user:
        user.pop("email", None)
        user.pop("username", None)

    correlation_id = get_correlation_id()
    if correlation_id:
        event.setdefault("tags", {})["correlation_id"] = correlation_id  # type: ignore[index]

    return event


def _init_options(dsn: str, settings: Settings) -> dict[str, Any]:
    """Build the keyword arguments passed to ``sentry_sdk.init``."""
    return {
        "dsn": dsn,
        "environment": settings.ENVIRONMENT,
        "release": settings.SENTRY_RELEASE,
        # Never send PII automatically
        "send_default_pii": False,
        "integrations": [
            HttpxIntegration(),
            LoguruIntegration(),
        ],
        "sample_rate": 1.0,
        "traces_sample_rate": 0.0,
        "before_send": _before_send,
        "attach_stacktrace": True,
        "max_breadcrumbs": 50,
        "ignore_errors": [
            KeyboardInterrupt,
            SystemExit,
        ],
    }


def init_sentry(dsn: str | None = None, settings: Settings | None = None) -> bool:
    """
    Initialize Sentry SDK.

    Sentry is disabled if no DSN is passed and ``SENTRY_DSN`` is empty in the
    settings (environment or ``.env`` file).

    Args:
        dsn: Overrides ``SENTRY_DSN``.
        settings: Settings to read from; defaults to ``get_settings()``.

    Returns:
        True if Sentry was initialized.
    """
    settings = settings or get_settings()
    dsn = dsn or settings.SENTRY_DSN

    if not dsn:
        return False

    sentry_sdk.init(**_init_options(dsn, settings))
    return True
