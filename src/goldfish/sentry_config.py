"""Sentry error monitoring configuration."""

import os
from typing import Optional

import sentry_sdk
from dotenv import load_dotenv


def init_sentry(release: Optional[str] = None) -> bool:
    """Initialize Sentry error monitoring.

    Reads ``SENTRY_DSN`` and ``ENVIRONMENT`` from the environment (or a
    ``.env`` file).

    Returns:
        True if Sentry was initialized, False if DSN not configured.
    """
    load_dotenv()

    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=os.getenv("ENVIRONMENT", "development"),
        release=release,
        traces_sample_rate=0.1,
        attach_stacktrace=True,
    )
    return True


def capture_exception(exception: Optional[BaseException] = None):
    """Send an exception to Sentry; the current one if None."""
    sentry_sdk.capture_exception(exception)


def capture_message(message: str, level: str = "info"):
    """Send a message to Sentry at ``level`` (debug, info, warning, error, fatal)."""
    sentry_sdk.capture_message(message, level=level)
