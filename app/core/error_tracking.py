"""
Error tracking and reporting.

Unhandled exceptions are always logged. When ``SENTRY_DSN`` is configured
they are forwarded to Sentry as well.
"""

from typing import Any

import sentry_sdk
import structlog
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from app.config import settings

logger = structlog.get_logger(__name__)


class ErrorTracker:
    """Thin facade over Sentry so call sites don't care whether it is configured."""

    def __init__(self) -> None:
        self.enabled = False

    def init(self, dsn: str | None, environment: str) -> None:
        if not dsn:
            logger.info("error_tracking_disabled")
            return

        sentry_sdk.init(
            dsn=dsn,
            environment=environment,
            release=settings.app_version,
            traces_sample_rate=settings.sentry_traces_sample_rate,
            integrations=[FastApiIntegration(), SqlalchemyIntegration()],
        )
        self.enabled = True
        logger.info("sentry_initialized", environment=environment)

    def capture_exception(
        self,
        exception: Exception,
        context: dict[str, Any] | None = None,
    ) -> str | None:
        """
        Report an exception.

        Returns:
            Sentry event id, or None when tracking is disabled
        """
        logger.error(
            "exception_captured",
            exception_type=type(exception).__name__,
            error=str(exception),
            context=context,
        )
        if not self.enabled:
            return None

        with sentry_sdk.new_scope() as scope:
            for key, value in (context or {}).items():
                scope.set_tag(key, value)
            return sentry_sdk.capture_exception(exception)


error_tracker = ErrorTracker()
