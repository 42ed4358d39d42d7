"""Error reporting to Sentry."""

import sentry_sdk

from services.statics.app.config import SentrySettings
from services.statics.app.errors import InternalError, StaticsError
from shared.utils.logging import get_logger

logger = get_logger(__name__)


def init_sentry(settings: SentrySettings, release: str | None = None) -> bool:
    """Initialize Sentry when a DSN is configured.

    Returns:
        True if reporting is enabled
    """
    if not settings.dsn:
        logger.info("sentry_disabled")
        return False

    sentry_sdk.init(
        dsn=settings.dsn,
        environment=settings.environment,
        release=release,
    )
    logger.info("sentry_initialized", environment=settings.environment)
    return True


def capture_internal_error(exc: BaseException) -> None:
    """Report an error to Sentry if it renders as a 500.

    Client errors and other 5xx kinds (e.g. a dropped upload stream) are
    not reported.
    """
    if isinstance(exc, StaticsError) and exc.code != InternalError.code:
        return
    sentry_sdk.capture_exception(exc)
