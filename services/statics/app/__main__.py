"""Statics entry point: ``python -m services.statics.app``."""

import sys

from pydantic import ValidationError

from services.statics.app.config import get_settings
from services.statics.app.main import VERSION
from services.statics.app.server import run_server
from services.statics.app.telemetry import init_sentry
from shared.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def main() -> int:
    """Run the service.

    Returns:
        Process exit code: 0 after a normal shutdown, 1 if startup failed
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        configure_logging(service_name="statics")
        logger.error("invalid_configuration", error=str(e))
        return 1

    try:
        configure_logging(
            service_name=settings.service_name,
            log_level=settings.log_level,
            json_format=settings.log_json,
            graylog_host=settings.graylog.host,
            graylog_port=settings.graylog.port,
        )
    except ValueError as e:
        configure_logging(service_name=settings.service_name)
        logger.error("invalid_configuration", error=str(e))
        return 1

    init_sentry(settings.sentry, release=f"statics@{VERSION}")

    try:
        run_server(settings)
    except (OSError, ValueError) as e:
        logger.error("startup_failed", error=str(e))
        return 1
    except SystemExit:
        # uvicorn exits this way when the address cannot be bound
        logger.error("startup_failed", error="could not bind listener")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
