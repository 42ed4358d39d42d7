"""Shared utilities for Statics services."""

from shared.utils.logging import (
    bind_request_context,
    configure_logging,
    get_logger,
    set_correlation_id,
)
from shared.utils.s3 import S3Client, validate_region

__all__ = [
    "bind_request_context",
    "configure_logging",
    "get_logger",
    "set_correlation_id",
    "S3Client",
    "validate_region",
]
