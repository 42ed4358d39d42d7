"""Middleware components for Statics."""

from services.statics.app.middleware.correlation import CorrelationMiddleware
from services.statics.app.middleware.cors import AllowOriginMiddleware
from services.statics.app.middleware.logging import RequestLoggingMiddleware

__all__ = [
    "AllowOriginMiddleware",
    "CorrelationMiddleware",
    "RequestLoggingMiddleware",
]
