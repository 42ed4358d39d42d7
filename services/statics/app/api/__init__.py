"""API routes for Statics."""

from services.statics.app.api.health import router as health_router
from services.statics.app.api.images import router as images_router

__all__ = [
    "health_router",
    "images_router",
]
