"""Image format detection and object storage."""

from services.statics.app.storage.formats import ImageFormat, detect_format
from services.statics.app.storage.images import ImageStore, generate_object_key

__all__ = [
    "ImageFormat",
    "detect_format",
    "ImageStore",
    "generate_object_key",
]
