"""Multipart image upload handling module."""

from services.statics.app.upload.multipart import parse_multipart, read_body
from services.statics.app.upload.pipeline import UploadPipeline
from services.statics.app.upload.schemas import ImagePart, UploadedImage

__all__ = [
    "parse_multipart",
    "read_body",
    "UploadPipeline",
    "ImagePart",
    "UploadedImage",
]
