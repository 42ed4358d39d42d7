"""Upload pipeline data types."""

from dataclasses import dataclass

from pydantic import BaseModel

from services.statics.app.storage.formats import ImageFormat


@dataclass(frozen=True)
class ImagePart:
    """One multipart part whose format has been recognized."""

    data: bytes
    image_format: ImageFormat


class UploadedImage(BaseModel):
    """Response item for a stored image."""

    url: str
