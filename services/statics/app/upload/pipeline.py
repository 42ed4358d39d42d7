"""Multipart image upload pipeline."""

import asyncio
from typing import Any

from services.statics.app.errors import InternalError, ParseError, StaticsError
from services.statics.app.storage.formats import detect_format
from services.statics.app.storage.images import ImageStore
from services.statics.app.upload.multipart import parse_multipart
from services.statics.app.upload.schemas import ImagePart, UploadedImage
from shared.utils.logging import get_logger

logger = get_logger(__name__)


class UploadPipeline:
    """Turns a buffered multipart body into stored images.

    Every part is checked before anything is written, so a request with a
    single unrecognized part leaves no objects behind. Uploads then run
    concurrently; a store failure fails the whole request and objects
    already written for it are left in place.
    """

    def __init__(self, image_store: ImageStore):
        self.image_store = image_store

    def collect_images(self, content_type: str | None, body: bytes) -> list[ImagePart]:
        """Parse the body and detect the format of every part.

        Raises:
            ParseError: If the body is not multipart or holds no parts
            ImageError: If any part is not a supported image
        """
        parts = parse_multipart(content_type, body)
        if not parts:
            raise ParseError("No images were sent")

        images = [ImagePart(data=data, image_format=detect_format(data)) for data in parts]
        logger.info(
            "multipart_parsed",
            part_count=len(images),
            formats=[image.image_format.value for image in images],
        )
        return images

    async def upload(self, images: list[ImagePart]) -> list[UploadedImage]:
        """Store all images, keeping their order in the result."""
        try:
            urls = await asyncio.gather(
                *(self.image_store.upload_image(image.image_format, image.data) for image in images)
            )
        except StaticsError:
            raise
        except Exception as e:
            logger.exception("image_upload_failed", error=str(e))
            raise InternalError("Failed to upload images") from e

        return [UploadedImage(url=url) for url in urls]

    async def run(self, content_type: str | None, body: bytes) -> dict[str, Any] | list[dict[str, Any]]:
        """Process one ``POST /images`` body.

        Returns:
            ``{"url": ...}`` for a single part, otherwise a list of them in
            part order
        """
        uploaded = await self.upload(self.collect_images(content_type, body))

        # Single uploads answer with a bare object; existing clients rely on it
        if len(uploaded) == 1:
            return uploaded[0].model_dump()
        return [image.model_dump() for image in uploaded]
