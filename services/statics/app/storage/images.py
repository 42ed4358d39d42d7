"""Image storage on top of the shared S3 client."""

import secrets
import string
from typing import Protocol

from botocore.exceptions import BotoCoreError, ClientError

from services.statics.app.errors import ImageError, InternalError
from services.statics.app.storage.formats import ImageFormat
from shared.utils.logging import get_logger

logger = get_logger(__name__)

KEY_PREFIX = "img-"
KEY_ID_LENGTH = 12  # 62**12 keys, roughly 71 bits
_KEY_ALPHABET = string.ascii_letters + string.digits

PUBLIC_READ_ACL = "public-read"


class ObjectStore(Protocol):
    """The part of ``shared.utils.s3.S3Client`` images are written through."""

    async def put_object_bytes(
        self,
        key: str,
        data: bytes,
        content_type: str = ...,
        acl: str | None = ...,
        metadata: dict[str, str] | None = ...,
    ) -> None: ...

    def object_url(self, key: str) -> str: ...


def generate_object_key(image_format: ImageFormat) -> str:
    """Build a fresh random key such as ``img-2IpSsAjuxB8C.png``."""
    random_id = "".join(secrets.choice(_KEY_ALPHABET) for _ in range(KEY_ID_LENGTH))
    return f"{KEY_PREFIX}{random_id}.{image_format.extension}"


class ImageStore:
    """Writes original images under random keys and returns their public URLs."""

    def __init__(self, s3_client: ObjectStore):
        self.s3_client = s3_client

    async def upload_image(self, image_format: ImageFormat, data: bytes) -> str:
        """Store one image.

        Args:
            image_format: Detected format, decides extension and content type
            data: Image bytes

        Returns:
            Public URL of the stored object

        Raises:
            ImageError: If the store rejected the object (4xx)
            InternalError: If the store failed or was unreachable
        """
        key = generate_object_key(image_format)

        try:
            await self.s3_client.put_object_bytes(
                key=key,
                data=data,
                content_type=image_format.mime_type,
                acl=PUBLIC_READ_ACL,
            )
        except ClientError as e:
            status = e.response.get("ResponseMetadata", {}).get("HTTPStatusCode", 500)
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            logger.warning(
                "image_store_rejected",
                key=key,
                status=status,
                error_code=error_code,
            )
            if 400 <= status < 500:
                raise ImageError(f"Image was rejected by storage: {error_code}") from e
            raise InternalError(f"Storage failed to save image: {error_code}") from e
        except BotoCoreError as e:
            logger.error("image_store_unavailable", key=key, error=str(e))
            raise InternalError("Storage is unavailable") from e

        url = self.s3_client.object_url(key)
        logger.info(
            "image_uploaded",
            key=key,
            format=image_format.value,
            size_bytes=len(data),
        )
        return url
