"""Image format detection from leading magic bytes."""

from enum import Enum

from services.statics.app.errors import ImageError


class ImageFormat(str, Enum):
    """Raster formats accepted for upload."""

    PNG = "png"
    JPEG = "jpeg"
    GIF = "gif"
    WEBP = "webp"
    BMP = "bmp"
    TIFF = "tiff"
    ICO = "ico"

    @property
    def extension(self) -> str:
        """Canonical lower-case file extension."""
        return _EXTENSIONS.get(self, self.value)

    @property
    def mime_type(self) -> str:
        return _MIME_TYPES[self]


_EXTENSIONS = {ImageFormat.JPEG: "jpg"}

_MIME_TYPES = {
    ImageFormat.PNG: "image/png",
    ImageFormat.JPEG: "image/jpeg",
    ImageFormat.GIF: "image/gif",
    ImageFormat.WEBP: "image/webp",
    ImageFormat.BMP: "image/bmp",
    ImageFormat.TIFF: "image/tiff",
    ImageFormat.ICO: "image/x-icon",
}

# Magic numbers as (offset, bytes) pieces that must all match
FILE_SIGNATURES: list[tuple[tuple[tuple[int, bytes], ...], ImageFormat]] = [
    (((0, b"\x89PNG\r\n\x1a\n"),), ImageFormat.PNG),
    (((0, b"\xff\xd8\xff"),), ImageFormat.JPEG),
    (((0, b"GIF87a"),), ImageFormat.GIF),
    (((0, b"GIF89a"),), ImageFormat.GIF),
    (((0, b"RIFF"), (8, b"WEBP")), ImageFormat.WEBP),  # bytes 4-7 hold the chunk size
    (((0, b"BM"),), ImageFormat.BMP),
    (((0, b"II*\x00"),), ImageFormat.TIFF),
    (((0, b"MM\x00*"),), ImageFormat.TIFF),
    (((0, b"\x00\x00\x01\x00"),), ImageFormat.ICO),
]


def detect_format(data: bytes) -> ImageFormat:
    """Identify the image format of raw bytes from their leading signature.

    Only the prefix is inspected; the rest of the payload is stored as sent.

    Args:
        data: Raw bytes of one uploaded part

    Returns:
        Detected image format

    Raises:
        ImageError: If no accepted format's signature matches
    """
    for pieces, image_format in FILE_SIGNATURES:
        if all(data[offset:offset + len(magic)] == magic for offset, magic in pieces):
            return image_format
    raise ImageError("Invalid image format")
