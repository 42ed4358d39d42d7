"""Error kinds raised by Statics components.

Each kind carries the HTTP status it is rendered with. Components raise them
where the failure is detected and the HTTP front renders them unchanged as
``{"code": <status>, "description": "<text>"}``.
"""


class StaticsError(Exception):
    """Base class for errors that map to an HTTP status."""

    code: int = 500
    description: str = "Internal server error"

    def __init__(self, description: str | None = None):
        self.description = description or type(self).description
        super().__init__(self.description)

    def to_dict(self) -> dict:
        return {"code": self.code, "description": self.description}


class NotFoundError(StaticsError):
    """Route did not match."""

    code = 404
    description = "Not found"


class UnauthorizedError(StaticsError):
    """Missing, malformed or invalid JWT."""

    code = 401
    description = "Unauthorized"


class ParseError(StaticsError):
    """Request body could not be decoded."""

    code = 400
    description = "Parse error"


class ImageError(StaticsError):
    """Bytes are not a supported image, or the store rejected them."""

    code = 400
    description = "Invalid image"


class PayloadTooLargeError(StaticsError):
    code = 413
    description = "Payload too large"


class NetworkError(StaticsError):
    """Reading the request body failed mid-stream."""

    code = 502
    description = "Network error"


class InternalError(StaticsError):
    code = 500
    description = "Internal server error"
