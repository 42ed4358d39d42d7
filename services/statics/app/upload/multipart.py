"""Multipart request body handling."""

from python_multipart.exceptions import MultipartParseError
from python_multipart.multipart import MultipartParser, parse_options_header
from starlette.requests import ClientDisconnect, Request

from services.statics.app.errors import NetworkError, ParseError, PayloadTooLargeError

MULTIPART_ERROR = "Couldn't convert request body to multipart"


async def read_body(request: Request, max_size: int | None = None) -> bytes:
    """Buffer the whole request body in memory.

    Args:
        request: Incoming request
        max_size: Maximum accepted body size in bytes, or None for no limit

    Raises:
        PayloadTooLargeError: If the declared or streamed size exceeds max_size
        NetworkError: If the client went away mid-body
    """
    if max_size is not None:
        declared = request.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > max_size:
            raise PayloadTooLargeError(f"Request body exceeds {max_size} bytes")

    body = bytearray()
    try:
        async for chunk in request.stream():
            body.extend(chunk)
            if max_size is not None and len(body) > max_size:
                raise PayloadTooLargeError(f"Request body exceeds {max_size} bytes")
    except ClientDisconnect as e:
        raise NetworkError("Failed to read request body") from e

    return bytes(body)


def parse_multipart(content_type: str | None, body: bytes) -> list[bytes]:
    """Split a buffered multipart body into the raw bytes of each part.

    Field names, filenames and per-part headers are ignored.

    Args:
        content_type: Request ``Content-Type`` header, must carry the boundary
        body: Complete request body

    Returns:
        Part payloads in arrival order

    Raises:
        ParseError: If the header or the envelope is not valid multipart
    """
    if not content_type:
        raise ParseError(MULTIPART_ERROR)

    mime_type, params = parse_options_header(content_type)
    boundary = params.get(b"boundary")
    if not mime_type.lower().startswith(b"multipart/") or not boundary:
        raise ParseError(MULTIPART_ERROR)

    parts: list[bytes] = []
    current: list[bytes] = []
    finished = False

    def on_part_begin() -> None:
        current.clear()

    def on_part_data(data: bytes, start: int, end: int) -> None:
        current.append(data[start:end])

    def on_part_end() -> None:
        parts.append(b"".join(current))

    def on_end() -> None:
        nonlocal finished
        finished = True

    parser = MultipartParser(
        boundary,
        callbacks={
            "on_part_begin": on_part_begin,
            "on_part_data": on_part_data,
            "on_part_end": on_part_end,
            "on_end": on_end,
        },
    )

    try:
        parser.write(body)
        parser.finalize()
    except MultipartParseError as e:
        raise ParseError(MULTIPART_ERROR) from e

    # A body cut off before the closing boundary parses without error
    if not finished:
        raise ParseError(MULTIPART_ERROR)

    return parts
