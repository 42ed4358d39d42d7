"""Image upload route."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from services.statics.app.api.deps import get_app_settings, get_upload_pipeline, require_token
from services.statics.app.auth.jwt import JwtPayload
from services.statics.app.config import Settings
from services.statics.app.upload.multipart import read_body
from services.statics.app.upload.pipeline import UploadPipeline
from shared.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Images"])


@router.post("/images")
async def upload_images(
    request: Request,
    token: Annotated[JwtPayload, Depends(require_token)],
    pipeline: Annotated[UploadPipeline, Depends(get_upload_pipeline)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> JSONResponse:
    """Upload one or more images sent as multipart/form-data.

    Each part must hold raw PNG, JPEG, GIF, WebP, BMP, TIFF or ICO bytes;
    field names and declared content types are ignored.

    Returns ``{"url": ...}`` for a single part and a list of such objects,
    in part order, for several.
    """
    logger.info("image_upload_received")

    body = await read_body(request, settings.server.max_body_size)
    logger.debug("request_body_read", size_bytes=len(body))

    result = await pipeline.run(request.headers.get("content-type"), body)
    return JSONResponse(content=result)
