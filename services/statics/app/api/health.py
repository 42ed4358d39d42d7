"""Health check route."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["Health"])


@router.get("/healthcheck", response_class=PlainTextResponse)
async def healthcheck() -> str:
    """Liveness probe - returns ``ok`` while the server is accepting requests."""
    return "ok"
