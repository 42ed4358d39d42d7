"""Shared dependencies for API routes."""

from fastapi import Request

from services.statics.app.auth.jwt import JwtPayload, TokenVerifier
from services.statics.app.config import Settings
from services.statics.app.upload.pipeline import UploadPipeline
from shared.utils.logging import bind_request_context


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


def get_token_verifier(request: Request) -> TokenVerifier:
    return request.app.state.token_verifier


def get_upload_pipeline(request: Request) -> UploadPipeline:
    return UploadPipeline(request.app.state.image_store)


async def require_token(request: Request) -> JwtPayload:
    """Verify the bearer token before the body is read.

    Raises:
        UnauthorizedError: If the token is missing or invalid
    """
    payload = get_token_verifier(request).verify(request.headers)
    bind_request_context(user_id=payload.user_id)
    return payload
