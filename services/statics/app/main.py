"""Statics - FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from services.statics.app.api import health_router, images_router
from services.statics.app.auth.jwt import TokenVerifier, load_public_key
from services.statics.app.config import Settings, get_settings
from services.statics.app.errors import InternalError, NotFoundError, StaticsError
from services.statics.app.middleware.correlation import CorrelationMiddleware
from services.statics.app.middleware.cors import ACAO_HEADER, AllowOriginMiddleware
from services.statics.app.middleware.logging import RequestLoggingMiddleware
from services.statics.app.storage.images import ImageStore
from services.statics.app.telemetry import capture_internal_error
from shared.utils.logging import get_logger
from shared.utils.s3 import S3Client, validate_region

logger = get_logger(__name__)

VERSION = "0.1.0"


def build_s3_client(settings: Settings) -> S3Client:
    """Create the process-wide S3 client from configuration.

    Raises:
        ValueError: If the configured region is unknown
    """
    validate_region(settings.s3.region, settings.s3.endpoint_url)
    return S3Client(
        bucket=settings.s3.bucket,
        region=settings.s3.region,
        endpoint_url=settings.s3.endpoint_url,
        access_key=settings.s3.key,
        secret_key=settings.s3.secret,
        public_url=settings.s3.public_url,
        max_pool_connections=settings.client.http_client_buffer_size,
        retries=settings.client.http_client_retries,
    )


def error_response(exc: StaticsError, allow_origin: str | None = None) -> JSONResponse:
    """Render an error as the JSON envelope returned to clients."""
    headers = {ACAO_HEADER: allow_origin} if allow_origin is not None else None
    return JSONResponse(status_code=exc.code, content=exc.to_dict(), headers=headers)


def create_app(
    settings: Settings | None = None,
    image_store: ImageStore | None = None,
) -> FastAPI:
    """Build the Statics application.

    Args:
        settings: Configuration (defaults to environment settings)
        image_store: Storage to write images to; when omitted an S3-backed
            store is created and its connection pool follows the app lifespan

    Raises:
        OSError: If the JWT public key file cannot be read
        ValueError: If the S3 configuration is invalid
    """
    settings = settings or get_settings()
    public_key = load_public_key(settings.jwt.public_key_path)

    s3_client: S3Client | None = None
    if image_store is None:
        s3_client = build_s3_client(settings)
        image_store = ImageStore(s3_client)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("starting_service", service=settings.service_name, version=VERSION)
        if s3_client is not None:
            await s3_client.start()

        yield

        logger.info("shutting_down_service")
        if s3_client is not None:
            await s3_client.close()
        logger.info("service_shutdown_complete")

    app = FastAPI(
        title="Statics",
        description="Image upload service storing originals in S3",
        version=VERSION,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )

    app.state.settings = settings
    app.state.token_verifier = TokenVerifier(public_key, settings.jwt.leeway)
    app.state.image_store = image_store

    # Last added runs outermost, so the ACAO header also lands on logged errors
    app.add_middleware(RequestLoggingMiddleware, exclude_paths=["/healthcheck"])
    app.add_middleware(CorrelationMiddleware)
    app.add_middleware(AllowOriginMiddleware, allow_origin=settings.server.acao)

    @app.exception_handler(StaticsError)
    async def statics_error_handler(request: Request, exc: StaticsError):
        """Render errors raised by components."""
        if exc.code >= 500:
            logger.error(
                "request_error",
                code=exc.code,
                description=exc.description,
                exc_info=exc,
            )
            capture_internal_error(exc)
        else:
            logger.warning("request_error", code=exc.code, description=exc.description)
        return error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Unmatched paths and methods are both reported as not found."""
        if exc.status_code in (404, 405):
            return error_response(NotFoundError())
        error = StaticsError(str(exc.detail))
        error.code = exc.status_code
        return error_response(error)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler for unhandled errors."""
        logger.exception("unhandled_exception", error=str(exc))
        capture_internal_error(exc)
        # Runs outside the middleware stack, so set ACAO here
        return error_response(InternalError(), allow_origin=settings.server.acao)

    app.include_router(health_router)
    app.include_router(images_router)

    return app
