"""Access-Control-Allow-Origin middleware."""

from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

ACAO_HEADER = "Access-Control-Allow-Origin"


class AllowOriginMiddleware(BaseHTTPMiddleware):
    """Stamp the configured ACAO value on every response.

    Unlike Starlette's CORSMiddleware the header is sent whether or not the
    request carried an ``Origin`` header.
    """

    def __init__(self, app, allow_origin: str):
        super().__init__(app)
        self.allow_origin = allow_origin

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        response = await call_next(request)
        response.headers[ACAO_HEADER] = self.allow_origin
        return response
