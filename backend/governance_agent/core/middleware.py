"""Request context middleware."""
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from governance_agent.core.logging import get_logger

logger = get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with an id and binds it to the log context.

    The id is taken from the incoming header when the caller sends one, is
    stored on ``request.state`` for the response envelope, and is echoed in
    the response header. While the request runs it is bound through
    ``structlog.contextvars``, so workflow and ledger events logged on its
    behalf carry ``request_id`` too.
    """

    def __init__(
        self,
        app: ASGIApp,
        header_name: str = "X-Request-ID",
    ) -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        request_id = request.headers.get(self.header_name) or str(uuid4())
        request.state.request_id = request_id

        with structlog.contextvars.bound_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        ):
            logger.info("request_started")
            try:
                response = await call_next(request)
            except Exception as e:
                logger.error("request_failed", error=str(e), error_type=type(e).__name__)
                raise

            response.headers[self.header_name] = request_id
            logger.info("request_completed", status_code=response.status_code)
            return response


async def get_request_id(request: Request) -> str:
    """Request id assigned by RequestContextMiddleware (a fresh one outside it)."""
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    return str(uuid4())
