"""Request correlation middleware.

Every request carries an ``X-Request-ID``: the client's value when it sends
one, a fresh UUID otherwise. The id is stored on ``request.state``, bound
into the structlog context while the request runs and echoed on the
response. Uncaught errors are rendered by the exception handlers in
``bookcatalog.main``.
"""

import time
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Correlates the logs and the response of one request under one id."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id

        started = time.perf_counter()
        # Stays 500 when the handler raises
        status_code = 500
        with structlog.contextvars.bound_contextvars(request_id=request_id):
            try:
                response = await call_next(request)
                status_code = response.status_code
            finally:
                logger.info(
                    "Request completed",
                    method=request.method,
                    path=request.url.path,
                    status_code=status_code,
                    duration_ms=round((time.perf_counter() - started) * 1000, 2),
                )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def setup_middleware(app: FastAPI) -> None:
    """Install the catalog's custom middleware on ``app``."""
    app.add_middleware(RequestIdMiddleware)
