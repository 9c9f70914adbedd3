from __future__ import annotations

import logging
import time
import uuid
from typing import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "x-request-id"

NextHandler = Callable[[Request], Awaitable[Response]]


class RequestIDLoggingMiddleware(BaseHTTPMiddleware):
    """Tag every request with an id and log one line when it completes.

    An ``x-request-id`` sent by the client is kept; otherwise a random hex id
    is minted. The id lands on ``request.state`` for the error handlers and is
    echoed back in the response header.
    """

    async def dispatch(self, request: Request, call_next: NextHandler) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        started = time.perf_counter()

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            extra={"request_id": request_id, "status_code": response.status_code},
        )
        return response
