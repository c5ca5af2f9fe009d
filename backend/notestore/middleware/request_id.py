"""
NoteStore — Request ID Middleware
===================================

What:  Assigns a short correlation ID to each request and echoes it back.
Why:   Lets an error response be matched to the server log lines it produced.
How:   Reuses the client's X-Request-ID header if present, otherwise generates
       one; stores it in a ContextVar and returns it in the response header.
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

# Coroutine-local: concurrent requests share a thread but not this value
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns a unique ID to each request for tracing.

    Behavior:
        1. Use the client's X-Request-ID header when present
        2. Otherwise generate the first 8 characters of a UUID4
        3. Store it in request_id_var and request.state.request_id
        4. Add it to the response headers

    Unexpected exceptions are turned into the generic 500 envelope here, so
    that response carries the header too. Starlette's catch-all handler runs
    outside this middleware and would not.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
            response = JSONResponse(
                status_code=500,
                content={
                    "error": "server_error",
                    "message": "An unexpected error occurred.",
                    "request_id": rid,
                },
            )

        response.headers["X-Request-ID"] = rid
        return response
