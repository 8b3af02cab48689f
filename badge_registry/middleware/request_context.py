"""Request context middleware — assigns a unique ID to every request.

Concurrent requests interleave their log lines; the request ID ties
each line back to the call that produced it, e.g. a rejected transfer
to the HTTP request that attempted it.

The ID lives in a ContextVar rather than a thread-local because async
requests share a thread.  The log handler installed by setup_logging()
copies it onto every record, so any module's log line carries it.
"""

from __future__ import annotations

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from badge_registry.core.logging import request_id_var

logger = logging.getLogger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assign a request ID, time the request, and log one summary line.

    1. Reads X-Request-ID (if the client sent one) or generates a UUID
    2. Stores it in request_id_var
    3. Logs method, path, status and duration on completion
    4. Echoes the ID back in the X-Request-ID response header
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        req_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request_id_var.set(req_id)

        start = time.monotonic()
        response = await call_next(request)
        duration_ms = round((time.monotonic() - start) * 1000, 1)

        logger.info(
            "%s %s → %d (%.1fms)",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            extra={
                "request_id": req_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )

        response.headers["X-Request-ID"] = req_id
        return response
