"""Request logging middleware.

One line per HTTP request: method, path, status code, latency, the caller
once the credential gate has resolved it, and a short request ID. The
request_id is put into request.state before the handler runs so error
envelopes can carry it, and is echoed back as X-Request-ID.

Log format:
    INFO [PUT] /cashcards/99 → 204 (12ms) user=sarah1 req_a1b2c3d4e5f6

Requests rejected before authentication (or public ones like /health) log
``user=-``. Server errors are logged at WARNING.
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("cc.request")

ANONYMOUS = "-"


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = f"req_{uuid.uuid4().hex[:12]}"
        request.state.request_id = request_id

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        response.headers["X-Request-ID"] = request_id
        username = getattr(request.state, "username", ANONYMOUS)
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "[%s] %s → %d (%.0fms) user=%s %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            username,
            request_id,
        )
        return response
