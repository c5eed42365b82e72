"""Request logging middleware.

Logs every HTTP request with method, path, status code, latency, and
a short request ID for correlation. The request_id is also injected into
request.state so router handlers can include it in ApiResponse, and echoed
back as the X-Request-ID header. POSTs with a body also log its declared size.

Log format:
    INFO [POST] /api/v1/upload → 200 (1840ms) req_a1b2c3d4e5f6 body=52428800B
    INFO [POST] /api/v1/playback/play → 200 (2ms) req_a1b2c3d4e5f6
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("dr.request")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = f"req_{uuid.uuid4().hex[:12]}"
        request.state.request_id = request_id

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        response.headers[REQUEST_ID_HEADER] = request_id

        body_size = request.headers.get("content-length")
        if request.method == "POST" and body_size and body_size != "0":
            logger.info(
                "[%s] %s → %d (%.0fms) %s body=%sB",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
                request_id,
                body_size,
            )
        else:
            logger.info(
                "[%s] %s → %d (%.0fms) %s",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
                request_id,
            )
        return response
